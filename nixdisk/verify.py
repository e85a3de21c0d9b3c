"""
Disk verification for Nixdorf 8820 disk images.

Walks the directory, resolves every file header and checks that each
extent lies inside the image.
"""

from dataclasses import dataclass, field

from .exceptions import NixDiskError
from .image import DiskImage


@dataclass
class VerificationResult:
    """Results from disk verification."""
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    info: list[str] = field(default_factory=list)

    # Statistics
    files_checked: int = 0
    system_entries: int = 0
    bytes_in_files: int = 0

    def add_error(self, message: str):
        """Add an error (a file cannot be extracted)."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning (disk readable but damaged)."""
        self.warnings.append(message)

    def add_info(self, message: str):
        """Add informational message."""
        self.info.append(message)


def verify_disk(disk: DiskImage, verbose: bool = False) -> VerificationResult:
    """
    Verify a disk image for consistency.

    Args:
        disk: An open DiskImage
        verbose: Whether to include per-file information

    Returns:
        VerificationResult with findings
    """
    result = VerificationResult()
    image_size = disk.size

    for name in disk.volume_descriptor.unrecognized_codes:
        code = getattr(disk.volume_descriptor, name)
        result.add_warning(f"VOL1 {name.replace('_', ' ')} code {code.raw!r} not recognized")

    for message in disk.directory.skipped:
        result.add_warning(f"Directory: {message}")
    if not disk.directory.terminated:
        result.add_warning("Directory has no terminator")
    if disk.directory.base_sector is None:
        result.add_error("Directory location unknown for this record length")
        return result

    for entry in disk.list_directory():
        if entry.is_system:
            result.system_entries += 1
            continue

        result.files_checked += 1
        try:
            header = disk.read_header(entry)
        except NixDiskError as e:
            result.add_error(f"{entry.name}: {e}")
            continue

        if header.back_scanned:
            result.add_warning(
                f"{entry.name}: header {header.back_scanned} sector(s) before start sector")
        for message in header.diagnostics:
            result.add_warning(f"{entry.name}: {message}")

        end_offset = header.sector_offset(header.end)
        last_bytes = header.last_sector_bytes
        if header.length and end_offset + last_bytes > image_size:
            result.add_error(
                f"{entry.name}: extent ends at 0x{end_offset + last_bytes:x}, "
                f"beyond image size 0x{image_size:x}")
            continue

        result.bytes_in_files += header.length
        if verbose:
            result.add_info(f"{entry.name}: {header.length} bytes in "
                            f"{header.sector_count} sector(s) {header.start}-{header.end}")

    return result


def format_verification_result(result: VerificationResult) -> str:
    """Format verification result as a human-readable string."""
    lines = []
    if result.is_valid:
        lines.append("Disk verification: PASSED")
    else:
        lines.append("Disk verification: FAILED")
    lines.append(f"  Files checked: {result.files_checked}")
    lines.append(f"  System entries: {result.system_entries}")
    lines.append(f"  Bytes in files: {result.bytes_in_files:,}")

    if result.errors:
        lines.append("")
        lines.append(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            lines.append(f"  - {error}")

    if result.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            lines.append(f"  - {warning}")

    if result.info:
        lines.append("")
        for message in result.info:
            lines.append(f"  {message}")

    return '\n'.join(lines)
