"""
Command handlers for Nixdorf 8820 disk image utilities.
"""

import sys
from pathlib import Path

from .exceptions import NixDiskError
from .formatter import OutputFormatter
from .image import DiskImage
from .info import format_disk_info, format_file_header, get_disk_info, get_file_header_info
from .settings import Settings
from .textcopy import textcopy_stream
from .utils import has_wildcards, safe_filename
from .verify import format_verification_result, verify_disk


def _settings(args) -> Settings:
    return Settings.load(getattr(args, 'config', None))


def cmd_info(args, formatter: OutputFormatter) -> int:
    """Handle the 'info' command."""
    try:
        with DiskImage(args.image, _settings(args)) as disk:
            info = get_disk_info(disk)
            if formatter.json_mode:
                formatter.success("Disk information", **info)
            else:
                verbose = getattr(args, 'verbose', False)
                formatter.text(format_disk_info(info, verbose=verbose))
        return 0

    except NixDiskError as e:
        formatter.error(str(e))
        return 1
    except OSError as e:
        formatter.error(f"Filesystem error: {e}")
        return 1


def cmd_list(args, formatter: OutputFormatter) -> int:
    """Handle the 'list' command."""
    try:
        with DiskImage(args.image, _settings(args)) as disk:
            formatter.list_files(
                disk.list_directory(),
                args.image,
                disk.directory.base_sector,
                disk.sector_size,
            )
        return 0

    except NixDiskError as e:
        formatter.error(str(e))
        return 1


def cmd_show(args, formatter: OutputFormatter) -> int:
    """Handle the 'show' command: print a file's header labels."""
    try:
        with DiskImage(args.image, _settings(args)) as disk:
            info = get_file_header_info(disk.find_file(args.name))
            if formatter.json_mode:
                formatter.success(f"Header of {args.name}", header=info)
            else:
                formatter.text(format_file_header(info))
        return 0

    except NixDiskError as e:
        formatter.error(str(e))
        return 1


def cmd_copy(args, formatter: OutputFormatter) -> int:
    """Handle the 'copy' command: extract one file or every wildcard match."""
    dest = getattr(args, 'dest', None) or '.'
    source = f"{args.image}:{args.name}"

    try:
        with DiskImage(args.image, _settings(args)) as disk:
            if has_wildcards(args.name):
                results = disk.extract_matching(args.name, dest)
                if not results:
                    formatter.error(f"No files matching '{args.name}'")
                    return 1
                formatter.copy_results(results, source, dest)
                return 0 if all(r.ok for r in results) else 1

            size = disk.extract_file(args.name, dest)
            dest_path = Path(dest)
            if dest_path.is_dir():
                dest_path = dest_path / safe_filename(args.name)
            formatter.success(
                f"Copied {size:,} bytes",
                source=source,
                dest=str(dest_path),
                bytes=size,
            )
        return 0

    except NixDiskError as e:
        formatter.error(str(e))
        return 1
    except OSError as e:
        formatter.error(f"Filesystem error: {e}")
        return 1


def cmd_verify(args, formatter: OutputFormatter) -> int:
    """Handle the 'verify' command."""
    try:
        with DiskImage(args.image, _settings(args)) as disk:
            verbose = getattr(args, 'verbose', False)
            result = verify_disk(disk, verbose=verbose)

        if formatter.json_mode:
            formatter.success(
                "Verification complete",
                valid=result.is_valid,
                errors=result.errors,
                warnings=result.warnings,
                files_checked=result.files_checked,
                system_entries=result.system_entries,
                bytes_in_files=result.bytes_in_files,
            )
        else:
            formatter.text(format_verification_result(result))
        return 0 if result.is_valid else 1

    except NixDiskError as e:
        formatter.error(str(e))
        return 1


def cmd_textcopy(args, formatter: OutputFormatter) -> int:
    """Handle the 'textcopy' command: convert an extracted text file."""
    output = getattr(args, 'output', None)
    try:
        with open(args.input, 'rb') as src:
            if output:
                with open(output, 'wb') as dst:
                    size = textcopy_stream(src, dst)
                formatter.success(f"Wrote {size:,} bytes", source=args.input,
                                  dest=output, bytes=size)
            else:
                sys.stdout.flush()
                textcopy_stream(src, sys.stdout.buffer)
                sys.stdout.buffer.flush()
        return 0

    except OSError as e:
        formatter.error(f"Filesystem error: {e}")
        return 1
