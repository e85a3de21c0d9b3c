"""
Nixdorf 8820 floppy disk image.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .cursor import RecordCursor
from .directory import Directory, read_directory
from .exceptions import (
    CorruptedDiskError,
    DiskError,
    FileNotFoundError,
    NixDiskError,
    SystemEntryError,
)
from .extent import FileExtentCopier
from .fileheader import read_file_header
from .labels import read_error_map, read_volume_descriptor, read_volume_headers
from .logging_config import get_logger
from .models import (
    DirectoryEntry,
    ErrorMapDescriptor,
    FileHeader,
    VolumeDescriptor,
    VolumeHeaderRecord,
)
from .settings import Settings
from .utils import match_entries, safe_filename

log = get_logger('image')


@dataclass
class ExtractionResult:
    """Outcome of extracting one file in a batch."""
    name: str
    dest: str
    size: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DiskImage:
    """
    Read-only view of a Nixdorf 8820 disk image.

    Opening parses the error map, the volume label, the index cylinder
    headers and the main directory. Files are read on demand through the
    same cursor.
    """

    def __init__(self, image_path: str, settings: Settings | None = None):
        self.image_path = image_path
        self.settings = settings or Settings()
        self._file: BinaryIO | None = None
        try:
            self._file = open(image_path, 'rb')
        except OSError as e:
            raise DiskError(f"Cannot open disk image: {e}")

        self.cursor = RecordCursor(self._file)
        try:
            self._error_map = read_error_map(self.cursor)
            self._volume = read_volume_descriptor(self.cursor)
            self._headers = read_volume_headers(self.cursor)
            self._directory = read_directory(self.cursor, self._volume, self.settings)
        except Exception:
            self.close()
            raise

    # =========================================================================
    # Metadata
    # =========================================================================

    @property
    def volume_descriptor(self) -> VolumeDescriptor:
        return self._volume

    @property
    def error_map(self) -> ErrorMapDescriptor:
        return self._error_map

    @property
    def headers(self) -> list[VolumeHeaderRecord]:
        return list(self._headers)

    @property
    def directory(self) -> Directory:
        return self._directory

    @property
    def sector_size(self) -> int:
        return self._directory.sector_size

    @property
    def size(self) -> int:
        """Image size in bytes."""
        return Path(self.image_path).stat().st_size

    def list_directory(self) -> list[DirectoryEntry]:
        """Directory entries in on-disk order."""
        return self._directory.list_all()

    # =========================================================================
    # Files
    # =========================================================================

    def find_entry(self, name: str) -> DirectoryEntry:
        """Directory entry by name. Raises FileNotFoundError."""
        entry = self._directory.find(name)
        if entry is None:
            raise FileNotFoundError(f"File '{name}' not found")
        return entry

    def read_header(self, entry: DirectoryEntry) -> FileHeader:
        """Read the header of a directory entry."""
        if self._directory.base_sector is None:
            raise CorruptedDiskError("Directory layout unknown for this volume")
        return read_file_header(
            self.cursor,
            entry,
            self._directory.base_sector,
            self._directory.sector_size,
            self.settings.back_scan_attempts,
        )

    def find_file(self, name: str) -> FileHeader:
        """Header of the named file. Raises FileNotFoundError."""
        return self.read_header(self.find_entry(name))

    def _checked_header(self, entry: DirectoryEntry) -> FileHeader:
        if entry.is_system and not self.settings.include_system_entries:
            raise SystemEntryError(f"Can't handle system entry '{entry.name}'")
        return self.read_header(entry)

    def read_file(self, name: str) -> bytes:
        """Return the contents of the named file."""
        header = self._checked_header(self.find_entry(name))
        return FileExtentCopier(self.cursor, header).read()

    def extract_file(self, name: str, destination_path: str | Path) -> int:
        """Copy the named file to destination_path. Returns the byte count."""
        entry = self.find_entry(name)
        dest = Path(destination_path)
        if dest.is_dir():
            dest = dest / safe_filename(entry.name)
        return self._extract_entry(entry, dest)

    def _extract_entry(self, entry: DirectoryEntry, dest: Path) -> int:
        header = self._checked_header(entry)
        try:
            with open(dest, 'wb') as f:
                written = FileExtentCopier(self.cursor, header).copy(f)
        except NixDiskError:
            dest.unlink(missing_ok=True)
            raise
        log.debug(f"{entry.name}: {written} bytes -> {dest}")
        return written

    def extract_matching(self, pattern: str, dest_dir: str | Path) -> list[ExtractionResult]:
        """
        Extract every file matching a wildcard pattern into dest_dir.

        A failing file is reported in its result and does not stop the batch.
        """
        dest_dir = Path(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)

        results = []
        for entry in match_entries(self.list_directory(), pattern):
            if entry.is_system and not self.settings.include_system_entries:
                log.info(f"Skipping system entry {entry.name}")
                continue
            dest = dest_dir / safe_filename(entry.name)
            try:
                size = self._extract_entry(entry, dest)
                results.append(ExtractionResult(entry.name, str(dest), size))
            except (NixDiskError, OSError) as e:
                log.debug(f"{entry.name}: extraction failed: {e}")
                results.append(ExtractionResult(entry.name, str(dest), error=str(e)))
        return results

    # =========================================================================
    # Lifetime
    # =========================================================================

    def close(self) -> None:
        """Close the disk image."""
        if self._file:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def open_image(image_path: str, settings: Settings | None = None) -> DiskImage:
    """Open and parse a disk image."""
    return DiskImage(image_path, settings)
