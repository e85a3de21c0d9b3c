"""
Main directory reader for Nixdorf 8820 disk images.

The directory lives on cylinder 1 and is a run of 11-byte entries ended by
an entry whose first byte is 0xFF. Entries that cannot be decoded are
skipped, since damaged media is the normal case for archival images.
"""

from dataclasses import dataclass, field

from .constants import (
    DIR_ENTRY_SIZE,
    DIR_SENTINEL,
    DIRECTORY_CYLINDER,
    SEQUENCE_WRAP,
)
from .cursor import RecordCursor
from .exceptions import MalformedDirectoryEntryError
from .logging_config import get_logger
from .models import DirectoryEntry, VolumeDescriptor
from .settings import Settings

log = get_logger('directory')


@dataclass
class Directory:
    """Directory entries in on-disk order."""
    entries: list[DirectoryEntry] = field(default_factory=list)
    base_sector: int | None = None
    sector_size: int = 128
    start_offset: int | None = None
    skipped: list[str] = field(default_factory=list)
    terminated: bool = True

    def find(self, name: str) -> DirectoryEntry | None:
        """First entry whose trimmed name matches, or None."""
        name = name.strip()
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def list_all(self) -> list[DirectoryEntry]:
        return list(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def directory_start_sector(record_length: int, sequence: int) -> int | None:
    """Sector on cylinder 1 where the directory starts."""
    if record_length == 128:
        return 1 if sequence == SEQUENCE_WRAP else sequence
    if record_length == 256:
        return sequence
    return None


def read_entries(cursor: RecordCursor, directory: Directory) -> Directory:
    """Read entries from the current cursor position until the sentinel."""
    index = 0
    while True:
        data = cursor.read(DIR_ENTRY_SIZE)
        if not data:
            directory.terminated = False
            log.warning(f"Directory ended without terminator after {index} entries")
            break
        if _signed(data[0]) == DIR_SENTINEL:
            break
        try:
            directory.entries.append(DirectoryEntry.from_bytes(data))
        except MalformedDirectoryEntryError as e:
            message = f"Entry {index}: {e}"
            directory.skipped.append(message)
            log.warning(f"Skipping directory entry {index}: {e}")
        if len(data) < DIR_ENTRY_SIZE:
            directory.terminated = False
            break
        index += 1
    return directory


def read_directory(
    cursor: RecordCursor,
    volume: VolumeDescriptor,
    settings: Settings | None = None
) -> Directory:
    """
    Locate and read the main directory described by the volume label.

    Unknown physical record lengths give an empty directory.
    """
    settings = settings or Settings()
    record_length = volume.sector_size
    directory = Directory()

    sector = directory_start_sector(record_length, volume.sequence)
    base = settings.directory_base_sector(record_length) if record_length else None
    if sector is None or base is None:
        log.warning(f"Don't know where to find directory for "
                    f"record length {volume.record_length}")
        return directory

    directory.base_sector = base
    directory.sector_size = record_length
    directory.start_offset = cursor.seek((DIRECTORY_CYLINDER, 0, sector), record_length)
    log.debug(f"Directory at 0x{directory.start_offset:x}, base sector {base}")
    return read_entries(cursor, directory)


def _signed(value: int) -> int:
    return value - 256 if value > 127 else value
