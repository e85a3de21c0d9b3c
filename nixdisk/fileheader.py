"""
Per-file header reader.

Each file starts with an HDR1/HDR2 pair in one sector followed by a trailer
record. The header is expected at the directory entry's start sector, but
on some images it sits a few sectors earlier, so the reader scans back one
sector at a time before giving up.
"""

from .charset import convert
from .constants import (
    FILE_HEADER1,
    FILE_HEADER1_SIZE,
    FILE_HEADER2_SIZE,
    FILE_TRAILER_SIZE,
    SECTOR_SIZE,
)
from .cursor import RecordCursor
from .exceptions import DiskError, FileHeaderNotFoundError, TruncatedImageError
from .logging_config import get_logger
from .models import DirectoryEntry, FileHeader, FileTrailer, TrailerKind

log = get_logger('fileheader')


def locate_header(
    cursor: RecordCursor,
    offset: int,
    sector_size: int = SECTOR_SIZE,
    attempts: int = 4
) -> tuple[int, int]:
    """
    Find the HDR1 record at offset or up to `attempts` sectors before it.

    Returns (offset, sectors scanned back). The HDR1 record is left in the
    cursor. Raises FileHeaderNotFoundError when no candidate matches.
    """
    for back in range(attempts + 1):
        candidate = offset - back * sector_size
        if candidate < 0:
            break
        try:
            cursor.seek(candidate)
            cursor.read_record(FILE_HEADER1_SIZE)
        except TruncatedImageError:
            continue
        if convert(cursor.record[0:4]) == FILE_HEADER1:
            return candidate, back

    raise FileHeaderNotFoundError(f"FileHeader HDR1 not found at 0x{offset:x}")


def read_file_header(
    cursor: RecordCursor,
    entry: DirectoryEntry,
    base_sector: int,
    sector_size: int = SECTOR_SIZE,
    attempts: int = 4
) -> FileHeader:
    """Read the header triplet of a directory entry."""
    offset = entry.offset(base_sector, sector_size)
    found, back = locate_header(cursor, offset, sector_size, attempts)
    if back:
        log.info(f"{entry.name}: header found {back} sector(s) before 0x{offset:x}")

    mark = len(cursor.diagnostics)
    try:
        hdr1 = FileHeader.parse_hdr1(cursor)

        cursor.read_record(FILE_HEADER2_SIZE)
        hdr2 = FileHeader.parse_hdr2(cursor)

        trailer = _read_trailer(cursor, entry.name)
    finally:
        diagnostics = cursor.take_diagnostics(mark)

    return FileHeader(
        **hdr1,
        **hdr2,
        trailer=trailer,
        sector_size=sector_size,
        base_sector=base_sector,
        offset=found,
        back_scanned=back,
        diagnostics=diagnostics,
    )


def _read_trailer(cursor: RecordCursor, name: str) -> FileTrailer | None:
    try:
        cursor.read_record(FILE_TRAILER_SIZE)
    except DiskError as e:
        log.warning(f"{name}: no header trailer: {e}")
        return None

    trailer = FileTrailer.from_cursor(cursor)
    if trailer.kind is TrailerKind.OTHER:
        log.warning(f"{name}: unrecognized header trailer {trailer.identifier!r}")
    return trailer
