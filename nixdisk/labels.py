"""
Index cylinder label readers.
"""

from .constants import HEADER_FIRST_SECTOR, HEADER_LAST_SECTOR
from .cursor import RecordCursor
from .exceptions import DiskError, LabelNotFoundError
from .logging_config import get_logger
from .models import ErrorMapDescriptor, VolumeDescriptor, VolumeHeaderRecord

log = get_logger('labels')


def read_error_map(cursor: RecordCursor) -> ErrorMapDescriptor:
    """Parse the ERMAP label. Raises LabelNotFoundError if missing."""
    return ErrorMapDescriptor.from_cursor(cursor)


def read_volume_descriptor(cursor: RecordCursor) -> VolumeDescriptor:
    """Parse the VOL1 label. Raises LabelNotFoundError if missing."""
    volume = VolumeDescriptor.from_cursor(cursor)
    for name in volume.unrecognized_codes:
        log.warning(f"Unrecognized {name.replace('_', ' ')} code "
                    f"{getattr(volume, name).raw!r} in VOL1")
    return volume


def read_volume_headers(
    cursor: RecordCursor,
    first: int = HEADER_FIRST_SECTOR,
    last: int = HEADER_LAST_SECTOR
) -> list[VolumeHeaderRecord]:
    """
    Collect HDR1 labels on the index cylinder.

    Probing stops at the first sector that does not hold an HDR1 label;
    headers after a gap are not reported.
    """
    headers = []
    for sector in range(first, last + 1):
        try:
            headers.append(VolumeHeaderRecord.from_cursor(cursor, (0, 0, sector)))
        except (LabelNotFoundError, DiskError) as e:
            log.debug(f"Header probing stopped at sector {sector}: {e}")
            break
    return headers
