"""
File extent copier.

A file occupies the sectors from its header's start to end sector
inclusive; only the first `last_sector_bytes` bytes of the final sector
belong to the file.
"""

import io
from typing import BinaryIO

from .cursor import RecordCursor
from .exceptions import TruncatedExtentError
from .models import FileHeader


class FileExtentCopier:
    """Streams the exact bytes of one file out of the image."""

    def __init__(self, cursor: RecordCursor, header: FileHeader):
        self.cursor = cursor
        self.header = header

    @property
    def length(self) -> int:
        return self.header.length

    def sectors(self):
        """Yield the data of each sector of the extent, trimmed to the file length."""
        header = self.header
        sector_size = header.sector_size
        remaining = header.length

        for sector in range(header.start, header.end + 1):
            wanted = sector_size if remaining >= sector_size else max(remaining, 0)
            self.cursor.seek(header.sector_offset(sector))
            data = self.cursor.read(sector_size)
            if len(data) < wanted:
                raise TruncatedExtentError(
                    f"File '{header.name}' truncated at sector {sector}: "
                    f"{header.length - remaining + len(data)} of {header.length} bytes"
                )
            yield data[:wanted]
            remaining -= sector_size

    def copy(self, destination: BinaryIO) -> int:
        """Write the file to a binary stream. Returns the byte count."""
        written = 0
        for chunk in self.sectors():
            destination.write(chunk)
            written += len(chunk)
        return written

    def read(self) -> bytes:
        """Return the file contents."""
        buffer = io.BytesIO()
        self.copy(buffer)
        return buffer.getvalue()
