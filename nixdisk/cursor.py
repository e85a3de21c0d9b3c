"""
Record cursor over a Nixdorf 8820 disk image.

All label and directory readers share one cursor per image. The cursor
holds the read position and the active record; field offsets are 1-based
because the ECMA standards count that way.
"""

import re
import struct
from dataclasses import dataclass
from typing import BinaryIO

from .charset import convert
from .constants import SECTOR_SIZE
from .exceptions import DiskError, TruncatedImageError
from .geometry import to_offset
from .logging_config import get_logger
from .models import Date, Extent

log = get_logger('cursor')

_LEADING_NUMBER = re.compile(r'\s*([+-]?\d+)')

# Zero-filled field bytes count as padding, like blanks
_PADDING = ' \t\n\v\f\r\x00'


@dataclass(frozen=True)
class ParsedNumber:
    """Result of a permissive number parse."""
    value: int
    diagnostic: str | None = None


def parse_number(text: str) -> ParsedNumber:
    """
    Parse a digit string, defaulting instead of failing.

    Leading digits are used when trailing garbage follows; text without
    leading digits yields 0. Blank text is a normal empty field.
    """
    if not text.strip():
        return ParsedNumber(0)
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return ParsedNumber(0, f"not a number: {text!r}")
    value = int(match.group(1))
    if match.end() != len(text):
        return ParsedNumber(value, f"trailing characters in number: {text!r}")
    return ParsedNumber(value)


class RecordCursor:
    """Seekable reader producing fixed-size records from a disk image."""

    def __init__(self, file: BinaryIO, sector_size: int = SECTOR_SIZE):
        self._file = file
        self.sector_size = sector_size
        self.record = b''
        self.position = 0
        self.diagnostics: list[str] = []

    # =========================================================================
    # Positioning and reading
    # =========================================================================

    def seek(self, position, sector_size: int | None = None) -> int:
        """
        Move to a byte offset or a (cylinder, side, sector) address.

        Returns the absolute byte offset.
        """
        offset = to_offset(position, sector_size or self.sector_size)
        if offset < 0:
            raise DiskError(f"Seek before start of image: {offset}")
        try:
            self._file.seek(offset)
        except OSError as e:
            raise DiskError(f"Cannot seek disk image: {e}")
        self.position = offset
        return offset

    def read(self, size: int) -> bytes:
        """Read up to size raw bytes; short at end of image."""
        try:
            data = self._file.read(size)
        except OSError as e:
            raise DiskError(f"Cannot read disk image: {e}")
        self.position += len(data)
        return data

    def read_record(self, size: int | None = None) -> bytes:
        """Read exactly size bytes into the active record."""
        if size is None:
            size = self.sector_size
        start = self.position
        data = self.read(size)
        if len(data) < size:
            raise TruncatedImageError(
                f"Expected {size} bytes at 0x{start:x}, image has {len(data)}"
            )
        self.record = data
        return data

    # =========================================================================
    # Field extraction (1-based offsets)
    # =========================================================================

    def _raw(self, start: int, length: int) -> bytes:
        return self.record[start - 1:start - 1 + length]

    def extract_string(self, start: int, length: int) -> str:
        """Converted text field with blank and NUL padding trimmed."""
        return convert(self._raw(start, length)).strip(_PADDING)

    def extract_integer(self, start: int, length: int) -> int:
        """Decimal digit field; malformed content defaults to 0 or its leading digits."""
        parsed = parse_number(self.extract_string(start, length))
        if parsed.diagnostic:
            self._diagnose(f"field {start}:{length}: {parsed.diagnostic}")
        return parsed.value

    def extract_date(self, start: int) -> Date:
        """Six-character YYMMDD date field."""
        text = self.extract_string(start, 6)
        parts = [parse_number(text[i:i + 2]) for i in (0, 2, 4)]
        for part in parts:
            if part.diagnostic:
                self._diagnose(f"date {start}: {part.diagnostic}")
        year, month, day = (part.value for part in parts)
        return Date(year, month, day)

    def extract_extent(self, start: int) -> Extent:
        """Five-character CCHSS extent field."""
        text = self.extract_string(start, 5)
        cylinder, side, sector = (
            parse_number(text[0:2]).value,
            parse_number(text[2:3]).value,
            parse_number(text[3:5]).value,
        )
        return Extent(cylinder, side, sector)

    def extract_word(self, start: int) -> int:
        """Big-endian 16-bit binary field."""
        raw = self._raw(start, 2)
        if len(raw) < 2:
            raise TruncatedImageError(f"Record too short for word at {start}")
        return struct.unpack('>H', raw)[0]

    def take_diagnostics(self, mark: int = 0) -> list[str]:
        """Remove and return the diagnostics recorded since mark."""
        taken = self.diagnostics[mark:]
        del self.diagnostics[mark:]
        return taken

    def _diagnose(self, message: str) -> None:
        message = f"0x{self.position - len(self.record):x}: {message}"
        self.diagnostics.append(message)
        log.debug(message)

    # =========================================================================
    # Labels
    # =========================================================================

    def label(self) -> tuple[str, str]:
        """Return (identifier, number) of the active record."""
        return convert(self.record[0:3]), convert(self.record[3:4])

    def find_label(self, identifier: str, position=None) -> str | None:
        """
        Read one record and check its label identifier.

        Returns the label number when the identifier matches, else None.
        """
        if position is not None:
            self.seek(position)
        name, number = self.label_at_cursor()
        if name == identifier:
            return number
        return None

    def label_at_cursor(self) -> tuple[str, str]:
        """Read one sector-sized record and return its label."""
        self.read_record()
        return self.label()
