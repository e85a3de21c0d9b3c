"""
Data model classes for Nixdorf 8820 disk image utilities.
"""

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .charset import convert
from .constants import (
    DIR_ENTRY_SIZE,
    DIR_NAME_LENGTH,
    ERROR_MAP_POSITION,
    FILE_HEADER2,
    FLAG_SYSTEM,
    LABEL_ERROR_MAP,
    LABEL_HEADER,
    LABEL_VOLUME,
    MONTH_NAMES,
    SECTOR_SIZE,
    TRAILER_DATES,
    TRAILER_HEADER3,
    TRAILER_INDEX,
    VOLUME_LABEL_POSITION,
)
from .exceptions import (
    CorruptedDiskError,
    LabelNotFoundError,
    MalformedDirectoryEntryError,
)

if TYPE_CHECKING:
    from .cursor import RecordCursor

# Characters that cannot appear in a readable directory name
_CONTROL_CHARS = frozenset("\x00\x07\x08\x0a\x0d\x1b\x7f")


@dataclass(frozen=True)
class Date:
    """YYMMDD label date. Day 0 means no date."""
    year: int
    month: int
    day: int

    @property
    def is_empty(self) -> bool:
        return self.day == 0

    def __str__(self) -> str:
        if self.is_empty:
            return ""
        if 1 <= self.month <= len(MONTH_NAMES):
            month = MONTH_NAMES[self.month - 1]
        else:
            month = str(self.month)
        return f"{self.day}. {month} 19{self.year:02d}"


@dataclass(frozen=True)
class Extent:
    """Cylinder/side/sector triple as printed in label fields."""
    cylinder: int
    side: int
    sector: int

    def __str__(self) -> str:
        return f"Cyl {self.cylinder}, Side {self.side}, Sector {self.sector}"


# =============================================================================
# Single-character coded fields
# =============================================================================

class SurfaceFormat(Enum):
    SINGLE_SIDE_ECMA54 = "Side 0 formatted according to ECMA-54"
    DOUBLE_SIDE_ECMA59 = "Both sides formatted according to ECMA-59"
    DOUBLE_SIDE_ECMA69 = "Both sides formatted according to ECMA-69"
    OTHER = "Unrecognized surface indicator"


class RecordLength(Enum):
    BYTES_128 = 128
    BYTES_256 = 256
    BYTES_512 = 512
    BYTES_1024 = 1024
    OTHER = 0


class Allocation(Enum):
    SINGLE_SIDED = "Single sided"
    DOUBLE_SIDED = "Double sided"
    OTHER = "Unrecognized allocation"


_SURFACE_CODES = {
    '': SurfaceFormat.SINGLE_SIDE_ECMA54,
    '1': SurfaceFormat.SINGLE_SIDE_ECMA54,
    '2': SurfaceFormat.DOUBLE_SIDE_ECMA59,
    'M': SurfaceFormat.DOUBLE_SIDE_ECMA69,
}

_RECORD_LENGTH_CODES = {
    '': RecordLength.BYTES_128,
    '1': RecordLength.BYTES_256,
    '2': RecordLength.BYTES_512,
    '3': RecordLength.BYTES_1024,
}

_ALLOCATION_CODES = {
    '': Allocation.SINGLE_SIDED,
    '1': Allocation.DOUBLE_SIDED,
}


@dataclass(frozen=True)
class CodedField:
    """A single-character code and what it stands for."""
    kind: Enum
    raw: str

    @classmethod
    def decode(cls, raw: str, codes: dict, other: Enum) -> 'CodedField':
        return cls(codes.get(raw, other), raw)

    @property
    def is_recognized(self) -> bool:
        return self.kind.name != 'OTHER'

    def __str__(self) -> str:
        if not self.is_recognized:
            return repr(self.raw)
        if isinstance(self.kind.value, int):
            return f"{self.kind.value} bytes per physical record"
        return self.kind.value


# =============================================================================
# Index cylinder labels
# =============================================================================

@dataclass(frozen=True)
class VolumeDescriptor:
    """VOL1 label (ECMA-58 section 7.3)."""
    identifier: str
    accessibility: str
    owner: str
    sequence: int
    version: str
    surface: CodedField
    record_length: CodedField
    allocation: CodedField

    @classmethod
    def from_cursor(cls, cursor: 'RecordCursor') -> 'VolumeDescriptor':
        """Read and parse VOL1 at cylinder 0, side 0, sector 7."""
        number = cursor.find_label(LABEL_VOLUME, VOLUME_LABEL_POSITION)
        if number != '1':
            raise LabelNotFoundError("VOL1 not found")

        return cls(
            identifier=cursor.extract_string(5, 6),
            accessibility=cursor.extract_string(11, 1),
            owner=cursor.extract_string(38, 14),
            sequence=cursor.extract_integer(77, 2),
            version=cursor.extract_string(80, 1),
            surface=CodedField.decode(
                cursor.extract_string(72, 1), _SURFACE_CODES, SurfaceFormat.OTHER),
            record_length=CodedField.decode(
                cursor.extract_string(76, 1), _RECORD_LENGTH_CODES, RecordLength.OTHER),
            allocation=CodedField.decode(
                cursor.extract_string(79, 1), _ALLOCATION_CODES, Allocation.OTHER),
        )

    @property
    def sector_size(self) -> int | None:
        """Physical record length in bytes, None if the code is unknown."""
        if self.record_length.is_recognized:
            return self.record_length.kind.value
        return None

    @property
    def is_unrestricted(self) -> bool:
        return self.accessibility == ''

    @property
    def unrecognized_codes(self) -> list[str]:
        names = []
        for name in ('surface', 'record_length', 'allocation'):
            if not getattr(self, name).is_recognized:
                names.append(name)
        return names


@dataclass(frozen=True)
class ErrorMapDescriptor:
    """ERMAP label (ECMA-58 section 7.5)."""
    defective_cylinder1: str
    defective_cylinder2: str
    relocation: str
    error_directory_indicator: str
    error_directory: str

    @classmethod
    def from_cursor(cls, cursor: 'RecordCursor') -> 'ErrorMapDescriptor':
        """Read and parse ERMAP at cylinder 0, side 0, sector 5."""
        number = cursor.find_label(LABEL_ERROR_MAP, ERROR_MAP_POSITION)
        if number != 'A':
            raise LabelNotFoundError("ERMAP not found")

        return cls(
            defective_cylinder1=cursor.extract_string(7, 3),
            defective_cylinder2=cursor.extract_string(11, 3),
            relocation=cursor.extract_string(23, 1),
            error_directory_indicator=cursor.extract_string(24, 1),
            error_directory=cursor.extract_string(25, 48),
        )


@dataclass(frozen=True)
class VolumeHeaderRecord:
    """
    HDR1 file label on the index cylinder (ECMA-58 section 7.4).

    Nixdorf uses these to describe the disk as a whole; individual files
    carry their own HDR1 in front of the data (see FileHeader).
    """
    identifier: str
    block_length: int
    extent_begin: Extent
    extent_end: Extent
    record_format: str
    bypass: str
    accessibility: str
    write_protect: str
    interchange: str
    multivolume: str
    section: str
    creation_date: Date
    record_length: int
    next_record_offset: int
    attribute: str
    organization: str
    expiration_date: Date
    verify: str
    end_of_data: Extent

    @classmethod
    def from_cursor(cls, cursor: 'RecordCursor', position) -> 'VolumeHeaderRecord':
        """Read and parse an HDR1 label at the given index cylinder position."""
        number = cursor.find_label(LABEL_HEADER, position)
        if number != '1':
            raise LabelNotFoundError(f"HDR1 not found at {position}")

        return cls(
            identifier=cursor.extract_string(6, 9),
            block_length=cursor.extract_integer(23, 5),
            extent_begin=cursor.extract_extent(29),
            extent_end=cursor.extract_extent(35),
            record_format=cursor.extract_string(40, 1),
            bypass=cursor.extract_string(41, 1),
            accessibility=cursor.extract_string(42, 1),
            write_protect=cursor.extract_string(43, 1),
            interchange=cursor.extract_string(44, 1),
            multivolume=cursor.extract_string(45, 1),
            section=cursor.extract_string(46, 2),
            creation_date=cursor.extract_date(48),
            record_length=cursor.extract_integer(54, 4),
            next_record_offset=cursor.extract_integer(58, 5),
            attribute=cursor.extract_string(63, 1),
            organization=cursor.extract_string(64, 1),
            expiration_date=cursor.extract_date(67),
            verify=cursor.extract_string(73, 1),
            end_of_data=cursor.extract_extent(75),
        )


# =============================================================================
# Directory
# =============================================================================

@dataclass(frozen=True)
class DirectoryEntry:
    """Represents an 11-byte main directory entry."""
    name: str   # up to 8 chars, trimmed
    flag: int   # 0x40 marks a system entry
    start: int  # start sector number (directory numbering)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'DirectoryEntry':
        """Parse an 11-byte directory entry."""
        if len(data) != DIR_ENTRY_SIZE:
            raise MalformedDirectoryEntryError(
                f"Invalid directory entry size: {len(data)}")

        name = convert(data[0:DIR_NAME_LENGTH])
        if any(c in _CONTROL_CHARS for c in name):
            raise MalformedDirectoryEntryError(
                f"Unreadable directory entry name: {data[0:DIR_NAME_LENGTH].hex()}")

        flag = data[8]
        start = struct.unpack_from('>H', data, 9)[0]
        return cls(name=name.strip(), flag=flag, start=start)

    @property
    def is_system(self) -> bool:
        return self.flag == FLAG_SYSTEM

    def offset(self, base_sector: int, sector_size: int = SECTOR_SIZE) -> int:
        """Byte offset of the start sector."""
        return (self.start - base_sector) * sector_size


# =============================================================================
# Per-file header triplet
# =============================================================================

class TrailerKind(Enum):
    DATES = "date pair"
    INDEX = "index marker"
    HEADER3 = "third header"
    OTHER = "unrecognized"


_TRAILER_KINDS = {
    TRAILER_DATES: TrailerKind.DATES,
    TRAILER_INDEX: TrailerKind.INDEX,
    TRAILER_HEADER3: TrailerKind.HEADER3,
}


@dataclass(frozen=True)
class FileTrailer:
    """Third record of a file header. Only the date pair shape has fields."""
    kind: TrailerKind
    identifier: str
    date1: Date | None = None
    date2: Date | None = None

    @classmethod
    def from_cursor(cls, cursor: 'RecordCursor') -> 'FileTrailer':
        """Parse the active record as a trailer."""
        identifier = convert(cursor.record[0:4])
        kind = _TRAILER_KINDS.get(identifier, TrailerKind.OTHER)
        if kind is TrailerKind.DATES:
            return cls(kind, identifier,
                       cursor.extract_date(117), cursor.extract_date(123))
        return cls(kind, identifier)


@dataclass(frozen=True)
class FileHeader:
    """Per-file HDR1/HDR2 header with optional trailer."""
    # HDR1 (ECMA-13 first file header label)
    name: str
    file_set_id: str
    section: int
    sequence: int
    generation: int
    generation_version: int
    creation_date: Date
    expiration_date: Date
    accessibility: str
    block_count: int
    implementation_id: str

    # HDR2
    u: str
    record_size: int
    start: int
    next_header: int
    end: int
    last_sector_bytes: int

    trailer: FileTrailer | None = None

    # Layout the numbers above refer to
    sector_size: int = SECTOR_SIZE
    base_sector: int = 0
    offset: int = 0
    back_scanned: int = 0

    diagnostics: list[str] = field(default_factory=list, compare=False)

    def __post_init__(self):
        if self.length < 0:
            raise CorruptedDiskError(
                f"File '{self.name}' has negative length "
                f"(start {self.start}, end {self.end}, last {self.last_sector_bytes})")
        if self.last_sector_bytes > self.sector_size:
            raise CorruptedDiskError(
                f"File '{self.name}' uses {self.last_sector_bytes} bytes "
                f"of a {self.sector_size}-byte sector")

    @classmethod
    def parse_hdr1(cls, cursor: 'RecordCursor') -> dict:
        """Fields of the HDR1 record currently in the cursor."""
        return dict(
            name=cursor.extract_string(5, 17),
            file_set_id=cursor.extract_string(22, 6),
            section=cursor.extract_integer(28, 4),
            sequence=cursor.extract_integer(32, 4),
            generation=cursor.extract_integer(36, 4),
            generation_version=cursor.extract_integer(40, 2),
            creation_date=cursor.extract_date(42),
            expiration_date=cursor.extract_date(48),
            accessibility=cursor.extract_string(54, 1),
            block_count=cursor.extract_integer(55, 6),
            implementation_id=cursor.extract_string(61, 13),
        )

    @classmethod
    def parse_hdr2(cls, cursor: 'RecordCursor') -> dict:
        """Fields of the HDR2 record currently in the cursor."""
        if convert(cursor.record[0:4]) != FILE_HEADER2:
            raise LabelNotFoundError("HDR2 not found")
        return dict(
            u=cursor.extract_string(5, 1),
            record_size=cursor.extract_integer(6, 5),
            start=cursor.extract_word(16),
            next_header=cursor.extract_word(20),
            end=cursor.extract_word(24),
            last_sector_bytes=cursor.extract_word(26),
        )

    @property
    def length(self) -> int:
        """Exact file length in bytes."""
        return (self.end - self.start) * self.sector_size + self.last_sector_bytes

    @property
    def sector_count(self) -> int:
        return self.end - self.start + 1

    def sector_offset(self, sector: int) -> int:
        """Byte offset of a data sector in directory numbering."""
        return (sector - self.base_sector) * self.sector_size
