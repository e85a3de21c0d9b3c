"""
Nixdorf 8820 Disk Image Utility

A Python package for reading hard-sectored 8" floppy disk images written
with the ECMA-58 label conventions used by Nixdorf 8820 systems: volume
label, error map, index cylinder headers, main directory and files.
"""

from .constants import (
    DIR_ENTRY_SIZE,
    FLAG_SYSTEM,
    SECTOR_SIZE,
    SECTORS_PER_TRACK,
)
from .exceptions import (
    CorruptedDiskError,
    DiskError,
    FileHeaderNotFoundError,
    FileNotFoundError,
    LabelNotFoundError,
    MalformedDirectoryEntryError,
    NixDiskError,
    SystemEntryError,
    TruncatedExtentError,
    TruncatedImageError,
)
from .charset import PLACEHOLDER, convert
from .geometry import GeometryAddress, address
from .models import (
    Allocation,
    CodedField,
    Date,
    DirectoryEntry,
    ErrorMapDescriptor,
    Extent,
    FileHeader,
    FileTrailer,
    RecordLength,
    SurfaceFormat,
    TrailerKind,
    VolumeDescriptor,
    VolumeHeaderRecord,
)
from .cursor import ParsedNumber, RecordCursor, parse_number
from .directory import Directory, read_directory, read_entries
from .extent import FileExtentCopier
from .fileheader import locate_header, read_file_header
from .labels import read_error_map, read_volume_descriptor, read_volume_headers
from .image import DiskImage, ExtractionResult, open_image
from .settings import Settings
from .formatter import OutputFormatter
from .textcopy import textcopy, textcopy_stream
from .utils import has_wildcards, match_entries, match_filename, safe_filename
from .verify import VerificationResult, verify_disk
from .commands import cmd_copy, cmd_info, cmd_list, cmd_show, cmd_textcopy, cmd_verify

__version__ = "0.1.0"

__all__ = [
    # Disk image
    "DiskImage",
    "open_image",
    "ExtractionResult",
    # Decoding engine
    "GeometryAddress",
    "address",
    "convert",
    "PLACEHOLDER",
    "RecordCursor",
    "ParsedNumber",
    "parse_number",
    "Directory",
    "read_directory",
    "read_entries",
    "locate_header",
    "read_file_header",
    "FileExtentCopier",
    "read_error_map",
    "read_volume_descriptor",
    "read_volume_headers",
    # Data models
    "Date",
    "Extent",
    "CodedField",
    "SurfaceFormat",
    "RecordLength",
    "Allocation",
    "VolumeDescriptor",
    "ErrorMapDescriptor",
    "VolumeHeaderRecord",
    "DirectoryEntry",
    "FileHeader",
    "FileTrailer",
    "TrailerKind",
    # Exceptions
    "NixDiskError",
    "DiskError",
    "TruncatedImageError",
    "LabelNotFoundError",
    "FileHeaderNotFoundError",
    "MalformedDirectoryEntryError",
    "TruncatedExtentError",
    "CorruptedDiskError",
    "FileNotFoundError",
    "SystemEntryError",
    # Utilities
    "Settings",
    "OutputFormatter",
    "textcopy",
    "textcopy_stream",
    "has_wildcards",
    "match_filename",
    "match_entries",
    "safe_filename",
    "VerificationResult",
    "verify_disk",
    # Commands
    "cmd_info",
    "cmd_list",
    "cmd_show",
    "cmd_copy",
    "cmd_verify",
    "cmd_textcopy",
    # Constants
    "SECTOR_SIZE",
    "SECTORS_PER_TRACK",
    "DIR_ENTRY_SIZE",
    "FLAG_SYSTEM",
]
