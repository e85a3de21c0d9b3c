"""
Custom exceptions for Nixdorf 8820 disk image utilities.
"""


class NixDiskError(Exception):
    """Base exception for all Nixdorf disk errors."""
    pass


class DiskError(NixDiskError):
    """Error opening or reading the disk image."""
    pass


class TruncatedImageError(DiskError):
    """Image ended before a complete record could be read."""
    pass


class LabelNotFoundError(NixDiskError):
    """Required label identifier or sequence number not found."""
    pass


class FileHeaderNotFoundError(LabelNotFoundError):
    """File header not found, even after back-scanning."""
    pass


class MalformedDirectoryEntryError(NixDiskError):
    """Directory entry cannot be decoded."""
    pass


class TruncatedExtentError(NixDiskError):
    """Image ended before the file extent was fully copied."""
    pass


class CorruptedDiskError(NixDiskError):
    """Disk structure is corrupted."""
    pass


class FileNotFoundError(NixDiskError):
    """File not found in disk image."""
    pass


class SystemEntryError(NixDiskError):
    """Directory entry is a protected system entry."""
    pass
