"""
Constants for Nixdorf 8820 floppy disk images.
"""

# Sector geometry (ECMA-58 index cylinder is always 128 bytes per sector)
SECTOR_SIZE = 128
SECTORS_PER_TRACK = 26

# Index cylinder label positions (cylinder, side, sector)
ERROR_MAP_POSITION = (0, 0, 5)
VOLUME_LABEL_POSITION = (0, 0, 7)
HEADER_FIRST_SECTOR = 8
HEADER_LAST_SECTOR = 26

# Label identifiers
LABEL_VOLUME = "VOL"
LABEL_ERROR_MAP = "ERM"
LABEL_HEADER = "HDR"
FILE_HEADER1 = "HDR1"
FILE_HEADER2 = "HDR2"
TRAILER_DATES = "  00"
TRAILER_INDEX = "  01"
TRAILER_HEADER3 = "HDR3"

# Record sizes of the per-file header triplet
FILE_HEADER1_SIZE = 80
FILE_HEADER2_SIZE = 48
FILE_TRAILER_SIZE = 128

# Main directory
DIRECTORY_CYLINDER = 1
DIR_ENTRY_SIZE = 11
DIR_NAME_LENGTH = 8
DIR_SENTINEL = -1
SEQUENCE_WRAP = 13  # sector sequence indicator that places the directory at sector 1

# Directory entry flags
FLAG_SYSTEM = 0x40

# Directory base sectors, keyed by physical record length
DIRECTORY_BASE_SECTORS = {
    128: 76,
    256: 71,
}

# File header back-scan
BACK_SCAN_ATTEMPTS = 4

# Month names used when rendering label dates
MONTH_NAMES = (
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
)
