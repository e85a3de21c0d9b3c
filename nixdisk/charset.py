"""
Character set conversion for Nixdorf 8820 label and text fields.

The media uses an EBCDIC variant. Every byte maps to exactly one display
character; positions without a glyph map to PLACEHOLDER, so conversion
never fails.
"""

PLACEHOLDER = "·"

_ = PLACEHOLDER

#   0   1   2   3   4   5       6   7       8   9   A   B   C   D       E   F
_CONTROL_ROWS = (
    "\x00" + _ * 4 + "\x08" + _ + "\x7f" + _ * 5 + "\r" + _ * 2,    # 0x00
    _ * 5 + "\n" + "\x08" + _ * 9,                                  # 0x10
    _ * 5 + "\n" + _ + "\x1b" + _ * 7 + "\x07",                     # 0x20
    _ * 16,                                                         # 0x30
)

_TEXT_ROWS = (
    " " + _ * 9 + "¢.<(+|",         # 0x40
    "&" + _ * 9 + "!$*);¬",         # 0x50
    "-/" + _ * 8 + "|,%_>?",        # 0x60
    _ * 9 + "`:#@'=\"",             # 0x70
    _ + "abcdefghi" + _ * 5 + "±",  # 0x80
    _ + "jklmnopqr" + _ * 6,        # 0x90
    _ + "~stuvwxyz" + _ * 6,        # 0xA0
    "^" + _ * 9 + "[]" + _ * 4,     # 0xB0
    "{ABCDEFGHI" + _ * 6,           # 0xC0
    "}JKLMNOPQR" + _ * 6,           # 0xD0
    "\\ÜSTUVWXYZ" + _ * 6,          # 0xE0
    "0123456789" + _ * 6,           # 0xF0
)

del _

TABLE = "".join(_CONTROL_ROWS + _TEXT_ROWS)

_TRANSLATION = {code: char for code, char in enumerate(TABLE)}


def convert(data: bytes) -> str:
    """Convert media bytes to display text."""
    return bytes(data).decode('latin-1').translate(_TRANSLATION)
