"""
Legacy text file filter.

Text files extracted from Nixdorf disks are stored as records: a 3-byte
record head followed by the line. Runs of spaces are compressed into a
single byte 0x80 + n. A head whose third byte is 0x1F ends the file.
"""

from typing import BinaryIO

EOF_MARK = 0x1F
SPACE_BASE = 0x80
LINE_END = 0xC8
SPACE_LIMIT = 0x89
HEAD_SIZE = 3


def textcopy(data: bytes) -> bytes:
    """Convert a record-structured text file to plain text with newlines."""
    out = bytearray()
    pos = 0
    size = len(data)

    while pos + HEAD_SIZE <= size:
        head = data[pos:pos + HEAD_SIZE]
        pos += HEAD_SIZE
        if head[2] == EOF_MARK:
            break

        column = 0
        while True:
            if pos >= size:
                return bytes(out)
            c = data[pos]
            pos += 1

            if 0x20 <= c < 0x7F:
                out.append(c)
                column += 1
            elif c == 0x00:
                # The zero byte belongs to the next record head
                pos -= 1
                out += b'\n'
                break
            elif column == 0:
                if c < LINE_END:
                    spaces = max(c - SPACE_BASE, 0)
                    out += b' ' * spaces
                    column += spaces
                elif c == LINE_END:
                    out += b'\n'
                    break
                else:
                    out += f"[{c:02x}]".encode('ascii')
            elif c < SPACE_LIMIT:
                spaces = max(c - SPACE_BASE, 0)
                out += b' ' * spaces
                column += spaces
            else:
                out += b'\n'
                break

    return bytes(out)


def textcopy_stream(source: BinaryIO, destination: BinaryIO) -> int:
    """Filter source into destination. Returns the number of bytes written."""
    text = textcopy(source.read())
    destination.write(text)
    return len(text)
