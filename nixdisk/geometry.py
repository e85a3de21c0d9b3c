"""
Cylinder/side/sector addressing for Nixdorf 8820 floppy disk images.
"""

from dataclasses import dataclass

from .constants import SECTOR_SIZE, SECTORS_PER_TRACK


@dataclass(frozen=True)
class GeometryAddress:
    """A physical sector position. Sectors count from 1 (ECMA-58)."""
    cylinder: int
    side: int
    sector: int

    def offset(self, sector_size: int = SECTOR_SIZE) -> int:
        """Absolute byte offset of this sector in the image."""
        return address(self.cylinder, self.side, self.sector, sector_size)

    def __str__(self) -> str:
        return f"Cyl {self.cylinder}, Side {self.side}, Sector {self.sector}"


def address(cylinder: int, side: int, sector: int, sector_size: int = SECTOR_SIZE) -> int:
    """
    Convert (cylinder, side, sector) to a byte offset.

    Side 1 doubles the cylinder contribution instead of adding one track.
    Images written on the 8820 are laid out this way.
    Out-of-range values are not rejected.
    """
    return ((cylinder * (side + 1)) * SECTORS_PER_TRACK + sector - 1) * sector_size


def to_offset(position, sector_size: int = SECTOR_SIZE) -> int:
    """
    Resolve a seek target to a byte offset.

    Accepts a raw integer offset, a GeometryAddress or a
    (cylinder, side, sector) tuple.
    """
    if isinstance(position, bool):
        raise TypeError(f"Unknown seek value {position!r}")
    if isinstance(position, int):
        return position
    if isinstance(position, GeometryAddress):
        return position.offset(sector_size)
    if isinstance(position, tuple) and len(position) == 3:
        return address(*position, sector_size=sector_size)
    raise TypeError(f"Unknown seek value {position!r}")
