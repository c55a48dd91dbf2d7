"""Tile data model."""

import numpy as np
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence


class Orientation(IntEnum):
    """
    The 8 symmetries of a square (dihedral group of order 8).

    FLIP_ROTk means: flip horizontally, then rotate counter-clockwise k times.
    Member order is the order in which variants are produced.
    """
    IDENTITY = 0
    ROT90 = 1
    ROT180 = 2
    ROT270 = 3
    FLIP = 4
    FLIP_ROT90 = 5
    FLIP_ROT180 = 6
    FLIP_ROT270 = 7

    @classmethod
    def compose(cls, rotations: int, flipped: bool) -> 'Orientation':
        return cls(4 * int(flipped) + rotations % 4)

    @property
    def rotations(self) -> int:
        return self.value % 4

    @property
    def flipped(self) -> bool:
        return self.value >= 4

    def rotated(self) -> 'Orientation':
        """Orientation after one more counter-clockwise rotation."""
        return Orientation.compose(self.rotations + 1, self.flipped)

    def mirrored(self) -> 'Orientation':
        """Orientation after one more horizontal flip."""
        # flip * rot^k = rot^-k * flip
        return Orientation.compose(-self.rotations, not self.flipped)


def encode_border(pixels: Sequence[bool]) -> int:
    """
    Encode a row or column of border pixels as an integer.

    The first pixel becomes the most significant bit, so a border read
    left-to-right (or top-to-bottom) compares equal to its neighbour's
    border read in the same direction.
    """
    value = 0
    for pixel in pixels:
        value = (value << 1) | int(bool(pixel))
    return value


def decode_border(value: int, width: int) -> np.ndarray:
    """Inverse of encode_border for a border of `width` pixels."""
    return np.array([(value >> (width - 1 - i)) & 1 for i in range(width)], dtype=bool)


def freeze(array: np.ndarray) -> np.ndarray:
    """Return a read-only boolean copy of `array`."""
    frozen = np.array(array, dtype=bool, copy=True)
    frozen.flags.writeable = False
    return frozen


@dataclass(frozen=True, eq=False)
class Tile:
    """
    One square image fragment (or one of its 8 oriented variants).

    Attributes:
        physical_id: Id of the physical tile; shared by all its variants
        edge_length: Pixels per tile edge (E), borders included
        top: Top border, read left-to-right
        left: Left border, read top-to-bottom
        bottom: Bottom border, read left-to-right
        right: Right border, read top-to-bottom
        interior: (E-2) x (E-2) read-only pixel grid without the border
        orientation: Transform that produced this variant from the tile as read
    """
    physical_id: int
    edge_length: int
    top: int
    left: int
    bottom: int
    right: int
    interior: np.ndarray
    orientation: Orientation = Orientation.IDENTITY

    def __post_init__(self):
        inner = self.edge_length - 2
        if self.interior.shape != (inner, inner):
            raise ValueError(
                f"Tile {self.physical_id}: interior must be {inner}x{inner}, "
                f"got {self.interior.shape}"
            )
        limit = 1 << self.edge_length
        for name in ('top', 'left', 'bottom', 'right'):
            if not 0 <= getattr(self, name) < limit:
                raise ValueError(
                    f"Tile {self.physical_id}: {name} border does not fit in "
                    f"{self.edge_length} bits"
                )
        if self.interior.flags.writeable or self.interior.dtype != bool:
            object.__setattr__(self, 'interior', freeze(self.interior))

    @classmethod
    def from_pixels(cls, physical_id: int, pixels) -> 'Tile':
        """Create a tile from its full E x E pixel grid."""
        grid = np.asarray(pixels, dtype=bool)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Tile {physical_id}: pixel grid must be square, got {grid.shape}")
        if grid.shape[0] < 3:
            raise ValueError(f"Tile {physical_id}: edge length must be at least 3")

        return cls(
            physical_id=physical_id,
            edge_length=grid.shape[0],
            top=encode_border(grid[0, :]),
            left=encode_border(grid[:, 0]),
            bottom=encode_border(grid[-1, :]),
            right=encode_border(grid[:, -1]),
            interior=grid[1:-1, 1:-1],
        )

    @property
    def borders(self) -> tuple:
        """(top, left, bottom, right)"""
        return (self.top, self.left, self.bottom, self.right)

    def to_pixels(self) -> np.ndarray:
        """Rebuild the full E x E pixel grid (borders included)."""
        size = self.edge_length
        grid = np.zeros((size, size), dtype=bool)
        grid[1:-1, 1:-1] = self.interior
        grid[0, :] = decode_border(self.top, size)
        grid[-1, :] = decode_border(self.bottom, size)
        grid[:, 0] = decode_border(self.left, size)
        grid[:, -1] = decode_border(self.right, size)
        return grid

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return (self.physical_id == other.physical_id
                and self.edge_length == other.edge_length
                and self.borders == other.borders
                and self.orientation == other.orientation
                and np.array_equal(self.interior, other.interior))

    def __hash__(self):
        return hash((self.physical_id, self.edge_length, self.borders,
                     self.orientation, self.interior.tobytes()))

    def __repr__(self):
        return (f"Tile(id={self.physical_id}, {self.orientation.name}, "
                f"top={self.top:#x}, left={self.left:#x}, "
                f"bottom={self.bottom:#x}, right={self.right:#x})")
