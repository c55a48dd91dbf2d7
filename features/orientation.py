"""
Orientation expansion.

Every tile may appear rotated and/or mirrored in the solved mosaic, so each
physical tile is expanded into its 8 variants (4 rotations x optional flip).
The same transforms act on bare bitmaps for the motif search.

Border transforms (E = edge length):
    rotate90ccw:     top' = right            left' = reverse(top)
                     bottom' = left          right' = reverse(bottom)
    flip_horizontal: top' = reverse(top)     left' = right
                     bottom' = reverse(bottom)  right' = left
"""

import numpy as np
from dataclasses import replace
from typing import Iterable, List

from core.tiles import Orientation, Tile, freeze


def reverse_bits(value: int, width: int) -> int:
    """Reverse the order of the lowest `width` bits of `value`."""
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def rotate90ccw(tile: Tile) -> Tile:
    """Rotate a tile 90 degrees counter-clockwise."""
    width = tile.edge_length
    return replace(
        tile,
        top=tile.right,
        left=reverse_bits(tile.top, width),
        bottom=tile.left,
        right=reverse_bits(tile.bottom, width),
        interior=freeze(np.rot90(tile.interior)),
        orientation=tile.orientation.rotated(),
    )


def flip_horizontal(tile: Tile) -> Tile:
    """Mirror a tile left-right."""
    width = tile.edge_length
    return replace(
        tile,
        top=reverse_bits(tile.top, width),
        left=tile.right,
        bottom=reverse_bits(tile.bottom, width),
        right=tile.left,
        interior=freeze(np.fliplr(tile.interior)),
        orientation=tile.orientation.mirrored(),
    )


def expand(tile: Tile) -> List[Tile]:
    """
    All 8 variants of a tile, in Orientation order.

    Returns:
        [tile, rot90, rot180, rot270, flip, flip+rot90, flip+rot180, flip+rot270]
    """
    variants = [tile]
    for _ in range(3):
        variants.append(rotate90ccw(variants[-1]))

    flipped = flip_horizontal(tile)
    variants.append(flipped)
    for _ in range(3):
        variants.append(rotate90ccw(variants[-1]))

    return variants


def expand_all(tiles: Iterable[Tile]) -> List[Tile]:
    """Variants of every tile, 8 per tile, keeping input order."""
    variants = []
    for tile in tiles:
        variants.extend(expand(tile))
    return variants


def orient_bitmap(bitmap: np.ndarray, orientation: Orientation) -> np.ndarray:
    """Apply an orientation to a bitmap (flip first, then rotate)."""
    result = np.asarray(bitmap, dtype=bool)
    if orientation.flipped:
        result = np.fliplr(result)
    return freeze(np.rot90(result, k=orientation.rotations))


def bitmap_orientations(bitmap: np.ndarray) -> List[np.ndarray]:
    """The 8 oriented copies of a bitmap, in Orientation order."""
    return [orient_bitmap(bitmap, orientation) for orientation in Orientation]
