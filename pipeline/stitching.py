"""Stitch a solved placement into one image."""

import numpy as np

from core.tiles import freeze
from solvers.assembler import TiledImage


def stitch(tiled: TiledImage) -> np.ndarray:
    """
    Compose the tile interiors into one bitmap.

    Interiors are already border-free; the interior of cell (row, col) lands
    at pixel offset (row * (E-2), col * (E-2)).

    Returns:
        Read-only bool image of shape (W*(E-2), W*(E-2))
    """
    inner = tiled.edge_length - 2
    size = tiled.width * inner
    output = np.zeros((size, size), dtype=bool)

    for r in range(tiled.width):
        for c in range(tiled.width):
            y1, y2 = r * inner, (r + 1) * inner
            x1, x2 = c * inner, (c + 1) * inner
            output[y1:y2, x1:x2] = tiled.cell(r, c).interior

    return freeze(output)


def corner_checksum(tiled: TiledImage) -> int:
    """Product of the physical ids of the four corner tiles."""
    product = 1
    for physical_id in tiled.corner_ids:
        product *= physical_id
    return product
