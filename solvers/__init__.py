"""
Mosaic solver.

Usage:
    from features import expand_all
    from solvers import assemble

    variants = expand_all(tiles)
    tiled = assemble(variants, len(tiles))
"""
from .assembler import (
    TiledImage,
    TileAssembler,
    SearchStats,
    assemble,
    grid_width,
    is_consistent
)
