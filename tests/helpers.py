"""Builders for synthetic tiles and puzzles."""

import numpy as np

from core.tiles import Orientation, Tile
from features.orientation import orient_bitmap


def make_tile(physical_id, top=0, left=0, bottom=0, right=0, edge_length=10, interior=None):
    """Tile with explicit border values."""
    inner = edge_length - 2
    if interior is None:
        interior = np.zeros((inner, inner), dtype=bool)
    return Tile(physical_id, edge_length, top, left, bottom, right, np.asarray(interior, dtype=bool))


def make_puzzle_pixels(width, edge_length=10, seed=0):
    """
    Random W x W grid of full tile pixel grids whose touching borders agree.

    Returns:
        List of rows, each a list of (E, E) bool arrays
    """
    rng = np.random.default_rng(seed)
    grid = []
    for r in range(width):
        row = []
        for c in range(width):
            pixels = rng.random((edge_length, edge_length)) < 0.5
            if r > 0:
                pixels[0, :] = grid[r - 1][c][-1, :]
            if c > 0:
                pixels[:, 0] = row[c - 1][:, -1]
            row.append(pixels)
        grid.append(row)
    return grid


def make_puzzle(width, edge_length=10, seed=0):
    """
    Shuffled, randomly oriented tiles of a solvable W x W puzzle.

    Returns:
        tiles: Tiles in shuffled order
        solution: Dict physical id -> (row, col) in the generated layout
    """
    rng = np.random.default_rng(seed + 1)
    grid = make_puzzle_pixels(width, edge_length, seed)

    cells = [(r, c) for r in range(width) for c in range(width)]
    order = rng.permutation(len(cells))

    tiles = []
    solution = {}
    for n, cell_idx in enumerate(order):
        r, c = cells[cell_idx]
        physical_id = 1000 + 7 * n
        orientation = Orientation(int(rng.integers(0, 8)))
        tiles.append(Tile.from_pixels(physical_id, orient_bitmap(grid[r][c], orientation)))
        solution[physical_id] = (r, c)
    return tiles, solution


def unmatchable_tiles(count, edge_length=10):
    """
    Tiles none of whose borders (in either reading direction) match another's.

    Every border has the top bit set and the lowest bit clear, so no
    reversed border can equal an unreversed one.
    """
    high = 1 << (edge_length - 1)
    tiles = []
    value = 1
    for n in range(count):
        borders = []
        for _ in range(4):
            borders.append(high | (value << 1))
            value += 1
        tiles.append(make_tile(n + 1, *borders, edge_length=edge_length))
    return tiles
