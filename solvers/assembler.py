"""
Mosaic Assembler - indexed backtracking search.

Fills a W x W grid in row-major order. Each cell after the first takes
candidates from the border index:
- start of a row:      top border == bottom border of the cell above
- rest of first row:   left border == right border of the cell to the left
- any other cell:      both of the above

A physical tile is used at most once. Every candidate of a bucket is tried
and a branch only commits on a full placement, so ambiguous borders cost
backtracking, not correctness. The first complete placement is returned.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from core.errors import ShapeError, UnsatisfiableError
from core.tiles import Tile
from features.border_index import BorderIndex, build_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TiledImage:
    """
    A solved placement.

    Attributes:
        tiles: W*W variants in row-major order
        width: Cells per row (W)
    """
    tiles: Tuple[Tile, ...]
    width: int

    def __post_init__(self):
        if len(self.tiles) != self.width * self.width:
            raise ValueError(
                f"Placement of width {self.width} needs {self.width * self.width} tiles, "
                f"got {len(self.tiles)}"
            )

    def cell(self, row: int, col: int) -> Tile:
        return self.tiles[row * self.width + col]

    @property
    def edge_length(self) -> int:
        return self.tiles[0].edge_length if self.tiles else 0

    @property
    def arrangement(self) -> List[int]:
        """Physical ids in row-major order."""
        return [tile.physical_id for tile in self.tiles]

    @property
    def corner_ids(self) -> List[int]:
        """Physical ids at the four corners (top-left, top-right, bottom-left, bottom-right)."""
        w = self.width
        return [self.tiles[i].physical_id for i in (0, w - 1, w * (w - 1), w * w - 1)]

    def to_board(self) -> Dict[Tuple[int, int], int]:
        """Convert to board dict format: (row, col) -> physical id."""
        return {(r, c): self.cell(r, c).physical_id
                for r in range(self.width) for c in range(self.width)}


@dataclass
class SearchStats:
    """Counters of one search."""
    placements: int = 0   # variants pushed onto the placement
    backtracks: int = 0   # variants popped again
    max_depth: int = 0


def grid_width(physical_tile_count: int) -> int:
    """Side length of the square grid holding `physical_tile_count` tiles."""
    if physical_tile_count <= 0:
        raise ShapeError(f"Cannot order {physical_tile_count} tiles into a square")
    width = math.isqrt(physical_tile_count)
    if width * width != physical_tile_count:
        raise ShapeError(
            f"Cannot order {physical_tile_count} tiles into a square: "
            f"{physical_tile_count} is not a perfect square"
        )
    return width


class TileAssembler:
    """
    Backtracking assembler over tile variants.

    The scratch state (`placed`, `used_ids`) belongs to one call of
    assemble(); each failed branch undoes exactly its own push.
    """

    def __init__(self, variants: Sequence[Tile], physical_tile_count: int,
                 index: Optional[BorderIndex] = None):
        self.width = grid_width(physical_tile_count)
        self.variants = list(variants)

        edge_lengths = {variant.edge_length for variant in self.variants}
        if len(edge_lengths) > 1:
            raise ShapeError(f"Tiles have mixed edge lengths: {sorted(edge_lengths)}")

        self.index = index if index is not None else build_index(self.variants)
        self.stats = SearchStats()

        self._placed: List[Tile] = []
        self._used_ids = set()

    # ------------------------------------------------------------------
    # scratch stack
    # ------------------------------------------------------------------

    def _push(self, variant: Tile):
        self._placed.append(variant)
        self._used_ids.add(variant.physical_id)
        self.stats.placements += 1
        self.stats.max_depth = max(self.stats.max_depth, len(self._placed))

    def _undo(self):
        variant = self._placed.pop()
        self._used_ids.remove(variant.physical_id)
        self.stats.backtracks += 1

    def _candidates(self) -> Sequence[Tile]:
        """Index bucket for the next free cell."""
        i = len(self._placed)
        w = self.width
        if i % w == 0:
            return self.index.with_top(self._placed[i - w].bottom)
        if i < w:
            return self.index.with_left(self._placed[i - 1].right)
        return self.index.with_top_left(self._placed[i - w].bottom, self._placed[i - 1].right)

    def _next_unused(self, candidates: Iterator[Tile]) -> Optional[Tile]:
        for candidate in candidates:
            if candidate.physical_id not in self._used_ids:
                return candidate
        return None

    # ------------------------------------------------------------------
    # search
    # ------------------------------------------------------------------

    def assemble(self) -> TiledImage:
        """
        Run the search.

        Returns:
            The first complete, border-consistent placement

        Raises:
            UnsatisfiableError: If no seed leads to a full placement
        """
        total = self.width * self.width
        self._placed = []
        self._used_ids = set()
        self.stats = SearchStats()

        # One candidate iterator per filled cell plus one for the next cell;
        # the bottom iterator yields seeds (any variant may be the top-left cell).
        frames: List[Iterator[Tile]] = [iter(self.variants)]

        while frames:
            candidate = self._next_unused(frames[-1])
            if candidate is None:
                frames.pop()
                if self._placed:
                    self._undo()
                continue

            self._push(candidate)
            if len(self._placed) == total:
                logger.debug(
                    "Solved %dx%d grid: %d placements, %d backtracks",
                    self.width, self.width, self.stats.placements, self.stats.backtracks
                )
                placed = tuple(self._placed)
                self._placed = []
                self._used_ids = set()
                return TiledImage(placed, self.width)

            frames.append(iter(self._candidates()))

        logger.debug(
            "Search exhausted: %d placements, %d backtracks, max depth %d",
            self.stats.placements, self.stats.backtracks, self.stats.max_depth
        )
        raise UnsatisfiableError(
            f"Unable to find a valid tile pattern for a {self.width}x{self.width} grid",
            stats=self.stats
        )


def assemble(variants: Sequence[Tile], physical_tile_count: int,
             index: Optional[BorderIndex] = None) -> TiledImage:
    """
    Assemble variants into a square placement.

    Args:
        variants: All oriented variants (usually expand_all(tiles))
        physical_tile_count: Number of physical tiles (N)
        index: Prebuilt border index (built from variants if omitted)

    Raises:
        ShapeError: If N is not a positive perfect square
        UnsatisfiableError: If no valid placement exists
    """
    return TileAssembler(variants, physical_tile_count, index).assemble()


def is_consistent(tiled: TiledImage) -> bool:
    """Check border equality of all adjacent cells and uniqueness of physical ids."""
    ids = tiled.arrangement
    if len(set(ids)) != len(ids):
        return False

    w = tiled.width
    for r in range(w):
        for c in range(w):
            tile = tiled.cell(r, c)
            if c + 1 < w and tile.right != tiled.cell(r, c + 1).left:
                return False
            if r + 1 < w and tile.bottom != tiled.cell(r + 1, c).top:
                return False
    return True
