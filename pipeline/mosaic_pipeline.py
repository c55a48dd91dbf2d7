"""
Mosaic Pipeline

Orchestrates the full run:
1. Expand every tile into its 8 orientations
2. Index variants by border
3. Assemble the W x W placement (backtracking search)
4. Stitch tile interiors into one image
5. Scan the image for the motif and compute the roughness
"""

import logging
import time
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.config import DEFAULT_CONFIG, MosaicConfig
from core.parsing import load_tiles
from core.tiles import Orientation, Tile
from features.border_index import build_index
from features.motif import motif_mask, scan_orientations
from features.orientation import expand_all
from solvers.assembler import SearchStats, TiledImage, TileAssembler
from .roughness import best_orientation, compute_roughness
from .stitching import corner_checksum, stitch

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MosaicResult:
    """
    Everything one run produces.

    Attributes:
        tiled: Solved placement
        image: Stitched bool image
        checksum: Product of the corner tile ids
        counts: Motif matches per orientation
        orientation: Orientation with the most matches
        roughness: Active pixels not covered by the motif
        stats: Search counters of the assembler
    """
    tiled: TiledImage
    image: np.ndarray
    checksum: int
    counts: List[int]
    orientation: Orientation
    roughness: int
    stats: SearchStats

    def motif_mask(self, config: Optional[MosaicConfig] = None) -> np.ndarray:
        """Pixels covered by motif matches in the best orientation."""
        motif = (config or DEFAULT_CONFIG).motif()
        return motif_mask(self.image, motif.orientations()[self.orientation])


def solve_mosaic(tiles: Sequence[Tile], config: Optional[MosaicConfig] = None) -> MosaicResult:
    """
    Solve a mosaic from parsed tiles.

    Args:
        tiles: Physical tiles with unique ids and equal edge length
        config: Solver configuration (default: DEFAULT_CONFIG)

    Returns:
        MosaicResult

    Raises:
        ShapeError: If the tiles cannot form a square
        UnsatisfiableError: If no border-consistent placement exists
    """
    if config is None:
        config = DEFAULT_CONFIG
    verbose = config.verbose
    start_time = time.time()

    if verbose:
        print("=" * 60)
        print("Tile Mosaic Solver")
        print("=" * 60)
        print(f"Tiles: {len(tiles)}")

    # Orientations + border index
    if verbose:
        print("\n[1] Expanding orientations and indexing borders...")
    variants = expand_all(tiles)
    index = build_index(variants)
    if verbose:
        print(f"    {len(variants)} variants, {len(index.by_top)} distinct top borders")

    # Assembly
    if verbose:
        print("\n[2] Assembling (backtracking search)...")
    assembler = TileAssembler(variants, len(tiles), index)
    tiled = assembler.assemble()
    checksum = corner_checksum(tiled)
    if verbose:
        print(f"    Grid: {tiled.width}x{tiled.width}")
        print(f"    Placements: {assembler.stats.placements}, "
              f"backtracks: {assembler.stats.backtracks}")
        print(f"    Corner checksum: {checksum}")

    # Stitching + motif scan
    if verbose:
        print("\n[3] Stitching and scanning for motif...")
    image = stitch(tiled)
    motif = config.motif()
    counts = scan_orientations(image, motif)
    orientation = best_orientation(counts)
    roughness = compute_roughness(image, counts, motif)
    if verbose:
        print(f"    Image: {image.shape[1]}x{image.shape[0]}")
        print(f"    {motif.name}: {max(counts)} found ({orientation.name})")
        print(f"    Roughness: {roughness}")

    logger.info("Solved %d tiles in %.2fs: checksum=%d roughness=%d",
                len(tiles), time.time() - start_time, checksum, roughness)

    return MosaicResult(
        tiled=tiled,
        image=image,
        checksum=checksum,
        counts=counts,
        orientation=orientation,
        roughness=roughness,
        stats=assembler.stats,
    )


def solve_file(tile_path: str, output_path: Optional[str] = None,
               config: Optional[MosaicConfig] = None) -> MosaicResult:
    """
    Complete pipeline: load tiles -> solve -> optionally save the image.

    Args:
        tile_path: Path to the tile text file
        output_path: Optional PNG path for the stitched image (motif highlighted)
        config: Solver configuration

    Returns:
        MosaicResult
    """
    if config is None:
        config = DEFAULT_CONFIG

    tiles = load_tiles(tile_path, config.tile_size, config.active_char, config.inactive_char)
    if config.verbose:
        print(f"Loaded: {tile_path}")

    result = solve_mosaic(tiles, config)

    if output_path:
        from visualization.display import save_image
        save_image(result.image, output_path, mask=result.motif_mask(config))
        if config.verbose:
            print(f"\nSaved: {output_path}")

    return result
