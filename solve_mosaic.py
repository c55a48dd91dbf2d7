#!/usr/bin/env python
"""
Tile Mosaic Solver

Usage:
    python solve_mosaic.py <tiles_path> [--output <output_path>] [--tile-size <E>]

Examples:
    python solve_mosaic.py tests/data/example_tiles.txt
    python solve_mosaic.py input.txt --output "./debug/mosaic.png" --display

Pipeline:
    Expand tile orientations -> index borders -> backtracking assembly
    -> stitch interiors -> motif scan -> roughness
"""

import argparse
import os
import sys

from core.config import MosaicConfig
from core.errors import MosaicError
from core.logging_config import setup_logging
from pipeline import solve_file


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Border-matching tile mosaic solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output:
  - Corner checksum: product of the ids of the four corner tiles
  - Roughness: active pixels not part of any sea monster
        """
    )
    parser.add_argument("tiles_path", help="Path to the tile text file")
    parser.add_argument("--output", "-o", help="Output path for the stitched image (PNG)")
    parser.add_argument("--tile-size", "-t", type=int, default=10,
                        help="Pixels per tile edge, borders included (default: 10)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress progress output")
    parser.add_argument("--display", action="store_true", help="Display the stitched image")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: WARNING)")

    args = parser.parse_args(argv)

    if not os.path.exists(args.tiles_path):
        print(f"Error: Tile file not found: {args.tiles_path}", file=sys.stderr)
        return 1

    setup_logging(args.log_level)

    try:
        config = MosaicConfig(tile_size=args.tile_size, verbose=not args.quiet)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = solve_file(args.tiles_path, output_path=args.output, config=config)
    except (MosaicError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Product of the corners of the solved puzzle: {result.checksum}")
    print(f"The water roughness value is {result.roughness}")

    if args.display:
        from visualization import display_mosaic
        display_mosaic(result.image, mask=result.motif_mask(config), roughness=result.roughness)

    return 0


if __name__ == "__main__":
    sys.exit(main())
