"""
Pipeline orchestration modules.

1. solve_mosaic() - expand, index, assemble, stitch, scan
2. stitch() / corner_checksum() - image composition
3. scan() - motif search and roughness
"""
from .stitching import stitch, corner_checksum
from .roughness import scan, compute_roughness, best_orientation
from .mosaic_pipeline import MosaicResult, solve_mosaic, solve_file
