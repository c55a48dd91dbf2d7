"""Orientation, border indexing and motif features."""
from .orientation import (
    reverse_bits,
    rotate90ccw,
    flip_horizontal,
    expand,
    expand_all,
    orient_bitmap,
    bitmap_orientations
)
from .border_index import BorderIndex, build_index
from .motif import Motif, SEA_MONSTER, count_matches, scan_orientations, motif_mask
