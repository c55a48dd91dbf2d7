"""Roughness of the stitched image."""

import logging
import numpy as np
from typing import Optional, Sequence

from core.tiles import Orientation
from features.motif import Motif, SEA_MONSTER, scan_orientations

logger = logging.getLogger(__name__)


def best_orientation(counts: Sequence[int]) -> Orientation:
    """First orientation with the highest match count."""
    if len(counts) != len(Orientation):
        raise ValueError(f"Expected {len(Orientation)} counts, got {len(counts)}")
    return Orientation(int(np.argmax(counts)))


def compute_roughness(image: np.ndarray, counts: Sequence[int], motif: Motif) -> int:
    """
    Active pixels not attributed to the motif.

    Only the best orientation counts: a correctly stitched image shows the
    motif in one orientation. Occurrences are assumed not to overlap.
    """
    match_count = max(counts) if len(counts) else 0
    return int(np.count_nonzero(image)) - match_count * motif.active_count


def scan(image: np.ndarray, motif: Optional[Motif] = None) -> int:
    """Scan all motif orientations and return the roughness."""
    if motif is None:
        motif = SEA_MONSTER
    counts = scan_orientations(image, motif)
    roughness = compute_roughness(image, counts, motif)
    logger.info("Found %d x '%s' (%s), roughness %d",
                max(counts), motif.name, best_orientation(counts).name, roughness)
    return roughness
