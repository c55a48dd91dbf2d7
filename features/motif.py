"""
Motif search in the stitched image.

A motif is a small bitmap; its active cells must all land on active image
pixels for a match. Matches are counted per orientation with a sliding
window, overlapping matches included.
"""

import logging
import cv2
import numpy as np
from dataclasses import dataclass
from scipy.signal import convolve2d
from typing import List, Sequence

from core.config import SEA_MONSTER_LINES
from core.tiles import freeze
from .orientation import bitmap_orientations

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Motif:
    """
    Named bitmap searched for in the image.

    Attributes:
        name: Display name
        pattern: Read-only bool bitmap; True cells must be active
    """
    name: str
    pattern: np.ndarray

    def __post_init__(self):
        if self.pattern.ndim != 2 or 0 in self.pattern.shape:
            raise ValueError(f"Motif '{self.name}' must be a non-empty 2-D bitmap")
        object.__setattr__(self, 'pattern', freeze(self.pattern))

    @classmethod
    def from_lines(cls, name: str, lines: Sequence[str], active_char: str = "#") -> 'Motif':
        """Build a motif from text rows; short rows are padded with inactive cells."""
        width = max((len(line) for line in lines), default=0)
        pattern = np.zeros((len(lines), width), dtype=bool)
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                pattern[r, c] = ch == active_char
        return cls(name, pattern)

    @property
    def active_count(self) -> int:
        """Number of "must be active" cells."""
        return int(np.count_nonzero(self.pattern))

    def orientations(self) -> List[np.ndarray]:
        """The 8 oriented patterns, in Orientation order."""
        return bitmap_orientations(self.pattern)


SEA_MONSTER = Motif.from_lines("sea monster", SEA_MONSTER_LINES)


def _match_map(image: np.ndarray, pattern: np.ndarray) -> np.ndarray:
    """
    Bool map of anchors (r, c) where `pattern` matches.

    Shape is (H - h + 1, W - w + 1); empty if the pattern does not fit.
    """
    img_h, img_w = image.shape
    pat_h, pat_w = pattern.shape
    if pat_h > img_h or pat_w > img_w:
        return np.zeros((0, 0), dtype=bool)

    active = int(np.count_nonzero(pattern))
    if active == 0:
        return np.ones((img_h - pat_h + 1, img_w - pat_w + 1), dtype=bool)

    # Cross-correlation counts the active image pixels under the active cells
    hits = cv2.matchTemplate(image.astype(np.float32), pattern.astype(np.float32), cv2.TM_CCORR)
    return hits > active - 0.5


def count_matches(image: np.ndarray, pattern: np.ndarray) -> int:
    """Count anchors where every active pattern cell hits an active pixel."""
    return int(np.count_nonzero(_match_map(image, pattern)))


def scan_orientations(image: np.ndarray, motif: Motif) -> List[int]:
    """Match count of the motif for each of its 8 orientations."""
    counts = [count_matches(image, pattern) for pattern in motif.orientations()]
    logger.debug("Motif '%s' matches per orientation: %s", motif.name, counts)
    return counts


def motif_mask(image: np.ndarray, pattern: np.ndarray) -> np.ndarray:
    """Bool mask of image pixels covered by the active cells of any match."""
    hits = _match_map(image, pattern)
    if hits.size == 0:
        return np.zeros(image.shape, dtype=bool)
    covered = convolve2d(hits.astype(np.int32), pattern.astype(np.int32), mode='full')
    return covered > 0
