"""Solver configuration."""

from dataclasses import dataclass
from typing import Tuple


SEA_MONSTER_LINES = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)


@dataclass
class MosaicConfig:
    """All configurable parameters."""
    # Pixels per tile edge, borders included
    tile_size: int = 10

    # Motif searched for in the stitched image
    motif_name: str = "sea monster"
    motif_lines: Tuple[str, ...] = SEA_MONSTER_LINES

    # Pixel characters of the tile text format
    active_char: str = "#"
    inactive_char: str = "."

    verbose: bool = True

    def __post_init__(self):
        if self.tile_size < 3:
            raise ValueError(f"tile_size must be at least 3, got {self.tile_size}")
        if len(self.active_char) != 1 or len(self.inactive_char) != 1:
            raise ValueError("Pixel characters must be single characters")
        if self.active_char == self.inactive_char:
            raise ValueError("Active and inactive pixel characters must differ")
        if not self.motif_lines:
            raise ValueError("Motif needs at least one row")

    def motif(self):
        """Build the configured Motif."""
        from features.motif import Motif
        return Motif.from_lines(self.motif_name, self.motif_lines)


DEFAULT_CONFIG = MosaicConfig()
