"""Exceptions raised by the mosaic solver."""

from typing import Optional


class MosaicError(Exception):
    """Base class for all mosaic solving failures."""


class ShapeError(MosaicError, ValueError):
    """Tiles cannot be laid out as a square grid."""


class UnsatisfiableError(MosaicError, RuntimeError):
    """
    The search exhausted every candidate without a full placement.

    Attributes:
        stats: SearchStats of the failed search (None if not available)
    """

    def __init__(self, message: str, stats=None):
        super().__init__(message)
        self.stats = stats


class TileParseError(MosaicError, ValueError):
    """A tile block in the text input is malformed."""

    def __init__(self, message: str, block_number: Optional[int] = None):
        if block_number is not None:
            message = f"Tile block {block_number}: {message}"
        super().__init__(message)
        self.block_number = block_number
