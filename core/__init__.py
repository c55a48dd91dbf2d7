"""Data model, configuration and ingestion."""
from .tiles import Tile, Orientation, encode_border
from .errors import MosaicError, ShapeError, UnsatisfiableError, TileParseError
from .config import MosaicConfig, DEFAULT_CONFIG
from .parsing import parse_tiles, load_tiles
