"""Text ingestion of tile blocks."""

import logging
import re
from pathlib import Path
from typing import List

from .errors import TileParseError
from .tiles import Tile

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^Tile\s+(\S+?):?$")
ID_PATTERN = re.compile(r"[0-9]+")


def parse_tile(block: str, tile_size: int = 10, block_number: int = 1,
               active_char: str = "#", inactive_char: str = ".") -> Tile:
    """
    Parse one tile block.

    Format:
        Tile 2311:
        ..##.#..#.
        ##..#.....
        ...

    Args:
        block: Header line followed by tile_size rows of tile_size pixels
        tile_size: Expected edge length (E)
        block_number: 1-based position of the block, for error messages
        active_char: Character of an active pixel
        inactive_char: Character of an inactive pixel

    Returns:
        Tile in its original orientation

    Raises:
        TileParseError: If the header or the pixel grid is malformed
    """
    lines = [line.strip() for line in block.strip().splitlines()]
    if not lines:
        raise TileParseError("empty block", block_number)

    match = HEADER_PATTERN.match(lines[0])
    if match is None:
        raise TileParseError(f"expected 'Tile <id>:' header, got {lines[0]!r}", block_number)
    # Unsigned decimal only: int() would also take signs and underscores
    if ID_PATTERN.fullmatch(match.group(1)) is None:
        raise TileParseError(f"tile id {match.group(1)!r} is not an integer", block_number)
    physical_id = int(match.group(1))

    pixel_chars = "".join(lines[1:])
    if len(pixel_chars) != tile_size * tile_size:
        raise TileParseError(
            f"expected tile {physical_id} to contain {tile_size * tile_size} pixels "
            f"but was {len(pixel_chars)}",
            block_number
        )
    unknown = set(pixel_chars) - {active_char, inactive_char}
    if unknown:
        raise TileParseError(
            f"tile {physical_id} contains unknown pixel characters {sorted(unknown)}",
            block_number
        )
    rows = lines[1:]
    if len(rows) != tile_size or any(len(row) != tile_size for row in rows):
        raise TileParseError(
            f"tile {physical_id} must have {tile_size} rows of {tile_size} pixels",
            block_number
        )

    pixels = [[ch == active_char for ch in row] for row in rows]
    return Tile.from_pixels(physical_id, pixels)


def parse_tiles(text: str, tile_size: int = 10,
                active_char: str = "#", inactive_char: str = ".") -> List[Tile]:
    """
    Parse all tile blocks of a puzzle input.

    Blocks are separated by one or more blank lines.

    Raises:
        TileParseError: On a malformed block or a duplicate tile id
    """
    blocks = [b for b in re.split(r"\n\s*\n", text.replace("\r\n", "\n")) if b.strip()]

    tiles = []
    seen = set()
    for number, block in enumerate(blocks, start=1):
        tile = parse_tile(block, tile_size, number, active_char, inactive_char)
        if tile.physical_id in seen:
            raise TileParseError(f"duplicate tile id {tile.physical_id}", number)
        seen.add(tile.physical_id)
        tiles.append(tile)

    logger.debug("Parsed %d tiles of size %dx%d", len(tiles), tile_size, tile_size)
    return tiles


def load_tiles(file_path, tile_size: int = 10,
               active_char: str = "#", inactive_char: str = ".") -> List[Tile]:
    """
    Load and parse a tile file.

    Raises:
        FileNotFoundError: If the file does not exist
        IsADirectoryError: If the path is a directory
        TileParseError: If the file is not UTF-8 text or a block is malformed
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Tile file not found: {file_path}")
    if path.is_dir():
        raise IsADirectoryError(f"Tile path is a directory: {file_path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TileParseError(f"{file_path} is not UTF-8 text ({e.reason} at byte {e.start})") from e
    return parse_tiles(text, tile_size, active_char, inactive_char)
