import pytest

from core.errors import TileParseError
from core.parsing import load_tiles, parse_tile, parse_tiles

SMALL_TILE = """Tile 12:
#..
.#.
..#
"""


def test_parse_example(example_tiles):
    assert len(example_tiles) == 9
    assert [t.physical_id for t in example_tiles] == [
        2311, 1951, 1171, 1427, 1489, 2473, 2971, 2729, 3079
    ]
    assert all(t.edge_length == 10 for t in example_tiles)


def test_load_tiles(example_path):
    assert len(load_tiles(example_path)) == 9


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tiles(tmp_path / "missing.txt")


def test_parse_small_tile():
    tile = parse_tile(SMALL_TILE, tile_size=3)
    assert tile.physical_id == 12
    assert tile.top == 0b100
    assert tile.left == 0b100
    assert tile.bottom == 0b001
    assert tile.right == 0b001
    assert tile.interior.tolist() == [[True]]


def test_windows_line_endings_and_extra_blank_lines():
    text = SMALL_TILE.replace("12", "1") + "\n\n\n" + SMALL_TILE.replace("12", "2")
    tiles = parse_tiles(text.replace("\n", "\r\n"), tile_size=3)
    assert [t.physical_id for t in tiles] == [1, 2]


def test_custom_pixel_characters():
    tile = parse_tile("Tile 3:\nXoo\noXo\nooX", tile_size=3, active_char="X", inactive_char="o")
    assert tile.top == 0b100


@pytest.mark.parametrize("block,message", [
    ("Tile abc:\n#..\n.#.\n..#", "not an integer"),
    ("Tile -5:\n#..\n.#.\n..#", "not an integer"),
    ("Tile +5:\n#..\n.#.\n..#", "not an integer"),
    ("Tile 1_0:\n#..\n.#.\n..#", "not an integer"),
    ("Tiles 1:\n#..\n.#.\n..#", "header"),
    ("Tile 1:\n#..\n.#.", "pixels"),
    ("Tile 1:\n#..\n.#.\n..#.", "pixels"),
    ("Tile 1:\n#..\n.x.\n..#", "unknown pixel"),
    ("Tile 1:\n#...\n.#\n..#", "rows"),
])
def test_malformed_blocks(block, message):
    with pytest.raises(TileParseError, match=message):
        parse_tile(block, tile_size=3)


def test_duplicate_ids_rejected():
    with pytest.raises(TileParseError, match="duplicate") as excinfo:
        parse_tiles(SMALL_TILE + "\n" + SMALL_TILE, tile_size=3)
    assert excinfo.value.block_number == 2


def test_error_names_block_number():
    text = SMALL_TILE + "\nTile 13:\n###\n"
    with pytest.raises(TileParseError, match="Tile block 2"):
        parse_tiles(text, tile_size=3)


def test_load_directory_rejected(tmp_path):
    with pytest.raises(IsADirectoryError):
        load_tiles(tmp_path)


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "tiles.txt"
    path.write_bytes(b"Tile 1:\n\xff\n")
    with pytest.raises(TileParseError, match="not UTF-8"):
        load_tiles(path, tile_size=3)
