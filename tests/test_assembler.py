import pytest

from core.errors import ShapeError, UnsatisfiableError
from features.orientation import expand_all
from pipeline.stitching import corner_checksum
from solvers.assembler import TileAssembler, TiledImage, assemble, grid_width, is_consistent
from helpers import make_puzzle, make_tile, unmatchable_tiles


def test_grid_width():
    assert grid_width(1) == 1
    assert grid_width(9) == 3
    assert grid_width(144) == 12


@pytest.mark.parametrize("count", [0, 2, 10, 143])
def test_grid_width_rejects_non_squares(count):
    with pytest.raises(ShapeError):
        grid_width(count)


def test_solves_example(example_tiles):
    tiled = assemble(expand_all(example_tiles), len(example_tiles))

    assert tiled.width == 3
    assert len(tiled.tiles) == 9
    assert is_consistent(tiled)
    assert sorted(tiled.arrangement) == sorted(t.physical_id for t in example_tiles)
    assert corner_checksum(tiled) == 20899048083289


def test_example_needs_little_backtracking(example_tiles):
    variants = expand_all(example_tiles)
    assembler = TileAssembler(variants, len(example_tiles))
    assembler.assemble()

    # Unique borders: each seed follows a single path of at most W*W cells
    assert assembler.stats.max_depth == 9
    assert assembler.stats.placements <= len(variants) * len(example_tiles)
    assert assembler.stats.placements - assembler.stats.backtracks == 9


def test_solution_is_deterministic(example_tiles):
    first = assemble(expand_all(example_tiles), 9)
    second = assemble(expand_all(example_tiles), 9)
    assert first == second


def test_ten_tiles_raise_shape_error(example_tiles):
    tiles = example_tiles + [make_tile(9999)]
    with pytest.raises(ShapeError):
        assemble(expand_all(tiles), len(tiles))


def test_mixed_edge_lengths_raise_shape_error():
    tiles = [make_tile(1), make_tile(2), make_tile(3), make_tile(4, edge_length=6)]
    with pytest.raises(ShapeError):
        assemble(expand_all(tiles), 4)


def test_single_tile_is_its_own_solution():
    tile = make_tile(17, top=3, left=5)
    tiled = assemble(expand_all([tile]), 1)
    assert tiled.width == 1
    assert tiled.tiles[0] == tile


def test_unsatisfiable_set_exhausts_search():
    tiles = unmatchable_tiles(4)
    variants = expand_all(tiles)
    assembler = TileAssembler(variants, len(tiles))

    with pytest.raises(UnsatisfiableError) as excinfo:
        assembler.assemble()

    # Every seed is tried once and nothing extends it
    assert assembler.stats.placements == len(variants)
    assert assembler.stats.backtracks == len(variants)
    assert excinfo.value.stats is assembler.stats


def test_missing_tile_is_unsatisfiable():
    tiles, _ = make_puzzle(3, edge_length=16, seed=5)
    tiles = tiles[:-1] + unmatchable_tiles(1, edge_length=16)
    variants = expand_all(tiles)

    with pytest.raises(UnsatisfiableError) as excinfo:
        assemble(variants, len(tiles))

    stats = excinfo.value.stats
    # Seeds grow partial grids before the missing tile stops them
    assert stats.max_depth > 1
    # Unique borders: every seed follows one path of at most W*W cells
    assert stats.placements <= len(variants) * len(tiles)
    assert stats.placements == stats.backtracks


@pytest.mark.parametrize("width,seed", [(2, 0), (3, 1), (4, 2), (5, 3)])
def test_solves_generated_puzzles(width, seed):
    tiles, solution = make_puzzle(width, edge_length=16, seed=seed)
    tiled = assemble(expand_all(tiles), len(tiles))

    assert tiled.width == width
    assert is_consistent(tiled)
    assert set(tiled.arrangement) == set(solution)

    # The found grid is the generated one up to a global rotation/reflection
    layout = {pid: (r, c) for (r, c), pid in tiled.to_board().items()}
    for pid, (r, c) in layout.items():
        for other, (r2, c2) in layout.items():
            found = abs(r - r2) + abs(c - c2)
            gr, gc = solution[pid]
            gr2, gc2 = solution[other]
            assert found == abs(gr - gr2) + abs(gc - gc2)


def test_ambiguous_borders_are_backtracked():
    """A decoy sharing the right neighbour's left border is tried first and undone."""
    tiles, _ = make_puzzle(2, edge_length=16, seed=7)
    solved = assemble(expand_all(tiles), 4)
    top_left, top_right = solved.cell(0, 0), solved.cell(0, 1)

    decoy = make_tile(1, top=0x8002, left=top_left.right, bottom=0x8004, right=0x8008,
                      edge_length=16)
    # Seed with the known corner; the decoy's variants come first in every bucket
    variants = [top_left] + expand_all([decoy]) + expand_all(tiles)
    assembler = TileAssembler(variants, 4)
    result = assembler.assemble()

    assert is_consistent(result)
    assert result.cell(0, 0) == top_left
    assert result.cell(0, 1) == top_right
    assert decoy.physical_id not in result.arrangement
    assert assembler.stats.backtracks >= 1


def test_is_consistent_detects_mismatch_and_reuse():
    a = make_tile(1, right=5, bottom=6)
    b = make_tile(2, left=5, bottom=7)
    c = make_tile(3, top=6, right=8)
    d = make_tile(4, top=7, left=8)
    assert is_consistent(TiledImage((a, b, c, d), 2))

    wrong = make_tile(4, top=7, left=9)
    assert not is_consistent(TiledImage((a, b, c, wrong), 2))

    reused = make_tile(1, top=7, left=8)
    assert not is_consistent(TiledImage((a, b, c, reused), 2))


def test_tiled_image_requires_full_grid():
    with pytest.raises(ValueError):
        TiledImage((make_tile(1),), 2)
