import heapq
import random

import pytest

from hex_roots.boards import LEVEL_STANDARD, LevelGenerator, generate
from hex_roots.boards.movesets import Moveset
from hex_roots.config import NO_MOVESET
from hex_roots.grid import HexGrid


def _row_generator(width=5):
    return LevelGenerator("row", width, 1, rng=random.Random(0))


def test_small_board_is_fully_grouped():
    board = generate("test-1", 4, 4)
    assert all(tile.group_index is not None for tile in board.grid)
    assert board.generation_report.fully_grouped
    board.grid.validate_integrity()


def test_generation_is_deterministic():
    first = generate("alpha", 8, 6)
    second = generate("alpha", 8, 6)
    assert first.serialize() == second.serialize()
    assert first.generation_report == second.generation_report


def test_groups_partition_grouped_tiles():
    board = generate("partition", 10, 8)
    grid = board.grid
    seen = set()
    for group_index, members in grid.groups().items():
        assert members
        assert not seen.intersection(members)
        seen.update(members)
        for tile_id in members:
            assert grid.tiles[tile_id].group_index == group_index
            assert grid.tiles[tile_id].group_count == len(members)
    assert seen == {tile.id for tile in grid if tile.group_index is not None}


def test_fresh_board_starts_locked_at_starting_capacity():
    board = generate("fresh", 6, 5)
    assert board.n_stones == LEVEL_STANDARD.starting_stones
    assert board.n_stone_pieces == 0
    assert not any(tile.unlocked for tile in board.grid)
    assert len(board.clustering) == 0


def test_group_sizes_fit_final_capacity():
    board = generate("capacity", 12, 10)
    report = board.generation_report
    assert LEVEL_STANDARD.starting_stones <= report.final_stones <= LEVEL_STANDARD.max_stones
    for members in board.grid.groups().values():
        assert len(members) <= report.final_stones


def test_stone_flag_covers_whole_groups():
    board = generate("stones", 12, 10)
    for members in board.grid.groups().values():
        flags = {board.grid.tiles[tile_id].is_stone_tile for tile_id in members}
        assert len(flags) == 1


def test_every_grouped_tile_belongs_to_a_moveset():
    board = generate("movesets", 9, 7)
    for tile in board.grid:
        if tile.group_index is None:
            assert tile.moveset_index == NO_MOVESET
        else:
            assert tile.moveset_index >= 0


def test_group_cap_leaves_degraded_board():
    spec = LEVEL_STANDARD.with_overrides(max_group_index=3)
    board = generate("capped", 6, 6, spec)
    report = board.generation_report
    assert board.grid.group_count() <= 3
    assert report.ungrouped_tiles == len(board.grid.ungrouped_ids()) > 0
    assert not report.fully_grouped
    board.grid.validate_integrity()


def test_without_leftover_fill_report_matches_grid():
    spec = LEVEL_STANDARD.with_overrides(fill_leftovers=False)
    board = generate("no-fill", 7, 5, spec)
    assert board.generation_report.filler_groups == 0
    assert board.generation_report.ungrouped_tiles == len(board.grid.ungrouped_ids())


def test_first_move_pairs_adjacent_tiles():
    generator = _row_generator()
    move = generator.create_group(0)
    assert sorted(move) == [0, 1]
    assert generator.grid.group(0) == [0, 1]
    assert generator.next_group_index == 1
    assert generator.ungrouped == {2, 3, 4}


def test_disallowed_tiles_are_never_grouped():
    generator = _row_generator()
    assert generator.create_group(0, None, {1}) is None
    assert generator.grid.tile(0).group_index is None


def test_dependent_move_needs_the_prior_move():
    generator = _row_generator()
    generator.commit_group([1, 2])
    move = generator.create_group(0, dependent_move=[1, 2])
    assert sorted(move) == [0, 3]
    assert generator.grid.tile(3).group_index == 1


def test_coincidental_move_is_rejected():
    generator = _row_generator()
    generator.commit_group([0, 1])
    assert generator.create_group(3, dependent_move=[0, 1]) is None
    assert generator.grid.tile(3).group_index is None


def test_tiles_made_closer_by_compares_both_cost_models():
    generator = _row_generator()
    generator.commit_group([1, 2])
    assert generator.tiles_made_closer_by(0, [1, 2]) == {3: 1.0}
    assert generator.tiles_made_closer_by(4, [1, 2]) == {}


def test_absorb_zippers_moves_and_relabels_tiles():
    grid = HexGrid(10, 1)
    receiver = Moveset(grid, 1, 0)
    for tile_id in (0, 1, 2):
        receiver.add_move([tile_id])
    receiver.stone_pieces = 1
    joiner = Moveset(grid, 1, 1)
    for tile_id in (7, 8, 9):
        joiner.add_move([tile_id])
    joiner.stone_pieces = 2

    receiver.absorb(joiner)

    assert receiver.moves == [[0], [1], [7], [8], [9], [2]]
    assert receiver.stone_pieces == 3
    assert receiver.tiles == {0, 1, 2, 7, 8, 9}
    assert receiver.footprint == receiver.tiles
    assert [grid.tile(tile_id).moveset_index for tile_id in (7, 8, 9)] == [0, 0, 0]


def test_set_stones_widens_footprint():
    grid = HexGrid(5, 5)
    moveset = Moveset(grid, 2, 0)
    moveset.add_move([grid.tile_at(2, 2).id])
    assert len(moveset.footprint) == 7
    moveset.set_stones(3)
    assert moveset.footprint_radius == 2
    assert len(moveset.footprint) == 19


def test_encroaching_move_merges_movesets():
    generator = _row_generator(width=7)
    receiver = generator._new_moveset(generator.commit_group([0, 1]))
    joiner = generator._new_moveset(generator.commit_group([4, 5]))
    generator.movesets = [receiver, joiner]
    assert joiner.footprint == {3, 4, 5, 6}

    move = generator.commit_group([2, 3])
    receiver.add_move(move)
    generator._merge_encroached(receiver, move)

    assert generator.movesets == [receiver]
    assert generator._movesets_merged == 1
    assert receiver.tiles == {0, 1, 2, 3, 4, 5}
    assert {generator.grid.tile(tile_id).moveset_index for tile_id in receiver.tiles} == {receiver.index}
    # Tile 6 has no ungrouped partner left, so the joining move is skipped.
    assert receiver.moves == [[0, 1], [4, 5], [2, 3]]
    assert generator.ungrouped == {6}


def test_capacity_increase_widens_footprints_and_spawns_movesets():
    generator = LevelGenerator("capacity", 10, 10, rng=random.Random(0))
    first = generator._new_moveset(generator.commit_group([0, 1]))
    generator.movesets = [first]
    generator.stone_pieces = LEVEL_STANDARD.stone_pieces_per_stone

    generator._increase_stones()

    assert generator.stones == LEVEL_STANDARD.starting_stones + 1
    assert generator.stone_pieces == 0
    assert first.footprint == first.create_footprint(generator.stones - 1)
    assert len(generator.movesets) == LEVEL_STANDARD.stone_pieces_per_stone
    for moveset in generator.movesets:
        assert moveset.stones == generator.stones
        assert moveset.footprint == moveset.create_footprint(moveset.footprint_radius)
    for moveset in generator.movesets[1:]:
        assert not moveset.tiles & first.footprint


def _cheapest_activation(board, members):
    """Group members plus the locked tiles on the cheapest paths joining them.

    Unlocked tiles are free to cross and each locked tile costs one stone.
    Every member is tried as the hub and the smallest selection wins.
    """

    grid = board.grid
    best = None
    for hub in members:
        cost = {hub: 0}
        previous = {}
        frontier = [(0, hub)]
        while frontier:
            current_cost, tile_id = heapq.heappop(frontier)
            if current_cost > cost[tile_id]:
                continue
            for neighbor in grid.neighbor_ids(tile_id):
                step = 0 if grid.tiles[neighbor].unlocked else 1
                if current_cost + step < cost.get(neighbor, float("inf")):
                    cost[neighbor] = current_cost + step
                    previous[neighbor] = tile_id
                    heapq.heappush(frontier, (current_cost + step, neighbor))

        selection = set(members)
        for target in members:
            tile_id = target
            while tile_id != hub:
                if not grid.tiles[tile_id].unlocked:
                    selection.add(tile_id)
                tile_id = previous[tile_id]
        if best is None or len(selection) < len(best):
            best = selection
    return best


@pytest.mark.parametrize(
    "seed, width, height",
    [
        ("test-1", 4, 4),
        ("a", 8, 6),
        ("b", 10, 8),
        ("c", 12, 10),
        ("e", 9, 7),
        ("d", 15, 15),
        ("roots", 20, 15),
    ],
)
def test_generated_board_solves_in_group_order(seed, width, height):
    board = generate(seed, width, height)
    for group_index in sorted(board.grid.groups()):
        members = board.grid.group(group_index)
        selection = _cheapest_activation(board, members)
        assert len(selection) <= board.n_stones, (group_index, board.n_stones, sorted(selection))
        assert board.try_activate(selection)
        assert all(board.grid.tile(tile_id).unlocked for tile_id in members)
    assert board.is_complete()
