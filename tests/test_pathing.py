from hex_roots.grid import HexGrid
from hex_roots.pathing import HexGridAdapter, shortest_paths


def _row(width=3):
    grid = HexGrid(width, 1)
    return grid, HexGridAdapter(grid)


def test_adjacent_ungrouped_tiles_are_one_stone_apart():
    _, adapter = _row()
    assert shortest_paths(adapter, 0, 10) == {0: 0.0, 1: 1.0, 2: 2.0}


def test_cutoff_limits_results():
    _, adapter = _row()
    assert shortest_paths(adapter, 0, 1) == {0: 0.0, 1: 1.0}
    assert shortest_paths(adapter, 0, 0) == {0: 0.0}
    assert shortest_paths(adapter, 0, -1) == {}


def test_grouped_tiles_are_free_to_cross():
    grid, adapter = _row()
    grid.assign_group(1, 0)
    assert shortest_paths(adapter, 0, 10) == {0: 0.0, 1: 0.5, 2: 1.0}


def test_cost_override_is_per_call():
    grid, adapter = _row()
    grid.assign_group(1, 0)
    assert shortest_paths(adapter, 0, 10, cost_override={1}) == {0: 0.0, 1: 1.0, 2: 2.0}
    assert shortest_paths(adapter, 0, 10)[2] == 1.0


def test_override_makes_dependent_tiles_unreachable():
    grid, adapter = _row(5)
    grid.assign_group(1, 0)
    grid.assign_group(2, 0)
    with_group = shortest_paths(adapter, 0, 1)
    without_group = shortest_paths(adapter, 0, 1, cost_override={1, 2})
    assert with_group[3] == 1.0
    assert 3 not in without_group
