"""Budget-bounded single-source shortest paths over the tile grid."""

from __future__ import annotations

import heapq
from typing import AbstractSet, Hashable, Iterable, Protocol, TypeVar

from hex_roots.config import GROUPED_TILE_COST, UNGROUPED_TILE_COST
from hex_roots.grid import HexGrid

Node = TypeVar("Node")
Key = Hashable


class GraphAdapter(Protocol[Node]):
    """View of a graph for ``shortest_paths``."""

    def key(self, node: Node) -> Key:
        ...

    def edges(self, node: Node, cost_override: AbstractSet[Key]) -> Iterable[tuple[Node, float]]:
        ...


class HexGridAdapter:
    """Tile ids as nodes; grouped tiles are free to cross, ungrouped tiles cost half a stone.

    Each edge costs the weight of both endpoints, so two adjacent ungrouped tiles
    are exactly one stone apart. Tiles in ``cost_override`` are weighted as if
    they were still ungrouped.
    """

    def __init__(self, grid: HexGrid):
        self.grid = grid

    def key(self, node: int) -> int:
        return node

    def weight(self, tile_id: int, cost_override: AbstractSet[int] = frozenset()) -> float:
        if self.grid.tiles[tile_id].group_index is None or tile_id in cost_override:
            return UNGROUPED_TILE_COST
        return GROUPED_TILE_COST

    def edges(self, node: int, cost_override: AbstractSet[int] = frozenset()) -> list[tuple[int, float]]:
        base = self.weight(node, cost_override)
        return [
            (neighbor, base + self.weight(neighbor, cost_override))
            for neighbor in self.grid.neighbor_ids(node)
        ]


def shortest_paths(
    adapter: GraphAdapter,
    source,
    cutoff: float,
    cost_override: AbstractSet = frozenset(),
) -> dict:
    """Return ``{key: cost}`` for every node reachable from ``source`` within ``cutoff``.

    The source itself is included at cost 0. A negative cutoff yields an empty map.
    """

    if cutoff < 0:
        return {}

    source_key = adapter.key(source)
    best_cost = {source_key: 0.0}
    settled = {}
    # Keys break cost ties so equal-cost pops are deterministic.
    frontier = [(0.0, source_key, source)]

    while frontier:
        cost, node_key, node = heapq.heappop(frontier)
        if node_key in settled:
            continue
        settled[node_key] = cost

        for neighbor, weight in adapter.edges(node, cost_override):
            next_cost = cost + weight
            if next_cost > cutoff:
                continue
            neighbor_key = adapter.key(neighbor)
            if neighbor_key in settled:
                continue
            if next_cost >= best_cost.get(neighbor_key, float("inf")):
                continue
            best_cost[neighbor_key] = next_cost
            heapq.heappush(frontier, (next_cost, neighbor_key, neighbor))

    return settled


__all__ = [
    "GraphAdapter",
    "HexGridAdapter",
    "shortest_paths",
]
