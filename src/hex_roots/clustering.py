"""Incremental connected-component tracking over tile ids."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from hex_roots.grid import HexGrid, Tile

Passable = Callable[[Tile], bool]


def _is_unlocked(tile: Tile) -> bool:
    return tile.unlocked


class Clustering:
    """Merge-only union-find keyed by stable tile id.

    A cluster is named by the id of its current root tile. Roots may change as
    clusters merge, so cluster ids are only meaningful until the next merge;
    membership itself never shrinks.
    """

    def __init__(self, grid: HexGrid):
        self.grid = grid
        self._parent: dict[int, int] = {}
        self._size: dict[int, int] = {}

    def __contains__(self, tile_id: int) -> bool:
        return tile_id in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def _find(self, tile_id: int) -> int:
        root = tile_id
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[tile_id] != root:
            self._parent[tile_id], tile_id = root, self._parent[tile_id]
        return root

    def cluster_of(self, tile_id: int) -> Optional[int]:
        if tile_id not in self._parent:
            return None
        return self._find(tile_id)

    def add_tile(self, tile_id: int) -> int:
        """Ensure ``tile_id`` is tracked; returns its cluster id."""

        if tile_id not in self._parent:
            self._parent[tile_id] = tile_id
            self._size[tile_id] = 1
        return self._find(tile_id)

    def add_tile_connect_neighbors(self, tile_id: int, passable: Passable | None = None) -> int:
        passable = passable or _is_unlocked
        merged = [self.add_tile(tile_id)]
        for neighbor in self.grid.neighbors(tile_id):
            if neighbor.id not in self._parent or not passable(neighbor):
                continue
            merged.append(self._find(neighbor.id))
        return self.merge(merged)

    def merge(self, cluster_ids: Iterable[int]) -> Optional[int]:
        roots = []
        for cluster_id in cluster_ids:
            root = self._find(cluster_id)
            if root not in roots:
                roots.append(root)
        if not roots:
            return None

        # Union by size keeps the trees shallow.
        keeper = max(roots, key=lambda root: (self._size[root], -root))
        for root in roots:
            if root == keeper:
                continue
            self._parent[root] = keeper
            self._size[keeper] += self._size.pop(root)
        return keeper

    def connected(self, a: int, b: int) -> bool:
        cluster_a = self.cluster_of(a)
        return cluster_a is not None and cluster_a == self.cluster_of(b)

    def members(self, cluster_id: int) -> list[int]:
        root = self._find(cluster_id)
        return sorted(tile_id for tile_id in self._parent if self._find(tile_id) == root)

    def cluster_count(self) -> int:
        return len(self._size)

    def copy(self) -> "Clustering":
        clone = Clustering(self.grid)
        clone._parent = dict(self._parent)
        clone._size = dict(self._size)
        return clone


__all__ = ["Clustering", "Passable"]
