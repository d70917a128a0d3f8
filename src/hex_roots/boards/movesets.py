"""Dependency-chained move sequences used while generating a level."""

from __future__ import annotations

from hex_roots.grid import HexGrid


class Moveset:
    """An ordered chain of moves, each reachable only because an earlier one exists.

    ``footprint`` is every tile within ``stones - 1`` steps of a tile in the
    chain; another chain placing a move there counts as encroaching.
    """

    def __init__(self, grid: HexGrid, stones: int, index: int):
        self.grid = grid
        self.stones = stones
        self.index = index
        self.tiles: set[int] = set()
        self.footprint: set[int] = set()
        self.moves: list[list[int]] = []
        self.stone_pieces = 0

    @property
    def footprint_radius(self) -> int:
        return self.stones - 1

    def add_move(self, move: list[int]) -> None:
        self.moves.append(list(move))
        for tile_id in move:
            self.grid.tiles[tile_id].moveset_index = self.index
            self.tiles.add(tile_id)
            self.footprint.update(self.grid.ids_within_radius(tile_id, self.footprint_radius))

    def set_stones(self, stones: int) -> None:
        self.stones = stones
        self.footprint = self.create_footprint(self.footprint_radius)

    def create_footprint(self, radius: int = 0) -> set[int]:
        footprint = set()
        for tile_id in self.tiles:
            footprint.update(self.grid.ids_within_radius(tile_id, radius))
        return footprint

    def encroaching_tiles(self, move: list[int]) -> list[int]:
        return [tile_id for tile_id in move if tile_id in self.footprint]

    def absorb(self, other: "Moveset") -> None:
        """Take over ``other``'s tiles and zipper its moves in among ours."""

        self.stone_pieces += other.stone_pieces
        self.tiles.update(other.tiles)
        self.footprint.update(other.footprint)
        for tile_id in other.tiles:
            self.grid.tiles[tile_id].moveset_index = self.index

        offset = 0
        for move in reversed(other.moves):
            position = max(0, len(self.moves) - offset - 1)
            offset += 1
            self.moves.insert(position, list(move))

    def __repr__(self):
        return (
            f"Moveset(index={self.index}, moves={len(self.moves)}, tiles={len(self.tiles)}, "
            f"stone_pieces={self.stone_pieces})"
        )


__all__ = ["Moveset"]
