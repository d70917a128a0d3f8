import logging
from pathlib import Path

from pydantic import ValidationError

from hex_roots.clustering import Clustering
from hex_roots.config import STARTING_STONES, STONE_PIECES_PER_STONE
from hex_roots.errors import BoardStateError
from hex_roots.grid import HexGrid
from hex_roots.schemas import BoardState, TileState

logger = logging.getLogger(__name__)


class Board:
    def __init__(
        self,
        seed,
        width,
        height,
        n_stones=STARTING_STONES,
        n_stone_pieces=0,
        n_stone_pieces_per_stone=STONE_PIECES_PER_STONE,
        grid=None,
    ):
        self.seed = seed
        self.width = width
        self.height = height
        self.n_stones = n_stones
        self.n_stone_pieces = n_stone_pieces
        self.n_stone_pieces_per_stone = n_stone_pieces_per_stone
        self.grid = grid if grid is not None else HexGrid(width, height)
        if (self.grid.width, self.grid.height) != (width, height):
            raise ValueError(
                f"Grid is {self.grid.width}x{self.grid.height}, board expects {width}x{height}"
            )
        # Called with the board after every committed unlock (persistence, network sync).
        self.listeners = []
        # Set by the level generator; restored boards have none.
        self.generation_report = None
        self.rebuild_clustering()

    def rebuild_clustering(self):
        self.clustering = Clustering(self.grid)
        for tile_id in self.grid.unlocked_ids():
            self.clustering.add_tile_connect_neighbors(tile_id)
        return self.clustering

    def add_listener(self, callback):
        self.listeners.append(callback)

    def is_complete(self):
        return all(tile.unlocked for tile in self.grid if not tile.is_blank)

    def locked_group_indices(self):
        return sorted(
            index
            for index, members in self.grid.groups().items()
            if not self.grid.tiles[members[0]].unlocked
        )

    def try_activate(self, activated_tile_ids):
        """Unlock the first fully activated, connected group among ``activated_tile_ids``.

        Returns True when a group was committed. A rejected selection leaves the
        board untouched.
        """

        activated = {self.grid.tile(tile_id).id for tile_id in activated_tile_ids}
        candidates = [self.grid.tiles[tile_id] for tile_id in sorted(activated)]
        group_indices = sorted(
            {tile.group_index for tile in candidates if not tile.is_blank and not tile.unlocked}
        )
        if not group_indices:
            return False

        speculative = self.clustering.copy()

        def passable(neighbor):
            return neighbor.unlocked or neighbor.id in activated

        for tile in candidates:
            if not tile.unlocked:
                speculative.add_tile_connect_neighbors(tile.id, passable)

        for group_index in group_indices:
            members = self.grid.group(group_index)
            if not all(member in activated for member in members):
                continue
            if len({speculative.cluster_of(member) for member in members}) != 1:
                continue
            self._commit_group(group_index)
            return True

        return False

    def _commit_group(self, group_index):
        tiles = self.grid.group_tiles(group_index)
        for tile in tiles:
            tile.unlocked = True
        for tile in tiles:
            self.clustering.add_tile_connect_neighbors(tile.id)

        is_stone_group = any(tile.is_stone_tile for tile in tiles)
        logger.info("Unlocked group %s (%s tiles, stone=%s)", group_index, len(tiles), is_stone_group)
        if is_stone_group:
            self.n_stone_pieces += 1
            if self.n_stone_pieces >= self.n_stone_pieces_per_stone:
                self.n_stone_pieces = 0
                self.n_stones += 1
                logger.info("Capacity increased to %s stones", self.n_stones)

        for callback in self.listeners:
            callback(self)

    def to_state(self):
        return BoardState(
            seed=self.seed,
            width=self.width,
            height=self.height,
            n_stones=self.n_stones,
            n_stone_pieces=self.n_stone_pieces,
            n_stone_pieces_per_stone=self.n_stone_pieces_per_stone,
            tiles=[
                TileState(
                    unlocked=tile.unlocked,
                    group_index=tile.group_index,
                    is_stone_tile=tile.is_stone_tile,
                    moveset_index=tile.moveset_index,
                )
                for tile in self.grid
            ],
        )

    def serialize(self):
        return self.to_state().model_dump(by_alias=True)

    def to_json(self, indent=None):
        return self.to_state().model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_state(cls, state):
        grid = HexGrid(state.width, state.height)
        for tile, tile_state in zip(grid.tiles, state.tiles):
            if tile_state.group_index is not None:
                grid.assign_group(tile.id, tile_state.group_index)
            tile.unlocked = tile_state.unlocked
            tile.is_stone_tile = tile_state.is_stone_tile
            tile.moveset_index = tile_state.moveset_index

        return cls(
            seed=state.seed,
            width=state.width,
            height=state.height,
            n_stones=state.n_stones,
            n_stone_pieces=state.n_stone_pieces,
            n_stone_pieces_per_stone=state.n_stone_pieces_per_stone,
            grid=grid,
        )

    @classmethod
    def deserialize(cls, data):
        try:
            state = BoardState.model_validate(data)
        except ValidationError as exc:
            raise BoardStateError(f"Malformed board state: {exc}") from exc
        return cls.from_state(state)

    @classmethod
    def from_json(cls, payload):
        try:
            state = BoardState.model_validate_json(payload)
        except ValidationError as exc:
            raise BoardStateError(f"Malformed board state: {exc}") from exc
        return cls.from_state(state)

    def save(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path):
        return cls.from_json(Path(path).read_text(encoding="utf-8"))


def try_activate(board, activated_tile_ids):
    return board.try_activate(activated_tile_ids)


__all__ = ["Board", "try_activate"]
