from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hex_roots.config import NO_MOVESET


# One entry per grid tile, row-major
class TileState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    unlocked: bool = False
    group_index: Optional[int] = Field(default=None, alias="groupIndex", ge=0)
    is_stone_tile: bool = Field(default=False, alias="isStoneTile")
    moveset_index: int = Field(default=NO_MOVESET, alias="movesetIndex", ge=NO_MOVESET)


# Persisted / exchanged board
class BoardState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    seed: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    n_stones: int = Field(alias="nStones", ge=1)
    n_stone_pieces: int = Field(alias="nStonePieces", ge=0)
    n_stone_pieces_per_stone: int = Field(alias="nStonePiecesPerStone", ge=1)
    tiles: List[TileState]

    @model_validator(mode="after")
    def check_consistency(self):
        expected = self.width * self.height
        if len(self.tiles) != expected:
            raise ValueError(
                f"expected {expected} tiles for a {self.width}x{self.height} board, got {len(self.tiles)}"
            )
        if self.n_stone_pieces >= self.n_stone_pieces_per_stone:
            raise ValueError(
                f"nStonePieces ({self.n_stone_pieces}) must be below "
                f"nStonePiecesPerStone ({self.n_stone_pieces_per_stone})"
            )

        unlocked_by_group = {}
        for position, tile in enumerate(self.tiles):
            if tile.group_index is None:
                if tile.unlocked:
                    raise ValueError(f"tile {position} is unlocked but has no group")
                continue
            if tile.group_index >= expected:
                raise ValueError(f"tile {position} has out-of-range groupIndex {tile.group_index}")
            unlocked_by_group.setdefault(tile.group_index, set()).add(tile.unlocked)

        for group_index, states in unlocked_by_group.items():
            if len(states) > 1:
                raise ValueError(f"group {group_index} is partially unlocked")
        return self


__all__ = ["TileState", "BoardState"]
