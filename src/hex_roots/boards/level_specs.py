"""Level generation presets and pacing tuning."""

from dataclasses import dataclass, replace
from typing import Final

from hex_roots.config import MAX_GROUP_INDEX, MAX_STONES, STARTING_STONES, STONE_PIECES_PER_STONE


@dataclass(frozen=True)
class LevelGenerationSpec:
    """Constants that, together with seed and size, fully determine a generated board."""

    starting_stones: int
    max_stones: int
    stone_pieces_per_stone: int
    max_group_index: int
    max_attempts_since_progress: int
    moveset_spawn_attempts: int
    older_move_chance: float
    stone_pacing_exponent: float
    fill_leftovers: bool

    def with_overrides(self, **changes) -> "LevelGenerationSpec":
        return replace(self, **changes)


LEVEL_STANDARD: Final[LevelGenerationSpec] = LevelGenerationSpec(
    starting_stones=STARTING_STONES,
    max_stones=MAX_STONES,
    stone_pieces_per_stone=STONE_PIECES_PER_STONE,
    max_group_index=MAX_GROUP_INDEX,
    max_attempts_since_progress=50,
    moveset_spawn_attempts=20,
    older_move_chance=0.6,
    stone_pacing_exponent=2.5,
    fill_leftovers=True,
)

__all__ = [
    "LevelGenerationSpec",
    "LEVEL_STANDARD",
]
