"""Module-level constants for hex_roots."""

from typing import Final

# Capacity ("stones") pacing shared by generation and play.
STARTING_STONES: Final[int] = 2
STONE_PIECES_PER_STONE: Final[int] = 3
MAX_STONES: Final[int] = 6

# Path cost of entering or leaving a tile that is not yet part of a group.
UNGROUPED_TILE_COST: Final[float] = 0.5
GROUPED_TILE_COST: Final[float] = 0.0

MAX_GROUP_INDEX: Final[int] = 200
NO_MOVESET: Final[int] = -1

LOG_LEVEL: Final[str] = "INFO"
LOG_LEVEL_ENV_VAR: Final[str] = "HEX_ROOTS_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

DEFAULT_BOARD_WIDTH: Final[int] = 20
DEFAULT_BOARD_HEIGHT: Final[int] = 15
DEFAULT_SEED: Final[str] = "roots"
