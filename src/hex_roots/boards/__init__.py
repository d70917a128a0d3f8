"""Level generation for hex boards."""

from .level_generator import GenerationReport, LevelGenerator, generate
from .level_specs import LEVEL_STANDARD, LevelGenerationSpec
from .movesets import Moveset

__all__ = [
    "LEVEL_STANDARD",
    "LevelGenerationSpec",
    "LevelGenerator",
    "GenerationReport",
    "Moveset",
    "generate",
]
