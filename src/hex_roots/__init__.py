"""Hex-tile grouping puzzle: solvable level generation and unlock validation."""

__version__ = "0.1.0"

from hex_roots.board import Board, try_activate
from hex_roots.boards import LEVEL_STANDARD, GenerationReport, LevelGenerationSpec, LevelGenerator, generate
from hex_roots.clustering import Clustering
from hex_roots.errors import BoardStateError, GroupAssignmentError, HexRootsError, UnknownTileError
from hex_roots.grid import HexGrid, Tile
from hex_roots.pathing import GraphAdapter, HexGridAdapter, shortest_paths
from hex_roots.selection import Selection

__all__ = [
    "__version__",
    "Board",
    "BoardStateError",
    "Clustering",
    "GenerationReport",
    "GraphAdapter",
    "GroupAssignmentError",
    "HexGrid",
    "HexGridAdapter",
    "HexRootsError",
    "LEVEL_STANDARD",
    "LevelGenerationSpec",
    "LevelGenerator",
    "Selection",
    "Tile",
    "UnknownTileError",
    "generate",
    "shortest_paths",
    "try_activate",
]
