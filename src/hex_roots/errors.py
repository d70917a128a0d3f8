"""Exceptions raised by hex_roots."""


class HexRootsError(ValueError):
    """Base class for hex_roots errors."""


class UnknownTileError(HexRootsError):
    """A tile id or coordinate does not exist on the grid."""


class GroupAssignmentError(HexRootsError):
    """A tile was given a second, conflicting group index."""


class BoardStateError(HexRootsError):
    """Serialized board state is malformed."""


__all__ = [
    "HexRootsError",
    "UnknownTileError",
    "GroupAssignmentError",
    "BoardStateError",
]
