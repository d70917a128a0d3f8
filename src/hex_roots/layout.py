"""Generic coordinate helpers for odd-q vertical hex boards."""

from __future__ import annotations

Coord = tuple[int, int]

# Direction order shared by every neighbor query; positional callers rely on it.
_EVEN_COLUMN_DELTAS: tuple[Coord, ...] = ((1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (0, 1))
_ODD_COLUMN_DELTAS: tuple[Coord, ...] = ((1, 1), (1, 0), (0, -1), (-1, 0), (-1, 1), (0, 1))


def neighbor_coords_odd_q(q: int, r: int) -> list[Coord]:
    """Return six odd-q neighbor coordinates without bounds filtering."""

    deltas = _EVEN_COLUMN_DELTAS if q % 2 == 0 else _ODD_COLUMN_DELTAS
    return [(q + dq, r + dr) for dq, dr in deltas]


def offset_to_cube(q: int, r: int) -> tuple[int, int, int]:
    """Convert odd-q offset coordinates to cube coordinates."""

    x = q
    z = r - ((q - (q & 1)) // 2)
    y = -x - z
    return x, y, z


def hex_distance(a: Coord, b: Coord) -> int:
    """Number of hex steps between two offset coordinates."""

    ax, ay, az = offset_to_cube(a[0], a[1])
    bx, by, bz = offset_to_cube(b[0], b[1])
    return max(abs(ax - bx), abs(ay - by), abs(az - bz))


def in_bounds(q: int, r: int, width: int, height: int) -> bool:
    return 0 <= q < width and 0 <= r < height


__all__ = [
    "Coord",
    "neighbor_coords_odd_q",
    "offset_to_cube",
    "hex_distance",
    "in_bounds",
]
