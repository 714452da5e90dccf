"""Square geometry for the 8x8 board.

Squares are plain ints 0..63 (a1=0 .. h8=63), rank-major, ``index = row * 8 + col``.
All tables here are built once at import time and never mutated.
"""

from __future__ import annotations

from typing import Final, Optional, Tuple

BOARD_SIZE: Final = 8

ALL_SQUARES: Final = tuple(range(BOARD_SIZE * BOARD_SIZE))

# Compass directions as (dcol, drow); index d and d + 4 are opposite.
N, NE, E, SE, S, SW, W, NW = range(8)
DIRECTIONS: Final = ((0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1))


def sq(col: int, row: int) -> int:
    """Return the square index for ``(col, row)``.

    Raises:
        ValueError: If either coordinate is off the board.
    """
    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        raise ValueError(f"square off board: col={col} row={row}")
    return row * BOARD_SIZE + col


def col(s: int) -> int:
    return s % BOARD_SIZE


def row(s: int) -> int:
    return s // BOARD_SIZE


def str_to_square(s: str) -> int:
    """Convert a designator such as ``"c4"`` into a square index.

    Raises:
        ValueError: If ``s`` is not a valid designator.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return sq(ord(s[0]) - ord("a"), int(s[1]) - 1)


def square_to_str(idx: int) -> str:
    """Convert a square index into its designator.

    Raises:
        ValueError: If ``idx`` is outside 0..63.
    """
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    return chr(ord("a") + col(idx)) + str(row(idx) + 1)


def opposite_direction(d: int) -> int:
    return (d + 4) % 8


def direction(frm: int, to: int) -> Optional[int]:
    """Return the compass direction from ``frm`` to ``to``.

    Returns ``None`` when the squares are equal or do not share a row,
    column or diagonal.
    """
    dc = col(to) - col(frm)
    dr = row(to) - row(frm)
    if dc == 0 and dr == 0:
        return None
    if dc != 0 and dr != 0 and abs(dc) != abs(dr):
        return None
    step = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
    return DIRECTIONS.index(step)


def distance(frm: int, to: int) -> int:
    """Number of unit steps between two squares (Chebyshev distance)."""
    return max(abs(col(to) - col(frm)), abs(row(to) - row(frm)))


def is_valid_move(frm: int, to: int) -> bool:
    """True iff ``frm`` and ``to`` are distinct and on a common line."""
    return direction(frm, to) is not None


def move_dest(frm: int, d: int, steps: int) -> Optional[int]:
    """Square reached by walking ``steps`` units from ``frm`` towards ``d``.

    Returns ``None`` if the walk leaves the board.
    """
    dc, dr = DIRECTIONS[d]
    c = col(frm) + dc * steps
    r = row(frm) + dr * steps
    if 0 <= c < BOARD_SIZE and 0 <= r < BOARD_SIZE:
        return r * BOARD_SIZE + c
    return None


def _build_rays() -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    rays = []
    for s in ALL_SQUARES:
        per_dir = []
        for d in range(8):
            walk = []
            steps = 1
            while True:
                t = move_dest(s, d, steps)
                if t is None:
                    break
                walk.append(t)
                steps += 1
            per_dir.append(tuple(walk))
        rays.append(tuple(per_dir))
    return tuple(rays)


# RAYS[s][d]: squares walked outward from s in direction d, nearest first.
RAYS: Final = _build_rays()

ADJACENT: Final = tuple(
    tuple(RAYS[s][d][0] for d in range(8) if RAYS[s][d]) for s in ALL_SQUARES
)


def ray(s: int, d: int) -> Tuple[int, ...]:
    return RAYS[s][d]


def adjacent(s: int) -> Tuple[int, ...]:
    """The up-to-8 neighbours of ``s``, clipped at the board edge."""
    return ADJACENT[s]
