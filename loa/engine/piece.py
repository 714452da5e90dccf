from __future__ import annotations

from typing import Final

# Piece values double as their one-character abbreviations.
EMPTY: Final = "-"
BLACK: Final = "b"
WHITE: Final = "w"

PIECES: Final = (EMPTY, BLACK, WHITE)

_FULL_NAMES: Final = {EMPTY: "empty", BLACK: "black", WHITE: "white"}


def opposite(p: str) -> str:
    """Return the other side's piece.

    Raises:
        ValueError: For ``EMPTY`` or an unknown value.
    """
    if p == BLACK:
        return WHITE
    if p == WHITE:
        return BLACK
    raise ValueError(f"piece has no opposite: {p!r}")


def full_name(p: str) -> str:
    return _FULL_NAMES[p]
