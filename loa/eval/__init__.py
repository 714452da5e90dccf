"""Position evaluation for Lines of Action.

Pure, deterministic, and side-effect free. Scores are from White's point of
view: positive favours White, negative favours Black.
"""

from __future__ import annotations

from typing import Final

from loa.engine.board import Board
from loa.engine.geometry import sq
from loa.engine.piece import BLACK, EMPTY, WHITE


# Magnitude of a decided game; dominates every positional term.
WINNING_VALUE: Final = 2**31 - 1 - 20

# Heuristic weights
GROUP_COUNT_WEIGHT: Final = 20
CENTER_WEIGHT: Final = 10
LARGEST_GROUP_WEIGHT: Final = 10

# d4, e4, d5, e5
CENTER_SQUARES: Final = (sq(3, 3), sq(4, 3), sq(3, 4), sq(4, 4))


def evaluate(board: Board) -> int:
    """Return a static score for ``board``.

    Decided positions score ``+/-WINNING_VALUE`` (0 for a tie). Otherwise:
    fewer groups is better, each center square is worth ``CENTER_WEIGHT``
    to its owner, and a larger biggest group is better.
    """
    winner = board.winner()
    if winner == WHITE:
        return WINNING_VALUE
    if winner == BLACK:
        return -WINNING_VALUE
    if winner == EMPTY:
        return 0

    black_regions = board.region_sizes(BLACK)
    white_regions = board.region_sizes(WHITE)

    score = (len(black_regions) - len(white_regions)) * GROUP_COUNT_WEIGHT
    score += center_control(board) * CENTER_WEIGHT
    # region lists are sorted descending
    max_white = white_regions[0] if white_regions else 0
    max_black = black_regions[0] if black_regions else 0
    score += (max_white - max_black) * LARGEST_GROUP_WEIGHT
    return score


def center_control(board: Board) -> int:
    """White center squares minus Black center squares."""
    total = 0
    for s in CENTER_SQUARES:
        p = board.get(s)
        if p == WHITE:
            total += 1
        elif p == BLACK:
            total -= 1
    return total
