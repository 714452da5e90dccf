from __future__ import annotations

from .board import Board


def perft(board: Board, depth: int) -> int:
    """Count leaf positions reachable from ``board`` in exactly ``depth`` plies.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).
    - Finished games are leaves: no moves are generated past a win or tie.

    Uses make/retract on ``board``, which is restored before returning.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    if board.game_over():
        return 0

    nodes = 0
    for m in board.legal_moves():
        board.make_move(m)
        try:
            nodes += perft(board, depth - 1)
        finally:
            board.retract()
    return nodes
