from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final, Iterator, Optional

from loa.engine.board import Board
from loa.engine.move import Move
from loa.engine.piece import WHITE
from loa.eval import WINNING_VALUE, evaluate


logger = logging.getLogger(__name__)

# Fixed search depth in plies.
DEFAULT_DEPTH: Final = 3

INFTY: Final = 2**31 - 1


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int
    time_ms: int

    @property
    def decisive(self) -> bool:
        return abs(self.score) == WINNING_VALUE


@contextmanager
def applied(board: Board, move: Move) -> Iterator[Board]:
    """Make ``move`` on ``board`` for the duration of the block.

    The move is retracted on every exit path, including early returns.
    """
    board.make_move(move)
    try:
        yield board
    finally:
        board.retract()


class SearchService:
    """Depth-limited minimax with alpha-beta pruning.

    White maximises and Black minimises the score from ``evaluate``. The
    search works on a private copy of the board, mutated in place with
    make/retract; the caller's board is left untouched.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        self.depth = depth
        self._found_move: Optional[Move] = None
        self._nodes = 0

    def search(self, board: Board, depth: Optional[int] = None) -> SearchResult:
        """Find a move for the side to move in ``board``.

        Args:
            board (Board): Position to search; not modified.
            depth (Optional[int]): Plies to search; defaults to ``self.depth``.

        Returns:
            SearchResult: Chosen move and its minimax value.

        Raises:
            ValueError: If the game is already over or ``depth < 1``.
        """
        d = self.depth if depth is None else depth
        if d < 1:
            raise ValueError("depth must be >= 1")
        if board.game_over():
            raise ValueError("game is over")

        work = board.copy()
        sense = 1 if work.turn == WHITE else -1
        self._found_move = None
        self._nodes = 0
        start = time.perf_counter()
        score = self.find_move(work, d, True, sense, -INFTY, INFTY)
        time_ms = int((time.perf_counter() - start) * 1000)

        result = SearchResult(
            best_move=self._found_move,
            score=score,
            nodes=self._nodes,
            depth=d,
            time_ms=time_ms,
        )
        logger.debug(
            "search done",
            extra={
                "best_move": str(result.best_move),
                "score": result.score,
                "nodes": result.nodes,
                "depth": d,
                "time_ms": time_ms,
            },
        )
        return result

    def find_move(
        self, board: Board, depth: int, save_move: bool, sense: int, alpha: int, beta: int
    ) -> int:
        """Return the minimax value of ``board`` searched ``depth`` plies.

        Records the chosen move in ``_found_move`` iff ``save_move``. With
        ``sense == 1`` the best value is the maximum, with ``sense == -1``
        the minimum. At depth 0 or on a finished game the static value is
        returned and no move is recorded.
        """
        self._nodes += 1
        if depth == 0 or board.game_over():
            return evaluate(board)

        moves = board.legal_moves()
        if not moves:
            return evaluate(board)

        mover = board.turn
        best = -INFTY if sense == 1 else INFTY
        for mv in moves:
            with applied(board, mv):
                if board.winner() == mover:
                    # Immediate win for the side to move: nothing can beat it.
                    if save_move:
                        self._found_move = mv
                    return sense * WINNING_VALUE
                value = self.find_move(board, depth - 1, False, -sense, alpha, beta)

            if sense == 1:
                if value > best:
                    best = value
                    if save_move:
                        self._found_move = mv
                alpha = max(alpha, value)
            else:
                if value < best:
                    best = value
                    if save_move:
                        self._found_move = mv
                beta = min(beta, value)
            if beta <= alpha:
                break
        return best
