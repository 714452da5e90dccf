from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .board import Board
from .move import Move
from .piece import EMPTY, full_name


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: hold the confirmed position, validate and apply moves,
    report the result. Searches never run on this board directly.
    """

    board: Board

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_layout(cls, layout: str) -> "Game":
        return cls(board=Board.from_layout(layout))

    def to_layout(self) -> str:
        return self.board.to_layout()

    def legal_moves(self) -> List[Move]:
        return self.board.legal_moves()

    def apply_move(self, move: Move) -> None:
        """Apply ``move`` for the side to move.

        Raises:
            ValueError: If the game is over or the move is illegal.
        """
        if self.board.game_over():
            raise ValueError("game is over")
        # Compare by (from, to); capture status is derived
        if move not in self.board.legal_moves():
            raise ValueError("illegal move")
        self.board.make_move(move)
        logger.debug("move applied", extra={"move": move.to_str(), "moves_made": self.board.moves_made()})
        result = self.board.winner()
        if result is not None:
            logger.info("game over", extra={"result": self.result_text()})

    def undo_move(self) -> None:
        if self.board.moves_made() == 0:
            raise ValueError("no moves to undo")
        self.board.retract()

    def set_move_limit(self, limit: int) -> None:
        self.board.set_move_limit(limit)

    def winner(self) -> Optional[str]:
        return self.board.winner()

    def game_over(self) -> bool:
        return self.board.game_over()

    def result_text(self) -> Optional[str]:
        """Human-readable result, e.g. ``"black wins"``, or None while in progress."""
        w = self.board.winner()
        if w is None:
            return None
        if w == EMPTY:
            return "tie"
        return f"{full_name(w)} wins"

    def move_history(self) -> List[str]:
        return [m.to_str() for m in self.board.history()]
