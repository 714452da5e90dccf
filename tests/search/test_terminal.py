from __future__ import annotations

import pytest

from loa.engine.board import Board
from loa.engine.move import parse_move
from loa.search.service import SearchService, applied


def test_search_on_finished_game_raises() -> None:
    board = Board.from_layout("w6w/8/8/8/8/8/8/bbb5 w")
    assert board.game_over()
    with pytest.raises(ValueError, match="game is over"):
        SearchService().search(board, depth=2)


def test_search_depth_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SearchService().search(Board.startpos(), depth=0)


def test_applied_retracts_on_error() -> None:
    board = Board.startpos()
    with pytest.raises(RuntimeError):
        with applied(board, parse_move("c1-a3")):
            assert board.moves_made() == 1
            raise RuntimeError("boom")
    assert board == Board.startpos()
    assert board.moves_made() == 0


def test_applied_retracts_on_early_return() -> None:
    board = Board.startpos()

    def first_capture() -> str:
        for mv in board.legal_moves():
            with applied(board, mv):
                if board.history()[-1].capture:
                    return mv.to_str()
        return ""

    assert first_capture() == "c1-a3"
    assert board == Board.startpos()
