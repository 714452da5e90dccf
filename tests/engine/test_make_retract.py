from __future__ import annotations

import pytest

from loa.engine.board import Board
from loa.engine.geometry import str_to_square
from loa.engine.move import Move, parse_move
from loa.engine.piece import BLACK, EMPTY, WHITE


MIDGAME = "--b-----/w--bb--w/w-b--w-w/--wb---w/w--b-b--/w-----bw/--w-b---/--bb---- w"


def test_make_retract_restores_every_startpos_move() -> None:
    b = Board.startpos()
    before = b.copy()
    for mv in b.legal_moves():
        b.make_move(mv)
        assert b.turn == WHITE
        assert b.moves_made() == 1
        b.retract()
        assert b == before
        assert b.turn == BLACK
        assert b.moves_made() == 0


def test_make_retract_restores_midgame_two_plies() -> None:
    b = Board.from_layout(MIDGAME)
    before = b.copy()
    for mv in b.legal_moves():
        b.make_move(mv)
        after_one = b.copy()
        if not b.game_over():
            for reply in b.legal_moves():
                b.make_move(reply)
                b.retract()
                assert b == after_one
        b.retract()
        assert b == before


def test_capture_is_recorded_and_restored() -> None:
    b = Board.startpos()
    mv = parse_move("c1-a3")
    b.make_move(mv)
    assert b.get(str_to_square("a3")) == BLACK
    assert b.get(str_to_square("c1")) == EMPTY
    assert b.history()[-1].capture is True
    assert b.piece_count(WHITE) == 11
    b.retract()
    assert b.get(str_to_square("a3")) == WHITE
    assert b.get(str_to_square("c1")) == BLACK
    assert b.turn == BLACK
    assert b == Board.startpos()


def test_quiet_move_not_flagged_capture() -> None:
    b = Board.startpos()
    b.make_move(Move(str_to_square("b1"), str_to_square("b3"), capture=True))
    assert b.history()[-1].capture is False
    b.retract()
    assert b.get(str_to_square("b3")) == EMPTY
    assert b == Board.startpos()


def test_illegal_make_move_raises() -> None:
    b = Board.startpos()
    with pytest.raises(ValueError):
        b.make_move(parse_move("b1-b4"))
    # white piece while black is to move
    with pytest.raises(ValueError):
        b.make_move(parse_move("a2-c2"))
    assert b == Board.startpos()
    assert b.moves_made() == 0


def test_retract_without_moves_raises() -> None:
    b = Board.startpos()
    with pytest.raises(ValueError):
        b.retract()


def test_history_is_a_stack() -> None:
    b = Board.startpos()
    first = parse_move("b1-b3")
    b.make_move(first)
    second = b.legal_moves()[0]
    b.make_move(second)
    assert b.history() == [first, second]
    b.retract()
    assert b.history() == [first]
    b.retract()
    assert b.history() == []


def test_regions_refresh_after_mutation() -> None:
    b = Board.startpos()
    assert b.region_sizes(BLACK) == [6, 6]
    b.make_move(parse_move("b1-b3"))
    assert b.region_sizes(BLACK) == [6, 5, 1]
    b.retract()
    assert b.region_sizes(BLACK) == [6, 6]
