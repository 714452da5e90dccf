from __future__ import annotations

import pytest

from loa.engine.board import INITIAL_PIECES, STARTPOS_LAYOUT, Board
from loa.engine.geometry import str_to_square
from loa.engine.piece import BLACK, EMPTY, WHITE


def test_startpos_layout_round_trip() -> None:
    b = Board.startpos()
    assert b.to_layout() == STARTPOS_LAYOUT
    assert Board.from_layout(STARTPOS_LAYOUT) == b
    assert b.turn == BLACK


def test_startpos_contents() -> None:
    b = Board.startpos()
    for name in ("b1", "g1", "b8", "g8"):
        assert b.get(str_to_square(name)) == BLACK
    for name in ("a2", "a7", "h2", "h7"):
        assert b.get(str_to_square(name)) == WHITE
    for name in ("a1", "h1", "a8", "h8", "d4"):
        assert b.get(str_to_square(name)) == EMPTY
    assert b.piece_count(BLACK) == 12
    assert b.piece_count(WHITE) == 12
    assert Board.from_rows(INITIAL_PIECES, BLACK) == b


def test_digits_expand_to_empty_squares() -> None:
    b = Board.from_layout("w7/8/8/8/8/8/8/3b4 w")
    assert b.get(str_to_square("a8")) == WHITE
    assert b.get(str_to_square("d1")) == BLACK
    assert b.turn == WHITE
    assert b.to_layout() == "w-------/--------/--------/--------/--------/--------/--------/---b---- w"


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbb-",
        "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/-bbbbbb- b",
        "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbb- x",
        "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbbb- b",
        "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbqbbb- b",
        "9/8/8/8/8/8/8/8 b",
        "0b7/8/8/8/8/8/8/8 b",
    ],
)
def test_malformed_layouts_rejected(bad: str) -> None:
    with pytest.raises(ValueError):
        Board.from_layout(bad)


def test_text_rendering() -> None:
    lines = str(Board.startpos()).splitlines()
    assert lines[0] == "==="
    assert lines[1] == "    - b b b b b b - "
    assert lines[2] == "    w - - - - - - w "
    assert lines[8] == "    - b b b b b b - "
    assert lines[9] == "Next move: black"
    assert lines[10] == "==="


def test_equality_ignores_history_and_limit() -> None:
    played = Board.startpos()
    played.make_move(played.legal_moves()[0])
    fresh = Board.from_layout(played.to_layout())
    fresh.set_move_limit(10)
    assert fresh == played
    assert hash(fresh) == hash(played)
    assert fresh.moves_made() == 0 and played.moves_made() == 1


def test_copy_is_independent() -> None:
    b = Board.startpos()
    b.make_move(b.legal_moves()[0])
    c = b.copy()
    assert c == b
    assert c.moves_made() == 1
    c.retract()
    assert c == Board.startpos()
    assert b.moves_made() == 1
    assert b != c

    target = Board.startpos()
    target.copy_from(b)
    assert target == b
    assert target.history() == b.history()


def test_set_changes_square_and_turn() -> None:
    b = Board.startpos()
    d4 = str_to_square("d4")
    b.set(d4, WHITE)
    assert b.get(d4) == WHITE
    assert b.turn == BLACK
    b.set(d4, EMPTY, WHITE)
    assert b.turn == WHITE
    with pytest.raises(ValueError):
        b.set(d4, "x")


@pytest.mark.parametrize("bad", [-1, 64])
def test_square_access_rejects_out_of_range(bad: int) -> None:
    b = Board.startpos()
    with pytest.raises(ValueError):
        b.get(bad)
    with pytest.raises(ValueError):
        b.set(bad, BLACK)
    assert b == Board.startpos()


def test_constructor_copies_square_list() -> None:
    squares = list(Board.startpos().squares)
    b = Board(squares=squares)
    squares[str_to_square("d4")] = WHITE
    assert b.get(str_to_square("d4")) == EMPTY
    assert b == Board.startpos()
