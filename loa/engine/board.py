from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, List, Optional, Sequence, Tuple, Union

from .geometry import (
    ADJACENT,
    ALL_SQUARES,
    BOARD_SIZE,
    RAYS,
    direction,
    distance,
    opposite_direction,
    sq,
)
from .move import Move
from .piece import BLACK, EMPTY, PIECES, WHITE, full_name, opposite


# Moves per side before the game is declared a tie.
DEFAULT_MOVE_LIMIT: Final = 60

# Standard opening position, bottom row (rank 1) first.
INITIAL_PIECES: Final = (
    "-bbbbbb-",
    "w------w",
    "w------w",
    "w------w",
    "w------w",
    "w------w",
    "w------w",
    "-bbbbbb-",
)

STARTPOS_LAYOUT: Final = "/".join(reversed(INITIAL_PIECES)) + " " + BLACK


@dataclass(eq=False)
class Board:
    """Lines of Action position with reversible move history.

    Notes:
    - ``squares`` is indexed by square (a1=0 .. h8=63) and holds ``EMPTY``,
      ``BLACK`` or ``WHITE``.
    - ``move_limit`` counts total half-moves; reaching it without a
      connection win is a tie.
    - Region sizes and the winner are cached and recomputed lazily after
      any mutation.
    - Equality and hashing consider contents and side to move only.
    """

    squares: List[str]
    turn: str = BLACK
    move_limit: int = 2 * DEFAULT_MOVE_LIMIT
    # unretracted moves, most recent last
    _moves: List[Move] = field(default_factory=list, repr=False)
    # (black sizes, white sizes), each sorted descending; None when stale
    _regions: Optional[Tuple[List[int], List[int]]] = field(default=None, repr=False)
    _winner_known: bool = field(default=False, repr=False)
    _winner: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.squares = list(self.squares)
        if len(self.squares) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"board needs 64 squares, got {len(self.squares)}")
        for p in self.squares:
            if p not in PIECES:
                raise ValueError(f"invalid piece: {p!r}")
        if self.turn not in (BLACK, WHITE):
            raise ValueError(f"invalid side to move: {self.turn!r}")

    # --- Construction ---
    @classmethod
    def startpos(cls) -> "Board":
        """Create a board in the standard starting position, Black to move."""
        return cls.from_rows(INITIAL_PIECES, BLACK)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]], turn: str = BLACK) -> "Board":
        """Create a board from 8 rows of 8 pieces, bottom row (rank 1) first.

        Raises:
            ValueError: If the shape is not 8x8 or a piece is unknown.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError("rows must be 8x8")
        squares = [rows[r][c] for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
        return cls(squares=squares, turn=turn)

    @classmethod
    def from_layout(cls, layout: str) -> "Board":
        """Create a board from a layout string.

        Format: eight ranks from rank 8 down to rank 1 separated by ``/``,
        using ``b``, ``w`` and ``-``; digits 1-8 stand for runs of empty
        squares. A space and the side to move (``b`` or ``w``) follow.

        Raises:
            ValueError: If the layout is malformed.
        """
        parts = layout.split()
        if len(parts) != 2:
            raise ValueError("layout must have placement and side to move")
        placement, side = parts
        ranks = placement.split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError("layout must have 8 ranks")
        squares = [EMPTY] * (BOARD_SIZE * BOARD_SIZE)
        for i, rank_text in enumerate(ranks):
            r = BOARD_SIZE - 1 - i
            c = 0
            for ch in rank_text:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > BOARD_SIZE:
                        raise ValueError(f"invalid empty run: {ch!r}")
                    c += n
                elif ch in PIECES:
                    if c >= BOARD_SIZE:
                        raise ValueError(f"rank too long: {rank_text!r}")
                    squares[r * BOARD_SIZE + c] = ch
                    c += 1
                else:
                    raise ValueError(f"invalid piece character: {ch!r}")
            if c != BOARD_SIZE:
                raise ValueError(f"rank must describe 8 squares: {rank_text!r}")
        if side not in (BLACK, WHITE):
            raise ValueError(f"invalid side to move: {side!r}")
        return cls(squares=squares, turn=side)

    def to_layout(self) -> str:
        ranks = []
        for r in range(BOARD_SIZE - 1, -1, -1):
            ranks.append("".join(self.squares[r * BOARD_SIZE : (r + 1) * BOARD_SIZE]))
        return "/".join(ranks) + " " + self.turn

    def copy(self) -> "Board":
        """Return an independent deep copy, history and caches included."""
        other = Board(squares=list(self.squares), turn=self.turn, move_limit=self.move_limit)
        other.copy_from(self)
        return other

    def copy_from(self, board: "Board") -> None:
        """Set my state to a copy of ``board``."""
        if board is self:
            return
        self.squares = list(board.squares)
        self.turn = board.turn
        self.move_limit = board.move_limit
        self._moves = list(board._moves)
        if board._regions is None:
            self._regions = None
        else:
            self._regions = (list(board._regions[0]), list(board._regions[1]))
        self._winner_known = board._winner_known
        self._winner = board._winner

    # --- Square access ---
    def get(self, s: int) -> str:
        _check_square(s)
        return self.squares[s]

    def set(self, s: int, piece: str, next_turn: Optional[str] = None) -> None:
        """Put ``piece`` on ``s`` and, if given, make ``next_turn`` the side to move."""
        _check_square(s)
        if piece not in PIECES:
            raise ValueError(f"invalid piece: {piece!r}")
        self.squares[s] = piece
        if next_turn is not None:
            if next_turn not in (BLACK, WHITE):
                raise ValueError(f"invalid side to move: {next_turn!r}")
            self.turn = next_turn
        self._invalidate()

    def piece_count(self, side: str) -> int:
        return self.squares.count(side)

    # --- Move limit and history ---
    def set_move_limit(self, limit: int) -> None:
        """Set the per-side move limit; ``2 * limit`` must exceed moves made.

        Raises:
            ValueError: If the limit is too small.
        """
        if 2 * limit <= self.moves_made():
            raise ValueError("move limit too small")
        self.move_limit = 2 * limit
        self._winner_known = False

    def moves_made(self) -> int:
        return len(self._moves)

    def history(self) -> List[Move]:
        return list(self._moves)

    # --- Legality ---
    def is_legal(self, frm: Union[Move, int, None], to: Optional[int] = None) -> bool:
        """Return True iff ``frm``-``to`` (or a ``Move``) obeys the movement rules.

        Ownership of the origin square is not checked here; ``legal_moves``
        restricts origins to the side to move.
        """
        if isinstance(frm, Move):
            frm, to = frm.from_sq, frm.to_sq
        if frm is None or to is None or frm == to:
            return False
        if not (0 <= frm < 64 and 0 <= to < 64):
            return False
        d = direction(frm, to)
        if d is None:
            return False
        if self._blocked(frm, to, d):
            return False
        return self._line_count(frm, d) == distance(frm, to)

    def legal_moves(self) -> List[Move]:
        """Return all legal moves, ordered by origin then destination square."""
        moves: List[Move] = []
        for frm in ALL_SQUARES:
            if self.squares[frm] != self.turn:
                continue
            dests: List[int] = []
            for d in range(4):
                # both halves of a line share one count
                count = self._line_count(frm, d)
                for dd in (d, opposite_direction(d)):
                    walk = RAYS[frm][dd]
                    if count <= len(walk):
                        to = walk[count - 1]
                        if self.is_legal(frm, to):
                            dests.append(to)
            for to in sorted(dests):
                moves.append(Move(frm, to))
        return moves

    def _blocked(self, frm: int, to: int, d: int) -> bool:
        if self.squares[frm] == self.squares[to]:
            return True
        for s in RAYS[frm][d][: distance(frm, to) - 1]:
            if self.squares[s] != EMPTY:
                return True
        return False

    def _line_count(self, frm: int, d: int) -> int:
        count = 1
        for dd in (d, opposite_direction(d)):
            for s in RAYS[frm][dd]:
                if self.squares[s] != EMPTY:
                    count += 1
        return count

    # --- Make / retract ---
    def make_move(self, move: Move) -> None:
        """Apply a legal ``move`` for the side to move, recording it for retraction.

        Raises:
            ValueError: If the move is illegal or the origin does not hold a
                piece of the side to move.
        """
        if not self.is_legal(move) or self.squares[move.from_sq] != self.turn:
            raise ValueError(f"illegal move: {move}")
        frm, to = move.from_sq, move.to_sq
        if self.squares[to] != EMPTY:
            self._moves.append(move.capture_move())
        else:
            self._moves.append(Move(frm, to))
        self.squares[to] = self.squares[frm]
        self.squares[frm] = EMPTY
        self.turn = opposite(self.turn)
        self._invalidate()

    def retract(self) -> None:
        """Undo the most recent move, restoring any captured piece.

        Raises:
            ValueError: If no moves have been made.
        """
        if not self._moves:
            raise ValueError("no moves to retract")
        last = self._moves.pop()
        mover = self.squares[last.to_sq]
        self.squares[last.from_sq] = mover
        self.squares[last.to_sq] = opposite(mover) if last.capture else EMPTY
        self.turn = mover
        self._invalidate()

    def _invalidate(self) -> None:
        self._regions = None
        self._winner_known = False
        self._winner = None

    # --- Connectivity and result ---
    def region_sizes(self, side: str) -> List[int]:
        """Sizes of ``side``'s connected groups, largest first."""
        black, white = self._compute_regions()
        return list(black if side == BLACK else white)

    def _compute_regions(self) -> Tuple[List[int], List[int]]:
        if self._regions is not None:
            return self._regions
        black: List[int] = []
        white: List[int] = []
        visited = [False] * (BOARD_SIZE * BOARD_SIZE)
        for start in ALL_SQUARES:
            p = self.squares[start]
            if p == EMPTY or visited[start]:
                continue
            visited[start] = True
            size = 0
            stack = [start]
            while stack:
                s = stack.pop()
                size += 1
                for n in ADJACENT[s]:
                    if not visited[n] and self.squares[n] == p:
                        visited[n] = True
                        stack.append(n)
            (black if p == BLACK else white).append(size)
        black.sort(reverse=True)
        white.sort(reverse=True)
        self._regions = (black, white)
        return self._regions

    def pieces_contiguous(self, side: str) -> bool:
        """True iff ``side`` has exactly one group (a side with no pieces does not)."""
        black, white = self._compute_regions()
        return len(black if side == BLACK else white) == 1

    def winner(self) -> Optional[str]:
        """Return the winner, ``EMPTY`` for a tie, or None while the game goes on.

        If both sides are connected, the side that just moved wins.
        """
        if self._winner_known:
            return self._winner
        black = self.pieces_contiguous(BLACK)
        white = self.pieces_contiguous(WHITE)
        result: Optional[str]
        if black and white:
            result = opposite(self.turn)
        elif black:
            result = BLACK
        elif white:
            result = WHITE
        elif self.moves_made() >= self.move_limit:
            result = EMPTY
        else:
            result = None
        self._winner = result
        self._winner_known = True
        return result

    def game_over(self) -> bool:
        return self.winner() is not None

    # --- Dunder ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares and self.turn == other.turn

    def __hash__(self) -> int:
        return hash((tuple(self.squares), self.turn))

    def __str__(self) -> str:
        lines = ["==="]
        for r in range(BOARD_SIZE - 1, -1, -1):
            lines.append("    " + "".join(f"{self.squares[sq(c, r)]} " for c in range(BOARD_SIZE)))
        lines.append(f"Next move: {full_name(self.turn)}")
        lines.append("===")
        return "\n".join(lines)


def _check_square(s: int) -> None:
    if not 0 <= s < BOARD_SIZE * BOARD_SIZE:
        raise ValueError(f"invalid square index: {s}")
