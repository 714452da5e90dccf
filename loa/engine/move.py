from __future__ import annotations

from dataclasses import dataclass, field, replace

from .geometry import square_to_str, str_to_square


MOVE_SEPARATOR = "-"


@dataclass(frozen=True)
class Move:
    """A single move of one piece along a line.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).
        capture (bool): True iff the destination held an opposing piece when
            the move was made. Not part of equality or hashing.
    """

    from_sq: int
    to_sq: int
    capture: bool = field(default=False, compare=False)

    def capture_move(self) -> "Move":
        """Return a copy of this move flagged as a capture."""
        return replace(self, capture=True)

    def to_str(self) -> str:
        """Serialize the move, e.g. ``"c1-f4"``."""
        return square_to_str(self.from_sq) + MOVE_SEPARATOR + square_to_str(self.to_sq)

    def __str__(self) -> str:
        return self.to_str()


def parse_move(text: str) -> Move:
    """Parse a move string such as ``"c1-f4"``.

    Args:
        text (str): Two square designators joined by ``-``.

    Returns:
        Move: Parsed (non-capture) move; legality is not checked.

    Raises:
        ValueError: If the string is malformed or names an invalid square.
    """
    parts = text.strip().split(MOVE_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"invalid move: {text!r}")
    return Move(str_to_square(parts[0]), str_to_square(parts[1]))
