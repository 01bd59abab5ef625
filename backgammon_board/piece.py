"""Checkers on the board and the records kept of their moves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


class Piece:
    """A checker with a confirmed position and pending (temporary) moves.

    Positions 1-24 are board points, -1 means taken off by the opponent
    (on the bar), and anything else means borne off by its owner.
    """

    def __init__(self, id: int, position: int, is_white: bool, temp_diff: int = 0) -> None:
        self.id = id
        self._position = position
        self._temp_diff = temp_diff
        self.is_white = bool(is_white)
        self._temp_moves: list[int] = []

    def __repr__(self) -> str:
        return (
            f"Piece(id={self.id}, position={self.position}, "
            f"raw_position={self._position}, is_white={self.is_white})"
        )

    @property
    def raw_position(self) -> int:
        return self._position

    @property
    def temp_diff(self) -> int:
        return self._temp_diff

    @property
    def position(self) -> int:
        """Current position including pending moves; 0 while on the bar."""
        return (0 if self.is_off else self._position) + self._temp_diff

    @property
    def is_off(self) -> bool:
        """True while the piece sits on the bar with no pending move."""
        return self._position == -1 and self._temp_diff == 0

    @property
    def in_home(self) -> bool:
        pos = self.position
        return 18 < pos < 25 if self.is_white else 0 < pos < 7

    @property
    def in_rack(self) -> bool:
        pos = self.position
        return pos < -1 or pos > 24 or pos == 0

    @property
    def temp_moves(self) -> list[int]:
        return list(self._temp_moves)

    @property
    def last_position(self) -> int:
        """Position before the most recent pending move."""
        if self._temp_moves:
            return self.position - self._temp_moves[-1]
        return self.position

    def set_position(self, position: int) -> None:
        """Fix the piece at ``position``, dropping pending moves; 0 is ignored."""
        if position != 0:
            self._position = position
            self._temp_diff = 0
            self._temp_moves.clear()

    def contains_temp_move(self, move: int) -> bool:
        return any(m == move or -m == move for m in self._temp_moves)

    def undo(self) -> None:
        """Discard all pending moves."""
        self._temp_diff = 0
        self._temp_moves.clear()

    def temp_move(self, move: int) -> None:
        self._temp_diff += move
        self._temp_moves.append(move)

    def confirm_move(self) -> None:
        self.set_position(self.position)

    def exact_move_to_rack(self, move: int) -> bool:
        if self.is_white:
            return 25 - (self.position - move) == 0
        return self.position + move == 0

    def undo_last_move(self) -> None:
        """Take back the most recent pending move."""
        if not self._temp_moves:
            raise IndexError("no pending move to undo")
        self._temp_diff -= self._temp_moves.pop()


class PieceList:
    """An immutable snapshot of a collection of pieces."""

    def __init__(self, pieces: Iterable[Piece]) -> None:
        self._pieces = tuple(pieces)

    @property
    def pieces(self) -> list[Piece]:
        return list(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)


@dataclass(frozen=True)
class UndoMove:
    """A used die: the piece it moved, the piece it took (-1000 if none), its value."""

    piece_id: int
    taken_piece_id: int
    move: int


@dataclass
class GameMove:
    """A move made during the game; the die value is stored unsigned."""

    piece: Piece | None
    dice_val: int
    from_position: int
    is_white: bool
    turn: int
    removed_piece: bool = False

    def __post_init__(self) -> None:
        self.dice_val = abs(self.dice_val)