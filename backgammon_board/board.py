"""The set of checkers on a backgammon board and the queries made of it."""

from __future__ import annotations

from typing import Iterable, Iterator

from .piece import Piece

ANY_COLOR = 2
"""Colour filter that matches both sides (1 is white, 0 is black)."""

_STARTING_LAYOUT: tuple[tuple[int, int, bool], ...] = (
    (1, 2, True),
    (6, 5, False),
    (8, 3, False),
    (12, 5, True),
    (13, 5, False),
    (17, 3, True),
    (19, 5, True),
    (24, 2, False),
)


def calculate_to_position(
    is_piece_white: bool, is_user_white: bool, from_position: int, move: int
) -> int:
    """Where a piece lands when moved ``move`` points from ``from_position``.

    A piece on the bar (``-1``) enters at ``move`` for black or ``25 - move``
    for white; otherwise the direction depends on the user's side.
    """
    if from_position == -1:
        return 25 - move if is_piece_white else move
    return from_position + (move if not is_user_white else -move)


def _matches_color(piece: Piece, color: int) -> bool:
    return color == ANY_COLOR or color == int(piece.is_white)


class Board:
    """An ordered collection of pieces, starting in the standard layout."""

    def __init__(self) -> None:
        self._positions: list[Piece] = []
        self.reset_positions()

    @property
    def pieces(self) -> list[Piece]:
        return list(self._positions)

    def __iter__(self) -> Iterator[Piece]:
        return iter(list(self._positions))

    def __len__(self) -> int:
        return len(self._positions)

    def reset_positions(self) -> None:
        """Place all thirty pieces in the starting layout."""
        self._positions = []
        next_id = 0
        for position, count, is_white in _STARTING_LAYOUT:
            for _ in range(count):
                self._positions.append(Piece(next_id, position, is_white))
                next_id += 1

    def load_pieces(self, pieces: Iterable[Piece]) -> None:
        """Replace the pieces on the board."""
        self._positions = list(pieces)

    def get_pieces(self, position: int | None = None, color: int = ANY_COLOR) -> list[Piece]:
        """Pieces at ``position`` of the given colour; all pieces if no position."""
        if position is None:
            return list(self._positions)
        return [
            p for p in self._positions
            if p.position == position and _matches_color(p, color)
        ]

    def get_off_pieces(self, color: int = ANY_COLOR) -> list[Piece]:
        """Pieces sitting on the bar with no pending move."""
        return [
            p for p in self._positions
            if p.raw_position == -1 and p.position == 0 and _matches_color(p, color)
        ]

    def get_piece(
        self, position: int, only_unmoved: bool = True, color: int = ANY_COLOR
    ) -> Piece | None:
        """The first piece at ``position``, or None.

        ``-1`` asks for a piece on the bar; with ``only_unmoved`` false the
        bar piece must also have no pending move.
        """
        for current in self._positions:
            if position == -1 and current.raw_position == -1 and _matches_color(current, color):
                if only_unmoved or current.position == 0:
                    return current
            if current.position == position:
                return current
        return None

    def remove_piece(self, from_position: int) -> Piece | None:
        """Remove and return the first piece at ``from_position``, if any."""
        for index, current in enumerate(self._positions):
            if current.position == from_position:
                return self._positions.pop(index)
        return None

    def check_took(self) -> bool:
        """Whether a pending move has sent a piece to the bar."""
        return any(p.position == -1 and p.raw_position != -1 for p in self._positions)

    def is_blocked(self, is_white: bool, position: int) -> bool:
        """Whether ``position`` holds two or more pieces of the given side."""
        pieces = self.get_pieces(position)
        return len(pieces) > 1 and pieces[0].is_white == bool(is_white)

    def is_blot(self, is_white: bool, position: int) -> bool:
        """Whether ``position`` holds exactly one piece of the given side."""
        pieces = self.get_pieces(position)
        return len(pieces) == 1 and pieces[0].is_white == bool(is_white)

    def is_highest_piece(self, is_white: bool, position: int) -> bool:
        """Whether ``position`` is the side's piece furthest from bearing off."""
        is_white = bool(is_white)
        highest = 25 if is_white else 0
        for p in self._positions:
            if p.is_white != is_white:
                continue
            if is_white:
                highest = min(highest, p.position)
            else:
                highest = max(highest, p.position)
        return highest == position

    def pips(self, side: bool) -> int:
        """Pip count of the side's pieces still on the board or bar."""
        total = 0
        for p in self._positions:
            if p.in_rack or p.is_white != bool(side):
                continue
            total += 25 - p.position if p.is_white else p.position
        return total

    def calculate_take_risk(self, piece_position: int, is_white: bool) -> int:
        """Rough risk that a piece at ``piece_position`` is hit."""
        take_risk = 0
        if is_white:
            for i in range(piece_position, 0, -1):
                if self.get_piece(i, False, 1) is None:
                    continue
                distance = piece_position - i
                if distance < 12:
                    take_risk += 7 - abs(7 - distance)
                else:
                    take_risk += self._double_risk(distance)
        else:
            for i in range(piece_position, 25):
                if self.get_piece(i, False, 0) is None:
                    continue
                distance = piece_position - i
                if distance < 12:
                    take_risk += abs(7 - distance)
                else:
                    take_risk += self._double_risk(distance)
        return take_risk

    @staticmethod
    def _double_risk(distance: int) -> int:
        return sum(1 for d in (3, 4, 5, 6) if distance % d == 0)

    @staticmethod
    def in_home(position: int, color: int) -> bool:
        """Whether ``position`` lies in the home board of ``color``."""
        if color == 0:
            return 0 < position < 7
        return 18 < position < 25

    def num_pieces_on_board(self, color: int) -> int:
        return sum(
            1 for p in self._positions
            if int(p.is_white) == color and 0 < p.position < 25
        )

    def all_in_home(self, is_white: bool) -> bool:
        """Whether every piece of the side is home or borne off."""
        return all(
            p.in_home or p.in_rack
            for p in self._positions
            if p.is_white == bool(is_white)
        )

    def all_off(self, is_white: bool) -> bool:
        """Whether every piece of the side is in the rack."""
        return all(p.in_rack for p in self._positions if p.is_white == bool(is_white))

    def confirm_moves(self) -> None:
        """Make every pending move permanent."""
        for p in self._positions:
            p.confirm_move()

    def undo_temp_moves(self) -> None:
        """Discard every pending move."""
        for p in self._positions:
            p.undo()