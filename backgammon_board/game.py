"""Turn logic for a backgammon game: dice, pending moves, takes and undo."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Callable, Iterable

from .actions import Action, ActionLog, ActionType
from .board import ANY_COLOR, Board
from .piece import GameMove, Piece, UndoMove

NO_TAKE = -1000
"""Value recorded for a move that took no piece."""

_BEAR_OFF_STEP = 50

Listener = Callable[..., Any]


class GameEvent(Enum):
    """Notifications a PieceModel sends to its listeners."""

    CURRENT_SIDE_CHANGED = auto()
    MOVES_CHANGED = auto()
    NO_MOVES = auto()
    UNDID = auto()
    TURN_FINISHED_CHANGED = auto()
    POSITIONS_CHANGED = auto()
    STARTED_CHANGED = auto()
    TURN_FINISHED = auto()
    WON_GAME = auto()
    WHOSE_DOUBLE_CHANGED = auto()
    SEND_MOVE = auto()
    SYNC_TURN_FINISHED = auto()


def compare_dice(dicex1: int, dicex2: int, dicey1: int, dicey2: int) -> bool:
    """Whether the roll (dicey1, dicey2) uses the same dice as (dicex1, dicex2)."""
    remaining = [dicex1, dicex2]
    for die in (dicey1, dicey2):
        if die in remaining:
            remaining.remove(die)
    return not remaining


def _side_at(pieces: list[Piece]) -> int:
    """1 for white, 0 for black, 2 when the point is empty."""
    if not pieces:
        return ANY_COLOR
    return int(pieces[0].is_white)


class PieceModel:
    """A board plus the dice and pending moves of the side to play.

    Every change is announced to subscribed listeners as
    ``listener(event, *args)``. Actions are recorded in ``action_log`` when
    one is given.
    """

    def __init__(self, action_log: ActionLog | None = None) -> None:
        self.action_log = action_log
        self.board = Board()
        self._listeners: list[Listener] = []
        self._white_turn = False
        self._started = False
        self._turn_finished = False
        self._whose_double = 0
        self._current_turn = 0
        self._game_id = 0
        self._match_id = 0
        self._is_computer = False
        self._last_roll: tuple[int, int] | None = None
        self._moves: list[int] = []
        self._display_dice: list[int] = []
        self._used_moves: list[UndoMove] = []
        self._moves_this_game: list[GameMove] = []

    # -- notification -------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: GameEvent, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(event, *args)

    def _record(
        self, dice1: int, dice2: int, is_white: bool, action: ActionType, context: int = 0
    ) -> None:
        if self.action_log is not None:
            self.action_log.insert_action(
                self._match_id, self._game_id, dice1, dice2, is_white,
                action, context, self._is_computer,
            )

    # -- simple state -------------------------------------------------

    @property
    def is_white(self) -> bool:
        return self._white_turn

    @property
    def started(self) -> bool:
        return self._started

    @property
    def is_turn_finished(self) -> bool:
        return self._turn_finished

    @property
    def whose_double(self) -> int:
        return self._whose_double

    @property
    def last_roll(self) -> tuple[int, int] | None:
        return self._last_roll

    @property
    def current_turn(self) -> int:
        return self._current_turn

    @property
    def pieces(self) -> list[Piece]:
        return self.board.pieces

    @property
    def moves_this_game(self) -> list[GameMove]:
        return list(self._moves_this_game)

    def set_current_side(self, is_white: bool) -> None:
        self._white_turn = bool(is_white)
        self._emit(GameEvent.CURRENT_SIDE_CHANGED)

    def set_turn_finished(self, finished: bool) -> None:
        self._turn_finished = bool(finished)
        self._emit(GameEvent.TURN_FINISHED_CHANGED)

    def set_started(self, started: bool) -> None:
        self._started = bool(started)
        self._emit(GameEvent.STARTED_CHANGED)

    def set_whose_double(self, whose_double: int) -> None:
        """0: nobody has doubled, 1: white doubled last, 2: black doubled last."""
        self._whose_double = whose_double
        self._emit(GameEvent.WHOSE_DOUBLE_CHANGED)

    def set_match_id(self, match_id: int) -> None:
        self._match_id = match_id

    def set_game_id(self, game_id: int) -> None:
        self._game_id = game_id

    # -- dice ---------------------------------------------------------

    def _without_used(self, dice: list[int]) -> list[int]:
        remaining = list(dice)
        for used in reversed(self._used_moves):
            if used.move in remaining:
                remaining.remove(used.move)
        return remaining

    def moves(self) -> list[int]:
        """Dice still available this turn."""
        return self._without_used(self._moves)

    def display_dice(self) -> list[int]:
        """Dice shown to the player that have not been used yet."""
        return self._without_used(self._display_dice)

    def set_display_dice(self, dice1: int, dice2: int) -> None:
        if not self._display_dice:
            self._display_dice.extend((dice1, dice2))
            self._emit(GameEvent.MOVES_CHANGED)

    def set_dice(
        self,
        is_white: bool,
        dice1: int,
        dice2: int,
        current_action: bool,
        force_calc: bool = False,
        add_action: bool = True,
    ) -> None:
        """Take a new roll; doubles give four moves."""
        self.set_started(True)
        calc_moves = force_calc
        if not self.moves():
            calc_moves = True
        elif not compare_dice(self._moves[0], self._moves[1], dice1, dice2):
            calc_moves = True
        self._used_moves.clear()
        self._last_roll = (dice1, dice2)
        if add_action:
            self._record(dice1, dice2, is_white, ActionType.ROLL)
        if not calc_moves:
            return
        self._moves = [dice1] * 4 if dice1 == dice2 else [dice1, dice2]
        if current_action and bool(is_white) == self._white_turn and not self.can_move(is_white):
            self._record(dice1, dice2, is_white, ActionType.TURN_FINISH)
            self._turn_finished = True
            self._emit(GameEvent.TURN_FINISHED_CHANGED)
            self._emit(GameEvent.NO_MOVES, False)
        self._emit(GameEvent.MOVES_CHANGED)

    def reverse_dice(self) -> None:
        self._moves.reverse()
        self._emit(GameEvent.MOVES_CHANGED)

    def _remove_dice(self, piece_id: int, dice_val: int, from_pos: int, taken: int = NO_TAKE) -> None:
        self._used_moves.append(UndoMove(piece_id, taken, abs(dice_val)))
        self._moves_this_game.append(
            GameMove(None, dice_val, from_pos, self._white_turn, self._current_turn)
        )
        self._emit(GameEvent.MOVES_CHANGED)

    # -- moving -------------------------------------------------------

    def _all_in_home(self) -> bool:
        return self.board.all_in_home(self._white_turn)

    def _target(self, piece: Piece, move: int) -> tuple[int, int]:
        """Signed move and landing point of ``piece`` for a die of ``move``."""
        if piece.is_off:
            return move, (move if piece.is_white else 25 - move)
        signed = move if piece.is_white else -move
        to_position = piece.position + signed
        if to_position == -1:
            to_position = -2
        return signed, to_position

    def _finish_if_stuck(self, check_all_off: bool) -> None:
        if self.moves():
            if not self.can_move(self.is_white) or (check_all_off and self.board.all_off(self.is_white)):
                self._turn_finished = True
                self._emit(GameEvent.TURN_FINISHED_CHANGED)
                self._emit(GameEvent.NO_MOVES, False)
        else:
            self._turn_finished = True
            self._emit(GameEvent.TURN_FINISHED_CHANGED)

    def temp_move(
        self, from_pos: int, is_my_turn: bool, from_server: bool, is_white_turn: int = ANY_COLOR
    ) -> int:
        """Move the piece at ``from_pos`` by the first die that allows it.

        Returns the landing point, or 0 when no die can move the piece.
        """
        for die in self.moves():
            color = is_white_turn if not from_server else ANY_COLOR
            piece = self.board.get_piece(from_pos, False, color)
            if piece is None:
                continue
            was_off = piece.is_off
            move, to_position = self._target(piece, die)
            took = NO_TAKE
            moved = False
            if 0 < to_position < 25:
                at_target = self.board.get_pieces(to_position)
                side = _side_at(at_target)
                if self.has_piece_off() and not piece.is_off:
                    return 0
                if len(at_target) < 2 or side == int(piece.is_white):
                    took = self.check_take(at_target, piece, side, True)
                    self._remove_dice(piece.id, move, piece.position, took)
                    step = to_position + 1 if piece.is_off else move
                    self._record(piece.position, step, piece.is_white, ActionType.MOVE, took)
                    piece.temp_move(step)
                    moved = True
            elif self._all_in_home():
                bearing_off = (piece.is_white and to_position >= 25) or (
                    not piece.is_white and to_position <= 0
                )
                if bearing_off or self.board.is_highest_piece(piece.is_white, piece.position):
                    step = _BEAR_OFF_STEP if piece.is_white else -_BEAR_OFF_STEP
                    self._remove_dice(piece.id, move, piece.position)
                    self._record(piece.position, step, piece.is_white, ActionType.MOVE, 0)
                    piece.temp_move(step)
                    moved = True

            if moved:
                self._check_moves(is_my_turn)
                self._emit(GameEvent.POSITIONS_CHANGED)
                self._finish_if_stuck(check_all_off=True)
                if not from_server:
                    if was_off:
                        start = 0 if piece.is_white else 25
                        signed = move if piece.is_white else -move
                        self._emit(GameEvent.SEND_MOVE, -1, start + signed, self.is_white, took)
                    else:
                        self._emit(GameEvent.SEND_MOVE, from_pos, to_position, self.is_white, took)
                return to_position
        return 0

    def analysis_move(self, from_pos: int, move: int) -> int:
        """Move the piece at ``from_pos`` by exactly ``move``; 0 if impossible."""
        piece = self.board.get_piece(from_pos, False)
        if piece is None:
            return 0
        move, to_position = self._target(piece, move)
        moved = False
        if 0 < to_position < 25:
            at_target = self.board.get_pieces(to_position)
            side = _side_at(at_target)
            if self.has_piece_off() and not piece.is_off:
                return 0
            if not (len(at_target) < 2 or side == int(piece.is_white)):
                return 0
            take = self.check_take(at_target, piece, side, True)
            self._remove_dice(piece.id, move, from_pos, take)
            piece.temp_move(to_position + 1 if piece.is_off else move)
            moved = True
        elif self._all_in_home():
            if piece.exact_move_to_rack(move) or self.board.is_highest_piece(
                piece.is_white, piece.position
            ):
                self._remove_dice(piece.id, move, from_pos)
                piece.temp_move(_BEAR_OFF_STEP if piece.is_white else -_BEAR_OFF_STEP)
                moved = True
                to_position = piece.position

        if not moved:
            return 0
        self._emit(GameEvent.POSITIONS_CHANGED)
        self._finish_if_stuck(check_all_off=False)
        return to_position

    def check_take(
        self, pieces_at_position: list[Piece], taking_piece: Piece, side_at_position: int, temp: bool
    ) -> int:
        """Send a lone opposing piece to the bar; returns its id or NO_TAKE."""
        if len(pieces_at_position) == 1 and (
            side_at_position != int(taking_piece.is_white) or side_at_position == ANY_COLOR
        ):
            victim = pieces_at_position[0]
            if temp:
                victim.temp_move(-(victim.position + 1))
            else:
                victim.set_position(-1)
            return victim.id
        return NO_TAKE

    def load_move(self, piece: Piece | None, to: int) -> bool:
        """Place ``piece`` at ``to`` for good, taking a lone opponent there."""
        if piece is None:
            return False
        at_target = self.board.get_pieces(to)
        self.check_take(at_target, piece, _side_at(at_target), False)
        piece.set_position(to)
        self._emit(GameEvent.POSITIONS_CHANGED)
        return True

    def load_moves(self, moves: Iterable[tuple[int, int]]) -> None:
        """Replay ``(from_position, to_position)`` pairs, one per turn."""
        for from_pos, to in moves:
            self.set_started(True)
            self.end_turn()
            self.load_move(self.board.get_piece(from_pos), to)
        self._emit(GameEvent.POSITIONS_CHANGED)

    def replay_actions(self, actions: Iterable[Action]) -> bool:
        """Rebuild the position from recorded actions; True if there were any."""
        found = False
        pending: list[tuple[int, int]] = []
        for action in actions:
            kind = action.action
            if kind == ActionType.MOVE:
                pending.append((action.dice1, action.dice1 + action.dice2))
            elif kind == ActionType.TURN_FINISH:
                self.end_turn()
                for from_pos, to in pending:
                    self.load_move(self.board.get_piece(from_pos), to)
                pending.clear()
            elif kind == ActionType.UNDO:
                pending.clear()
            elif kind == ActionType.ROLL:
                self.set_dice(action.is_white, action.dice1, action.dice2, True, False, False)
                pending.clear()
            found = True
        self._emit(GameEvent.POSITIONS_CHANGED)
        return found

    # -- turns and undo -----------------------------------------------

    def end_turn(self) -> None:
        """Advance the turn counter and drop pending moves."""
        self._current_turn += 1
        self.board.undo_temp_moves()
        self._emit(GameEvent.POSITIONS_CHANGED)

    def confirm_moves(self) -> None:
        self.board.confirm_moves()
        self._emit(GameEvent.MOVES_CHANGED)
        self._emit(GameEvent.POSITIONS_CHANGED)

    def user_finished_turn(self, add_action: bool = True) -> None:
        if add_action:
            self._record(0, 0, self._white_turn, ActionType.TURN_FINISH)
        self.set_turn_finished(False)
        self._emit(GameEvent.SYNC_TURN_FINISHED)
        self.clear_moves()

    def _undo_function(self) -> bool:
        self._used_moves.clear()
        PieceModel.end_turn(self)
        self._turn_finished = False
        self._emit(GameEvent.TURN_FINISHED_CHANGED)
        self._emit(GameEvent.POSITIONS_CHANGED)
        self._emit(GameEvent.MOVES_CHANGED)
        self._emit(GameEvent.UNDID)
        return True

    def undo_move_action(self) -> bool:
        """Take back every pending move of this turn."""
        self._record(0, 0, True, ActionType.UNDO)
        return self._undo_function()

    def undo_last_move_action(self) -> bool:
        """Take back the most recent pending move, and any take it made."""
        if not self._used_moves:
            return False
        last = self._used_moves[-1]
        pieces = self.board.pieces
        for piece in pieces:
            if piece.id != last.piece_id:
                continue
            if last.taken_piece_id != NO_TAKE:
                for victim in pieces:
                    if victim.id == last.taken_piece_id:
                        victim.undo_last_move()
            piece.undo_last_move()
            self._used_moves.pop()
            if self._moves_this_game:
                self._moves_this_game.pop()
            break
        self._turn_finished = False
        self._emit(GameEvent.TURN_FINISHED_CHANGED)
        self._emit(GameEvent.POSITIONS_CHANGED)
        self._emit(GameEvent.MOVES_CHANGED)
        self._emit(GameEvent.UNDID)
        return True

    def clear_moves(self) -> bool:
        self._turn_finished = False
        self._emit(GameEvent.TURN_FINISHED_CHANGED)
        self._used_moves.clear()
        self._display_dice.clear()
        self._moves.clear()
        self._emit(GameEvent.MOVES_CHANGED)
        return True

    def _check_moves(self, is_my_turn: bool) -> None:
        if not self.moves():
            self._turn_finished = True
            self._emit(GameEvent.TURN_FINISHED_CHANGED)
            self._emit(GameEvent.TURN_FINISHED, is_my_turn)
        elif not self.can_move(self.is_white):
            self._turn_finished = True
            self._emit(GameEvent.TURN_FINISHED_CHANGED)
            self._emit(GameEvent.NO_MOVES, False)

    # -- move availability --------------------------------------------

    def has_piece_off(self) -> bool:
        """Whether the side to play has a piece on the bar."""
        return any(p.is_white == self.is_white for p in self.board.get_off_pieces())

    def can_come_on(self, side: bool) -> bool:
        """Whether some remaining die lets a piece of ``side`` enter."""
        for die in self.moves():
            if len(self.board.get_pieces(die if side else 25 - die)) < 2:
                return True
        return False

    def can_move(self, white: bool) -> bool:
        """Whether any remaining die can be played."""
        dice = self.moves()
        if self.has_piece_off():
            for piece in self.board.get_off_pieces():
                for die in dice:
                    if self.can_move_piece(piece, die if self.is_white else 25 - die):
                        return True
            return False
        for piece in self.board.pieces:
            if piece.is_white != bool(white):
                continue
            for die in dice:
                target = piece.position + die if self.is_white else piece.position - die
                if self.can_move_piece(piece, target):
                    return True
        return False

    def can_move_piece(self, piece: Piece, to_position: int) -> bool:
        """Whether ``piece`` may land on ``to_position``."""
        if to_position < 1 or to_position > 24:
            if not self._all_in_home():
                return False
            if to_position in (0, 25):
                return True
            return self.board.is_highest_piece(piece.is_white, piece.position)
        at_target = self.board.get_pieces(to_position)
        return len(at_target) < 2 or at_target[0].is_white == piece.is_white

    def check_finished(self) -> bool:
        """Announce and return whether the side to play has borne off all 15."""
        borne_off = sum(
            1 for p in self.board.pieces if p.is_white == self.is_white and p.in_rack
        )
        if borne_off == 15:
            self._emit(GameEvent.WON_GAME, self.is_white)
            return True
        return False