"""Plain-text match records built from recorded game actions."""

from __future__ import annotations

from datetime import datetime
from os import PathLike
from pathlib import Path
from typing import Iterable

from .actions import Action, ActionLog, ActionType

COLUMN_WIDTH = 50
"""Width of the left-hand column (the first player's half of a turn line)."""

_CRLF = "\r\n"


def _pad_last_line(text: str) -> str:
    """Pad the last line of ``text`` with spaces to the column width."""
    last_line = text.rsplit(_CRLF, 1)[-1]
    missing = COLUMN_WIDTH - len(last_line)
    return text + " " * missing if missing > 0 else text


def _score_line(player1: str, score1: int, player2: str, score2: int) -> str:
    left = f"{player1} : {score1}".ljust(COLUMN_WIDTH)
    return f"{left}{player2} : {score2}{_CRLF}"


def _format_move(action: Action) -> str:
    destination = action.dice1 + action.dice2
    target = "Off" if destination > 24 or destination < 1 else str(destination)
    return f" {action.dice1}/{target}"


def _header(game_id: int, player1: str, player2: str, date: str, to_score: int) -> str:
    lines = [
        '[Site "Backgammon App"] ',
        f'[Match ID "{game_id}"] ',
        '[Event "Computer Match"] ',
        '[Round "0"] ',
        f'[Player 1 "{player1}"] ',
        f'[Player 2 "{player2}"] ',
        f'[Event Date  " {date}"] ',
        '[Event Time  " 00:00"] ',
        '[Variation  "Backgammon"] ',
        '[Unrated  "On"] ',
        '[Crawford  "Off"] ',
        '[CubeLimit  "1024"] ',
        '[ClockType  "Off"] ',
        "",
        f"{to_score} point match ",
        "",
        "",
    ]
    return _CRLF.join(lines) + _CRLF


def build_sgf(
    game_id: int,
    player1: str,
    player2: str,
    date: str,
    to_score: int,
    num_matches: int,
    actions: Iterable[Action],
) -> str:
    """Render recorded actions as a match record.

    Each turn line holds the first player's roll and moves in a padded left
    column and the second player's in the right. Moves are written
    ``from/to``, with ``Off`` for a piece borne off.
    """
    actions = list(actions)
    text = _header(game_id, player1, player2, date, to_score)

    move_index = 1
    dice1 = dice2 = 0
    pending_moves: list[Action] = []
    first_turn = True
    doubled = False
    double_val = 1
    score_white = 0
    score_black = 0
    game_number = 1

    for match_number in range(num_matches):
        if match_number == 0:
            text += f"Game {game_number}{_CRLF}"
            text += _score_line(player1, score_white, player2, score_black)

        for action in actions:
            kind = action.action
            if kind == ActionType.TURN_FINISH:
                if doubled:
                    text += "Takes "
                    doubled = False
                else:
                    if first_turn:
                        text += f"{move_index}) "
                    text += f" {dice1}{dice2}:"
                    if pending_moves:
                        text += "".join(_format_move(m) for m in pending_moves)
                    else:
                        text += " No Move"
                text = _pad_last_line(text)
                pending_moves.clear()
                if not first_turn:
                    text += _CRLF
                    move_index += 1
                first_turn = not first_turn
            elif kind == ActionType.ROLL:
                dice1, dice2 = action.dice1, action.dice2
            elif kind == ActionType.UNDO:
                pending_moves.clear()
            elif kind == ActionType.MOVE:
                pending_moves.append(action)
            elif kind == ActionType.WON:
                text += f"Wins {double_val} points{_CRLF} {_CRLF}"
                if action.is_white:
                    score_white += double_val
                else:
                    score_black += double_val
                game_number += 1
                text += f"Game {game_number}{_CRLF}"
                text += _score_line(player1, score_white, player2, score_black)
                double_val = 1
                move_index = 1
                first_turn = True
                pending_moves.clear()
            elif kind == ActionType.DOUBLE:
                double_val *= 2
                text += f"Doubles => {double_val}".ljust(COLUMN_WIDTH)
                if not first_turn:
                    text += _CRLF
                first_turn = not first_turn
                doubled = True

        text += _CRLF * 3
    return text


def _qt_style_date(moment: datetime) -> str:
    return f"{moment:%a %b} {moment.day} {moment:%H:%M:%S %Y}"


def save_sgf(
    path: str | PathLike[str],
    game_id: int,
    actions: ActionLog | Iterable[Action],
) -> str:
    """Write the record of one human-versus-computer game to ``path``.

    ``actions`` is either a log, from which the game's actions are taken, or
    the actions themselves. Returns the text written.
    """
    if isinstance(actions, ActionLog):
        game_actions = actions.actions(game_id)
    else:
        game_actions = [a for a in actions if a.game_id == game_id]
    text = build_sgf(
        game_id, "Human", "Computer", _qt_style_date(datetime.now()), 1, 1, game_actions
    )
    with Path(path).open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    return text