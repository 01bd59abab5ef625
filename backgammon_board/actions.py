"""Recorded game actions and an in-memory log of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Iterator


class ActionType(IntEnum):
    """Kinds of action recorded during a game."""

    NONE = 0
    START_ROLL = 1
    FIRST_TURN_REROLL = 2
    FIRST_TURN = 3
    ROLL = 4
    TURN_FINISH = 5
    UNDO = 6
    MOVE = 7
    WON = 8
    DOUBLE = 9
    FINISHED = 10


@dataclass(frozen=True)
class Action:
    """One recorded action.

    For a ``ROLL`` the dice fields hold the two dice. For a ``MOVE``,
    ``dice1`` is the starting position and ``dice2`` the signed distance.
    ``context`` holds the id of a piece taken by the move, if any.
    """

    id: int
    match_id: int
    game_id: int
    dice1: int
    dice2: int
    is_white: bool
    action: ActionType
    time: datetime = field(default_factory=datetime.now)
    context: int = 0
    is_computer: bool = False


class ActionLog:
    """Append-only, in-memory store of actions, numbered from 1."""

    def __init__(self) -> None:
        self._actions: list[Action] = []

    def insert_action(
        self,
        match_id: int,
        game_id: int,
        dice1: int,
        dice2: int,
        is_white: bool,
        action: ActionType | int,
        context: int,
        is_computer: bool,
    ) -> Action:
        """Record an action and return it with its new id."""
        recorded = Action(
            id=len(self._actions) + 1,
            match_id=match_id,
            game_id=game_id,
            dice1=dice1,
            dice2=dice2,
            is_white=bool(is_white),
            action=ActionType(action),
            time=datetime.now(),
            context=context,
            is_computer=bool(is_computer),
        )
        self._actions.append(recorded)
        return recorded

    def actions(self, game_id: int) -> list[Action]:
        """All actions of one game, oldest first."""
        return [a for a in self._actions if a.game_id == game_id]

    def actions_to(self, action_id: int, last_id: int) -> list[Action]:
        """Actions whose id lies after ``last_id`` and up to ``action_id``."""
        return [a for a in self._actions if last_id < a.id <= action_id]

    def __iter__(self) -> Iterator[Action]:
        return iter(list(self._actions))

    def __len__(self) -> int:
        return len(self._actions)