"""A list of games exposed row by row through named roles."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable

_USER_ROLE = 0x0100


class GameRole(IntEnum):
    """Roles under which a game's fields are read."""

    INDEX = _USER_ROLE + 1
    NAME = _USER_ROLE + 2
    TO_SCORE = _USER_ROLE + 3
    SCORE1 = _USER_ROLE + 4
    SCORE2 = _USER_ROLE + 5
    DOUBLE = _USER_ROLE + 6
    MATCH = _USER_ROLE + 7


_ROLE_ATTRIBUTES = {
    GameRole.INDEX: "id",
    GameRole.NAME: "name",
    GameRole.TO_SCORE: "to_score",
    GameRole.SCORE1: "score1",
    GameRole.SCORE2: "score2",
    GameRole.DOUBLE: "double_val",
    GameRole.MATCH: "match_id",
}

_ROLE_NAMES = {
    GameRole.INDEX: "index",
    GameRole.NAME: "name",
    GameRole.TO_SCORE: "toScore",
    GameRole.SCORE1: "score1",
    GameRole.SCORE2: "score2",
    GameRole.DOUBLE: "double",
    GameRole.MATCH: "match",
}


class GameModel:
    """Ordered collection of games.

    A game is any object with the attributes ``id``, ``name``, ``to_score``,
    ``score1``, ``score2``, ``double_val`` and ``match_id``.
    """

    def __init__(self) -> None:
        self._games: list[Any] = []

    @property
    def games(self) -> list[Any]:
        return list(self._games)

    def add_game(self, game: Any) -> None:
        self._games.append(game)

    def set_games(self, games: Iterable[Any]) -> None:
        """Append every game in ``games``."""
        self._games.extend(games)

    def clear_games(self) -> None:
        self._games.clear()

    def row_count(self) -> int:
        return len(self._games)

    def data(self, row: int, role: int) -> Any:
        """The field of the game at ``row`` named by ``role``, or None."""
        if row < 0 or row >= len(self._games):
            return None
        try:
            attribute = _ROLE_ATTRIBUTES[GameRole(role)]
        except ValueError:
            return None
        return getattr(self._games[row], attribute)

    def role_names(self) -> dict[GameRole, str]:
        return dict(_ROLE_NAMES)

    def __len__(self) -> int:
        return len(self._games)