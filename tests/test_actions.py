import pytest

from backgammon_board.actions import Action, ActionLog, ActionType


@pytest.mark.parametrize(
    "raw, expected",
    [
        (4, ActionType.ROLL),
        (5, ActionType.TURN_FINISH),
        (6, ActionType.UNDO),
        (7, ActionType.MOVE),
    ],
)
def test_replay_action_codes_map_to_types(raw, expected):
    log = ActionLog()
    recorded = log.insert_action(1, 1, 0, 0, True, raw, 0, False)
    assert recorded.action is expected
    assert recorded.action == raw


def test_insert_assigns_increasing_ids():
    log = ActionLog()
    first = log.insert_action(1, 2, 3, 4, True, ActionType.ROLL, 0, False)
    second = log.insert_action(1, 2, 5, 6, False, ActionType.MOVE, 0, True)
    assert second.id == first.id + 1
    assert len(log) == 2


def test_insert_keeps_fields_and_coerces_types():
    log = ActionLog()
    recorded = log.insert_action(9, 8, 3, 4, 1, 7, 12, 0)
    assert isinstance(recorded, Action)
    assert recorded.match_id == 9
    assert recorded.game_id == 8
    assert (recorded.dice1, recorded.dice2) == (3, 4)
    assert recorded.is_white is True
    assert recorded.action is ActionType.MOVE
    assert recorded.context == 12
    assert recorded.is_computer is False


def test_invalid_action_type_rejected():
    log = ActionLog()
    with pytest.raises(ValueError):
        log.insert_action(1, 1, 0, 0, True, 99, 0, False)
    assert len(log) == 0


def test_actions_filters_by_game_in_order():
    log = ActionLog()
    a = log.insert_action(1, 1, 1, 2, True, ActionType.ROLL, 0, False)
    log.insert_action(1, 2, 1, 2, True, ActionType.ROLL, 0, False)
    c = log.insert_action(1, 1, 6, -3, True, ActionType.MOVE, 0, False)
    assert log.actions(1) == [a, c]
    assert log.actions(3) == []


def test_actions_to_range():
    log = ActionLog()
    recorded = [
        log.insert_action(1, 1, 0, 0, True, ActionType.TURN_FINISH, 0, False)
        for _ in range(5)
    ]
    selected = log.actions_to(recorded[3].id, recorded[1].id)
    assert selected == recorded[2:4]


def test_iteration_matches_insert_order():
    log = ActionLog()
    recorded = [
        log.insert_action(1, 1, n, n, False, ActionType.ROLL, 0, False)
        for n in (1, 2, 3)
    ]
    assert list(log) == recorded