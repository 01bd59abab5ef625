from backgammon_board.actions import ActionLog, ActionType
from backgammon_board.sgf import COLUMN_WIDTH, build_sgf, save_sgf


def _log(*entries):
    log = ActionLog()
    for kind, d1, d2, white in entries:
        log.insert_action(1, 1, d1, d2, white, kind, 0, False)
    return log


def _render(log, num_matches=1):
    return build_sgf(7, "Alice", "Bob", "today", 5, num_matches, log.actions(1))


def _lines(text):
    return text.split("\r\n")


def test_header_fields():
    text = _render(ActionLog())
    assert '[Match ID "7"]' in text
    assert '[Player 1 "Alice"]' in text
    assert '[Player 2 "Bob"]' in text
    assert '[Event Date  " today"]' in text
    assert "5 point match" in text
    assert '[CubeLimit  "1024"]' in text


def test_first_game_score_line_is_padded():
    lines = _lines(_render(ActionLog()))
    assert "Game 1" in lines
    score = next(line for line in lines if line.startswith("Alice : 0"))
    assert score[COLUMN_WIDTH:] == "Bob : 0"


def test_no_game_block_without_matches():
    text = _render(ActionLog(), num_matches=0)
    assert "Game 1" not in text
    assert text.endswith("point match \r\n\r\n\r\n")


def test_turn_moves_written_from_to():
    log = _log(
        (ActionType.ROLL, 3, 1, True),
        (ActionType.MOVE, 8, -3, False),
        (ActionType.MOVE, 6, -1, False),
        (ActionType.TURN_FINISH, 0, 0, False),
    )
    lines = _lines(_render(log))
    turn = next(line for line in lines if line.startswith("1)"))
    assert turn.rstrip() == "1)  31: 8/5 6/5"
    assert len(turn) == COLUMN_WIDTH


def test_two_turns_share_a_line_and_advance_index():
    log = _log(
        (ActionType.ROLL, 3, 1, True),
        (ActionType.MOVE, 8, -3, False),
        (ActionType.TURN_FINISH, 0, 0, False),
        (ActionType.ROLL, 6, 4, True),
        (ActionType.MOVE, 1, 6, True),
        (ActionType.TURN_FINISH, 0, 0, True),
        (ActionType.ROLL, 2, 2, True),
        (ActionType.TURN_FINISH, 0, 0, False),
    )
    lines = _lines(_render(log))
    first = next(line for line in lines if line.startswith("1)"))
    assert first[COLUMN_WIDTH:].strip() == "64: 1/7"
    assert any(line.startswith("2)") for line in lines)


def test_bear_off_written_as_off():
    log = _log(
        (ActionType.ROLL, 5, 2, True),
        (ActionType.MOVE, 20, 50, True),
        (ActionType.TURN_FINISH, 0, 0, True),
    )
    assert "20/Off" in _render(log)


def test_turn_without_moves_and_undo():
    log = _log(
        (ActionType.ROLL, 6, 6, True),
        (ActionType.MOVE, 13, -6, False),
        (ActionType.UNDO, 0, 0, False),
        (ActionType.TURN_FINISH, 0, 0, False),
    )
    text = _render(log)
    assert "66: No Move" in text
    assert "13/7" not in text


def test_double_then_takes():
    log = _log(
        (ActionType.DOUBLE, 0, 0, True),
        (ActionType.TURN_FINISH, 0, 0, False),
    )
    lines = _lines(_render(log))
    line = next(l for l in lines if l.startswith("Doubles"))
    assert line.startswith("Doubles => 2")
    assert line[COLUMN_WIDTH:].startswith("Takes")


def test_win_scores_doubled_value():
    log = _log(
        (ActionType.DOUBLE, 0, 0, True),
        (ActionType.TURN_FINISH, 0, 0, False),
        (ActionType.WON, 0, 0, True),
    )
    text = _render(log)
    assert "Wins 2 points" in text
    lines = _lines(text)
    assert "Game 2" in lines
    assert any(l.startswith("Alice : 2") and l.endswith("Bob : 0") for l in lines)


def test_save_sgf_writes_file(tmp_path):
    log = ActionLog()
    log.insert_action(0, 3, 4, 2, True, ActionType.ROLL, 0, False)
    log.insert_action(0, 3, 1, 4, True, ActionType.MOVE, 0, False)
    log.insert_action(0, 3, 0, 0, True, ActionType.TURN_FINISH, 0, False)
    log.insert_action(0, 9, 24, -6, False, ActionType.MOVE, 0, False)
    target = tmp_path / "game.sgf"
    text = save_sgf(target, 3, log)
    data = target.read_bytes()
    assert data.decode("utf-8") == text
    assert b"\r\n" in data
    assert '[Player 1 "Human"]' in text
    assert '[Player 2 "Computer"]' in text
    assert "1/5" in text
    assert "24/18" not in text


def test_save_sgf_accepts_plain_actions(tmp_path):
    log = ActionLog()
    log.insert_action(0, 3, 4, 2, True, ActionType.ROLL, 0, False)
    log.insert_action(0, 3, 0, 0, True, ActionType.TURN_FINISH, 0, False)
    from_log = save_sgf(tmp_path / "a.sgf", 3, log)
    from_list = save_sgf(tmp_path / "b.sgf", 3, list(log))
    strip = lambda t: [l for l in _lines(t) if "Event Date" not in l]
    assert strip(from_log) == strip(from_list)