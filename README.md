# backgammon-board

A pure-Python backgammon board and turn engine. It keeps track of the thirty
pieces, the dice in play and temporary moves that can be undone. It handles
pieces being hit and borne off. It can record every roll, move, undo and
finished turn in an in-memory action log. The log can be replayed onto a board
or written out as a plain-text match record.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `backgammon_board.piece`

- `Piece` is a single checker. It has a confirmed (`raw_position`) position
  and a stack of temporary moves. `position` includes the pending moves.
  - `temp_move`, `undo_last_move` and `undo` add or take back pending moves.
  - `confirm_move` and `set_position` fix the piece where it stands.
  - `is_off`, `in_home`, `in_rack`, `last_position`, `contains_temp_move` and
    `exact_move_to_rack` answer questions about the piece.
- `PieceList` is an immutable snapshot of pieces.
- `UndoMove` records a used die.
- `GameMove` records a move made during the game.

### `backgammon_board.board`

- `Board` holds the thirty pieces, starting in the standard layout.
  - `reset_positions` and `load_pieces` set up the pieces.
  - `get_pieces`, `get_off_pieces`, `get_piece` and `remove_piece` find or
    remove pieces.
  - `check_took`, `is_blocked`, `is_blot` and `is_highest_piece` ask about
    points and pieces.
  - `pips`, `calculate_take_risk`, `in_home`, `num_pieces_on_board`,
    `all_in_home` and `all_off` answer questions about a side.
  - `confirm_moves` and `undo_temp_moves` fix or drop every pending move.
- `calculate_to_position` gives the landing point of a move.
- `ANY_COLOR` (2) is the colour filter matching both sides. 1 is white and
  0 is black.

### `backgammon_board.actions`

- `ActionType` lists the kinds of action.
- `Action` is one recorded action. It is a frozen dataclass.
- `ActionLog` is an append-only in-memory store.
  - `insert_action` records an action.
  - `actions(game_id)` returns the actions of one game.
  - `actions_to(action_id, last_id)` returns the actions after `last_id` and
    up to `action_id`.
  - A log can be iterated over and has a length.

### `backgammon_board.game`

`PieceModel` holds a `Board` plus the turn state:

- Dice: `set_dice`, `moves`, `display_dice`, `set_display_dice` and
  `reverse_dice`. A double gives four moves.
- Moving: `temp_move` and `analysis_move`.
- Hitting and placing pieces: `check_take`, `load_move` and `load_moves`.
- Undoing: `undo_last_move_action` and `undo_move_action`.
- Ending a turn: `end_turn`, `confirm_moves`, `user_finished_turn` and
  `clear_moves`.
- Checking what is possible: `has_piece_off`, `can_come_on`, `can_move`,
  `can_move_piece` and `check_finished`.
- Rebuilding a position: `replay_actions`.

When a `PieceModel` is given an `ActionLog`, it records rolls, moves, undos
and finished turns in that log.

Listeners registered with `subscribe` are called as `listener(event, *args)`,
where `event` is a `GameEvent`. `subscribe` returns a function that removes
the listener.

The module also provides `compare_dice` and `NO_TAKE`. `NO_TAKE` (-1000) is
the value recorded for a move that hit nothing.

### `backgammon_board.gamemodel`

`GameModel` is an ordered list of game objects.

- Each row's fields are read with `data(row, role)`, where `role` is a
  `GameRole`.
- `role_names` maps each role to its display name.

### `backgammon_board.sgf`

- `build_sgf` renders a list of actions as a plain-text match record. It
  writes a header, turn lines in two padded columns, doubles, wins and
  running scores.
- `save_sgf` writes the record of one game, played as "Human" against
  "Computer", to a file. It returns the text it wrote.

## Example

```python
from backgammon_board.actions import ActionLog
from backgammon_board.game import PieceModel
from backgammon_board.sgf import build_sgf

log = ActionLog()
model = PieceModel(log)
model.set_current_side(True)
model.set_dice(True, 3, 1, True)
print(model.moves())            # [3, 1]
model.temp_move(17, True, False, 1)
model.undo_last_move_action()   # puts the piece back
model.user_finished_turn(True)

print(build_sgf(0, "Alice", "Bob", "today", 1, 1, log.actions(0)))
```

Positions run from 1 to 24. White moves upwards and bears off past 24. Black
moves downwards and bears off past 1. A piece that has been hit has the raw
position -1 until it comes back onto the board.

## What it does not do

This package is the board and rules engine only. It does not provide:

- a user interface or a command to run;
- a computer opponent or move analysis;
- puzzles;
- online play or synchronisation with a server;
- persistent storage. The action log lives in memory only.

Dice are not rolled for you: pass the values to `set_dice`.