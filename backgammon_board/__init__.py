"""Backgammon board state, move rules, an in-memory action log and match record export."""

__version__ = "1.0.0"
__all__ = ["actions", "piece", "gamemodel", "board", "game", "sgf"]