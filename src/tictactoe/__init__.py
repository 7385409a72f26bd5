"""Tic Tac Toe package exposing game logic, the minimax AI, and the web application."""

from .ai import next_move
from .game import (
    Move,
    Player,
    apply_move,
    empty_board,
    has_empty_square,
    winner,
    winning_line,
)
from .ui import app

__all__ = [
    "Move",
    "Player",
    "app",
    "apply_move",
    "empty_board",
    "has_empty_square",
    "next_move",
    "winner",
    "winning_line",
]
