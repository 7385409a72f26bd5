"""Exhaustive minimax search for the computer's next Tic Tac Toe move."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .game import (
    BOARD_SIZE,
    PLAYER_MOVES,
    Board,
    Path,
    Player,
    apply_move,
    available_moves,
    has_empty_square,
    other_player,
    winner,
)

WIN_SCORE = 10
CENTER: Path = (BOARD_SIZE // 2, BOARD_SIZE // 2)


class SearchResult(NamedTuple):
    score: float
    move: Optional[Path]


def minimax(board: Board, player: Player, depth: int = 0) -> SearchResult:
    """Score ``board`` with ``player`` to move, from the computer's view.

    Wins are worth ``10 - depth`` to the side that makes them, so the search
    prefers the quickest win and the slowest loss. Ties between equally good
    squares go to the first one in row-major order.
    """
    # Terminal/leaf
    won_by = winner(board)
    if won_by is not None:
        value = WIN_SCORE - depth
        return SearchResult(value if won_by == Player.COMPUTER else -value, None)
    if not has_empty_square(board):
        return SearchResult(0, None)

    maximizing = player == Player.COMPUTER
    best = SearchResult(-math.inf if maximizing else math.inf, None)
    for path in available_moves(board):
        child = apply_move(board, path, PLAYER_MOVES[player])
        score, _ = minimax(child, other_player(player), depth + 1)
        if maximizing and score > best.score:
            best = SearchResult(score, path)
        elif not maximizing and score < best.score:
            best = SearchResult(score, path)
    return best


def next_move(board: Board) -> Optional[Path]:
    """Return the computer's best square, or None when no move remains."""
    if len(available_moves(board)) == BOARD_SIZE * BOARD_SIZE:
        # Every opening draws with perfect play; take the centre.
        return CENTER
    return minimax(board, Player.COMPUTER, 0).move
