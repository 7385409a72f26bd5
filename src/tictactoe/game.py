"""Core rules for classic 3x3 Tic Tac Toe: board, moves, and win detection."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

BOARD_SIZE = 3


class Move(str, Enum):
    """A mark that may be placed on a single square."""

    X = "X"
    O = "O"


class Player(str, Enum):
    """It's either the human's turn or the computer's."""

    HUMAN = "human"
    COMPUTER = "computer"


# Fixed for the whole game: the human always plays X.
PLAYER_MOVES: Dict[Player, Move] = {
    Player.HUMAN: Move.X,
    Player.COMPUTER: Move.O,
}

SquareState = Optional[Move]  # None means the square is open
Board = List[List[SquareState]]
Path = Tuple[int, int]
WinLine = Tuple[Path, Path, Path]


def _build_lines() -> Tuple[WinLine, ...]:
    # Each row is paired with the column of the same index, then diagonals.
    lines: List[WinLine] = []
    for i in range(BOARD_SIZE):
        lines.append(((i, 0), (i, 1), (i, 2)))
        lines.append(((0, i), (1, i), (2, i)))
    lines.append(((0, 0), (1, 1), (2, 2)))
    lines.append(((0, 2), (1, 1), (2, 0)))
    return tuple(lines)


WINNING_LINES: Tuple[WinLine, ...] = _build_lines()


# ---------- Board ----------


def empty_board() -> Board:
    """Return a board with all nine squares open."""
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def _check_path(path: Path) -> None:
    row, col = path
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Square {path!r} is off the board")


def square_state(board: Board, path: Path) -> SquareState:
    row, col = path
    return board[row][col]


def apply_move(board: Board, path: Path, move: Move) -> Board:
    """Return the board after ``move`` is placed at ``path``.

    The input board is never modified; every row of the result is a copy.
    Whether the square is open is up to the caller to check, an occupied
    square is simply overwritten.
    """
    _check_path(path)
    updated = [row.copy() for row in board]
    row, col = path
    updated[row][col] = move
    return updated


def available_moves(board: Board) -> List[Path]:
    """Open squares in row-major order."""
    return [
        (r, c)
        for r in range(BOARD_SIZE)
        for c in range(BOARD_SIZE)
        if board[r][c] is None
    ]


def has_empty_square(board: Board) -> bool:
    return any(cell is None for row in board for cell in row)


# ---------- Outcome ----------


def _is_winning_line(board: Board, line: WinLine) -> bool:
    first = square_state(board, line[0])
    return first is not None and all(
        square_state(board, path) == first for path in line[1:]
    )


def winning_line(board: Board) -> Optional[WinLine]:
    """Return the squares of the first completed line, or None."""
    for line in WINNING_LINES:
        if _is_winning_line(board, line):
            return line
    return None


def winner(board: Board) -> Optional[Player]:
    """Return the player who owns a completed line, if any."""
    line = winning_line(board)
    if line is None:
        return None
    mark = square_state(board, line[0])
    for player, move in PLAYER_MOVES.items():
        if move == mark:
            return player
    return None


def other_player(player: Player) -> Player:
    return Player.COMPUTER if player == Player.HUMAN else Player.HUMAN


def is_game_over(board: Board) -> bool:
    return winner(board) is not None or not has_empty_square(board)
