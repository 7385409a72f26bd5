"""Unit tests for Tic Tac Toe game logic."""

import pytest

from tictactoe.game import (
    WINNING_LINES,
    Move,
    Player,
    apply_move,
    available_moves,
    empty_board,
    has_empty_square,
    is_game_over,
    winner,
    winning_line,
)

X, O, _ = Move.X, Move.O, None


def test_empty_board_has_nine_open_squares():
    board = empty_board()
    assert len(board) == 3
    assert all(len(row) == 3 for row in board)
    assert available_moves(board) == [(r, c) for r in range(3) for c in range(3)]
    assert has_empty_square(board)


def test_empty_board_rows_are_independent():
    board = empty_board()
    board[0][0] = X
    assert board[1][0] is None
    assert board[2][0] is None


def test_apply_move_returns_new_board():
    board = empty_board()
    updated = apply_move(board, (1, 2), X)
    assert updated[1][2] == X
    assert board[1][2] is None

    # Mutating the result never leaks into the input
    for row in updated:
        row[0] = O
    assert all(row[0] is None for row in board)


def test_apply_move_overwrites_occupied_square():
    board = apply_move(empty_board(), (0, 0), X)
    assert apply_move(board, (0, 0), O)[0][0] == O
    assert board[0][0] == X


@pytest.mark.parametrize("path", [(-1, 0), (0, 3), (3, 3), (1, -1)])
def test_apply_move_rejects_paths_off_the_board(path):
    with pytest.raises(ValueError):
        apply_move(empty_board(), path, X)


def test_winner_empty_board():
    assert winner(empty_board()) is None
    assert winning_line(empty_board()) is None


def test_winner_incomplete_board():
    board = [
        [X, _, X],
        [X, O, O],
        [_, _, O],
    ]
    assert winner(board) is None
    assert winning_line(board) is None


@pytest.mark.parametrize("line", WINNING_LINES)
@pytest.mark.parametrize("move", [X, O])
def test_each_line_is_detected(line, move):
    board = empty_board()
    for path in line:
        board = apply_move(board, path, move)
    assert has_empty_square(board)
    assert winning_line(board) == line


def test_lines_scan_rows_paired_with_columns_then_diagonals():
    assert WINNING_LINES == (
        ((0, 0), (0, 1), (0, 2)),
        ((0, 0), (1, 0), (2, 0)),
        ((1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1)),
        ((2, 0), (2, 1), (2, 2)),
        ((0, 2), (1, 2), (2, 2)),
        ((0, 0), (1, 1), (2, 2)),
        ((0, 2), (1, 1), (2, 0)),
    )


def test_winning_row():
    board = [
        [X, X, X],
        [X, O, O],
        [_, _, O],
    ]
    assert winner(board) == Player.HUMAN
    assert winning_line(board) == ((0, 0), (0, 1), (0, 2))


def test_winning_column():
    board = [
        [X, X, O],
        [X, O, O],
        [_, _, O],
    ]
    assert winner(board) == Player.COMPUTER
    assert winning_line(board) == ((0, 2), (1, 2), (2, 2))


def test_winning_major_diagonal():
    board = [
        [O, X, X],
        [X, O, O],
        [_, _, O],
    ]
    assert winner(board) == Player.COMPUTER
    assert winning_line(board) == ((0, 0), (1, 1), (2, 2))


def test_winning_minor_diagonal():
    board = [
        [X, X, O],
        [X, O, O],
        [O, _, X],
    ]
    assert winner(board) == Player.COMPUTER
    assert winning_line(board) == ((0, 2), (1, 1), (2, 0))


def test_first_line_in_scan_order_is_reported():
    # Row 0 and column 0 both complete; the row comes first.
    board = [
        [X, X, X],
        [X, O, O],
        [X, O, _],
    ]
    assert winning_line(board) == ((0, 0), (0, 1), (0, 2))


def test_full_board_without_winner_is_a_draw():
    board = [
        [X, O, X],
        [X, O, O],
        [O, X, X],
    ]
    assert winner(board) is None
    assert not has_empty_square(board)
    assert available_moves(board) == []
    assert is_game_over(board)


def test_game_not_over_while_squares_remain():
    board = apply_move(empty_board(), (1, 1), X)
    assert not is_game_over(board)
