import itertools

import pytest

from arena.services.games.board import (
    WIN_PATTERNS,
    IllegalMove,
    apply_move,
    check_winner,
    empty_board,
    is_draw,
    other_mark,
    winning_line,
)


def board_from(text):
    """Build a board from a 9-char string such as 'XO.X.O...'."""
    return [None if ch == '.' else ch for ch in text]


def test_apply_move_returns_new_board():
    board = empty_board()
    updated = apply_move(board, 4, 'X')
    assert updated[4] == 'X'
    assert board == [None] * 9


@pytest.mark.parametrize('index', [-1, 9, 42, '3', 1.0, None, True])
def test_apply_move_rejects_bad_index(index):
    board = empty_board()
    with pytest.raises(IllegalMove):
        apply_move(board, index, 'X')
    assert board == [None] * 9


def test_apply_move_rejects_occupied_cell():
    board = board_from('X........')
    with pytest.raises(IllegalMove):
        apply_move(board, 0, 'O')
    assert board == board_from('X........')


def test_apply_move_rejects_unknown_mark():
    with pytest.raises(IllegalMove):
        apply_move(empty_board(), 0, 'Z')


@pytest.mark.parametrize('pattern', WIN_PATTERNS)
@pytest.mark.parametrize('mark', ['X', 'O'])
def test_every_triple_wins(pattern, mark):
    board = empty_board()
    for index in pattern:
        board[index] = mark
    assert check_winner(board) == mark
    assert winning_line(board) == pattern


def test_no_winner_without_complete_triple():
    # Every board with exactly two cells of one mark and nothing else
    for a, b in itertools.combinations(range(9), 2):
        board = empty_board()
        board[a] = board[b] = 'X'
        assert check_winner(board) is None
    assert check_winner(board_from('XOXXOOOXX')) is None


def test_mixed_triple_is_not_a_win():
    assert check_winner(board_from('XXO......')) is None


def test_draw_only_on_full_board_without_winner():
    full_no_winner = board_from('XOXXOOOXX')
    assert is_draw(full_no_winner, 9)
    assert not is_draw(full_no_winner, 8)

    full_with_winner = board_from('XXXOOXOXO')
    assert check_winner(full_with_winner) == 'X'
    assert not is_draw(full_with_winner, 9)


def test_other_mark():
    assert other_mark('X') == 'O'
    assert other_mark('O') == 'X'
