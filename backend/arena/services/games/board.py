from typing import List, Optional, Tuple

BOARD_SIZE = 9
MARKS = ('X', 'O')

WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
)

Board = List[Optional[str]]


class IllegalMove(ValueError):
    """Raised when a mark cannot be placed on the board."""


def empty_board() -> Board:
    return [None] * BOARD_SIZE


def other_mark(mark: str) -> str:
    return 'O' if mark == 'X' else 'X'


def apply_move(board: Board, index, mark: str) -> Board:
    """Return a copy of ``board`` with ``mark`` written at ``index``.

    The input board is never modified; an illegal placement raises
    ``IllegalMove`` instead.
    """
    if mark not in MARKS:
        raise IllegalMove(f"Unknown mark {mark!r}")
    # bool is an int subclass but never a valid cell index
    if isinstance(index, bool) or not isinstance(index, int):
        raise IllegalMove(f"Cell index must be an integer, got {index!r}")
    if not 0 <= index < BOARD_SIZE:
        raise IllegalMove(f"Cell index {index} is off the board")
    if board[index] is not None:
        raise IllegalMove(f"Cell {index} is already taken")
    updated = list(board)
    updated[index] = mark
    return updated


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        if board[a] and board[a] == board[b] == board[c]:
            return pattern
    return None


def check_winner(board: Board) -> Optional[str]:
    line = winning_line(board)
    return board[line[0]] if line else None


def is_draw(board: Board, move_count: int) -> bool:
    return move_count == BOARD_SIZE and check_winner(board) is None
