from typing import Optional, Sequence

from tictactoe.models import DRAW

WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def check_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """Evaluate a 9-cell board.

    Returns the winning symbol when any line holds three equal marks,
    ``'draw'`` when every cell is filled and no line matched, otherwise None.
    """
    for a, b, c in WIN_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a]
    if all(cell is not None for cell in board):
        return DRAW
    return None
