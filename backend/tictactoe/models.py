import time
from typing import List, Optional

X = 'X'
O = 'O'
DRAW = 'draw'
BOARD_SIZE = 9

WAITING = 'waiting'
PLAYING = 'playing'
FINISHED = 'finished'
MAX_PLAYERS = 2


def other_symbol(symbol: str) -> str:
    return O if symbol == X else X


def empty_board() -> List[Optional[str]]:
    return [None] * BOARD_SIZE


class Room:
    """One game session between up to two connections.

    ``short_id`` is the code players share with each other; ``internal_id``
    names the Socket.IO room used for broadcasts and is what clients send
    back with move/reset/leave. Seat 0 in ``players`` plays X, seat 1 plays O.
    """

    def __init__(self, short_id: str, internal_id: str, now: Optional[float] = None):
        self.short_id = short_id
        self.internal_id = internal_id
        self.players: List[str] = []
        self.board: List[Optional[str]] = empty_board()
        self.current_player = X
        self.status = WAITING
        self.last_starting_symbol = X
        self.created_at = now if now is not None else time.time()
        self.last_activity = self.created_at

    def touch(self, now: Optional[float] = None) -> None:
        self.last_activity = now if now is not None else time.time()

    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def clear_board(self) -> None:
        self.board = empty_board()

    def state_payload(self, winner: Optional[str] = None) -> dict:
        return {
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'winner': winner,
        }

