import logging
import threading
import time
from typing import List, Optional

from tictactoe.exceptions import Conflict, IllegalState, InvalidInput, NotFound
from tictactoe.models import (
    BOARD_SIZE, FINISHED, MAX_PLAYERS, O, PLAYING, WAITING, X, Room, other_symbol,
)
from tictactoe.registry import RoomRegistry
from .board import check_winner

# Outbound events
JOINED = 'game:joined'
PLAYER_JOINED = 'game:player-joined'
MOVE = 'game:move'
LEFT = 'game:left'
OPPONENT_LEFT = 'game:opponent-left'
ROOM_EXPIRED = 'game:room-expired'


class MatchCoordinator:
    """Room lifecycle and turn state machine.

    Every public operation validates first and raises a ``MatchError``
    subclass without touching state, then mutates and emits through the
    transport. A single lock serialises operations so threaded socket
    workers and the reaper never interleave on a room.

    The transport must provide ``join(sid, group)``, ``leave(sid, group)``,
    ``send(sid, event, payload)``, ``broadcast(group, event, payload,
    skip_sid=None)`` and ``close(group)``.
    """

    def __init__(self, registry: RoomRegistry, transport,
                 logger: Optional[logging.Logger] = None,
                 idle_timeout: int = 0):
        self.registry = registry
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.idle_timeout = idle_timeout
        self._lock = threading.RLock()

    # ---- lookups ----

    def _room_by_internal_id(self, room_id) -> Room:
        if not isinstance(room_id, str) or not room_id.strip():
            raise InvalidInput('Invalid room ID.')
        room = self.registry.find_by_internal_id(room_id)
        if room is None:
            raise NotFound('Room not found')
        return room

    # ---- transitions ----

    def create_room(self, sid: str) -> Room:
        with self._lock:
            room = self.registry.create()
            room.players.append(sid)
            self.transport.join(sid, room.internal_id)
            self.transport.send(sid, JOINED, {
                'roomId': room.internal_id,
                'shortRoomId': room.short_id,
                'symbol': X,
                'isFirstPlayer': True,
            })
            self.logger.info(f"[room-created] room={room.short_id} internal={room.internal_id} sid={sid}")
            return room

    def join_room(self, sid: str, room_id) -> Room:
        with self._lock:
            if not isinstance(room_id, str) or not room_id.strip():
                raise InvalidInput('Invalid room ID. Please enter a room ID.')
            short_id = room_id.strip().upper()
            room = self.registry.get(short_id)
            if room is None:
                raise NotFound('Room not found. Please check the room ID.')
            if room.is_full():
                raise Conflict('Room is full. Maximum 2 players allowed.')
            if sid in room.players:
                raise Conflict('You are already in this room.')

            room.players.append(sid)
            self.transport.join(sid, room.internal_id)
            room.status = PLAYING
            room.current_player = room.last_starting_symbol
            room.touch()

            self.transport.send(sid, JOINED, {
                'roomId': room.internal_id,
                'shortRoomId': room.short_id,
                'symbol': O,
                'isFirstPlayer': False,
            })
            self.transport.broadcast(room.internal_id, PLAYER_JOINED, {'symbol': X})
            self.logger.info(
                f"[game-started] room={room.short_id} x={room.players[0]} o={sid} starting={room.current_player}"
            )
            return room

    def move(self, sid: str, room_id, index, symbol) -> Optional[str]:
        """Apply a mark and return the outcome (None while the game continues)."""
        with self._lock:
            room = self._room_by_internal_id(room_id)
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
                raise InvalidInput('Invalid cell index')
            if room.status != PLAYING:
                raise IllegalState('Game is not in progress')
            if room.current_player != symbol:
                raise IllegalState('Not your turn')
            if room.board[index] is not None:
                raise Conflict('Cell already occupied')

            room.board[index] = symbol
            room.current_player = other_symbol(symbol)
            room.touch()
            winner = check_winner(room.board)
            if winner:
                room.status = FINISHED
                self.logger.info(f"[game-finished] room={room.short_id} winner={winner}")

            self.transport.broadcast(room.internal_id, MOVE, room.state_payload(winner))
            self.logger.info(f"[move] room={room.short_id} sid={sid} symbol={symbol} index={index}")
            return winner

    def reset(self, sid: str, room_id) -> Room:
        with self._lock:
            room = self._room_by_internal_id(room_id)
            if len(room.players) < MAX_PLAYERS:
                raise IllegalState('Waiting for an opponent')

            room.last_starting_symbol = other_symbol(room.last_starting_symbol)
            room.clear_board()
            room.current_player = room.last_starting_symbol
            room.status = PLAYING
            room.touch()

            self.transport.broadcast(room.internal_id, MOVE, room.state_payload(None))
            self.logger.info(f"[reset] room={room.short_id} sid={sid} starting={room.current_player}")
            return room

    def leave(self, sid: str, room_id) -> None:
        with self._lock:
            if isinstance(room_id, str) and room_id:
                # Drop the group membership even when the room is already gone
                self.transport.leave(sid, room_id)
            room = self._room_by_internal_id(room_id)
            if sid not in room.players:
                raise NotFound('You are not in this room')

            self.transport.send(sid, LEFT, None)
            self._remove_player(room, sid)
            self.logger.info(f"[left] room={room.short_id} sid={sid}")

    def disconnect(self, sid: str) -> List[Room]:
        """Remove ``sid`` from every room it occupies; returns those rooms."""
        with self._lock:
            rooms = self.registry.rooms_for_player(sid)
            for room in rooms:
                self._remove_player(room, sid)
                self.logger.info(f"[disconnect] room={room.short_id} sid={sid}")
            return rooms

    def _remove_player(self, room: Room, sid: str) -> None:
        room.players.remove(sid)
        if not room.players:
            self.registry.delete(room.short_id)
            self.logger.info(f"[room-deleted] room={room.short_id}")
            return
        # Survivor takes seat X and waits for a new opponent
        room.status = WAITING
        room.clear_board()
        room.current_player = room.last_starting_symbol
        room.touch()
        self.transport.broadcast(room.internal_id, OPPONENT_LEFT, None, skip_sid=sid)

    # ---- housekeeping ----

    def reap_idle(self, now: Optional[float] = None) -> List[Room]:
        """Delete waiting rooms idle for longer than ``idle_timeout`` seconds."""
        if self.idle_timeout <= 0:
            return []
        now = now if now is not None else time.time()
        with self._lock:
            expired = [
                room for room in self.registry
                if room.status == WAITING and now - room.last_activity > self.idle_timeout
            ]
            for room in expired:
                self.registry.delete(room.short_id)
                self.transport.broadcast(room.internal_id, ROOM_EXPIRED, {'shortRoomId': room.short_id})
                self.transport.close(room.internal_id)
                self.logger.info(
                    f"[room-expired] room={room.short_id} idle={int(now - room.last_activity)}s"
                )
            return expired

    def stats(self) -> dict:
        with self._lock:
            return self.registry.stats()
