import logging
from typing import Callable, Dict, Iterator, List, Optional

from tictactoe.models import Room
from tictactoe.services.games.codes import generate_internal_id, generate_room_code


class RoomRegistry:
    """In-memory store of live rooms keyed by short id.

    A secondary index maps the Socket.IO group id back to the room, since
    move/reset/leave requests address rooms by ``internal_id``.
    """

    def __init__(self, code_length: int = 6,
                 code_factory: Optional[Callable[[int], str]] = None,
                 logger: Optional[logging.Logger] = None):
        self.code_length = code_length
        self._code_factory = code_factory or generate_room_code
        self.logger = logger or logging.getLogger(__name__)
        self._rooms: Dict[str, Room] = {}
        self._by_internal_id: Dict[str, Room] = {}

    def create(self) -> Room:
        code = self._code_factory(self.code_length)
        while code in self._rooms:
            self.logger.warning(f"[code-collision] code={code} regenerating")
            code = self._code_factory(self.code_length)
        room = Room(code, generate_internal_id(code))
        self._rooms[code] = room
        self._by_internal_id[room.internal_id] = room
        return room

    def get(self, short_id: str) -> Optional[Room]:
        return self._rooms.get(short_id)

    def find_by_internal_id(self, internal_id: str) -> Optional[Room]:
        return self._by_internal_id.get(internal_id)

    def delete(self, short_id: str) -> None:
        room = self._rooms.pop(short_id, None)
        if room is not None:
            self._by_internal_id.pop(room.internal_id, None)

    def rooms_for_player(self, sid: str) -> List[Room]:
        return [room for room in self._rooms.values() if sid in room.players]

    def stats(self) -> dict:
        waiting = sum(1 for room in self._rooms.values() if len(room.players) == 1)
        return {
            'rooms': len(self._rooms),
            'waitingRooms': waiting,
            'activeGames': len(self._rooms) - waiting,
        }

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))

    def __contains__(self, short_id) -> bool:
        return short_id in self._rooms
