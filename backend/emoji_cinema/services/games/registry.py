import logging
import random
import threading
from typing import Dict, Optional, Tuple

from emoji_cinema.models import DEFAULT_PLAYER_NAME, Player, Room, generate_room_code
from .errors import RoomNotFound

logger = logging.getLogger(__name__)


def normalize_room_id(room_id) -> str:
    return str(room_id or '').strip().upper()


class RoomRegistry:
    """In-memory rooms plus the connection index (sid -> room id).

    Nothing here is thread-safe on its own; callers hold ``lock`` for the
    whole handling of one inbound event.
    """

    def __init__(self, room_code_length=4, max_name_length=32, max_chat_length=500, rng=None):
        self.rooms: Dict[str, Room] = {}
        self.connections: Dict[str, str] = {}
        self.lock = threading.RLock()
        self.room_code_length = room_code_length
        self.max_name_length = max_name_length
        self.max_chat_length = max_chat_length
        self.rng = rng or random.Random()

    def __len__(self):
        return len(self.rooms)

    def __contains__(self, room_id):
        return normalize_room_id(room_id) in self.rooms

    def clean_name(self, name) -> str:
        name = str(name or '').strip()[:self.max_name_length]
        return name or DEFAULT_PLAYER_NAME

    def get(self, room_id) -> Optional[Room]:
        return self.rooms.get(normalize_room_id(room_id))

    def require(self, room_id) -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound(normalize_room_id(room_id))
        return room

    def room_for(self, sid: str) -> Optional[Room]:
        room_id = self.connections.get(sid)
        return self.rooms.get(room_id) if room_id else None

    def player_for(self, sid: str) -> Tuple[Optional[Room], Optional[Player]]:
        room = self.room_for(sid)
        if room is None:
            return None, None
        return room, room.members.get(sid)

    def create_room(self, sid: str, player_name) -> Tuple[Room, Player]:
        room_id = generate_room_code(self.rooms, self.room_code_length, self.rng)
        player = Player(sid, self.clean_name(player_name), is_host=True)
        room = Room(room_id, player)
        self.rooms[room_id] = room
        self.connections[sid] = room_id
        logger.info(f"[room-created] room={room_id} host={sid}")
        return room, player

    def join_room(self, sid: str, room_id, player_name) -> Tuple[Room, Player]:
        room = self.require(room_id)
        player = Player(sid, self.clean_name(player_name))
        room.add_player(player)
        self.connections[sid] = room.id
        return room, player

    def remove_connection(self, sid: str) -> Optional[str]:
        return self.connections.pop(sid, None)

    def delete_room(self, room_id: str) -> None:
        self.rooms.pop(room_id, None)
        logger.info(f"[room-deleted] room={room_id}")
