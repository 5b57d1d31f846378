import string
import random
from numbers import Number
from typing import Any, Dict, List, Optional

from emoji_cinema.services.games.errors import InvalidPayload

PHASE_WAITING = 'waiting'
PHASE_PLAYING = 'playing'

DEFAULT_PLAYER_NAME = 'Игрок'

SCENE_NUMERIC_FIELDS = ('x', 'y', 'width', 'height', 'fontSize', 'rotation')


class Player:
    def __init__(self, id: str, name: str, is_host: bool = False):
        self.id = id
        self.name = name
        self.score = 0
        self.is_host = is_host

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'isHost': self.is_host,
        }


def generate_room_code(existing, length=4, rng=None):
    """Generate a short room code not already present in ``existing``."""
    rng = rng or random
    while True:
        code = ''.join(rng.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in existing:
            return code


def clean_scene_object(obj: Any) -> Dict[str, Any]:
    """Validate an inbound scene object and return a shallow copy of it.

    The object is kept verbatim (unknown keys included) so that every client
    receives exactly what the author sent.
    """
    if not isinstance(obj, dict):
        raise InvalidPayload('object must be a mapping')
    object_id = obj.get('id')
    if isinstance(object_id, bool) or not isinstance(object_id, int):
        raise InvalidPayload('object.id must be an integer')
    if 'emoji' in obj and not isinstance(obj['emoji'], str):
        raise InvalidPayload('object.emoji must be a string')
    for field in SCENE_NUMERIC_FIELDS:
        value = obj.get(field)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, Number):
            raise InvalidPayload(f'object.{field} must be a number')
    return dict(obj)


class Room:
    """Authoritative state of one game session.

    ``members`` keeps join order, which is what host migration relies on.
    ``scene`` is keyed by object id and keeps insertion order.
    """

    def __init__(self, room_id: str, host: Player):
        host.is_host = True
        self.id = room_id
        self.members: Dict[str, Player] = {host.id: host}
        self.host_id = host.id
        self.secret: Optional[Dict[str, str]] = None
        self.phase = PHASE_WAITING
        self.scene: Dict[int, Dict[str, Any]] = {}

    @property
    def host(self) -> Optional[Player]:
        return self.members.get(self.host_id)

    @property
    def is_empty(self) -> bool:
        return not self.members

    def is_host(self, player_id: str) -> bool:
        return bool(self.members) and player_id == self.host_id

    def add_player(self, player: Player) -> None:
        player.is_host = False
        self.members[player.id] = player

    def remove_player(self, player_id: str) -> Optional[Player]:
        """Remove a member; return the newly promoted host, if any."""
        player = self.members.pop(player_id, None)
        if player is None or player_id != self.host_id or not self.members:
            return None
        new_host = next(iter(self.members.values()))
        new_host.is_host = True
        self.host_id = new_host.id
        return new_host

    def start_round(self, movie: Dict[str, str]) -> None:
        self.secret = dict(movie)
        self.phase = PHASE_PLAYING

    # -- scene ------------------------------------------------------------

    @property
    def scene_objects(self) -> List[Dict[str, Any]]:
        return list(self.scene.values())

    def put_object(self, obj: Dict[str, Any]) -> None:
        self.scene[obj['id']] = obj

    def update_object(self, obj: Dict[str, Any]) -> bool:
        if obj['id'] not in self.scene:
            return False
        self.scene[obj['id']] = obj
        return True

    def remove_object(self, object_id: int) -> bool:
        return self.scene.pop(object_id, None) is not None

    def clear_scene(self) -> None:
        self.scene.clear()

    # -- serialisation ----------------------------------------------------

    def players_list(self):
        return [p.to_dict() for p in self.members.values()]

    def snapshot_for(self, viewer_id: str):
        """Room state as seen by ``viewer_id``; only the host sees the movie."""
        payload = {
            'roomId': self.id,
            'phase': self.phase,
            'sceneObjects': self.scene_objects,
            'players': self.players_list(),
        }
        if self.secret and self.is_host(viewer_id):
            payload['movie'] = dict(self.secret)
        return payload

    def to_dict(self):
        return {
            'roomId': self.id,
            'phase': self.phase,
            'hostId': self.host_id,
            'players': self.players_list(),
            'sceneObjects': self.scene_objects,
        }
