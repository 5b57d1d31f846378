"""Room state machine: one handler per inbound event.

Every handler takes ``(registry, sid, data)``, mutates the authoritative
room state and returns an ``Outcome`` describing the fan-out. The caller must
hold ``registry.lock`` for the call and the delivery of its outcome.
"""
import logging
import time
from typing import Any, Dict

from emoji_cinema.models import Player, Room, clean_scene_object
from .broadcast import Outcome, to_connection, to_others, to_room
from .catalog import pick_movie
from .errors import InvalidPayload, NotAuthorized, RoomNotFound
from .registry import RoomRegistry, normalize_room_id
from .scoring import award_point, score_chat_message

logger = logging.getLogger(__name__)

GAME_STARTED_MESSAGE = 'Игра началась! Создатель составляет сцену из фильма. Угадайте фильм!'


def _payload(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPayload('payload must be an object')
    return data


def _membership(registry: RoomRegistry, sid: str):
    room, player = registry.player_for(sid)
    if room is None or player is None:
        raise InvalidPayload(f'connection {sid} is not in a room')
    return room, player


def _require_host(room: Room, sid: str) -> None:
    if not room.is_host(sid):
        raise NotAuthorized(f'{sid} is not the host of room {room.id}')


def _scored(player: Player, message) -> Dict[str, Any]:
    return {
        'playerId': player.id,
        'playerName': player.name,
        'newScore': player.score,
        'message': message,
    }


# ---- Membership ----

def _remove_member(registry: RoomRegistry, sid: str) -> Outcome:
    """Remove ``sid`` from its room, migrating host and deleting empty rooms."""
    outcome = Outcome()
    room_id = registry.remove_connection(sid)
    if not room_id:
        return outcome
    room = registry.rooms.get(room_id)
    if room is None:
        return outcome
    new_host = room.remove_player(sid)
    if new_host is not None:
        logger.info(f"[host-migrated] room={room_id} from={sid} to={new_host.id}")
        outcome.emissions.append(to_others(room_id, sid, 'new_host', {
            'newHostId': new_host.id,
            'newHostName': new_host.name,
        }))
    outcome.emissions.append(to_others(room_id, sid, 'player_left', {
        'playerId': sid,
        'players': room.players_list(),
    }))
    if room.is_empty:
        registry.delete_room(room_id)
    return outcome


def leave_current_room(registry: RoomRegistry, sid: str) -> Outcome:
    """Like a disconnect, but the socket stays open and must leave its room."""
    room_id = registry.connections.get(sid)
    outcome = _remove_member(registry, sid)
    outcome.left_room = room_id
    return outcome


def handle_disconnect(registry: RoomRegistry, sid: str, data=None) -> Outcome:
    # The server drops a closed socket from its rooms itself.
    return _remove_member(registry, sid)


def handle_create_room(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    outcome = leave_current_room(registry, sid)
    room, player = registry.create_room(sid, data.get('playerName'))
    outcome.entered_room = room.id
    outcome.emissions.append(to_connection(sid, 'room_created', {
        'roomId': room.id,
        'player': player.to_dict(),
    }))
    return outcome


def handle_join_room(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room_id = normalize_room_id(data.get('roomId'))
    current = registry.room_for(sid)
    if current is not None and current.id == room_id:
        # Already a member: just resync the caller.
        return Outcome([to_connection(sid, 'room_state', current.snapshot_for(sid))])
    # Resolve before leaving the current room so a bad code doesn't kick the caller.
    try:
        registry.require(room_id)
    except RoomNotFound as exc:
        logger.info(f"[join-error] sid={sid} reason={exc}")
        return Outcome([to_connection(sid, 'join_error', {'message': str(exc)})])

    outcome = leave_current_room(registry, sid)
    room, player = registry.join_room(sid, room_id, data.get('playerName'))
    outcome.entered_room = room.id
    outcome.emissions.append(to_connection(sid, 'room_state', room.snapshot_for(sid)))
    outcome.emissions.append(to_room(room.id, 'player_joined', {
        'player': player.to_dict(),
        'players': room.players_list(),
    }))
    logger.info(f"[player-joined] room={room.id} sid={sid} members={len(room.members)}")
    return outcome


# ---- Game flow ----

def handle_start_game(registry: RoomRegistry, sid: str, data) -> Outcome:
    room, _ = _membership(registry, sid)
    _require_host(room, sid)
    room.start_round(pick_movie(registry.rng))
    logger.info(f"[game-started] room={room.id} movie={room.secret['title']!r}")
    return Outcome([
        to_connection(sid, 'movie_reveal', dict(room.secret)),
        to_others(room.id, sid, 'game_started', {'message': GAME_STARTED_MESSAGE}),
    ])


def handle_chat_message(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room, player = _membership(registry, sid)
    text = data.get('message')
    if not isinstance(text, str):
        raise InvalidPayload('message must be a string')
    if not text.strip():
        raise InvalidPayload('empty chat message')
    # Relayed as sent, only capped in length; matching normalizes its own copy.
    text = text[:registry.max_chat_length]

    outcome = Outcome()
    is_correct = score_chat_message(room, player, text)
    if is_correct:
        outcome.emissions.append(to_room(room.id, 'player_scored', _scored(player, text)))
    outcome.emissions.append(to_room(room.id, 'chat_message', {
        'playerId': player.id,
        'playerName': player.name,
        'message': text,
        'timestamp': int(time.time() * 1000),
        'isCorrect': is_correct,
    }))
    return outcome


def handle_correct_answer(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room, _ = _membership(registry, sid)
    _require_host(room, sid)
    target = room.members.get(data.get('playerId'))
    if target is None:
        raise InvalidPayload(f"unknown player {data.get('playerId')!r}")
    award_point(target)
    logger.info(f"[point-awarded] room={room.id} player={target.id} score={target.score}")
    return Outcome([to_room(room.id, 'player_scored', _scored(target, None))])


# ---- Scene replication ----
# Any member may mutate the scene; only the host's client offers the tools.

def handle_object_added(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room, _ = _membership(registry, sid)
    obj = clean_scene_object(data.get('object'))
    room.put_object(obj)
    return Outcome([to_room(room.id, 'object_added', {'object': obj})])


def handle_object_updated(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room, _ = _membership(registry, sid)
    obj = clean_scene_object(data.get('object'))
    if not room.update_object(obj):
        raise InvalidPayload(f"unknown object {obj['id']}")
    return Outcome([to_room(room.id, 'object_updated', {'object': obj})])


def handle_object_removed(registry: RoomRegistry, sid: str, data) -> Outcome:
    data = _payload(data)
    room, _ = _membership(registry, sid)
    object_id = data.get('objectId')
    if isinstance(object_id, bool) or not isinstance(object_id, int):
        raise InvalidPayload('objectId must be an integer')
    if not room.remove_object(object_id):
        raise InvalidPayload(f'unknown object {object_id}')
    return Outcome([to_room(room.id, 'object_removed', {'objectId': object_id})])


def handle_clear_field(registry: RoomRegistry, sid: str, data) -> Outcome:
    room, _ = _membership(registry, sid)
    room.clear_scene()
    return Outcome([to_room(room.id, 'clear_field', {})])


EVENT_HANDLERS = {
    'create_room': handle_create_room,
    'join_room': handle_join_room,
    'start_game': handle_start_game,
    'chat_message': handle_chat_message,
    'correct_answer': handle_correct_answer,
    'object_added': handle_object_added,
    'object_updated': handle_object_updated,
    'object_removed': handle_object_removed,
    'clear_field': handle_clear_field,
}


def dispatch(registry: RoomRegistry, sid: str, event: str, data=None) -> Outcome:
    """Run the handler for ``event``; rejected events produce an empty outcome."""
    handler = EVENT_HANDLERS.get(event)
    if handler is None:
        logger.warning(f"[unknown-event] event={event!r} sid={sid}")
        return Outcome()
    try:
        return handler(registry, sid, data)
    except NotAuthorized as exc:
        logger.info(f"[ignored] event={event} sid={sid} reason={exc}")
    except InvalidPayload as exc:
        logger.warning(f"[dropped] event={event} sid={sid} reason={exc}")
    return Outcome()
