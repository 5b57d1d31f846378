from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from emoji_cinema import socketio
from emoji_cinema.services.games.broadcast import Outcome
from emoji_cinema.services.games.handlers import EVENT_HANDLERS, dispatch
from emoji_cinema.services.games.handlers import handle_disconnect as disconnect_player
from emoji_cinema.services.games.registry import RoomRegistry


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> RoomRegistry:
    return current_app.extensions['room_registry']


def _deliver(outcome: Outcome, namespace: str) -> None:
    """Apply room membership changes, then fan out emissions in order."""
    if outcome.left_room:
        leave_room(outcome.left_room)
    if outcome.entered_room:
        join_room(outcome.entered_room)
    for emission in outcome.emissions:
        socketio.emit(
            emission.event,
            emission.data,
            to=emission.to,
            skip_sid=emission.skip_sid,
            namespace=namespace,
        )


def handle_connect(auth=None):
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    emit('connected', {'message': 'Connected', 'playerId': sid})


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    registry = _registry()
    try:
        with registry.lock:
            outcome = disconnect_player(registry, sid)
            _deliver(outcome, request.namespace)
    except Exception:
        current_app.logger.exception(f"[disconnect-error] sid={sid}")


def handle_ping(data=None):
    emit('pong', data or {})


def _make_event_handler(event: str):
    def _handler(data=None):
        sid = _get_sid()
        registry = _registry()
        try:
            with registry.lock:
                outcome = dispatch(registry, sid, event, data)
                _deliver(outcome, request.namespace)
        except Exception:
            # One bad payload must never take the server down.
            current_app.logger.exception(f"[event-error] event={event} sid={sid}")
    _handler.__name__ = f"handle_{event}"
    return _handler


def register_socketio_handlers(namespaces=('/',)) -> None:
    """Register Socket.IO event handlers on every namespace in ``namespaces``."""
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
        for event in EVENT_HANDLERS:
            socketio.on_event(event, _make_event_handler(event), namespace=namespace)
