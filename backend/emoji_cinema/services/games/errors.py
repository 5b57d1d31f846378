class GameError(Exception):
    """Base class for errors raised by the room/game services."""


class RoomNotFound(GameError):
    def __init__(self, room_id):
        super().__init__(f"Room {room_id} not found")
        self.room_id = room_id


class NotAuthorized(GameError):
    """A non-host tried to perform a host-only action."""


class InvalidPayload(GameError):
    """An inbound event payload is malformed or out of context."""
