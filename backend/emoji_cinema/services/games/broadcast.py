"""Fan-out descriptions returned by the event handlers.

Handlers never talk to the transport. They return an ``Outcome`` listing who
should receive what, and ``emoji_cinema.socketio_events`` delivers it.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Emission:
    event: str
    data: Dict[str, Any]
    # A connection id or a room id; every connection is addressable by its sid.
    to: str
    skip_sid: Optional[str] = None


@dataclass
class Outcome:
    emissions: List[Emission] = field(default_factory=list)
    entered_room: Optional[str] = None
    left_room: Optional[str] = None

    def events(self, name: str) -> List[Emission]:
        return [e for e in self.emissions if e.event == name]


def to_connection(sid: str, event: str, data: Dict[str, Any]) -> Emission:
    return Emission(event, data, to=sid)


def to_room(room_id: str, event: str, data: Dict[str, Any]) -> Emission:
    return Emission(event, data, to=room_id)


def to_others(room_id: str, sid: str, event: str, data: Dict[str, Any]) -> Emission:
    return Emission(event, data, to=room_id, skip_sid=sid)
