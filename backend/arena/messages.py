"""Inbound Socket.IO messages and outbound event names.

Each inbound event has its own message type. ``parse_message`` turns the raw
payload a client sent into that type, or raises ``MalformedMessage``.
The field names (``playerName``, ``roomId``, ``isPublic``) are the wire
contract of the browser client.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

# Inbound
JOIN_LOBBY = 'join-lobby'
CREATE_ROOM = 'create-room'
JOIN_ROOM = 'join-room'
MAKE_MOVE = 'make-move'
REQUEST_REMATCH = 'request-rematch'
LEAVE_ROOM = 'leave-room'

# Outbound
PUBLIC_ROOMS = 'public-rooms'
ROOM_CREATED = 'room-created'
ROOM_JOINED = 'room-joined'
GAME_STATE = 'game-state'
REMATCH_REQUESTED = 'rematch-requested'
ERROR = 'error'

MAX_NAME_LENGTH = 32


class MalformedMessage(ValueError):
    pass


@dataclass(frozen=True)
class JoinLobby:
    player_name: str


@dataclass(frozen=True)
class CreateRoom:
    is_public: bool
    player_name: str


@dataclass(frozen=True)
class JoinRoom:
    room_id: str
    player_name: str


@dataclass(frozen=True)
class MakeMove:
    room_id: str
    index: int


@dataclass(frozen=True)
class RequestRematch:
    room_id: str


@dataclass(frozen=True)
class LeaveRoom:
    pass


Message = Union[JoinLobby, CreateRoom, JoinRoom, MakeMove, RequestRematch, LeaveRoom]


def _require_mapping(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedMessage(f"expected an object payload, got {type(data).__name__}")
    return data


def _name(value: Any) -> str:
    if value is None:
        return ''
    if not isinstance(value, str):
        raise MalformedMessage('playerName must be a string')
    return value.strip()[:MAX_NAME_LENGTH]


def _room_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise MalformedMessage('roomId is required')
    return value.strip().upper()


def _join_lobby(data) -> JoinLobby:
    # Older clients send the bare name, newer ones an object
    if isinstance(data, dict):
        data = data.get('playerName')
    return JoinLobby(player_name=_name(data))


def _create_room(data) -> CreateRoom:
    data = _require_mapping(data)
    return CreateRoom(is_public=bool(data.get('isPublic')), player_name=_name(data.get('playerName')))


def _join_room(data) -> JoinRoom:
    data = _require_mapping(data)
    return JoinRoom(room_id=_room_id(data.get('roomId')), player_name=_name(data.get('playerName')))


def _make_move(data) -> MakeMove:
    data = _require_mapping(data)
    index = data.get('index')
    if isinstance(index, bool) or not isinstance(index, int):
        raise MalformedMessage('index must be an integer')
    return MakeMove(room_id=_room_id(data.get('roomId')), index=index)


def _request_rematch(data) -> RequestRematch:
    data = _require_mapping(data)
    return RequestRematch(room_id=_room_id(data.get('roomId')))


def _leave_room(data) -> LeaveRoom:
    return LeaveRoom()


PARSERS: Dict[str, Callable[[Any], Message]] = {
    JOIN_LOBBY: _join_lobby,
    CREATE_ROOM: _create_room,
    JOIN_ROOM: _join_room,
    MAKE_MOVE: _make_move,
    REQUEST_REMATCH: _request_rematch,
    LEAVE_ROOM: _leave_room,
}


def parse_message(event: str, data: Optional[Any] = None) -> Message:
    try:
        parser = PARSERS[event]
    except KeyError:
        raise MalformedMessage(f"unknown event {event!r}") from None
    return parser(data)
