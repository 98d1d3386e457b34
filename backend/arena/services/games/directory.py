"""Process-scoped registries of live rooms and connected players.

The directory is the single owner of the room-id -> Room and
sid -> PlayerRecord mappings. It is created by ``create_app`` and lives as
long as the process; nothing is persisted.

Socket.IO may dispatch handlers on several threads, so callers hold
``directory.lock`` for the whole of an event (lookup, mutation and the
emits that follow). That keeps every event atomic with respect to the
others and keeps broadcasts in mutation order.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import threading

from arena.models import FINISHED, MAX_PLAYERS, WAITING, PlayerRecord, Room, generate_room_id


REMATCH_RESET = 'reset'
REMATCH_PENDING = 'pending'
REMATCH_WAITING = 'waiting'


class RoomJoinError(Exception):
    """A lobby action was rejected; the message is shown to the player."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class LeaveOutcome:
    room: Room
    room_deleted: bool

    @property
    def room_id(self) -> str:
        return self.room.id

    @property
    def is_public(self) -> bool:
        return self.room.is_public


class SessionDirectory:

    def __init__(self):
        self.lock = threading.RLock()
        self._rooms: Dict[str, Room] = {}
        self._players: Dict[str, PlayerRecord] = {}

    # ---- lookups ----

    def get_room(self, room_id: Optional[str]) -> Optional[Room]:
        if not room_id:
            return None
        return self._rooms.get(room_id)

    def get_player(self, sid: str) -> Optional[PlayerRecord]:
        return self._players.get(sid)

    def room_count(self) -> int:
        return len(self._rooms)

    def player_count(self) -> int:
        return len(self._players)

    def generate_room_id(self) -> str:
        return generate_room_id(self._rooms)

    def list_public_waiting_rooms(self) -> List[dict]:
        return [
            room.public_summary()
            for room in self._rooms.values()
            if room.is_public and room.status == WAITING
        ]

    # ---- lobby ----

    def join_lobby(self, sid: str, name: str) -> PlayerRecord:
        # Overwrites any previous record after giving up its seat
        previous = self._players.get(sid)
        if previous is not None:
            self._release_seat(previous)
        player = PlayerRecord(sid=sid, name=name)
        self._players[sid] = player
        return player

    def _ensure_player(self, sid: str, name: str) -> PlayerRecord:
        player = self._players.get(sid)
        if player is None:
            player = self.join_lobby(sid, name)
        return player

    def _bind(self, player: PlayerRecord, room: Room) -> None:
        player.room_id = room.id
        player.ready_for_rematch = False

    def _release_seat(self, player: PlayerRecord) -> Optional[LeaveOutcome]:
        # A player holds at most one seat; the router normally released it already
        if not player.room_id:
            return None
        return self.leave_room(player.sid)

    def create_room(self, sid: str, name: str, is_public: bool) -> Room:
        player = self._ensure_player(sid, name)
        self._release_seat(player)
        room = Room(self.generate_room_id(), is_public, creator_id=sid)
        room.add_player(sid, name)
        self._rooms[room.id] = room
        self._bind(player, room)
        return room

    def check_joinable(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomJoinError('Room not found')
        if len(room.players) >= MAX_PLAYERS:
            raise RoomJoinError('Room is full')
        if room.status != WAITING:
            raise RoomJoinError('Game already in progress')
        return room

    def join_room(self, sid: str, room_id: str, name: str) -> Room:
        room = self.check_joinable(room_id)
        player = self._ensure_player(sid, name)
        if player.room_id == room.id:
            return room
        self._release_seat(player)
        room.add_player(sid, name)
        self._bind(player, room)
        return room

    # ---- in-room actions ----

    def make_move(self, room_id: str, sid: str, index) -> Optional[Room]:
        room = self.get_room(room_id)
        if room is None:
            return None
        return room if room.make_move(index, sid) else None

    def request_rematch(self, room_id: str, sid: str) -> Optional[str]:
        """Record a rematch request and report how far consensus got.

        Returns ``None`` when the room is missing or its game is not over,
        ``REMATCH_RESET`` once both seated players have asked (the room is
        reset and their flags cleared), ``REMATCH_PENDING`` while the other
        player has not asked yet, and ``REMATCH_WAITING`` when there is no
        second player to ask.
        """
        room = self.get_room(room_id)
        if room is None or room.status != FINISHED:
            return None

        player = self._players.get(sid)
        if player is not None:
            player.ready_for_rematch = True

        if len(room.players) != MAX_PLAYERS:
            return REMATCH_WAITING

        seated = [self._players.get(p.sid) for p in room.players]
        if not all(record is not None and record.ready_for_rematch for record in seated):
            return REMATCH_PENDING

        room.reset()
        for record in seated:
            record.ready_for_rematch = False
        return REMATCH_RESET

    # ---- departures ----

    def leave_room(self, sid: str) -> Optional[LeaveOutcome]:
        player = self._players.get(sid)
        if player is None or not player.room_id:
            return None

        room = self._rooms.get(player.room_id)
        player.room_id = None
        player.ready_for_rematch = False
        if room is None:
            return None

        room.remove_player(sid)
        deleted = not room.players
        if deleted:
            del self._rooms[room.id]
        return LeaveOutcome(room=room, room_deleted=deleted)

    def disconnect(self, sid: str) -> Optional[LeaveOutcome]:
        outcome = self.leave_room(sid)
        self._players.pop(sid, None)
        return outcome
