from dataclasses import dataclass
from typing import Container, List, Optional
import random
import string
import time

from arena.services.games.board import (
    BOARD_SIZE,
    IllegalMove,
    apply_move,
    check_winner,
    empty_board,
    is_draw,
    other_mark,
)

WAITING = 'waiting'
PLAYING = 'playing'
FINISHED = 'finished'

MAX_PLAYERS = 2
ROOM_ID_LENGTH = 6


@dataclass
class RoomPlayer:
    sid: str
    name: str
    symbol: str


@dataclass
class PlayerRecord:
    sid: str
    name: str
    room_id: Optional[str] = None
    ready_for_rematch: bool = False


def generate_room_id(existing: Container[str] = (), length=ROOM_ID_LENGTH):
    """Generate a short room code that is not already in use."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in existing:
            return code


class Room:
    def __init__(self, room_id: str, is_public: bool, creator_id: Optional[str] = None):
        self.id = room_id
        self.is_public = bool(is_public)
        self.creator_id = creator_id
        self.players: List[RoomPlayer] = []
        self.board = empty_board()
        self.current_player = 'X'
        self.status = WAITING  # waiting, playing, finished
        self.winner: Optional[str] = None
        self.moves = 0
        self.created_at = time.time()

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    @property
    def is_draw(self) -> bool:
        return is_draw(self.board, self.moves)

    def get_player(self, sid: str) -> Optional[RoomPlayer]:
        return next((p for p in self.players if p.sid == sid), None)

    def add_player(self, sid: str, name: str) -> bool:
        if self.is_full:
            return False
        # Mark follows the current seat count, not who played here before a reset
        symbol = 'X' if not self.players else 'O'
        self.players.append(RoomPlayer(sid=sid, name=name, symbol=symbol))
        if len(self.players) == MAX_PLAYERS:
            self.status = PLAYING
        return True

    def remove_player(self, sid: str) -> None:
        self.players = [p for p in self.players if p.sid != sid]
        # A single remaining player keeps the board and status as they were
        if not self.players:
            self.reset()

    def make_move(self, index, sid: str) -> bool:
        if self.status != PLAYING:
            return False
        player = self.get_player(sid)
        if player is None or player.symbol != self.current_player:
            return False
        try:
            self.board = apply_move(self.board, index, player.symbol)
        except IllegalMove:
            return False
        self.moves += 1

        self.winner = check_winner(self.board)
        if self.winner or self.moves == BOARD_SIZE:
            self.status = FINISHED
        else:
            self.current_player = other_mark(self.current_player)
        return True

    def reset(self) -> None:
        self.board = empty_board()
        self.current_player = 'X'
        self.status = PLAYING if len(self.players) == MAX_PLAYERS else WAITING
        self.winner = None
        self.moves = 0

    def public_summary(self):
        return {
            'id': self.id,
            'isPublic': self.is_public,
            'playersCount': len(self.players),
            'status': self.status,
        }

    def to_state(self):
        return {
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'status': self.status,
            'winner': self.winner,
            'players': [
                {
                    'name': p.name,
                    'symbol': p.symbol,
                    'isCurrentPlayer': p.symbol == self.current_player,
                }
                for p in self.players
            ],
            'isDraw': self.moves == BOARD_SIZE and not self.winner,
        }

    def __repr__(self):
        return f"<Room {self.id} {self.status} players={len(self.players)} moves={self.moves}>"
