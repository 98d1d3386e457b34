import pytest

from arena.messages import (
    CreateRoom,
    JoinLobby,
    JoinRoom,
    LeaveRoom,
    MakeMove,
    MalformedMessage,
    RequestRematch,
    parse_message,
)


def test_join_lobby_accepts_bare_name_or_object():
    assert parse_message('join-lobby', ' Alice ') == JoinLobby('Alice')
    assert parse_message('join-lobby', {'playerName': 'Bob'}) == JoinLobby('Bob')
    assert parse_message('join-lobby', None) == JoinLobby('')


def test_long_names_are_truncated():
    assert len(parse_message('join-lobby', 'x' * 100).player_name) == 32


def test_room_ids_are_upper_cased():
    assert parse_message('join-room', {'roomId': ' ab12cd ', 'playerName': 'Cara'}) == JoinRoom('AB12CD', 'Cara')
    assert parse_message('request-rematch', {'roomId': 'ab12cd'}) == RequestRematch('AB12CD')


def test_create_room_and_move():
    assert parse_message('create-room', {'isPublic': True, 'playerName': 'Al'}) == CreateRoom(True, 'Al')
    assert parse_message('create-room', {'playerName': 'Al'}) == CreateRoom(False, 'Al')
    assert parse_message('make-move', {'roomId': 'AB12CD', 'index': 3}) == MakeMove('AB12CD', 3)
    assert parse_message('leave-room') == LeaveRoom()


@pytest.mark.parametrize('event, data', [
    ('create-room', 'Alice'),
    ('join-room', {'playerName': 'Alice'}),
    ('join-room', {'roomId': '   '}),
    ('join-room', {'roomId': 'AB12CD', 'playerName': 7}),
    ('make-move', {'roomId': 'AB12CD'}),
    ('make-move', {'roomId': 'AB12CD', 'index': True}),
    ('make-move', {'roomId': 'AB12CD', 'index': '4'}),
    ('request-rematch', None),
    ('spectate', {}),
])
def test_malformed_payloads(event, data):
    with pytest.raises(MalformedMessage):
        parse_message(event, data)
