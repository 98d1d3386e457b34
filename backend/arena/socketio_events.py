from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from arena import socketio
from arena.messages import (
    CREATE_ROOM,
    ERROR,
    GAME_STATE,
    JOIN_LOBBY,
    JOIN_ROOM,
    LEAVE_ROOM,
    MAKE_MOVE,
    PUBLIC_ROOMS,
    REMATCH_REQUESTED,
    REQUEST_REMATCH,
    ROOM_CREATED,
    ROOM_JOINED,
    MalformedMessage,
    parse_message,
)
from arena.services.games.directory import (
    REMATCH_PENDING,
    REMATCH_RESET,
    LeaveOutcome,
    RoomJoinError,
    SessionDirectory,
)
from arena.services.games.board import winning_line


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _directory() -> SessionDirectory:
    return current_app.extensions['arena']


def _channel(room_id: str) -> str:
    return f"room:{room_id}"


def _parse(event: str, data):
    try:
        return parse_message(event, data)
    except MalformedMessage as exc:
        current_app.logger.warning(f"[{event}] sid={_get_sid()} ignored malformed payload: {exc}")
        return None


def _broadcast_state(room) -> None:
    # Recomputed on every call; clients treat it as authoritative
    emit(GAME_STATE, room.to_state(), to=_channel(room.id))


def _broadcast_public_rooms(directory: SessionDirectory) -> None:
    socketio.emit(PUBLIC_ROOMS, directory.list_public_waiting_rooms(), namespace=request.namespace)


def _announce_departure(directory: SessionDirectory, outcome: LeaveOutcome) -> None:
    if outcome.room_deleted:
        current_app.logger.info(f"[cleanup] room={outcome.room_id} deleted (empty)")
        return
    _broadcast_state(outcome.room)
    if outcome.is_public:
        _broadcast_public_rooms(directory)


def _leave_current_room(directory: SessionDirectory, sid: str) -> None:
    outcome = directory.leave_room(sid)
    if outcome is None:
        return
    leave_room(_channel(outcome.room_id))
    current_app.logger.info(f"[leave-room] sid={sid} room={outcome.room_id}")
    _announce_departure(directory, outcome)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        outcome = directory.disconnect(sid)
        if outcome is not None:
            _announce_departure(directory, outcome)
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def handle_join_lobby(data=None):
    msg = _parse(JOIN_LOBBY, data)
    if msg is None:
        return
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        _leave_current_room(directory, sid)
        directory.join_lobby(sid, msg.player_name)
        emit(PUBLIC_ROOMS, directory.list_public_waiting_rooms())
    current_app.logger.info(f"[join-lobby] sid={sid} name={msg.player_name!r}")


def handle_create_room(data=None):
    msg = _parse(CREATE_ROOM, data)
    if msg is None:
        return
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        _leave_current_room(directory, sid)
        room = directory.create_room(sid, msg.player_name, msg.is_public)
        join_room(_channel(room.id))
        current_app.logger.info(f"[create-room] sid={sid} room={room.id} public={room.is_public}")

        emit(ROOM_CREATED, {'roomId': room.id, 'isPublic': room.is_public})
        if room.is_public:
            _broadcast_public_rooms(directory)
        _broadcast_state(room)


def handle_join_room(data=None):
    msg = _parse(JOIN_ROOM, data)
    if msg is None:
        return
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        player = directory.get_player(sid)
        current = directory.get_room(player.room_id) if player else None
        if current is not None and current.id == msg.room_id:
            # Already seated here; resend what a fresh join would have sent
            emit(ROOM_JOINED, {'roomId': current.id})
            emit(GAME_STATE, current.to_state())
            return

        try:
            directory.check_joinable(msg.room_id)
        except RoomJoinError as exc:
            current_app.logger.info(f"[join-room] sid={sid} room={msg.room_id} rejected: {exc.message}")
            emit(ERROR, {'message': exc.message})
            return

        _leave_current_room(directory, sid)
        room = directory.join_room(sid, msg.room_id, msg.player_name)
        join_room(_channel(room.id))
        current_app.logger.info(f"[join-room] sid={sid} room={room.id} status={room.status}")

        emit(ROOM_JOINED, {'roomId': room.id})
        _broadcast_state(room)
        if room.is_public:
            _broadcast_public_rooms(directory)


def handle_make_move(data=None):
    msg = _parse(MAKE_MOVE, data)
    if msg is None:
        return
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        room = directory.make_move(msg.room_id, sid, msg.index)
        if room is None:
            current_app.logger.debug(f"[make-move] sid={sid} room={msg.room_id} index={msg.index} rejected")
            return
        if room.winner or room.is_draw:
            current_app.logger.info(
                f"[game-over] room={room.id} winner={room.winner} line={winning_line(room.board)} draw={room.is_draw}"
            )
        _broadcast_state(room)


def handle_request_rematch(data=None):
    msg = _parse(REQUEST_REMATCH, data)
    if msg is None:
        return
    sid = _get_sid()
    directory = _directory()
    with directory.lock:
        outcome = directory.request_rematch(msg.room_id, sid)
        if outcome == REMATCH_RESET:
            room = directory.get_room(msg.room_id)
            current_app.logger.info(f"[rematch] room={room.id} reset, status={room.status}")
            _broadcast_state(room)
        elif outcome == REMATCH_PENDING:
            emit(REMATCH_REQUESTED, to=_channel(msg.room_id), include_self=False)


def handle_leave_room(data=None):
    if _parse(LEAVE_ROOM, data) is None:
        return
    directory = _directory()
    with directory.lock:
        _leave_current_room(directory, _get_sid())


def handle_error(exc):
    current_app.logger.exception(f"[error] sid={_get_sid()} event handler failed: {exc}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(JOIN_LOBBY, handle_join_lobby, namespace=namespace)
    socketio.on_event(CREATE_ROOM, handle_create_room, namespace=namespace)
    socketio.on_event(JOIN_ROOM, handle_join_room, namespace=namespace)
    socketio.on_event(MAKE_MOVE, handle_make_move, namespace=namespace)
    socketio.on_event(REQUEST_REMATCH, handle_request_rematch, namespace=namespace)
    socketio.on_event(LEAVE_ROOM, handle_leave_room, namespace=namespace)
    socketio.on_error_default(handle_error)
