from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
@rooms.route('/', methods=['GET'])
def list_public_rooms():
    """Public rooms still waiting for a second player."""
    directory = current_app.extensions['arena']
    with directory.lock:
        return jsonify(directory.list_public_waiting_rooms())


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room_state(room_id):
    directory = current_app.extensions['arena']
    with directory.lock:
        room = directory.get_room(room_id.upper())
        if room is None:
            return jsonify({'error': 'Room not found'}), 404
        payload = room.public_summary()
        payload['createdAt'] = room.created_at
        payload['state'] = room.to_state()
    return jsonify(payload)
