from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    directory = current_app.extensions['arena']
    with directory.lock:
        rooms, players = directory.room_count(), directory.player_count()
    return jsonify({
        'message': 'Welcome to the tic-tac-toe arena!',
        'rooms': rooms,
        'players': players,
    })
