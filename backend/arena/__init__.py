from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _cors_origins(origins):
    return '*' if '*' in origins else list(origins)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _cors_origins(flask_app.config.get('ALLOWED_ORIGINS', []))
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Rooms and players live only as long as this app object
    from arena.services.games.directory import SessionDirectory
    flask_app.extensions['arena'] = SessionDirectory()

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arena.main import main
    flask_app.register_blueprint(main)

    from arena.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Importing here binds the handlers to the initialized socketio instance
    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    return flask_app
