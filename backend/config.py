import os


def _split_origins(raw):
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Hosting environments assign the port; 3000 for local development
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Comma-separated; "*" allows any origin
    ALLOWED_ORIGINS = _split_origins(os.environ.get('ALLOWED_ORIGINS') or 'http://localhost:3000')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
