import os


def _origins(raw):
    origins = [o.strip() for o in raw.split(',') if o.strip()]
    if not origins or '*' in origins:
        return '*'
    return origins


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of allowed origins, '*' allows any
    CORS_ORIGINS = _origins(os.environ.get('CORS_ORIGINS', '*'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Development server only; never enable in production
    DEBUG = os.environ.get('FLASK_DEBUG', '0').lower() in ('1', 'true', 'yes')
    ROOM_CODE_LENGTH = 6
    # Waiting rooms with no opponent are removed after this many seconds. 0 disables.
    IDLE_ROOM_TIMEOUT_SEC = int(os.environ.get('IDLE_ROOM_TIMEOUT_SEC', '0'))
    REAPER_INTERVAL_SEC = int(os.environ.get('REAPER_INTERVAL_SEC', '30'))
