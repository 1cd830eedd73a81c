import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from tictactoe.config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room state lives for the life of this app; nothing is persisted
    from tictactoe.registry import RoomRegistry
    from tictactoe.services.games.coordinator import MatchCoordinator
    from tictactoe.socketio_events import SocketIOTransport, register_socketio_handlers

    registry = RoomRegistry(
        code_length=flask_app.config.get('ROOM_CODE_LENGTH', 6),
        logger=flask_app.logger,
    )
    coordinator = MatchCoordinator(
        registry,
        SocketIOTransport(socketio, namespace),
        logger=flask_app.logger,
        idle_timeout=int(flask_app.config.get('IDLE_ROOM_TIMEOUT_SEC', 0)),
    )
    flask_app.extensions['tictactoe'] = coordinator

    from tictactoe.main import main
    flask_app.register_blueprint(main)

    register_socketio_handlers(socketio, namespace=namespace)

    from tictactoe.services.games.reaper import start_idle_reaper
    start_idle_reaper(flask_app, socketio, coordinator)

    return flask_app
