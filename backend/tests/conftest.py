import os
import sys
import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, socketio
from tictactoe.registry import RoomRegistry
from tictactoe.services.games.coordinator import MatchCoordinator


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'INFO'
    HOST = '127.0.0.1'
    PORT = 3001
    ROOM_CODE_LENGTH = 6
    IDLE_ROOM_TIMEOUT_SEC = 0
    REAPER_INTERVAL_SEC = 30


class RecordingTransport:
    """Collects coordinator output instead of sending it."""

    def __init__(self):
        self.groups = {}
        self.sent = []
        self.broadcasts = []
        self.closed = []

    def join(self, sid, group):
        self.groups.setdefault(group, set()).add(sid)

    def leave(self, sid, group):
        self.groups.get(group, set()).discard(sid)

    def send(self, sid, event, payload=None):
        self.sent.append((sid, event, payload))

    def broadcast(self, group, event, payload=None, skip_sid=None):
        self.broadcasts.append((group, event, payload, skip_sid))

    def close(self, group):
        self.closed.append(group)
        self.groups.pop(group, None)

    def events_for(self, sid):
        return [event for target, event, _ in self.sent if target == sid]


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def coordinator(registry, transport):
    return MatchCoordinator(registry, transport)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _sio_client(flask_app):
    return socketio.test_client(flask_app, flask_test_client=flask_app.test_client())


@pytest.fixture()
def host_client(flask_app):
    test_client = _sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def guest_client(flask_app):
    test_client = _sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def third_client(flask_app):
    test_client = _sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
