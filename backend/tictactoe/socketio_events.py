from functools import wraps
from typing import Any, Dict

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from tictactoe.exceptions import MatchError
from tictactoe.services.games.coordinator import MatchCoordinator

ERROR = 'game:error'


class SocketIOTransport:
    """Delivers coordinator output through Flask-SocketIO rooms.

    A coordinator group is a Socket.IO room named by the room's internal id.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def join(self, sid: str, group: str) -> None:
        join_room(group, sid=sid, namespace=self.namespace)

    def leave(self, sid: str, group: str) -> None:
        leave_room(group, sid=sid, namespace=self.namespace)

    def send(self, sid: str, event: str, payload=None) -> None:
        self._emit(event, payload, to=sid)

    def broadcast(self, group: str, event: str, payload=None, skip_sid=None) -> None:
        self._emit(event, payload, to=group, skip_sid=skip_sid)

    def close(self, group: str) -> None:
        self.socketio.close_room(group, namespace=self.namespace)

    def _emit(self, event, payload, **kwargs):
        if payload is None:
            self.socketio.emit(event, namespace=self.namespace, **kwargs)
        else:
            self.socketio.emit(event, payload, namespace=self.namespace, **kwargs)


def _coordinator() -> MatchCoordinator:
    return current_app.extensions['tictactoe']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _reply_errors(event: str):
    """Turn a rejected request into a ``game:error`` reply to the sender only."""
    def decorator(handler):
        @wraps(handler)
        def wrapper(*args):
            try:
                return handler(*args)
            except MatchError as exc:
                current_app.logger.info(f"[rejected] event={event} sid={_get_sid()} reason={exc.message}")
                emit(ERROR, exc.message)
        return wrapper
    return decorator


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _coordinator().disconnect(sid)


@_reply_errors('game:create-room')
def handle_create_room(data=None):
    _coordinator().create_room(_get_sid())


@_reply_errors('game:join-room')
def handle_join_room(data=None):
    _coordinator().join_room(_get_sid(), _payload(data).get('roomId'))


@_reply_errors('game:move')
def handle_move(data=None):
    data = _payload(data)
    _coordinator().move(_get_sid(), data.get('roomId'), data.get('index'), data.get('symbol'))


@_reply_errors('game:reset')
def handle_reset(data=None):
    _coordinator().reset(_get_sid(), _payload(data).get('roomId'))


@_reply_errors('game:leave')
def handle_leave(data=None):
    _coordinator().leave(_get_sid(), _payload(data).get('roomId'))


def register_socketio_handlers(socketio, namespace: str = '/') -> None:
    """Register the match event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('game:create-room', handle_create_room, namespace=namespace)
    socketio.on_event('game:join-room', handle_join_room, namespace=namespace)
    socketio.on_event('game:move', handle_move, namespace=namespace)
    socketio.on_event('game:reset', handle_reset, namespace=namespace)
    socketio.on_event('game:leave', handle_leave, namespace=namespace)
