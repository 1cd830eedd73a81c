from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Tic Tac Toe Socket.IO server', 'status': 'ok'})

@main.route('/health')
def health():
    """Room counts for load balancers and dashboards."""
    stats = current_app.extensions['tictactoe'].stats()
    return jsonify({
        'status': 'ok',
        'rooms': stats['rooms'],
        'waitingRooms': stats['waitingRooms'],
        'activeGames': stats['activeGames'],
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    })
