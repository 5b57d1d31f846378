from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Emoji Cinema game server!'})


@main.route('/health')
def health_check():
    """Liveness probe with the number of live rooms."""
    registry = current_app.extensions['room_registry']
    with registry.lock:
        room_count = len(registry)
    return jsonify({
        'status': 'healthy',
        'rooms': room_count,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
