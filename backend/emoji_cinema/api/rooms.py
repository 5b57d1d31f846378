from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room_state(room_id):
    """
    Returns the public state of a room. The current movie is never included.
    """
    registry = current_app.extensions['room_registry']
    with registry.lock:
        room = registry.get(room_id)
        if room is None:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify(room.to_dict())
