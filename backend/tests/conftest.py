import os
import sys
import pytest

# Ensure the backend root (containing the `emoji_cinema` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from emoji_cinema import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    ROOM_CODE_LENGTH = 4
    MAX_PLAYER_NAME_LENGTH = 32
    MAX_CHAT_LENGTH = 500


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def sio_factory(flask_app):
    """Build connected Socket.IO test clients; each one is a separate player."""
    created = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        connected = [pkt for pkt in test_client.get_received() if pkt['name'] == 'connected']
        test_client.player_id = connected[0]['args'][0]['playerId']
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
