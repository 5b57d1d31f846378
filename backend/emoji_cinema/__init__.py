from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from emoji_cinema.config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    # Domain modules log under emoji_cinema.*, which propagates here
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Fresh in-memory state per app; nothing survives a restart
    from emoji_cinema.services.games.registry import RoomRegistry
    flask_app.extensions['room_registry'] = RoomRegistry(
        room_code_length=flask_app.config.get('ROOM_CODE_LENGTH', 4),
        max_name_length=flask_app.config.get('MAX_PLAYER_NAME_LENGTH', 32),
        max_chat_length=flask_app.config.get('MAX_CHAT_LENGTH', 500),
    )

    # Import and register blueprints here
    from emoji_cinema.main import main
    flask_app.register_blueprint(main)

    from emoji_cinema.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from emoji_cinema.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('movies')
    def movies_command():
        """Prints the movie catalog secrets are drawn from."""
        from emoji_cinema.services.games.catalog import MOVIES
        for movie in MOVIES:
            click.echo(f"{movie['title']} ({movie['year']})")

    flask_app.cli.add_command(movies_command)

    return flask_app
