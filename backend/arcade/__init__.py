from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arcade.main import main
    flask_app.register_blueprint(main)

    from arcade.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    from arcade.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    from arcade.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    from arcade.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login restores the current player from the remember cookie
    from arcade.models import Player

    @login_manager.user_loader
    def load_player(player_id):
        return db.session.get(Player, player_id)

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with demo players."""
        from arcade.services.players.store import create_player
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            demo = [
                ('Ada', 'ada@example.com', '5550000001', 36),
                ('Linus', 'linus@example.com', '5550000002', 29),
                ('Grace', 'grace@example.com', '5550000003', 41),
            ]
            for name, email, mobile, age in demo:
                create_player(name=name, email=email, mobile_number=mobile, age=age)
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
