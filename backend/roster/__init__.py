from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from sqlalchemy import event
from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException
import sqlite3
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves FK enforcement off per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from roster.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    from roster.api.vs import vs
    flask_app.register_blueprint(vs, url_prefix='/api/vs')

    @flask_app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    _register_error_handlers(flask_app)

    from roster.realtime import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from roster.models import VsStage
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            stage_count = int(flask_app.config.get('VS_DEFAULT_STAGE_COUNT', 6))
            for number in range(1, stage_count + 1):
                db.session.add(VsStage(stage_number=number))

            db.session.commit()
            print(f'Database has been reset and seeded with {stage_count} VS stages!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app


def _register_error_handlers(flask_app):
    from roster.errors import RosterError

    @flask_app.errorhandler(RosterError)
    def handle_roster_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code
