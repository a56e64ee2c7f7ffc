import os
import sys
import pytest

# Ensure the backend root (containing the `roster` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from roster import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:3000']
    LOG_LEVEL = 'DEBUG'
    REALTIME_ENABLED = True
    VS_DEFAULT_STAGE_COUNT = 3


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import roster.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def make_player(client):
    def _make(name='Alice', rank=1, level=10):
        res = client.post('/api/players', json={'name': name, 'rank': rank, 'level': level})
        assert res.status_code == 201, res.get_json()
        return res.get_json()['player']
    return _make


@pytest.fixture()
def make_week(client):
    def _make(start_date='2026-10-12', end_date=None):
        body = {'startDate': start_date}
        if end_date:
            body['endDate'] = end_date
        res = client.post('/api/vs/weeks', json=body)
        assert res.status_code == 200, res.get_json()
        return res.get_json()['week']
    return _make


@pytest.fixture()
def make_stage(client):
    def _make(number=1, stage_type=None):
        res = client.post('/api/vs/stages', json={'stageNumber': number, 'stageType': stage_type})
        assert res.status_code == 201, res.get_json()
        return res.get_json()['stage']
    return _make
