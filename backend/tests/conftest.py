import os
import sys
import pytest

# Ensure the backend root (containing the `arcade` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arcade import create_app, db, socketio
from arcade.services.sessions import registry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:5173']
    QUIZ_QUESTION_COUNT = 10
    QUIZ_QUESTION_TIMEOUT_SEC = 10
    SCRAMBLE_WORD_COUNT = 5
    SCRAMBLE_WORD_TIMEOUT_SEC = 30
    HANOI_DISK_CHOICES = (3, 4, 5, 6)
    HANOI_SCORING_POLICY = 'ratio'
    LEADERBOARD_LIMIT = 10
    SESSION_RETENTION_SEC = 600
    SESSION_IDLE_TIMEOUT_SEC = 1800
    GENERATION_API_URL = 'https://generation.invalid/v1/generate'
    GENERATION_API_KEY = None
    GENERATION_TIMEOUT_SEC = 1


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import arcade.models  # noqa: F401
        db.create_all()
        yield application
        registry.clear_sessions()
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


class ManualTimers:
    """Timer factory for session controllers; countdowns fire only when a test says so."""

    def __init__(self):
        self.started = []

    def __call__(self, duration, on_expire):
        entry = {'duration': duration, 'on_expire': on_expire, 'cancelled': False, 'fired': False}
        self.started.append(entry)

        def cancel():
            entry['cancelled'] = True
        return cancel

    @property
    def active(self):
        return [e for e in self.started if not (e['cancelled'] or e['fired'])]

    def expire_active(self):
        (entry,) = self.active
        entry['fired'] = True
        entry['on_expire']()


@pytest.fixture()
def timers():
    return ManualTimers()
