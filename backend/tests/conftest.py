"""Shared fixtures: app, clients per role, sample users."""
from datetime import datetime, timedelta

import pytest

from sams import create_app, db
from sams.models.user import User, UserRole

PASSWORD = 'password123'


class FakeClock:
    """Controllable replacement for datetime.utcnow."""

    def __init__(self, now: datetime = None):
        self.now = now or datetime(2024, 10, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_user(username, role=UserRole.STUDENT, student_id=None, first_name='Test', last_name='User'):
    user = User(
        username=username,
        first_name=first_name,
        last_name=last_name,
        email=f'{username}@sams.edu',
        role=role,
        student_id=student_id
    )
    user.set_password(PASSWORD)
    return user.save()


def login(client, username, password=PASSWORD):
    return client.post('/api/auth/login', json={'username': username, 'password': password})


@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def clock(app):
    """Drive QR token expiry without sleeping."""
    fake = FakeClock()
    app.extensions['qr_tokens'].clock = fake
    return fake


@pytest.fixture
def admin(app):
    return make_user('admin', UserRole.ADMIN, first_name='Admin')


@pytest.fixture
def lecturer(app):
    return make_user('lecturer', UserRole.LECTURER, first_name='John', last_name='Doe')


@pytest.fixture
def student(app):
    return make_user('student', UserRole.STUDENT, student_id='ST12345', first_name='Jane', last_name='Smith')


@pytest.fixture
def admin_client(app, admin):
    client = app.test_client()
    assert login(client, 'admin').status_code == 200
    return client


@pytest.fixture
def lecturer_client(app, lecturer):
    client = app.test_client()
    assert login(client, 'lecturer').status_code == 200
    return client


@pytest.fixture
def student_client(app, student):
    client = app.test_client()
    assert login(client, 'student').status_code == 200
    return client
