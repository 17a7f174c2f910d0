"""
Pytest configuration and fixtures for testing.
Every test gets a fresh app backed by its own SQLite file.
"""
import os

import pytest

# Set test environment variables BEFORE creating the app
os.environ.setdefault('SECRET_KEY', 'sfndsfojoriwew09rjfjndsknfkj')
os.environ.setdefault('FLASK_ENV', 'testing')

from factify import create_app, db  # noqa: E402


PASSWORD = 'Password123'


@pytest.fixture
def app(tmp_path):
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'factify-test.db'}",
        'SEED_DEMO_QUIZ': False,
        'BCRYPT_ROUNDS': 4,
        'JWT_SECRET_KEY': 'test-jwt-secret-key-with-enough-length',
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a user and return the auth response body."""
    def _register(username='alice', email=None, password=PASSWORD):
        response = client.post('/api/account/register', json={
            'username': username,
            'email': email or f'{username}@test.com',
            'password': password,
        })
        assert response.status_code == 200, response.get_json()
        return response.get_json()
    return _register


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def alice(register):
    return register('alice')


@pytest.fixture
def bob(register):
    return register('bob')


@pytest.fixture
def alice_headers(alice):
    return bearer(alice['token'])


@pytest.fixture
def bob_headers(bob):
    return bearer(bob['token'])


def quiz_payload(title='Capitals', public=False):
    return {
        'title': title,
        'description': 'European capitals',
        'isPublic': public,
        'questions': [
            {
                'questionText': 'Capital of Norway?',
                'points': 1,
                'options': [
                    {'text': 'Oslo', 'isCorrect': True},
                    {'text': 'Bergen', 'isCorrect': False},
                    {'text': 'Trondheim', 'isCorrect': False},
                ],
            },
            {
                'questionText': 'Which are Nordic capitals?',
                'points': 2,
                'options': [
                    {'text': 'Stockholm', 'isCorrect': True},
                    {'text': 'Helsinki', 'isCorrect': True},
                    {'text': 'Berlin', 'isCorrect': False},
                ],
            },
        ],
    }


@pytest.fixture
def create_quiz(client):
    """Create a quiz as the given user and return its JSON."""
    def _create(headers, payload=None):
        response = client.post('/api/quiz', json=payload or quiz_payload(), headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _create
