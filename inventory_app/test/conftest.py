"""
Pytest configuration and fixtures for the inventory API
"""
import os

import pytest

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from inventory_app import create_app
from inventory_app import db as _db
from inventory_app.test.helpers import TEST_USER, create_catalog


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing with an in-memory database"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'RATELIMIT_ENABLED': False,
        'ENABLE_HTTPS': False,
        'FORCE_HTTPS_REDIRECT': False,
        'JWT_SECRET_KEY': 'test-jwt-secret',
    })
    return app

@pytest.fixture(autouse=True)
def database(app):
    """Fresh tables for every test"""
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()

@pytest.fixture
def app_ctx(app):
    """Application context for tests that call the business layer directly"""
    with app.app_context():
        yield app

@pytest.fixture
def client(app):
    """Create Flask test client"""
    return app.test_client()

@pytest.fixture
def auth_headers(client):
    """Register and log in a user, returning bearer headers"""
    response = client.post('/api/auth/signup', json=TEST_USER)
    assert response.status_code == 201, response.get_json()
    response = client.post('/api/auth/login', json={
        'username': TEST_USER['username'],
        'password': TEST_USER['password'],
    })
    assert response.status_code == 200, response.get_json()
    return {'Authorization': f"Bearer {response.get_json()['token']}"}

@pytest.fixture
def catalog(app_ctx):
    """Catalog created inside the test's application context"""
    return create_catalog()

@pytest.fixture
def seeded(app):
    """Catalog ids for API tests (created in a throwaway context)"""
    with app.app_context():
        return create_catalog()
