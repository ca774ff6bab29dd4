"""
Signup, login and bearer-token checks on protected routes
"""
from datetime import datetime, timedelta, timezone

import jwt

from inventory_app.test.helpers import TEST_USER


def test_signup_and_login_flow(client):
    response = client.post('/api/auth/signup', json=TEST_USER)
    assert response.status_code == 201
    assert response.get_json() == {'message': 'User registered successfully', 'user': 'clerk'}

    response = client.post('/api/auth/login', json={'username': 'clerk', 'password': TEST_USER['password']})
    body = response.get_json()
    assert response.status_code == 200
    assert body['message'] == 'Login successful'
    assert body['user'] == 'clerk'
    assert body['email'] == 'clerk@example.com'

    claims = jwt.decode(body['token'], 'test-jwt-secret', algorithms=['HS256'])
    assert claims['sub'] == 'clerk'
    assert claims['email'] == 'clerk@example.com'
    assert claims['exp'] - claims['iat'] == 86400

    response = client.get('/api/auth/me', headers={'Authorization': f"Bearer {body['token']}"})
    assert response.status_code == 200
    assert response.get_json() == {'username': 'clerk', 'email': 'clerk@example.com'}


def test_duplicate_signup_conflicts(client):
    client.post('/api/auth/signup', json=TEST_USER)

    response = client.post('/api/auth/signup', json=dict(TEST_USER, email='other@example.com'))
    assert response.status_code == 409
    assert response.get_json()['error'] == 'Username already taken'

    response = client.post('/api/auth/signup', json=dict(TEST_USER, username='someone'))
    assert response.status_code == 409
    assert response.get_json()['error'] == 'Email already registered'


def test_signup_requires_fields(client):
    response = client.post('/api/auth/signup', json={'username': 'x'})
    assert response.status_code == 400


def test_wrong_password_is_401(client):
    client.post('/api/auth/signup', json=TEST_USER)
    response = client.post('/api/auth/login', json={'username': 'clerk', 'password': 'nope-nope-nope'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid username or password'

    response = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'whatever1'})
    assert response.status_code == 401


def test_missing_header_is_401(client):
    response = client.get('/api/products')
    assert response.status_code == 401
    body = response.get_json()
    assert body['error'] == 'Missing or invalid Authorization header'
    assert body['status'] == 401
    assert 'timestamp' in body

    response = client.get('/api/auth/me', headers={'Authorization': 'Token abc'})
    assert response.status_code == 401


def test_bad_and_expired_tokens_are_401(client):
    client.post('/api/auth/signup', json=TEST_USER)

    response = client.get('/api/dashboard/summary', headers={'Authorization': 'Bearer not-a-token'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid or expired token'

    forged = jwt.encode({'sub': 'clerk', 'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
                        'some-other-secret', algorithm='HS256')
    response = client.get('/api/orders', headers={'Authorization': f'Bearer {forged}'})
    assert response.status_code == 401

    expired = jwt.encode({'sub': 'clerk', 'exp': datetime.now(timezone.utc) - timedelta(seconds=5)},
                         'test-jwt-secret', algorithm='HS256')
    response = client.get('/api/orders', headers={'Authorization': f'Bearer {expired}'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Token has expired'


def test_token_for_unknown_user_is_401(client):
    token = jwt.encode({'sub': 'ghost', 'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
                       'test-jwt-secret', algorithm='HS256')
    response = client.get('/api/suppliers', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401


def test_health_is_public(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}
