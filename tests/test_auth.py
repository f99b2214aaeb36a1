"""
Tests for the auth API

Tests cover:
- Registration validation and duplicate emails
- Login, refresh, me and logout
- Role claims guarding admin routes
"""

from quizpro.db.models import UserProfile
from quizpro.extensions import db


def _register(client, **overrides):
    payload = {'name': 'Ada Lovelace', 'email': 'Ada@Example.com', 'password': 'secret1'}
    payload.update(overrides)
    return client.post('/api/auth/register', json=payload)


class TestRegister:
    def test_creates_student_and_signs_in(self, client):
        resp = _register(client)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body['access_token'] and body['refresh_token']
        assert body['user']['email'] == 'ada@example.com'
        assert body['user']['role'] == 'student'
        assert body['user']['name'] == 'Ada Lovelace'

    def test_duplicate_email_is_conflict(self, client):
        assert _register(client).status_code == 201
        resp = _register(client, email='ada@example.com')
        assert resp.status_code == 409

    def test_field_errors_are_reported(self, client):
        resp = _register(client, name='', password='123')
        assert resp.status_code == 400
        body = resp.get_json()
        assert body['error'] == 'Name is required'
        assert set(body['fields']) == {'name', 'password'}

    def test_role_cannot_be_chosen_by_caller(self, client):
        resp = _register(client, role='admin')
        assert resp.get_json()['user']['role'] == 'student'


class TestLogin:
    def test_login_and_me(self, client):
        _register(client)
        resp = client.post('/api/auth/login', json={'email': 'ada@example.com', 'password': 'secret1'})
        assert resp.status_code == 200
        token = resp.get_json()['access_token']

        me = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert me.status_code == 200
        assert me.get_json()['user']['email'] == 'ada@example.com'

    def test_wrong_password(self, client):
        _register(client)
        resp = client.post('/api/auth/login', json={'email': 'ada@example.com', 'password': 'nope'})
        assert resp.status_code == 401
        assert resp.get_json() == {'error': 'invalid credentials'}

    def test_disabled_account(self, client):
        _register(client)
        user = UserProfile.query.filter_by(email='ada@example.com').first()
        user.is_active = False
        db.session.commit()
        resp = client.post('/api/auth/login', json={'email': 'ada@example.com', 'password': 'secret1'})
        assert resp.status_code == 403

    def test_missing_fields(self, client):
        resp = client.post('/api/auth/login', json={})
        assert resp.status_code == 400

    def test_non_object_body(self, client):
        for path in ('/api/auth/login', '/api/auth/register'):
            resp = client.post(path, json=['ada@example.com', 'secret1'])
            assert resp.status_code == 400
            assert resp.get_json()['fields'] == {'body': 'Expected a JSON object'}


class TestTokens:
    def test_refresh_issues_new_access_token(self, client):
        body = _register(client).get_json()
        resp = client.post('/api/auth/refresh',
                           headers={'Authorization': f"Bearer {body['refresh_token']}"})
        assert resp.status_code == 200
        assert resp.get_json()['access_token']

    def test_missing_token_is_401_with_error_body(self, client):
        resp = client.get('/api/auth/me')
        assert resp.status_code == 401
        assert 'error' in resp.get_json()

    def test_logout_revokes_access_token(self, client):
        token = _register(client).get_json()['access_token']
        headers = {'Authorization': f'Bearer {token}'}
        assert client.post('/api/auth/logout', headers=headers).status_code == 200
        resp = client.get('/api/auth/me', headers=headers)
        assert resp.status_code == 401
        assert resp.get_json() == {'error': 'token has been revoked'}


class TestAdminGuard:
    def test_student_gets_403(self, client, student_headers):
        resp = client.get('/api/admin/stats', headers=student_headers)
        assert resp.status_code == 403
        assert resp.get_json() == {'error': 'admin access required'}

    def test_admin_allowed(self, client, admin_headers):
        resp = client.get('/api/admin/stats', headers=admin_headers)
        assert resp.status_code == 200

    def test_demoted_admin_loses_access(self, client, admin_headers):
        user = UserProfile.query.filter_by(email='admin@example.com').first()
        user.role = UserProfile.ROLE_STUDENT
        db.session.commit()
        resp = client.get('/api/admin/stats', headers=admin_headers)
        assert resp.status_code == 403
