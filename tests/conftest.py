import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(ROOT, 'backend'))
sys.path.insert(0, os.path.join(ROOT, 'frontend'))

from quizpro import create_app  # noqa: E402
from quizpro.db.models import UserProfile  # noqa: E402
from quizpro.extensions import db  # noqa: E402


def sample_question(text='What is 2 + 2?', correct='B', marks=1, **overrides):
    question = {
        'question_text': text,
        'option_a': '3',
        'option_b': '4',
        'option_c': '5',
        'option_d': '22',
        'correct_option': correct,
        'marks': marks,
        'explanation': 'Basic addition.',
    }
    question.update(overrides)
    return question


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(client, email, role):
    user = UserProfile(email=email, name=email.split('@')[0].title(), role=role)
    user.set_password('secret123')
    db.session.add(user)
    db.session.commit()
    resp = client.post('/api/auth/login', json={'email': email, 'password': 'secret123'})
    assert resp.status_code == 200, resp.get_json()
    return {'Authorization': f"Bearer {resp.get_json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return _make_user(client, 'admin@example.com', UserProfile.ROLE_ADMIN)


@pytest.fixture
def student_headers(client):
    return _make_user(client, 'student@example.com', UserProfile.ROLE_STUDENT)


@pytest.fixture
def other_student_headers(client):
    return _make_user(client, 'other@example.com', UserProfile.ROLE_STUDENT)


@pytest.fixture
def published_quiz(client, admin_headers):
    """Three questions worth 1, 2 and 3 marks; total 6; 10 minute limit."""
    resp = client.post('/api/admin/quizzes', headers=admin_headers, json={
        'title': 'Arithmetic',
        'description': 'Warm-up sums',
        'subject': 'Maths',
        'time_limit': 10,
        'questions': [
            sample_question('2 + 2?', correct='B', marks=1),
            sample_question('3 + 3?', correct='C', marks=2, option_c='6'),
            sample_question('1 + 1?', correct='A', marks=3, option_a='2'),
        ],
    })
    assert resp.status_code == 201, resp.get_json()
    quiz = resp.get_json()
    resp = client.post(f"/api/admin/quizzes/{quiz['id']}/publish",
                       headers=admin_headers, json={'is_published': True})
    assert resp.status_code == 200
    return quiz
