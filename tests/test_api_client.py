"""
Tests for the Streamlit side helpers

Tests cover:
- api_client request shapes and APIError messages
- Display formatting used by the dashboard, results and history pages
"""

from unittest import mock

import pytest

from components import api_client
from components.api_client import APIError
from components.formatting import format_date, history_metrics, quiz_card_html


def _response(status=200, body=None, text=''):
    resp = mock.Mock()
    resp.ok = status < 400
    resp.status_code = status
    resp.text = text
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


class TestErrors:
    def test_error_body_becomes_message(self):
        with mock.patch.object(api_client.requests, 'post',
                               return_value=_response(401, {'error': 'invalid credentials'})):
            with pytest.raises(APIError) as excinfo:
                api_client.login('a@example.com', 'wrong')
        assert str(excinfo.value) == 'invalid credentials'
        assert excinfo.value.status_code == 401

    def test_non_json_body_falls_back_to_text(self):
        with mock.patch.object(api_client.requests, 'get',
                               return_value=_response(502, ValueError('no json'), text='Bad Gateway')):
            with pytest.raises(APIError) as excinfo:
                api_client.list_quizzes('tok')
        assert str(excinfo.value) == 'Bad Gateway'
        assert excinfo.value.status_code == 502


class TestRequests:
    def test_bearer_token_sent(self):
        with mock.patch.object(api_client.requests, 'get', return_value=_response(200, [])) as get:
            assert api_client.get_history('tok') == []
        url = get.call_args.args[0]
        assert url.endswith('/api/attempts')
        assert get.call_args.kwargs['headers']['Authorization'] == 'Bearer tok'

    def test_submit_sends_answers_as_list(self):
        with mock.patch.object(api_client.requests, 'post',
                               return_value=_response(200, {'status': 'completed'})) as post:
            api_client.submit_attempt('tok', 'att-1', {'q1': 'A', 'q2': 'C'})
        assert post.call_args.args[0].endswith('/api/attempts/att-1/submit')
        assert post.call_args.kwargs['json'] == {'answers': [
            {'question_id': 'q1', 'selected_option': 'A'},
            {'question_id': 'q2', 'selected_option': 'C'},
        ]}

    def test_submit_without_answers(self):
        with mock.patch.object(api_client.requests, 'post', return_value=_response()) as post:
            api_client.submit_attempt('tok', 'att-1')
        assert post.call_args.kwargs['json'] == {'answers': []}

    def test_admin_quizzes_mine_param(self):
        with mock.patch.object(api_client.requests, 'get', return_value=_response(200, [])) as get:
            api_client.admin_quizzes('tok', mine=True)
            assert get.call_args.kwargs['params'] == {'mine': '1'}
            api_client.admin_quizzes('tok')
            assert get.call_args.kwargs['params'] is None

    def test_update_quiz_patches_admin_route(self):
        with mock.patch.object(api_client.requests, 'patch',
                               return_value=_response(200, {'id': 'qz'})) as patch:
            api_client.update_quiz('tok', 'qz', {'is_active': False})
        assert patch.call_args.args[0].endswith('/api/admin/quizzes/qz')
        assert patch.call_args.kwargs['json'] == {'is_active': False}

    def test_refresh_returns_access_token(self):
        with mock.patch.object(api_client.requests, 'post',
                               return_value=_response(200, {'access_token': 'new'})) as post:
            assert api_client.refresh_token('refresh-tok') == 'new'
        assert post.call_args.kwargs['headers']['Authorization'] == 'Bearer refresh-tok'


class TestFormatting:
    def test_format_date(self):
        assert format_date('2026-01-05T14:30:00+00:00') == 'Jan 05, 2026 14:30'
        assert format_date(None) == '-'
        assert format_date('yesterday') == 'yesterday'

    def test_quiz_card_escapes_author_text(self):
        card = quiz_card_html({
            'title': '<script>alert(1)</script>',
            'subject': 'Maths & Logic',
            'description': None,
            'question_count': 3, 'total_marks': 6, 'time_limit': 10,
        })
        assert '<script>' not in card
        assert '&lt;script&gt;alert(1)&lt;/script&gt;' in card
        assert 'Maths &amp; Logic' in card
        assert '3 questions · 6 marks' in card

    def test_history_metrics(self):
        attempts = [{'percentage': 50.0}, {'percentage': 100.0}, {'percentage': 16.67}]
        assert history_metrics(attempts) == {'taken': 3, 'average': 55.6, 'best': 100.0}
        assert history_metrics([]) == {'taken': 0, 'average': 0.0, 'best': 0.0}
