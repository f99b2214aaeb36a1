import pytest

from quizpro.services.errors import ValidationError
from quizpro.services.validation import (
    ensure_valid,
    require_object,
    validate_login,
    validate_question,
    validate_quiz,
    validate_quiz_with_questions,
    validate_registration,
)

from conftest import sample_question


class TestRegistration:
    def test_valid(self):
        assert validate_registration({'name': 'Ada', 'email': 'ada@example.com', 'password': 'secret'}) == {}

    def test_all_fields_missing(self):
        errors = validate_registration({})
        assert set(errors) == {'name', 'email', 'password'}

    def test_bad_email(self):
        errors = validate_registration({'name': 'Ada', 'email': 'ada.example.com', 'password': 'secret'})
        assert errors == {'email': 'Please enter a valid email address'}

    def test_short_password(self):
        errors = validate_registration({'name': 'Ada', 'email': 'ada@example.com', 'password': '12345'})
        assert errors['password'] == 'Password must be at least 6 characters'

    def test_confirm_password_mismatch(self):
        errors = validate_registration({
            'name': 'Ada', 'email': 'ada@example.com',
            'password': 'secret1', 'confirm_password': 'secret2',
        })
        assert errors == {'confirm_password': 'Passwords do not match'}


def test_login_requires_both_fields():
    assert set(validate_login({'email': ' '})) == {'email', 'password'}


class TestQuiz:
    def test_title_required(self):
        assert validate_quiz({'title': '  ', 'time_limit': 10}) == {'title': 'Quiz title is required'}

    def test_time_limit_must_be_positive(self):
        assert 'time_limit' in validate_quiz({'title': 'T', 'time_limit': 0})
        assert 'time_limit' in validate_quiz({'title': 'T', 'time_limit': 'soon'})

    def test_total_marks_optional_but_positive(self):
        assert validate_quiz({'title': 'T'}) == {}
        assert 'total_marks' in validate_quiz({'title': 'T', 'total_marks': -1})

    def test_partial_only_checks_given_fields(self):
        assert validate_quiz({'description': 'new'}, partial=True) == {}
        assert 'title' in validate_quiz({'title': ''}, partial=True)


class TestQuestion:
    def test_valid(self):
        assert validate_question(sample_question()) == {}

    def test_every_option_required(self):
        errors = validate_question(sample_question(option_c=' '))
        assert errors == {'options': 'All options must be filled'}

    def test_correct_option_range(self):
        assert 'correct_option' in validate_question(sample_question(correct='E'))

    def test_lowercase_correct_option_accepted(self):
        assert validate_question(sample_question(correct='d')) == {}

    def test_marks_positive(self):
        assert 'marks' in validate_question(sample_question(marks=0))

    def test_non_object_question(self):
        assert validate_question('What is 2 + 2?') == {'question': 'Question must be an object'}


class TestQuizWithQuestions:
    def test_needs_a_question(self):
        errors = validate_quiz_with_questions({'title': 'T', 'questions': []})
        assert errors == {'questions': 'At least one question is required'}

    def test_reports_position_of_bad_question(self):
        errors = validate_quiz_with_questions({
            'title': 'T',
            'questions': [sample_question(), sample_question(question_text='')],
        })
        assert errors == {'questions[2].question_text': 'Question 2: All questions must have text'}

    def test_non_object_body_and_questions(self):
        assert validate_quiz_with_questions(['T']) == {'body': 'Expected a JSON object'}
        errors = validate_quiz_with_questions({'title': 'T', 'questions': 'q1'})
        assert errors == {'questions': 'Questions must be a list'}
        errors = validate_quiz_with_questions({'title': 'T', 'questions': [sample_question(), 7]})
        assert errors == {'questions[2].question': 'Question 2: Question must be an object'}


def test_require_object():
    assert require_object({}) == {}
    assert require_object(None) == {'body': 'Expected a JSON object'}
    assert require_object([1], field='answers') == {'answers': 'Expected a JSON object'}


def test_ensure_valid_raises_with_fields():
    with pytest.raises(ValidationError) as excinfo:
        ensure_valid({'title': 'Quiz title is required'})
    assert excinfo.value.status_code == 400
    assert excinfo.value.to_dict() == {
        'error': 'Quiz title is required',
        'fields': {'title': 'Quiz title is required'},
    }
