"""
Quiz and question authoring.

Public API
----------
    list_published()                      -> list[Quiz]
    get_available_quiz(quiz_id)           -> Quiz   (published + active only)
    list_quizzes(created_by=None)         -> list[Quiz]
    get_quiz(quiz_id)                     -> Quiz
    create_quiz(data, created_by)         -> Quiz   (with its questions)
    update_quiz(quiz_id, data)            -> Quiz
    set_published(quiz_id, is_published)  -> Quiz
    delete_quiz(quiz_id)                  -> None
    add_questions(quiz_id, items)         -> list[Question]
    update_question(question_id, data)    -> Question
    delete_question(question_id)          -> None
    move_question(question_id, direction) -> list[Question]
    dashboard_stats()                     -> dict

All writes commit before returning. Failures raise QuizError subclasses.
"""

from __future__ import annotations

import logging
from typing import List

from quizpro.db.models import Answer, Question, Quiz, QuizAttempt, UserProfile
from quizpro.extensions import db
from quizpro.services.errors import NotFound, ValidationError
from quizpro.services.validation import (
    ensure_valid,
    require_object,
    validate_question,
    validate_quiz,
    validate_quiz_with_questions,
)

log = logging.getLogger(__name__)

# is_published only changes through set_published()
QUIZ_FIELDS = ("title", "description", "subject", "time_limit", "total_marks", "is_active")
QUESTION_FIELDS = (
    "question_text", "option_a", "option_b", "option_c", "option_d",
    "correct_option", "marks", "explanation",
)
_INT_FIELDS = {"time_limit", "total_marks", "marks"}
_BOOL_FIELDS = {"is_active"}


def _clean(data: dict, fields) -> dict:
    """Keep known keys, coerce numbers, check booleans and strip strings."""
    out = {}
    for key in fields:
        if key not in data:
            continue
        value = data[key]
        if value is None:
            if key in _INT_FIELDS or key in _BOOL_FIELDS:
                continue
            value = ""
        if key in _INT_FIELDS:
            value = int(value)
        elif key in _BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ValidationError({key: f"{key} must be true or false"})
        elif isinstance(value, str):
            value = value.strip()
        if key == "correct_option":
            value = value.upper()
        out[key] = value
    return out


# ── Reads ─────────────────────────────────────────────────────────────────────

def list_published() -> List[Quiz]:
    return (
        Quiz.query
        .filter_by(is_published=True, is_active=True)
        .order_by(Quiz.created_at.desc())
        .all()
    )


def get_quiz(quiz_id: str) -> Quiz:
    quiz = db.session.get(Quiz, quiz_id)
    if not quiz:
        raise NotFound("quiz not found")
    return quiz


def get_available_quiz(quiz_id: str) -> Quiz:
    quiz = db.session.get(Quiz, quiz_id)
    if not quiz or not quiz.is_available:
        raise NotFound("quiz not found")
    return quiz


def list_quizzes(created_by: str | None = None) -> List[Quiz]:
    query = Quiz.query
    if created_by:
        query = query.filter_by(created_by=created_by)
    return query.order_by(Quiz.created_at.desc()).all()


def get_question(question_id: str) -> Question:
    question = db.session.get(Question, question_id)
    if not question:
        raise NotFound("question not found")
    return question


def ordered_questions(quiz: Quiz) -> List[Question]:
    return quiz.questions.order_by(Question.question_order.asc()).all()


# ── Quiz writes ───────────────────────────────────────────────────────────────

def create_quiz(data: dict, created_by: str | None) -> Quiz:
    """
    Create a quiz and its questions in one transaction.

    ``total_marks`` defaults to the sum of the question marks when omitted.
    New quizzes start unpublished.
    """
    ensure_valid(validate_quiz_with_questions(data))

    items = [_clean(q, QUESTION_FIELDS) for q in data["questions"]]
    fields = _clean(data, QUIZ_FIELDS)
    fields.setdefault("subject", "General")
    if not fields.get("subject"):
        fields["subject"] = "General"
    if fields.get("total_marks") is None:
        fields["total_marks"] = sum(q.get("marks", 1) for q in items)
    fields["is_published"] = False
    fields.setdefault("is_active", True)

    quiz = Quiz(created_by=created_by, **fields)
    db.session.add(quiz)
    db.session.flush()

    for order, item in enumerate(items, start=1):
        db.session.add(Question(quiz_id=quiz.id, question_order=order, **item))

    db.session.commit()
    log.info("quiz created id=%s questions=%d by=%s", quiz.id, len(items), created_by)
    return quiz


def update_quiz(quiz_id: str, data: dict) -> Quiz:
    quiz = get_quiz(quiz_id)
    ensure_valid(require_object(data) or validate_quiz(data, partial=True))
    for key, value in _clean(data, QUIZ_FIELDS).items():
        setattr(quiz, key, value)
    db.session.commit()
    return quiz


def set_published(quiz_id: str, is_published: bool) -> Quiz:
    quiz = get_quiz(quiz_id)
    if is_published and quiz.question_count == 0:
        raise ValidationError({"is_published": "A quiz needs at least one question to be published"})
    quiz.is_published = bool(is_published)
    db.session.commit()
    log.info("quiz %s published=%s", quiz.id, quiz.is_published)
    return quiz


def delete_quiz(quiz_id: str) -> None:
    quiz = get_quiz(quiz_id)
    attempt_ids = [a.id for a in QuizAttempt.query.filter_by(quiz_id=quiz.id).all()]
    if attempt_ids:
        Answer.query.filter(Answer.attempt_id.in_(attempt_ids)).delete(synchronize_session=False)
    QuizAttempt.query.filter_by(quiz_id=quiz.id).delete(synchronize_session=False)
    Question.query.filter_by(quiz_id=quiz.id).delete(synchronize_session=False)
    db.session.delete(quiz)
    db.session.commit()
    log.info("quiz deleted id=%s attempts_removed=%d", quiz_id, len(attempt_ids))


# ── Question writes ───────────────────────────────────────────────────────────

def add_questions(quiz_id: str, items: list) -> List[Question]:
    """Append one or more questions after the quiz's current last question."""
    quiz = get_quiz(quiz_id)
    if not items:
        raise ValidationError({"questions": "At least one question is required"})
    for i, item in enumerate(items, start=1):
        errors = validate_question(item)
        if errors:
            field, message = next(iter(errors.items()))
            raise ValidationError({f"questions[{i}].{field}": message})

    next_order = quiz.question_count + 1
    created = []
    for offset, item in enumerate(items):
        question = Question(
            quiz_id=quiz.id,
            question_order=next_order + offset,
            **_clean(item, QUESTION_FIELDS),
        )
        db.session.add(question)
        created.append(question)
    db.session.commit()
    return created


def update_question(question_id: str, data: dict) -> Question:
    question = get_question(question_id)
    ensure_valid(require_object(data) or validate_question(data, partial=True))
    for key, value in _clean(data, QUESTION_FIELDS).items():
        setattr(question, key, value)
    db.session.commit()
    return question


def _renumber(quiz: Quiz) -> None:
    for order, question in enumerate(ordered_questions(quiz), start=1):
        question.question_order = order


def delete_question(question_id: str) -> None:
    question = get_question(question_id)
    quiz = question.quiz
    Answer.query.filter_by(question_id=question.id).delete(synchronize_session=False)
    db.session.delete(question)
    db.session.flush()
    _renumber(quiz)
    db.session.commit()


def move_question(question_id: str, direction: str) -> List[Question]:
    """Swap a question with its neighbour; a no-op at either end."""
    if direction not in ("up", "down"):
        raise ValidationError({"direction": "direction must be 'up' or 'down'"})
    question = get_question(question_id)
    questions = ordered_questions(question.quiz)
    index = next(i for i, q in enumerate(questions) if q.id == question.id)
    target = index - 1 if direction == "up" else index + 1
    if 0 <= target < len(questions):
        questions[index], questions[target] = questions[target], questions[index]
        for order, q in enumerate(questions, start=1):
            q.question_order = order
        db.session.commit()
    return questions


# ── Admin dashboard ───────────────────────────────────────────────────────────

def dashboard_stats() -> dict:
    return {
        "total_quizzes":     Quiz.query.count(),
        "published_quizzes": Quiz.query.filter_by(is_published=True).count(),
        "total_students":    UserProfile.query.filter_by(role=UserProfile.ROLE_STUDENT).count(),
        "total_attempts":    QuizAttempt.query.filter_by(status=QuizAttempt.STATUS_COMPLETED).count(),
    }
