"""
Quiz attempt lifecycle.

An attempt moves ``in_progress -> completed`` exactly once:

    start_attempt()   creates it, or resumes an unexpired in-progress one
    save_answer()     upserts a draft answer while time remains
    submit_attempt()  grades every answer and completes the attempt

Time is enforced from ``started_at + quiz.time_limit``. Submission is still
accepted after the deadline so a timed-out quiz can be auto-submitted, but
only answers saved before the deadline are graded.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from flask import current_app

from quizpro.db.models import OPTION_KEYS, Answer, Question, Quiz, QuizAttempt, UserProfile
from quizpro.extensions import db
from quizpro.services import scoring
from quizpro.services.errors import Conflict, NotFound, ValidationError
from quizpro.services.quizzes import get_available_quiz, get_quiz, ordered_questions
from quizpro.services.timer import elapsed_seconds, remaining_seconds

log = logging.getLogger(__name__)


def attempt_remaining(attempt: QuizAttempt, now: Optional[datetime] = None) -> int:
    if attempt.is_completed:
        return 0
    return remaining_seconds(attempt.started_at, attempt.quiz.time_limit, now=now)


def get_attempt(attempt_id: str, user: UserProfile) -> QuizAttempt:
    """Fetch an attempt visible to *user*: its owner, or any admin."""
    attempt = db.session.get(QuizAttempt, attempt_id)
    if not attempt or (attempt.student_id != user.id and not user.is_admin):
        raise NotFound("attempt not found")
    return attempt


def start_attempt(student: UserProfile, quiz_id: str) -> tuple[QuizAttempt, bool]:
    """Return (attempt, created). An unexpired in-progress attempt is resumed."""
    quiz = get_available_quiz(quiz_id)
    if quiz.question_count == 0:
        raise Conflict("quiz has no questions yet")

    existing = (
        QuizAttempt.query
        .filter_by(student_id=student.id, quiz_id=quiz.id, status=QuizAttempt.STATUS_IN_PROGRESS)
        .order_by(QuizAttempt.started_at.desc())
        .first()
    )
    if existing and attempt_remaining(existing) > 0:
        log.info("resuming attempt id=%s student=%s", existing.id, student.id)
        return existing, False
    if existing:
        # the earlier sitting ran out of time without a submit
        _complete(existing)

    attempt = QuizAttempt(
        student_id=student.id,
        quiz_id=quiz.id,
        status=QuizAttempt.STATUS_IN_PROGRESS,
        started_at=datetime.now(timezone.utc),
    )
    db.session.add(attempt)
    db.session.commit()
    log.info("attempt started id=%s quiz=%s student=%s", attempt.id, quiz.id, student.id)
    return attempt, True


def _question_for(attempt: QuizAttempt, question_id: str) -> Question:
    question = db.session.get(Question, question_id) if isinstance(question_id, str) else None
    if not question or question.quiz_id != attempt.quiz_id:
        raise ValidationError({"question_id": "question does not belong to this quiz"})
    return question


def _normalize_option(option) -> str:
    value = str(option or "").strip().upper()
    if value not in OPTION_KEYS:
        raise ValidationError({"selected_option": "selected_option must be one of A, B, C, D"})
    return value


def _upsert(attempt: QuizAttempt, question: Question, option: str) -> Answer:
    answer = Answer.query.filter_by(attempt_id=attempt.id, question_id=question.id).first()
    if answer is None:
        answer = Answer(attempt_id=attempt.id, question_id=question.id, selected_option=option)
        db.session.add(answer)
    else:
        answer.selected_option = option
        answer.answered_at = datetime.now(timezone.utc)
    return answer


def _past_deadline(attempt: QuizAttempt) -> bool:
    grace = current_app.config.get("ANSWER_GRACE_SECONDS", 0)
    return elapsed_seconds(attempt.started_at) > attempt.quiz.time_limit * 60 + grace


def save_answer(attempt: QuizAttempt, question_id: str, selected_option) -> Answer:
    if attempt.is_completed:
        raise Conflict("attempt already submitted")
    if _past_deadline(attempt):
        raise Conflict("time limit exceeded, submit the attempt")

    question = _question_for(attempt, question_id)
    answer = _upsert(attempt, question, _normalize_option(selected_option))
    db.session.commit()
    return answer


def _complete(attempt: QuizAttempt) -> QuizAttempt:
    """Grade stored answers and close the attempt (no commit)."""
    quiz = attempt.quiz
    questions = {q.id: q for q in ordered_questions(quiz)}
    db.session.flush()
    answers = Answer.query.filter_by(attempt_id=attempt.id).all()
    for answer in answers:
        question = questions.get(answer.question_id)
        if question is None:
            answer.is_correct, answer.marks_obtained = False, 0
        else:
            answer.is_correct, answer.marks_obtained = scoring.grade_answer(
                question, answer.selected_option
            )

    now = datetime.now(timezone.utc)
    attempt.score = scoring.compute_score(answers)
    attempt.percentage = scoring.compute_percentage(attempt.score, quiz.total_marks)
    attempt.status = QuizAttempt.STATUS_COMPLETED
    attempt.completed_at = now
    attempt.time_taken = min(elapsed_seconds(attempt.started_at, now), quiz.time_limit * 60)
    return attempt


def submit_attempt(attempt: QuizAttempt, answers: Optional[list] = None) -> QuizAttempt:
    """
    Merge any answers sent with the submit, grade, and complete.

    *answers* is a list of ``{"question_id": ..., "selected_option": ...}``.
    Past the deadline they are ignored and only the saved drafts are graded.
    """
    if attempt.is_completed:
        raise Conflict("attempt already submitted")

    answers = answers or []
    if any(not isinstance(item, dict) for item in answers):
        raise ValidationError({"answers": "each answer must be an object"})

    if answers and _past_deadline(attempt):
        log.warning("late answers ignored on submit id=%s count=%d", attempt.id, len(answers))
        answers = []

    for item in answers:
        question = _question_for(attempt, item.get("question_id"))
        _upsert(attempt, question, _normalize_option(item.get("selected_option")))

    _complete(attempt)
    db.session.commit()
    log.info(
        "attempt submitted id=%s score=%s/%s (%.2f%%)",
        attempt.id, attempt.score, attempt.quiz.total_marks, attempt.percentage,
    )
    return attempt


def review(attempt: QuizAttempt) -> dict:
    """
    Per-question breakdown of a completed attempt.

    Unanswered questions appear with ``selected_option=None`` and count as
    neither correct nor wrong.
    """
    if not attempt.is_completed:
        raise Conflict("attempt is still in progress")

    quiz = attempt.quiz
    by_question = {a.question_id: a for a in attempt.answers}
    items = []
    for question in ordered_questions(quiz):
        answer = by_question.get(question.id)
        items.append({
            "question_id":     question.id,
            "question_order":  question.question_order,
            "question_text":   question.question_text,
            "options":         question.options,
            "correct_option":  question.correct_option,
            "explanation":     question.explanation,
            "marks":           question.marks,
            "selected_option": answer.selected_option if answer else None,
            "is_correct":      bool(answer and answer.is_correct),
            "marks_obtained":  answer.marks_obtained if answer else 0,
        })

    correct = sum(1 for i in items if i["is_correct"])
    answered = sum(1 for i in items if i["selected_option"] is not None)
    return {
        "items":            items,
        "correct_count":    correct,
        "wrong_count":      answered - correct,
        "unanswered_count": len(items) - answered,
        "grade":            scoring.grade_letter(attempt.percentage),
    }


def student_history(student: UserProfile) -> List[QuizAttempt]:
    return (
        QuizAttempt.query
        .filter_by(student_id=student.id, status=QuizAttempt.STATUS_COMPLETED)
        .order_by(QuizAttempt.completed_at.desc())
        .all()
    )


def quiz_results(quiz_id: str) -> tuple[Quiz, List[QuizAttempt], dict]:
    """Completed attempts for a quiz, newest first, with their summary."""
    quiz = get_quiz(quiz_id)
    attempts = (
        QuizAttempt.query
        .filter_by(quiz_id=quiz.id, status=QuizAttempt.STATUS_COMPLETED)
        .order_by(QuizAttempt.completed_at.desc())
        .all()
    )
    summary = scoring.summarize(a.percentage for a in attempts)
    return quiz, attempts, summary
