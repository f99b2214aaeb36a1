"""JSON shapes shared by the quiz, attempt and admin blueprints."""

from __future__ import annotations

from quizpro.db.models import Question, Quiz, QuizAttempt, UserProfile
from quizpro.services import scoring
from quizpro.services.timer import format_duration


def _iso(value):
    return value.isoformat() if value else None


def user_to_dict(user: UserProfile) -> dict:
    return {
        "id":         user.id,
        "email":      user.email,
        "name":       user.name,
        "role":       user.role,
        "created_at": user.created_at.isoformat(),
        "is_active":  user.is_active,
    }


def quiz_to_dict(quiz: Quiz) -> dict:
    return {
        "id":             quiz.id,
        "title":          quiz.title,
        "description":    quiz.description,
        "subject":        quiz.subject,
        "created_by":     quiz.created_by,
        "time_limit":     quiz.time_limit,
        "total_marks":    quiz.total_marks,
        "is_published":   quiz.is_published,
        "is_active":      quiz.is_active,
        "question_count": quiz.question_count,
        "created_at":     _iso(quiz.created_at),
        "updated_at":     _iso(quiz.updated_at),
    }


def question_to_dict(question: Question, include_answer: bool = False) -> dict:
    """Students only get the answer key through an attempt review."""
    d = {
        "id":             question.id,
        "quiz_id":        question.quiz_id,
        "question_text":  question.question_text,
        "option_a":       question.option_a,
        "option_b":       question.option_b,
        "option_c":       question.option_c,
        "option_d":       question.option_d,
        "marks":          question.marks,
        "question_order": question.question_order,
    }
    if include_answer:
        d["correct_option"] = question.correct_option
        d["explanation"] = question.explanation
    return d


def attempt_to_dict(attempt: QuizAttempt) -> dict:
    return {
        "id":           attempt.id,
        "student_id":   attempt.student_id,
        "quiz_id":      attempt.quiz_id,
        "score":        attempt.score,
        "total_marks":  attempt.quiz.total_marks if attempt.quiz else None,
        "percentage":   attempt.percentage,
        "grade":        scoring.grade_letter(attempt.percentage) if attempt.is_completed else None,
        "status":       attempt.status,
        "started_at":   _iso(attempt.started_at),
        "completed_at": _iso(attempt.completed_at),
        "time_taken":   attempt.time_taken,
        "time_taken_display": format_duration(attempt.time_taken),
    }
