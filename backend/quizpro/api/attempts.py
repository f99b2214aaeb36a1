"""
Quiz attempt API

Endpoints
---------
POST  /api/quizzes/<quiz_id>/attempts     – start (or resume) an attempt
GET   /api/attempts                       – caller's completed attempts
GET   /api/attempts/<attempt_id>          – one attempt + remaining time
PUT   /api/attempts/<attempt_id>/answers  – save a draft answer
POST  /api/attempts/<attempt_id>/submit   – grade and complete
GET   /api/attempts/<attempt_id>/review   – per-question result breakdown

All routes require a valid JWT access token. Attempts belong to the student
who started them; other students get 404.
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from quizpro.api.guards import current_user
from quizpro.api.serializers import attempt_to_dict, question_to_dict, quiz_to_dict
from quizpro.services import attempts as attempt_service
from quizpro.services.errors import NotFound
from quizpro.services.quizzes import ordered_questions

attempts_bp = Blueprint("attempts", __name__, url_prefix="/api")


def _user_or_401():
    user = current_user()
    if user is None:
        return None, (jsonify({"error": "user not found"}), 401)
    return user, None


def _own_attempt(attempt_id: str, user):
    """Writes are limited to the student who owns the attempt."""
    attempt = attempt_service.get_attempt(attempt_id, user)
    if attempt.student_id != user.id:
        raise NotFound("attempt not found")
    return attempt


def _attempt_payload(attempt) -> dict:
    d = attempt_to_dict(attempt)
    d["remaining_seconds"] = attempt_service.attempt_remaining(attempt)
    d["answers"] = {a.question_id: a.selected_option for a in attempt.answers}
    return d


# ── POST /api/quizzes/<quiz_id>/attempts ──────────────────────────────────────

@attempts_bp.post("/quizzes/<quiz_id>/attempts")
@jwt_required()
def start_attempt(quiz_id: str):
    """
    Start a timed attempt.

    Response (JSON):
        attempt   : AttemptDict with remaining_seconds and saved answers
        quiz      : QuizDict
        questions : list[QuestionDict] (no answer key)
    Status 201 for a new attempt, 200 when an unexpired one is resumed.
    """
    user, error = _user_or_401()
    if error:
        return error

    attempt, created = attempt_service.start_attempt(user, quiz_id)
    quiz = attempt.quiz
    return jsonify(
        {
            "attempt":   _attempt_payload(attempt),
            "quiz":      quiz_to_dict(quiz),
            "questions": [question_to_dict(q) for q in ordered_questions(quiz)],
        }
    ), 201 if created else 200


# ── GET /api/attempts ─────────────────────────────────────────────────────────

@attempts_bp.get("/attempts")
@jwt_required()
def history():
    """Completed attempts of the caller, newest first."""
    user, error = _user_or_401()
    if error:
        return error

    rows = []
    for attempt in attempt_service.student_history(user):
        d = attempt_to_dict(attempt)
        d["quiz_title"] = attempt.quiz.title if attempt.quiz else "Unknown Quiz"
        d["subject"] = attempt.quiz.subject if attempt.quiz else None
        rows.append(d)
    return jsonify(rows), 200


# ── GET /api/attempts/<attempt_id> ────────────────────────────────────────────

@attempts_bp.get("/attempts/<attempt_id>")
@jwt_required()
def get_attempt(attempt_id: str):
    user, error = _user_or_401()
    if error:
        return error
    attempt = attempt_service.get_attempt(attempt_id, user)
    return jsonify(_attempt_payload(attempt)), 200


# ── PUT /api/attempts/<attempt_id>/answers ────────────────────────────────────

@attempts_bp.put("/attempts/<attempt_id>/answers")
@jwt_required()
def save_answer(attempt_id: str):
    """
    Request body (JSON):
        question_id     : str
        selected_option : "A" | "B" | "C" | "D"
    """
    user, error = _user_or_401()
    if error:
        return error

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    if not data.get("question_id") or not data.get("selected_option"):
        return jsonify({"error": "question_id and selected_option are required"}), 400

    attempt = _own_attempt(attempt_id, user)
    answer = attempt_service.save_answer(attempt, data["question_id"], data["selected_option"])
    return jsonify(
        {
            "question_id":       answer.question_id,
            "selected_option":   answer.selected_option,
            "remaining_seconds": attempt_service.attempt_remaining(attempt),
        }
    ), 200


# ── POST /api/attempts/<attempt_id>/submit ────────────────────────────────────

@attempts_bp.post("/attempts/<attempt_id>/submit")
@jwt_required()
def submit(attempt_id: str):
    """
    Request body (JSON, optional):
        answers : list[{question_id, selected_option}] merged before grading
    """
    user, error = _user_or_401()
    if error:
        return error

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    answers = data.get("answers") or []
    if not isinstance(answers, list):
        return jsonify({"error": "answers must be a list"}), 400

    attempt = attempt_service.submit_attempt(_own_attempt(attempt_id, user), answers)
    return jsonify(attempt_to_dict(attempt)), 200


# ── GET /api/attempts/<attempt_id>/review ─────────────────────────────────────

@attempts_bp.get("/attempts/<attempt_id>/review")
@jwt_required()
def review(attempt_id: str):
    user, error = _user_or_401()
    if error:
        return error

    attempt = attempt_service.get_attempt(attempt_id, user)
    breakdown = attempt_service.review(attempt)
    return jsonify(
        {
            "attempt": attempt_to_dict(attempt),
            "quiz":    quiz_to_dict(attempt.quiz),
            **breakdown,
        }
    ), 200
