"""
Admin API

Endpoints
---------
GET     /api/admin/stats                          – dashboard counters
GET     /api/admin/quizzes                        – all quizzes (?mine=1 for own)
POST    /api/admin/quizzes                        – create quiz with questions
GET     /api/admin/quizzes/<quiz_id>              – quiz + questions with answers
PATCH   /api/admin/quizzes/<quiz_id>              – update quiz fields
DELETE  /api/admin/quizzes/<quiz_id>              – delete quiz and its attempts
POST    /api/admin/quizzes/<quiz_id>/publish      – publish / unpublish
POST    /api/admin/quizzes/<quiz_id>/questions    – append question(s)
GET     /api/admin/quizzes/<quiz_id>/results      – completed attempts + summary
PATCH   /api/admin/questions/<question_id>        – update a question
DELETE  /api/admin/questions/<question_id>        – delete a question
POST    /api/admin/questions/<question_id>/move   – move up / down

Every route requires an access token carrying the "admin" role.
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity

from quizpro.api.guards import admin_required
from quizpro.api.serializers import (
    attempt_to_dict,
    question_to_dict,
    quiz_to_dict,
)
from quizpro.services import attempts as attempt_service
from quizpro.services import quizzes as quiz_service

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _quiz_detail(quiz) -> dict:
    d = quiz_to_dict(quiz)
    d["questions"] = [
        question_to_dict(q, include_answer=True)
        for q in quiz_service.ordered_questions(quiz)
    ]
    return d


# ── Dashboard ─────────────────────────────────────────────────────────────────

@admin_bp.get("/stats")
@admin_required
def stats():
    return jsonify(quiz_service.dashboard_stats()), 200


# ── Quizzes ───────────────────────────────────────────────────────────────────

@admin_bp.get("/quizzes")
@admin_required
def list_quizzes():
    mine = request.args.get("mine") in ("1", "true", "yes")
    created_by = get_jwt_identity() if mine else None
    return jsonify([quiz_to_dict(q) for q in quiz_service.list_quizzes(created_by)]), 200


@admin_bp.post("/quizzes")
@admin_required
def create_quiz():
    """
    Request body (JSON):
        title, description, subject, time_limit, total_marks (optional)
        questions : list[{question_text, option_a..option_d,
                          correct_option, marks, explanation}]
    """
    data = request.get_json(silent=True) or {}
    quiz = quiz_service.create_quiz(data, created_by=get_jwt_identity())
    return jsonify(_quiz_detail(quiz)), 201


@admin_bp.get("/quizzes/<quiz_id>")
@admin_required
def get_quiz(quiz_id: str):
    return jsonify(_quiz_detail(quiz_service.get_quiz(quiz_id))), 200


@admin_bp.patch("/quizzes/<quiz_id>")
@admin_required
def update_quiz(quiz_id: str):
    data = request.get_json(silent=True) or {}
    quiz = quiz_service.update_quiz(quiz_id, data)
    return jsonify(quiz_to_dict(quiz)), 200


@admin_bp.delete("/quizzes/<quiz_id>")
@admin_required
def delete_quiz(quiz_id: str):
    quiz_service.delete_quiz(quiz_id)
    return jsonify({"message": "Quiz deleted"}), 200


@admin_bp.post("/quizzes/<quiz_id>/publish")
@admin_required
def publish_quiz(quiz_id: str):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict) or not isinstance(data.get("is_published"), bool):
        return jsonify({"error": "is_published must be true or false"}), 400
    quiz = quiz_service.set_published(quiz_id, data["is_published"])
    return jsonify(quiz_to_dict(quiz)), 200


@admin_bp.get("/quizzes/<quiz_id>/results")
@admin_required
def quiz_results(quiz_id: str):
    quiz, attempts, summary = attempt_service.quiz_results(quiz_id)
    rows = []
    for attempt in attempts:
        d = attempt_to_dict(attempt)
        d["student_name"] = attempt.student.name if attempt.student else "Unknown Student"
        d["student_email"] = attempt.student.email if attempt.student else "Unknown"
        rows.append(d)
    return jsonify({"quiz": quiz_to_dict(quiz), "results": rows, "summary": summary}), 200


# ── Questions ─────────────────────────────────────────────────────────────────

@admin_bp.post("/quizzes/<quiz_id>/questions")
@admin_required
def add_questions(quiz_id: str):
    """Accepts a single question object or a list of them."""
    data = request.get_json(silent=True)
    items = data if isinstance(data, list) else [data or {}]
    created = quiz_service.add_questions(quiz_id, items)
    return jsonify([question_to_dict(q, include_answer=True) for q in created]), 201


@admin_bp.patch("/questions/<question_id>")
@admin_required
def update_question(question_id: str):
    data = request.get_json(silent=True) or {}
    question = quiz_service.update_question(question_id, data)
    return jsonify(question_to_dict(question, include_answer=True)), 200


@admin_bp.delete("/questions/<question_id>")
@admin_required
def delete_question(question_id: str):
    quiz_service.delete_question(question_id)
    return jsonify({"message": "Question deleted"}), 200


@admin_bp.post("/questions/<question_id>/move")
@admin_required
def move_question(question_id: str):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    questions = quiz_service.move_question(question_id, data.get("direction", ""))
    return jsonify([question_to_dict(q, include_answer=True) for q in questions]), 200
