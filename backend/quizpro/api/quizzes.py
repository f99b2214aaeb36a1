"""
Quiz browsing API (students)

Endpoints
---------
GET  /api/quizzes                       – published, active quizzes
GET  /api/quizzes/<quiz_id>             – one quiz with its question count
GET  /api/quizzes/<quiz_id>/questions   – questions without the answer key

Unpublished or inactive quizzes are reported as 404.
"""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from quizpro.api.serializers import question_to_dict, quiz_to_dict
from quizpro.services.quizzes import get_available_quiz, list_published, ordered_questions

quizzes_bp = Blueprint("quizzes", __name__, url_prefix="/api/quizzes")


@quizzes_bp.get("")
@jwt_required()
def list_quizzes():
    """Return published quizzes, newest first."""
    return jsonify([quiz_to_dict(q) for q in list_published()]), 200


@quizzes_bp.get("/<quiz_id>")
@jwt_required()
def get_quiz(quiz_id: str):
    quiz = get_available_quiz(quiz_id)
    return jsonify(quiz_to_dict(quiz)), 200


@quizzes_bp.get("/<quiz_id>/questions")
@jwt_required()
def get_questions(quiz_id: str):
    quiz = get_available_quiz(quiz_id)
    return jsonify([question_to_dict(q) for q in ordered_questions(quiz)]), 200
