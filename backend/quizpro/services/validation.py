"""
Field validators for the register, login and quiz authoring forms.

Each validator returns ``{field: message}``; an empty dict means valid.
``ensure_valid`` turns a non-empty result into a ValidationError.
"""

from __future__ import annotations

import re

from quizpro.db.models.question import OPTION_KEYS
from quizpro.services.errors import ValidationError

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
MAX_TITLE_LENGTH = 255


def _text(data: dict, key: str) -> str:
    return str(data.get(key) or "").strip()


def _positive_int(value) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def require_object(data, field: str = "body") -> dict:
    """Error dict when *data* is not a JSON object."""
    if not isinstance(data, dict):
        return {field: "Expected a JSON object"}
    return {}


def validate_registration(data: dict) -> dict:
    errors = {}
    if not _text(data, "name"):
        errors["name"] = "Name is required"

    email = _text(data, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_RE.fullmatch(email):
        errors["email"] = "Please enter a valid email address"

    password = data.get("password") or ""
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    # confirm_password is optional for API callers; checked when sent
    if "confirm_password" in data and data.get("confirm_password") != password:
        errors["confirm_password"] = "Passwords do not match"
    return errors


def validate_login(data: dict) -> dict:
    errors = {}
    if not _text(data, "email"):
        errors["email"] = "Email is required"
    if not data.get("password"):
        errors["password"] = "Password is required"
    return errors


def validate_quiz(data: dict, partial: bool = False) -> dict:
    """Quiz details. With ``partial`` only the keys present are checked."""
    errors = {}
    if not partial or "title" in data:
        title = _text(data, "title")
        if not title:
            errors["title"] = "Quiz title is required"
        elif len(title) > MAX_TITLE_LENGTH:
            errors["title"] = f"Quiz title must be at most {MAX_TITLE_LENGTH} characters"

    if not partial or "time_limit" in data:
        if _positive_int(data.get("time_limit", 60)) is None:
            errors["time_limit"] = "Time limit must be a positive number of minutes"

    if "total_marks" in data and data.get("total_marks") is not None:
        if _positive_int(data["total_marks"]) is None:
            errors["total_marks"] = "Total marks must be a positive number"
    return errors


def validate_question(data: dict, partial: bool = False) -> dict:
    if not isinstance(data, dict):
        return {"question": "Question must be an object"}
    errors = {}
    if not partial or "question_text" in data:
        if not _text(data, "question_text"):
            errors["question_text"] = "All questions must have text"

    option_fields = [f"option_{k.lower()}" for k in OPTION_KEYS]
    checked = option_fields if not partial else [f for f in option_fields if f in data]
    if any(not _text(data, f) for f in checked):
        errors["options"] = "All options must be filled"

    if not partial or "correct_option" in data:
        if _text(data, "correct_option").upper() not in OPTION_KEYS:
            errors["correct_option"] = "Correct option must be one of A, B, C, D"

    if not partial or "marks" in data:
        if _positive_int(data.get("marks", 1)) is None:
            errors["marks"] = "Marks must be a positive number"
    return errors


def validate_quiz_with_questions(data: dict) -> dict:
    if not isinstance(data, dict):
        return require_object(data)
    errors = validate_quiz(data)
    questions = data.get("questions") or []
    if not isinstance(questions, list):
        errors["questions"] = "Questions must be a list"
        return errors
    if not questions:
        errors["questions"] = "At least one question is required"
        return errors
    for i, question in enumerate(questions, start=1):
        q_errors = validate_question(question)
        if q_errors:
            # report the first problem of the first bad question
            field, message = next(iter(q_errors.items()))
            errors[f"questions[{i}].{field}"] = f"Question {i}: {message}"
            break
    return errors


def ensure_valid(errors: dict) -> None:
    if errors:
        raise ValidationError(errors)
