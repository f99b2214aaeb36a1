"""
Service-layer exceptions.

Raised by the functions in quizpro.services and rendered as
``{"error": message}`` JSON by the handler registered in create_app().
"""

from __future__ import annotations


class QuizError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message}


class NotFound(QuizError):
    status_code = 404


class Forbidden(QuizError):
    status_code = 403


class Conflict(QuizError):
    status_code = 409


class ValidationError(QuizError):
    """Carries per-field messages, like the form hooks of the UI."""

    status_code = 400

    def __init__(self, errors: dict):
        first = next(iter(errors.values()), "invalid input")
        super().__init__(first)
        self.errors = dict(errors)

    def to_dict(self) -> dict:
        return {"error": self.message, "fields": self.errors}
