from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from quizpro.db.models.user import UserProfile
from quizpro.extensions import db
from quizpro.services.errors import Forbidden


def current_user() -> UserProfile | None:
    """Active account behind the request's access token, or None."""
    user = db.session.get(UserProfile, get_jwt_identity())
    if not user or not user.is_active:
        return None
    return user


def admin_required(fn):
    """jwt_required() plus the "admin" role claim."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if get_jwt().get("role") != UserProfile.ROLE_ADMIN:
            raise Forbidden("admin access required")
        # role may have been revoked since the token was issued
        user = current_user()
        if not user or not user.is_admin:
            raise Forbidden("admin access required")
        return fn(*args, **kwargs)

    return wrapper
