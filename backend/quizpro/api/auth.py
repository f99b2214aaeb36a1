import logging
import uuid

from flask import Blueprint, jsonify, request
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt,
    get_jwt_identity,
    jwt_required,
)

from quizpro.api.serializers import user_to_dict
from quizpro.db.models.user import UserProfile
from quizpro.extensions import db, revoked_tokens
from quizpro.services.validation import require_object, validate_login, validate_registration

log = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _tokens_for(user: UserProfile) -> dict:
    claims = {"role": user.role}
    return {
        "access_token": create_access_token(identity=user.id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=user.id, additional_claims=claims),
    }


def _field_error(errors: dict):
    message = next(iter(errors.values()))
    return jsonify({"error": message, "fields": errors}), 400


# ── Register ────────────────────────────────────────────────────────────────

@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    errors = require_object(data) or validate_registration(data)
    if errors:
        return _field_error(errors)

    email = data["email"].strip().lower()
    if UserProfile.query.filter_by(email=email).first():
        return jsonify({"error": "email already registered"}), 409

    user = UserProfile(
        id=str(uuid.uuid4()),
        email=email,
        name=data["name"].strip(),
        role=UserProfile.ROLE_STUDENT,
    )
    user.set_password(data["password"])
    db.session.add(user)
    db.session.commit()
    log.info("registered user id=%s", user.id)

    # signed in straight away, no confirmation step
    return jsonify(
        {
            "message": "Account created",
            **_tokens_for(user),
            "user": user_to_dict(user),
        }
    ), 201


# ── Login ────────────────────────────────────────────────────────────────────

@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    errors = require_object(data) or validate_login(data)
    if errors:
        return _field_error(errors)

    email = data["email"].strip().lower()
    user = UserProfile.query.filter_by(email=email).first()
    if not user or not user.check_password(data["password"]):
        log.warning("failed login for %s", email)
        return jsonify({"error": "invalid credentials"}), 401
    if not user.is_active:
        return jsonify({"error": "account is disabled"}), 403

    return jsonify(
        {
            **_tokens_for(user),
            "user": user_to_dict(user),
        }
    ), 200


# ── Refresh ──────────────────────────────────────────────────────────────────

@auth_bp.post("/refresh")
@jwt_required(refresh=True)
def refresh():
    user = db.session.get(UserProfile, get_jwt_identity())
    if not user or not user.is_active:
        return jsonify({"error": "user not found"}), 404
    access_token = create_access_token(identity=user.id, additional_claims={"role": user.role})
    return jsonify({"access_token": access_token}), 200


# ── Me ───────────────────────────────────────────────────────────────────────

@auth_bp.get("/me")
@jwt_required()
def me():
    user_id = get_jwt_identity()
    user = db.session.get(UserProfile, user_id)
    if not user:
        return jsonify({"error": "user not found"}), 404
    return jsonify({"user": user_to_dict(user)}), 200


# ── Logout ───────────────────────────────────────────────────────────────────

@auth_bp.post("/logout")
@jwt_required()
def logout():
    revoked_tokens.add(get_jwt()["jti"])
    return jsonify({"message": "Signed out"}), 200
