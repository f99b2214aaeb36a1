from flask import jsonify
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

# jti values of access tokens revoked through /api/auth/logout
revoked_tokens: set = set()


@jwt.token_in_blocklist_loader
def _is_revoked(jwt_header, jwt_payload) -> bool:
    return jwt_payload["jti"] in revoked_tokens


# JSON bodies use the same {"error": ...} shape as the rest of the API

@jwt.unauthorized_loader
def _missing_token(reason: str):
    return jsonify({"error": reason}), 401


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    return jsonify({"error": reason}), 401


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "token has expired"}), 401


@jwt.revoked_token_loader
def _revoked_token(jwt_header, jwt_payload):
    return jsonify({"error": "token has been revoked"}), 401
