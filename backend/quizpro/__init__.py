import logging
import os

import click
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from quizpro.config import config_map
from quizpro.extensions import jwt, migrate
from quizpro.services.errors import QuizError

log = logging.getLogger(__name__)

# `db` is imported inside functions: importing the
# quizpro.db subpackage rebinds the name `db` on this module.


def create_app(env: str = None) -> Flask:
    from quizpro.extensions import db

    app = Flask(__name__)

    env = env or os.getenv("FLASK_ENV", "development")
    app.config.from_object(config_map.get(env, config_map["default"]))

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    with app.app_context():
        # Import models so Flask-Migrate can detect them
        from quizpro.db import models  # noqa: F401

        # Register blueprints
        from quizpro.api.auth import auth_bp
        from quizpro.api.quizzes import quizzes_bp
        from quizpro.api.attempts import attempts_bp
        from quizpro.api.admin import admin_bp
        app.register_blueprint(auth_bp)
        app.register_blueprint(quizzes_bp)
        app.register_blueprint(attempts_bp)
        app.register_blueprint(admin_bp)

    _register_error_handlers(app)
    _register_commands(app)
    return app


def _register_error_handlers(app: Flask) -> None:
    from quizpro.extensions import db

    @app.errorhandler(QuizError)
    def _quiz_error(exc: QuizError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def _db_error(exc: SQLAlchemyError):
        log.error("database error: %s", exc)
        db.session.rollback()
        return jsonify({"error": "database error, please try again"}), 500

    @app.errorhandler(404)
    def _not_found(exc):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(exc):
        return jsonify({"error": "method not allowed"}), 405


def _register_commands(app: Flask) -> None:
    from quizpro.extensions import db

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--name", default="Administrator", help="Display name.")
    def create_admin(email: str, password: str, name: str):
        """Create an admin account, or promote an existing one."""
        from quizpro.db.models import UserProfile

        email = email.strip().lower()
        user = UserProfile.query.filter_by(email=email).first()
        if user is None:
            user = UserProfile(email=email, name=name, role=UserProfile.ROLE_ADMIN)
            db.session.add(user)
            click.echo(f"Created admin {email}")
        else:
            user.role = UserProfile.ROLE_ADMIN
            click.echo(f"Promoted {email} to admin")
        user.set_password(password)
        db.session.commit()

    @app.cli.command("init-db")
    def init_db():
        """Create all tables without running migrations."""
        db.create_all()
        click.echo("Database tables created")
