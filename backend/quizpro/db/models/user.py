import uuid
from datetime import datetime, timezone
from werkzeug.security import generate_password_hash, check_password_hash
from quizpro.extensions import db


class UserProfile(db.Model):
    __tablename__ = "user_profiles"

    ROLE_STUDENT = "student"
    ROLE_ADMIN = "admin"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.Text, nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_STUDENT)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    attempts = db.relationship(
        "QuizAttempt",
        back_populates="student",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    # ── password helpers ─────────────────────────────────────────────────────

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __repr__(self):
        return f"<UserProfile {self.email} role={self.role}>"
