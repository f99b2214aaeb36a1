import uuid
from datetime import datetime, timezone
from quizpro.extensions import db


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    subject = db.Column(db.String(100), nullable=False, default="General")
    created_by = db.Column(
        db.String(36),
        db.ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # minutes
    time_limit = db.Column(db.Integer, nullable=False, default=60)
    total_marks = db.Column(db.Integer, nullable=False, default=100)
    is_published = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    questions = db.relationship(
        "Question",
        back_populates="quiz",
        lazy="dynamic",
        cascade="all, delete-orphan",
        order_by="Question.question_order",
    )
    attempts = db.relationship(
        "QuizAttempt",
        back_populates="quiz",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    @property
    def question_count(self) -> int:
        return self.questions.count()

    @property
    def is_available(self) -> bool:
        """Visible to students."""
        return self.is_published and self.is_active

    def __repr__(self):
        return f"<Quiz id={self.id} title={self.title!r}>"
