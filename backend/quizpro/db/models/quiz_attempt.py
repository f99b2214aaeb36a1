import uuid
from datetime import datetime, timezone
from quizpro.extensions import db


class QuizAttempt(db.Model):
    __tablename__ = "quiz_attempts"

    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    student_id = db.Column(
        db.String(36),
        db.ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quiz_id = db.Column(
        db.String(36),
        db.ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    score = db.Column(db.Integer, nullable=False, default=0)
    percentage = db.Column(db.Float, nullable=False, default=0.0)
    # "in_progress" | "completed"
    status = db.Column(db.String(20), nullable=False, default=STATUS_IN_PROGRESS)
    started_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    # seconds
    time_taken = db.Column(db.Integer, nullable=True)

    # Relationships
    student = db.relationship("UserProfile", back_populates="attempts")
    quiz = db.relationship("Quiz", back_populates="attempts")
    answers = db.relationship(
        "Answer",
        back_populates="attempt",
        lazy="select",
        cascade="all, delete-orphan",
    )

    @property
    def is_completed(self) -> bool:
        return self.status == self.STATUS_COMPLETED

    def __repr__(self):
        return f"<QuizAttempt id={self.id} quiz={self.quiz_id} status={self.status}>"
