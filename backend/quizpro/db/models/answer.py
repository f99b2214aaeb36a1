import uuid
from datetime import datetime, timezone
from quizpro.extensions import db


class Answer(db.Model):
    """
    One selected option for one question inside an attempt.
    Graded (is_correct / marks_obtained) when the attempt is submitted.
    """
    __tablename__ = "answers"
    __table_args__ = (
        db.UniqueConstraint(
            "attempt_id", "question_id", name="uq_answers_attempt_question"
        ),
    )

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    attempt_id = db.Column(
        db.String(36),
        db.ForeignKey("quiz_attempts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_id = db.Column(
        db.String(36),
        db.ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    selected_option = db.Column(db.String(1), nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    marks_obtained = db.Column(db.Integer, nullable=False, default=0)
    answered_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    attempt = db.relationship("QuizAttempt", back_populates="answers")
    question = db.relationship("Question")

    def __repr__(self):
        return f"<Answer attempt={self.attempt_id} question={self.question_id} option={self.selected_option}>"
