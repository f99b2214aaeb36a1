import uuid
from quizpro.extensions import db

OPTION_KEYS = ("A", "B", "C", "D")


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    quiz_id = db.Column(
        db.String(36),
        db.ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_text = db.Column(db.Text, nullable=False)
    option_a = db.Column(db.Text, nullable=False)
    option_b = db.Column(db.Text, nullable=False)
    option_c = db.Column(db.Text, nullable=False)
    option_d = db.Column(db.Text, nullable=False)
    # "A" | "B" | "C" | "D"
    correct_option = db.Column(db.String(1), nullable=False)
    marks = db.Column(db.Integer, nullable=False, default=1)
    explanation = db.Column(db.Text, nullable=False, default="")
    # 1-based position inside the quiz
    question_order = db.Column(db.Integer, nullable=False, default=1)

    # Relationships
    quiz = db.relationship("Quiz", back_populates="questions")

    @property
    def options(self) -> dict:
        return {
            "A": self.option_a,
            "B": self.option_b,
            "C": self.option_c,
            "D": self.option_d,
        }

    def __repr__(self):
        return f"<Question id={self.id} quiz={self.quiz_id} order={self.question_order}>"
