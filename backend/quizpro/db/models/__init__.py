from quizpro.db.models.user import UserProfile
from quizpro.db.models.quiz import Quiz
from quizpro.db.models.question import Question, OPTION_KEYS
from quizpro.db.models.quiz_attempt import QuizAttempt
from quizpro.db.models.answer import Answer

__all__ = [
    "UserProfile",
    "Quiz",
    "Question",
    "OPTION_KEYS",
    "QuizAttempt",
    "Answer",
]
