from .errors import (
    QuizError,
    ValidationError,
    ValidationReason,
    UnknownOptionId,
    QuestionNotFound,
    AnswerTypeError,
    SessionBoundsError,
    EmptyQuizError,
    QuizNotFound,
)
from .validator import validate_quiz
from .matcher import is_correct, normalize_text
from .scorer import score, summarize_results
from .session import QuizSession, SessionStorage, SessionView
from . import editor

__all__ = [
    "QuizError",
    "ValidationError",
    "ValidationReason",
    "UnknownOptionId",
    "QuestionNotFound",
    "AnswerTypeError",
    "SessionBoundsError",
    "EmptyQuizError",
    "QuizNotFound",
    "validate_quiz",
    "is_correct",
    "normalize_text",
    "score",
    "summarize_results",
    "QuizSession",
    "SessionStorage",
    "SessionView",
    "editor",
]
