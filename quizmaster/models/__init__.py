from .quiz import (
    QuestionType,
    QuizStatus,
    Option,
    ChoiceQuestion,
    TextQuestion,
    Question,
    QuizDraft,
    Quiz,
)
from .result import QuestionOutcome, Result, QuizStats

__all__ = [
    "QuestionType",
    "QuizStatus",
    "Option",
    "ChoiceQuestion",
    "TextQuestion",
    "Question",
    "QuizDraft",
    "Quiz",
    "QuestionOutcome",
    "Result",
    "QuizStats",
]
