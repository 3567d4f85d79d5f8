"""Typed failures raised by the quiz core.

Every error here is local and recoverable: routes turn them into HTTP
responses, nothing in the core swallows them.
"""

from enum import Enum
from typing import Optional


class QuizError(Exception):
    """Base class for all quiz core errors."""


class ValidationReason(str, Enum):
    MISSING_TITLE = "MissingTitle"
    MISSING_CATEGORY = "MissingCategory"
    NO_QUESTIONS = "NoQuestions"
    EMPTY_QUESTION_TEXT = "EmptyQuestionText"
    TOO_FEW_OPTIONS = "TooFewOptions"
    NO_CORRECT_OPTION = "NoCorrectOption"
    MULTIPLE_CORRECT_OPTIONS = "MultipleCorrectOptions"


_REASON_MESSAGES = {
    ValidationReason.MISSING_TITLE: "Quiz title is required",
    ValidationReason.MISSING_CATEGORY: "Quiz category is required",
    ValidationReason.NO_QUESTIONS: "Add at least one question",
    ValidationReason.EMPTY_QUESTION_TEXT: "Every question needs text",
    ValidationReason.TOO_FEW_OPTIONS: "Choice questions need at least 2 options",
    ValidationReason.NO_CORRECT_OPTION: "Mark at least one correct option",
    ValidationReason.MULTIPLE_CORRECT_OPTIONS: "Single-choice questions allow only one correct option",
}


class ValidationError(QuizError):
    """An authored quiz breaks a structural rule and cannot be saved."""

    def __init__(self, reason: ValidationReason, question_index: Optional[int] = None):
        self.reason = reason
        self.question_index = question_index
        message = _REASON_MESSAGES[reason]
        if question_index is not None:
            message = f"Question {question_index + 1}: {message}"
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "reason": self.reason.value,
            "question_index": self.question_index,
            "message": self.message,
        }


class UnknownOptionId(QuizError):
    def __init__(self, question_id: int, option_id: int):
        self.question_id = question_id
        self.option_id = option_id
        super().__init__(f"Option {option_id} does not belong to question {question_id}")


class QuestionNotFound(QuizError):
    def __init__(self, question_id: int):
        self.question_id = question_id
        super().__init__(f"Question {question_id} not found")


class AnswerTypeError(QuizError):
    """The submitted value does not fit the question type."""


class SessionBoundsError(QuizError):
    """An answer was recorded for a question index outside the session.

    Navigation never raises this; advancing past either end is a no-op.
    """


class EmptyQuizError(QuizError):
    def __init__(self):
        super().__init__("Cannot score a quiz with no questions")


class QuizNotFound(QuizError):
    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Quiz {quiz_id} not found")
