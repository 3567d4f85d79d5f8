"""Structural checks an authored quiz must pass before it is saved."""

from quizmaster.core.errors import ValidationError, ValidationReason
from quizmaster.models.quiz import QuestionType, QuizDraft


def validate_quiz(quiz: QuizDraft) -> None:
    """Raise ValidationError for the first broken rule, in a fixed order.

    Quiz-level fields are checked before any question; questions are checked
    in authored order.
    """
    if not quiz.title.strip():
        raise ValidationError(ValidationReason.MISSING_TITLE)
    if not quiz.category:
        raise ValidationError(ValidationReason.MISSING_CATEGORY)
    if not quiz.questions:
        raise ValidationError(ValidationReason.NO_QUESTIONS)

    for index, question in enumerate(quiz.questions):
        if not question.text.strip():
            raise ValidationError(ValidationReason.EMPTY_QUESTION_TEXT, index)
        if question.type == QuestionType.TEXT:
            continue
        if len(question.options) < 2:
            raise ValidationError(ValidationReason.TOO_FEW_OPTIONS, index)
        correct_count = len(question.correct_options())
        if correct_count == 0:
            raise ValidationError(ValidationReason.NO_CORRECT_OPTION, index)
        if question.type == QuestionType.SINGLE and correct_count > 1:
            raise ValidationError(ValidationReason.MULTIPLE_CORRECT_OPTIONS, index)
