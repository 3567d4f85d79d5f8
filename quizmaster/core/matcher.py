"""Correctness rules per question type."""

from typing import FrozenSet, Optional, Union

from quizmaster.models.quiz import QuestionType

AnswerValue = Union[FrozenSet[int], str]


def normalize_text(value: str) -> str:
    # Only outer whitespace and case are ignored
    return value.strip().lower()


def is_answered(answer: Optional[AnswerValue]) -> bool:
    if answer is None:
        return False
    if isinstance(answer, str):
        return bool(answer.strip())
    return bool(answer)


def is_correct(question, answer: Optional[AnswerValue]) -> bool:
    """Decide whether one submitted answer is right for one question.

    Missing answers and questions without any correct option are simply
    wrong, never an error.
    """
    if not is_answered(answer):
        return False

    if question.type == QuestionType.TEXT:
        if not isinstance(answer, str) or question.correct_answer is None:
            return False
        return normalize_text(answer) == normalize_text(question.correct_answer)

    if isinstance(answer, str):
        return False
    selected = frozenset(answer)
    correct_options = question.correct_options()
    if not correct_options:
        return False

    if question.type == QuestionType.SINGLE:
        return selected == {correct_options[0].id}
    return selected == {option.id for option in correct_options}
