"""Turn a finished session into a Result."""

from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from quizmaster.core.errors import EmptyQuizError
from quizmaster.core.matcher import AnswerValue, is_answered, is_correct
from quizmaster.models.quiz import QuestionType
from quizmaster.models.result import QuestionOutcome, QuizStats, Result
from quizmaster.utils.time_utils import get_current_time


def percentage(correct: int, total: int) -> int:
    # round half up, exact in integers
    return (200 * correct + total) // (2 * total)


def _canonical_answer(question):
    if question.type == QuestionType.TEXT:
        return question.correct_answer
    return [option.text for option in question.correct_options()]


def _raw_answer(answer: Optional[AnswerValue]):
    if isinstance(answer, str):
        return answer
    return sorted(answer)


def score(
    questions: Sequence,
    answers: Mapping[int, AnswerValue],
    *,
    quiz_id: Optional[str] = None,
    user_id: Optional[str] = None,
    completed_at: Optional[datetime] = None,
) -> Result:
    """Score questions in session order against answers keyed by session index.

    The result only depends on its arguments. Without completed_at the
    timestamp is the current time, so two scorings of the same session differ
    in completed_at; pass it explicitly to get identical results.
    """
    total = len(questions)
    if total == 0:
        raise EmptyQuizError()

    correct_count = 0
    outcomes: List[QuestionOutcome] = []
    for index, question in enumerate(questions):
        answer = answers.get(index)
        answered = is_answered(answer)
        correct = is_correct(question, answer)
        if correct:
            correct_count += 1
        outcomes.append(
            QuestionOutcome(
                question_id=question.id,
                question_text=question.text,
                answered=answered,
                user_answer=_raw_answer(answer) if answered else None,
                is_correct=correct,
                correct_answer=_canonical_answer(question),
            )
        )

    return Result(
        quiz_id=quiz_id,
        user_id=user_id,
        score=percentage(correct_count, total),
        correct_answers=correct_count,
        total_questions=total,
        per_question=outcomes,
        completed_at=completed_at or get_current_time(),
    )


def summarize_results(quiz_id: str, results: Iterable[Result]) -> QuizStats:
    scores = [result.score for result in results]
    if not scores:
        return QuizStats(quiz_id=quiz_id, attempts=0, average_score=0.0, best_score=0)
    return QuizStats(
        quiz_id=quiz_id,
        attempts=len(scores),
        average_score=round(sum(scores) / len(scores), 1),
        best_score=max(scores),
    )
