"""One respondent's pass through a quiz.

A session owns a deep copy of the quiz questions (shuffled when the quiz asks
for it), the current position and the answers recorded so far. Sessions live
in memory only; ``SessionStorage`` keys them by attempt id so concurrent
respondents never share state.
"""

import logging
import random
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel

from quizmaster.core import scorer
from quizmaster.core.errors import AnswerTypeError, SessionBoundsError, UnknownOptionId
from quizmaster.core.matcher import AnswerValue, is_answered
from quizmaster.models.quiz import Question, QuestionType, Quiz
from quizmaster.models.result import Result
from quizmaster.utils.time_utils import get_current_time, is_older_than

logger = logging.getLogger(__name__)


def shuffle_questions(items: List, rng: random.Random) -> List:
    """Fisher-Yates shuffle in place"""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class SessionView(BaseModel):
    """Read-only snapshot handed to the presentation layer"""
    attempt_id: str
    quiz_id: Optional[str] = None
    question: Optional[Dict[str, Any]] = None
    current_index: int
    total_questions: int
    progress: float
    is_complete: bool
    current_answer: Union[List[int], str, None] = None
    answered_count: int


class QuizSession(BaseModel):
    attempt_id: str
    quiz_id: Optional[str] = None
    user_id: Optional[str] = None
    questions: List[Question] = []
    current_index: int = 0
    answers: Dict[int, Union[FrozenSet[int], str]] = {}
    started_at: datetime
    time_limit: int = 0
    show_results: bool = True

    @classmethod
    def start(cls, quiz: Quiz, rng: Optional[random.Random] = None, user_id: Optional[str] = None) -> "QuizSession":
        questions = [question.model_copy(deep=True) for question in quiz.questions]
        if quiz.shuffle_questions:
            shuffle_questions(questions, rng or random.Random())

        session = cls(
            attempt_id=str(uuid4()),
            quiz_id=quiz.id,
            user_id=user_id,
            questions=questions,
            started_at=get_current_time(),
            time_limit=quiz.time_limit,
            show_results=quiz.show_results,
        )
        logger.info(f"Attempt {session.attempt_id} started on quiz {quiz.id} ({len(questions)} questions)")
        return session

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def last_index(self) -> int:
        return len(self.questions) - 1

    @property
    def current_question(self):
        if not self.questions:
            return None
        return self.questions[self.current_index]

    def record_answer(self, question_index: int, value: Union[int, str]) -> AnswerValue:
        """Store an answer for the question at a session index.

        Single choice replaces the selection, multiple choice toggles the
        given option id, text is kept exactly as typed.
        """
        if not 0 <= question_index < len(self.questions):
            raise SessionBoundsError(f"Question index {question_index} out of range")

        question = self.questions[question_index]
        if question.type == QuestionType.TEXT:
            if not isinstance(value, str):
                raise AnswerTypeError(f"Question {question.id} expects a text answer")
            self.answers[question_index] = value
            return value

        if isinstance(value, bool) or not isinstance(value, int):
            raise AnswerTypeError(f"Question {question.id} expects an option id")
        if value not in question.option_ids():
            raise UnknownOptionId(question.id, value)

        if question.type == QuestionType.SINGLE:
            selection = frozenset({value})
        else:
            selection = self.answers.get(question_index, frozenset()) ^ {value}
        self.answers[question_index] = selection
        return selection

    def advance(self, direction: int) -> int:
        """Move by direction, clamped to the question range"""
        if self.questions:
            target = self.current_index + direction
            self.current_index = max(0, min(self.last_index, target))
        return self.current_index

    def is_complete(self) -> bool:
        return self.current_index == self.last_index

    def progress_fraction(self) -> float:
        if not self.questions:
            return 0.0
        return (self.current_index + 1) / len(self.questions)

    def answered_count(self) -> int:
        return sum(1 for answer in self.answers.values() if is_answered(answer))

    def view(self) -> SessionView:
        question = self.current_question
        answer = self.answers.get(self.current_index)
        if answer is not None and not isinstance(answer, str):
            answer = sorted(answer)
        return SessionView(
            attempt_id=self.attempt_id,
            quiz_id=self.quiz_id,
            question=question.to_public() if question is not None else None,
            current_index=self.current_index,
            total_questions=self.total_questions,
            progress=self.progress_fraction(),
            is_complete=self.is_complete(),
            current_answer=answer,
            answered_count=self.answered_count(),
        )

    def finish(self, completed_at: Optional[datetime] = None) -> Result:
        """Score the session; completed_at defaults to now"""
        result = scorer.score(
            self.questions,
            self.answers,
            quiz_id=self.quiz_id,
            user_id=self.user_id,
            completed_at=completed_at,
        )
        logger.info(
            f"Attempt {self.attempt_id} finished: {result.correct_answers}/{result.total_questions} "
            f"correct, score {result.score}"
        )
        return result


class SessionStorage:
    """In-memory registry of live attempts"""

    def __init__(self):
        self.sessions: Dict[str, QuizSession] = {}

    def add(self, session: QuizSession) -> QuizSession:
        self.sessions[session.attempt_id] = session
        return session

    def get(self, attempt_id: str) -> Optional[QuizSession]:
        return self.sessions.get(attempt_id)

    def remove(self, attempt_id: str) -> None:
        if attempt_id in self.sessions:
            del self.sessions[attempt_id]

    def cleanup_expired(self, max_age_minutes: int) -> int:
        """Drop abandoned attempts and return how many were removed"""
        expired = [
            attempt_id for attempt_id, session in self.sessions.items()
            if is_older_than(session.started_at, max_age_minutes)
        ]
        for attempt_id in expired:
            self.remove(attempt_id)
        if expired:
            logger.info(f"Cleaned up {len(expired)} abandoned attempts")
        return len(expired)


session_storage = SessionStorage()


def get_session_storage() -> SessionStorage:
    return session_storage
