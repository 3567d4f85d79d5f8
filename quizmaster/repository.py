"""Persistence for quiz definitions and results.

The core never talks to storage directly; routes go through a
``QuizRepository``. ``InMemoryQuizRepository`` is the default backend,
``SupabaseQuizRepository`` stores rows through the Supabase REST API.
"""

from typing import Dict, List, Optional
from uuid import uuid4
import logging

from quizmaster.config import settings
from quizmaster.core.errors import QuizNotFound
from quizmaster.database import Database
from quizmaster.models.quiz import Quiz, QuizStatus
from quizmaster.models.result import Result
from quizmaster.utils.time_utils import get_current_time

logger = logging.getLogger(__name__)


class QuizRepository:
    """Storage contract used by the API layer"""

    def load_quiz(self, quiz_id: str) -> Quiz:
        raise NotImplementedError

    def save_quiz(self, quiz: Quiz) -> Quiz:
        raise NotImplementedError

    def delete_quiz(self, quiz_id: str) -> None:
        raise NotImplementedError

    def list_quizzes(self, category: str = None, status: QuizStatus = None, author_id: str = None) -> List[Quiz]:
        raise NotImplementedError

    def save_result(self, result: Result) -> Result:
        raise NotImplementedError

    def list_results_for_quiz(self, quiz_id: str) -> List[Result]:
        raise NotImplementedError

    def _prepare_new_quiz(self, quiz: Quiz) -> Quiz:
        if quiz.id is not None:
            return quiz
        return quiz.model_copy(update={
            "id": str(uuid4()),
            "created_at": quiz.created_at or get_current_time(),
        })


def _matches(quiz: Quiz, category, status, author_id) -> bool:
    if category and quiz.category != category:
        return False
    if status and quiz.status != status:
        return False
    if author_id and quiz.author_id != author_id:
        return False
    return True


class InMemoryQuizRepository(QuizRepository):
    def __init__(self):
        self.quizzes: Dict[str, Quiz] = {}
        self.results: Dict[str, Result] = {}

    def load_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.quizzes.get(quiz_id)
        if quiz is None:
            raise QuizNotFound(quiz_id)
        return quiz.model_copy(deep=True)

    def save_quiz(self, quiz: Quiz) -> Quiz:
        stored = self._prepare_new_quiz(quiz).model_copy(deep=True)
        self.quizzes[stored.id] = stored
        return stored.model_copy(deep=True)

    def delete_quiz(self, quiz_id: str) -> None:
        if quiz_id not in self.quizzes:
            raise QuizNotFound(quiz_id)
        del self.quizzes[quiz_id]
        for result_id in [rid for rid, result in self.results.items() if result.quiz_id == quiz_id]:
            del self.results[result_id]

    def list_quizzes(self, category: str = None, status: QuizStatus = None, author_id: str = None) -> List[Quiz]:
        quizzes = [
            quiz.model_copy(deep=True) for quiz in self.quizzes.values()
            if _matches(quiz, category, status, author_id)
        ]
        quizzes.sort(key=lambda quiz: quiz.created_at.timestamp() if quiz.created_at else 0, reverse=True)
        return quizzes

    def save_result(self, result: Result) -> Result:
        stored = result.model_copy(update={"id": result.id or str(uuid4())}, deep=True)
        self.results[stored.id] = stored
        return stored

    def list_results_for_quiz(self, quiz_id: str) -> List[Result]:
        results = [result for result in self.results.values() if result.quiz_id == quiz_id]
        results.sort(key=lambda result: result.completed_at.timestamp(), reverse=True)
        return results


class SupabaseQuizRepository(QuizRepository):
    """Rows in 'quizzes' (questions as JSON) and 'results' (outcomes as JSON)"""

    def __init__(self, database: Database = None):
        self.db = database or Database()

    def load_quiz(self, quiz_id: str) -> Quiz:
        rows = self.db.select("quizzes", "*", {"id": quiz_id})
        if not rows:
            raise QuizNotFound(quiz_id)
        return Quiz.model_validate(rows[0])

    def save_quiz(self, quiz: Quiz) -> Quiz:
        if quiz.id is None:
            row = self._prepare_new_quiz(quiz).model_dump(mode="json")
            created = self.db.insert("quizzes", row)
            return Quiz.model_validate(created or row)

        row = quiz.model_dump(mode="json", exclude={"id", "created_at"})
        updated = self.db.update("quizzes", row, {"id": quiz.id})
        if updated is None:
            raise QuizNotFound(quiz.id)
        return Quiz.model_validate(updated)

    def delete_quiz(self, quiz_id: str) -> None:
        if not self.db.select("quizzes", "id", {"id": quiz_id}):
            raise QuizNotFound(quiz_id)
        self.db.delete("results", {"quiz_id": quiz_id})
        self.db.delete("quizzes", {"id": quiz_id})
        logger.info(f"Deleted quiz {quiz_id} and its results")

    def list_quizzes(self, category: str = None, status: QuizStatus = None, author_id: str = None) -> List[Quiz]:
        filters = {}
        if category:
            filters["category"] = category
        if status:
            filters["status"] = QuizStatus(status).value
        if author_id:
            filters["author_id"] = author_id
        rows = self.db.select("quizzes", "*", filters, order_by="created_at", descending=True)
        return [Quiz.model_validate(row) for row in rows]

    def save_result(self, result: Result) -> Result:
        row = result.model_dump(mode="json", exclude={"per_question"})
        row["id"] = result.id or str(uuid4())
        row["answers"] = [outcome.model_dump(mode="json") for outcome in result.per_question]
        created = self.db.insert("results", row) or row
        return self._result_from_row(created)

    def list_results_for_quiz(self, quiz_id: str) -> List[Result]:
        rows = self.db.select("results", "*", {"quiz_id": quiz_id}, order_by="completed_at", descending=True)
        return [self._result_from_row(row) for row in rows]

    @staticmethod
    def _result_from_row(row: dict) -> Result:
        data = dict(row)
        data["per_question"] = data.pop("answers", None) or []
        return Result.model_validate(data)


_repository: Optional[QuizRepository] = None


def get_repository() -> QuizRepository:
    """Process-wide repository for the configured backend"""
    global _repository
    if _repository is None:
        if settings.uses_supabase:
            _repository = SupabaseQuizRepository()
        else:
            _repository = InMemoryQuizRepository()
        logger.info(f"Using {type(_repository).__name__} for storage")
    return _repository
