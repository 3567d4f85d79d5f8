import pytest
from types import SimpleNamespace
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport
from quizmaster.main import app
from quizmaster.core.session import SessionStorage, get_session_storage
from quizmaster.models.quiz import ChoiceQuestion, Option, Quiz, QuizStatus, TextQuestion
from quizmaster.repository import InMemoryQuizRepository, get_repository

TEST_USERS = {
    "author-token": SimpleNamespace(id="author-1", email="author@quizmaster.test", user_metadata={"name": "Author"}),
    "student-token": SimpleNamespace(id="student-1", email="student@quizmaster.test", user_metadata={"name": "Student"}),
    "other-token": SimpleNamespace(id="student-2", email="other@quizmaster.test", user_metadata={"name": "Other"}),
}

@pytest.fixture
def repo():
    return InMemoryQuizRepository()

@pytest.fixture
def storage():
    return SessionStorage()

@pytest.fixture
async def client(repo, storage):
    """Test client wired to in-memory storage and fake identity lookups"""
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_session_storage] = lambda: storage
    with patch("quizmaster.utils.auth_utils.verify_supabase_token", side_effect=TEST_USERS.get):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    app.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    """Helper to create auth headers"""
    def _auth_headers(token: str):
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture
def quiz_payload():
    """Sample quiz as an author would send it"""
    return {
        "title": "JavaScript Basics",
        "description": "Check your JS fundamentals",
        "category": "programming",
        "status": "published",
        "time_limit": 15,
        "shuffle_questions": False,
        "show_results": True,
        "allow_retake": True,
        "questions": [
            {
                "id": 1,
                "type": "single",
                "text": "What does DOM stand for?",
                "options": [
                    {"id": 1, "text": "Data Object Management", "is_correct": False},
                    {"id": 2, "text": "Digital Output Method", "is_correct": False},
                    {"id": 3, "text": "Document Object Model", "is_correct": True},
                ],
            },
            {
                "id": 2,
                "type": "multiple",
                "text": "Which of these are primitive types?",
                "options": [
                    {"id": 1, "text": "Object", "is_correct": False},
                    {"id": 2, "text": "String", "is_correct": True},
                    {"id": 3, "text": "Array", "is_correct": False},
                    {"id": 4, "text": "Boolean", "is_correct": True},
                ],
            },
            {
                "id": 3,
                "type": "text",
                "text": "Which operator compares without type coercion?",
                "correct_answer": "===",
            },
            {
                "id": 4,
                "type": "single",
                "text": "What does typeof null return?",
                "options": [
                    {"id": 1, "text": "object", "is_correct": True},
                    {"id": 2, "text": "null", "is_correct": False},
                ],
            },
        ],
    }

@pytest.fixture
def quiz_factory():
    """Build Quiz instances for core tests"""
    def _quiz(questions=None, **fields):
        data = {
            "id": "quiz-1",
            "title": "Capitals",
            "category": "geography",
            "status": QuizStatus.PUBLISHED,
            "author_id": "author-1",
            "questions": questions if questions is not None else [
                single_question(1, correct=3),
                multiple_question(2, correct=(2, 4)),
                text_question(3, "Yes"),
                single_question(4, correct=1),
            ],
        }
        data.update(fields)
        return Quiz(**data)
    return _quiz

def single_question(question_id, correct, option_count=4, text=None):
    return ChoiceQuestion(
        id=question_id,
        type="single",
        text=text or f"Single question {question_id}",
        options=[Option(id=i, text=f"Option {i}", is_correct=(i == correct)) for i in range(1, option_count + 1)],
    )

def multiple_question(question_id, correct, option_count=4, text=None):
    return ChoiceQuestion(
        id=question_id,
        type="multiple",
        text=text or f"Multiple question {question_id}",
        options=[Option(id=i, text=f"Option {i}", is_correct=(i in correct)) for i in range(1, option_count + 1)],
    )

def text_question(question_id, answer, text=None):
    return TextQuestion(id=question_id, type="text", text=text or f"Text question {question_id}", correct_answer=answer)

@pytest.fixture
def questions():
    """Question builders shared by the unit tests"""
    return SimpleNamespace(single=single_question, multiple=multiple_question, text=text_question)
