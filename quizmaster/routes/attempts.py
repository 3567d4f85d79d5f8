from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Literal, Optional
from quizmaster.config import settings
from quizmaster.core.errors import (
    AnswerTypeError,
    EmptyQuizError,
    QuizNotFound,
    SessionBoundsError,
    UnknownOptionId,
)
from quizmaster.core.session import QuizSession, SessionStorage, get_session_storage
from quizmaster.repository import QuizRepository, get_repository
from quizmaster.utils.auth_utils import get_current_user_optional
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

class AnswerRequest(BaseModel):
    question_index: Optional[int] = None  # defaults to the current question
    option_id: Optional[int] = None
    text: Optional[str] = None

class AdvanceRequest(BaseModel):
    direction: Literal[1, -1]

def get_attempt(quiz_id: str, attempt_id: str, current_user: Optional[dict], storage: SessionStorage) -> QuizSession:
    """Look up a live attempt and make sure the caller may drive it"""
    session = storage.get(attempt_id)
    if session is None or session.quiz_id != quiz_id:
        raise HTTPException(status_code=404, detail="Attempt not found or already finished")
    if session.user_id is not None and (not current_user or current_user["id"] != session.user_id):
        raise HTTPException(status_code=403, detail="This attempt belongs to another user")
    return session

@router.post("/{quiz_id}/attempts", status_code=201)
def start_attempt(
    quiz_id: str,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    repo: QuizRepository = Depends(get_repository),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Start a quiz attempt"""
    try:
        quiz = repo.load_quiz(quiz_id)
        if not quiz.is_published:
            raise HTTPException(status_code=400, detail="Quiz is not published")

        user_id = current_user["id"] if current_user else None
        if user_id and not quiz.allow_retake:
            previous = [r for r in repo.list_results_for_quiz(quiz_id) if r.user_id == user_id]
            if previous:
                raise HTTPException(status_code=400, detail="You have already completed this quiz")

        storage.cleanup_expired(settings.session_max_age_minutes)
        session = storage.add(QuizSession.start(quiz, user_id=user_id))

        return {
            "attempt_id": session.attempt_id,
            "started_at": session.started_at.isoformat(),
            "quiz": {
                "id": quiz.id,
                "title": quiz.title,
                "description": quiz.description,
                "category": quiz.category,
                "time_limit": quiz.time_limit,
                "show_results": quiz.show_results,
            },
            "total_questions": session.total_questions,
            "view": session.view().model_dump(mode="json"),
        }
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to start quiz: {str(e)}")

@router.get("/{quiz_id}/attempts/{attempt_id}")
async def get_attempt_view(
    quiz_id: str,
    attempt_id: str,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Current question, progress and completion flag"""
    session = get_attempt(quiz_id, attempt_id, current_user, storage)
    return session.view().model_dump(mode="json")

@router.post("/{quiz_id}/attempts/{attempt_id}/answers")
async def record_answer(
    quiz_id: str,
    attempt_id: str,
    answer: AnswerRequest,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Record an answer: an option id for choice questions or text for text questions"""
    session = get_attempt(quiz_id, attempt_id, current_user, storage)
    if (answer.option_id is None) == (answer.text is None):
        raise HTTPException(status_code=400, detail="Send exactly one of option_id or text")

    index = session.current_index if answer.question_index is None else answer.question_index
    value = answer.text if answer.text is not None else answer.option_id
    try:
        session.record_answer(index, value)
    except (UnknownOptionId, AnswerTypeError, SessionBoundsError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.view().model_dump(mode="json")

@router.post("/{quiz_id}/attempts/{attempt_id}/advance")
async def advance_attempt(
    quiz_id: str,
    attempt_id: str,
    move: AdvanceRequest,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Go to the next or previous question"""
    session = get_attempt(quiz_id, attempt_id, current_user, storage)
    session.advance(move.direction)
    return session.view().model_dump(mode="json")

@router.post("/{quiz_id}/attempts/{attempt_id}/finish")
def finish_attempt(
    quiz_id: str,
    attempt_id: str,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    repo: QuizRepository = Depends(get_repository),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Score the attempt, store the result and close the attempt"""
    session = get_attempt(quiz_id, attempt_id, current_user, storage)
    try:
        result = repo.save_result(session.finish())
        storage.remove(attempt_id)
    except EmptyQuizError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to submit quiz: {str(e)}")

    response = result.model_dump(mode="json")
    if not session.show_results:
        response.pop("per_question")
    return response
