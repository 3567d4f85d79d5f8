from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from quizmaster.config import settings
from quizmaster.core import editor
from quizmaster.core.errors import QuestionNotFound, QuizNotFound, UnknownOptionId, ValidationError
from quizmaster.core.validator import validate_quiz
from quizmaster.models.quiz import QuestionType, Quiz, QuizDraft, QuizStatus
from quizmaster.repository import QuizRepository, get_repository
from quizmaster.utils.auth_utils import get_current_user, get_current_user_optional, require_author
from typing import Literal, Optional
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

EditAction = Literal[
    "add_question",
    "remove_question",
    "move_question",
    "set_question_text",
    "set_text_answer",
    "add_option",
    "remove_option",
    "set_option_text",
    "set_option_correct",
]

# editor function arguments after the quiz, in call order
EDIT_ARGUMENTS = {
    "add_question": ("question_type",),
    "remove_question": ("question_id",),
    "move_question": ("index", "direction"),
    "set_question_text": ("question_id", "text"),
    "set_text_answer": ("question_id", "text"),
    "add_option": ("question_id",),
    "remove_option": ("question_id", "option_id"),
    "set_option_text": ("question_id", "option_id", "text"),
    "set_option_correct": ("question_id", "option_id", "is_correct"),
}

class QuizEdit(BaseModel):
    action: EditAction
    question_type: Optional[QuestionType] = None
    question_id: Optional[int] = None
    index: Optional[int] = None
    direction: Optional[Literal[1, -1]] = None
    option_id: Optional[int] = None
    text: Optional[str] = None
    is_correct: Optional[bool] = None

def apply_edit(quiz: Quiz, edit: QuizEdit) -> Quiz:
    names = EDIT_ARGUMENTS[edit.action]
    missing = [name for name in names if getattr(edit, name) is None]
    if missing:
        raise HTTPException(status_code=400, detail=f"'{edit.action}' requires: {', '.join(missing)}")
    return getattr(editor, edit.action)(quiz, *(getattr(edit, name) for name in names))

def check_question_limit(quiz_data: QuizDraft):
    if len(quiz_data.questions) > settings.max_questions:
        raise HTTPException(status_code=400, detail=f"Maximum {settings.max_questions} questions allowed per quiz")

def check_quiz(quiz_data: QuizDraft):
    """Reject a quiz before it reaches storage"""
    check_question_limit(quiz_data)
    try:
        validate_quiz(quiz_data)
    except ValidationError as e:
        logger.info(f"Rejected quiz '{quiz_data.title}': {e.reason.value} (question {e.question_index})")
        raise HTTPException(status_code=400, detail=e.to_dict())

def is_author(quiz: Quiz, current_user: Optional[dict]) -> bool:
    return bool(current_user) and quiz.author_id == current_user["id"]

@router.post("/", status_code=201)
def create_quiz(
    quiz_data: QuizDraft,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Validate and create a new quiz"""
    try:
        check_quiz(quiz_data)
        quiz = Quiz.model_validate({**quiz_data.model_dump(), "author_id": current_user["id"]})
        created = repo.save_quiz(quiz)
        logger.info(f"Quiz {created.id} created by {current_user['id']} ({created.status.value})")
        return created.model_dump(mode="json")
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to create quiz: {str(e)}")

@router.get("/")
def list_quizzes(
    category: Optional[str] = Query(None, description="Filter by category"),
    status: Optional[QuizStatus] = Query(None, description="Filter by status"),
    author_id: Optional[str] = Query(None, description="Filter by author"),
    current_user: Optional[dict] = Depends(get_current_user_optional),
    repo: QuizRepository = Depends(get_repository),
):
    """List published quizzes plus the caller's own drafts"""
    try:
        quizzes = repo.list_quizzes(category=category, status=status, author_id=author_id)
        return [
            quiz.to_public() for quiz in quizzes
            if quiz.is_published or is_author(quiz, current_user)
        ]
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to fetch quizzes: {str(e)}")

@router.get("/{quiz_id}")
def get_quiz(
    quiz_id: str,
    current_user: Optional[dict] = Depends(get_current_user_optional),
    repo: QuizRepository = Depends(get_repository),
):
    """Full definition for the author, question text and options for everyone else"""
    try:
        quiz = repo.load_quiz(quiz_id)
        if is_author(quiz, current_user):
            return quiz.model_dump(mode="json")
        if not quiz.is_published:
            raise HTTPException(status_code=404, detail="Quiz not found")
        return quiz.to_public()
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to get quiz: {str(e)}")

@router.put("/{quiz_id}")
def update_quiz(
    quiz_id: str,
    quiz_data: QuizDraft,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Validate and replace an existing quiz"""
    try:
        existing = repo.load_quiz(quiz_id)
        require_author(existing, current_user)
        check_quiz(quiz_data)

        quiz = Quiz.model_validate({
            **quiz_data.model_dump(),
            "id": existing.id,
            "author_id": existing.author_id,
            "created_at": existing.created_at,
        })
        updated = repo.save_quiz(quiz)
        logger.info(f"Quiz {quiz_id} updated ({updated.status.value})")
        return updated.model_dump(mode="json")
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to update quiz: {str(e)}")

@router.post("/{quiz_id}/edits")
def edit_quiz(
    quiz_id: str,
    edit: QuizEdit,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Apply one editor step; published quizzes must stay valid, drafts may be incomplete"""
    try:
        quiz = repo.load_quiz(quiz_id)
        require_author(quiz, current_user)

        edited = apply_edit(quiz, edit)
        if edited.is_published:
            check_quiz(edited)
        else:
            check_question_limit(edited)

        saved = repo.save_quiz(edited)
        logger.info(f"Quiz {quiz_id} edited: {edit.action}")
        return saved.model_dump(mode="json")
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except QuestionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownOptionId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to edit quiz: {str(e)}")

@router.delete("/{quiz_id}")
def delete_quiz(
    quiz_id: str,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Delete a quiz together with all of its results"""
    try:
        quiz = repo.load_quiz(quiz_id)
        require_author(quiz, current_user)
        repo.delete_quiz(quiz_id)
        return {"message": "Quiz deleted", "quiz_id": quiz_id}
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to delete quiz: {str(e)}")
