from fastapi import APIRouter, Depends, HTTPException
from quizmaster.core.errors import QuizNotFound
from quizmaster.core.scorer import summarize_results
from quizmaster.repository import QuizRepository, get_repository
from quizmaster.utils.auth_utils import get_current_user, require_author

router = APIRouter()

@router.get("/{quiz_id}/results")
def get_quiz_results(
    quiz_id: str,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Get all results for a quiz (only for the quiz author)"""
    try:
        quiz = repo.load_quiz(quiz_id)
        require_author(quiz, current_user)

        results = repo.list_results_for_quiz(quiz_id)
        return {
            "quiz": {
                "id": quiz.id,
                "title": quiz.title,
                "description": quiz.description
            },
            "results": [result.model_dump(mode="json") for result in results],
            "total_participants": len(results)
        }
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to get results: {str(e)}")

@router.get("/{quiz_id}/stats")
def get_quiz_stats(
    quiz_id: str,
    current_user: dict = Depends(get_current_user),
    repo: QuizRepository = Depends(get_repository),
):
    """Attempts, average and best score for a quiz"""
    try:
        quiz = repo.load_quiz(quiz_id)
        require_author(quiz, current_user)
        return summarize_results(quiz_id, repo.list_results_for_quiz(quiz_id)).model_dump()
    except HTTPException:
        raise
    except QuizNotFound:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to get quiz stats: {str(e)}")
