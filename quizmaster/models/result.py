from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime

class QuestionOutcome(BaseModel):
    """One scored question. answered=False is the explicit 'unanswered' marker."""
    question_id: int
    question_text: str
    answered: bool
    user_answer: Union[List[int], str, None] = None
    is_correct: bool
    correct_answer: Union[List[str], str, None] = None

    class Config:
        frozen = True

class Result(BaseModel):
    id: Optional[str] = None
    quiz_id: Optional[str] = None
    user_id: Optional[str] = None
    score: int = Field(ge=0, le=100)
    correct_answers: int
    total_questions: int
    per_question: List[QuestionOutcome] = []
    completed_at: datetime

    class Config:
        frozen = True

    def __repr__(self):
        return f"<Result(id={self.id}, quiz_id={self.quiz_id}, user_id={self.user_id}, score={self.score})>"

class QuizStats(BaseModel):
    quiz_id: str
    attempts: int
    average_score: float
    best_score: int
