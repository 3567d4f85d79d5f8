from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Set, Union
from datetime import datetime
from enum import Enum

class QuestionType(str, Enum):
    SINGLE = "single"      # exactly one correct option
    MULTIPLE = "multiple"  # any subset of options
    TEXT = "text"          # free text against one reference answer

class QuizStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"

class Option(BaseModel):
    id: int
    text: str = ""
    is_correct: bool = False

    class Config:
        frozen = True

class ChoiceQuestion(BaseModel):
    id: int
    type: Literal["single", "multiple"]
    text: str = ""
    options: List[Option] = []

    class Config:
        frozen = True

    @field_validator("options")
    @classmethod
    def option_ids_unique(cls, options: List[Option]) -> List[Option]:
        ids = [option.id for option in options]
        if len(ids) != len(set(ids)):
            raise ValueError("Option ids must be unique within a question")
        return options

    @property
    def correct_answer(self) -> None:
        return None

    def option_ids(self) -> Set[int]:
        return {option.id for option in self.options}

    def correct_options(self) -> List[Option]:
        """Correct options in definition order"""
        return [option for option in self.options if option.is_correct]

    def to_public(self) -> Dict[str, Any]:
        """Question as shown to a respondent, without correctness flags"""
        return {
            "id": self.id,
            "type": self.type,
            "text": self.text,
            "options": [{"id": option.id, "text": option.text} for option in self.options],
        }

class TextQuestion(BaseModel):
    id: int
    type: Literal["text"]
    text: str = ""
    correct_answer: Optional[str] = ""

    class Config:
        frozen = True

    @property
    def options(self) -> List[Option]:
        return []

    def to_public(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "text": self.text, "options": []}

Question = Annotated[Union[ChoiceQuestion, TextQuestion], Field(discriminator="type")]

class QuizDraft(BaseModel):
    """Fields an author controls in the editor"""
    title: str = ""
    description: str = ""
    category: str = ""
    status: QuizStatus = QuizStatus.DRAFT
    time_limit: int = Field(0, ge=0)  # minutes, 0 = unlimited
    shuffle_questions: bool = False
    show_results: bool = True
    allow_retake: bool = True
    questions: List[Question] = []

    class Config:
        frozen = True

class Quiz(QuizDraft):
    id: Optional[str] = None
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.status == QuizStatus.PUBLISHED

    def to_public(self) -> Dict[str, Any]:
        """Quiz as shown to respondents"""
        data = self.model_dump(mode="json", exclude={"questions"})
        data["questions"] = [question.to_public() for question in self.questions]
        data["question_count"] = len(self.questions)
        return data

    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title}, status={self.status.value})>"
