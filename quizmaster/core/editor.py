"""Author-side edits on a quiz definition.

Each operation returns a new quiz; the one passed in is left untouched.
"""

from typing import List, TypeVar

from quizmaster.core.errors import QuestionNotFound, UnknownOptionId
from quizmaster.models.quiz import ChoiceQuestion, Option, QuestionType, QuizDraft, TextQuestion

QuizT = TypeVar("QuizT", bound=QuizDraft)


def _next_id(ids) -> int:
    return max(ids, default=0) + 1


def _find_index(quiz: QuizDraft, question_id: int) -> int:
    for index, question in enumerate(quiz.questions):
        if question.id == question_id:
            return index
    raise QuestionNotFound(question_id)


def _replace_question(quiz: QuizT, index: int, question) -> QuizT:
    questions = list(quiz.questions)
    questions[index] = question
    return quiz.model_copy(update={"questions": questions})


def _choice_question(quiz: QuizDraft, question_id: int) -> ChoiceQuestion:
    question = quiz.questions[_find_index(quiz, question_id)]
    if question.type == QuestionType.TEXT:
        raise QuestionNotFound(question_id)
    return question


def add_question(quiz: QuizT, question_type: QuestionType) -> QuizT:
    question_id = _next_id(question.id for question in quiz.questions)
    if question_type == QuestionType.TEXT:
        question = TextQuestion(id=question_id, type="text", correct_answer="")
    else:
        question = ChoiceQuestion(
            id=question_id,
            type=QuestionType(question_type).value,
            options=[Option(id=1), Option(id=2)],
        )
    return quiz.model_copy(update={"questions": list(quiz.questions) + [question]})


def remove_question(quiz: QuizT, question_id: int) -> QuizT:
    index = _find_index(quiz, question_id)
    questions = list(quiz.questions)
    del questions[index]
    return quiz.model_copy(update={"questions": questions})


def move_question(quiz: QuizT, index: int, direction: int) -> QuizT:
    """Swap a question with its neighbour; moving past either end does nothing"""
    target = index + direction
    if not (0 <= index < len(quiz.questions) and 0 <= target < len(quiz.questions)):
        return quiz
    questions = list(quiz.questions)
    questions[index], questions[target] = questions[target], questions[index]
    return quiz.model_copy(update={"questions": questions})


def set_question_text(quiz: QuizT, question_id: int, text: str) -> QuizT:
    index = _find_index(quiz, question_id)
    question = quiz.questions[index].model_copy(update={"text": text})
    return _replace_question(quiz, index, question)


def set_text_answer(quiz: QuizT, question_id: int, answer: str) -> QuizT:
    index = _find_index(quiz, question_id)
    question = quiz.questions[index]
    if question.type != QuestionType.TEXT:
        raise QuestionNotFound(question_id)
    return _replace_question(quiz, index, question.model_copy(update={"correct_answer": answer}))


def _with_options(quiz: QuizT, question: ChoiceQuestion, options: List[Option]) -> QuizT:
    index = _find_index(quiz, question.id)
    return _replace_question(quiz, index, question.model_copy(update={"options": options}))


def add_option(quiz: QuizT, question_id: int) -> QuizT:
    question = _choice_question(quiz, question_id)
    option = Option(id=_next_id(question.option_ids()))
    return _with_options(quiz, question, list(question.options) + [option])


def remove_option(quiz: QuizT, question_id: int, option_id: int) -> QuizT:
    question = _choice_question(quiz, question_id)
    if option_id not in question.option_ids():
        raise UnknownOptionId(question_id, option_id)
    options = [option for option in question.options if option.id != option_id]
    return _with_options(quiz, question, options)


def set_option_text(quiz: QuizT, question_id: int, option_id: int, text: str) -> QuizT:
    question = _choice_question(quiz, question_id)
    if option_id not in question.option_ids():
        raise UnknownOptionId(question_id, option_id)
    options = [
        option.model_copy(update={"text": text}) if option.id == option_id else option
        for option in question.options
    ]
    return _with_options(quiz, question, options)


def set_option_correct(quiz: QuizT, question_id: int, option_id: int, is_correct: bool) -> QuizT:
    """Mark an option; on a single-choice question this clears every other option"""
    question = _choice_question(quiz, question_id)
    if option_id not in question.option_ids():
        raise UnknownOptionId(question_id, option_id)
    exclusive = question.type == QuestionType.SINGLE
    options = []
    for option in question.options:
        if option.id == option_id:
            options.append(option.model_copy(update={"is_correct": is_correct}))
        elif exclusive and option.is_correct:
            options.append(option.model_copy(update={"is_correct": False}))
        else:
            options.append(option)
    return _with_options(quiz, question, options)
