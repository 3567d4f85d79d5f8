import pytest
from quizmaster.core import editor
from quizmaster.core.errors import QuestionNotFound, UnknownOptionId
from quizmaster.models.quiz import QuestionType, QuizDraft

class TestQuestionEdits:
    """Adding, removing and reordering questions"""

    def test_add_choice_question(self):
        draft = editor.add_question(QuizDraft(), QuestionType.SINGLE)
        question = draft.questions[0]
        assert question.id == 1
        assert question.type == "single"
        assert [option.id for option in question.options] == [1, 2]
        assert not any(option.is_correct for option in question.options)

    def test_add_text_question(self):
        draft = editor.add_question(QuizDraft(), QuestionType.TEXT)
        assert draft.questions[0].type == "text"
        assert draft.questions[0].correct_answer == ""

    def test_new_ids_follow_the_highest(self, quiz_factory):
        quiz = editor.remove_question(quiz_factory(), 2)
        quiz = editor.add_question(quiz, QuestionType.MULTIPLE)
        assert [question.id for question in quiz.questions] == [1, 3, 4, 5]

    def test_edits_return_new_quiz(self, quiz_factory):
        quiz = quiz_factory()
        edited = editor.set_question_text(quiz, 1, "Renamed")
        assert edited.questions[0].text == "Renamed"
        assert quiz.questions[0].text == "Single question 1"
        assert edited.id == quiz.id

    def test_remove_unknown_question(self, quiz_factory):
        with pytest.raises(QuestionNotFound):
            editor.remove_question(quiz_factory(), 42)

    def test_move_question(self, quiz_factory):
        quiz = editor.move_question(quiz_factory(), 0, 1)
        assert [question.id for question in quiz.questions] == [2, 1, 3, 4]
        quiz = editor.move_question(quiz, 3, -1)
        assert [question.id for question in quiz.questions] == [2, 1, 4, 3]

    @pytest.mark.parametrize("index,direction", [(0, -1), (3, 1), (10, 1)])
    def test_move_past_either_end_is_ignored(self, quiz_factory, index, direction):
        quiz = quiz_factory()
        assert editor.move_question(quiz, index, direction) is quiz

    def test_set_text_answer(self, quiz_factory):
        quiz = editor.set_text_answer(quiz_factory(), 3, "No")
        assert quiz.questions[2].correct_answer == "No"

    def test_set_text_answer_on_choice_question(self, quiz_factory):
        with pytest.raises(QuestionNotFound):
            editor.set_text_answer(quiz_factory(), 1, "No")

class TestOptionEdits:
    """Option edits only apply to choice questions"""

    def test_add_option(self, quiz_factory):
        quiz = editor.add_option(quiz_factory(), 1)
        assert [option.id for option in quiz.questions[0].options] == [1, 2, 3, 4, 5]
        assert quiz.questions[0].options[-1].text == ""

    def test_add_option_to_text_question(self, quiz_factory):
        with pytest.raises(QuestionNotFound):
            editor.add_option(quiz_factory(), 3)

    def test_remove_option(self, quiz_factory):
        quiz = editor.remove_option(quiz_factory(), 1, 2)
        assert [option.id for option in quiz.questions[0].options] == [1, 3, 4]

    def test_remove_unknown_option(self, quiz_factory):
        with pytest.raises(UnknownOptionId):
            editor.remove_option(quiz_factory(), 1, 9)

    def test_set_option_text(self, quiz_factory):
        quiz = editor.set_option_text(quiz_factory(), 2, 3, "Array")
        assert quiz.questions[1].options[2].text == "Array"

    def test_single_choice_keeps_one_correct(self, quiz_factory):
        quiz = editor.set_option_correct(quiz_factory(), 1, 2, True)
        assert [option.id for option in quiz.questions[0].correct_options()] == [2]

    def test_multiple_choice_accumulates(self, quiz_factory):
        quiz = editor.set_option_correct(quiz_factory(), 2, 1, True)
        assert [option.id for option in quiz.questions[1].correct_options()] == [1, 2, 4]
        quiz = editor.set_option_correct(quiz, 2, 4, False)
        assert [option.id for option in quiz.questions[1].correct_options()] == [1, 2]

    def test_unmarking_single_choice_leaves_none(self, quiz_factory):
        quiz = editor.set_option_correct(quiz_factory(), 1, 3, False)
        assert quiz.questions[0].correct_options() == []
