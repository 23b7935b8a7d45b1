from __future__ import annotations

import pytest

from ecoquest_quiz.core.models import Answer, MultiQuestion, QuizOption, ShortQuestion
from ecoquest_quiz.core.scoring import QuestionOutcome, grade_question, score_quiz


@pytest.mark.parametrize(
    ("selected", "expected"),
    [(("o2",), 10), (("o1",), 0), (("o1", "o2"), 0), ((), 0)],
)
def test_single_answer_requires_exactly_the_correct_option(mcq, selected, expected):
    result = grade_question(mcq, Answer(question_id="q_mcq", selected_options=selected))
    assert result.points_awarded == expected


def test_true_false_grading(truefalse):
    assert grade_question(truefalse, Answer("q_tf", ("t",))).outcome is QuestionOutcome.CORRECT
    assert grade_question(truefalse, Answer("q_tf", ("f",))).outcome is QuestionOutcome.INCORRECT


@pytest.mark.parametrize(
    ("selected", "points", "outcome"),
    [
        (("r1", "r2"), 10, QuestionOutcome.PARTIAL),
        (("r1", "r3"), 0, QuestionOutcome.INCORRECT),
        (("r1", "r2", "r4"), 15, QuestionOutcome.CORRECT),
        (("r1", "r2", "r3", "r4"), 0, QuestionOutcome.INCORRECT),
        (("r3",), 0, QuestionOutcome.INCORRECT),
        ((), 0, QuestionOutcome.INCORRECT),
    ],
)
def test_multi_select_partial_credit(multi, selected, points, outcome):
    result = grade_question(multi, Answer(question_id="q_multi", selected_options=selected))
    assert result.points_awarded == pytest.approx(points)
    assert result.outcome is outcome


def test_multi_select_without_correct_options_scores_zero():
    question = MultiQuestion(id="q", points=5, options=[QuizOption(id="a"), QuizOption(id="b")])
    result = grade_question(question, Answer("q", ()))
    assert result.points_awarded == 0
    assert result.outcome is QuestionOutcome.INCORRECT


@pytest.mark.parametrize(("text", "expected"), [(" paris ", 5), ("PARIS", 5), ("Pariss", 0), ("", 0)])
def test_short_answer_exact_match_ignores_case_and_whitespace(short, text, expected):
    result = grade_question(short, Answer(question_id="q_short", text_answer=text))
    assert result.points_awarded == expected


def test_short_answer_without_expected_answer_never_scores():
    question = ShortQuestion(id="q", expected_answer=None)
    assert grade_question(question, Answer("q", text_answer="anything")).points_awarded == 0


def test_unanswered_questions_count_toward_total(mcq, multi, truefalse, short):
    score = score_quiz([mcq, multi, truefalse, short], [Answer("q_mcq", ("o2",))])

    assert score.total_points == 10 + 15 + 5 + 5
    assert score.earned_points == 10
    assert score.percentage == 29
    assert score.result_for("q_short").answered is False
    assert score.result_for("q_short").outcome is QuestionOutcome.INCORRECT


def test_aggregate_rounds_earned_points_and_percentage(multi):
    other = MultiQuestion(
        id="q_other",
        points=10,
        options=[QuizOption(id=f"c{i}", correct=True) for i in range(3)],
    )
    score = score_quiz([multi, other], [Answer("q_multi", ("r1",)), Answer("q_other", ("c0",))])

    # 15/3 + 10/3 = 8.333...
    assert score.earned_points == 8.33
    assert score.percentage == 33


def test_full_marks(mcq, multi, truefalse, short):
    answers = [
        Answer("q_mcq", ("o2",)),
        Answer("q_multi", ("r4", "r1", "r2")),
        Answer("q_tf", ("t",)),
        Answer("q_short", text_answer="paris"),
    ]
    score = score_quiz([mcq, multi, truefalse, short], answers)
    assert score.earned_points == score.total_points == 35
    assert score.percentage == 100
    assert {r.outcome for r in score.question_results} == {QuestionOutcome.CORRECT}


def test_empty_quiz_scores_zero_percent():
    score = score_quiz([], [])
    assert (score.total_points, score.earned_points, score.percentage) == (0, 0, 0)


def test_last_answer_for_a_question_wins_and_unknown_answers_are_ignored(mcq):
    score = score_quiz(
        [mcq],
        [Answer("q_mcq", ("o1",)), Answer("q_mcq", ("o2",)), Answer("q_unknown", ("o2",))],
    )
    assert score.earned_points == 10


@pytest.mark.parametrize("expected", ["", "  "])
@pytest.mark.parametrize("text", ["", "   ", "x"])
def test_blank_expected_answer_never_scores(expected, text):
    question = ShortQuestion(id="q", points=5, expected_answer=expected)
    result = grade_question(question, Answer("q", text_answer=text))
    assert result.points_awarded == 0
    assert result.outcome is QuestionOutcome.INCORRECT


def test_question_converted_to_short_is_not_graded_correct_when_blank(editor):
    questions, question_id = editor.add_question([])
    question = editor.update_question(questions, question_id, type="short")[0]

    result = grade_question(question, Answer(question_id, text_answer="   "))

    assert result.points_awarded == 0
