"""Grading of learner answers against a quiz definition.

Rules per question type:

* ``short``: full points when the trimmed, case-folded answer equals the
  expected answer; no partial credit and no expected answer means no points.
* ``mcq`` / ``truefalse``: full points when exactly one option is selected
  and it is a correct one.
* ``multi``: any wrong selection scores zero. Otherwise the question earns
  ``points * correct_selected / correct_total``.

Unanswered questions earn nothing but still count toward the total.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from ecoquest_quiz.core.models import (
    Answer,
    MultiQuestion,
    QuizQuestion,
    ShortQuestion,
)


class QuestionOutcome(str, Enum):
    CORRECT = "correct"
    PARTIAL = "partial"
    INCORRECT = "incorrect"


@dataclass(slots=True)
class QuestionResult:
    """Grading of a single question."""

    question_id: str
    points_possible: int
    points_awarded: float
    outcome: QuestionOutcome
    answered: bool


@dataclass(slots=True)
class QuizScore:
    """Aggregate grading of a quiz attempt."""

    total_points: int
    earned_points: float
    percentage: int
    question_results: list[QuestionResult] = field(default_factory=list)

    def result_for(self, question_id: str) -> QuestionResult | None:
        return next((r for r in self.question_results if r.question_id == question_id), None)


def _round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def _distinct(option_ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(option_ids))


def normalize_text_answer(text: str) -> str:
    return text.strip().casefold()


def grade_question(question: QuizQuestion, answer: Answer | None) -> QuestionResult:
    """Grade one question; ``answer`` is ``None`` when it was skipped."""
    awarded = 0.0
    outcome = QuestionOutcome.INCORRECT

    if answer is not None:
        if isinstance(question, ShortQuestion):
            if (
                question.expected_answer
                and question.expected_answer.strip()
                and answer.text_answer is not None
                and normalize_text_answer(answer.text_answer) == normalize_text_answer(question.expected_answer)
            ):
                awarded, outcome = float(question.points), QuestionOutcome.CORRECT
        elif isinstance(question, MultiQuestion):
            awarded, outcome = _grade_multi(question, _distinct(answer.selected_options))
        else:
            selected = _distinct(answer.selected_options)
            if len(selected) == 1 and selected[0] in question.correct_option_ids():
                awarded, outcome = float(question.points), QuestionOutcome.CORRECT

    return QuestionResult(
        question_id=question.id,
        points_possible=question.points,
        points_awarded=awarded,
        outcome=outcome,
        answered=answer is not None,
    )


def _grade_multi(question: MultiQuestion, selected: list[str]) -> tuple[float, QuestionOutcome]:
    correct = question.correct_option_ids()
    correct_selected = sum(1 for option_id in selected if option_id in correct)
    incorrect_selected = len(selected) - correct_selected
    # A question without any correct option can never be answered right.
    if not correct or incorrect_selected or not correct_selected:
        return 0.0, QuestionOutcome.INCORRECT
    if correct_selected == len(correct):
        return float(question.points), QuestionOutcome.CORRECT
    return question.points * correct_selected / len(correct), QuestionOutcome.PARTIAL


def score_quiz(questions: Iterable[QuizQuestion], answers: Iterable[Answer]) -> QuizScore:
    """Grade every question and aggregate the result.

    When several answers name the same question the last one wins; answers
    for questions that are not part of the quiz are ignored. An empty quiz
    scores 0%.
    """
    answers_by_question = {answer.question_id: answer for answer in answers}
    results = [grade_question(q, answers_by_question.get(q.id)) for q in questions]

    total = sum(result.points_possible for result in results)
    earned = sum(result.points_awarded for result in results)
    percentage = int(_round_half_up(earned / total * 100)) if total else 0
    return QuizScore(
        total_points=total,
        earned_points=float(_round_half_up(earned, 2)),
        percentage=percentage,
        question_results=results,
    )
