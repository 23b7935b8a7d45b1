"""Collects a learner's answers while taking a quiz."""

from __future__ import annotations

from typing import Iterable

from ecoquest_quiz.core.models import (
    Answer,
    MultiQuestion,
    Quiz,
    QuizQuestion,
    ShortQuestion,
    has_options,
)
from ecoquest_quiz.core.scoring import QuizScore, score_quiz


class AnswerSheet:
    """Answers of one attempt, keyed by question id in quiz order."""

    def __init__(self, quiz: Quiz) -> None:
        self._quiz = quiz
        self._answers: dict[str, Answer] = {}

    @property
    def quiz(self) -> Quiz:
        return self._quiz

    @property
    def time_limit_seconds(self) -> int | None:
        if self._quiz.time_limit_minutes is None:
            return None
        return self._quiz.time_limit_minutes * 60

    def select_option(self, question_id: str, option_id: str) -> Answer:
        """Record a click on an option.

        Single-answer questions replace the selection; multi-select questions
        toggle the clicked option.
        """
        question = self._choice_question(question_id, [option_id])

        current = self._answers.get(question_id)
        selected = list(current.selected_options) if current else []
        if isinstance(question, MultiQuestion):
            if option_id in selected:
                selected.remove(option_id)
            else:
                selected.append(option_id)
        else:
            selected = [option_id]

        answer = Answer(question_id=question_id, selected_options=tuple(selected))
        self._answers[question_id] = answer
        return answer

    def set_selection(self, question_id: str, option_ids: Iterable[str]) -> Answer:
        """Replace the whole selection of a choice question."""
        selected = tuple(dict.fromkeys(option_ids))
        question = self._choice_question(question_id, selected)
        if not isinstance(question, MultiQuestion) and len(selected) > 1:
            raise ValueError(f"Question {question_id} takes a single answer.")
        answer = Answer(question_id=question_id, selected_options=selected)
        self._answers[question_id] = answer
        return answer

    def record(
        self,
        question_id: str,
        selected_options: Iterable[str] = (),
        text_answer: str | None = None,
    ) -> Answer | None:
        """Store an answer submitted in one piece, checking it against the quiz.

        A short question without text stays unanswered and ``None`` is returned.
        """
        question = self._question(question_id)
        selected = tuple(selected_options)
        if isinstance(question, ShortQuestion):
            if selected:
                raise ValueError(f"Question {question_id} does not take option answers.")
            if text_answer is None:
                return None
            return self.set_text_answer(question_id, text_answer)
        if text_answer is not None:
            raise ValueError(f"Question {question_id} does not take a text answer.")
        return self.set_selection(question_id, selected)

    def set_text_answer(self, question_id: str, text: str) -> Answer:
        question = self._question(question_id)
        if not isinstance(question, ShortQuestion):
            raise ValueError(f"Question {question_id} does not take a text answer.")
        answer = Answer(question_id=question_id, text_answer=text)
        self._answers[question_id] = answer
        return answer

    def answer_for(self, question_id: str) -> Answer | None:
        return self._answers.get(question_id)

    @property
    def answers(self) -> list[Answer]:
        return [self._answers[q.id] for q in self._quiz.questions if q.id in self._answers]

    def answered_count(self) -> int:
        return len(self._answers)

    def reset(self) -> None:
        self._answers.clear()

    def score(self) -> QuizScore:
        return score_quiz(self._quiz.questions, self.answers)

    def _question(self, question_id: str) -> QuizQuestion:
        question = next((q for q in self._quiz.questions if q.id == question_id), None)
        if question is None:
            raise KeyError(f"Quiz {self._quiz.id} has no question {question_id}.")
        return question

    def _choice_question(self, question_id: str, option_ids: Iterable[str]) -> QuizQuestion:
        question = self._question(question_id)
        if not has_options(question):
            raise ValueError(f"Question {question_id} does not take option answers.")
        known = {option.id for option in question.options}
        for option_id in option_ids:
            if option_id not in known:
                raise ValueError(f"Question {question_id} has no option {option_id}.")
        return question
