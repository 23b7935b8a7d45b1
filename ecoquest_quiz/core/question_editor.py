"""Editing operations over the ordered question list of a quiz in progress.

Every operation returns a new list and leaves its input untouched, so the
builder can keep the previous list around (for undo or comparison) and the
UI can re-render from the returned value. Questions that are not affected by
an operation are carried over as the same objects.
"""

from __future__ import annotations

from dataclasses import fields, replace
from enum import Enum
from typing import Any, Callable

from ecoquest_quiz.constants.quiz_constants import (
    COPY_SUFFIX,
    DEFAULT_POINTS,
    MAX_OPTIONS,
    MIN_OPTIONS,
    OPTION_ID_PREFIX,
    QUESTION_ID_PREFIX,
    TRUE_FALSE_LABELS,
)
from ecoquest_quiz.core.id_generator import generate_id
from ecoquest_quiz.core.models import (
    QUESTION_CLASSES,
    SINGLE_ANSWER_TYPES,
    McqQuestion,
    QuestionType,
    QuizOption,
    QuizQuestion,
    ShortQuestion,
    TrueFalseQuestion,
    clamp_points,
    has_options,
)

IdFactory = Callable[[str], str]


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


def _index_of(questions: list[QuizQuestion], question_id: str) -> int:
    return next((i for i, q in enumerate(questions) if q.id == question_id), -1)


class QuestionEditor:
    """Type-aware mutations of a question list."""

    def __init__(self, id_factory: IdFactory = generate_id) -> None:
        self._new_id = id_factory

    # --- Questions ---

    def add_question(self, questions: list[QuizQuestion]) -> tuple[list[QuizQuestion], str]:
        """Append a blank single-answer question and return its id."""
        question = McqQuestion(
            id=self._new_id(QUESTION_ID_PREFIX),
            options=[self._blank_option(), self._blank_option()],
            points=DEFAULT_POINTS,
        )
        return [*questions, question], question.id

    def update_question(
        self, questions: list[QuizQuestion], question_id: str, **changes: Any
    ) -> list[QuizQuestion]:
        """Merge ``changes`` into a question.

        A ``type`` entry converts the question first (see
        :meth:`convert_question`); the remaining changes then apply to the
        converted variant.
        """
        index = _index_of(questions, question_id)
        if index < 0:
            return list(questions)

        question = questions[index]
        new_type = changes.pop("type", None)
        if new_type is not None:
            question = self.convert_question(question, QuestionType(new_type))
        if changes:
            question = self._merge(question, changes)

        updated = list(questions)
        updated[index] = question
        return updated

    def delete_question(self, questions: list[QuizQuestion], question_id: str) -> list[QuizQuestion]:
        return [question for question in questions if question.id != question_id]

    def duplicate_question(self, questions: list[QuizQuestion], question_id: str) -> list[QuizQuestion]:
        """Insert a copy with fresh ids right after the original."""
        index = _index_of(questions, question_id)
        if index < 0:
            return list(questions)
        original = questions[index]
        copy = self.clone_question(original, prompt=f"{original.prompt}{COPY_SUFFIX}")
        return [*questions[: index + 1], copy, *questions[index + 1 :]]

    def move_question(
        self, questions: list[QuizQuestion], question_id: str, direction: MoveDirection | str
    ) -> list[QuizQuestion]:
        index = _index_of(questions, question_id)
        if index < 0:
            return list(questions)
        target = index - 1 if MoveDirection(direction) is MoveDirection.UP else index + 1
        if not 0 <= target < len(questions):
            return list(questions)
        updated = list(questions)
        updated[index], updated[target] = updated[target], updated[index]
        return updated

    # --- Options ---

    def add_option(self, questions: list[QuizQuestion], question_id: str) -> list[QuizQuestion]:
        def add(question: QuizQuestion) -> QuizQuestion:
            if isinstance(question, TrueFalseQuestion) or len(question.options) >= MAX_OPTIONS:
                return question
            return replace(question, options=[*question.options, self._blank_option()])

        return self._map_choice_question(questions, question_id, add)

    def update_option(
        self, questions: list[QuizQuestion], question_id: str, option_id: str, **changes: Any
    ) -> list[QuizQuestion]:
        unknown = set(changes) - {"text", "correct"}
        if unknown:
            raise ValueError(f"Options have no field(s): {', '.join(sorted(unknown))}")

        def update(question: QuizQuestion) -> QuizQuestion:
            option_changes = dict(changes)
            if isinstance(question, TrueFalseQuestion):
                # True/False labels are fixed.
                option_changes.pop("text", None)
            options = [
                replace(option, **option_changes) if option.id == option_id else option
                for option in question.options
            ]
            return replace(question, options=options)

        return self._map_choice_question(questions, question_id, update)

    def delete_option(
        self, questions: list[QuizQuestion], question_id: str, option_id: str
    ) -> list[QuizQuestion]:
        def delete(question: QuizQuestion) -> QuizQuestion:
            if isinstance(question, TrueFalseQuestion) or len(question.options) <= MIN_OPTIONS:
                return question
            return replace(question, options=[o for o in question.options if o.id != option_id])

        return self._map_choice_question(questions, question_id, delete)

    def set_correct_option(
        self,
        questions: list[QuizQuestion],
        question_id: str,
        option_id: str,
        is_multi_select: bool | None = None,
    ) -> list[QuizQuestion]:
        """Mark an option correct.

        Multi-select toggles the one option and leaves its siblings alone;
        single-answer questions end up with the target as the only correct
        option.
        """

        def mark(question: QuizQuestion) -> QuizQuestion:
            multi = (question.type not in SINGLE_ANSWER_TYPES) if is_multi_select is None else is_multi_select
            if multi:
                options = [
                    replace(option, correct=not option.correct) if option.id == option_id else option
                    for option in question.options
                ]
            else:
                options = [replace(option, correct=option.id == option_id) for option in question.options]
            return replace(question, options=options)

        return self._map_choice_question(questions, question_id, mark)

    # --- Variants ---

    def convert_question(self, question: QuizQuestion, new_type: QuestionType) -> QuizQuestion:
        """Convert a question to another variant, resetting what no longer fits.

        * to ``truefalse``: a fresh, unmarked True/False pair;
        * to ``short``: options dropped, empty expected answer;
        * to ``mcq``/``multi``: existing options kept when there are at least
          two, otherwise two blank options.
        """
        if question.type is new_type:
            return question

        common = {
            "id": question.id,
            "prompt": question.prompt,
            "points": question.points,
            "explanation": question.explanation,
        }
        if new_type is QuestionType.SHORT:
            return ShortQuestion(**common, expected_answer="")
        if new_type is QuestionType.TRUE_FALSE:
            options = [self._blank_option(label) for label in TRUE_FALSE_LABELS]
        elif has_options(question) and len(question.options) >= MIN_OPTIONS:
            options = list(question.options)
        else:
            options = [self._blank_option(), self._blank_option()]
        return QUESTION_CLASSES[new_type](**common, options=options)

    def clone_question(self, question: QuizQuestion, **overrides: Any) -> QuizQuestion:
        """Copy a question, giving it and each of its options a fresh id."""
        changes: dict[str, Any] = {"id": self._new_id(QUESTION_ID_PREFIX), **overrides}
        if has_options(question):
            changes["options"] = [
                replace(option, id=self._new_id(OPTION_ID_PREFIX)) for option in question.options
            ]
        return replace(question, **changes)

    # --- Helpers ---

    def _blank_option(self, text: str = "") -> QuizOption:
        return QuizOption(id=self._new_id(OPTION_ID_PREFIX), text=text, correct=False)

    def _merge(self, question: QuizQuestion, changes: dict[str, Any]) -> QuizQuestion:
        allowed = {f.name for f in fields(question)} - {"id"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(
                f"{question.type.value} questions have no field(s): {', '.join(sorted(unknown))}"
            )
        if "points" in changes:
            changes["points"] = clamp_points(changes["points"])
        if "options" in changes:
            changes["options"] = list(changes["options"])
        return replace(question, **changes)

    @staticmethod
    def _map_choice_question(
        questions: list[QuizQuestion],
        question_id: str,
        transform: Callable[[QuizQuestion], QuizQuestion],
    ) -> list[QuizQuestion]:
        return [
            transform(question) if question.id == question_id and has_options(question) else question
            for question in questions
        ]
