"""Three-step quiz builder: info, questions, review.

The builder owns an unsaved :class:`QuizDraft`. Moving forward validates the
current step only; moving back is always allowed. Saving validates the info
and question steps again and writes through the :class:`QuizDataStore`.
Validation errors are keyed so a UI can highlight the offending field or
question: ``title``, ``courseId``, ``questions``, ``question_{i}``,
``question_{i}_options`` and ``question_{i}_correct`` (``i`` is 0-based).
"""

from __future__ import annotations

from dataclasses import replace
from enum import IntEnum
import logging
from typing import Any

from ecoquest_quiz.constants.quiz_constants import DEFAULT_TIME_LIMIT_MINUTES, MIN_OPTIONS
from ecoquest_quiz.core.collaborators import Confirmer, LoggingNotifier, Notifier, StaticConfirmer
from ecoquest_quiz.core.errors import QuizStorageError
from ecoquest_quiz.core.models import (
    QuestionType,
    Quiz,
    QuizDraft,
    QuizQuestion,
    has_options,
    normalize_time_limit,
)
from ecoquest_quiz.core.question_editor import MoveDirection, QuestionEditor
from ecoquest_quiz.core.services.quiz_store import QuizDataStore

logger = logging.getLogger(__name__)

_CHOICE_TYPES = frozenset({QuestionType.MCQ, QuestionType.MULTI})
_INFO_FIELDS = frozenset({"title", "description", "course_id", "status", "time_limit_minutes"})
_FIELD_ERROR_KEYS = {"title": "title", "course_id": "courseId"}


class BuilderStep(IntEnum):
    INFO = 1
    QUESTIONS = 2
    REVIEW = 3


def validate_info(draft: QuizDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not draft.title.strip():
        errors["title"] = "Quiz title is required"
    if not draft.course_id:
        errors["courseId"] = "Please select a course"
    return errors


def validate_questions(questions: list[QuizQuestion]) -> dict[str, str]:
    if not questions:
        return {"questions": "At least one question is required"}

    errors: dict[str, str] = {}
    for index, question in enumerate(questions):
        number = index + 1
        if not question.prompt.strip():
            errors[f"question_{index}"] = f"Question {number} prompt is required"
        if question.type in _CHOICE_TYPES and has_options(question):
            if len(question.options) < MIN_OPTIONS:
                errors[f"question_{index}_options"] = f"Question {number} needs at least 2 options"
            if not any(option.correct for option in question.options):
                errors[f"question_{index}_correct"] = f"Question {number} needs at least one correct answer"
    return errors


class QuizBuilder:
    """Wizard state for creating a new quiz or editing a stored one."""

    def __init__(
        self,
        store: QuizDataStore,
        *,
        editing_quiz: Quiz | None = None,
        notifier: Notifier | None = None,
        confirmer: Confirmer | None = None,
        editor: QuestionEditor | None = None,
    ) -> None:
        self._store = store
        self._editing_quiz = editing_quiz
        self._notifier = notifier or LoggingNotifier()
        self._confirmer = confirmer or StaticConfirmer(True)
        self._editor = editor or QuestionEditor()
        self.errors: dict[str, str] = {}
        self.has_unsaved_changes = False

        if editing_quiz is not None:
            self.draft = QuizDraft(
                title=editing_quiz.title,
                description=editing_quiz.description,
                course_id=editing_quiz.course_id,
                status=editing_quiz.status,
                time_limit_minutes=editing_quiz.time_limit_minutes,
                questions=list(editing_quiz.questions),
            )
            self.step = BuilderStep.QUESTIONS
        else:
            self.draft = QuizDraft(time_limit_minutes=DEFAULT_TIME_LIMIT_MINUTES)
            self.step = BuilderStep.INFO

    @property
    def is_editing(self) -> bool:
        return self._editing_quiz is not None

    @property
    def questions(self) -> list[QuizQuestion]:
        return self.draft.questions

    # --- Navigation ---

    def validate_step(self, step: BuilderStep | int) -> bool:
        step = BuilderStep(step)
        if step is BuilderStep.INFO:
            self.errors = validate_info(self.draft)
        elif step is BuilderStep.QUESTIONS:
            self.errors = validate_questions(self.draft.questions)
        else:
            self.errors = {}
        return not self.errors

    def next_step(self) -> bool:
        """Advance when the current step is valid; returns whether it moved."""
        if not self.validate_step(self.step):
            return False
        if self.step < BuilderStep.REVIEW:
            self.step = BuilderStep(self.step + 1)
        return True

    def previous_step(self) -> None:
        if self.step > BuilderStep.INFO:
            self.step = BuilderStep(self.step - 1)

    # --- Info ---

    def update_info(self, **changes: Any) -> None:
        unknown = set(changes) - _INFO_FIELDS
        if unknown:
            raise ValueError(f"Unknown quiz field(s): {', '.join(sorted(unknown))}")
        if "time_limit_minutes" in changes:
            changes["time_limit_minutes"] = normalize_time_limit(changes["time_limit_minutes"])
        self.draft = replace(self.draft, **changes)
        self.has_unsaved_changes = True
        for name in changes:
            self.errors.pop(_FIELD_ERROR_KEYS.get(name, name), None)

    # --- Questions ---

    def add_question(self) -> str:
        questions, question_id = self._editor.add_question(self.draft.questions)
        self._set_questions(questions)
        return question_id

    def update_question(self, question_id: str, **changes: Any) -> None:
        self._set_questions(self._editor.update_question(self.draft.questions, question_id, **changes))

    def delete_question(self, question_id: str) -> bool:
        """Remove a question after the user confirms; returns whether it was removed."""
        index = next((i for i, q in enumerate(self.draft.questions) if q.id == question_id), -1)
        if index < 0:
            return False
        if not self._confirmer.confirm(
            "Confirm Delete", f"Are you sure you want to delete question {index + 1}?"
        ):
            return False
        self._set_questions(self._editor.delete_question(self.draft.questions, question_id))
        return True

    def duplicate_question(self, question_id: str) -> None:
        self._set_questions(self._editor.duplicate_question(self.draft.questions, question_id))

    def move_question(self, question_id: str, direction: MoveDirection | str) -> None:
        self._set_questions(self._editor.move_question(self.draft.questions, question_id, direction))

    def add_option(self, question_id: str) -> None:
        self._set_questions(self._editor.add_option(self.draft.questions, question_id))

    def update_option(self, question_id: str, option_id: str, **changes: Any) -> None:
        self._set_questions(
            self._editor.update_option(self.draft.questions, question_id, option_id, **changes)
        )

    def delete_option(self, question_id: str, option_id: str) -> None:
        self._set_questions(self._editor.delete_option(self.draft.questions, question_id, option_id))

    def set_correct_option(self, question_id: str, option_id: str) -> None:
        self._set_questions(
            self._editor.set_correct_option(self.draft.questions, question_id, option_id)
        )

    def _set_questions(self, questions: list[QuizQuestion]) -> None:
        if questions != self.draft.questions:
            self.has_unsaved_changes = True
        self.draft = replace(self.draft, questions=questions)

    # --- Save / close ---

    def save(self) -> Quiz | None:
        """Validate everything and persist; returns the stored quiz or ``None``."""
        errors = {**validate_info(self.draft), **validate_questions(self.draft.questions)}
        self.errors = errors
        if errors:
            self._notifier.notify(
                "Validation Error",
                "Please fix all errors before saving:\n" + "\n".join(errors.values()),
                error=True,
            )
            return None

        try:
            if self._editing_quiz is not None:
                saved = self._store.update_quiz(
                    self._editing_quiz.id,
                    title=self.draft.title,
                    description=self.draft.description,
                    course_id=self.draft.course_id,
                    status=self.draft.status,
                    time_limit_minutes=self.draft.time_limit_minutes,
                    questions=self.draft.questions,
                )
                if saved is None:
                    self._notifier.notify("Error", "The quiz no longer exists.", error=True)
                    return None
                self._notifier.notify("Quiz Updated", f'"{saved.title}" has been updated successfully.')
            else:
                saved = self._store.create_quiz(self.draft)
                self._notifier.notify("Quiz Created", f'"{saved.title}" has been created successfully.')
        except QuizStorageError:
            logger.exception("Saving quiz %r failed", self.draft.title)
            self._notifier.notify("Error", "Failed to save quiz. Please try again.", error=True)
            return None

        self._editing_quiz = saved
        self.has_unsaved_changes = False
        return saved

    def close(self) -> bool:
        """Return whether the builder may close, asking first if work would be lost."""
        if not self.has_unsaved_changes:
            return True
        return self._confirmer.confirm(
            "Unsaved Changes", "You have unsaved changes. Are you sure you want to close?"
        )
