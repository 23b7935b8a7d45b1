"""Persisted collection of quizzes and courses for the local library."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
import json
import logging
import re
from threading import RLock
from typing import Any, Callable, Mapping

from ecoquest_quiz.constants.quiz_constants import COPY_SUFFIX, QUIZ_ID_PREFIX
from ecoquest_quiz.constants.storage_constants import (
    COURSES_KEY,
    DEFAULT_AUTHOR_ID,
    QUIZZES_KEY,
)
from ecoquest_quiz.core.errors import QuizImportError, QuizStorageError
from ecoquest_quiz.core.id_generator import generate_id
from ecoquest_quiz.core.models import (
    Course,
    Quiz,
    QuizDraft,
    QuizStatus,
    clamp_points,
    normalize_time_limit,
)
from ecoquest_quiz.core.question_editor import IdFactory, QuestionEditor
from ecoquest_quiz.core.quiz_codec import (
    course_from_dict,
    course_to_dict,
    question_from_dict,
    quiz_from_dict,
    quiz_to_dict,
)
from ecoquest_quiz.core.services.seed_data import sample_courses, sample_quizzes
from ecoquest_quiz.core.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

QuizListener = Callable[[list[Quiz]], None]

_UPDATABLE_FIELDS = frozenset(f.name for f in fields(Quiz)) - {"id", "created_at", "updated_at"}
_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class QuizExport:
    """A serialized quiz ready to be written to the file the user picks."""

    filename: str
    content: str


def export_filename(title: str) -> str:
    return f"{_FILENAME_UNSAFE.sub('_', title).lower()}.json"


class QuizDataStore:
    """CRUD, duplication and import/export over the persisted quiz library.

    The store loads lazily on first access. Each mutating operation writes the
    whole quiz collection back to storage and then notifies subscribers with
    the new list. When the write fails the in-memory collection keeps its
    previous value and ``QuizStorageError`` is raised.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        demo_mode: bool = False,
        author_id: str = DEFAULT_AUTHOR_ID,
        id_factory: IdFactory = generate_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._storage = storage
        self._demo_mode = demo_mode
        self._author_id = author_id
        self._new_id = id_factory
        self._clock = clock
        self._editor = QuestionEditor(id_factory)
        self._lock = RLock()
        self._loaded = False
        self._quizzes: list[Quiz] = []
        self._courses: list[Course] = []
        self._listeners: list[QuizListener] = []

    # --- Loading ---

    def load(self) -> None:
        """(Re)read both collections from storage, seeding defaults as needed."""
        with self._lock:
            self._courses = self._load_courses()
            self._quizzes = self._load_quizzes()
            self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _load_courses(self) -> list[Course]:
        raw = self._storage.get(COURSES_KEY)
        if raw is not None:
            try:
                return [course_from_dict(item) for item in _json_list(raw)]
            except (ValueError, TypeError, KeyError, AttributeError):
                logger.warning("Stored courses are corrupted; reseeding the sample courses")
        courses = sample_courses()
        self._seed(COURSES_KEY, json.dumps([course_to_dict(c) for c in courses]))
        return courses

    def _load_quizzes(self) -> list[Quiz]:
        raw = self._storage.get(QUIZZES_KEY)
        if raw is not None:
            try:
                return [quiz_from_dict(item) for item in _json_list(raw)]
            except (ValueError, TypeError, KeyError, AttributeError):
                logger.warning("Stored quizzes are corrupted; falling back to defaults")
        if not self._demo_mode:
            return []
        quizzes = sample_quizzes()
        self._seed(QUIZZES_KEY, json.dumps([quiz_to_dict(q) for q in quizzes]))
        return quizzes

    def _seed(self, key: str, value: str) -> None:
        try:
            self._storage.put(key, value)
        except OSError:
            logger.exception("Could not persist seed data under %s", key)

    # --- Reads ---

    @property
    def quizzes(self) -> list[Quiz]:
        with self._lock:
            self._ensure_loaded()
            return list(self._quizzes)

    @property
    def courses(self) -> list[Course]:
        with self._lock:
            self._ensure_loaded()
            return list(self._courses)

    def get_quiz(self, quiz_id: str) -> Quiz | None:
        with self._lock:
            self._ensure_loaded()
            return next((quiz for quiz in self._quizzes if quiz.id == quiz_id), None)

    def get_course(self, course_id: str) -> Course | None:
        with self._lock:
            self._ensure_loaded()
            return next((course for course in self._courses if course.id == course_id), None)

    # --- Mutations ---

    def create_quiz(self, draft: QuizDraft, teacher_id: str | None = None) -> Quiz:
        now = self._clock()
        quiz = Quiz(
            id=self._new_id(QUIZ_ID_PREFIX),
            title=draft.title,
            description=draft.description,
            course_id=draft.course_id,
            teacher_id=teacher_id or self._author_id,
            status=draft.status,
            time_limit_minutes=draft.time_limit_minutes,
            questions=list(draft.questions),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._ensure_loaded()
            self._commit([*self._quizzes, quiz])
        logger.info("Created quiz %s (%s)", quiz.id, quiz.title)
        return quiz

    def update_quiz(self, quiz_id: str, **changes: Any) -> Quiz | None:
        """Merge ``changes`` into a quiz and bump its ``updated_at``."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Quizzes have no updatable field(s): {', '.join(sorted(unknown))}")
        if "status" in changes:
            changes["status"] = QuizStatus(changes["status"])
        if "questions" in changes:
            changes["questions"] = list(changes["questions"])

        with self._lock:
            self._ensure_loaded()
            current = self.get_quiz(quiz_id)
            if current is None:
                return None
            updated = replace(current, **changes, updated_at=self._clock())
            self._commit([updated if quiz.id == quiz_id else quiz for quiz in self._quizzes])
            return updated

    def delete_quiz(self, quiz_id: str) -> None:
        with self._lock:
            self._ensure_loaded()
            if self.get_quiz(quiz_id) is None:
                return
            self._commit([quiz for quiz in self._quizzes if quiz.id != quiz_id])
        logger.info("Deleted quiz %s", quiz_id)

    def duplicate_quiz(self, quiz_id: str) -> Quiz | None:
        """Append a draft copy of a quiz with every nested id regenerated."""
        with self._lock:
            self._ensure_loaded()
            original = self.get_quiz(quiz_id)
            if original is None:
                return None
            copy = self._with_fresh_identity(
                original, title=f"{original.title}{COPY_SUFFIX}", teacher_id=original.teacher_id
            )
            self._commit([*self._quizzes, copy])
            return copy

    def export_quiz(self, quiz_id: str) -> QuizExport | None:
        quiz = self.get_quiz(quiz_id)
        if quiz is None:
            return None
        return QuizExport(
            filename=export_filename(quiz.title),
            content=json.dumps(quiz_to_dict(quiz), indent=2, ensure_ascii=False),
        )

    def import_quiz(self, data: Mapping[str, Any]) -> Quiz:
        """Add a quiz from exported data as a new draft owned by the current author.

        Question points are clamped to the editor range. Raises
        ``QuizImportError`` when ``title`` or the ``questions`` list is missing,
        when the time limit is not a positive integer, or when a question
        cannot be understood.
        """
        if (
            not isinstance(data, Mapping)
            or not data.get("title")
            or not isinstance(data.get("questions"), list)
        ):
            raise QuizImportError("Invalid quiz format")
        try:
            questions = [
                replace(question, points=clamp_points(question.points))
                for question in (question_from_dict(item) for item in data["questions"])
            ]
            source = Quiz(
                id="",
                title=str(data["title"]),
                description=str(data.get("description", "")),
                course_id=str(data.get("courseId", "")),
                teacher_id=self._author_id,
                time_limit_minutes=normalize_time_limit(data.get("timeLimitMinutes")),
                questions=questions,
                created_at=self._clock(),
                updated_at=self._clock(),
            )
        except (ValueError, TypeError, AttributeError) as exc:
            raise QuizImportError("Invalid quiz format") from exc

        imported = self._with_fresh_identity(source, teacher_id=self._author_id)
        with self._lock:
            self._ensure_loaded()
            self._commit([*self._quizzes, imported])
        logger.info("Imported quiz %s (%s)", imported.id, imported.title)
        return imported

    # --- Change notification ---

    def subscribe(self, listener: QuizListener) -> Callable[[], None]:
        """Register a listener for collection changes; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # --- Helpers ---

    def _with_fresh_identity(self, quiz: Quiz, **overrides: Any) -> Quiz:
        now = self._clock()
        return replace(
            quiz,
            id=self._new_id(QUIZ_ID_PREFIX),
            status=QuizStatus.DRAFT,
            created_at=now,
            updated_at=now,
            questions=[self._editor.clone_question(question) for question in quiz.questions],
            **overrides,
        )

    def _commit(self, quizzes: list[Quiz]) -> None:
        document = json.dumps([quiz_to_dict(quiz) for quiz in quizzes])
        try:
            self._storage.put(QUIZZES_KEY, document)
        except OSError as exc:
            logger.error("Error saving quizzes: %s", exc)
            raise QuizStorageError("Failed to save quiz data") from exc
        self._quizzes = quizzes
        self._notify(list(quizzes))

    def _notify(self, quizzes: list[Quiz]) -> None:
        for listener in list(self._listeners):
            try:
                listener(quizzes)
            except Exception:
                logger.exception("Quiz change listener %r failed", listener)


def _json_list(raw: str) -> list[Any]:
    value = json.loads(raw)
    if not isinstance(value, list):
        raise TypeError("Expected a JSON array.")
    return value
