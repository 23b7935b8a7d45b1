"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Union

from ecoquest_quiz.constants.quiz_constants import DEFAULT_POINTS, MAX_POINTS, MIN_POINTS


class QuestionType(str, Enum):
    """Discriminator stored under the ``type`` key of a question."""

    MCQ = "mcq"
    MULTI = "multi"
    TRUE_FALSE = "truefalse"
    SHORT = "short"


class QuizStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass(slots=True)
class QuizOption:
    """Selectable answer of a choice question."""

    id: str
    text: str = ""
    correct: bool = False


@dataclass(slots=True)
class _QuestionBase:
    id: str
    prompt: str = ""
    points: int = DEFAULT_POINTS
    explanation: str | None = None


@dataclass(slots=True)
class _ChoiceQuestion(_QuestionBase):
    options: list[QuizOption] = field(default_factory=list)

    def correct_option_ids(self) -> set[str]:
        return {option.id for option in self.options if option.correct}


@dataclass(slots=True)
class McqQuestion(_ChoiceQuestion):
    """Single correct answer among the options."""

    type: ClassVar[QuestionType] = QuestionType.MCQ


@dataclass(slots=True)
class MultiQuestion(_ChoiceQuestion):
    """One or more correct answers; graded with partial credit."""

    type: ClassVar[QuestionType] = QuestionType.MULTI


@dataclass(slots=True)
class TrueFalseQuestion(_ChoiceQuestion):
    """Binary question with the fixed True/False option pair."""

    type: ClassVar[QuestionType] = QuestionType.TRUE_FALSE


@dataclass(slots=True)
class ShortQuestion(_QuestionBase):
    """Free-text question, auto-graded when an expected answer is set."""

    type: ClassVar[QuestionType] = QuestionType.SHORT
    expected_answer: str | None = None


ChoiceQuestion = Union[McqQuestion, MultiQuestion, TrueFalseQuestion]
QuizQuestion = Union[McqQuestion, MultiQuestion, TrueFalseQuestion, ShortQuestion]

QUESTION_CLASSES: dict[QuestionType, type] = {
    QuestionType.MCQ: McqQuestion,
    QuestionType.MULTI: MultiQuestion,
    QuestionType.TRUE_FALSE: TrueFalseQuestion,
    QuestionType.SHORT: ShortQuestion,
}

SINGLE_ANSWER_TYPES = frozenset({QuestionType.MCQ, QuestionType.TRUE_FALSE})


def has_options(question: QuizQuestion) -> bool:
    return isinstance(question, _ChoiceQuestion)


def clamp_points(points: int) -> int:
    return max(MIN_POINTS, min(MAX_POINTS, int(points)))


def normalize_time_limit(minutes: int | None) -> int | None:
    """Return a validated time limit in minutes; ``None`` means untimed."""
    if minutes is None:
        return None
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ValueError("Time limit must be provided as a whole number of minutes.")
    if minutes <= 0:
        raise ValueError("Time limit must be a positive integer.")
    return minutes


@dataclass(slots=True)
class Course:
    """Read-only course reference a quiz belongs to."""

    id: str
    name: str
    code: str


@dataclass(slots=True)
class QuizDraft:
    """Unsaved working copy edited by the quiz builder."""

    title: str = ""
    description: str = ""
    course_id: str = ""
    status: QuizStatus = QuizStatus.DRAFT
    time_limit_minutes: int | None = None
    questions: list[QuizQuestion] = field(default_factory=list)


@dataclass(slots=True)
class Quiz:
    """A stored quiz with its ordered questions."""

    id: str
    title: str
    course_id: str
    teacher_id: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    status: QuizStatus = QuizStatus.DRAFT
    time_limit_minutes: int | None = None
    questions: list[QuizQuestion] = field(default_factory=list)


@dataclass(slots=True)
class Answer:
    """A learner's response to one question; never persisted."""

    question_id: str
    selected_options: tuple[str, ...] = ()
    text_answer: str | None = None
