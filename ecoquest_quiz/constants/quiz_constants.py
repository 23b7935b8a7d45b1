"""Quiz authoring limits shared across the editor, builder and store."""

DEFAULT_POINTS: int = 5
MIN_POINTS: int = 1
MAX_POINTS: int = 100
MIN_OPTIONS: int = 2
MAX_OPTIONS: int = 6
DEFAULT_TIME_LIMIT_MINUTES: int = 30
COPY_SUFFIX: str = " (Copy)"
TRUE_FALSE_LABELS: tuple[str, str] = ("True", "False")

QUIZ_ID_PREFIX: str = "quiz"
QUESTION_ID_PREFIX: str = "q"
OPTION_ID_PREFIX: str = "o"
