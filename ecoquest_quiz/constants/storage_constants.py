"""Persistence keys and defaults for the local quiz library.

``ECOQUEST_DEMO_MODE`` (``1``/``0``, ``true``/``false``, ``yes``/``no``,
``on``/``off``) and ``ECOQUEST_STORAGE_PATH`` override the defaults below.
"""

import os
from pathlib import Path
from typing import Mapping

QUIZZES_KEY: str = "ecoquest_quizzes"
COURSES_KEY: str = "ecoquest_courses"
CURRENT_USER_KEY: str = "ecoquest_currentUser"

DEMO_MODE_ENV: str = "ECOQUEST_DEMO_MODE"
STORAGE_PATH_ENV: str = "ECOQUEST_STORAGE_PATH"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def env_flag(name: str, default: bool, environ: Mapping[str, str] = os.environ) -> bool:
    """Read a boolean switch; unset or unrecognised values give ``default``."""
    value = environ.get(name, "").strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def env_path(name: str, default: Path, environ: Mapping[str, str] = os.environ) -> Path:
    value = environ.get(name, "").strip()
    return Path(value).expanduser() if value else default


DEFAULT_STORAGE_PATH: Path = env_path(STORAGE_PATH_ENV, Path.home() / ".ecoquest" / "storage.json")
DEMO_MODE: bool = env_flag(DEMO_MODE_ENV, default=True)
DEFAULT_AUTHOR_ID: str = "demo_teacher_1"
