"""Interfaces of the user-facing surfaces the quiz core calls into.

The Qt implementations live in ``ecoquest_quiz.ui.dialog_helpers``; the
headless ones below are used by the API server and by tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget success/failure feedback."""

    def notify(self, title: str, message: str, *, error: bool = False) -> None: ...


class Confirmer(Protocol):
    """Yes/no question asked before a destructive action."""

    def confirm(self, title: str, message: str) -> bool: ...


class QuizFileDialogs(Protocol):
    """File pickers used by export and import; ``None`` means cancelled."""

    def choose_export_path(self, suggested_name: str) -> Path | None: ...

    def choose_import_path(self) -> Path | None: ...


class LoggingNotifier:
    """Sends notifications to the application log."""

    def notify(self, title: str, message: str, *, error: bool = False) -> None:
        logger.log(logging.ERROR if error else logging.INFO, "%s: %s", title, message)


class StaticConfirmer:
    """Answers every confirmation with the same value."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def confirm(self, title: str, message: str) -> bool:
        logger.debug("Auto-answering %r with %s", title, self.answer)
        return self.answer
