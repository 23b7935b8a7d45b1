"""Writes exported quizzes to the file chosen by the user."""

from __future__ import annotations

import logging
from pathlib import Path

from ecoquest_quiz.core.services.quiz_store import QuizExport

logger = logging.getLogger(__name__)


def save_quiz_to_file(file_path: Path, export: QuizExport) -> Path:
    """Persist an exported quiz as JSON and return the resolved path.

    A path without a suffix gets ``.json`` appended.
    """
    file_path = file_path.resolve()
    if not file_path.suffix:
        file_path = file_path.with_suffix(".json")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(export.content + "\n", encoding="utf-8")
    logger.info("Exported quiz to %s", file_path)
    return file_path
