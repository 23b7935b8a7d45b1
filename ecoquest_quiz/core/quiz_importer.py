"""Reads quiz files produced by the exporter (or written by hand).

File format: a single JSON object with at least ``title`` (string) and
``questions`` (array). Everything else is optional; ids present in the file
are ignored because the store regenerates them on import:

    {
      "title": "Climate Change Basics",
      "courseId": "course_eco_101",
      "questions": [
        {"type": "short", "prompt": "Capital of France?", "expectedAnswer": "Paris", "points": 5}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ecoquest_quiz.core.errors import QuizImportError


def load_quiz_from_file(file_path: Path) -> dict[str, Any]:
    """Return the raw quiz object stored in ``file_path``."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuizImportError(f"Could not read quiz file: {exc}") from exc
    return parse_quiz_document(text)


def parse_quiz_document(text: str) -> dict[str, Any]:
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise QuizImportError("Quiz file is not valid JSON.") from exc
    if not isinstance(document, dict):
        raise QuizImportError("Invalid quiz format")
    return document
