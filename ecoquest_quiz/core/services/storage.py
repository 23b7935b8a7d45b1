"""Key-value storage backends for the quiz library.

The library is kept the way a browser keeps local storage: a flat mapping of
string keys to string values. ``MemoryStorage`` backs tests and throwaway
sessions; ``JsonFileStorage`` keeps the mapping in a single JSON document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal repository interface used by the quiz data store."""

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStorage:
    """Stores every key in one JSON object on disk.

    Writes go to a temporary sibling file that replaces the target, so a
    failed write leaves the previous document intact. ``OSError`` from the
    file system propagates to the caller.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, key: str) -> str | None:
        value = self._read_document().get(key)
        return value if isinstance(value, str) else None

    def put(self, key: str, value: str) -> None:
        document = self._read_document()
        document[key] = value
        self._write_document(document)

    def delete(self, key: str) -> None:
        document = self._read_document()
        if document.pop(key, None) is not None:
            self._write_document(document)

    def _read_document(self) -> dict[str, object]:
        if not self._file_path.exists():
            return {}
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Storage file %s is unreadable; treating it as empty", self._file_path)
            return {}
        if not isinstance(document, dict):
            logger.warning("Storage file %s does not hold a JSON object; ignoring it", self._file_path)
            return {}
        return document

    def _write_document(self, document: dict[str, object]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        temp_path.write_text(json.dumps(document), encoding="utf-8")
        temp_path.replace(self._file_path)
