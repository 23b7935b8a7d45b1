from __future__ import annotations

import json

from ecoquest_quiz.core.services.storage import JsonFileStorage


def test_round_trip_and_delete(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    storage = JsonFileStorage(path)

    storage.put("a", "1")
    storage.put("b", "2")
    storage.delete("a")

    assert JsonFileStorage(path).get("b") == "2"
    assert storage.get("a") is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}


def test_missing_file_reads_as_empty(tmp_path):
    assert JsonFileStorage(tmp_path / "none.json").get("a") is None


def test_corrupt_file_reads_as_empty_and_is_replaced(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("[1, 2", encoding="utf-8")
    storage = JsonFileStorage(path)

    assert storage.get("a") is None
    storage.put("a", "1")
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}


def test_non_string_values_are_ignored(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"a": 3}), encoding="utf-8")
    assert JsonFileStorage(path).get("a") is None
