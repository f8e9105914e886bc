"""Transcript debug log (JSON lines with size-based rotation)."""

from __future__ import annotations

import json

import pytest

from streamscribe.debuglog import TranscriptLog


def _entries(path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines()]


@pytest.fixture
def transcript(tmp_path):
    log = TranscriptLog(tmp_path / "debug.log")
    yield log
    log.close()


def test_empty_path_disables_logging(tmp_path) -> None:
    log = TranscriptLog("")
    assert log.disabled
    log.log_chunk("ignored")
    log.log_complete("ignored", 1.0)
    log.log_inserted("Terminal", 7)
    log.close()
    assert list(tmp_path.iterdir()) == []


def test_chunks_are_numbered_from_one(transcript) -> None:
    transcript.log_chunk("hello")
    transcript.log_chunk("world")

    first, second = _entries(transcript.path)
    assert first["type"] == "chunk"
    assert first["text"] == "hello"
    assert first["chunk_id"] == 1
    assert second["chunk_id"] == 2
    assert first["timestamp"].endswith("Z")


def test_complete_entry(transcript) -> None:
    transcript.log_complete("hello world", 2.5)

    (entry,) = _entries(transcript.path)
    assert entry["type"] == "complete"
    assert entry["full_text"] == "hello world"
    assert entry["duration_seconds"] == 2.5
    assert "text" not in entry


def test_inserted_entry_omits_zero_fields(transcript) -> None:
    transcript.log_inserted("Slack", 11)
    transcript.log_inserted("", 0)

    inserted, empty = _entries(transcript.path)
    assert inserted == {
        "timestamp": inserted["timestamp"],
        "type": "inserted",
        "location": "Slack",
        "length": 11,
    }
    assert set(empty) == {"timestamp", "type"}


def test_appends_to_existing_file(tmp_path) -> None:
    path = tmp_path / "debug.log"
    path.write_text('{"type": "chunk", "text": "earlier"}\n')

    log = TranscriptLog(path)
    log.log_chunk("later")
    log.close()

    assert [e["text"] for e in _entries(path)] == ["earlier", "later"]


def test_rotates_when_size_reached(tmp_path) -> None:
    path = tmp_path / "debug.log"
    log = TranscriptLog(path, max_size=300)
    for i in range(10):
        log.log_chunk(f"chunk number {i}")
    log.close()

    rotated = tmp_path / "debug.log.1"
    assert log.rotated_path == rotated
    assert rotated.exists()
    assert path.stat().st_size < 300
    for entry in _entries(rotated) + _entries(path):
        assert entry["type"] == "chunk"
    ids = [e["chunk_id"] for e in _entries(path)]
    assert ids == sorted(ids) and ids[-1] == 10


def test_rotation_is_checked_on_open(tmp_path) -> None:
    path = tmp_path / "debug.log"
    path.write_text("x" * 500)
    (tmp_path / "debug.log.1").write_text("older rotation")

    log = TranscriptLog(path, max_size=100)
    log.close()

    assert (tmp_path / "debug.log.1").read_text() == "x" * 500
    assert path.read_text() == ""


def test_home_directory_is_expanded(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    log = TranscriptLog("~/.scribe/logs/debug.log")
    log.log_chunk("hi")
    log.close()

    expected = tmp_path / ".scribe" / "logs" / "debug.log"
    assert log.path == expected
    assert _entries(expected)[0]["text"] == "hi"


def test_writes_after_close_are_ignored(tmp_path) -> None:
    path = tmp_path / "debug.log"
    log = TranscriptLog(path)
    log.log_chunk("kept")
    log.close()

    log.log_chunk("dropped")
    log.log_complete("dropped", 1.0)
    log.log_inserted("Terminal", 7)
    log.close()

    assert [e["text"] for e in _entries(path)] == ["kept"]
