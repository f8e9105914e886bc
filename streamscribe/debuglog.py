"""Append-only JSON-lines record of what the client transcribed and typed.

One object per line, synced to disk after every write so the record survives
a crash mid-session. The file is rotated to ``<name>.1`` once it reaches the
configured size; only one rotated file is kept.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import IO, Any, Dict, Optional, Union

DEFAULT_MAX_SIZE = 8 * 1024 * 1024


class EntryType(str, Enum):
    CHUNK = "chunk"
    COMPLETE = "complete"
    INSERTED = "inserted"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TranscriptLog:
    """Debug log of transcription chunks, completed sessions and insertions.

    Args:
        path: Log file location. ``~`` is expanded and missing parent
            directories are created. An empty path disables logging: every
            method becomes a no-op. Writes after ``close`` are no-ops too.
        max_size: Size in bytes at which the file is rotated.

    Raises:
        OSError: If the directory or file cannot be created.
    """

    def __init__(self, path: Union[str, Path, None], max_size: int = DEFAULT_MAX_SIZE):
        self._lock = threading.Lock()
        self._chunk_id = 0
        self._max_size = max_size if max_size > 0 else DEFAULT_MAX_SIZE
        self._file: Optional[IO[str]] = None
        self.path: Optional[Path] = None

        if not path:
            return

        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._open()
        try:
            self._check_rotation()
        except OSError:
            self._file.close()
            raise

    @property
    def disabled(self) -> bool:
        return self.path is None

    @property
    def rotated_path(self) -> Optional[Path]:
        if self.path is None:
            return None
        return self.path.with_name(self.path.name + ".1")

    def _open(self) -> IO[str]:
        return open(self.path, "a", encoding="utf-8")

    def log_chunk(self, text: str) -> None:
        """Record one transcribed chunk; chunk ids start at 1."""
        if self.disabled:
            return
        with self._lock:
            self._chunk_id += 1
            self._write(
                {"type": EntryType.CHUNK.value, "text": text, "chunk_id": self._chunk_id}
            )

    def log_complete(self, full_text: str, duration_seconds: float) -> None:
        """Record the full text of a finished session."""
        if self.disabled:
            return
        with self._lock:
            self._write(
                {
                    "type": EntryType.COMPLETE.value,
                    "full_text": full_text,
                    "duration_seconds": duration_seconds,
                }
            )

    def log_inserted(self, location: str, length: int) -> None:
        """Record that *length* characters were typed into *location*."""
        if self.disabled:
            return
        with self._lock:
            self._write(
                {"type": EntryType.INSERTED.value, "location": location, "length": length}
            )

    def _write(self, fields: Dict[str, Any]) -> None:
        if self._file.closed:
            return
        entry: Dict[str, Any] = {"timestamp": _timestamp()}
        # zero values are left out of the record
        entry.update((k, v) for k, v in fields.items() if v)
        self._file.write(json.dumps(entry) + "\n")
        self._file.flush()
        os.fsync(self._file.fileno())
        self._check_rotation()

    def _check_rotation(self) -> None:
        if os.fstat(self._file.fileno()).st_size < self._max_size:
            return
        self._file.close()
        os.replace(self.path, self.rotated_path)
        self._file = self._open()

    def close(self) -> None:
        if self.disabled:
            return
        with self._lock:
            if not self._file.closed:
                self._file.close()
