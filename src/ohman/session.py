"""Session history persisted as a JSON file."""

import json
import logging
import os
import threading
import time
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ohman.config import config_dir
from ohman.errors import SessionError
from ohman.models import SessionEntry

log = logging.getLogger(__name__)

HISTORY_FILE_NAME = "history.json"
MAX_ENTRIES = 100

_ENTRIES_ADAPTER = TypeAdapter(list[SessionEntry])


def _generate_id() -> str:
    return str(time.time_ns())


class SessionStore:
    """Keep the last MAX_ENTRIES answered exchanges on disk."""

    def __init__(self, directory: str | os.PathLike[str] | None = None) -> None:
        self.directory = Path(directory) if directory is not None else config_dir()
        self.path = self.directory / HISTORY_FILE_NAME
        self._lock = threading.Lock()
        self._entries: list[SessionEntry] = []
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SessionError(f"failed to create config directory: {e}") from e
        self._load()

    def _load(self) -> None:
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return
        except OSError as e:
            raise SessionError(f"failed to read {self.path}: {e}") from e
        if not data.strip():
            return
        try:
            self._entries = _ENTRIES_ADAPTER.validate_json(data)
        except ValidationError as e:
            raise SessionError(f"failed to parse {self.path}: {e}") from e
        log.debug("loaded %d session entries from %s", len(self._entries), self.path)

    def _save(self) -> None:
        payload = [entry.model_dump(mode="json") for entry in self._entries]
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise SessionError(f"failed to write {self.path}: {e}") from e

    def add(self, entry: SessionEntry) -> SessionEntry:
        """Append an entry (filling id and timestamp) and persist the history."""
        with self._lock:
            update = {}
            if not entry.id:
                update["id"] = _generate_id()
            if entry.timestamp is None:
                update["timestamp"] = datetime.now().astimezone()
            if update:
                entry = entry.model_copy(update=update)
            self._entries.append(entry)
            if len(self._entries) > MAX_ENTRIES:
                self._entries = self._entries[-MAX_ENTRIES:]
            self._save()
            return entry

    def all(self) -> list[SessionEntry]:
        with self._lock:
            return list(self._entries)

    def last(self, n: int) -> list[SessionEntry]:
        """Return the last n entries (all of them when n <= 0 or too large)."""
        with self._lock:
            if n <= 0 or n > len(self._entries):
                n = len(self._entries)
            return self._entries[len(self._entries) - n :]

    def clear(self) -> None:
        with self._lock:
            self._entries = []
            self._save()

    def count(self) -> int:
        with self._lock:
            return len(self._entries)
