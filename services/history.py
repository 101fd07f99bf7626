"""
Local edit history.

An ordered, size-bounded log of edit attempts kept in a key-value store,
most recent first. The log is best-effort: storage failures are logged and
swallowed, and the read-then-write in append() is not atomic, so two
concurrent writers can lose an entry.
"""

from __future__ import annotations

import json
import logging
import os
import random
import string
import time
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from schemas import DEFAULT_HISTORY_PATH, HISTORY_KEY, MAX_HISTORY_ENTRIES
from schemas.edits import EditMode, EditStatus, HistoryEntry

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(list[HistoryEntry])
_ID_ALPHABET = string.ascii_lowercase + string.digits


# =============================================================================
# Key-Value Stores
# =============================================================================


class KeyValueStore(Protocol):
    """Minimal string key-value store backing the history."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    """Dict-backed store; contents are lost with the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Store persisted as a single JSON object in a local file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        """Read the file; a damaged or non-object file reads as empty."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as e:
            logger.warning("Discarding unreadable history file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding history file %s: not a JSON object", self.path)
            return {}
        return data

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        if not self.path.exists():
            return
        data = self._load()
        data.pop(key, None)
        self._save(data)


# =============================================================================
# Edit History
# =============================================================================


def new_entry_id(now_ms: int | None = None) -> str:
    """Return an id of the form '<epoch ms>-<9 random base36 chars>'."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{now_ms}-{suffix}"


class EditHistory:
    """Capped, most-recent-first log of edit attempts."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = HISTORY_KEY,
        max_entries: int = MAX_HISTORY_ENTRIES,
    ) -> None:
        self._store = store
        self._key = key
        self._max_entries = max_entries

    def read_all(self) -> list[HistoryEntry]:
        """Return all entries, most recent first."""
        try:
            raw = self._store.get(self._key)
            if raw:
                return _ENTRIES.validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Failed to read edit history: %s", e)
        return []

    def append(self, entry: HistoryEntry) -> None:
        """Prepend an entry, dropping the oldest beyond the cap."""
        try:
            history = [entry, *self.read_all()][: self._max_entries]
            self._store.set(self._key, _ENTRIES.dump_json(history, exclude_none=True).decode())
        except (OSError, ValueError) as e:
            logger.error("Failed to save edit history: %s", e)

    def add(
        self,
        type: EditMode,
        prompt: str,
        status: EditStatus,
        error: str | None = None,
        image_url: str | None = None,
    ) -> HistoryEntry:
        """Create a new entry stamped with the current time and append it."""
        now_ms = int(time.time() * 1000)
        entry = HistoryEntry(
            id=new_entry_id(now_ms),
            timestamp=now_ms,
            type=type,
            prompt=prompt,
            status=status,
            error=error,
            imageUrl=image_url,
        )
        self.append(entry)
        return entry

    def clear(self) -> None:
        """Remove every entry."""
        try:
            self._store.remove(self._key)
        except (OSError, ValueError) as e:
            logger.error("Failed to clear edit history: %s", e)


def default_history() -> EditHistory:
    """Edit history backed by the file at EDIT_HISTORY_PATH."""
    path = os.getenv("EDIT_HISTORY_PATH", DEFAULT_HISTORY_PATH)
    return EditHistory(JsonFileStore(path))
