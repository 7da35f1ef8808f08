"""
Persistence of in-progress answers.

The engine never does I/O itself. PersistentSurvey listens to an engine and
writes a snapshot to a key-value store after every successful change; on
start-up it restores the last snapshot. Storage is best-effort: a failed save
is logged and the in-memory engine stays authoritative, and a snapshot that
cannot be restored is discarded so the session starts fresh.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from selfassess.engine import SurveyEngine
from selfassess.errors import InvalidSnapshot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "lebanese-assessment-progress"

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def is_valid_storage_key(key) -> bool:
    """True if `key` is safe to use as a file name in JsonFileStore."""
    return isinstance(key, str) and _KEY_RE.match(key) is not None


class SnapshotStore(Protocol):
    """Key-value store holding plain snapshot dicts."""

    def save(self, key: str, snapshot: Dict[str, Any]) -> None: ...

    def load(self, key: str) -> Optional[Dict[str, Any]]: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store. Snapshots are copied through JSON so callers never share state."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def save(self, key: str, snapshot: Dict[str, Any]) -> None:
        self._data[key] = json.dumps(snapshot)

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore:
    """
    One JSON file per key inside a directory.

    Writes go to a temporary file first and are then moved into place, so a
    crash mid-write never leaves a truncated snapshot behind.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not is_valid_storage_key(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def save(self, key: str, snapshot: Dict[str, Any]) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(snapshot, sort_keys=True), encoding="utf-8")
        os.replace(tmp, path)

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise InvalidSnapshot(f"Corrupt snapshot file {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()


class PersistentSurvey:
    """
    Binds an engine to a store.

    Saves after every "answer", "navigate" and "reset" event. Restores are
    not echoed back to the store.

    Properties:
        engine: The engine being persisted
        store: Any SnapshotStore
        key: Storage key for this survey
        last_error: The most recent save failure, or None
    """

    SAVE_EVENTS = ("answer", "navigate", "reset")

    def __init__(self, engine: SurveyEngine, store: SnapshotStore, key: str = DEFAULT_STORAGE_KEY,
                 autosave: bool = True):
        self.engine = engine
        self.store = store
        self.key = key
        self.last_error: Optional[Exception] = None
        if autosave:
            engine.add_listener(self._on_event)

    def _on_event(self, event: str, engine: SurveyEngine) -> None:
        if event in self.SAVE_EVENTS:
            self.save()

    def save(self) -> bool:
        """
        Write the current snapshot. Returns False if the store failed.

        Any store error stops here: the engine change that triggered the save
        has already happened and must not be reported as failed.
        """
        try:
            self.store.save(self.key, self.engine.serialize())
        except Exception as e:
            self.last_error = e
            logger.warning("Could not save survey progress under %r: %s", self.key, e)
            return False
        self.last_error = None
        return True

    def load(self) -> bool:
        """
        Restore the saved snapshot, if any.

        Returns:
            True if a snapshot was restored, False if none was saved or the
            saved one was discarded
        """
        try:
            snapshot = self.store.load(self.key)
        except (OSError, ValueError, InvalidSnapshot) as e:
            logger.warning("Could not read saved progress under %r: %s", self.key, e)
            self._discard()
            return False

        if snapshot is None:
            return False

        try:
            self.engine.restore(snapshot)
        except InvalidSnapshot as e:
            logger.warning("Discarding malformed saved progress under %r: %s", self.key, e)
            self._discard()
            return False
        return True

    def clear(self) -> None:
        self.store.delete(self.key)

    def _discard(self) -> None:
        try:
            self.store.delete(self.key)
        except (OSError, ValueError) as e:
            logger.warning("Could not delete saved progress under %r: %s", self.key, e)
