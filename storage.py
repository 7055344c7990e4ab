import json
import logging
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from llm_config import DATA_DIR, LOCAL_STORAGE_QUOTA_BYTES

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "local_storage.json"

# Keys of the persisted records
PROFILES_KEY = "workout_profiles"
ACTIVE_PROFILE_KEY = "active_workout_profile"
WORKOUT_PLAN_KEY = "current_workout_plan"
WORKOUT_PLAN_TIMESTAMP_KEY = "workout_plan_timestamp"
HISTORY_KEY = "workout_history"


class StorageError(OSError):
    """Raised when the local storage document cannot be written."""


class StorageQuotaError(StorageError):
    """Raised when a write would grow the document past its quota."""


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid.uuid4())


def atomic_write_json(path: str | Path, obj) -> None:
    """Write obj as JSON to path via a temp file in the same directory."""
    p = Path(path)
    parent = p.parent
    parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(prefix=".tmp_storage_", dir=str(parent), text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
        os.replace(tmp, str(p))
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


class LocalStorage:
    """
    Synchronous string key/value store backed by one JSON document.

    Values are strings (callers serialise their own JSON), every call re-reads
    the file, and every write replaces the whole document atomically.
    """

    def __init__(self, path: str | Path, quota_bytes: int = LOCAL_STORAGE_QUOTA_BYTES):
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception("Could not read local storage at %s, treating it as empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.error("Local storage at %s is not a JSON object, treating it as empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        size = len(json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8"))
        if size > self.quota_bytes:
            raise StorageQuotaError(
                f"Local storage quota exceeded ({size} > {self.quota_bytes} bytes)"
            )
        try:
            atomic_write_json(self.path, data)
        except OSError as e:
            raise StorageError(f"Could not write local storage at {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: Dict[str, str]) -> None:
        """Set several keys in a single write."""
        data = self._read()
        data.update(items)
        self._write(data)

    def remove_item(self, key: str) -> None:
        self.remove_items(key)

    def remove_items(self, *keys: str) -> None:
        data = self._read()
        if not any(k in data for k in keys):
            return
        for k in keys:
            data.pop(k, None)
        self._write(data)


def default_storage(data_dir: str | Path = DATA_DIR) -> LocalStorage:
    """Return the storage used by the app for the given data directory."""
    return LocalStorage(Path(data_dir) / STORAGE_FILENAME)
