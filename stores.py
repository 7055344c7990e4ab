"""
Persistent client state: saved profiles, the current plan and plan history.

Every store reads its whole collection from LocalStorage, changes it in
memory and writes it back. Storage and JSON failures are logged and the
store carries on as if the record were absent, so the app keeps working
with in-memory state for the rest of the session.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from storage import (
    ACTIVE_PROFILE_KEY,
    HISTORY_KEY,
    PROFILES_KEY,
    WORKOUT_PLAN_KEY,
    WORKOUT_PLAN_TIMESTAMP_KEY,
    LocalStorage,
    default_storage,
    new_id,
    now_iso,
)

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 20


def _load_list(storage: LocalStorage, key: str) -> List[Dict[str, Any]]:
    try:
        raw = storage.get_item(key)
        if not raw:
            return []
        data = json.loads(raw)
    except (OSError, ValueError):
        logger.exception("Error reading %s from local storage", key)
        return []
    if not isinstance(data, list):
        logger.error("Stored %s is not a list, ignoring it", key)
        return []
    return [item for item in data if isinstance(item, dict)]


def _save_list(storage: LocalStorage, key: str, items: List[Dict[str, Any]]) -> bool:
    try:
        storage.set_item(key, json.dumps(items, ensure_ascii=False))
    except (OSError, ValueError, TypeError):
        logger.exception("Error writing %s to local storage", key)
        return False
    return True


class ProfileStore:
    """Named user profiles plus the active-profile pointer."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def get_all(self) -> List[Dict[str, Any]]:
        return _load_list(self.storage, PROFILES_KEY)

    def get_by_id(self, profile_id: str) -> Optional[Dict[str, Any]]:
        for p in self.get_all():
            if p.get("id") == profile_id:
                return p
        return None

    def save(
        self,
        name: str,
        profile: Dict[str, Any],
        profile_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Insert or update a profile by id.

        Name uniqueness is not enforced here; callers check name_exists first.
        """
        profiles = self.get_all()
        now = now_iso()

        if profile_id:
            for i, existing in enumerate(profiles):
                if existing.get("id") == profile_id:
                    updated = dict(existing)
                    updated.update({"name": name, "profile": profile, "updatedAt": now})
                    profiles[i] = updated
                    _save_list(self.storage, PROFILES_KEY, profiles)
                    return updated

        record = {
            "id": profile_id or new_id(),
            "name": name,
            "profile": profile,
            "createdAt": now,
            "updatedAt": now,
        }
        profiles.append(record)
        _save_list(self.storage, PROFILES_KEY, profiles)
        return record

    def delete(self, profile_id: str) -> bool:
        profiles = self.get_all()
        remaining = [p for p in profiles if p.get("id") != profile_id]
        if len(remaining) == len(profiles):
            return False

        _save_list(self.storage, PROFILES_KEY, remaining)
        if self.get_active_profile_id() == profile_id:
            self.set_active_profile_id(None)
        return True

    def get_active_profile_id(self) -> Optional[str]:
        try:
            return self.storage.get_item(ACTIVE_PROFILE_KEY) or None
        except OSError:
            logger.exception("Error reading active profile id")
            return None

    def set_active_profile_id(self, profile_id: Optional[str]) -> None:
        try:
            if profile_id:
                self.storage.set_item(ACTIVE_PROFILE_KEY, profile_id)
            else:
                self.storage.remove_item(ACTIVE_PROFILE_KEY)
        except OSError:
            logger.exception("Error writing active profile id")

    def get_active_profile(self) -> Optional[Dict[str, Any]]:
        profile_id = self.get_active_profile_id()
        return self.get_by_id(profile_id) if profile_id else None

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        wanted = (name or "").lower()
        return any(
            str(p.get("name", "")).lower() == wanted and p.get("id") != exclude_id
            for p in self.get_all()
        )


class PlanStore:
    """Single slot for the current plan and the time it was stored."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def save(self, plan: Optional[Dict[str, Any]]) -> Optional[str]:
        """
        Store the plan with a fresh timestamp and return that timestamp.

        The timestamp is returned even when the write fails, so callers can
        keep showing the plan they hold in memory with its own time.
        """
        if plan is None:
            self.clear()
            return None
        timestamp = now_iso()
        try:
            self.storage.set_items(
                {
                    WORKOUT_PLAN_KEY: json.dumps(plan, ensure_ascii=False),
                    WORKOUT_PLAN_TIMESTAMP_KEY: timestamp,
                }
            )
        except (OSError, ValueError, TypeError):
            logger.exception("Error saving workout plan to local storage")
        return timestamp

    def get(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self.storage.get_item(WORKOUT_PLAN_KEY)
            if not raw:
                return None
            plan = json.loads(raw)
        except (OSError, ValueError):
            logger.exception("Error reading workout plan from local storage")
            return None
        return plan if isinstance(plan, dict) else None

    def get_timestamp(self) -> Optional[str]:
        try:
            return self.storage.get_item(WORKOUT_PLAN_TIMESTAMP_KEY)
        except OSError:
            logger.exception("Error reading workout plan timestamp")
            return None

    def clear(self) -> None:
        try:
            self.storage.remove_items(WORKOUT_PLAN_KEY, WORKOUT_PLAN_TIMESTAMP_KEY)
        except OSError:
            logger.exception("Error clearing workout plan")

    def exists(self) -> bool:
        try:
            return self.storage.get_item(WORKOUT_PLAN_KEY) is not None
        except OSError:
            return False


class HistoryStore:
    """Most-recent-first log of generated and modified plans, capped in size."""

    def __init__(self, storage: LocalStorage, max_items: int = MAX_HISTORY_ITEMS):
        self.storage = storage
        self.max_items = max_items

    def get_all(self) -> List[Dict[str, Any]]:
        return _load_list(self.storage, HISTORY_KEY)

    def save(self, plan: Dict[str, Any], name: Optional[str] = None) -> Dict[str, Any]:
        item: Dict[str, Any] = {"id": new_id(), "plan": plan, "createdAt": now_iso()}
        if name:
            item["name"] = name

        history = [item] + self.get_all()
        _save_list(self.storage, HISTORY_KEY, history[: self.max_items])
        return item

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        for item in self.get_all():
            if item.get("id") == item_id:
                return item
        return None

    def delete(self, item_id: str) -> None:
        history = self.get_all()
        _save_list(self.storage, HISTORY_KEY, [i for i in history if i.get("id") != item_id])

    def update_name(self, item_id: str, name: str) -> None:
        history = self.get_all()
        updated = [dict(i, name=name) if i.get("id") == item_id else i for i in history]
        _save_list(self.storage, HISTORY_KEY, updated)

    def clear(self) -> None:
        try:
            self.storage.remove_item(HISTORY_KEY)
        except OSError:
            logger.exception("Error clearing workout history")


class AppStores:
    """
    Top-level holder of the three stores.

    UI actions look stores up here at call time, so pointing the app at a
    different storage (another data dir, a test fixture) is one call.
    """

    def __init__(self, storage: LocalStorage):
        self.use_storage(storage)

    def use_storage(self, storage: LocalStorage) -> None:
        self.storage = storage
        self.profiles = ProfileStore(storage)
        self.plan = PlanStore(storage)
        self.history = HistoryStore(storage)


app_stores = AppStores(default_storage())
