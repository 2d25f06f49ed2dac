"""Session-scoped TTL cache for wardrobe uploads and generated combinations."""

from __future__ import annotations

import json
import logging
import time
from collections import deque
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)

WARDROBE_KEY = "stylegenie_wardrobe"
COMBINATION_KEY = "stylegenie_combination"
HISTORY_KEY = "stylegenie_history"

WARDROBE_CATEGORIES = ("shirts", "pants", "shoes", "addons")

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_HISTORY_LIMIT = 10


class SessionStore(Protocol):
    """Minimal string key-value store, like the browser's sessionStorage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySessionStore:
    """Keeps entries in a dict for the lifetime of the process."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileSessionStore:
    """Stores each key as a JSON file inside a per-session directory."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._root / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class WardrobeCache:
    """TTL-aware wrapper that stamps every entry as ``{payload, timestamp}``.

    Unparseable entries are treated as misses and left in place until the
    next save overwrites them. Expired entries are evicted on read.
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._ttl = ttl_seconds
        self._history_limit = history_limit
        self._clock = clock

    def _is_expired(self, timestamp: float) -> bool:
        return self._clock() - timestamp > self._ttl

    def _envelope(self, payload: Any) -> dict[str, Any]:
        return {"payload": payload, "timestamp": self._clock()}

    def _read_json(self, key: str) -> Any:
        try:
            raw = self._store.get_item(key)
            if raw is None:
                return None
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt cache entry %s", key)
            return None

    @staticmethod
    def _valid_envelope(entry: Any) -> bool:
        return isinstance(entry, dict) and "payload" in entry and isinstance(entry.get("timestamp"), (int, float))

    def save(self, key: str, payload: Any) -> None:
        """Overwrite ``key`` with ``payload`` stamped with the current time."""

        self._store.set_item(key, json.dumps(self._envelope(payload), ensure_ascii=False))

    def load(self, key: str) -> Any | None:
        """Return the cached payload, or ``None`` if missing, corrupt or expired."""

        entry = self._read_json(key)
        if entry is None:
            return None
        if not self._valid_envelope(entry):
            logger.warning("Ignoring malformed cache envelope %s", key)
            return None
        if self._is_expired(entry["timestamp"]):
            logger.info("Cache entry %s expired, clearing", key)
            self.clear(key)
            return None
        return entry["payload"]

    def clear(self, key: str) -> None:
        self._store.remove_item(key)

    def clear_all(self) -> None:
        for key in (WARDROBE_KEY, COMBINATION_KEY, HISTORY_KEY):
            self.clear(key)
        logger.info("All caches cleared")

    # History

    def _history_entries(self) -> list[dict[str, Any]]:
        entries = self._read_json(HISTORY_KEY)
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if self._valid_envelope(entry)]

    def push_history(self, payload: Any) -> None:
        """Insert ``payload`` as the most recent entry, evicting the oldest past the limit."""

        history: deque[dict[str, Any]] = deque(self._history_entries()[: self._history_limit], maxlen=self._history_limit)
        history.appendleft(self._envelope(payload))
        self._store.set_item(HISTORY_KEY, json.dumps(list(history), ensure_ascii=False))
        logger.info("Added to history, total: %d", len(history))

    def history(self) -> list[Any]:
        """Return unexpired history payloads, most recent first."""

        entries = self._history_entries()
        valid = [entry for entry in entries if not self._is_expired(entry["timestamp"])]
        if len(valid) != len(entries):
            self._store.set_item(HISTORY_KEY, json.dumps(valid, ensure_ascii=False))
        return [entry["payload"] for entry in valid]

    # Wardrobe

    def save_wardrobe(self, categories: Mapping[str, Sequence[str]]) -> None:
        """Cache the uploaded image previews for every wardrobe category."""

        now = self._clock()
        payload = {
            category: [{"preview": preview, "timestamp": now} for preview in categories.get(category, [])]
            for category in WARDROBE_CATEGORIES
        }
        self.save(WARDROBE_KEY, payload)
        logger.info(
            "Wardrobe cached: %s",
            {category: len(items) for category, items in payload.items()},
        )

    def load_wardrobe(self) -> dict[str, list[str]] | None:
        payload = self.load(WARDROBE_KEY)
        if not isinstance(payload, dict):
            return None
        return {
            category: [item["preview"] for item in payload.get(category) or [] if isinstance(item, dict) and "preview" in item]
            for category in WARDROBE_CATEGORIES
        }

    def clear_wardrobe(self) -> None:
        self.clear(WARDROBE_KEY)

    # Active combination

    def save_combination(self, combination: Mapping[str, Any]) -> None:
        """Cache the active combination and record it in the history."""

        payload = dict(combination)
        self.save(COMBINATION_KEY, payload)
        self.push_history(payload)

    def load_combination(self) -> dict[str, Any] | None:
        payload = self.load(COMBINATION_KEY)
        return payload if isinstance(payload, dict) else None

    def clear_combination(self) -> None:
        self.clear(COMBINATION_KEY)
