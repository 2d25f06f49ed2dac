"""Saved looks: local list plus optional remote persistence."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import httpx

from stylegenie.config.settings import Settings, get_settings
from stylegenie.metrics.prometheus_exporter import looks_saved_total
from stylegenie.storage.cache import SessionStore

logger = logging.getLogger(__name__)

LOOKS_KEY = "myLooks"
LOOK_CATEGORIES = ("shirt", "pant", "shoe", "addon")
MISSING_COLOR = "#ccc"

LOCAL_ONLY_MESSAGE = "Look saved locally. Connect a remote store for cloud sync."
SYNCED_MESSAGE = "Look saved and synced."


class LookPersistenceError(RuntimeError):
    """Raised when the remote looks store rejects or cannot receive a look."""


@dataclass(slots=True)
class SaveLookResult:
    success: bool
    message: str
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        if not self.success:
            return {"error": self.message}
        return {"success": True, "message": self.message}


def build_look(
    combination: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Compose a saved-look record from a cached full-outfit combination."""

    now = now or datetime.now(timezone.utc)
    preferences = dict(combination.get("preferences") or {})
    event = preferences.get("eventType") or "any occasion"
    country = preferences.get("country")
    description = f"Perfect for {event}" + (f" in {country}" if country else "")

    garments = {category: dict(combination.get(category) or {}) for category in LOOK_CATEGORIES}
    return {
        "id": str(int(now.timestamp() * 1000)),
        "savedAt": now.isoformat(),
        "suggestion": {
            "title": "Complete Outfit",
            "description": description,
            "mockupImage": garments["shirt"].get("image") or "/placeholder.svg",
            "pieces": [
                {"item": category, "color": garments[category].get("color") or MISSING_COLOR}
                for category in LOOK_CATEGORIES
            ],
        },
        **garments,
        "preferences": preferences,
    }


class RemoteLookStore:
    """Inserts looks into a PostgREST-style ``saved_looks`` table."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.looks_store_url.rstrip("/"),
            timeout=settings.request_timeout,
            transport=transport,
            headers={
                "apikey": settings.looks_store_key,
                "Authorization": f"Bearer {settings.looks_store_key}",
            },
        )

    async def insert(self, look: Mapping[str, Any]) -> None:
        try:
            response = await self._client.post("/rest/v1/saved_looks", json=[dict(look)])
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise LookPersistenceError("Timed out saving look to the remote store.") from exc
        except httpx.HTTPStatusError as exc:
            raise LookPersistenceError(
                f"Remote store returned {exc.response.status_code}: {exc.response.text}",
            ) from exc
        except httpx.HTTPError as exc:
            raise LookPersistenceError(f"Remote store unreachable: {exc}") from exc

    async def ping(self) -> bool:
        response = await self._client.get("/rest/v1/")
        return response.is_success

    async def close(self) -> None:
        await self._client.aclose()


class LookService:
    """Save-look boundary. The local list is authoritative; remote sync is best-effort."""

    def __init__(
        self,
        store: SessionStore,
        *,
        settings: Settings | None = None,
        remote_factory: Callable[[Settings], RemoteLookStore] = RemoteLookStore,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._remote_factory = remote_factory

    def list_looks(self) -> list[dict[str, Any]]:
        try:
            raw = self._store.get_item(LOOKS_KEY)
            if not raw:
                return []
            looks = json.loads(raw)
        except ValueError:
            logger.warning("Saved looks are corrupt; treating as empty")
            return []
        return [look for look in looks if isinstance(look, dict)] if isinstance(looks, list) else []

    def delete(self, look_id: str) -> bool:
        looks = self.list_looks()
        remaining = [look for look in looks if str(look.get("id")) != look_id]
        if len(remaining) == len(looks):
            return False
        self._write(remaining)
        return True

    def _write(self, looks: list[dict[str, Any]]) -> None:
        self._store.set_item(LOOKS_KEY, json.dumps(looks, ensure_ascii=False))

    async def save(self, look: Mapping[str, Any]) -> SaveLookResult:
        """Store ``look`` locally, then push it to the remote store if one is configured."""

        record = dict(look)
        record.setdefault("id", str(int(time.time() * 1000)))
        record.setdefault("savedAt", datetime.now(timezone.utc).isoformat())
        self._write([record, *self.list_looks()])
        looks_saved_total.labels(target="local").inc()

        if not self._settings.looks_store_configured:
            return SaveLookResult(success=True, message=LOCAL_ONLY_MESSAGE)

        remote = self._remote_factory(self._settings)
        try:
            await remote.insert(record)
        except LookPersistenceError as exc:
            logger.error("Save look API error: %s", exc)
            return SaveLookResult(success=False, message="Failed to save look", error=str(exc))
        finally:
            await remote.close()

        looks_saved_total.labels(target="remote").inc()
        return SaveLookResult(success=True, message=SYNCED_MESSAGE)
