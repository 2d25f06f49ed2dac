"""Connectivity checks for the vision provider and the remote looks store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from stylegenie.config.settings import get_settings
from stylegenie.nlp.vision_client import VisionTaggingClient
from stylegenie.services.looks import RemoteLookStore


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # pragma: no cover - defensive branch
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_vision() -> IntegrationCheckResult:
    """Ping the vision model provider and return the result."""

    async def _ping() -> bool:
        client = VisionTaggingClient()
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Vision model",
        factory=_ping,
        success_message="Vision API is reachable.",
    )


async def check_looks_store() -> IntegrationCheckResult:
    """Ping the remote looks store; an unconfigured store is not a failure."""

    settings = get_settings()
    if not settings.looks_store_configured:
        return IntegrationCheckResult(
            name="Looks store",
            success=True,
            message="Remote store not configured; looks are kept locally.",
        )

    async def _ping() -> bool:
        store = RemoteLookStore(settings)
        try:
            return await store.ping()
        finally:
            await store.close()

    return await _run_check(
        name="Looks store",
        factory=_ping,
        success_message="Remote looks store is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_vision(), check_looks_store()))
