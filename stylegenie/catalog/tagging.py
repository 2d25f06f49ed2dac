"""Garment tagging boundary that always yields usable tags."""

from __future__ import annotations

import json
import logging
import re
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import ValidationError

from stylegenie.imgproc.normalize import ImageNormalizer, InvalidImageError
from stylegenie.metrics.prometheus_exporter import garment_detection_total
from stylegenie.nlp.vision_client import GarmentTags, VisionTaggingClient

logger = logging.getLogger(__name__)

FALLBACK_TAGS = GarmentTags(type="shirt", color="white", style_tags=["casual", "cotton", "button-down"])

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model sometimes wraps JSON in."""

    return _FENCE.sub("", _FENCE_OPEN.sub("", text)).strip()


@dataclass(frozen=True, slots=True)
class TagOk:
    tags: GarmentTags

    @property
    def is_fallback(self) -> bool:
        return False

    def to_payload(self) -> dict[str, Any]:
        return {**self.tags.to_payload(), "_fallback": False}


@dataclass(frozen=True, slots=True)
class TagFallback:
    """Fixed tags substituted when automated tagging is unavailable."""

    tags: GarmentTags
    reason: str
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return True

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {**self.tags.to_payload(), "_fallback": True}
        if self.error:
            payload["_error"] = self.error
        return payload


TagResult = Union[TagOk, TagFallback]


def parse_tags(text: str) -> GarmentTags:
    """Parse model output into tags; raises ``ValueError`` on malformed text."""

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ValueError("Vision model returned non-JSON output.") from exc
    if not isinstance(payload, dict):
        raise ValueError("Vision model returned JSON that is not an object.")
    try:
        return GarmentTags.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Vision model returned incomplete tags: {exc.error_count()} error(s).") from exc


class TaggingGateway:
    """Wraps the vision model call and degrades to fallback tags on any failure.

    The gateway never raises: a malformed reply, an invalid image, a missing
    API key or a provider error all produce a :class:`TagFallback`. There is
    no retry; a single failure yields the fallback immediately.
    """

    def __init__(
        self,
        client_factory: Callable[[], VisionTaggingClient] = VisionTaggingClient,
        normalizer: ImageNormalizer | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._normalizer = normalizer or ImageNormalizer()

    async def detect(self, image: bytes | str) -> TagResult:
        """Tag a single garment image."""

        try:
            image_url = self._normalizer.to_data_url(image)
        except InvalidImageError as exc:
            logger.warning("Rejected garment image: %s", exc)
            return self._fallback("invalid image", error=str(exc))

        try:
            client = self._client_factory()
        except Exception as exc:
            logger.error("Detection client unavailable: %s", exc)
            return self._fallback("client unavailable", error=str(exc) or "AI detection unavailable")

        try:
            text = await client.describe_garment(image_url)
        except Exception as exc:
            logger.error("Detection API error: %s", exc)
            return self._fallback("model call failed", error=str(exc) or "AI detection unavailable")
        finally:
            with suppress(Exception):
                await client.close()

        try:
            tags = parse_tags(text)
        except ValueError as exc:
            logger.error("Failed to parse AI response: %s (%s)", text, exc)
            return self._fallback(str(exc))

        garment_detection_total.labels(outcome="ok").inc()
        return TagOk(tags=tags)

    @staticmethod
    def _fallback(reason: str, error: str | None = None) -> TagFallback:
        garment_detection_total.labels(outcome="fallback").inc()
        return TagFallback(tags=FALLBACK_TAGS, reason=reason, error=error)
