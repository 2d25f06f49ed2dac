"""Client for garment tagging via the configured vision model provider."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict, Field, field_validator

from stylegenie.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TAGGING_PROMPT = """Analyze this clothing item and provide a JSON response with the following structure:
{
  "type": "the garment type (e.g., shirt, blouse, dress, pants, jacket, sweater, skirt, etc.)",
  "color": "the primary color (use common color names like white, black, blue, red, etc.)",
  "styleTags": ["array", "of", "style", "descriptors"]
}

Style tags should describe the garment's characteristics like: casual, formal, elegant, sporty, vintage, modern, cotton, silk, denim, leather, button-down, sleeveless, long-sleeve, etc.

Return ONLY the JSON object, no additional text."""


class GarmentTags(BaseModel):
    """Structured tags returned by the vision model."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(min_length=1)
    color: str = Field(min_length=1)
    style_tags: list[str] = Field(default_factory=list, alias="styleTags")

    @field_validator("type", "color", mode="before")
    @classmethod
    def _normalise_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("style_tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        return value

    def to_payload(self) -> dict[str, object]:
        return {"type": self.type, "color": self.color, "styleTags": list(self.style_tags)}


class VisionTaggingClient:
    """Thin client that sends one garment photo to an OpenAI-compatible vision model."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        if not settings.vision_api_key:
            raise RuntimeError("Vision API key is not configured.")

        self._settings = settings
        self._client = AsyncOpenAI(
            api_key=settings.vision_api_key,
            base_url=settings.vision_base_url.rstrip("/"),
            timeout=settings.request_timeout,
        )

    async def describe_garment(self, image_url: str) -> str:
        """Return the raw text the model produced for the given image."""

        response = await self._client.chat.completions.create(
            model=self._settings.vision_model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": image_url}},
                        {"type": "text", "text": TAGGING_PROMPT},
                    ],
                }
            ],
            max_tokens=300,
        )
        content = response.choices[0].message.content or ""
        logger.debug("Vision model replied with %d characters", len(content))
        return content

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._client.models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Release HTTP resources."""

        await self._client.close()
