"""Garment value type shared by the tagging and recommendation layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping

if TYPE_CHECKING:
    from stylegenie.nlp.vision_client import GarmentTags


class InvalidGarmentError(ValueError):
    """Raised when a garment payload lacks required fields."""


@dataclass(frozen=True, slots=True)
class Garment:
    """A single tagged clothing or accessory item.

    Identity is the ``id``; two garments with the same id compare equal even
    if their tags differ.
    """

    id: str
    type: str = field(compare=False)
    color: str = field(compare=False)
    style_tags: frozenset[str] = field(default=frozenset(), compare=False)
    image: str = field(default="", compare=False)

    @classmethod
    def create(
        cls,
        garment_id: str,
        garment_type: str,
        color: str,
        style_tags: Iterable[str] = (),
        image: str = "",
    ) -> "Garment":
        """Build a garment with lower-cased type, color and tags."""

        garment_id = str(garment_id).strip()
        garment_type = (garment_type or "").strip().lower()
        color = (color or "").strip().lower()
        if not garment_id or not garment_type or not color:
            raise InvalidGarmentError("Garment requires non-empty id, type and color.")
        tags = frozenset(tag.strip().lower() for tag in style_tags if tag and tag.strip())
        return cls(id=garment_id, type=garment_type, color=color, style_tags=tags, image=image or "")

    @classmethod
    def from_tags(cls, garment_id: str, tags: "GarmentTags", image: str = "") -> "Garment":
        return cls.create(garment_id, tags.type, tags.color, style_tags=tags.style_tags, image=image)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Garment":
        """Parse the JSON shape used by the HTTP API and the cache."""

        style_tags = payload.get("styleTags", payload.get("style_tags")) or []
        if isinstance(style_tags, str):
            style_tags = [style_tags]
        return cls.create(
            str(payload.get("id", "")),
            str(payload.get("type", "")),
            str(payload.get("color", "")),
            style_tags=[str(tag) for tag in style_tags],
            image=str(payload.get("image", "") or ""),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "color": self.color,
            "styleTags": sorted(self.style_tags),
            "image": self.image,
        }
