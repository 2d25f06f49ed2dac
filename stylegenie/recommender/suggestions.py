"""Template-based outfit suggestions around a single anchor garment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import quote

from stylegenie.recommender.tables import ColorRole, StyleTables, StyleTemplate

logger = logging.getLogger(__name__)

DEFAULT_COMPLEMENTS = ("white", "black", "gray")
PLACEHOLDER_COLOR = "gray"

ROLE_FALLBACKS: dict[ColorRole, str] = {
    ColorRole.COMPLEMENT1: "black",
    ColorRole.COMPLEMENT2: "white",
    ColorRole.NEUTRAL: "gray",
}

MOCKUP_BASE = "/placeholder.svg?height=400&width=600&query="
# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True, slots=True)
class OutfitPiece:
    item: str
    color: str

    def to_payload(self) -> dict[str, str]:
        return {"item": self.item, "color": self.color}


@dataclass(frozen=True, slots=True)
class OutfitSuggestion:
    """A fully described outfit built from a style template."""

    title: str
    description: str
    pieces: tuple[OutfitPiece, ...]
    mockup_image: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "pieces": [piece.to_payload() for piece in self.pieces],
            "mockupImage": self.mockup_image,
        }


def mockup_url(query: str) -> str:
    return MOCKUP_BASE + quote(query, safe=_URI_COMPONENT_SAFE)


def resolve_palette(base_color: str, complements: Sequence[str]) -> dict[ColorRole, str]:
    """Map every colour role to a concrete colour."""

    palette = {ColorRole.BASE: base_color}
    for index, role in enumerate((ColorRole.COMPLEMENT1, ColorRole.COMPLEMENT2, ColorRole.NEUTRAL)):
        palette[role] = complements[index] if index < len(complements) else ROLE_FALLBACKS[role]
    return palette


class SuggestionGenerator:
    """Turns an anchor garment's type and colour into outfit suggestions."""

    def __init__(self, tables: StyleTables | None = None) -> None:
        self._tables = tables or StyleTables.default()

    def suggest(self, garment_type: str | None, garment_color: str | None) -> list[OutfitSuggestion]:
        """Return one suggestion per template for the garment type; never empty."""

        if not garment_type or not garment_color:
            logger.warning("Missing garment type or color, using default templates")
            return [
                OutfitSuggestion(
                    title=template.title,
                    description=template.description,
                    pieces=tuple(OutfitPiece(item=piece.item, color=PLACEHOLDER_COLOR) for piece in template.pieces),
                    mockup_image=mockup_url(f"{template.title} outfit mockup"),
                )
                for template in self._tables.default_templates
            ]

        color_key = garment_color.lower()
        type_key = garment_type.lower()

        complements = self._tables.color_harmony.get(color_key, DEFAULT_COMPLEMENTS)
        templates = self._tables.style_templates.get(type_key)
        if templates is None:
            logger.info("No style templates for %r, using defaults", type_key)
            templates = self._tables.default_templates

        palette = resolve_palette(garment_color, complements)
        return [self._render(template, palette, garment_type, garment_color) for template in templates]

    @staticmethod
    def _render(
        template: StyleTemplate,
        palette: dict[ColorRole, str],
        garment_type: str,
        garment_color: str,
    ) -> OutfitSuggestion:
        return OutfitSuggestion(
            title=template.title,
            description=template.description,
            pieces=tuple(OutfitPiece(item=piece.item, color=palette[piece.role]) for piece in template.pieces),
            mockup_image=mockup_url(f"{garment_color} {garment_type} {template.title} outfit combination"),
        )
