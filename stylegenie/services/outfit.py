"""Outfit orchestration pipeline that coordinates tagging, ranking and caching."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from stylegenie.catalog.garment import Garment
from stylegenie.catalog.tagging import TaggingGateway, TagResult
from stylegenie.recommender.combinations import Combination, CombinationGenerator
from stylegenie.recommender.suggestions import OutfitSuggestion, SuggestionGenerator
from stylegenie.storage.cache import WardrobeCache

logger = logging.getLogger(__name__)

# Wardrobe category -> slot name used in a cached combination.
CATEGORY_SLOTS: dict[str, str] = {
    "shirts": "shirt",
    "pants": "pant",
    "shoes": "shoe",
    "addons": "addon",
}


class IncompleteWardrobeError(ValueError):
    """Raised when a wardrobe category required for an outfit is empty."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Upload at least one item in: {', '.join(self.missing)}.")


@dataclass(slots=True)
class OutfitPreferences:
    """Optional context the user gives for the outfit."""

    country: str | None = None
    event_type: str | None = None
    specifications: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "OutfitPreferences":
        payload = payload or {}
        return cls(
            country=payload.get("country") or None,
            event_type=payload.get("eventType") or payload.get("event_type") or None,
            specifications=payload.get("specifications") or None,
        )

    def to_payload(self) -> dict[str, str]:
        payload = {
            "country": self.country,
            "eventType": self.event_type,
            "specifications": self.specifications,
        }
        return {key: value for key, value in payload.items() if value}


@dataclass(slots=True)
class OutfitPlan:
    """One garment per slot plus everything derived from them."""

    garments: dict[str, Garment]
    tag_results: dict[str, TagResult]
    combinations: list[Combination]
    suggestions: list[OutfitSuggestion]
    preferences: OutfitPreferences = field(default_factory=OutfitPreferences)

    @property
    def is_fallback(self) -> bool:
        return any(result.is_fallback for result in self.tag_results.values())

    def cache_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            slot: {**garment.to_payload(), "_fallback": self.tag_results[slot].is_fallback}
            for slot, garment in self.garments.items()
        }
        payload["preferences"] = self.preferences.to_payload()
        return payload

    def to_payload(self) -> dict[str, Any]:
        return {
            "outfit": self.cache_payload(),
            "combinations": [combination.to_payload() for combination in self.combinations],
            "suggestions": [suggestion.to_payload() for suggestion in self.suggestions],
            "fallback": self.is_fallback,
        }


class OutfitOrchestrator:
    """Picks one garment per category, tags them and ranks what goes together."""

    def __init__(
        self,
        gateway: TaggingGateway,
        cache: WardrobeCache,
        *,
        combination_generator: CombinationGenerator | None = None,
        suggestion_generator: SuggestionGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._gateway = gateway
        self._cache = cache
        self._combinations = combination_generator or CombinationGenerator()
        self._suggestions = suggestion_generator or SuggestionGenerator()
        self._rng = rng or random.Random()

    @staticmethod
    def missing_categories(wardrobe: Mapping[str, Sequence[str]]) -> list[str]:
        return [category for category in CATEGORY_SLOTS if not wardrobe.get(category)]

    async def tag_garment(self, garment_id: str, image: str) -> tuple[Garment, TagResult]:
        """Tag one image and attach the result to a new garment."""

        result = await self._gateway.detect(image)
        return Garment.from_tags(garment_id, result.tags, image=image), result

    async def build_outfit(
        self,
        wardrobe: Mapping[str, Sequence[str]],
        preferences: OutfitPreferences | None = None,
    ) -> OutfitPlan:
        """
        Generate a full outfit from the uploaded wardrobe.

        A random image is drawn from every category, all picks are tagged
        concurrently, and the outcome is cached as the active combination.
        """

        missing = self.missing_categories(wardrobe)
        if missing:
            raise IncompleteWardrobeError(missing)

        preferences = preferences or OutfitPreferences()
        self._cache.save_wardrobe(wardrobe)

        picks: dict[str, tuple[str, str]] = {}
        for category, slot in CATEGORY_SLOTS.items():
            images = wardrobe[category]
            index = self._rng.randrange(len(images))
            picks[slot] = (f"{slot}-{index}", images[index])

        tagged = await asyncio.gather(
            *(self.tag_garment(garment_id, image) for garment_id, image in picks.values())
        )
        garments = {slot: garment for slot, (garment, _) in zip(picks, tagged)}
        tag_results = {slot: result for slot, (_, result) in zip(picks, tagged)}

        shirt = garments["shirt"]
        plan = OutfitPlan(
            garments=garments,
            tag_results=tag_results,
            combinations=self._combinations.generate(list(garments.values())),
            suggestions=self._suggestions.suggest(shirt.type, shirt.color),
            preferences=preferences,
        )
        self._cache.save_combination(plan.cache_payload())

        if plan.is_fallback:
            fallback_slots = [slot for slot, result in tag_results.items() if result.is_fallback]
            logger.warning("Outfit built with fallback tags for %s", fallback_slots)
        return plan
