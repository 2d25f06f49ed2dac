"""Enumerates and ranks 2- and 3-piece garment combinations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Sequence

from stylegenie.catalog.garment import Garment
from stylegenie.metrics.prometheus_exporter import outfit_combinations_generated_total
from stylegenie.recommender.scorer import CompatibilityScorer, reasoning_for, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


@dataclass(frozen=True, slots=True)
class Combination:
    """A scored subset of garments proposed as wearable together."""

    id: str
    title: str
    description: str
    garments: tuple[Garment, ...]
    compatibility_score: int
    reasoning: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "garments": [garment.to_payload() for garment in self.garments],
            "compatibilityScore": self.compatibility_score,
            "reasoning": self.reasoning,
        }


def _describe_pair(a: Garment, b: Garment) -> tuple[str, str]:
    return (
        f"{a.type} + {b.type}",
        f"{a.color} {a.type} paired with {b.color} {b.type}",
    )


def _describe_trio(a: Garment, b: Garment, c: Garment) -> tuple[str, str]:
    return (
        f"{a.type} + {b.type} + {c.type}",
        f"Complete outfit with {a.color} {a.type}, {b.color} {b.type}, and {c.color} {c.type}",
    )


class CombinationGenerator:
    """Builds the top-ranked combinations for a set of garments."""

    def __init__(self, scorer: CompatibilityScorer | None = None, limit: int = DEFAULT_LIMIT) -> None:
        self._scorer = scorer or CompatibilityScorer()
        self._limit = limit

    def generate(self, garments: Sequence[Garment]) -> list[Combination]:
        """
        Return at most ``limit`` combinations sorted by descending score.

        Pairs are generated before trios and the sort is stable, so equal
        scores keep that enumeration order. Repeated ids are collapsed to
        their first occurrence so a garment is never paired with itself.
        """

        garments = list(dict.fromkeys(garments))
        if len(garments) < 2:
            return []

        candidates: list[Combination] = []
        for a, b in combinations(garments, 2):
            title, description = _describe_pair(a, b)
            candidates.append(self._build((a, b), self._scorer.score(a, b), title, description))

        if len(garments) >= 3:
            for a, b, c in combinations(garments, 3):
                total = self._scorer.score(a, b) + self._scorer.score(b, c) + self._scorer.score(a, c)
                title, description = _describe_trio(a, b, c)
                candidates.append(self._build((a, b, c), round_half_up(total / 3), title, description))

        candidates.sort(key=lambda combination: combination.compatibility_score, reverse=True)
        ranked = candidates[: self._limit]

        outfit_combinations_generated_total.inc()
        logger.debug("Ranked %d of %d combinations for %d garments", len(ranked), len(candidates), len(garments))
        return ranked

    @staticmethod
    def _build(members: tuple[Garment, ...], score: int, title: str, description: str) -> Combination:
        return Combination(
            id="-".join(garment.id for garment in members),
            title=title,
            description=description,
            garments=members,
            compatibility_score=score,
            reasoning=reasoning_for(score),
        )
