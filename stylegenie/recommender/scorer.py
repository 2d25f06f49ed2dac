"""Pairwise garment compatibility scoring."""

from __future__ import annotations

import math
from enum import Enum

from stylegenie.catalog.garment import Garment
from stylegenie.recommender.tables import StyleTables

NEUTRAL_COLOR_SCORE = 60
UNKNOWN_TYPE_SCORE = 40
MATCHING_TYPE_SCORE = 100
SAME_TYPE_SCORE = 0

TYPE_WEIGHT = 0.6
COLOR_WEIGHT = 0.4


class ReasoningTier(str, Enum):
    """Score bands used to explain a combination to the user."""

    EXCELLENT = "excellent"
    GREAT = "great"
    GOOD = "good"
    INTERESTING = "interesting"

    @classmethod
    def for_score(cls, score: int) -> "ReasoningTier":
        if score >= 85:
            return cls.EXCELLENT
        if score >= 70:
            return cls.GREAT
        if score >= 55:
            return cls.GOOD
        return cls.INTERESTING


REASONING_TEXT: dict[ReasoningTier, str] = {
    ReasoningTier.EXCELLENT: (
        "Excellent match! These pieces complement each other perfectly in both style and color."
    ),
    ReasoningTier.GREAT: "Great combination! These items work well together and create a cohesive look.",
    ReasoningTier.GOOD: "Good pairing! This combination is versatile and can work for various occasions.",
    ReasoningTier.INTERESTING: "Interesting mix! This combination offers a unique style statement.",
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values scores take."""

    return int(math.floor(value + 0.5))


def reasoning_for(score: int) -> str:
    return REASONING_TEXT[ReasoningTier.for_score(score)]


class CompatibilityScorer:
    """Scores how well two garments pair, from 0 (never) to 100 (ideal).

    Category fit is weighted above colour fit. Colour and type pairs missing
    from the tables fall back to fixed neutral scores instead of failing.
    """

    def __init__(self, tables: StyleTables | None = None) -> None:
        self._tables = tables or StyleTables.default()

    @property
    def tables(self) -> StyleTables:
        return self._tables

    def color_score(self, color_a: str, color_b: str) -> int:
        a = color_a.lower()
        b = color_b.lower()
        table = self._tables.color_compatibility

        direct = table.get(a, {}).get(b)
        if direct is not None:
            return direct
        reverse = table.get(b, {}).get(a)
        if reverse is not None:
            return reverse
        return NEUTRAL_COLOR_SCORE

    def type_score(self, type_a: str, type_b: str) -> int:
        a = type_a.lower()
        b = type_b.lower()
        if a == b:
            return SAME_TYPE_SCORE

        table = self._tables.type_compatibility
        if b in table.get(a, ()) or a in table.get(b, ()):
            return MATCHING_TYPE_SCORE
        return UNKNOWN_TYPE_SCORE

    def score(self, garment_a: Garment, garment_b: Garment) -> int:
        """Return the weighted compatibility score of two garments."""

        type_score = self.type_score(garment_a.type, garment_b.type)
        color_score = self.color_score(garment_a.color, garment_b.color)
        combined = round_half_up(type_score * TYPE_WEIGHT + color_score * COLOR_WEIGHT)
        return max(0, min(100, combined))
