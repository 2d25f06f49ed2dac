"""Rule-based outfit recommendation engine."""

from .combinations import Combination, CombinationGenerator
from .scorer import CompatibilityScorer, ReasoningTier, reasoning_for
from .suggestions import OutfitPiece, OutfitSuggestion, SuggestionGenerator
from .tables import ColorRole, StyleTables, StyleTemplate, TemplatePiece

__all__ = [
    "ColorRole",
    "Combination",
    "CombinationGenerator",
    "CompatibilityScorer",
    "OutfitPiece",
    "OutfitSuggestion",
    "ReasoningTier",
    "StyleTables",
    "StyleTemplate",
    "SuggestionGenerator",
    "TemplatePiece",
    "reasoning_for",
]
