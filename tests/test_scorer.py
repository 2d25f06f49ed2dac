"""Tests for pairwise garment compatibility scoring."""

from __future__ import annotations

import pytest

from stylegenie.catalog.garment import Garment
from stylegenie.recommender.scorer import CompatibilityScorer, ReasoningTier, reasoning_for, round_half_up
from stylegenie.recommender.tables import StyleTables


@pytest.fixture
def scorer() -> CompatibilityScorer:
    return CompatibilityScorer()


def test_shirt_and_jeans_in_black_and_white_score_full_marks(
    scorer: CompatibilityScorer, white_shirt: Garment, black_jeans: Garment
) -> None:
    assert scorer.score(white_shirt, black_jeans) == 100
    assert scorer.score(black_jeans, white_shirt) == 100


def test_identical_types_only_keep_the_colour_share(scorer: CompatibilityScorer) -> None:
    white = Garment.create("a", "shirt", "white")
    black = Garment.create("b", "shirt", "black")

    assert scorer.type_score("shirt", "Shirt") == 0
    assert scorer.score(white, black) == 40


def test_garment_against_itself_scores_colour_only(scorer: CompatibilityScorer, white_shirt: Garment) -> None:
    expected = round_half_up(0 * 0.6 + scorer.color_score("white", "white") * 0.4)

    assert scorer.score(white_shirt, white_shirt) == expected == 24


def test_unknown_colours_default_to_neutral(scorer: CompatibilityScorer) -> None:
    assert scorer.color_score("teal", "mauve") == 60


def test_colour_lookup_checks_reverse_direction(scorer: CompatibilityScorer) -> None:
    # only brown -> cream is stored
    assert scorer.color_score("cream", "brown") == 90
    assert scorer.color_score("BROWN", "Cream") == 90


def test_unknown_distinct_types_are_weakly_viable(scorer: CompatibilityScorer) -> None:
    assert scorer.type_score("hat", "scarf") == 40


def test_type_lookup_is_case_insensitive_and_symmetric(scorer: CompatibilityScorer) -> None:
    assert scorer.type_score("Shirt", "JEANS") == 100
    # hoodie has no row of its own, jeans lists it
    assert scorer.type_score("hoodie", "jeans") == 100


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (100, ReasoningTier.EXCELLENT),
        (85, ReasoningTier.EXCELLENT),
        (84, ReasoningTier.GREAT),
        (70, ReasoningTier.GREAT),
        (69, ReasoningTier.GOOD),
        (55, ReasoningTier.GOOD),
        (54, ReasoningTier.INTERESTING),
        (0, ReasoningTier.INTERESTING),
    ],
)
def test_reasoning_tier_boundaries(score: int, tier: ReasoningTier) -> None:
    assert ReasoningTier.for_score(score) is tier


def test_reasoning_text_matches_tier() -> None:
    assert reasoning_for(90).startswith("Excellent match!")
    assert reasoning_for(40).startswith("Interesting mix!")


def test_injected_tables_replace_builtin_ones() -> None:
    tables = StyleTables.build(color_compatibility={"Teal": {"coral": 10}}, type_compatibility={})
    scorer = CompatibilityScorer(tables)

    assert scorer.color_score("teal", "coral") == 10
    assert scorer.type_score("shirt", "jeans") == 40


def test_tables_are_read_only() -> None:
    tables = StyleTables.default()

    with pytest.raises(TypeError):
        tables.color_harmony["white"] = ("red",)  # type: ignore[index]
