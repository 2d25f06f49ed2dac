"""Tests for template-based outfit suggestions."""

from __future__ import annotations

import logging

import pytest

from stylegenie.recommender.suggestions import SuggestionGenerator
from stylegenie.recommender.tables import StyleTables


@pytest.fixture
def generator() -> SuggestionGenerator:
    return SuggestionGenerator()


@pytest.mark.parametrize(("garment_type", "color"), [("", ""), (None, "white"), ("shirt", None), ("shirt", "")])
def test_missing_input_returns_default_set_in_gray(
    generator: SuggestionGenerator, garment_type: str | None, color: str | None
) -> None:
    suggestions = generator.suggest(garment_type, color)

    assert [s.title for s in suggestions] == ["Classic Combination", "Modern Mix"]
    assert {piece.color for s in suggestions for piece in s.pieces} == {"gray"}
    assert suggestions[0].mockup_image.endswith("query=Classic%20Combination%20outfit%20mockup")


def test_missing_input_logs_warning(generator: SuggestionGenerator, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="stylegenie.recommender.suggestions"):
        generator.suggest("", "")

    assert "Missing garment type or color" in caplog.text


def test_white_shirt_uses_white_harmony(generator: SuggestionGenerator) -> None:
    smart, weekend = generator.suggest("shirt", "white")

    assert smart.title == "Smart Casual"
    assert smart.description == "Perfect for office or dinner dates"
    assert [(p.item, p.color) for p in smart.pieces] == [
        ("Dark trousers", "black"),
        ("Leather belt", "navy"),
        ("Dress shoes", "black"),
    ]
    assert weekend.title == "Weekend Casual"
    assert [p.color for p in weekend.pieces] == ["navy", "gray", "black"]


def test_lookup_is_case_insensitive(generator: SuggestionGenerator) -> None:
    suggestions = generator.suggest("SHIRT", "White")

    assert [s.title for s in suggestions] == ["Smart Casual", "Weekend Casual"]
    assert [p.color for p in suggestions[0].pieces] == ["black", "navy", "black"]


def test_base_role_takes_the_anchor_colour(generator: SuggestionGenerator) -> None:
    _, brunch = generator.suggest("blouse", "pink")

    assert brunch.title == "Brunch Ready"
    assert [(p.item, p.color) for p in brunch.pieces] == [
        ("High-waisted jeans", "white"),
        ("Statement earrings", "pink"),
        ("Ankle boots", "gray"),
    ]


def test_unknown_type_falls_back_to_default_templates(generator: SuggestionGenerator) -> None:
    classic, modern = generator.suggest("kilt", "white")

    assert classic.title == "Classic Combination"
    assert [p.color for p in classic.pieces] == ["black", "navy", "gray"]
    assert [p.color for p in modern.pieces] == ["navy", "black", "gray"]


def test_unknown_colour_uses_default_complements(generator: SuggestionGenerator) -> None:
    smart, _ = generator.suggest("shirt", "teal")

    assert [p.color for p in smart.pieces] == ["white", "black", "white"]


def test_short_harmony_list_fills_roles_with_fixed_colours() -> None:
    generator = SuggestionGenerator(StyleTables.build(color_harmony={"teal": ["coral"]}))

    _, weekend = generator.suggest("shirt", "teal")

    # complement2, neutral, complement1
    assert [p.color for p in weekend.pieces] == ["white", "gray", "coral"]


def test_mockup_reference_is_deterministic(generator: SuggestionGenerator) -> None:
    first = generator.suggest("shirt", "white")[0].mockup_image
    second = generator.suggest("shirt", "white")[0].mockup_image

    assert first == second == (
        "/placeholder.svg?height=400&width=600&query=white%20shirt%20Smart%20Casual%20outfit%20combination"
    )


def test_every_known_type_yields_two_suggestions(generator: SuggestionGenerator) -> None:
    for garment_type in ("shirt", "blouse", "dress", "pants", "jacket", "sweater"):
        assert len(generator.suggest(garment_type, "navy")) == 2
