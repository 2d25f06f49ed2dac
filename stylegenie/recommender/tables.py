"""Static lookup tables for colour harmony, type pairing and outfit templates.

The tables are plain configuration: they are frozen when the module is
imported and passed explicitly to the scorer and the suggestion generator,
so tests can swap in their own via :meth:`StyleTables.build`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence


class ColorRole(str, Enum):
    """Which colour a template piece takes relative to the anchor garment."""

    BASE = "base"
    COMPLEMENT1 = "complement1"
    COMPLEMENT2 = "complement2"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class TemplatePiece:
    item: str
    role: ColorRole


@dataclass(frozen=True, slots=True)
class StyleTemplate:
    """Outfit skeleton: a title plus role-coloured pieces."""

    title: str
    description: str
    pieces: tuple[TemplatePiece, ...]


def _template(title: str, description: str, pieces: Sequence[tuple[str, str]]) -> StyleTemplate:
    return StyleTemplate(
        title=title,
        description=description,
        pieces=tuple(TemplatePiece(item=item, role=ColorRole(role)) for item, role in pieces),
    )


# Pairwise colour affinity (0-100). Not symmetric in storage.
COLOR_COMPATIBILITY: dict[str, dict[str, int]] = {
    "white": {"black": 100, "navy": 95, "gray": 90, "blue": 85, "red": 80, "beige": 85, "brown": 75},
    "black": {"white": 100, "gray": 90, "red": 85, "gold": 80, "silver": 85, "beige": 70},
    "blue": {"white": 95, "beige": 85, "brown": 80, "gray": 85, "navy": 70, "khaki": 75},
    "navy": {"white": 95, "beige": 90, "khaki": 85, "burgundy": 80, "gray": 85, "brown": 75},
    "red": {"black": 90, "white": 85, "navy": 80, "gray": 75, "beige": 70},
    "green": {"beige": 85, "brown": 90, "white": 80, "navy": 75, "khaki": 85},
    "yellow": {"navy": 85, "gray": 80, "white": 85, "blue": 75, "black": 70},
    "pink": {"gray": 85, "white": 90, "navy": 80, "beige": 85, "black": 75},
    "gray": {"white": 90, "black": 90, "navy": 85, "burgundy": 80, "blue": 85, "pink": 80},
    "brown": {"beige": 95, "white": 85, "cream": 90, "olive": 85, "navy": 75},
    "beige": {"white": 90, "brown": 95, "navy": 85, "olive": 80, "gray": 85},
}

# Preferred complementary colours, in priority order.
COLOR_HARMONY: dict[str, list[str]] = {
    "white": ["black", "navy", "gray", "beige"],
    "black": ["white", "gray", "red", "gold"],
    "blue": ["white", "beige", "brown", "gray"],
    "navy": ["white", "beige", "khaki", "burgundy"],
    "red": ["black", "white", "navy", "gray"],
    "green": ["beige", "brown", "white", "navy"],
    "yellow": ["navy", "gray", "white", "denim"],
    "pink": ["gray", "white", "navy", "beige"],
    "gray": ["white", "black", "navy", "burgundy"],
    "brown": ["beige", "white", "cream", "olive"],
    "beige": ["white", "brown", "navy", "olive"],
}

TYPE_COMPATIBILITY: dict[str, list[str]] = {
    "shirt": ["pants", "trousers", "jeans", "skirt", "shorts", "jacket", "blazer"],
    "blouse": ["pants", "trousers", "jeans", "skirt", "shorts", "jacket", "blazer"],
    "dress": ["jacket", "blazer", "cardigan", "coat"],
    "pants": ["shirt", "blouse", "sweater", "jacket", "blazer", "tshirt", "top"],
    "trousers": ["shirt", "blouse", "sweater", "jacket", "blazer", "tshirt", "top"],
    "jeans": ["shirt", "blouse", "sweater", "jacket", "tshirt", "top", "hoodie"],
    "skirt": ["shirt", "blouse", "sweater", "jacket", "blazer", "tshirt", "top"],
    "jacket": ["shirt", "blouse", "pants", "jeans", "dress", "skirt", "tshirt"],
    "blazer": ["shirt", "blouse", "pants", "trousers", "jeans", "skirt", "dress"],
    "sweater": ["pants", "jeans", "skirt", "trousers"],
    "tshirt": ["jeans", "pants", "shorts", "skirt", "jacket"],
    "top": ["jeans", "pants", "shorts", "skirt", "jacket", "blazer"],
}

STYLE_TEMPLATES: dict[str, list[StyleTemplate]] = {
    "shirt": [
        _template(
            "Smart Casual",
            "Perfect for office or dinner dates",
            [("Dark trousers", "complement1"), ("Leather belt", "complement2"), ("Dress shoes", "complement1")],
        ),
        _template(
            "Weekend Casual",
            "Relaxed and comfortable for everyday wear",
            [("Denim jeans", "complement2"), ("Canvas sneakers", "neutral"), ("Casual watch", "complement1")],
        ),
    ],
    "blouse": [
        _template(
            "Professional Chic",
            "Polished look for the workplace",
            [("Pencil skirt", "complement1"), ("Blazer", "complement2"), ("Heeled pumps", "complement1")],
        ),
        _template(
            "Brunch Ready",
            "Effortlessly stylish for daytime outings",
            [("High-waisted jeans", "complement2"), ("Statement earrings", "base"), ("Ankle boots", "complement1")],
        ),
    ],
    "dress": [
        _template(
            "Evening Elegance",
            "Sophisticated for special occasions",
            [("Strappy heels", "complement1"), ("Clutch bag", "complement2"), ("Statement necklace", "neutral")],
        ),
        _template(
            "Daytime Charm",
            "Fresh and feminine for casual events",
            [("Denim jacket", "complement2"), ("Crossbody bag", "complement1"), ("White sneakers", "neutral")],
        ),
    ],
    "pants": [
        _template(
            "Business Professional",
            "Sharp and confident for meetings",
            [("Crisp button-down", "neutral"), ("Blazer", "complement1"), ("Oxford shoes", "complement2")],
        ),
        _template(
            "Smart Casual",
            "Versatile for work or play",
            [("Fitted sweater", "complement2"), ("Loafers", "complement1"), ("Leather bag", "complement2")],
        ),
    ],
    "jacket": [
        _template(
            "Layered Look",
            "Stylish warmth for cooler days",
            [("Basic tee", "neutral"), ("Slim jeans", "complement1"), ("Boots", "complement2")],
        ),
        _template(
            "Street Style",
            "Urban edge with comfort",
            [("Hoodie", "complement2"), ("Joggers", "complement1"), ("High-top sneakers", "neutral")],
        ),
    ],
}

# Used for unknown garment types and for missing type/colour input.
DEFAULT_TEMPLATES: list[StyleTemplate] = [
    _template(
        "Classic Combination",
        "Timeless pairing that always works",
        [("Neutral bottoms", "complement1"), ("Complementary shoes", "complement2"), ("Simple accessories", "neutral")],
    ),
    _template(
        "Modern Mix",
        "Contemporary style with personality",
        [("Statement piece", "complement2"), ("Coordinating item", "complement1"), ("Finishing touch", "neutral")],
    ),
]


@dataclass(frozen=True, slots=True)
class StyleTables:
    """Read-only bundle of every lookup table the engines consult."""

    color_compatibility: Mapping[str, Mapping[str, int]]
    color_harmony: Mapping[str, tuple[str, ...]]
    type_compatibility: Mapping[str, frozenset[str]]
    style_templates: Mapping[str, tuple[StyleTemplate, ...]]
    default_templates: tuple[StyleTemplate, ...]

    @classmethod
    def build(
        cls,
        *,
        color_compatibility: Mapping[str, Mapping[str, int]] | None = None,
        color_harmony: Mapping[str, Iterable[str]] | None = None,
        type_compatibility: Mapping[str, Iterable[str]] | None = None,
        style_templates: Mapping[str, Iterable[StyleTemplate]] | None = None,
        default_templates: Iterable[StyleTemplate] | None = None,
    ) -> "StyleTables":
        """Freeze the given tables, falling back to the built-in ones per table."""

        if color_compatibility is None:
            color_compatibility = COLOR_COMPATIBILITY
        if color_harmony is None:
            color_harmony = COLOR_HARMONY
        if type_compatibility is None:
            type_compatibility = TYPE_COMPATIBILITY
        if style_templates is None:
            style_templates = STYLE_TEMPLATES
        if default_templates is None:
            default_templates = DEFAULT_TEMPLATES

        return cls(
            color_compatibility=MappingProxyType(
                {
                    color.lower(): MappingProxyType({other.lower(): int(score) for other, score in row.items()})
                    for color, row in color_compatibility.items()
                }
            ),
            color_harmony=MappingProxyType(
                {color.lower(): tuple(c.lower() for c in colors) for color, colors in color_harmony.items()}
            ),
            type_compatibility=MappingProxyType(
                {kind.lower(): frozenset(t.lower() for t in kinds) for kind, kinds in type_compatibility.items()}
            ),
            style_templates=MappingProxyType(
                {kind.lower(): tuple(templates) for kind, templates in style_templates.items()}
            ),
            default_templates=tuple(default_templates),
        )

    @classmethod
    def default(cls) -> "StyleTables":
        return DEFAULT_TABLES


DEFAULT_TABLES = StyleTables.build()
