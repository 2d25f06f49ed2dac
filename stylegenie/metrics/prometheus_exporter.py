"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest


garment_detection_total = Counter(
    "garment_detection_total",
    "Garment tagging requests by outcome.",
    ["outcome"],
)

outfit_combinations_generated_total = Counter(
    "outfit_combinations_generated_total",
    "Total number of combination sets generated.",
)

looks_saved_total = Counter(
    "looks_saved_total",
    "Saved looks by persistence target.",
    ["target"],
)


def render_latest() -> tuple[bytes, str]:
    """Return the exposition body and its content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
