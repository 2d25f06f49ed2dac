"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    image: Optional[str] = None


class CombinationsRequest(BaseModel):
    garments: list[dict[str, Any]] = Field(default_factory=list)


class SuggestionsRequest(BaseModel):
    type: Optional[str] = None
    color: Optional[str] = None


class OutfitRequest(BaseModel):
    """Uploaded wardrobe images per category plus optional preferences."""

    shirts: list[str] = Field(default_factory=list)
    pants: list[str] = Field(default_factory=list)
    shoes: list[str] = Field(default_factory=list)
    addons: list[str] = Field(default_factory=list)
    preferences: dict[str, Any] = Field(default_factory=dict)

    def wardrobe(self) -> dict[str, list[str]]:
        return {
            "shirts": self.shirts,
            "pants": self.pants,
            "shoes": self.shoes,
            "addons": self.addons,
        }
