"""Session storage and TTL cache."""

from .cache import (
    COMBINATION_KEY,
    HISTORY_KEY,
    WARDROBE_CATEGORIES,
    WARDROBE_KEY,
    JsonFileSessionStore,
    MemorySessionStore,
    SessionStore,
    WardrobeCache,
)

__all__ = [
    "COMBINATION_KEY",
    "HISTORY_KEY",
    "WARDROBE_CATEGORIES",
    "WARDROBE_KEY",
    "JsonFileSessionStore",
    "MemorySessionStore",
    "SessionStore",
    "WardrobeCache",
]
