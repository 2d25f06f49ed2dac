"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    vision_api_key: str = ""
    vision_base_url: str = "https://api.openai.com/v1"
    vision_model: str = "gpt-4o-mini"
    request_timeout: float = 60.0

    cache_root: str = "data/sessions"
    cache_ttl_hours: float = 24.0
    history_limit: int = 10
    max_combinations: int = 6

    looks_store_url: str = ""
    looks_store_key: str = ""

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_hours * 60 * 60

    @property
    def looks_store_configured(self) -> bool:
        return bool(self.looks_store_url and self.looks_store_key)


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        vision_api_key=os.getenv("VISION_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        vision_base_url=os.getenv("VISION_BASE_URL", "https://api.openai.com/v1"),
        vision_model=os.getenv("VISION_MODEL", "gpt-4o-mini"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "60")),
        cache_root=os.getenv("CACHE_ROOT", "data/sessions"),
        cache_ttl_hours=float(os.getenv("CACHE_TTL_HOURS", "24")),
        history_limit=int(os.getenv("HISTORY_LIMIT", "10")),
        max_combinations=int(os.getenv("MAX_COMBINATIONS", "6")),
        looks_store_url=os.getenv("LOOKS_STORE_URL", ""),
        looks_store_key=os.getenv("LOOKS_STORE_KEY", ""),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
