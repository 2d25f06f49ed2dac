"""Shared pytest fixtures."""

from __future__ import annotations

import base64
from io import BytesIO

import pytest
from PIL import Image

from stylegenie.catalog.garment import Garment
from stylegenie.config.settings import get_settings


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.delenv("LOOKS_STORE_URL", raising=False)
    monkeypatch.delenv("LOOKS_STORE_KEY", raising=False)
    monkeypatch.setenv("CACHE_ROOT", str(tmp_path / "sessions"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), "white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_data_url(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def white_shirt() -> Garment:
    return Garment.create("1", "shirt", "white", ["casual"])


@pytest.fixture
def black_jeans() -> Garment:
    return Garment.create("2", "jeans", "black", ["denim"])


@pytest.fixture
def brown_shoes() -> Garment:
    return Garment.create("3", "shoes", "brown", ["leather"])
