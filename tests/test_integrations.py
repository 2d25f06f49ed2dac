"""Tests for external integration connectivity helpers."""

from __future__ import annotations

import pytest
import pytest_mock

from stylegenie.config.settings import get_settings
from stylegenie.integrations.checks import check_looks_store, check_vision


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VISION_API_KEY", "test-vision")
    monkeypatch.setenv("VISION_BASE_URL", "https://vision.test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_check_vision_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("stylegenie.integrations.checks.VisionTaggingClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=True)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_vision()

    assert result.success
    instance.ping.assert_awaited_once()
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_vision_failure(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("stylegenie.integrations.checks.VisionTaggingClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=False)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_vision()

    assert not result.success
    assert "non-success" in result.message.lower()


@pytest.mark.asyncio
async def test_unconfigured_looks_store_is_not_a_failure() -> None:
    result = await check_looks_store()

    assert result.success
    assert "not configured" in result.message


@pytest.mark.asyncio
async def test_configured_looks_store_is_pinged(
    mocker: pytest_mock.MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOOKS_STORE_URL", "https://looks.test")
    monkeypatch.setenv("LOOKS_STORE_KEY", "secret")
    get_settings.cache_clear()
    store_mock = mocker.patch("stylegenie.integrations.checks.RemoteLookStore", autospec=True)
    store_mock.return_value.ping = mocker.AsyncMock(return_value=True)
    store_mock.return_value.close = mocker.AsyncMock(return_value=None)

    result = await check_looks_store()

    assert result.success
    assert result.message == "Remote looks store is reachable."
