"""Tests for the garment tagging boundary."""

from __future__ import annotations

import base64
import struct
import zlib

import pytest
import pytest_mock

from stylegenie.catalog.tagging import TagFallback, TaggingGateway, TagOk, parse_tags, strip_code_fences


def _gateway_with_reply(mocker: pytest_mock.MockerFixture, reply: str | Exception):
    client = mocker.Mock()
    if isinstance(reply, Exception):
        client.describe_garment = mocker.AsyncMock(side_effect=reply)
    else:
        client.describe_garment = mocker.AsyncMock(return_value=reply)
    client.close = mocker.AsyncMock(return_value=None)
    factory = mocker.Mock(return_value=client)
    return TaggingGateway(client_factory=factory), factory, client


def test_strip_code_fences() -> None:
    fenced = '```json\n{"type": "shirt"}\n```'

    assert strip_code_fences(fenced) == '{"type": "shirt"}'
    assert strip_code_fences('```\n{"a": 1}\n```\n') == '{"a": 1}'


def test_parse_tags_accepts_camel_case_tags() -> None:
    tags = parse_tags('{"type": " Blazer ", "color": "Navy", "styleTags": ["formal"]}')

    assert tags.type == "blazer"
    assert tags.color == "navy"
    assert tags.style_tags == ["formal"]


@pytest.mark.asyncio
async def test_well_formed_reply_passes_through(mocker: pytest_mock.MockerFixture, png_data_url: str) -> None:
    gateway, _, client = _gateway_with_reply(
        mocker, '```json\n{"type": "Jeans", "color": "Blue", "styleTags": ["denim", "casual"]}\n```'
    )

    result = await gateway.detect(png_data_url)

    assert isinstance(result, TagOk)
    assert not result.is_fallback
    assert result.to_payload() == {
        "type": "jeans",
        "color": "blue",
        "styleTags": ["denim", "casual"],
        "_fallback": False,
    }
    client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_unparseable_reply_falls_back_without_error_field(
    mocker: pytest_mock.MockerFixture, png_data_url: str
) -> None:
    gateway, _, _ = _gateway_with_reply(mocker, "Sorry, I can't see a garment here.")

    result = await gateway.detect(png_data_url)

    assert isinstance(result, TagFallback)
    assert result.to_payload() == {
        "type": "shirt",
        "color": "white",
        "styleTags": ["casual", "cotton", "button-down"],
        "_fallback": True,
    }


@pytest.mark.asyncio
async def test_incomplete_json_falls_back(mocker: pytest_mock.MockerFixture, png_data_url: str) -> None:
    gateway, _, _ = _gateway_with_reply(mocker, '{"type": "dress"}')

    result = await gateway.detect(png_data_url)

    assert result.is_fallback
    assert "incomplete" in result.reason


@pytest.mark.asyncio
async def test_model_error_is_reported_in_payload(mocker: pytest_mock.MockerFixture, png_data_url: str) -> None:
    gateway, _, client = _gateway_with_reply(mocker, RuntimeError("quota exceeded"))

    result = await gateway.detect(png_data_url)

    assert result.is_fallback
    assert result.to_payload()["_error"] == "quota exceeded"
    client.describe_garment.assert_awaited_once()
    client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_client_configuration_falls_back(mocker: pytest_mock.MockerFixture, png_data_url: str) -> None:
    factory = mocker.Mock(side_effect=RuntimeError("Vision API key is not configured."))
    gateway = TaggingGateway(client_factory=factory)

    result = await gateway.detect(png_data_url)

    assert result.is_fallback
    assert result.to_payload()["_error"] == "Vision API key is not configured."


@pytest.mark.asyncio
@pytest.mark.parametrize("image", ["not-an-image", base64.b64encode(b"hello world").decode("ascii")])
async def test_invalid_image_never_reaches_the_model(mocker: pytest_mock.MockerFixture, image: str) -> None:
    gateway, factory, _ = _gateway_with_reply(mocker, "{}")

    result = await gateway.detect(image)

    assert result.is_fallback
    assert result.tags.type == "shirt"
    factory.assert_not_called()


def _png_header_only(width: int, height: int) -> bytes:
    def chunk(kind: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")


@pytest.mark.asyncio
async def test_oversized_image_falls_back(mocker: pytest_mock.MockerFixture) -> None:
    gateway, factory, _ = _gateway_with_reply(mocker, "{}")
    image = base64.b64encode(_png_header_only(20000, 20000)).decode("ascii")

    result = await gateway.detect(image)

    assert isinstance(result, TagFallback)
    assert result.reason == "invalid image"
    factory.assert_not_called()
