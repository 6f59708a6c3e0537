"""Tests for the AITunnel image client."""

from __future__ import annotations

import json

import httpx
import pytest

from brochure.config.settings import Settings, get_settings
from brochure.errors import ConfigurationError, ProviderError
from brochure.imggen.generator_client import AITunnelImageClient, parse_data_uri
from brochure.imggen.models import BrochureRequest, UploadedBackground
from brochure.imggen.prompt_builder import PromptBuilder
from brochure.imggen.response_extractor import InlineImagePart, TextPart


def _client(handler) -> AITunnelImageClient:
    return AITunnelImageClient(get_settings(), transport=httpx.MockTransport(handler))


def test_missing_api_key_is_fatal() -> None:
    with pytest.raises(ConfigurationError):
        AITunnelImageClient(Settings(aitunnel_api_key=""))


@pytest.mark.asyncio
async def test_generate_sends_images_then_text(product_image, background_image) -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "choices": [
                    {
                        "message": {
                            "content": "Done",
                            "images": [
                                {"type": "image_url", "image_url": {"url": "data:image/png;base64,QUJD"}},
                            ],
                        }
                    }
                ]
            },
        )

    prompt = PromptBuilder().build(
        BrochureRequest(product_image=product_image, background=UploadedBackground(background_image))
    )
    client = _client(handler)
    try:
        parts = await client.generate(prompt)
    finally:
        await client.close()

    assert captured["url"] == "https://aitunnel.test/v1/chat/completions"
    assert captured["auth"] == "Bearer test-aitunnel"
    body = captured["body"]
    assert body["model"] == "gemini-2.5-flash-image"
    assert body["modalities"] == ["image"]
    content = body["messages"][0]["content"]
    assert [item["type"] for item in content] == ["image_url", "image_url", "text"]
    assert content[0]["image_url"]["url"] == product_image.to_data_uri()
    assert content[1]["image_url"]["url"] == background_image.to_data_uri()
    assert content[2]["text"] == prompt.instructions
    assert parts == [TextPart("Done"), InlineImagePart("image/png", "QUJD")]


@pytest.mark.asyncio
async def test_http_error_becomes_provider_error(product_image) -> None:
    client = _client(lambda request: httpx.Response(503, text="overloaded"))
    prompt = PromptBuilder().build(BrochureRequest(product_image=product_image))
    try:
        with pytest.raises(ProviderError) as exc_info:
            await client.generate(prompt)
    finally:
        await client.close()

    assert exc_info.value.status_code == 503
    assert "overloaded" in str(exc_info.value)


@pytest.mark.asyncio
async def test_timeout_becomes_provider_error(product_image) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(handler)
    prompt = PromptBuilder().build(BrochureRequest(product_image=product_image))
    try:
        with pytest.raises(ProviderError, match="Timed out"):
            await client.generate(prompt)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_malformed_json_becomes_provider_error(product_image) -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    prompt = PromptBuilder().build(BrochureRequest(product_image=product_image))
    try:
        with pytest.raises(ProviderError, match="malformed"):
            await client.generate(prompt)
    finally:
        await client.close()


def test_message_parts_reads_list_content() -> None:
    payload = {
        "choices": [
            {
                "message": {
                    "content": [
                        {"type": "text", "text": "Here you go"},
                        {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,SlBH"}},
                        {"type": "image_url", "image_url": "https://cdn.example.com/a.png"},
                    ]
                }
            }
        ]
    }

    assert AITunnelImageClient.message_parts(payload) == [
        TextPart("Here you go"),
        InlineImagePart("image/jpeg", "SlBH"),
    ]


def test_message_parts_without_choices() -> None:
    assert AITunnelImageClient.message_parts({"choices": []}) == []


def test_message_parts_with_data_uri_content() -> None:
    payload = {"choices": [{"message": {"content": "data:image/webp;base64,V0VCUA=="}}]}

    assert AITunnelImageClient.message_parts(payload) == [InlineImagePart("image/webp", "V0VCUA==")]


def test_parse_data_uri() -> None:
    assert parse_data_uri("data:image/png;base64,QUJD") == InlineImagePart("image/png", "QUJD")
    assert parse_data_uri("data:text/plain,hello") is None
    assert parse_data_uri("https://example.com/a.png") is None
