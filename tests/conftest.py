"""Shared fixtures for the brochure test-suite."""

from __future__ import annotations

from typing import Sequence

import pytest

from brochure.config.settings import get_settings
from brochure.imggen.models import ImageAttachment
from brochure.imggen.prompt_builder import BrochurePrompt
from brochure.imggen.response_extractor import InlineImagePart, ResponsePart, TextPart


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AITUNNEL_API_KEY", "test-aitunnel")
    monkeypatch.setenv("AITUNNEL_BASE_URL", "https://aitunnel.test/v1")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeProvider:
    """In-memory image provider recording every prompt it receives."""

    def __init__(self, parts: Sequence[ResponsePart] | None = None, error: Exception | None = None) -> None:
        self.parts = list(parts) if parts is not None else [
            TextPart("Here is your brochure."),
            InlineImagePart("image/png", "QUJD"),
        ]
        self.error = error
        self.prompts: list[BrochurePrompt] = []
        self.closed = False

    async def generate(self, prompt: BrochurePrompt) -> list[ResponsePart]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.parts

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def product_image() -> ImageAttachment:
    return ImageAttachment(data="UFJPRFVDVA==", media_type="image/png")


@pytest.fixture
def person_image() -> ImageAttachment:
    return ImageAttachment(data="UEVSU09O", media_type="image/jpeg")


@pytest.fixture
def background_image() -> ImageAttachment:
    return ImageAttachment(data="QkFDS0dST1VORA==", media_type="image/webp")


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
