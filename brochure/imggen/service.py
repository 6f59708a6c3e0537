"""Brochure generation shared by the HTTP handler and the CLI."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Protocol, Sequence

from brochure.errors import ProviderError
from brochure.imggen.models import BrochureRequest, GenerationResult
from brochure.imggen.prompt_builder import BrochurePrompt, PromptBuilder
from brochure.imggen.response_extractor import ResponsePart, extract_image_data_uri

logger = logging.getLogger(__name__)


class ImageProvider(Protocol):
    async def generate(self, prompt: BrochurePrompt) -> Sequence[ResponsePart]: ...

    async def close(self) -> None: ...


class BrochureGenerationService:
    """Coordinates prompt assembly, the provider call and image extraction."""

    def __init__(self, provider: ImageProvider, prompt_builder: PromptBuilder | None = None) -> None:
        self._provider = provider
        self._prompt_builder = prompt_builder or PromptBuilder()

    async def generate(self, request: BrochureRequest) -> GenerationResult:
        """Run one generation. Provider failures propagate as ``ProviderError``."""

        prompt = self._prompt_builder.build(request)
        logger.debug("Brochure instructions:\n%s", prompt.instructions)
        parts = await self._provider.generate(prompt)
        data_uri = extract_image_data_uri(parts)
        _ensure_base64_payload(data_uri)
        return GenerationResult(image_data_uri=data_uri)

    async def close(self) -> None:
        await self._provider.close()


def _ensure_base64_payload(data_uri: str) -> None:
    _, encoded = data_uri.split(",", 1)
    try:
        base64.b64decode(encoded, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise ProviderError("The provider returned malformed image data.") from exc
