"""Async client for brochure generation through the AITunnel proxy."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from openai import AsyncOpenAI

from brochure.config.settings import Settings
from brochure.errors import ProviderError
from brochure.imggen.prompt_builder import BrochurePrompt
from brochure.imggen.response_extractor import InlineImagePart, ResponsePart, TextPart

logger = logging.getLogger(__name__)


def parse_data_uri(value: str) -> InlineImagePart | None:
    """Split ``data:<mime>;base64,<payload>`` into an inline part."""

    if not value.startswith("data:") or "," not in value:
        return None
    header, payload = value[len("data:"):].split(",", 1)
    mime_type, _, encoding = header.partition(";")
    if encoding != "base64" or not payload:
        return None
    return InlineImagePart(mime_type=mime_type or "image/png", data=payload)


class AITunnelImageClient:
    """Sends brochure prompts to the image model and returns typed response parts."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        api_key = settings.require_api_key()
        base_url = settings.aitunnel_base_url.rstrip("/")
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.request_timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
            },
            transport=transport,
        )
        self._openai = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
        )

    async def close(self) -> None:
        """Close the underlying HTTP clients."""

        await self._client.aclose()
        await self._openai.close()

    async def _request_json(self, endpoint: str, json_body: Mapping[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(endpoint, json=json_body)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            raise ProviderError("Timed out waiting for the image provider.") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Image provider returned error {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Could not reach the image provider: {exc}") from exc
        except ValueError as exc:
            raise ProviderError("Image provider returned a malformed response.") from exc

    def build_payload(self, prompt: BrochurePrompt) -> dict[str, Any]:
        """Attachments first, in order, then the instruction as the trailing text part."""

        content: list[dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": attachment.to_data_uri()}}
            for attachment in prompt.attachments
        ]
        content.append({"type": "text", "text": prompt.instructions})
        return {
            "model": self._settings.aitunnel_image_model,
            "messages": [{"role": "user", "content": content}],
            "modalities": ["image"],
        }

    async def generate(self, prompt: BrochurePrompt) -> list[ResponsePart]:
        """Submit one generation request and return the reply as ordered parts."""

        logger.info(
            "Requesting brochure from %s with %d image(s)",
            self._settings.aitunnel_image_model,
            len(prompt.attachments),
        )
        result = await self._request_json("/chat/completions", self.build_payload(prompt))
        return self.message_parts(result)

    @staticmethod
    def message_parts(payload: Mapping[str, Any]) -> list[ResponsePart]:
        """Flatten the first choice of a chat completion into typed parts.

        Text content comes first, followed by the entries of ``images``.
        """

        choices = payload.get("choices") or []
        if not choices or not isinstance(choices[0], Mapping):
            logger.warning("Image provider response has no choices: %s", payload)
            return []
        message = choices[0].get("message") or {}

        parts: list[ResponsePart] = []
        content = message.get("content")
        if isinstance(content, str) and content:
            inline = parse_data_uri(content.strip())
            parts.append(inline if inline is not None else TextPart(content))
        elif isinstance(content, list):
            for entry in content:
                part = _entry_to_part(entry)
                if part is not None:
                    parts.append(part)

        for entry in message.get("images") or []:
            part = _entry_to_part(entry)
            if part is not None:
                parts.append(part)
        return parts

    async def ping(self) -> bool:
        """Return ``True`` when the service responds to a model listing call."""

        models = await self._openai.models.list()
        return bool(models.data)


def _entry_to_part(entry: Any) -> ResponsePart | None:
    if not isinstance(entry, Mapping):
        return None
    if entry.get("type") == "text":
        return TextPart(str(entry.get("text") or ""))

    image_info = entry.get("image_url")
    url = image_info.get("url") if isinstance(image_info, Mapping) else image_info
    if isinstance(url, str):
        inline = parse_data_uri(url)
        if inline is None:
            logger.warning("Ignoring non-inline image reference from provider: %.80s", url)
        return inline
    return None
