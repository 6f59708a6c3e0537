"""Extraction of the generated image from a provider reply."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from brochure.errors import NoImageReturned

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InlineImagePart:
    """Inline binary payload (base64) with its media type."""

    mime_type: str
    data: str


@dataclass(frozen=True, slots=True)
class TextPart:
    text: str


ResponsePart = Union[InlineImagePart, TextPart]


def _is_inline_image(part: ResponsePart) -> bool:
    return isinstance(part, InlineImagePart) and bool(part.data)


def extract_image_data_uri(parts: Iterable[ResponsePart]) -> str:
    """Return the first inline image as ``data:<mime>;base64,<payload>``.

    Text parts are skipped. Only the first image is returned even when the
    reply carries several.
    """

    parts = list(parts)
    for index, part in enumerate(parts):
        if not _is_inline_image(part):
            continue
        logger.debug("Using inline image part #%d (%s)", index, part.mime_type)
        dropped = sum(1 for other in parts[index + 1:] if _is_inline_image(other))
        if dropped:
            logger.debug("Ignoring %d additional inline image part(s) in the reply", dropped)
        return f"data:{part.mime_type};base64,{part.data}"

    raise NoImageReturned()
