"""Client-side form state, generation gate and busy tracking."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path

from brochure.errors import InvalidRequestError, describe_failure
from brochure.imggen.models import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_STYLE,
    DEFAULT_STYLE,
    BackgroundMode,
    BrochureRequest,
    GenerationResult,
    ImageAttachment,
)
from brochure.imggen.service import BrochureGenerationService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BrochureDraft:
    """Mutable form state as the user fills it in."""

    product_image: ImageAttachment | None = None
    background_mode: BackgroundMode = BackgroundMode.DESCRIBE
    background_image: ImageAttachment | None = None
    background_description: str = ""
    promo_text: str = ""
    person_image: ImageAttachment | None = None
    font_style: str = DEFAULT_FONT_STYLE
    font_color: str = DEFAULT_FONT_COLOR
    overall_style: str = DEFAULT_STYLE
    generate_variations: bool = False

    def to_request(self) -> BrochureRequest:
        if not is_generation_enabled(self):
            raise InvalidRequestError("A product image and a background are required.")
        return BrochureRequest.from_fields(
            product_image=self.product_image,
            background_mode=self.background_mode,
            background_image=self.background_image,
            background_description=self.background_description,
            person_image=self.person_image,
            promo_text=self.promo_text,
            font_style=self.font_style,
            font_color=self.font_color,
            overall_style=self.overall_style,
            generate_variations=self.generate_variations,
        )


def is_generation_enabled(draft: BrochureDraft) -> bool:
    """Product image plus the background matching the selected mode."""

    if draft.product_image is None:
        return False
    if draft.background_mode == BackgroundMode.UPLOAD:
        return draft.background_image is not None
    return bool(draft.background_description.strip())


class BrochureSession:
    """One user's generate button: a single request in flight at a time."""

    def __init__(self, service: BrochureGenerationService, draft: BrochureDraft | None = None) -> None:
        self._service = service
        self.draft = draft or BrochureDraft()
        self.busy = False
        self.result: GenerationResult | None = None
        self.error: str | None = None

    @property
    def can_generate(self) -> bool:
        return not self.busy and is_generation_enabled(self.draft)

    async def generate(self) -> GenerationResult | None:
        """Run the generation, recording either the result or a readable error."""

        if not self.can_generate:
            return None

        self.busy = True
        self.error = None
        self.result = None
        try:
            self.result = await self._service.generate(self.draft.to_request())
        except Exception as exc:
            logger.exception("Brochure generation failed")
            self.error = describe_failure(exc)
        finally:
            self.busy = False
        return self.result


def save_data_uri(data_uri: str, path: Path) -> Path:
    """Write the image behind a base64 data URI to ``path``."""

    if not data_uri.startswith("data:") or ";base64," not in data_uri:
        raise InvalidRequestError("Result is not a base64 data URI.")
    _, encoded = data_uri.split(",", 1)
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise InvalidRequestError("Result image data is not valid base64.") from exc
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(raw)
    return path
