"""Domain types describing one brochure generation request."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Union

from brochure.errors import InvalidRequestError

FONT_STYLES: tuple[str, ...] = ("default", "serif", "sans-serif", "handwriting")
FONT_COLORS: dict[str, str] = {
    "black": "#111827",
    "white": "#F9FAFB",
    "red": "#EF4444",
    "blue": "#3B82F6",
    "gold": "#F59E0B",
}
VARIATION_STYLES: tuple[str, ...] = ("minimalist", "vintage", "luxury", "vibrant")
BROCHURE_STYLES: tuple[str, ...] = ("default", *VARIATION_STYLES)

DEFAULT_FONT_STYLE = "default"
DEFAULT_FONT_COLOR = "black"
DEFAULT_STYLE = "default"
DEFAULT_DOWNLOAD_FILENAME = "ai_brochure.png"


class BackgroundMode(str, Enum):
    """How the user supplies the brochure background."""

    UPLOAD = "upload"
    DESCRIBE = "describe"


@dataclass(frozen=True, slots=True)
class ImageAttachment:
    """Base64 encoded image together with its media type."""

    data: str
    media_type: str

    def __post_init__(self) -> None:
        if not self.media_type.startswith("image/"):
            raise InvalidRequestError(f"Only image files can be attached, got {self.media_type!r}.")
        if not self.data:
            raise InvalidRequestError("Image attachment is empty.")

    @classmethod
    def from_bytes(cls, raw: bytes, media_type: str) -> ImageAttachment:
        return cls(data=base64.b64encode(raw).decode("ascii"), media_type=media_type)

    def to_data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


@dataclass(frozen=True, slots=True)
class UploadedBackground:
    """Background supplied as an image."""

    image: ImageAttachment

    mode = BackgroundMode.UPLOAD


@dataclass(frozen=True, slots=True)
class DescribedBackground:
    """Background the model should invent from a text description."""

    description: str

    mode = BackgroundMode.DESCRIBE


Background = Union[UploadedBackground, DescribedBackground]


@dataclass(frozen=True, slots=True)
class BrochureRequest:
    """Validated input of a single generation."""

    product_image: ImageAttachment
    background: Background | None = None
    person_image: ImageAttachment | None = None
    promo_text: str = ""
    font_style: str = DEFAULT_FONT_STYLE
    font_color: str = DEFAULT_FONT_COLOR
    overall_style: str = DEFAULT_STYLE
    generate_variations: bool = False

    @property
    def background_mode(self) -> BackgroundMode | None:
        return self.background.mode if self.background is not None else None

    @classmethod
    def from_fields(
        cls,
        *,
        product_image: ImageAttachment | None,
        background_mode: BackgroundMode | str = BackgroundMode.DESCRIBE,
        background_image: ImageAttachment | None = None,
        background_description: str | None = None,
        person_image: ImageAttachment | None = None,
        promo_text: str | None = None,
        font_style: str | None = None,
        font_color: str | None = None,
        overall_style: str | None = None,
        generate_variations: bool = False,
    ) -> BrochureRequest:
        """Build a request from loosely-typed form fields.

        An uploaded background wins whenever the mode is ``upload`` and an
        image was supplied. Otherwise a non-blank description is used, even
        in upload mode, and with neither the background is left to the model.
        """

        if product_image is None:
            raise InvalidRequestError("Product image is required.")

        try:
            mode = BackgroundMode(background_mode)
        except ValueError as exc:
            raise InvalidRequestError(f"Unknown background mode: {background_mode!r}.") from exc
        description = background_description or ""
        background: Background | None = None
        if mode is BackgroundMode.UPLOAD and background_image is not None:
            background = UploadedBackground(background_image)
        elif description.strip():
            background = DescribedBackground(description)

        return cls(
            product_image=product_image,
            background=background,
            person_image=person_image,
            promo_text=promo_text or "",
            font_style=font_style or DEFAULT_FONT_STYLE,
            font_color=font_color or DEFAULT_FONT_COLOR,
            overall_style=overall_style or DEFAULT_STYLE,
            generate_variations=generate_variations,
        )


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Successful generation outcome."""

    image_data_uri: str
