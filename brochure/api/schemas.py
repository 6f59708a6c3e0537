"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from brochure.imggen.models import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_STYLE,
    DEFAULT_STYLE,
    BackgroundMode,
    BrochureRequest,
    ImageAttachment,
)


class ImageFilePayload(BaseModel):
    """Image already decoded by the browser into base64 and a media type."""

    base64: str
    mime_type: str = Field(alias="mimeType")

    def to_attachment(self) -> ImageAttachment:
        return ImageAttachment(data=self.base64, media_type=self.mime_type)


class GenerateBrochurePayload(BaseModel):
    """JSON body of ``POST /api/generate``."""

    model_config = ConfigDict(populate_by_name=True)

    product_image: ImageFilePayload | None = Field(default=None, alias="productImage")
    background_mode: BackgroundMode | None = Field(
        default=BackgroundMode.DESCRIBE,
        validation_alias=AliasChoices("backgroundMode", "backgroundOption", "background_mode"),
    )
    background_image: ImageFilePayload | None = Field(default=None, alias="backgroundImage")
    background_description: str | None = Field(default=None, alias="backgroundDescription")
    promo_text: str | None = Field(default=None, alias="promoText")
    person_image: ImageFilePayload | None = Field(default=None, alias="personImage")
    font_style: str | None = Field(default=DEFAULT_FONT_STYLE, alias="fontStyle")
    font_color: str | None = Field(default=DEFAULT_FONT_COLOR, alias="fontColor")
    overall_style: str | None = Field(
        default=DEFAULT_STYLE,
        validation_alias=AliasChoices("overallStyle", "brochureStyle", "overall_style"),
    )
    generate_variations: bool | None = Field(default=False, alias="generateVariations")

    def to_request(self) -> BrochureRequest:
        return BrochureRequest.from_fields(
            product_image=self.product_image.to_attachment() if self.product_image else None,
            background_mode=self.background_mode or BackgroundMode.DESCRIBE,
            background_image=self.background_image.to_attachment() if self.background_image else None,
            background_description=self.background_description,
            person_image=self.person_image.to_attachment() if self.person_image else None,
            promo_text=self.promo_text,
            font_style=self.font_style,
            font_color=self.font_color,
            overall_style=self.overall_style,
            generate_variations=bool(self.generate_variations),
        )


class GenerateBrochureResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(serialization_alias="imageUrl")


class BrochureOptions(BaseModel):
    """Choices offered by the brochure form."""

    model_config = ConfigDict(populate_by_name=True)

    font_styles: list[str] = Field(serialization_alias="fontStyles")
    font_colors: dict[str, str] = Field(serialization_alias="fontColors")
    brochure_styles: list[str] = Field(serialization_alias="brochureStyles")
    download_filename: str = Field(serialization_alias="downloadFilename")
