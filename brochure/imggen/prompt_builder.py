"""Prompt construction for the brochure generation step."""

from __future__ import annotations

from dataclasses import dataclass

from brochure.imggen.models import (
    VARIATION_STYLES,
    BrochureRequest,
    DescribedBackground,
    ImageAttachment,
    UploadedBackground,
)

_ORDINALS = {1: "first", 2: "second", 3: "third", 4: "fourth"}
_STYLE_SENTINELS = {"", "default", "none"}

PREAMBLE = (
    "You are a professional graphic designer who creates promotional brochures for clothing products. "
    "You will receive several input images and must produce one finished brochure image."
)


def ordinal(position: int) -> str:
    """Return the English ordinal used to refer to an attached image."""

    return _ORDINALS.get(position, f"{position}th")


def is_default_style(style: str) -> bool:
    return style.strip().lower() in _STYLE_SENTINELS


@dataclass(frozen=True, slots=True)
class BrochurePrompt:
    """Ordered image attachments plus the instruction that refers to them."""

    attachments: tuple[ImageAttachment, ...]
    instructions: str


class PromptBuilder:
    """Builds the multi-image instruction for the brochure model."""

    def build(self, request: BrochureRequest) -> BrochurePrompt:
        """Return attachments and instruction text for ``request``.

        Images are referenced by their 1-based position in the attachment
        list, so the text is written while the list is being filled.
        """

        attachments: list[ImageAttachment] = [request.product_image]
        lines = [f"- The {ordinal(1)} image is the main clothing product to promote."]

        if request.person_image is not None:
            attachments.append(request.person_image)
            lines.append(
                f"- The {ordinal(len(attachments))} image is the model. "
                f"Show this model naturally wearing the clothing product from the {ordinal(1)} image."
            )

        subjects = "the product and the model" if request.person_image is not None else "the product"
        background = request.background
        if isinstance(background, UploadedBackground):
            attachments.append(background.image)
            lines.append(
                f"- Use the {ordinal(len(attachments))} image as the background. "
                f"Composite {subjects} naturally onto this background."
            )
        elif isinstance(background, DescribedBackground):
            lines.append(
                f'- Generate the background from the following text description: "{background.description}"'
            )

        if request.promo_text.strip():
            lines.append(f'- Promotional text: "{request.promo_text}"')
            lines.append(
                f"- Render the promotional text in a '{request.font_style}' font style "
                f"with the color '{request.font_color}'."
            )

        if request.generate_variations:
            lines.extend(self._variation_lines())
        else:
            if not is_default_style(request.overall_style):
                lines.append(f"- Give the brochure an overall '{request.overall_style}' style.")
            if request.promo_text.strip():
                lines.append(
                    "- The final image must integrate the provided promotional text in a refined, legible way."
                )
            setting = "the background" if background is not None else "the surrounding scene"
            lines.append(
                f"- Match the shadows and lighting of {subjects} to {setting} "
                "so the result is a single cohesive, professional-looking product brochure image."
            )

        instructions = "\n".join([PREAMBLE, "", *lines])
        return BrochurePrompt(attachments=tuple(attachments), instructions=instructions)

    @staticmethod
    def _variation_lines() -> list[str]:
        styles = ", ".join(VARIATION_STYLES)
        return [
            "- Finally, using all of the elements above, create a single image laid out as a 2x2 grid "
            f"showing four different styles ({styles}).",
            "- Each grid cell must be a complete brochure design.",
            "- The four designs must be visually distinct, each with a design and layout suited to its style.",
            "- Place the promotional text in each cell in a way that fits that cell's style.",
        ]
