"""Tests for brochure prompt assembly."""

from __future__ import annotations

from brochure.imggen.models import (
    VARIATION_STYLES,
    BrochureRequest,
    DescribedBackground,
    UploadedBackground,
)
from brochure.imggen.prompt_builder import PromptBuilder, is_default_style, ordinal


def test_product_only_request_has_single_attachment(product_image) -> None:
    prompt = PromptBuilder().build(BrochureRequest(product_image=product_image))

    assert prompt.attachments == (product_image,)
    assert "The first image is the main clothing product" in prompt.instructions
    assert "is the model" not in prompt.instructions
    assert "as the background" not in prompt.instructions
    assert "Generate the background" not in prompt.instructions
    assert "Promotional text:" not in prompt.instructions
    assert "promotional text" not in prompt.instructions
    assert "model" not in prompt.instructions
    assert "background" not in prompt.instructions
    assert "Match the shadows and lighting of the product to the surrounding scene" in prompt.instructions


def test_person_image_follows_product(product_image, person_image) -> None:
    request = BrochureRequest(product_image=product_image, person_image=person_image)

    prompt = PromptBuilder().build(request)

    assert prompt.attachments == (product_image, person_image)
    assert "The second image is the model." in prompt.instructions
    assert "wearing the clothing product from the first image" in prompt.instructions


def test_uploaded_background_is_last_and_numbered(product_image, person_image, background_image) -> None:
    request = BrochureRequest(
        product_image=product_image,
        person_image=person_image,
        background=UploadedBackground(background_image),
    )

    prompt = PromptBuilder().build(request)

    assert prompt.attachments[-1] == background_image
    assert len(prompt.attachments) == 3
    assert "Use the third image as the background." in prompt.instructions
    assert "the product and the model" in prompt.instructions
    assert "Generate the background" not in prompt.instructions


def test_uploaded_background_without_person_is_second(product_image, background_image) -> None:
    request = BrochureRequest(product_image=product_image, background=UploadedBackground(background_image))

    prompt = PromptBuilder().build(request)

    assert prompt.attachments == (product_image, background_image)
    assert "Use the second image as the background. Composite the product naturally" in prompt.instructions


def test_upload_mode_ignores_description(product_image, background_image) -> None:
    request = BrochureRequest.from_fields(
        product_image=product_image,
        background_mode="upload",
        background_image=background_image,
        background_description="sunset beach",
    )

    prompt = PromptBuilder().build(request)

    assert "sunset beach" not in prompt.instructions
    assert prompt.attachments[-1] == background_image


def test_description_mode_never_attaches_background(product_image, background_image) -> None:
    request = BrochureRequest.from_fields(
        product_image=product_image,
        background_mode="describe",
        background_image=background_image,
        background_description="a neon-lit street at night",
    )

    prompt = PromptBuilder().build(request)

    assert prompt.attachments == (product_image,)
    assert '"a neon-lit street at night"' in prompt.instructions


def test_promo_text_includes_font_choices(product_image) -> None:
    request = BrochureRequest(
        product_image=product_image,
        background=DescribedBackground("studio"),
        promo_text="Summer sale 30% off",
        font_style="serif",
        font_color="gold",
    )

    prompt = PromptBuilder().build(request)

    assert 'Promotional text: "Summer sale 30% off"' in prompt.instructions
    assert "'serif' font style" in prompt.instructions
    assert "color 'gold'" in prompt.instructions


def test_blank_promo_text_is_skipped(product_image) -> None:
    prompt = PromptBuilder().build(BrochureRequest(product_image=product_image, promo_text="   "))

    assert "Promotional text:" not in prompt.instructions


def test_variations_request_grid_with_four_styles(product_image) -> None:
    request = BrochureRequest(product_image=product_image, generate_variations=True, overall_style="luxury")

    prompt = PromptBuilder().build(request)

    assert "2x2 grid" in prompt.instructions
    for style in VARIATION_STYLES:
        assert style in prompt.instructions
    assert len(VARIATION_STYLES) == 4
    assert "overall 'luxury' style" not in prompt.instructions
    assert "shadows and lighting" not in prompt.instructions


def test_single_design_mentions_style_and_lighting(product_image) -> None:
    request = BrochureRequest(product_image=product_image, overall_style="vintage")

    prompt = PromptBuilder().build(request)

    assert "grid" not in prompt.instructions
    assert "overall 'vintage' style" in prompt.instructions
    assert "shadows and lighting" in prompt.instructions
    assert "legible" not in prompt.instructions


def test_single_design_with_promo_text_requires_legibility(product_image, person_image) -> None:
    request = BrochureRequest(
        product_image=product_image,
        person_image=person_image,
        background=DescribedBackground("city rooftop"),
        promo_text="Winter collection",
    )

    prompt = PromptBuilder().build(request)

    assert "integrate the provided promotional text in a refined, legible way" in prompt.instructions
    assert "lighting of the product and the model to the background" in prompt.instructions


def test_default_style_is_not_named(product_image) -> None:
    for style in ("default", "none", "None", ""):
        prompt = PromptBuilder().build(BrochureRequest(product_image=product_image, overall_style=style))
        assert "overall '" not in prompt.instructions


def test_helpers() -> None:
    assert ordinal(1) == "first"
    assert ordinal(3) == "third"
    assert ordinal(7) == "7th"
    assert is_default_style(" Default ")
    assert not is_default_style("minimalist")
