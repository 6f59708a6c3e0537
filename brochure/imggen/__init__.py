"""Prompt building and brochure image generation utilities."""

from .models import BackgroundMode, BrochureRequest, GenerationResult, ImageAttachment
from .prompt_builder import BrochurePrompt, PromptBuilder
from .response_extractor import InlineImagePart, TextPart, extract_image_data_uri
from .service import BrochureGenerationService

__all__ = [
    "BackgroundMode",
    "BrochureGenerationService",
    "BrochurePrompt",
    "BrochureRequest",
    "GenerationResult",
    "ImageAttachment",
    "InlineImagePart",
    "PromptBuilder",
    "TextPart",
    "extract_image_data_uri",
]
