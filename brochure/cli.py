"""Command line interface: generate a brochure from local files or serve the API."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

import uvicorn

from brochure.config.settings import get_settings
from brochure.errors import BrochureError, ConfigurationError, describe_failure
from brochure.imggen.files import load_attachment
from brochure.imggen.gate import BrochureDraft, BrochureSession, save_data_uri
from brochure.imggen.generator_client import AITunnelImageClient
from brochure.imggen.models import BROCHURE_STYLES, FONT_COLORS, FONT_STYLES, BackgroundMode
from brochure.imggen.service import BrochureGenerationService
from brochure.monitoring.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="brochure",
        description="Compose a clothing promo brochure with a generative image model.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a brochure from local image files.")
    generate.add_argument("--product", type=Path, required=True, help="Product photo.")
    background = generate.add_mutually_exclusive_group(required=True)
    background.add_argument("--background", type=Path, help="Background photo.")
    background.add_argument("--background-description", help="Text description of the background.")
    generate.add_argument("--person", type=Path, help="Photo of the model wearing the product.")
    generate.add_argument("--promo-text", default="", help="Promotional text to render.")
    generate.add_argument("--font-style", default="default", choices=FONT_STYLES)
    generate.add_argument("--font-color", default="black", choices=sorted(FONT_COLORS))
    generate.add_argument("--style", default="default", choices=BROCHURE_STYLES)
    generate.add_argument(
        "--variations",
        action="store_true",
        help="Render four style variations as a 2x2 grid.",
    )
    generate.add_argument(
        "--output",
        type=Path,
        default=Path(settings.output_filename),
        help="Where to save the resulting image.",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(list(argv) if argv is not None else None)


def build_draft(args: argparse.Namespace) -> BrochureDraft:
    """Turn CLI arguments into the same form state the browser would send."""

    draft = BrochureDraft(
        product_image=load_attachment(args.product),
        promo_text=args.promo_text,
        font_style=args.font_style,
        font_color=args.font_color,
        overall_style=args.style,
        generate_variations=args.variations,
    )
    if args.background is not None:
        draft.background_mode = BackgroundMode.UPLOAD
        draft.background_image = load_attachment(args.background)
    else:
        draft.background_mode = BackgroundMode.DESCRIBE
        draft.background_description = args.background_description or ""
    if args.person is not None:
        draft.person_image = load_attachment(args.person)
    return draft


async def run_generate(args: argparse.Namespace) -> int:
    try:
        draft = build_draft(args)
    except BrochureError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    service = BrochureGenerationService(AITunnelImageClient(get_settings()))
    session = BrochureSession(service, draft)
    if not session.can_generate:
        print("Error: a product image and a background are required.", file=sys.stderr)
        await service.close()
        return 2

    print("Creating the brochure... (this can take up to a minute)")
    try:
        result = await session.generate()
    finally:
        await service.close()

    if result is None:
        print(session.error, file=sys.stderr)
        return 1
    try:
        path = save_data_uri(result.image_data_uri, args.output)
    except (BrochureError, OSError) as exc:
        logger.error("Could not save brochure to %s: %s", args.output, exc)
        print(describe_failure(exc), file=sys.stderr)
        return 1
    print(f"Saved brochure to {path}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "brochure.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=logging.getLevelName(logging.getLogger().level).lower(),
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        if args.command == "serve":
            get_settings().require_api_key()
            return run_serve(args)
        return asyncio.run(run_generate(args))
    except ConfigurationError as exc:
        logger.error("Startup failed: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
