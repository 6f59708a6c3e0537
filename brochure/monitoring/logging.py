"""Logging configuration module."""

from __future__ import annotations

import logging

from brochure.config.settings import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logger according to project conventions."""

    level_name = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
