"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_aitunnel_images,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_aitunnel_images",
    "run_all_checks",
]
