"""Error taxonomy shared by the HTTP and CLI boundaries."""

from __future__ import annotations

GENERATION_FAILED_PREFIX = "Brochure generation failed"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class BrochureError(RuntimeError):
    """Base class for errors surfaced to the user."""


class ConfigurationError(BrochureError):
    """Raised at startup when required configuration is missing."""


class InvalidRequestError(BrochureError, ValueError):
    """Raised when the incoming brochure request is malformed."""


class ProviderError(BrochureError):
    """Raised when the image provider fails or responds unexpectedly."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NoImageReturned(ProviderError):
    """Raised when the provider reply carries no inline image."""

    def __init__(self, message: str = "The provider did not return an image.") -> None:
        super().__init__(message)


def describe_failure(exc: BaseException) -> str:
    """Return the user-readable message for a failed generation."""

    if isinstance(exc, BrochureError) and str(exc):
        detail = str(exc)
    else:
        detail = UNKNOWN_ERROR_MESSAGE
    return f"{GENERATION_FAILED_PREFIX}: {detail}"
