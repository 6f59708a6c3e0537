"""Loading local image files as request attachments."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from brochure.errors import InvalidRequestError
from brochure.imggen.models import ImageAttachment


def load_attachment(source_path: Path) -> ImageAttachment:
    """Read an image file and detect its media type from the decoded format."""

    path = source_path.expanduser()
    if not path.exists():
        raise InvalidRequestError(f"Image file not found: {path}")
    try:
        with Image.open(path) as img:
            img.verify()
            media_type = Image.MIME.get(img.format or "", "")
    except UnidentifiedImageError as exc:
        raise InvalidRequestError(f"File {path} is not a supported image.") from exc
    if not media_type:
        raise InvalidRequestError(f"Cannot determine the media type of {path}.")
    return ImageAttachment.from_bytes(path.read_bytes(), media_type)
