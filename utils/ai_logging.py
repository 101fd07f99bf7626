"""AI logging utilities for image input visibility.

Extracts metadata (dimensions, byte size, MIME type) from images sent to the
model so requests can be logged without writing image data to the log.
"""

import base64
import binascii
import io
import logging
from typing import TypedDict

from PIL import Image

from services.image_utils import parse_image_string

logger = logging.getLogger(__name__)


class ImageMetadata(TypedDict):
    """Metadata extracted from an image."""

    width: int
    height: int
    sizeBytes: int
    mimeType: str


def _decoded_size(base64_data: str) -> int:
    try:
        return len(base64.b64decode(base64_data))
    except (binascii.Error, ValueError):
        return 0


def get_image_metadata(base64_data: str, mime_type: str = "image/png") -> ImageMetadata:
    """
    Extract metadata from base64 image data.

    Args:
        base64_data: Base64-encoded image data (without data URL prefix).
        mime_type: MIME type of the image.

    Returns:
        Dictionary with width, height, sizeBytes, and mimeType.
        Width and height are 0 if the data is not a readable image.
    """
    try:
        image_bytes = base64.b64decode(base64_data)
        with Image.open(io.BytesIO(image_bytes)) as img:
            width, height = img.size

        return ImageMetadata(
            width=width,
            height=height,
            sizeBytes=len(image_bytes),
            mimeType=mime_type,
        )

    except Exception as e:
        logger.warning("Failed to get image metadata: %s", e)
        return ImageMetadata(
            width=0,
            height=0,
            sizeBytes=_decoded_size(base64_data) if base64_data else 0,
            mimeType=mime_type,
        )


def log_image_inputs(
    logger_instance: logging.Logger,
    source_image: str | None = None,
) -> None:
    """
    Log the source image with metadata only (no base64 data).

    Args:
        logger_instance: Logger to use for output.
        source_image: Self-describing image string (optional). Strings that
            cannot be parsed are skipped; the endpoint reports them.
    """
    if not source_image:
        return

    try:
        parsed = parse_image_string(source_image)
    except ValueError:
        return

    metadata = get_image_metadata(parsed.data, parsed.mime_type)
    logger_instance.info("Image inputs: %s", {"sourceImage": metadata})
