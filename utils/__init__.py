"""Utility functions for the photo edit server."""

from .ai_logging import (
    ImageMetadata,
    get_image_metadata,
    log_image_inputs,
)

__all__ = [
    "get_image_metadata",
    "log_image_inputs",
    "ImageMetadata",
]
