"""Image utility functions for data URL handling."""

from __future__ import annotations

import base64
import mimetypes
import re
from pathlib import Path
from typing import NamedTuple

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_RE = re.compile(r"^data:([^;,]+);base64,(.*)$", re.DOTALL)
_MIME_PAIR_RE = re.compile(r"^([\w.+-]+/[\w.+-]+);(.*)$", re.DOTALL)


class DataURL(NamedTuple):
    """Parsed image string components (payload stays base64 encoded)."""

    mime_type: str
    data: str


def parse_image_string(image: str) -> DataURL:
    """
    Split a self-describing image string into MIME type and base64 payload.

    Both forms used by the client are accepted:
    - "data:<mime>;base64,<payload>"
    - "<mime>;<payload>"

    Raises:
        ValueError: If the string matches neither form or has no payload.

    Examples:
        >>> parse_image_string("data:image/png;base64,aGVsbG8=")
        DataURL(mime_type='image/png', data='aGVsbG8=')
        >>> parse_image_string("image/jpeg;aGVsbG8=")
        DataURL(mime_type='image/jpeg', data='aGVsbG8=')
    """
    match = _DATA_URL_RE.match(image) or _MIME_PAIR_RE.match(image)
    if not match or not match.group(2):
        raise ValueError("Invalid image string: expected data URL or '<mime>;<base64>'")
    return DataURL(mime_type=match.group(1), data=match.group(2))


def encode_data_url(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Wrap raw image bytes in a 'data:<mime>;base64,' URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def file_to_data_url(path: str | Path) -> str:
    """Read a local image file and encode it as a data URL."""
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    return encode_data_url(path.read_bytes(), mime_type or DEFAULT_MIME_TYPE)
