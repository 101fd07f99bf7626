"""Services for the photo edit server and client."""

from .image_utils import encode_data_url, file_to_data_url, parse_image_string

__all__ = [
    "encode_data_url",
    "file_to_data_url",
    "parse_image_string",
]
