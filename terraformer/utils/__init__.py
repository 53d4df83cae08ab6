"""Utility functions for Terraformer."""

from .image_utils import (
    DEFAULT_IMAGE_MIME,
    decode_data_url,
    load_image_bytes,
    save_data_url,
    save_image,
    sniff_mime_type,
    to_data_url,
)

__all__ = [
    "DEFAULT_IMAGE_MIME",
    "decode_data_url",
    "load_image_bytes",
    "save_data_url",
    "save_image",
    "sniff_mime_type",
    "to_data_url",
]
