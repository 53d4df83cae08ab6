"""Image processing utilities."""

import base64
import binascii
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

DEFAULT_IMAGE_MIME = "image/png"

EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def to_data_url(data: Union[bytes, str], mime_type: Optional[str] = None) -> str:
    """Build a data URL from raw bytes or an already base64-encoded string."""
    if isinstance(data, bytes):
        payload = base64.b64encode(data).decode("ascii")
    else:
        payload = data
    return f"data:{mime_type or DEFAULT_IMAGE_MIME};base64,{payload}"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """
    Split a base64 data URL into its media type and decoded bytes.

    Args:
        data_url: String of the form ``data:<mime>;base64,<payload>``

    Returns:
        (mime_type, payload bytes)

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")

    header, payload = data_url[5:].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")

    mime_type = header[: -len(";base64")] or DEFAULT_IMAGE_MIME
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


def sniff_mime_type(data: bytes, default: str = "image/jpeg") -> str:
    """Guess the media type of encoded image bytes."""
    try:
        with Image.open(BytesIO(data)) as image:
            return Image.MIME.get(image.format, default)
    except (UnidentifiedImageError, OSError):
        return default


def load_image_bytes(data: bytes) -> Image.Image:
    """Decode image bytes into a PIL Image."""
    image = Image.open(BytesIO(data))
    image.load()
    return image


def save_image(image: Image.Image, path: Union[str, Path], quality: int = 95) -> None:
    """Save an image to file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() in (".jpg", ".jpeg"):
        # JPEG has no alpha channel
        if image.mode in ("RGBA", "LA", "P"):
            image = image.convert("RGBA")
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        image.save(path, quality=quality)
    else:
        image.save(path)


def save_data_url(data_url: str, path: Union[str, Path]) -> Path:
    """
    Decode a data URL and write it as an image file.

    A path without an extension gets one matching the data URL's media type.

    Returns:
        The path actually written
    """
    mime_type, data = decode_data_url(data_url)
    path = Path(path)
    if not path.suffix:
        path = path.with_name(path.name + EXTENSIONS.get(mime_type, ".png"))
    save_image(load_image_bytes(data), path)
    return path
