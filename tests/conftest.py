"""Shared test fixtures."""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image

from terraformer.config import AppConfig
from terraformer.models.generation import (
    Credentials,
    GenerationRequest,
    ReferenceSource,
)
from terraformer.services.reference_image_service import ReferenceImage


def _encode(image: Image.Image, fmt: str) -> bytes:
    buf = BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def _make_image_response(image_bytes, mime_type=None):
    inline_data = MagicMock()
    inline_data.data = image_bytes
    inline_data.mime_type = mime_type

    part = MagicMock()
    part.inline_data = inline_data
    part.text = None

    return _wrap_parts([part])


def _make_text_response(text: str):
    part = MagicMock()
    part.inline_data = None
    part.text = text

    return _wrap_parts([part])


def _wrap_parts(parts):
    content = MagicMock()
    content.parts = parts

    candidate = MagicMock()
    candidate.content = content

    response = MagicMock()
    response.candidates = [candidate]
    return response


@pytest.fixture
def png_bytes():
    """32x32 solid-color PNG."""
    return _encode(Image.new("RGBA", (32, 32), (100, 150, 200, 255)), "PNG")


@pytest.fixture
def jpeg_bytes():
    """32x32 solid-color JPEG."""
    return _encode(Image.new("RGB", (32, 32), (200, 100, 50)), "JPEG")


@pytest.fixture
def image_response():
    """Factory for fake Gemini responses whose first part carries inline image data."""
    return _make_image_response


@pytest.fixture
def text_response():
    """Factory for fake Gemini responses with a single text part."""
    return _make_text_response


@pytest.fixture
def credentials():
    return Credentials(gemini_api_key="fake-gemini-key", maps_api_key="fake-maps-key")


@pytest.fixture
def sample_request(credentials):
    """Sagrada Familia, comic style, robots, present day."""
    return GenerationRequest(
        latitude=41.4036,
        longitude=2.1744,
        style="Comic",
        population="Robots",
        time_period="Present Day",
        credentials=credentials,
    )


@pytest.fixture
def sample_reference(jpeg_bytes):
    return ReferenceImage(
        data=jpeg_bytes,
        mime_type="image/jpeg",
        url="https://maps.googleapis.com/maps/api/streetview?location=41.4036,2.1744",
        source=ReferenceSource.STREET_VIEW,
    )


@pytest.fixture
def app_config(tmp_path):
    """Config that never reads the environment."""
    return AppConfig(
        gemini_api_key="fake-gemini-key",
        google_maps_api_key="fake-maps-key",
        output_dir=tmp_path / "output",
    )
