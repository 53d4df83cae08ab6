"""Gemini AI image generation service.

Uses the Google GenAI SDK to transform a reference image into a new scene
with a Gemini model that supports native image output.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..utils.image_utils import DEFAULT_IMAGE_MIME, to_data_url
from .reference_image_service import ReferenceImage

logger = logging.getLogger(__name__)


class NoImageReturnedError(ValueError):
    """The model answered with text instead of an image."""

    def __init__(self, text: str):
        super().__init__("The model returned text, not an image.")
        self.text = text


@dataclass
class ImageResult:
    """Result from image generation."""

    data_url: str
    mime_type: str
    prompt_used: str
    model: str
    generation_time: float


class GeminiService:
    """Service for AI image generation using Google Gemini.

    See: https://ai.google.dev/gemini-api/docs/image-generation
    """

    DEFAULT_MODEL = "gemini-2.5-flash-image-preview"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
    ):
        """
        Initialize Gemini service.

        Args:
            api_key: Google AI Studio API key
            model: Model to use for generation
        """
        if not api_key:
            raise ValueError("Gemini API key required.")

        self.api_key = api_key
        self.model = model
        self._client = None

    @property
    def client(self):
        """Lazy initialization of GenAI client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate_from_reference(
        self,
        reference: ReferenceImage,
        prompt: str,
    ) -> ImageResult:
        """
        Generate a new image guided by a reference image.

        Args:
            reference: Street View photo or map of the place
            prompt: Instruction text

        Returns:
            ImageResult with the generated image as a data URL

        Raises:
            NoImageReturnedError: If the response holds no inline image
        """
        from google.genai import types

        contents = [
            prompt,
            types.Part.from_bytes(data=reference.data, mime_type=reference.mime_type),
        ]

        start_time = time.time()

        response = self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["TEXT", "IMAGE"],
            ),
        )

        generation_time = time.time() - start_time

        data_url, mime_type = self._extract_image_from_response(response)

        logger.info("Generated %s image with %s in %.1fs", mime_type, self.model, generation_time)

        return ImageResult(
            data_url=data_url,
            mime_type=mime_type,
            prompt_used=prompt,
            model=self.model,
            generation_time=generation_time,
        )

    def _extract_image_from_response(self, response) -> tuple[str, str]:
        """Return (data URL, media type) of the first inline image part.

        The SDK returns inline data as raw bytes; strings are taken to be
        base64 already.
        """
        for part in self._candidate_parts(response):
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or not getattr(inline_data, "data", None):
                continue

            mime_type = getattr(inline_data, "mime_type", None)
            if not isinstance(mime_type, str) or not mime_type:
                mime_type = DEFAULT_IMAGE_MIME

            return to_data_url(inline_data.data, mime_type), mime_type

        text = self._extract_text_from_response(response)
        logger.error("Model did not return an image. Text response: %s", text)
        raise NoImageReturnedError(text)

    def _extract_text_from_response(self, response) -> str:
        """Collect the textual answer of the first candidate."""
        texts = [
            part.text
            for part in self._candidate_parts(response)
            if isinstance(getattr(part, "text", None), str) and part.text
        ]
        if texts:
            return "\n".join(texts)

        text = getattr(response, "text", None)
        return text if isinstance(text, str) else ""

    @staticmethod
    def _candidate_parts(response) -> list:
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return []
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None)
        return list(parts) if parts else []

    def close(self):
        """Close the GenAI client, if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
