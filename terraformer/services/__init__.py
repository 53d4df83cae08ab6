"""Terraformer services."""

from .gemini_service import GeminiService, ImageResult, NoImageReturnedError
from .generation_service import GenerationService
from .prompt_service import build_prompt
from .reference_image_service import ReferenceImage, ReferenceImageError, ReferenceImageService

__all__ = [
    "GeminiService",
    "ImageResult",
    "NoImageReturnedError",
    "GenerationService",
    "build_prompt",
    "ReferenceImage",
    "ReferenceImageError",
    "ReferenceImageService",
]
