"""Generation pipeline: reference image, prompt, model call."""

import logging
from typing import Optional

from ..config import AppConfig, get_config
from ..models.generation import GenerationRequest, GenerationResult, ReferenceSource
from .gemini_service import GeminiService
from .prompt_service import build_prompt
from .reference_image_service import ReferenceImageService

logger = logging.getLogger(__name__)

MAP_FALLBACK_MESSAGE = (
    "No Street View imagery was found near this point, so the map was used as reference."
)


class GenerationService:
    """Runs one generation cycle for a request.

    Service instances are built per request because the credentials
    travel with the request.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or get_config()

    def reference_service(self, request: GenerationRequest) -> ReferenceImageService:
        """Build the reference fetcher for a request's Maps key."""
        return ReferenceImageService(
            api_key=request.credentials.maps_api_key,
            size=self.config.image_size,
            zoom=self.config.map_zoom,
            fov=self.config.street_view_fov,
            use_street_view=self.config.use_street_view,
            timeout=self.config.request_timeout,
        )

    def gemini_service(self, request: GenerationRequest) -> GeminiService:
        """Build the generation client for a request's Gemini key."""
        return GeminiService(
            api_key=request.credentials.gemini_api_key,
            model=self.config.gemini_model,
        )

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Produce an image for a request.

        Args:
            request: Validated generation request

        Returns:
            GenerationResult with the image as a data URL

        Raises:
            ReferenceImageError: If no reference image could be fetched
            NoImageReturnedError: If the model answered with text only
        """
        logger.info(
            "Generating '%s' / '%s' / '%s' at (%.5f, %.5f)",
            request.style,
            request.population,
            request.time_period,
            request.latitude,
            request.longitude,
        )

        with self.reference_service(request) as fetcher:
            reference = fetcher.fetch(request.latitude, request.longitude, request.pov)

        prompt = build_prompt(
            style=request.style,
            population=request.population,
            time_period=request.time_period,
            source=reference.source,
            pov=request.pov,
        )
        logger.debug("Prompt: %s", prompt)

        with self.gemini_service(request) as gemini:
            image = gemini.generate_from_reference(reference, prompt)

        message = None
        if reference.source == ReferenceSource.MAP and self.config.use_street_view:
            message = MAP_FALLBACK_MESSAGE

        return GenerationResult(
            image_data=image.data_url,
            mime_type=image.mime_type,
            reference_url=reference.url,
            reference_source=reference.source,
            prompt=image.prompt_used,
            model=image.model,
            generation_time=image.generation_time,
            message=message,
        )
