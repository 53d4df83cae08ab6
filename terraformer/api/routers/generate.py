"""Image generation endpoint."""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...config import get_config
from ...services.gemini_service import NoImageReturnedError
from ...services.generation_service import GenerationService
from ...services.reference_image_service import ReferenceImageError
from ..schemas import ErrorResponse, GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_FIELDS_ERROR = "Missing required fields"
REFERENCE_ERROR = "Failed to fetch reference image"
NO_IMAGE_ERROR = "The API did not return a valid image. It may have responded with text."
FALLBACK_ERROR = "Internal Server Error"


def error_response(
    status_code: int,
    error: str,
    message: Optional[str] = None,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Build an error response in the shared {error, message?, details?} shape."""
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _error_details(exc: Exception) -> Optional[Any]:
    """Structured details carried by an upstream error, if JSON-shaped."""
    details = getattr(exc, "details", None)
    if isinstance(details, (dict, list, str)):
        return details
    return None


@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_image(request: GenerateRequest):
    """Generate an image for a point from its Street View photo or map."""
    missing = request.missing_fields()
    if missing:
        logger.warning("Rejected generation request, missing: %s", ", ".join(missing))
        return error_response(400, MISSING_FIELDS_ERROR, details=missing)

    service = GenerationService(config=get_config())

    try:
        result = await asyncio.to_thread(service.generate, request.to_generation_request())
    except ReferenceImageError as exc:
        return error_response(500, REFERENCE_ERROR, message=str(exc))
    except NoImageReturnedError as exc:
        return error_response(400, NO_IMAGE_ERROR, message=str(exc), details=exc.text)
    except Exception as exc:
        logger.exception("Error in /api/generate")
        return error_response(
            500,
            str(exc) or FALLBACK_ERROR,
            details=_error_details(exc),
        )

    return GenerateResponse.from_result(result)
