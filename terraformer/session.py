"""Selection and result state for one user driving generation cycles."""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from .models.catalog import (
    DEFAULT_LOCATION,
    DEFAULT_POPULATION,
    DEFAULT_STYLE,
    DEFAULT_TIME_PERIOD,
    QuickLocation,
)
from .models.generation import Credentials, GenerationRequest, GenerationResult, StreetViewPov

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    """State of the current generation cycle."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class SessionBusyError(RuntimeError):
    """A generation is already running for this session."""


class SessionError(ValueError):
    """The session is not ready to generate."""


class GenerationSession(BaseModel):
    """Everything the user has picked, plus the outcome of the last cycle."""

    latitude: Optional[float] = Field(default=DEFAULT_LOCATION.latitude, ge=-90, le=90)
    longitude: Optional[float] = Field(default=DEFAULT_LOCATION.longitude, ge=-180, le=180)
    style: str = DEFAULT_STYLE
    population: str = DEFAULT_POPULATION
    time_period: str = DEFAULT_TIME_PERIOD
    pov: Optional[StreetViewPov] = None
    credentials: Optional[Credentials] = None

    state: GenerationState = GenerationState.IDLE
    result: Optional[GenerationResult] = None
    error: Optional[str] = None
    error_details: Optional[Any] = None

    @property
    def busy(self) -> bool:
        """True while a request is in flight."""
        return self.state == GenerationState.LOADING

    @property
    def has_marker(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def select_location(self, location: QuickLocation) -> None:
        """Move the marker to a named location."""
        self.latitude = location.latitude
        self.longitude = location.longitude

    def set_credentials(self, credentials: Credentials) -> None:
        self.credentials = credentials

    def reset_credentials(self) -> None:
        self.credentials = None

    def start(self) -> GenerationRequest:
        """
        Begin a generation cycle.

        Clears the previous result and error and moves to LOADING.

        Returns:
            The request to send

        Raises:
            SessionBusyError: If a cycle is already running
            SessionError: If the marker or the API keys are missing
        """
        if self.busy:
            raise SessionBusyError("A generation is already in progress.")
        if not self.has_marker:
            raise SessionError("Please select a location on the map.")
        if self.credentials is None:
            raise SessionError("API keys are not set. Please set them and try again.")

        request = GenerationRequest(
            latitude=self.latitude,
            longitude=self.longitude,
            style=self.style,
            population=self.population,
            time_period=self.time_period,
            pov=self.pov,
            credentials=self.credentials,
        )

        self.result = None
        self.error = None
        self.error_details = None
        self.state = GenerationState.LOADING
        return request

    def succeed(self, result: GenerationResult) -> None:
        """Finish the cycle with an image."""
        self._require_loading()
        self.result = result
        self.state = GenerationState.SUCCESS

    def fail(self, error: str, details: Optional[Any] = None) -> None:
        """Finish the cycle with an error message and optional raw details."""
        self._require_loading()
        self.error = error or "Failed to generate image."
        self.error_details = details
        self.state = GenerationState.FAILED
        logger.info("Generation failed: %s", self.error)

    def dismiss_error(self) -> None:
        """Close the error panel."""
        if self.state == GenerationState.FAILED:
            self.error = None
            self.error_details = None
            self.state = GenerationState.IDLE

    def _require_loading(self) -> None:
        if self.state != GenerationState.LOADING:
            raise SessionError(f"No generation in progress (state: {self.state.value}).")
