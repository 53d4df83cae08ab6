"""Request and result models for a single generation cycle."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

PRESENT_DAY = "Present Day"


class ReferenceSource(str, Enum):
    """Where the reference image sent to the model came from."""

    STREET_VIEW = "street_view"
    MAP = "map"


class Credentials(BaseModel):
    """API keys for the two external services, passed explicitly to each call."""

    gemini_api_key: str = Field(..., min_length=1, repr=False, description="Google AI Studio API key")
    maps_api_key: str = Field(..., min_length=1, repr=False, description="Google Maps API key")


class StreetViewPov(BaseModel):
    """Street View camera orientation."""

    heading: float = Field(default=0, ge=0, le=360, description="Compass heading in degrees")
    pitch: float = Field(default=0, ge=-90, le=90, description="Up/down angle in degrees")


class GenerationRequest(BaseModel):
    """Everything needed to produce one image for one point."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    style: str = Field(..., min_length=1, description="Visual style")
    population: str = Field(..., min_length=1, description="Who inhabits the scene")
    time_period: str = Field(default=PRESENT_DAY, min_length=1, description="Era of the scene")
    pov: Optional[StreetViewPov] = Field(default=None, description="Optional viewpoint")
    credentials: Credentials

    @field_validator("style", "population", "time_period")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


class GenerationResult(BaseModel):
    """Successful outcome of a generation cycle."""

    image_data: str = Field(..., description="data: URL of the generated image")
    mime_type: str
    reference_url: str
    reference_source: ReferenceSource
    prompt: str
    model: str
    generation_time: float = 0.0
    message: Optional[str] = None
