"""API request/response models."""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.catalog import QuickLocation
from ..models.generation import Credentials, GenerationRequest, GenerationResult, StreetViewPov


class CamelModel(BaseModel):
    """Model exchanged with browser clients using camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Generation Schemas
# =============================================================================


class GenerateRequest(CamelModel):
    """Body of POST /api/generate.

    Every field is optional at the schema level so that absent and empty
    values can both be reported as missing with a 400.
    """

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    style: Optional[str] = None
    population: Optional[str] = None
    time_period: Optional[str] = None
    api_key: Optional[str] = None
    maps_api_key: Optional[str] = None
    street_view_pov: Optional[StreetViewPov] = None

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "latitude",
        "longitude",
        "style",
        "population",
        "time_period",
        "api_key",
        "maps_api_key",
    )

    def missing_fields(self) -> list[str]:
        """Wire names of required fields that are absent or blank."""
        missing = []
        for name in self.REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(to_camel(name))
        return missing

    def to_generation_request(self) -> GenerationRequest:
        """Convert to the internal request. Call after missing_fields() is empty."""
        return GenerationRequest(
            latitude=self.latitude,
            longitude=self.longitude,
            style=self.style,
            population=self.population,
            time_period=self.time_period,
            pov=self.street_view_pov,
            credentials=Credentials(
                gemini_api_key=self.api_key,
                maps_api_key=self.maps_api_key,
            ),
        )


class GenerateResponse(CamelModel):
    """Successful generation."""

    image_data: str
    reference_map_url: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerateResponse":
        return cls(
            image_data=result.image_data,
            reference_map_url=result.reference_url,
            message=result.message,
        )


# =============================================================================
# Common Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: Optional[str] = None
    details: Optional[Any] = None


class CatalogResponse(CamelModel):
    """Selectable vocabularies and defaults."""

    styles: list[str]
    populations: list[str]
    time_periods: list[str]
    quick_locations: list[QuickLocation]
    default_location: QuickLocation
    default_style: str
    default_population: str
    default_time_period: str
