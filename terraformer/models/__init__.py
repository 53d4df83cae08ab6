"""Data models for Terraformer."""

from .catalog import (
    DEFAULT_LOCATION,
    DEFAULT_POPULATION,
    DEFAULT_STYLE,
    DEFAULT_TIME_PERIOD,
    POPULATIONS,
    QUICK_LOCATIONS,
    STYLES,
    TIME_PERIODS,
    QuickLocation,
    find_location,
)
from .generation import (
    PRESENT_DAY,
    Credentials,
    GenerationRequest,
    GenerationResult,
    ReferenceSource,
    StreetViewPov,
)

__all__ = [
    "DEFAULT_LOCATION",
    "DEFAULT_POPULATION",
    "DEFAULT_STYLE",
    "DEFAULT_TIME_PERIOD",
    "POPULATIONS",
    "QUICK_LOCATIONS",
    "STYLES",
    "TIME_PERIODS",
    "QuickLocation",
    "find_location",
    "PRESENT_DAY",
    "Credentials",
    "GenerationRequest",
    "GenerationResult",
    "ReferenceSource",
    "StreetViewPov",
]
