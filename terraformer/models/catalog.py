"""Fixed vocabularies offered to the user, plus quick-jump locations."""

from typing import Optional

from pydantic import BaseModel, Field

from .generation import PRESENT_DAY

STYLES = ["Comic", "Realistic", "Futuristic", "Destroyed", "On Fire", "Flooded"]

POPULATIONS = [
    "Real persons",
    "Bananas",
    "Robots",
    "Zoo animals",
    "Sea animals",
    "Ghosts",
    "Superheroes",
]

TIME_PERIODS = [
    PRESENT_DAY,
    "Ancient Rome",
    "Medieval Times",
    "1920s Art Deco",
    "1980s Cyberpunk",
    "Distant Future",
    "Prehistoric",
]


class QuickLocation(BaseModel):
    """A named point the user can jump to."""

    name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


QUICK_LOCATIONS = [
    QuickLocation(name="Sagrada Familia", latitude=41.40257803767475, longitude=2.1732777623883983),
    QuickLocation(name="Eiffel Tower", latitude=48.85621812639946, longitude=2.2976898891584367),
    QuickLocation(name="Big Ben", latitude=51.50084938916221, longitude=-0.12146039590768407),
    QuickLocation(name="Times Square", latitude=40.75798429360665, longitude=-73.98552951012392),
    QuickLocation(name="Golden Gate", latitude=37.809262497364884, longitude=-122.47001919306939),
    QuickLocation(name="Giza Pyramids", latitude=29.977521522895263, longitude=31.13229822197485),
]

DEFAULT_LOCATION = QuickLocation(name="Andorra la Vella", latitude=42.5063, longitude=1.5218)
DEFAULT_STYLE = "Realistic"
DEFAULT_POPULATION = "Real persons"
DEFAULT_TIME_PERIOD = PRESENT_DAY


def find_location(name: str) -> Optional[QuickLocation]:
    """Find a quick location by name (case-insensitive)."""
    name_lower = name.strip().lower()
    for location in QUICK_LOCATIONS + [DEFAULT_LOCATION]:
        if location.name.lower() == name_lower:
            return location
    return None
