"""Catalog of selectable styles, populations, eras and locations."""

from fastapi import APIRouter

from ...models import catalog
from ..schemas import CatalogResponse

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog():
    """List the choices offered by the selectors, with their defaults."""
    return CatalogResponse(
        styles=catalog.STYLES,
        populations=catalog.POPULATIONS,
        time_periods=catalog.TIME_PERIODS,
        quick_locations=catalog.QUICK_LOCATIONS,
        default_location=catalog.DEFAULT_LOCATION,
        default_style=catalog.DEFAULT_STYLE,
        default_population=catalog.DEFAULT_POPULATION,
        default_time_period=catalog.DEFAULT_TIME_PERIOD,
    )
