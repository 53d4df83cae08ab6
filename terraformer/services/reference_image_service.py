"""Reference imagery from Google Street View and Static Maps."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..models.generation import ReferenceSource, StreetViewPov
from ..utils.image_utils import sniff_mime_type

logger = logging.getLogger(__name__)


class ReferenceImageError(RuntimeError):
    """Raised when no reference image could be fetched for a point."""


@dataclass
class ReferenceImage:
    """Image bytes sent to the model as visual reference."""

    data: bytes
    mime_type: str
    url: str
    source: ReferenceSource


class ReferenceImageService:
    """Fetches a street-level photo of a point, or a map of it as fallback."""

    STREET_VIEW_URL = "https://maps.googleapis.com/maps/api/streetview"
    STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"

    # Hide labels so the model does not copy text into the scene
    MAP_STYLE = "feature:all|element:labels|visibility:off"

    def __init__(
        self,
        api_key: str,
        size: str = "640x640",
        zoom: int = 18,
        fov: int = 90,
        use_street_view: bool = True,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize reference image service.

        Args:
            api_key: Google Maps API key
            size: Image size as WIDTHxHEIGHT
            zoom: Static map zoom level
            fov: Street View horizontal field of view
            use_street_view: Try Street View before the static map
            timeout: HTTP timeout in seconds
            client: Optional pre-configured HTTP client
        """
        if not api_key:
            raise ValueError("Google Maps API key required.")

        self.api_key = api_key
        self.size = size
        self.zoom = zoom
        self.fov = fov
        self.use_street_view = use_street_view
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def street_view_url(
        self,
        latitude: float,
        longitude: float,
        pov: Optional[StreetViewPov] = None,
    ) -> str:
        """Build a Street View Static API URL for a point."""
        params = {
            "size": self.size,
            "location": f"{latitude},{longitude}",
            "fov": self.fov,
        }
        if pov is not None:
            params["heading"] = pov.heading
            params["pitch"] = pov.pitch
        # Without this the API answers 200 with a grey placeholder
        params["return_error_code"] = "true"
        params["key"] = self.api_key
        return str(httpx.URL(self.STREET_VIEW_URL, params=params))

    def static_map_url(self, latitude: float, longitude: float) -> str:
        """Build a Static Maps API URL centered on a red marker at the point."""
        params = {
            "center": f"{latitude},{longitude}",
            "zoom": self.zoom,
            "size": self.size,
            "maptype": "roadmap",
            "markers": f"color:red|{latitude},{longitude}",
            "style": self.MAP_STYLE,
            "key": self.api_key,
        }
        return str(httpx.URL(self.STATIC_MAP_URL, params=params))

    def fetch(
        self,
        latitude: float,
        longitude: float,
        pov: Optional[StreetViewPov] = None,
    ) -> ReferenceImage:
        """
        Fetch the reference image for a point.

        Street View is tried first; any failure falls back to the static map
        exactly once.

        Args:
            latitude: Latitude of the point
            longitude: Longitude of the point
            pov: Optional Street View camera orientation

        Returns:
            ReferenceImage with bytes, media type and source URL

        Raises:
            ReferenceImageError: If the static map cannot be fetched either
        """
        if self.use_street_view:
            url = self.street_view_url(latitude, longitude, pov)
            try:
                return self._download(url, ReferenceSource.STREET_VIEW)
            except httpx.HTTPError as exc:
                logger.info(
                    "Street View unavailable at (%.5f, %.5f), falling back to map: %s",
                    latitude,
                    longitude,
                    self._describe(exc),
                )

        url = self.static_map_url(latitude, longitude)
        try:
            return self._download(url, ReferenceSource.MAP)
        except httpx.HTTPError as exc:
            logger.error("Static map fetch failed: %s", self._describe(exc))
            raise ReferenceImageError(
                f"Failed to fetch reference image: {self._describe(exc)}"
            ) from exc

    def _download(self, url: str, source: ReferenceSource) -> ReferenceImage:
        response = self._client.get(url)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        if content_type.startswith("image/"):
            mime_type = content_type
        else:
            mime_type = sniff_mime_type(response.content)

        logger.debug("Fetched %s reference (%d bytes, %s)", source.value, len(response.content), mime_type)

        return ReferenceImage(
            data=response.content,
            mime_type=mime_type,
            url=url,
            source=source,
        )

    def _describe(self, exc: httpx.HTTPError) -> str:
        """Error text with the API key scrubbed out."""
        if isinstance(exc, httpx.HTTPStatusError):
            message = f"Status {exc.response.status_code}"
        else:
            message = str(exc) or type(exc).__name__
        return message.replace(self.api_key, "***")

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
