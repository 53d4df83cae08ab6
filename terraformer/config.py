"""Configuration management for Terraformer."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .models.generation import Credentials


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class AppConfig(BaseModel):
    """Application-level configuration."""

    # API Keys (used by the CLI; HTTP clients send their own per request)
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Google AI Studio API key for Gemini",
    )
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API key for Street View and Static Maps",
    )

    # Directories
    output_dir: Path = Field(
        default=Path.cwd() / "output",
        description="Default output directory for generated images",
    )

    # Model settings
    gemini_model: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Gemini model for image generation",
    )

    # Reference imagery
    use_street_view: bool = Field(
        default=True,
        description="Try Street View before falling back to the static map",
    )
    image_width: int = Field(default=640, ge=1, le=640, description="Reference image width")
    image_height: int = Field(default=640, ge=1, le=640, description="Reference image height")
    map_zoom: int = Field(default=18, ge=0, le=21, description="Static map zoom level")
    street_view_fov: int = Field(default=90, ge=10, le=120, description="Street View field of view")
    request_timeout: float = Field(default=30.0, gt=0, description="Reference fetch timeout (s)")

    @classmethod
    def load(cls) -> "AppConfig":
        """Load configuration from environment and defaults."""
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY"),
            google_maps_api_key=os.environ.get("GOOGLE_MAPS_API_KEY"),
            output_dir=Path(
                os.environ.get("TERRAFORMER_OUTPUT_DIR", str(cls.model_fields["output_dir"].default))
            ),
            gemini_model=os.environ.get(
                "TERRAFORMER_GEMINI_MODEL", cls.model_fields["gemini_model"].default
            ),
            use_street_view=_env_flag("TERRAFORMER_USE_STREET_VIEW", True),
            request_timeout=float(
                os.environ.get("TERRAFORMER_REQUEST_TIMEOUT", cls.model_fields["request_timeout"].default)
            ),
        )

    @property
    def image_size(self) -> str:
        """Size parameter shared by the Street View and Static Maps APIs."""
        return f"{self.image_width}x{self.image_height}"

    def credentials(self) -> Credentials:
        """Build explicit credentials from the configured keys.

        Raises:
            ValueError: If either key is missing
        """
        if not self.gemini_api_key or not self.google_maps_api_key:
            raise ValueError(
                "Both API keys are required. Set GEMINI_API_KEY (or GOOGLE_API_KEY) "
                "and GOOGLE_MAPS_API_KEY environment variables."
            )
        return Credentials(
            gemini_api_key=self.gemini_api_key,
            maps_api_key=self.google_maps_api_key,
        )

    def ensure_directories(self) -> None:
        """Create necessary directories."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config
