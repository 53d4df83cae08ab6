"""Tests for generation request/result models."""

import pytest
from pydantic import ValidationError

from terraformer.models.generation import (
    Credentials,
    GenerationRequest,
    StreetViewPov,
)


class TestCredentials:
    """Test credentials model."""

    def test_requires_both_keys(self):
        with pytest.raises(ValidationError):
            Credentials(gemini_api_key="key", maps_api_key="")

    def test_repr_hides_keys(self):
        creds = Credentials(gemini_api_key="secret-a", maps_api_key="secret-b")
        assert "secret-a" not in repr(creds)
        assert "secret-b" not in repr(creds)


class TestStreetViewPov:
    """Test viewpoint bounds."""

    def test_defaults(self):
        pov = StreetViewPov()
        assert pov.heading == 0
        assert pov.pitch == 0

    def test_rejects_out_of_range_pitch(self):
        with pytest.raises(ValidationError):
            StreetViewPov(heading=10, pitch=95)

    def test_rejects_out_of_range_heading(self):
        with pytest.raises(ValidationError):
            StreetViewPov(heading=400, pitch=0)


class TestGenerationRequest:
    """Test request validation."""

    def test_valid_request(self, sample_request):
        assert sample_request.coordinates == (41.4036, 2.1744)
        assert sample_request.pov is None

    def test_zero_coordinates_are_valid(self, credentials):
        request = GenerationRequest(
            latitude=0.0,
            longitude=0.0,
            style="Comic",
            population="Robots",
            credentials=credentials,
        )
        assert request.coordinates == (0.0, 0.0)
        assert request.time_period == "Present Day"

    def test_strips_text_fields(self, credentials):
        request = GenerationRequest(
            latitude=1,
            longitude=2,
            style="  Comic ",
            population=" Robots",
            time_period="Prehistoric ",
            credentials=credentials,
        )
        assert request.style == "Comic"
        assert request.population == "Robots"
        assert request.time_period == "Prehistoric"

    @pytest.mark.parametrize("field", ["style", "population", "time_period"])
    def test_rejects_blank_text(self, credentials, field):
        data = {
            "latitude": 1,
            "longitude": 2,
            "style": "Comic",
            "population": "Robots",
            "time_period": "Present Day",
            "credentials": credentials,
        }
        data[field] = "   "
        with pytest.raises(ValidationError):
            GenerationRequest(**data)

    def test_rejects_out_of_range_latitude(self, credentials):
        with pytest.raises(ValidationError):
            GenerationRequest(
                latitude=91,
                longitude=0,
                style="Comic",
                population="Robots",
                credentials=credentials,
            )
