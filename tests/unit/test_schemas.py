"""Tests for API Pydantic schemas."""

import pytest
from pydantic import ValidationError

from terraformer.api.schemas import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
)
from terraformer.models.generation import GenerationResult, ReferenceSource


def _body(**overrides):
    body = {
        "latitude": 41.4036,
        "longitude": 2.1744,
        "style": "Comic",
        "population": "Robots",
        "timePeriod": "Present Day",
        "apiKey": "g-key",
        "mapsApiKey": "m-key",
    }
    body.update(overrides)
    return body


class TestGenerateRequest:
    """Test the inbound request schema."""

    def test_accepts_camel_case(self):
        request = GenerateRequest.model_validate(_body())
        assert request.time_period == "Present Day"
        assert request.maps_api_key == "m-key"
        assert request.missing_fields() == []

    def test_all_missing(self):
        request = GenerateRequest.model_validate({})
        assert request.missing_fields() == [
            "latitude",
            "longitude",
            "style",
            "population",
            "timePeriod",
            "apiKey",
            "mapsApiKey",
        ]

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_strings_are_missing(self, value):
        request = GenerateRequest.model_validate(_body(style=value))
        assert request.missing_fields() == ["style"]

    def test_zero_coordinates_are_present(self):
        request = GenerateRequest.model_validate(_body(latitude=0, longitude=0))
        assert request.missing_fields() == []

    def test_rejects_out_of_range_latitude(self):
        with pytest.raises(ValidationError):
            GenerateRequest.model_validate(_body(latitude=120))

    def test_to_generation_request(self):
        request = GenerateRequest.model_validate(
            _body(streetViewPov={"heading": 90, "pitch": 10})
        )
        internal = request.to_generation_request()
        assert internal.credentials.gemini_api_key == "g-key"
        assert internal.credentials.maps_api_key == "m-key"
        assert internal.pov.heading == 90
        assert internal.pov.pitch == 10


class TestGenerateResponse:
    """Test the success response schema."""

    def test_from_result_uses_camel_case(self):
        result = GenerationResult(
            image_data="data:image/png;base64,QUJD",
            mime_type="image/png",
            reference_url="https://example.com/ref",
            reference_source=ReferenceSource.MAP,
            prompt="p",
            model="m",
        )
        dumped = GenerateResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
        assert dumped == {
            "imageData": "data:image/png;base64,QUJD",
            "referenceMapUrl": "https://example.com/ref",
        }


class TestErrorResponse:
    def test_optional_fields(self):
        err = ErrorResponse(error="boom")
        assert err.model_dump(exclude_none=True) == {"error": "boom"}
