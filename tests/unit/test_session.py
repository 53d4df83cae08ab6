"""Tests for the generation session state machine."""

import pytest

from terraformer.models.catalog import DEFAULT_LOCATION, find_location
from terraformer.models.generation import GenerationResult, ReferenceSource
from terraformer.session import (
    GenerationSession,
    GenerationState,
    SessionBusyError,
    SessionError,
)


@pytest.fixture
def session(credentials):
    return GenerationSession(credentials=credentials)


@pytest.fixture
def result():
    return GenerationResult(
        image_data="data:image/png;base64,QUJD",
        mime_type="image/png",
        reference_url="https://maps.googleapis.com/maps/api/streetview",
        reference_source=ReferenceSource.STREET_VIEW,
        prompt="prompt",
        model="model",
    )


class TestDefaults:
    def test_starts_idle_at_default_location(self):
        session = GenerationSession()
        assert session.state == GenerationState.IDLE
        assert (session.latitude, session.longitude) == (
            DEFAULT_LOCATION.latitude,
            DEFAULT_LOCATION.longitude,
        )
        assert session.style == "Realistic"
        assert session.population == "Real persons"
        assert session.time_period == "Present Day"
        assert not session.busy

    def test_select_location(self, session):
        session.select_location(find_location("Big Ben"))
        assert round(session.latitude, 3) == 51.501


class TestStart:
    def test_start_builds_request(self, session):
        session.style = "Comic"
        request = session.start()
        assert request.style == "Comic"
        assert request.credentials == session.credentials
        assert session.state == GenerationState.LOADING
        assert session.busy

    def test_start_clears_previous_outcome(self, session, result):
        session.start()
        session.succeed(result)
        session.start()
        assert session.result is None
        assert session.error is None
        assert session.state == GenerationState.LOADING

    def test_second_start_while_loading(self, session):
        session.start()
        with pytest.raises(SessionBusyError):
            session.start()

    def test_requires_marker(self, credentials):
        session = GenerationSession(latitude=None, longitude=None, credentials=credentials)
        with pytest.raises(SessionError, match="select a location"):
            session.start()
        assert session.state == GenerationState.IDLE

    def test_requires_credentials(self):
        session = GenerationSession()
        with pytest.raises(SessionError, match="API keys"):
            session.start()

    def test_reset_credentials(self, session):
        session.reset_credentials()
        with pytest.raises(SessionError):
            session.start()


class TestOutcome:
    def test_succeed(self, session, result):
        session.start()
        session.succeed(result)
        assert session.state == GenerationState.SUCCESS
        assert session.result == result
        assert not session.busy

    def test_fail_keeps_details(self, session):
        session.start()
        session.fail("boom", {"code": 403})
        assert session.state == GenerationState.FAILED
        assert session.error == "boom"
        assert session.error_details == {"code": 403}

    def test_fail_without_message(self, session):
        session.start()
        session.fail("")
        assert session.error == "Failed to generate image."

    def test_dismiss_error(self, session):
        session.start()
        session.fail("boom", "details")
        session.dismiss_error()
        assert session.state == GenerationState.IDLE
        assert session.error is None
        assert session.error_details is None

    def test_succeed_requires_loading(self, session, result):
        with pytest.raises(SessionError):
            session.succeed(result)
