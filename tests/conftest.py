"""Pytest configuration and fixtures."""

import json
from datetime import datetime
from zoneinfo import ZoneInfo

import matplotlib
import pytest

matplotlib.use("Agg")

from models import (  # noqa: E402
    STATUS_FAILED,
    STATUS_OK,
    Destination,
    DestinationSampleSet,
    GeocodeResult,
    SampleResult,
)
from sample_store import RawSampleStore  # noqa: E402

PACIFIC = ZoneInfo("America/Los_Angeles")


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """
    Replays queued responses in order. A queued exception is raised instead
    of returned. Every call is recorded.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)


class FakeGeocoder:
    """Geocoder backed by a dict; unknown addresses raise GeocodingError."""

    def __init__(self, known=None):
        self.known = dict(known or {})
        self.calls = []

    def geocode(self, address):
        from errors import GeocodingError

        self.calls.append(address)
        if address not in self.known:
            raise GeocodingError("Geocoding failed: ZERO_RESULTS")
        lat, lng, formatted = self.known[address]
        return GeocodeResult(lat=lat, lng=lng, formatted_address=formatted)


def ok(origin, duration, neighborhood=None, distance=1000.0):
    return SampleResult(origin, neighborhood or origin, float(duration), distance, STATUS_OK)


def failed(origin, neighborhood=None):
    return SampleResult(origin, neighborhood or origin, 0.0, 0.0, STATUS_FAILED)


def sample_set(destination_id, *results):
    return DestinationSampleSet(destination_id, destination_id.title(), f"{destination_id} address", list(results))


def destination(destination_id, rush_trips=0, offpeak_trips=0, lat=37.8, lng=-122.3):
    return Destination(
        id=destination_id,
        name=destination_id.title(),
        address=f"{destination_id} address",
        lat=lat,
        lng=lng,
        rush_trips=rush_trips,
        offpeak_trips=offpeak_trips,
    )


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2026-10-16 10:30 Pacific."""
    moment = datetime(2026, 10, 16, 10, 30, tzinfo=PACIFIC)
    return lambda: moment


class SleepRecorder:
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def empty_store():
    return RawSampleStore()


@pytest.fixture
def geocoder():
    return FakeGeocoder(
        {
            "2140 Mandela Pkwy, Oakland": (37.8199, -122.2946, "2140 Mandela Pkwy, Oakland, CA 94607, USA"),
            "University Ave, Palo Alto": (37.4419, -122.1430, "University Ave, Palo Alto, CA 94301, USA"),
        }
    )
