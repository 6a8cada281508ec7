# tests/conftest.py
import copy
import json
import logging
from collections.abc import Callable

import httpx
import pytest
import structlog

from geocode_client.services.cache_store import MemoryCacheStore
from geocode_client.services.geocode import GeocodingClient

API_KEY = "test-api-key"

GOOGLEPLEX = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "1600 Amphitheatre Parkway, Mountain View, CA 94043, USA",
            "place_id": "ChIJj61dQgK6j4AR4GeTYWZsKWw",
            "types": ["street_address"],
            "partial_match": False,
            "geometry": {
                "location": {"lat": 37.4220, "lng": -122.0841},
                "location_type": "ROOFTOP",
                "viewport": {
                    "northeast": {"lat": 37.4233, "lng": -122.0828},
                    "southwest": {"lat": 37.4206, "lng": -122.0855},
                },
            },
            "plus_code": {
                "compound_code": "CWC8+W5 Mountain View, California, United States",
                "global_code": "849VCWC8+W5",
            },
            "address_components": [
                {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
                {
                    "long_name": "Amphitheatre Parkway",
                    "short_name": "Amphitheatre Pkwy",
                    "types": ["route"],
                },
                {
                    "long_name": "Mountain View",
                    "short_name": "Mountain View",
                    "types": ["locality", "political"],
                },
                {
                    "long_name": "Santa Clara County",
                    "short_name": "Santa Clara County",
                    "types": ["administrative_area_level_2", "political"],
                },
                {
                    "long_name": "California",
                    "short_name": "CA",
                    "types": ["administrative_area_level_1", "political"],
                },
                {
                    "long_name": "United States",
                    "short_name": "US",
                    "types": ["country", "political"],
                },
                {"long_name": "94043", "short_name": "94043", "types": ["postal_code"]},
            ],
        }
    ],
}

ZERO_RESULTS = {"status": "ZERO_RESULTS", "results": []}


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport:
    """httpx transport that answers every request through ``handler`` and keeps the requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def googleplex_payload():
    return copy.deepcopy(GOOGLEPLEX)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def make_client(store):
    """Build a client whose HTTP layer is an ``httpx.MockTransport``.

    ``respond`` is either a JSON-able payload, raw bytes for the body, or a
    request handler.
    """

    clients: list[GeocodingClient] = []

    def _make(respond, **kwargs):
        if callable(respond):
            handler = respond
        elif isinstance(respond, bytes):
            handler = lambda request: httpx.Response(200, content=respond)  # noqa: E731
        else:
            body = json.dumps(respond).encode()
            handler = lambda request: httpx.Response(200, content=body)  # noqa: E731
        transport = RecordingTransport(handler)
        http_client = httpx.Client(transport=httpx.MockTransport(transport))
        kwargs.setdefault("cache", store)
        client = GeocodingClient(API_KEY, http_client=http_client, **kwargs)
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        client._http_client.close()


def _restore_logging_defaults():
    structlog.reset_defaults()
    library_logger = logging.getLogger("geocode_client")
    library_logger.handlers = []
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True


@pytest.fixture
def reset_logging():
    """Undo ``setup_logging`` around a test."""
    _restore_logging_defaults()
    yield
    _restore_logging_defaults()
