import copy
from types import SimpleNamespace
from urllib.parse import parse_qsl

import pytest
import requests

from mapsclient.config import API_KEY_VARIABLES, Config


WHITE_HOUSE = {
    "status": "OK",
    "results": [
        {
            "address_components": [
                {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
                {"long_name": "Pennsylvania Avenue Northwest", "short_name": "Pennsylvania Avenue NW", "types": ["route"]},
                {"long_name": "Washington", "short_name": "Washington", "types": ["locality", "political"]},
                {
                    "long_name": "District of Columbia",
                    "short_name": "DC",
                    "types": ["administrative_area_level_1", "political"],
                },
                {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
                {"long_name": "20500", "short_name": "20500", "types": ["postal_code"]},
            ],
            "formatted_address": "1600 Pennsylvania Avenue NW, Washington, DC 20500, USA",
            "geometry": {"location": {"lat": 38.8976763, "lng": -77.0365298}},
            "types": ["street_address"],
        }
    ],
}

ZERO_RESULTS = {"status": "ZERO_RESULTS", "results": []}


class DummyResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        return None

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummyRequests:
    """Stands in for the ``requests`` module; replays payloads in order.

    A transport ``requests.RequestException`` payload is raised by the call
    itself, any other exception (JSON decode errors included) by
    ``response.json()``. The last payload repeats. ``params`` is recorded as a
    dict and the encoded query string, when one is sent, as ``query``.
    """

    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.calls = []

    def _respond(self):
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        if isinstance(payload, requests.RequestException) and not isinstance(payload, ValueError):
            raise payload
        return DummyResponse(payload)

    def _record(self, method, endpoint, params, json, timeout):
        query = params if isinstance(params, str) else None
        if query is not None:
            params = dict(parse_qsl(query))
        self.calls.append(
            SimpleNamespace(method=method, endpoint=endpoint, params=params, query=query, json=json, timeout=timeout)
        )

    def get(self, endpoint, params=None, timeout=15):
        self._record("GET", endpoint, params, None, timeout)
        return self._respond()

    def post(self, endpoint, params=None, json=None, timeout=15):
        self._record("POST", endpoint, params, json, timeout)
        return self._respond()


@pytest.fixture
def fake_requests(monkeypatch):
    def install(*payloads):
        dummy = DummyRequests(*payloads)
        monkeypatch.setattr("mapsclient.http_client.requests", dummy)
        return dummy

    return install


@pytest.fixture
def config_with_keys():
    return Config(api_keys={service: "test-key" for service in API_KEY_VARIABLES})


@pytest.fixture
def white_house():
    return copy.deepcopy(WHITE_HOUSE)


@pytest.fixture
def zero_results():
    return copy.deepcopy(ZERO_RESULTS)
