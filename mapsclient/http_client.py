"""HTTP access to the Google Maps web services."""
from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

import requests
from requests import RequestException

from .logging_config import get_logger
from .status import Failure, Outcome, classify

logger = get_logger(__name__)

MAPS_BASE = "https://maps.googleapis.com/maps/api"
GEOLOCATION_ENDPOINT = "https://www.googleapis.com/geolocation/v1/geolocate"


class TransportError(RuntimeError):
    """Raised when a request fails or its body is not JSON."""


def _redact(params: Optional[dict]) -> dict:
    return {k: ("***" if k == "key" else v) for k, v in (params or {}).items()}


def _decode(response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise TransportError(f"invalid JSON in response: {exc}") from exc


def encode_query(params: dict) -> str:
    """Form-encode ``params``; spaces become ``+`` and commas stay literal so
    ``lat,lng`` pairs reach the API verbatim."""
    return urlencode(params, safe=",")


def get_json(endpoint: str, params: dict, timeout: float = 15) -> Any:
    """GET ``endpoint`` with ``params`` and return the decoded JSON body."""
    logger.debug(f"GET {endpoint} {_redact(params)}")
    try:
        response = requests.get(endpoint, params=encode_query(params), timeout=timeout)
        response.raise_for_status()
    except RequestException as exc:
        raise TransportError(str(exc)) from exc
    return _decode(response)


def post_json(endpoint: str, params: dict, body: dict, timeout: float = 15) -> Any:
    """POST a JSON ``body`` and return the decoded JSON body.

    HTTP error statuses are not raised: the Geolocation API describes its
    errors in the JSON body, which the caller inspects.
    """
    logger.debug(f"POST {endpoint} {_redact(params)}")
    try:
        response = requests.post(endpoint, params=params, json=body, timeout=timeout)
    except RequestException as exc:
        raise TransportError(str(exc)) from exc
    return _decode(response)


def fetch(service: str, params: dict, timeout: float = 15) -> Outcome[dict]:
    """GET ``{MAPS_BASE}/{service}/json`` and classify the response status."""
    try:
        data = get_json(f"{MAPS_BASE}/{service}/json", params, timeout=timeout)
    except TransportError as exc:
        return Failure(str(exc))
    return classify(data)
