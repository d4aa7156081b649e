"""Google Maps Distance Matrix adapter, one origin/destination pair per call."""
from __future__ import annotations

from typing import List, Optional

from .config import Config
from .http_client import fetch
from .models import DistanceResult, Fare
from .status import OK, PAYLOAD_ERRORS, ZERO_RESULTS, EmptyResult, Failure, Outcome, Success

SERVICE = "distance-matrix"

TRAVEL_MODES = ("driving", "bicycling", "walking", "transit")
UNIT_SYSTEMS = ("metric", "imperial")


def _fare(element: dict, mode: str) -> Optional[Fare]:
    if mode != "transit" or "fare" not in element:
        return None
    fare = element["fare"]
    if not isinstance(fare, dict) or "value" not in fare or "currency" not in fare:
        return None
    return Fare(value=fare["value"], currency=fare["currency"])


def _first(values: list, fallback: str) -> str:
    return values[0] if values else fallback


def _to_result(data: dict, origin: str, destination: str, mode: str) -> Outcome[List[DistanceResult]]:
    element = data["rows"][0]["elements"][0]
    status = element.get("status")
    if status == ZERO_RESULTS:
        return EmptyResult(f"No route found from '{origin}' to '{destination}'")
    if status != OK:
        return Failure(f"element status {status}")
    result = DistanceResult(
        origin=_first(data.get("origin_addresses", []), origin),
        destination=_first(data.get("destination_addresses", []), destination),
        duration=element["duration"]["text"],
        distance=element["distance"]["text"],
        mode=mode,
        fare=_fare(element, mode),
    )
    return Success([result])


def get_distance(
    origin: str,
    destination: str,
    config: Config,
    mode: str = "driving",
    units: str = "metric",
) -> Outcome[List[DistanceResult]]:
    """Travel distance and duration between two places."""
    key = config.require_key(SERVICE)
    if mode not in TRAVEL_MODES:
        return Failure(f"unsupported travel mode '{mode}', expected one of {', '.join(TRAVEL_MODES)}")
    if units not in UNIT_SYSTEMS:
        return Failure(f"unsupported unit system '{units}'")
    params = {"origins": origin, "destinations": destination, "mode": mode, "key": key}
    if units == "imperial":
        params["units"] = "imperial"
    outcome = fetch("distancematrix", params, timeout=config.timeout)
    if not isinstance(outcome, Success):
        return outcome
    try:
        return _to_result(outcome.payload, origin, destination, mode)
    except PAYLOAD_ERRORS as exc:
        return Failure(f"malformed response: {exc!r}")
