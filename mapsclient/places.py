"""Google Places Nearby Search adapter."""
from __future__ import annotations

from typing import Iterable, List, Optional, Union

from .config import Config
from .http_client import fetch
from .models import Coordinate, PlaceResult
from .status import Failure, Outcome

SERVICE = "places"

DEFAULT_RADIUS = 500


def primary_type(types: List[str]) -> str:
    """``"point_of_interest"`` -> ``"Point Of Interest"``."""
    if not types:
        return ""
    return types[0].replace("_", " ").title()


def _open_now(result: dict):
    hours = result.get("opening_hours") or {}
    if "open_now" not in hours:
        return "unknown"
    return bool(hours["open_now"])


def _to_places(data: dict) -> List[PlaceResult]:
    return [
        PlaceResult(
            name=result["name"],
            address=result.get("vicinity", ""),
            place_type=primary_type(result.get("types", [])),
            coordinate=Coordinate.from_location(result["geometry"]["location"]),
            open_now=_open_now(result),
            rating=result.get("rating"),
        )
        for result in data["results"]
    ]


def nearby_places(
    coordinate: Union[Coordinate, str],
    config: Config,
    radius: int = DEFAULT_RADIUS,
    place_type: Optional[str] = None,
    keywords: Iterable[str] = (),
) -> Outcome[List[PlaceResult]]:
    """Places around ``coordinate`` in the ranking order of the API.

    Keywords are OR-ed together. The radius limit (50000 m) is enforced by
    the API, not here.
    """
    key = config.require_key(SERVICE)
    if not isinstance(coordinate, Coordinate):
        try:
            coordinate = Coordinate.parse(coordinate)
        except ValueError as exc:
            return Failure(str(exc))
    params = {"location": str(coordinate), "radius": radius, "key": key}
    if place_type:
        params["type"] = place_type
    terms = [term for term in keywords if term]
    if terms:
        params["keyword"] = "|".join(terms)
    return fetch("place/nearbysearch", params, timeout=config.timeout).map(_to_places)
