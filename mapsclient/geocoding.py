"""Google Maps Geocoding and Reverse Geocoding adapters."""
from __future__ import annotations

from typing import Iterable, List, Union

from .config import Config
from .http_client import fetch
from .logging_config import get_logger
from .models import Coordinate, GeocodeResult, ReverseGeocodeResult
from .status import BatchResult, Failure, Outcome, run_batch

logger = get_logger(__name__)

SERVICE = "geocoding"


def _component(result: dict, component_type: str) -> str:
    """Long name of the first address component carrying ``component_type``."""
    for comp in result.get("address_components", []):
        if component_type in comp.get("types", []):
            return comp.get("long_name", "")
    return ""


def _to_geocode_results(address: str, data: dict) -> List[GeocodeResult]:
    return [
        GeocodeResult(
            input_address=address,
            address=result["formatted_address"],
            country=_component(result, "country"),
            state=_component(result, "administrative_area_level_1"),
            postal_code=_component(result, "postal_code"),
            coordinate=Coordinate.from_location(result["geometry"]["location"]),
        )
        for result in data["results"]
    ]


def geocode(address: str, config: Config) -> Outcome[List[GeocodeResult]]:
    """Geocode one free-text address; one record per candidate match."""
    key = config.require_key(SERVICE)
    if not address or not address.strip():
        return Failure("address must be a non-empty string")
    logger.debug(f"Geocoding address: {address}")
    outcome = fetch("geocode", {"address": address, "key": key}, timeout=config.timeout)
    return outcome.map(lambda data: _to_geocode_results(address, data))


def geocode_addresses(addresses: Iterable[str], config: Config) -> BatchResult[GeocodeResult]:
    config.require_key(SERVICE)
    return run_batch(addresses, lambda address: geocode(address, config))


def reverse_geocode(
    coordinate: Union[Coordinate, str], config: Config
) -> Outcome[List[ReverseGeocodeResult]]:
    """Resolve a coordinate to the most specific formatted address."""
    key = config.require_key(SERVICE)
    if not isinstance(coordinate, Coordinate):
        try:
            coordinate = Coordinate.parse(coordinate)
        except ValueError as exc:
            return Failure(str(exc))
    outcome = fetch("geocode", {"latlng": str(coordinate), "key": key}, timeout=config.timeout)
    return outcome.map(
        lambda data: [ReverseGeocodeResult(coordinate=coordinate, address=data["results"][0]["formatted_address"])]
    )


def reverse_geocode_many(
    coordinates: Iterable[Union[Coordinate, str]], config: Config
) -> BatchResult[ReverseGeocodeResult]:
    config.require_key(SERVICE)
    return run_batch(coordinates, lambda coordinate: reverse_geocode(coordinate, config))
