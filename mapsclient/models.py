"""Data models for mapsclient."""
from __future__ import annotations

import re
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

_COORDINATE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def __str__(self) -> str:
        return f"{self.lat:.7f},{self.lng:.7f}"

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse a ``"lat,lng"`` string as printed by ``str(coordinate)``."""
        match = _COORDINATE_RE.match(text or "")
        if not match:
            raise ValueError(f"'{text}' is not a 'latitude,longitude' pair.")
        lat, lng = float(match.group(1)), float(match.group(2))
        if not -90 <= lat <= 90 or not -180 <= lng <= 180:
            raise ValueError(f"'{text}' is out of range.")
        return cls(lat=lat, lng=lng)

    @classmethod
    def from_location(cls, location: dict) -> "Coordinate":
        return cls(lat=location["lat"], lng=location["lng"])


class Record(BaseModel):
    """Base for every tabular output row; aliases are the column names."""

    @field_serializer("coordinate", check_fields=False)
    def render_coordinate(self, value: Optional[Coordinate]) -> Optional[str]:
        return str(value) if value is not None else None

    def to_row(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class GeocodeResult(Record):
    input_address: str = Field(serialization_alias="InputAddress")
    address: str = Field(serialization_alias="Address")
    country: str = Field("", serialization_alias="Country")
    state: str = Field("", serialization_alias="State")
    postal_code: str = Field("", serialization_alias="PostalCode")
    coordinate: Coordinate = Field(serialization_alias="Coordinates")


class ReverseGeocodeResult(Record):
    coordinate: Coordinate = Field(serialization_alias="Coordinates")
    address: str = Field(serialization_alias="Address")


class DirectionStep(Record):
    instruction: str = Field(serialization_alias="Instruction")
    duration: str = Field(serialization_alias="Duration")
    distance: str = Field(serialization_alias="Distance")
    mode: str = Field(serialization_alias="Mode")
    maneuver: str = Field("", serialization_alias="Maneuver")
    distance_meters: Optional[int] = Field(None, serialization_alias="Meters")


class Fare(BaseModel):
    value: float
    currency: str


class DistanceResult(Record):
    origin: str = Field(serialization_alias="From")
    destination: str = Field(serialization_alias="To")
    duration: str = Field(serialization_alias="Duration")
    distance: str = Field(serialization_alias="Distance")
    mode: str = Field(serialization_alias="Mode")
    fare: Optional[Fare] = None

    def to_row(self) -> dict:
        row = self.model_dump(by_alias=True, exclude_none=True, exclude={"fare"})
        if self.fare is not None:
            row["Fare"] = self.fare.value
            row["Currency"] = self.fare.currency
        return row


class TimeZoneResult(Record):
    coordinate: Coordinate = Field(serialization_alias="Coordinates")
    time_zone_name: str = Field(serialization_alias="TimeZone")
    time_zone_id: str = Field(serialization_alias="TimeZoneId")
    local_time: str = Field(serialization_alias="LocalTime")


class PlaceResult(Record):
    name: str = Field(serialization_alias="Name")
    address: str = Field("", serialization_alias="Address")
    place_type: str = Field("", serialization_alias="Type")
    coordinate: Coordinate = Field(serialization_alias="Coordinates")
    open_now: Union[bool, Literal["unknown"]] = Field("unknown", serialization_alias="OpenNow")
    rating: Optional[float] = Field(None, serialization_alias="Rating")


class AccessPoint(Record):
    bssid: str = Field(serialization_alias="BSSID")
    ssid: str = Field("", serialization_alias="SSID")
    signal: Optional[int] = Field(None, serialization_alias="Signal")


class GeolocationResult(Record):
    address: str = Field(serialization_alias="Address")
    coordinate: Optional[Coordinate] = Field(None, serialization_alias="Coordinates")
    accuracy: Optional[float] = Field(None, serialization_alias="Accuracy")
