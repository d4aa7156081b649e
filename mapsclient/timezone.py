"""Google Maps Time Zone adapter."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Union

from .config import Config
from .http_client import fetch
from .models import Coordinate, TimeZoneResult
from .status import BatchResult, Failure, Outcome, run_batch

SERVICE = "timezone"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def request_timestamp(now: Optional[datetime] = None) -> int:
    """Whole seconds between the Unix epoch and ``now`` (default: current UTC time)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int((now - EPOCH).total_seconds())


def local_time(timestamp: int, raw_offset: int, dst_offset: int) -> datetime:
    """Wall-clock time at the location, returned as a naive datetime."""
    moment = EPOCH + timedelta(seconds=timestamp + raw_offset + dst_offset)
    return moment.replace(tzinfo=None)


def _to_result(coordinate: Coordinate, data: dict, timestamp: int) -> List[TimeZoneResult]:
    moment = local_time(timestamp, int(data["rawOffset"]), int(data["dstOffset"]))
    return [
        TimeZoneResult(
            coordinate=coordinate,
            time_zone_name=data["timeZoneName"],
            time_zone_id=data["timeZoneId"],
            local_time=moment.strftime("%Y-%m-%d %H:%M:%S"),
        )
    ]


def get_time_zone(
    coordinate: Union[Coordinate, str], config: Config, timestamp: int
) -> Outcome[List[TimeZoneResult]]:
    key = config.require_key(SERVICE)
    if not isinstance(coordinate, Coordinate):
        try:
            coordinate = Coordinate.parse(coordinate)
        except ValueError as exc:
            return Failure(str(exc))
    params = {"location": str(coordinate), "timestamp": timestamp, "key": key}
    outcome = fetch("timezone", params, timeout=config.timeout)
    return outcome.map(lambda data: _to_result(coordinate, data, timestamp))


def get_time_zones(
    coordinates: Iterable[Union[Coordinate, str]],
    config: Config,
    now: Optional[datetime] = None,
) -> BatchResult[TimeZoneResult]:
    """Time zone and local time for each coordinate.

    The request timestamp is resolved once and shared by every coordinate of
    the call.
    """
    config.require_key(SERVICE)
    timestamp = request_timestamp(now)
    return run_batch(coordinates, lambda coordinate: get_time_zone(coordinate, config, timestamp))
