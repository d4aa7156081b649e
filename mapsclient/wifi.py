"""WiFi access point scanning and the Google Geolocation adapter."""
from __future__ import annotations

import re
import subprocess
import sys
from typing import List, Optional, Sequence

from .config import Config
from .geocoding import reverse_geocode
from .http_client import GEOLOCATION_ENDPOINT, TransportError, post_json
from .logging_config import get_logger
from .models import AccessPoint, Coordinate, GeolocationResult
from .status import PAYLOAD_ERRORS, EmptyResult, Failure, Outcome, Success

logger = get_logger(__name__)

SERVICE = "geolocation"

NO_ACCESS_POINTS = "No wireless access points are visible"

_MAC_RE = re.compile(r"([0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5})")

SCAN_COMMANDS = {
    "win32": ["netsh", "wlan", "show", "networks", "mode=bssid"],
    "linux": ["nmcli", "-t", "-f", "BSSID,SSID,SIGNAL", "device", "wifi", "list"],
    "darwin": [
        "/System/Library/PrivateFrameworks/Apple80211.framework/Versions/Current/Resources/airport",
        "-s",
    ],
}


class WifiScanError(RuntimeError):
    """Raised when visible access points cannot be listed on this machine."""


def _append(found: List[AccessPoint], seen: set, bssid: str, ssid: str, signal: Optional[int]) -> None:
    bssid = bssid.lower()
    if bssid in seen:
        return
    seen.add(bssid)
    found.append(AccessPoint(bssid=bssid, ssid=ssid, signal=signal))


def parse_netsh(output: str) -> List[AccessPoint]:
    """Parse ``netsh wlan show networks mode=bssid``."""
    found: List[AccessPoint] = []
    seen: set = set()
    ssid = ""
    pending: Optional[str] = None
    for line in output.splitlines():
        label, _, value = line.partition(":")
        label, value = label.strip(), value.strip()
        if label.startswith("SSID"):
            ssid = value
        elif label.startswith("BSSID"):
            if pending:
                _append(found, seen, pending, ssid, None)
            match = _MAC_RE.search(value)
            pending = match.group(1) if match else None
        elif label == "Signal" and pending:
            signal = int(value.rstrip("%")) if value.rstrip("%").isdigit() else None
            _append(found, seen, pending, ssid, signal)
            pending = None
    if pending:
        _append(found, seen, pending, ssid, None)
    return found


def parse_nmcli(output: str) -> List[AccessPoint]:
    """Parse ``nmcli -t -f BSSID,SSID,SIGNAL device wifi list``; colons in values are escaped."""
    found: List[AccessPoint] = []
    seen: set = set()
    for line in output.splitlines():
        fields = [f.replace("\\:", ":") for f in re.split(r"(?<!\\):", line.strip())]
        if len(fields) < 3 or not _MAC_RE.fullmatch(fields[0]):
            continue
        signal = int(fields[2]) if fields[2].isdigit() else None
        _append(found, seen, fields[0], fields[1], signal)
    return found


def parse_airport(output: str) -> List[AccessPoint]:
    """Parse ``airport -s``: SSID, BSSID, RSSI, ..."""
    found: List[AccessPoint] = []
    seen: set = set()
    for line in output.splitlines()[1:]:
        match = _MAC_RE.search(line)
        if not match:
            continue
        rest = line[match.end():].split()
        signal = int(rest[0]) if rest and re.fullmatch(r"-?\d+", rest[0]) else None
        _append(found, seen, match.group(1), line[: match.start()].strip(), signal)
    return found


_PARSERS = {"win32": parse_netsh, "linux": parse_nmcli, "darwin": parse_airport}


def scan_access_points(platform: Optional[str] = None) -> List[AccessPoint]:
    """List the wireless access points currently visible to this machine."""
    platform = platform or sys.platform
    if platform not in SCAN_COMMANDS:
        raise WifiScanError(f"WiFi scanning is not supported on '{platform}'.")
    command = SCAN_COMMANDS[platform]
    try:
        completed = subprocess.run(command, capture_output=True, text=True, check=True, timeout=30)
    except (OSError, subprocess.SubprocessError) as exc:
        raise WifiScanError(f"Could not run '{command[0]}': {exc}") from exc
    access_points = _PARSERS[platform](completed.stdout)
    logger.debug(f"Found {len(access_points)} access points")
    return access_points


def _location_from(data) -> Outcome[dict]:
    if not isinstance(data, dict):
        return Failure("response is not a JSON object")
    if "error" in data:
        error = data["error"] or {}
        return Failure(f"{error.get('code', '')}: {error.get('message', 'unknown error')}".strip(": "))
    if "location" not in data:
        return Failure("response has no location")
    return Success(data)


def geolocate(
    config: Config,
    access_points: Optional[Sequence[AccessPoint]] = None,
    with_coordinates: bool = False,
    max_access_points: Optional[int] = None,
) -> Outcome[List[GeolocationResult]]:
    """Locate this machine from visible WiFi access points and resolve the address.

    Every visible access point is sent unless ``max_access_points`` caps the
    list. Scans the local radio when ``access_points`` is None.
    """
    key = config.require_key(SERVICE)
    config.require_key("geocoding")
    if max_access_points is not None and max_access_points < 1:
        return Failure("max_access_points must be at least 1")
    if access_points is None:
        access_points = scan_access_points()
    if not access_points:
        logger.info(NO_ACCESS_POINTS)
        return EmptyResult(NO_ACCESS_POINTS)
    selected = list(access_points)
    if max_access_points is not None:
        selected = selected[:max_access_points]
    if len(selected) < 2:
        logger.warning("The Geolocation API usually needs at least two access points")

    body = {
        "considerIp": False,
        "wifiAccessPoints": [{"macAddress": ap.bssid} for ap in selected],
    }
    try:
        data = post_json(GEOLOCATION_ENDPOINT, {"key": key}, body, timeout=config.timeout)
    except TransportError as exc:
        return Failure(str(exc))
    located = _location_from(data)
    if not isinstance(located, Success):
        return located
    try:
        coordinate = Coordinate.from_location(located.payload["location"])
    except PAYLOAD_ERRORS as exc:
        return Failure(f"malformed response: {exc!r}")

    address = reverse_geocode(coordinate, config)
    if not isinstance(address, Success):
        return address
    fields = {"address": address.payload[0].address}
    if with_coordinates:
        fields.update(coordinate=coordinate, accuracy=located.payload.get("accuracy"))
    return Success([GeolocationResult(**fields)])
