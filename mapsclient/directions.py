"""Google Maps Directions adapter."""
from __future__ import annotations

import re
from typing import List

from .config import Config
from .http_client import fetch
from .models import DirectionStep
from .status import Failure, Outcome

SERVICE = "directions"

TRAVEL_MODES = ("driving", "bicycling", "walking")
UNIT_SYSTEMS = ("metric", "imperial")

# Applied in order. Lossy: the secondary note div collapses into the sentence.
INSTRUCTION_CLEANUP = (
    (re.compile(r"<div[^>]*>"), " "),
    (re.compile(r"</div>"), ""),
    (re.compile(r"</?b>"), ""),
    (re.compile(r"<wbr/>"), ""),
    (re.compile(r"&nbsp;"), " "),
)


def clean_instruction(text: str) -> str:
    for pattern, replacement in INSTRUCTION_CLEANUP:
        text = pattern.sub(replacement, text)
    return text


def _to_steps(data: dict) -> List[DirectionStep]:
    steps: List[DirectionStep] = []
    for leg in data["routes"][0]["legs"]:
        for step in leg["steps"]:
            steps.append(
                DirectionStep(
                    instruction=clean_instruction(step.get("html_instructions", "")),
                    duration=step["duration"]["text"],
                    distance=step["distance"]["text"],
                    mode=step.get("travel_mode", ""),
                    maneuver=step.get("maneuver", ""),
                    distance_meters=step["distance"].get("value"),
                )
            )
    return steps


def get_directions(
    origin: str,
    destination: str,
    config: Config,
    mode: str = "driving",
    units: str = "metric",
) -> Outcome[List[DirectionStep]]:
    """Step-by-step directions; the steps of every leg, in route order."""
    key = config.require_key(SERVICE)
    if mode not in TRAVEL_MODES:
        return Failure(f"unsupported travel mode '{mode}', expected one of {', '.join(TRAVEL_MODES)}")
    if units not in UNIT_SYSTEMS:
        return Failure(f"unsupported unit system '{units}'")
    params = {"origin": origin, "destination": destination, "mode": mode, "key": key}
    if units == "imperial":
        params["units"] = "imperial"
    return fetch("directions", params, timeout=config.timeout).map(_to_steps)
