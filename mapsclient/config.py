"""Configuration utilities for mapsclient."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv
import os

DOCS_URL = "https://developers.google.com/maps/documentation/{service}/get-api-key"

# service -> (environment variable, documentation slug)
API_KEY_VARIABLES = {
    "geocoding": ("GoogleGeocode_API_Key", "geocoding"),
    "directions": ("GoogleDirection_API_Key", "directions"),
    "distance-matrix": ("GoogleDistance_API_Key", "distance-matrix"),
    "timezone": ("GoogleTimezone_API_Key", "timezone"),
    "places": ("GooglePlaces_API_Key", "places/web-service"),
    "geolocation": ("GoogleGeoloc_API_Key", "geolocation"),
}

FALLBACK_KEY_VARIABLE = "GOOGLE_MAPS_API_KEY"


class MissingApiKeyError(RuntimeError):
    """Raised when the API key for a service is not configured."""

    def __init__(self, service: str):
        variable, slug = API_KEY_VARIABLES[service]
        self.service = service
        self.variable = variable
        self.docs_url = DOCS_URL.format(service=slug)
        super().__init__(
            f"You need to register and get an API key for the {service} service and save it as "
            f"environment variable {variable} (or in a .env file).\n"
            f"Follow this link to get the API key: {self.docs_url}"
        )


@dataclass
class Config:
    """Runtime configuration, built once per process and passed to every adapter."""

    api_keys: Dict[str, str] = field(default_factory=dict)
    timeout: float = 15
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> "Config":
        if env is None:
            load_dotenv()
            env = dict(os.environ)
        fallback = env.get(FALLBACK_KEY_VARIABLE)
        api_keys = {}
        for service, (variable, _) in API_KEY_VARIABLES.items():
            key = env.get(variable) or fallback
            if key:
                api_keys[service] = key
        return cls(
            api_keys=api_keys,
            timeout=float(env.get("MAPSCLIENT_TIMEOUT", 15)),
            log_level=env.get("MAPSCLIENT_LOG_LEVEL", "WARNING"),
        )

    def require_key(self, service: str) -> str:
        if service not in API_KEY_VARIABLES:
            raise ValueError(f"Unknown service '{service}'.")
        key = self.api_keys.get(service)
        if not key:
            raise MissingApiKeyError(service)
        return key
