"""mapsclient package entry."""

__all__ = [
    "config",
    "geocoding",
    "directions",
    "distance",
    "timezone",
    "places",
    "wifi",
    "cli",
]

__version__ = "0.1.0"
