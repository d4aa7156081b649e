"""Logging setup for mapsclient."""
from __future__ import annotations

import logging
import sys

_logger_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once.

    Logs go to stderr so that stdout stays clean for tabular output that may be
    piped into another command.
    """
    global _logger_configured

    if _logger_configured:
        return

    log_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logger_configured = True
    logging.debug(f"Logging configured with level: {level}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
