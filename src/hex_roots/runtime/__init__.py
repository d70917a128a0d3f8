"""Runtime helpers for hex_roots."""

from .helpers import configure_logging, resolve_log_level

__all__ = [
    "configure_logging",
    "resolve_log_level",
]
