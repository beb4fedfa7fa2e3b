"""Horodatage / Timestamps."""

from datetime import datetime, timezone


def utc_now() -> str:
    """Instant courant ISO 8601 en UTC, a la seconde / Current UTC instant, ISO 8601, to the second."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")
