"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return int(utc_now().timestamp() * 1000)
