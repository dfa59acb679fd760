"""Base64 and JSON helpers for token payloads."""

from __future__ import annotations

import base64
import json
from typing import Any


def b64_encode(data: bytes) -> str:
    """Standard (padded, non URL-safe) base64 encoding."""
    return base64.b64encode(data).decode("ascii")


def compact_json(value: Any) -> str:
    """Serialize ``value`` without whitespace, keeping key order and non-ASCII text.

    NaN and infinities are rejected with ``ValueError``; they are not JSON.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
