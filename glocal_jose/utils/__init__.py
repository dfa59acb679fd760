"""Encoding and time helpers."""

from .clock import epoch_millis, utc_now
from .encoding import b64_encode, compact_json

__all__ = [
    "b64_encode",
    "compact_json",
    "epoch_millis",
    "utc_now",
]
