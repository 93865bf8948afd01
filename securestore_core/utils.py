"""
securestore_core.utils
----------------------
Small helpers for base64 transport of key material and envelopes, and UTC timestamps.
"""

from __future__ import annotations
import base64, time


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))

def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
