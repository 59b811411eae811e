"""Object identifier helpers.

Identifiers are 12 bytes rendered as 24 lowercase hex characters: a 4-byte
big-endian timestamp in seconds, 5 random bytes fixed per process, and a
3-byte counter.
"""
from __future__ import annotations

import itertools
import os
import re
import secrets
import threading
import time

OBJECT_ID_HEX_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")
_PROCESS_UNIQUE = secrets.token_bytes(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def new_object_id() -> str:
    """Return a new globally unique object id."""
    with _counter_lock:
        count = next(_counter) % 0x1000000
    timestamp = int(time.time()) & 0xFFFFFFFF
    raw = timestamp.to_bytes(4, "big") + _PROCESS_UNIQUE + count.to_bytes(3, "big")
    return raw.hex()


def parse_object_id(value: str) -> str:
    """Normalize a hex object id to lowercase.

    Raises:
        ValueError: If the value is not exactly 24 hex characters.
    """
    if not is_object_id(value):
        raise ValueError("Object id must be 24 hex characters")
    return value.lower()


def is_object_id(value: object) -> bool:
    """Return True if ``value`` is a well-formed object id string."""
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None
