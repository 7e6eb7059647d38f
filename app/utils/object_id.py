"""
Record identifiers in the ObjectId layout: 4-byte seconds timestamp followed by
8 random bytes, rendered as 24 lowercase hex characters.
"""

import re
import secrets
import time

OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """Generate a new 24-character hex identifier."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def normalize_object_id(value: str) -> str | None:
    """Return the canonical (lowercase) form of ``value`` or None if malformed."""
    if not is_valid_object_id(value):
        return None
    return value.lower()
