"""
Noteful Backend — Record Identifiers
=====================================

What:  Generation and validation of record ids.
Why:   Every path or body reference is checked for shape before it reaches
       the database, so a garbage id is a 400 and never a query.
How:   Ids are 24 lowercase hex characters (12 bytes): a 4-byte big-endian
       creation timestamp followed by 8 random bytes. The same shape as a
       document-store ObjectId, so ids issued by older clients stay valid.
"""

import re
import secrets
import time

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """Return a fresh 24-character hex id, roughly ordered by creation time."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    return f"{timestamp:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value: object) -> bool:
    """True only for a str of exactly 24 hex characters."""
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None


def normalize_object_id(value: str) -> str:
    """Lowercase a valid id so lookups match the stored form."""
    return value.lower()
