"""Utility helpers for gpgid."""

from .canonical_json import canonicalize, canonicalize_bytes, parse
from .encoding import b64d, b64e
from .time import format_timestamp, now

__all__ = [
    'canonicalize',
    'canonicalize_bytes',
    'parse',
    'b64e',
    'b64d',
    'now',
    'format_timestamp',
]
