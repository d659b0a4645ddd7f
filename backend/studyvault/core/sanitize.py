"""Input Sanitization — neutralizes markup and script vectors in user text.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - sanitize_text never raises; output is never longer than input
    - sanitize_url returns None on rejection (never raises)
"""

import re
from urllib.parse import urlsplit

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)

ALLOWED_URL_SCHEMES = frozenset({"http", "https"})


def sanitize_text(value: str) -> str:
    """Trim, then strip angle brackets, javascript: and on<event>= patterns."""
    cleaned = value.strip()
    cleaned = _ANGLE_BRACKETS.sub("", cleaned)
    cleaned = _JAVASCRIPT_SCHEME.sub("", cleaned)
    return _EVENT_HANDLER.sub("", cleaned)


def sanitize_url(value: str) -> str | None:
    """Parse value as a URL; accept only http(s) with a host."""
    candidate = value.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES:
        return None
    if not parts.netloc or any(ch.isspace() for ch in candidate):
        return None
    return parts.geturl()
