"""Checks applied to station names and IPv4 addresses."""

from __future__ import annotations

import re

_WHITESPACE = " \t\n\r\f\v"

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9][0-9]?|0)"
_IPV4_RE = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}")


def trim(s: str) -> str:
    """Return ``s`` without leading and trailing ASCII whitespace."""
    return s.strip(_WHITESPACE)


def validate_name(name: str) -> bool:
    """A station name is valid when it holds something besides whitespace."""
    return bool(trim(name))


def validate_ip(ip: str) -> bool:
    """Return True if ``ip`` is a dotted-quad IPv4 address without leading zeros."""
    return _IPV4_RE.fullmatch(ip) is not None