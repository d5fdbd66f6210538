"""Three-segment numeric version comparison (major.minor.patch)."""

from __future__ import annotations

import re

_LEADING_DIGITS = re.compile(r"\d+")
_NON_NUMERIC_PREFIX = re.compile(r"^\D+")


def parse_version(value: str) -> tuple[int, int, int]:
    """Parse ``v1.2.3-beta`` style strings into (1, 2, 3).

    Non-numeric leading characters are stripped, each segment keeps its
    leading digits only, and missing segments count as 0.
    """
    text = _NON_NUMERIC_PREFIX.sub("", value.strip())
    parts: list[int] = []
    for segment in text.split("."):
        m = _LEADING_DIGITS.match(segment)
        if m is None:
            continue
        parts.append(int(m.group()))
    parts = (parts + [0, 0, 0])[:3]
    return parts[0], parts[1], parts[2]


def compare_versions(current: str, available: str) -> int:
    """-1 if current < available, 0 if equal, 1 if current > available."""
    a, b = parse_version(current), parse_version(available)
    return (a > b) - (a < b)


def is_newer(current: str, available: str) -> bool:
    return compare_versions(current, available) < 0


def is_major_update(current: str, available: str) -> bool:
    return parse_version(available)[0] > parse_version(current)[0]
