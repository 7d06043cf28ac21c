"""Miscellaneous helper utilities for ask-ai."""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any

_DURATION_PATTERN = re.compile(r"^\s*(\d+)([smh])\s*$")


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dictionary with override merged into base."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def parse_duration(value: str) -> _dt.timedelta:
    """Parse duration strings like ``30s`` or ``2m`` into timedeltas."""
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Unsupported duration value: {value!r}")

    amount = int(match.group(1))
    unit = match.group(2)
    if unit == "s":
        return _dt.timedelta(seconds=amount)
    if unit == "m":
        return _dt.timedelta(minutes=amount)
    if unit == "h":
        return _dt.timedelta(hours=amount)
    raise ValueError(f"Unsupported duration unit: {unit}")  # pragma: no cover


def parse_timeout(value: Any) -> float | None:
    """Normalize a timeout given as seconds or a duration string."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timeout value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    try:
        return float(text)
    except ValueError:
        return parse_duration(text).total_seconds()
