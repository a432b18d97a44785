"""
utils.py – shared, low-level utilities for the form-schema package.

This module consolidates common helpers for:
- Timestamps (ISO-8601 format)
- Type checking (JSON type names, regular expressions)
- JSON-safe conversion of submission records
"""

from __future__ import annotations

import datetime as _dt
import re
from typing import Any, Tuple, Union

# --------------------------------------------------------------------------- #
# Timestamp Utilities                                                         #
# --------------------------------------------------------------------------- #

def _now() -> _dt.datetime:
    """Current UTC time as an aware datetime."""
    return _dt.datetime.now(_dt.timezone.utc)


def _iso(moment: _dt.datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(_dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now_iso() -> str:
    """Current UTC timestamp in ISO-8601 (millisecond precision)."""
    return _iso(_now())


# --------------------------------------------------------------------------- #
# Type Checking Helpers                                                       #
# --------------------------------------------------------------------------- #

_TYPE_MAP: dict[str, Union[type, Tuple[type, ...]]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "list": list,
    "null": type(None),
}


def _type_name(value: Any) -> str:
    """JSON-flavoured name of *value*'s type, as users see it in violations."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _matches_type(value: Any, name: str) -> bool:
    """Type test that keeps booleans out of the numeric types."""
    if isinstance(value, bool) and name in ("integer", "number"):
        return False
    return isinstance(value, _TYPE_MAP.get(name, object))


def _regex_error(pattern: str) -> str | None:
    """Return the compile error for *pattern*, or ``None`` if it compiles."""
    try:
        re.compile(pattern)
    except re.error as exc:
        return str(exc)
    return None


# --------------------------------------------------------------------------- #
# JSON helpers                                                                #
# --------------------------------------------------------------------------- #

def _json_safe(x: Any) -> Any:
    """Recursively turn read-only mappings and tuples into plain JSON types."""
    if hasattr(x, "items"):
        return {k: _json_safe(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]
    return x
