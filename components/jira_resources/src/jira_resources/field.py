"""Best-effort coercion of untyped JSON values into semantic field types.

Every function here is a pure function of its input. Missing, null or
mis-shaped values resolve to a type-appropriate default instead of raising;
the only hard failure is a malformed timestamp on a field the caller marks
as required.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypeVar

from jira_resources.client import MalformedPayloadError

K = TypeVar("K")
V = TypeVar("V")

#Jira renders timestamps like 2013-01-29T17:27:04.000+0000
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
#no milliseconds; fromisoformat before Python 3.11 rejects the +0000 offset
DATETIME_FORMAT_NO_FRACTION = "%Y-%m-%dT%H:%M:%S%z"
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class FieldSchema:
    """Declared type information for a Jira field (system or custom)."""

    type: str | None = None
    items: str | None = None
    system: str | None = None
    custom: str | None = None
    custom_id: int | None = None


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def as_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    #JSON spelling, not Python's True/False
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


def as_boolean(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def as_integer(value: Any, default: int | None = 0) -> int | None:
    """Return ``value`` truncated to an int, or ``default`` if it is not numeric.

    Booleans are not treated as numbers even though Python says they are.
    Non-finite floats (``1e400`` decodes to inf, ``NaN`` to nan) also
    resolve to ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def as_datetime(value: Any, *, required: bool = False) -> datetime | None:
    """Parse a Jira timestamp.

    Args:
        value:    The raw JSON value.
        required: When True a string that cannot be parsed raises instead of
                  resolving to None. An absent value is never an error.

    Returns:
        A timezone-aware datetime, or None.

    Raises:
        MalformedPayloadError: If ``required`` and the literal is malformed.
    """
    if not isinstance(value, str) or not value:
        return None
    for fmt in (DATETIME_FORMAT, DATETIME_FORMAT_NO_FRACTION):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        if required:
            raise MalformedPayloadError(f"Unparseable timestamp: {value!r}") from None
        return None
    if parsed.tzinfo is None:
        if required:
            raise MalformedPayloadError(f"Timestamp has no timezone: {value!r}")
        return None
    return parsed


def as_date(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

def as_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    out: list[str] = []
    for element in value:
        if isinstance(element, (dict, list)):
            continue
        text = as_string(element)
        if text is not None:
            out.append(text)
    return out


def as_map(
    key_type: Callable[[Any], K | None],
    value_type: Callable[[Any], V | None],
    value: Any,
) -> dict[K, V]:
    """Coerce every entry of a JSON object, dropping entries that coerce to None."""
    if not isinstance(value, dict):
        return {}
    out: dict[K, V] = {}
    for raw_key, raw_value in value.items():
        key = key_type(raw_key)
        item = value_type(raw_value)
        if key is None or item is None:
            continue
        out[key] = item
    return out


def as_field_schema(value: Any) -> FieldSchema | None:
    if not isinstance(value, dict):
        return None
    return FieldSchema(
        type=as_string(value.get("type")),
        items=as_string(value.get("items")),
        system=as_string(value.get("system")),
        custom=as_string(value.get("custom")),
        custom_id=as_integer(value.get("customId"), default=None),
    )
