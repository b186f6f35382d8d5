"""
Text rendering of simple values.

Timestamps use the round-trip form of .NET services: seven fractional digits
and the UTC offset kept when the value carries one
(``2005-10-23T12:00:00.0000000``, ``2005-10-23T12:00:00.0000000Z``,
``2005-10-23T12:00:00.0000000+02:00``).
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID

from .classify import unwrap_optional
from .errors import SerializationError
from .types import Byte

_DATETIME_RE = re.compile(
    r"^(?P<year>-?\d{4,})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?)?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})?$"
)

_TRUE_TEXT = frozenset({"true", "1"})
_FALSE_TEXT = frozenset({"false", "0"})


def format_datetime(value: datetime) -> str:
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond:06d}0"
    )
    offset = value.utcoffset()
    if offset is None:
        return text
    if value.tzinfo is timezone.utc:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_datetime(text: str) -> datetime:
    match = _DATETIME_RE.match(text.strip())
    if match is None:
        raise ValueError(f"not a dateTime: {text!r}")

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    tzinfo = None
    zone = match.group("zone")
    if zone == "Z":
        tzinfo = timezone.utc
    elif zone:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        delta = timedelta(hours=hours, minutes=minutes)
        tzinfo = timezone(-delta if zone[0] == "-" else delta)

    return datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour") or 0),
        int(match.group("minute") or 0),
        int(match.group("second") or 0),
        int(fraction),
        tzinfo=tzinfo,
    )


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "INF" if value > 0 else "-INF"
    return repr(value)


def _parse_float(text: str) -> float:
    text = text.strip()
    if text == "INF":
        return math.inf
    if text == "-INF":
        return -math.inf
    return float(text)


def format_simple(value: Any) -> str:
    """Render a simple value as element text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _parse_enum(text: str, enum_type: type[Enum]) -> Enum:
    try:
        return enum_type[text]
    except KeyError:
        for member in enum_type:
            if str(member.value) == text:
                return member
        raise ValueError(f"{text!r} is not a member of {enum_type.__name__}") from None


def parse_simple(text: str | None, tp: Any) -> Any:
    """
    Parse element text as the simple type ``tp``.

    Raises:
        SerializationError: If the text is not a valid ``tp``
    """
    tp = unwrap_optional(tp)
    raw = text or ""
    if not isinstance(tp, type):
        raise SerializationError(f"{tp} is not a simple type", is_deserialize=True)

    try:
        if issubclass(tp, str) and not issubclass(tp, Enum):
            return raw
        stripped = raw.strip()
        if issubclass(tp, Enum):
            return _parse_enum(stripped, tp)
        if issubclass(tp, bool):
            lowered = stripped.lower()
            if lowered in _TRUE_TEXT:
                return True
            if lowered in _FALSE_TEXT:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        if issubclass(tp, Byte):
            return Byte(stripped)
        if issubclass(tp, int):
            return tp(stripped)
        if issubclass(tp, float):
            return _parse_float(stripped)
        if issubclass(tp, Decimal):
            return Decimal(stripped)
        if issubclass(tp, datetime):
            return parse_datetime(stripped)
        if issubclass(tp, date):
            return date.fromisoformat(stripped[:10])
        if issubclass(tp, UUID):
            return UUID(stripped)
    except (ValueError, InvalidOperation) as e:
        raise SerializationError(
            f"Cannot read {raw!r} as {getattr(tp, '__name__', tp)}: {e}",
            is_deserialize=True,
        ) from e

    raise SerializationError(
        f"{getattr(tp, '__name__', tp)} is not a simple type", is_deserialize=True
    )
