"""
XML name encoding.

Arbitrary names (field names, type names) are turned into legal XML names by
replacing every character that may not appear at its position with an
``_xHHHH_`` escape, the convention used by .NET web services. An underscore
that would otherwise be read as the start of an escape is itself escaped.
"""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r"_[xX]([0-9A-Fa-f]{8}|[0-9A-Fa-f]{4})_")
_ESCAPE_AHEAD_RE = re.compile(r"_[xX](?:[0-9A-Fa-f]{8}|[0-9A-Fa-f]{4})_")

_NAME_START_RANGES = (
    (0x41, 0x5A),
    (0x5F, 0x5F),
    (0x61, 0x7A),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x2FF),
    (0x370, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

_NAME_EXTRA_RANGES = (
    (0x2D, 0x2E),
    (0x30, 0x39),
    (0xB7, 0xB7),
    (0x300, 0x36F),
    (0x203F, 0x2040),
)


def _in_ranges(code: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(low <= code <= high for low, high in ranges)


def is_name_start_char(char: str) -> bool:
    """Whether ``char`` may begin an XML name (colons excluded)."""
    return _in_ranges(ord(char), _NAME_START_RANGES)


def is_name_char(char: str) -> bool:
    """Whether ``char`` may appear after the first position of an XML name."""
    code = ord(char)
    return _in_ranges(code, _NAME_START_RANGES) or _in_ranges(code, _NAME_EXTRA_RANGES)


def _escape(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        return f"_x{code:08X}_"
    return f"_x{code:04X}_"


def encode_name(name: str | None) -> str | None:
    """
    Encode ``name`` so it is a legal XML element name.

    Empty and None names are returned unchanged.

    Example:
        >>> encode_name("Order Id")
        'Order_x0020_Id'
        >>> encode_name("1st")
        '_x0031_st'
    """
    if not name:
        return name

    parts: list[str] = []
    for position, char in enumerate(name):
        if char == "_" and _ESCAPE_AHEAD_RE.match(name, position):
            parts.append("_x005F_")
            continue
        valid = is_name_start_char(char) if position == 0 else is_name_char(char)
        parts.append(char if valid else _escape(char))
    return "".join(parts)


def _unescape(match: re.Match[str]) -> str:
    code = int(match.group(1), 16)
    if code > 0x10FFFF:
        return match.group(0)
    return chr(code)


def decode_name(name: str | None) -> str | None:
    """
    Reverse encode_name: replace every ``_xHHHH_`` escape by its character.

    Escapes naming no Unicode code point are kept as they are.
    """
    if not name or "_" not in name:
        return name
    return _ESCAPE_RE.sub(_unescape, name)


def qualify(local_name: str, namespace: str | None = None) -> str:
    """Build the Clark-notation tag ``{namespace}local_name``."""
    if namespace:
        return f"{{{namespace}}}{local_name}"
    return local_name
