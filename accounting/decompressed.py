"""Estimated decompressed size for fixed-width column types."""

import re
from typing import Optional

_FIXED_WIDTHS = {
    "BOOLEAN": 1,
    "TINYINT": 1,
    "UTINYINT": 1,
    "SMALLINT": 2,
    "USMALLINT": 2,
    "INTEGER": 4,
    "UINTEGER": 4,
    "FLOAT": 4,
    "DATE": 4,
    "BIGINT": 8,
    "UBIGINT": 8,
    "DOUBLE": 8,
    "TIME": 8,
    "TIME WITH TIME ZONE": 8,
    "TIMETZ": 8,
    "TIMESTAMP": 8,
    "TIMESTAMP_S": 8,
    "TIMESTAMP_MS": 8,
    "TIMESTAMP_NS": 8,
    "TIMESTAMP WITH TIME ZONE": 8,
    "TIMESTAMPTZ": 8,
    "HUGEINT": 16,
    "UHUGEINT": 16,
    "INTERVAL": 16,
    "UUID": 16,
}

_DECIMAL_RE = re.compile(r"^DECIMAL\s*\(\s*(\d+)\s*(?:,\s*\d+\s*)?\)$")
_ENUM_MEMBER_RE = re.compile(r"'(?:[^']|'')*'")


def _decimal_width(precision: int) -> Optional[int]:
    if precision <= 4:
        return 2
    if precision <= 9:
        return 4
    if precision <= 18:
        return 8
    if precision <= 38:
        return 16
    return None


def _enum_width(type_name: str) -> int:
    members = len(_ENUM_MEMBER_RE.findall(type_name))
    if members <= 0xFF:
        return 1
    if members <= 0xFFFF:
        return 2
    return 4


def fixed_width(logical_type: str) -> Optional[int]:
    """Physical width in bytes of ``logical_type``, or None if variable width."""
    type_name = logical_type.strip().upper()
    if type_name in _FIXED_WIDTHS:
        return _FIXED_WIDTHS[type_name]
    if type_name == "DECIMAL":
        return _decimal_width(18)
    match = _DECIMAL_RE.match(type_name)
    if match:
        return _decimal_width(int(match.group(1)))
    if type_name.startswith("ENUM("):
        # member strings keep their case, so count them on the original text
        return _enum_width(logical_type)
    return None


def estimate_decompressed_size(logical_type: str, row_count: int) -> Optional[int]:
    """``row_count`` times the type width; None for variable-width types."""
    width = fixed_width(logical_type)
    if width is None:
        return None
    return width * row_count


__all__ = ["fixed_width", "estimate_decompressed_size"]
