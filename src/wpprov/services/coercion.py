"""Typing of wp-config constant values read from the site configuration."""

from __future__ import annotations

import re
from typing import Union

TypedValue = Union[bool, int, float, str]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?[0-9]+\.?[0-9]*")


def coerce(value: str) -> TypedValue:
    """Map a config string to bool, int, float or (unchanged) str.

    >>> coerce("TRUE"), coerce("42"), coerce("3.14"), coerce("hello")
    (True, 42, 3.14, 'hello')
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    return value


def is_raw(typed: TypedValue) -> bool:
    """Whether the value is written unquoted (WP-CLI ``--raw``)."""
    return not isinstance(typed, str)


def php_literal(typed: TypedValue) -> str:
    if isinstance(typed, bool):
        return "true" if typed else "false"
    return str(typed)
