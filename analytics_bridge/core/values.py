"""
Lenient accessors over event property bags.

Property bags come from client SDKs and carry loosely typed values: a
quantity may arrive as `2`, `"2"` or `2.0`. These helpers read a key with a
default and never raise on a type mismatch.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


def to_backend_string(value: Any) -> Optional[str]:
    """
    Render a value the way the backend expects context data values.

    Booleans are lower-case and floats always keep a decimal point
    (`20.0`, not `20`).
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def get_string(values: Mapping[str, Any], key: str) -> Optional[str]:
    return to_backend_string(values.get(key))


def get_int(values: Mapping[str, Any], key: str, default: int = 0) -> int:
    """Integer value of `key`; numeric strings such as "12.5" truncate to 12."""
    value = values.get(key)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, (float, str)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            pass
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            return default
    return default


def get_float(values: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = values.get(key)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def get_bool(values: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = values.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return default


def parse_int(value: Any) -> Optional[int]:
    """Parse the string form of `value` as an integer; `None` if it is not one."""
    text = to_backend_string(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_float(value: Any) -> Optional[float]:
    """Parse the string form of `value` as a float; `None` if it is not one."""
    text = to_backend_string(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def first_present(values: Mapping[str, Any], *keys: str) -> Optional[str]:
    """First non-blank string among `keys` (camelCase then snake_case spellings)."""
    for key in keys:
        text = get_string(values, key)
        if text is not None and text.strip():
            return text
    return None
