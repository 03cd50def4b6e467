"""Binds a value bag to detected fields by name."""

from __future__ import annotations

from typing import Optional

from ..core.models import FieldValue, ValueBag


def is_absent(value: object) -> bool:
    """``None``, empty strings and empty lists carry no value; ``False`` does."""

    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def matching_key(name: str, values: ValueBag) -> Optional[str]:
    if name in values:
        return name

    lowered = name.lower()
    keys = [key for key in values if key]
    for key in keys:
        if key.lower() == lowered:
            return key
    if not lowered:
        return None
    for key in keys:
        candidate = key.lower()
        if lowered in candidate or candidate in lowered:
            return key
    return None


def resolve_value(name: str, values: ValueBag) -> Optional[FieldValue]:
    """Exact, case-insensitive, then substring match; never invents a value."""

    key = matching_key(name, values)
    if key is None:
        return None
    value = values[key]
    return None if is_absent(value) else value
