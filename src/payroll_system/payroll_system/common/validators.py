from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return str(value).strip()


def require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", field=field_name)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an integer", field=field_name)


def require_non_negative_int(value: Any, field_name: str) -> int:
    n = require_int(value, field_name)
    if n < 0:
        raise ValidationError(f"{field_name} must be >= 0", field=field_name)
    return n


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    n = require_int(value, field_name)
    if n < low or n > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}", field=field_name)
    return n
