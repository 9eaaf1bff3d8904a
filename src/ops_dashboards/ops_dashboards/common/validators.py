from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_choice(value: Optional[str], enum_cls: Type[E], allowed: Iterable[E], field_name: str) -> E:
    """Coerce `value` into `enum_cls` and check it belongs to `allowed`."""
    raw = require_non_empty(value, field_name)
    try:
        member = enum_cls(raw)
    except ValueError:
        raise ValidationError(f"Unsupported {field_name}: {raw!r}")
    allowed = tuple(allowed)
    if member not in allowed:
        choices = ", ".join(a.value for a in allowed)
        raise ValidationError(f"{field_name} must be one of: {choices}")
    return member


def optional_int(value: Optional[str], field_name: str) -> Optional[int]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number")
