from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> str:
    return (value or "").strip()


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    value = optional_text(value)
    if value and "@" not in value:
        raise ValidationError(f"{field_name} is not a valid address")
    return value
