"""Field checks applied by model ``@validates`` hooks before a row reaches the database."""
from __future__ import annotations

import enum
from typing import Optional, Type, TypeVar

from email_validator import EmailNotValidError, validate_email

from skillbridge.db.errors import ConstraintViolation

E = TypeVar("E", bound=enum.Enum)


def require_text(field: str, value, min_length: Optional[int] = None, max_length: Optional[int] = None) -> str:
    if value is None or not str(value).strip():
        raise ConstraintViolation(f"{field} must not be blank", field=field)
    if min_length is not None and len(value) < min_length:
        raise ConstraintViolation(f"{field} must be at least {min_length} characters", field=field)
    if max_length is not None and len(value) > max_length:
        raise ConstraintViolation(f"{field} must be at most {max_length} characters", field=field)
    return value


def require_positive(field: str, value) -> int:
    if value is None:
        raise ConstraintViolation(f"{field} is required", field=field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConstraintViolation(f"{field} must be a whole number", field=field)
    if value <= 0:
        raise ConstraintViolation(f"{field} must be positive", field=field)
    return value


def require_email(field: str, value) -> str:
    require_text(field, value)
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ConstraintViolation(f"{field} is not a valid email address: {exc}", field=field) from exc
    # Stored as given; lookups are exact matches
    return value


def require_member(field: str, value, enum_cls: Type[E]) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConstraintViolation(f"{field} must be one of: {allowed}", field=field) from exc
