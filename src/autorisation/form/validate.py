"""Business rules for an :class:`AuthorizationRequest`.

:func:`validate` runs the checks below in order and raises on the first
failure:

1. child last name present and at most 80 characters (:class:`InvalidChildName`)
2. date is a real ``DD/MM/YYYY`` calendar date (:class:`InvalidDate`)
3. place present and at most 80 characters (:class:`InvalidPlace`)
4. guardian phone, when given, normalizes to at least 8 characters
   (:class:`InvalidPhone`)

The per-field helpers are reused by the interactive prompter so that a bad
answer is asked again instead of failing the whole run.  Nothing here performs
I/O.
"""

from __future__ import annotations

from ..utils.datefmt import parse_date
from ..utils.errors import (
    InvalidChildName,
    InvalidDate,
    InvalidPhone,
    InvalidPlace,
    ValidationError,
)
from ..utils.phone import MIN_PHONE_LENGTH, normalize_phone
from .model import AuthorizationRequest

__all__ = [
    "MAX_TEXT_LENGTH",
    "check_child_name",
    "check_date",
    "check_place",
    "check_phone",
    "validate",
    "is_valid",
]

MAX_TEXT_LENGTH = 80


def _is_bounded_text(value: str) -> bool:
    return bool(value.strip()) and len(value) <= MAX_TEXT_LENGTH


def check_child_name(value: str) -> None:
    if not _is_bounded_text(value):
        raise InvalidChildName(
            f"child last name must be 1-{MAX_TEXT_LENGTH} characters, got {len(value)}"
        )


def check_date(value: str) -> None:
    try:
        parse_date(value)
    except ValueError as exc:
        raise InvalidDate(f"invalid date {value!r}: {exc}") from exc


def check_place(value: str) -> None:
    if not _is_bounded_text(value):
        raise InvalidPlace(f"place must be 1-{MAX_TEXT_LENGTH} characters, got {len(value)}")


def check_phone(value: str) -> str:
    """Return the normalized phone or raise :class:`InvalidPhone`."""

    try:
        normalized = normalize_phone(value)
    except ValueError as exc:
        raise InvalidPhone(f"invalid phone {value!r}: {exc}") from exc
    if len(normalized) < MIN_PHONE_LENGTH:
        raise InvalidPhone(
            f"phone {value!r} too short after normalization ({normalized!r})"
        )
    return normalized


def validate(request: AuthorizationRequest) -> None:
    """Check ``request`` against the business rules, raising on the first failure."""

    check_child_name(request.child.last_name)
    check_date(request.date)
    check_place(request.place)
    if request.guardian is not None and request.guardian.phone is not None:
        check_phone(request.guardian.phone)


def is_valid(request: AuthorizationRequest) -> bool:
    """Return ``True`` when :func:`validate` passes."""

    try:
        validate(request)
    except ValidationError:
        return False
    return True
