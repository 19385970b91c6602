"""Helpers for checking and humanizing ``DD/MM/YYYY`` dates.

Only calendar arithmetic is involved: no time zone and no process locale.
French month names come from a fixed table so the output does not depend on
the host configuration.
"""

from __future__ import annotations

import re
from datetime import date

__all__ = ["FRENCH_MONTHS", "parse_date", "is_valid_date", "humanize_date"]

FRENCH_MONTHS: tuple[str, ...] = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

_RX_DMY = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")


def parse_date(source: str) -> date:
    """Parse ``source`` written as ``D/M/YYYY`` into a :class:`date`.

    The whole of ``source`` must match, so surrounding whitespace is rejected.
    Day and month may have one or two digits, the year exactly four.
    ``ValueError`` is raised for any other shape and for triples with no real
    civil date (``31/02/2025``, ``29/02/2025``, ``00/01/2025``,
    ``01/13/2025``).
    """

    m = _RX_DMY.fullmatch(source)
    if m is None:
        raise ValueError(f"date must be DD/MM/YYYY, got {source!r}")
    day, month, year = map(int, m.groups())
    if not 1 <= day <= 31:
        raise ValueError(f"day out of range: {day}")
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError(f"no such calendar date: {source!r}") from exc


def is_valid_date(source: str) -> bool:
    """Return ``True`` when :func:`parse_date` accepts ``source``."""

    try:
        parse_date(source)
    except ValueError:
        return False
    return True


def humanize_date(source: str) -> str:
    """Render a validated date in long French form, e.g. ``25 septembre 2025``.

    Invalid input is returned unchanged; callers are expected to validate
    first.
    """

    try:
        d = parse_date(source)
    except ValueError:
        return source
    return f"{d.day} {FRENCH_MONTHS[d.month - 1]} {d.year}"
