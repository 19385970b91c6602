"""French phone number normalization.

The rule is a local convention, not a general numbering plan:

1. keep ASCII digits, plus a ``+`` only when it is the first kept character;
2. a number starting with ``0`` (national format) loses that ``0`` and gets
   the ``+33`` country code;
3. a number starting with ``+`` is returned as is.

>>> normalize_phone("06 12 34 56 78")
'+33612345678'
>>> normalize_phone("+33 6 12 34 56 78")
'+33612345678'
"""

from __future__ import annotations

__all__ = ["FRANCE_PREFIX", "MIN_PHONE_LENGTH", "normalize_phone"]

FRANCE_PREFIX = "+33"
MIN_PHONE_LENGTH = 8


def normalize_phone(source: str) -> str:
    """Return the international form of ``source``.

    ``ValueError`` is raised when ``source`` holds no digit at all.  The
    function is idempotent on its own output.
    """

    kept: list[str] = []
    for ch in source:
        if "0" <= ch <= "9":
            kept.append(ch)
        elif ch == "+" and not kept:
            kept.append(ch)
    digits = "".join(kept)
    if not any(ch.isdigit() for ch in digits):
        raise ValueError(f"no digits in phone number {source!r}")
    if digits.startswith("0"):
        digits = FRANCE_PREFIX + digits[1:]
    return digits
