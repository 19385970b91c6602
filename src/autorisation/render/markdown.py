"""Markdown rendering of an authorization.

Section order is fixed: optional school heading, title, child, date, place,
optional class, optional guardian name and phone, optional reason, then the
signature block.  Every field is its own paragraph of the form
``Label : value``.

User supplied values go through :func:`escape_markdown`, so a name such as
``*Jean*`` or a reason containing ``# urgent`` is printed literally instead of
changing the document structure.
"""

from __future__ import annotations

import re

from ..form.model import AuthorizationRequest
from ..utils.datefmt import humanize_date

__all__ = ["TITLE", "SIGNATURE_BLOCK", "escape_markdown", "render_markdown"]

TITLE = "Autorisation de sortie"
SIGNATURE_BLOCK = (
    "Fait à ____, le ____\n\n\nSignature du responsable légal : ___________________\n"
)

_SPECIALS = re.compile(r"([\\`*_\[\]<>#|!~])")
_WHITESPACE = re.compile(r"\s+")


def escape_markdown(value: str) -> str:
    """Collapse whitespace in ``value`` and backslash-escape Markdown syntax."""

    flat = _WHITESPACE.sub(" ", value).strip()
    return _SPECIALS.sub(r"\\\1", flat)


def _field(label: str, value: str) -> str:
    return f"{label} : {escape_markdown(value)}\n\n"


def render_markdown(request: AuthorizationRequest, school_name: str | None = None) -> str:
    """Return the Markdown document for ``request``.

    ``request`` must already be validated: the date is humanized without
    further checks.
    """

    parts: list[str] = []
    if school_name and school_name.strip():
        parts.append(f"# {escape_markdown(school_name)}\n\n")
    parts.append(f"## {TITLE}\n\n")
    parts.append(_field("Enfant", request.child.full_name))
    parts.append(_field("Date", humanize_date(request.date)))
    parts.append(_field("Lieu", request.place))
    if request.class_name is not None:
        parts.append(_field("Classe", request.class_name))
    if request.guardian is not None:
        parts.append(_field("Responsable légal", request.guardian.name))
        if request.guardian.phone is not None:
            parts.append(_field("Tél", request.guardian.phone))
    if request.reason is not None:
        parts.append(_field("Motif", request.reason))
    parts.append("\n")
    parts.append(SIGNATURE_BLOCK)
    return "".join(parts)
