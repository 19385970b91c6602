"""Interactive collection of an authorization request.

Questions are asked in form order.  Required answers (child last name, date,
place) are asked again until they pass the same checks as the validator;
optional answers may be left empty.  The guardian phone is checked only when
one is given.  The exit time window is never asked for.
"""

from __future__ import annotations

from typing import Callable

import typer

from ..form.model import AuthorizationRequest, Child, Guardian
from ..form.validate import check_child_name, check_date, check_phone, check_place
from ..utils.errors import ValidationError

__all__ = ["prompt_request"]

PromptFunc = Callable[..., str]
EchoFunc = Callable[..., None]


def _ask_required(
    prompt: PromptFunc, echo: EchoFunc, text: str, check: Callable[[str], object]
) -> str:
    while True:
        answer = str(prompt(text)).strip()
        try:
            check(answer)
        except ValidationError as exc:
            echo(f"  {exc}", err=True)
            continue
        return answer


def _ask_optional(
    prompt: PromptFunc,
    echo: EchoFunc,
    text: str,
    check: Callable[[str], object] | None = None,
) -> str | None:
    while True:
        answer = str(prompt(text, default="", show_default=False)).strip()
        if not answer:
            return None
        if check is not None:
            try:
                check(answer)
            except ValidationError as exc:
                echo(f"  {exc}", err=True)
                continue
        return answer


def prompt_request(
    prompt: PromptFunc = typer.prompt, echo: EchoFunc = typer.echo
) -> AuthorizationRequest:
    """Ask for every field and return the assembled request."""

    last_name = _ask_required(prompt, echo, "Nom de l'enfant", check_child_name)
    first_name = _ask_optional(prompt, echo, "Prénom de l'enfant (optionnel)")
    date = _ask_required(prompt, echo, "Date (JJ/MM/AAAA)", check_date)
    place = _ask_required(prompt, echo, "Lieu", check_place)
    class_name = _ask_optional(prompt, echo, "Classe (optionnel)")
    guardian_name = _ask_optional(prompt, echo, "Nom du responsable légal (optionnel)")
    guardian_phone = _ask_optional(
        prompt, echo, "Téléphone du responsable (optionnel)", check_phone
    )
    reason = _ask_optional(prompt, echo, "Motif (optionnel)")

    guardian = None
    if guardian_name is not None or guardian_phone is not None:
        guardian = Guardian(name=guardian_name or "", phone=guardian_phone)

    return AuthorizationRequest(
        child=Child(last_name=last_name, first_name=first_name),
        date=date,
        place=place,
        class_name=class_name,
        guardian=guardian,
        reason=reason,
    )
