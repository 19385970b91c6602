"""Data model for a single exit authorization request.

The models only enforce *structure*: field types, required keys and the
rejection of unknown keys.  Business rules (name lengths, real calendar date,
phone length) are checked later by :func:`autorisation.form.validate.validate`
so that a request can be built from a file or from prompts before anything is
judged.

Input files use the French keys of the printed form (``enfant``, ``nom``,
``prenom``, ``lieu``, ``classe``, ``responsable``, ``telephone``,
``plage_horaire``, ``debut``, ``fin``, ``motif``).  The Python attribute names
are accepted as well, which is what tests and the prompter use.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["Child", "Guardian", "TimeWindow", "AuthorizationRequest", "blank_to_none"]

_MODEL_CONFIG = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


def blank_to_none(value: object) -> object:
    """Map empty or whitespace-only optional strings to ``None``."""

    if isinstance(value, str) and not value.strip():
        return None
    return value


class Child(BaseModel):
    """The child leaving school."""

    last_name: str = Field(alias="nom")
    first_name: str | None = Field(default=None, alias="prenom")

    model_config = _MODEL_CONFIG

    @field_validator("first_name", mode="before")
    @classmethod
    def empty_as_missing(cls, value: object) -> object:
        return blank_to_none(value)

    @property
    def full_name(self) -> str:
        """Last name followed by the first name when there is one."""

        if self.first_name:
            return f"{self.last_name} {self.first_name}"
        return self.last_name


class Guardian(BaseModel):
    """Legal guardian signing the authorization."""

    name: str = Field(alias="nom")
    phone: str | None = Field(default=None, alias="telephone")

    model_config = _MODEL_CONFIG

    @field_validator("phone", mode="before")
    @classmethod
    def empty_as_missing(cls, value: object) -> object:
        return blank_to_none(value)


class TimeWindow(BaseModel):
    """Optional ``HH:MM`` exit window.  Stored but not rendered."""

    start: str | None = Field(default=None, alias="debut")
    end: str | None = Field(default=None, alias="fin")

    model_config = _MODEL_CONFIG


class AuthorizationRequest(BaseModel):
    """Root entity: everything printed on one authorization.

    ``date`` keeps the original ``DD/MM/YYYY`` text; whether it is a real date
    is a derived property checked by the validator.
    """

    child: Child = Field(alias="enfant")
    date: str
    place: str = Field(alias="lieu")
    class_name: str | None = Field(default=None, alias="classe")
    guardian: Guardian | None = Field(default=None, alias="responsable")
    time_window: TimeWindow | None = Field(default=None, alias="plage_horaire")
    reason: str | None = Field(default=None, alias="motif")

    model_config = _MODEL_CONFIG

    @field_validator("class_name", "reason", mode="before")
    @classmethod
    def empty_as_missing(cls, value: object) -> object:
        return blank_to_none(value)
