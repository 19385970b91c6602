"""Load an :class:`AuthorizationRequest` from a JSON or YAML file.

``.json`` files are parsed as JSON only.  Any other extension is tried as YAML
first and as JSON second.  YAML plain scalars are read as text (only ``null``
is resolved), so phone numbers and numeric class names keep their digits.
Every failure (missing file, undecodable bytes, syntax error, wrong shape,
unknown key) surfaces as :class:`LoadError` chained to its cause.  Business
rules are *not* checked here.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..form.model import AuthorizationRequest
from ..utils.errors import LoadError
from ..utils.logging import get_logger

__all__ = ["parse_request", "load_request"]

logger = get_logger(__name__)

_KEPT_TAGS = frozenset({"tag:yaml.org,2002:null", "tag:yaml.org,2002:merge"})


class TextLoader(yaml.SafeLoader):
    """Safe loader that keeps plain scalars as text.

    Only the ``null`` and merge-key resolvers survive, so ``0612345670`` stays
    a phone number instead of an octal int and ``classe: 6`` stays ``"6"``.
    """


TextLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag in _KEPT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _decode(text: str, *, json_only: bool) -> Any:
    if json_only:
        return json.loads(text)
    try:
        return yaml.load(text, Loader=TextLoader)
    except yaml.YAMLError as yaml_exc:
        logger.debug("YAML parse failed (%s), trying JSON", yaml_exc)
        return json.loads(text)


def parse_request(data: Any, *, source: str = "<data>") -> AuthorizationRequest:
    """Build a request from already decoded ``data``."""

    if not isinstance(data, dict):
        raise LoadError(f"{source}: expected a mapping at top level, got {type(data).__name__}")
    try:
        return AuthorizationRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise LoadError(f"{source}: {exc}") from exc


def load_request(path: str | os.PathLike[str]) -> AuthorizationRequest:
    """Read ``path`` and return the request it describes."""

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"cannot read {file_path}: {exc}") from exc

    json_only = file_path.suffix.lower() == ".json"
    try:
        data = _decode(text, json_only=json_only)
    except json.JSONDecodeError as exc:
        kind = "JSON" if json_only else "YAML or JSON"
        raise LoadError(f"{file_path}: not valid {kind}: {exc}") from exc

    request = parse_request(data, source=str(file_path))
    logger.debug("loaded request from %s", file_path)
    return request
