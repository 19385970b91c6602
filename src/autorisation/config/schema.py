"""Typed configuration schema and loader for the autorisation package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint

from ..utils.errors import ConfigError

BackendName = Literal["auto", "reportlab", "pandoc"]
PaperSize = Literal["A4", "letter", "legal"]
FontFamily = Literal["Helvetica", "Times-Roman", "Courier"]

#: Environment variable -> dotted config path.
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "AUTORISATION_PDF_BACKEND": ("pdf", "backend"),
    "AUTORISATION_PAPER_SIZE": ("pdf", "paper_size"),
    "AUTORISATION_FONT_FAMILY": ("pdf", "font_family"),
}

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class OutputSettings(BaseModel):
    """Default output locations."""

    pdf_path: Path

    model_config = ConfigDict(extra="forbid")


class PandocSettings(BaseModel):
    """External typesetting process settings."""

    enabled: bool
    executable: str
    pdf_engine: str | None = None
    timeout_s: confloat(gt=0) = 60.0

    model_config = ConfigDict(extra="forbid")


class PdfSettings(BaseModel):
    """Page layout and backend selection for PDF rendering."""

    backend: BackendName
    paper_size: PaperSize
    margin_mm: confloat(ge=0, le=60)
    font_family: FontFamily
    font_size: conint(ge=6, le=24)
    title: str
    pandoc: PandocSettings

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    output: OutputSettings
    pdf: PdfSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var, keys in ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        node = overrides
        for key in keys[:-1]:
            node = node.setdefault(key, {})
        node[keys[-1]] = value
    return overrides


def _read_yaml(path: str | os.PathLike[str]) -> dict[str, Any]:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return data


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``AUTORISATION_*`` environment variables.  Invalid values raise
    :class:`pydantic.ValidationError`; unreadable files raise
    :class:`ConfigError`.
    """

    with (
        importlib_resources.files("autorisation.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        merged = deep_merge_dicts(defaults, _read_yaml(path))
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    merged = deep_merge_dicts(merged, _env_overrides(environ))

    return ConfigModel.model_validate(merged)


__all__ = [
    "BackendName",
    "PaperSize",
    "FontFamily",
    "ENV_OVERRIDES",
    "ConfigModel",
    "OutputSettings",
    "PandocSettings",
    "PdfSettings",
    "deep_merge_dicts",
    "load_config",
]
