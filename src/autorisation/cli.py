"""Typer-based command line interface.

``autorisation generate`` runs the whole pipeline: load the request from a
file or from prompts, validate it, optionally write the Markdown rendering,
then render and write the PDF.  ``autorisation validate`` stops after
validation.  Validation always happens before anything is written, so an
invalid request never leaves an output file behind.

Exit codes
----------
0 success
2 usage error (``--input`` and ``--interactive`` both or neither given)
3 I/O error (input unreadable or unparsable, output not writable)
4 configuration error
5 validation error
6 rendering error (every PDF backend failed)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from .config import ConfigModel, load_config
from .form.model import AuthorizationRequest
from .form.validate import validate
from .io import (
    load_request,
    prompt_request,
    resolve_out_path,
    write_atomic,
    write_text_atomic,
)
from .render.markdown import render_markdown
from .render.pdf import render_pdf, select_backends
from .utils.errors import (
    ConfigError,
    LoadError,
    OutputPathError,
    RenderError,
    ValidationError,
)
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

EXIT_USAGE = 2
EXIT_IO = 3
EXIT_CONFIG = 4
EXIT_VALIDATION = 5
EXIT_RENDER = 6

app = typer.Typer(
    name="autorisation",
    help="Generate a parental exit authorization. Use 'autorisation generate' to produce the PDF.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load_settings(config_path: Path | None, backend: str | None) -> ConfigModel:
    try:
        cfg = load_config(config_path)
    except (ConfigError, PydanticValidationError) as exc:
        _safe_exit(EXIT_CONFIG, f"configuration error: {str(exc).splitlines()[0]}")
    if backend is not None:
        if backend not in ("auto", "reportlab", "pandoc"):
            _safe_exit(EXIT_USAGE, f"unknown backend: {backend}")
        cfg = cfg.model_copy(deep=True)
        cfg.pdf.backend = backend  # type: ignore[assignment]
    return cfg


def _collect_request(input_path: Path | None, interactive: bool) -> AuthorizationRequest:
    if interactive and input_path is not None:
        _safe_exit(EXIT_USAGE, "--input and --interactive are mutually exclusive")
    if interactive:
        return prompt_request()
    if input_path is None:
        _safe_exit(EXIT_USAGE, "either --input <file> or --interactive must be provided")
    try:
        return load_request(input_path)
    except LoadError as exc:
        _safe_exit(EXIT_IO, f"failed to load input file: {exc}")


def _validate_or_exit(request: AuthorizationRequest) -> None:
    try:
        validate(request)
    except ValidationError as exc:
        _safe_exit(EXIT_VALIDATION, f"validation failed ({type(exc).__name__}): {exc}")


@app.callback()
def main() -> None:
    """Entry point for the autorisation command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    input_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--input", "-i", help="Request file (JSON or YAML)"
    ),
    interactive: bool = typer.Option(  # noqa: B008
        False, "--interactive", help="Ask for the fields on the terminal"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="PDF output path [default: autorisation_sortie.pdf]"
    ),
    md_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--md", help="Also write the Markdown rendering to this path"
    ),
    school_name: Optional[str] = typer.Option(  # noqa: B008
        None, "--school-name", help="School name printed as page heading"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    backend: Optional[str] = typer.Option(  # noqa: B008
        None, "--backend", help="PDF backend [auto|reportlab|pandoc]"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Validate a request and write the authorization PDF (and Markdown)."""

    logger = configure_logging(verbose)
    cfg = _load_settings(config_path, backend)

    request = _collect_request(input_path, interactive)
    _validate_or_exit(request)
    logger.info("request for %s validated", request.child.full_name)

    try:
        pdf_out = resolve_out_path(out_path if out_path is not None else cfg.output.pdf_path)
        md_out = resolve_out_path(md_path) if md_path is not None else None
    except OutputPathError as exc:
        _safe_exit(EXIT_IO, str(exc))

    markdown = render_markdown(request, school_name) if md_out is not None else None
    backends = select_backends(cfg.pdf)
    logger.debug("PDF backends: %s", ", ".join(b.name() for b in backends))
    try:
        data = render_pdf(request, school_name, backends)
    except RenderError as exc:
        _safe_exit(EXIT_RENDER, f"PDF generation failed: {exc}")

    written: dict[str, str] = {}
    if md_out is not None and markdown is not None:
        try:
            write_text_atomic(md_out, markdown)
        except OSError as exc:
            _safe_exit(EXIT_IO, f"failed to write markdown output: {exc}")
        logger.info("wrote markdown %s", md_out)
        written["md"] = str(md_out)
    try:
        write_atomic(pdf_out, data)
    except OSError as exc:
        _safe_exit(EXIT_IO, f"failed to write PDF output: {exc}")
    logger.info("wrote PDF %s", pdf_out)
    written["pdf"] = str(pdf_out)

    if verbose:
        for kind, path in written.items():
            typer.echo(f"Wrote {kind}: {path}", err=True)


@app.command("validate")
def validate_command(
    input_path: Path = typer.Option(  # noqa: B008
        ..., "--input", "-i", help="Request file (JSON or YAML)"
    ),
) -> None:
    """Load and validate a request file without rendering anything."""

    configure_logging(False)
    request = _collect_request(input_path, interactive=False)
    _validate_or_exit(request)
    typer.echo(f"OK: {request.child.full_name}, {request.date}, {request.place}")
