"""Document renderers: Markdown text and PDF bytes."""

from .markdown import escape_markdown, render_markdown
from .pdf import (
    PandocBackend,
    PdfBackend,
    ReportLabBackend,
    render_pdf,
    select_backends,
)

__all__ = [
    "escape_markdown",
    "render_markdown",
    "PdfBackend",
    "ReportLabBackend",
    "PandocBackend",
    "select_backends",
    "render_pdf",
]
