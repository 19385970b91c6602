"""PDF rendering backends.

A backend turns a validated request into PDF bytes.  Two implementations are
provided:

* :class:`PandocBackend` pipes the Markdown rendering into an external
  ``pandoc`` process.  It is only offered when the executable is on ``PATH``
  and enabled in the configuration.
* :class:`ReportLabBackend` lays the page out in-process with reportlab's
  platypus engine.  It is always available and ends every chain.

:func:`select_backends` probes availability once and returns the ordered
chain; :func:`render_pdf` walks it, logging each failure and falling back to
the next backend.  Output that is empty or does not start with ``%PDF`` counts
as a failure.
"""

from __future__ import annotations

import io
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import TopPadder

from ..config import PdfSettings
from ..form.model import AuthorizationRequest
from ..utils.datefmt import humanize_date
from ..utils.errors import RenderError
from ..utils.logging import get_logger
from .markdown import render_markdown

__all__ = [
    "PdfBackend",
    "ReportLabBackend",
    "PandocBackend",
    "select_backends",
    "render_pdf",
]

logger = get_logger(__name__)

_PAGE_SIZES = {"A4": A4, "letter": LETTER, "legal": LEGAL}
_LATEX_PAPER = {"A4": "a4", "letter": "letter", "legal": "legal"}
_BOLD_FONTS = {
    "Helvetica": "Helvetica-Bold",
    "Times-Roman": "Times-Bold",
    "Courier": "Courier-Bold",
}
PDF_MAGIC = b"%PDF"


@runtime_checkable
class PdfBackend(Protocol):
    """Capability: render a request into PDF bytes."""

    def name(self) -> str:
        """Return a short, stable identifier for the backend."""

        ...

    def is_available(self) -> bool:
        """Return ``True`` when the backend can run on this machine."""

        ...

    def render(self, request: AuthorizationRequest, school_name: str | None = None) -> bytes:
        """Return the PDF document for ``request``; raise :class:`RenderError`."""

        ...


# ---------------------------------------------------------------------------
# Embedded layout engine
# ---------------------------------------------------------------------------


class ReportLabBackend:
    """Single page layout drawn with reportlab platypus."""

    def __init__(self, settings: PdfSettings) -> None:
        self.settings = settings

    def name(self) -> str:
        return "reportlab"

    def is_available(self) -> bool:
        return True

    def _styles(self) -> dict[str, ParagraphStyle]:
        font = self.settings.font_family
        bold = _BOLD_FONTS[font]
        size = self.settings.font_size
        body = ParagraphStyle("body", fontName=font, fontSize=size, leading=size * 1.4)
        return {
            "body": body,
            "label": ParagraphStyle("label", parent=body, fontName=bold),
            "child": ParagraphStyle(
                "child", parent=body, fontName=bold, fontSize=size + 1, leading=(size + 1) * 1.4
            ),
            "title": ParagraphStyle(
                "title",
                parent=body,
                fontName=bold,
                fontSize=size + 7,
                leading=(size + 7) * 1.3,
                alignment=TA_CENTER,
            ),
            "signature": ParagraphStyle("signature", parent=body, alignment=TA_RIGHT),
        }

    def _story(
        self, request: AuthorizationRequest, width: float
    ) -> list[Paragraph | Spacer | TopPadder]:
        styles = self._styles()
        body = styles["body"]
        gap = self.settings.font_size * 0.6

        story: list[Paragraph | Spacer | TopPadder] = [
            Paragraph(escape(self.settings.title), styles["title"]),
            Spacer(1, 8 * mm),
            Paragraph(f"Enfant : {escape(request.child.full_name)}", styles["child"]),
            Spacer(1, gap),
            Paragraph(f"Date : {escape(humanize_date(request.date))}", body),
            Paragraph(f"Lieu : {escape(request.place)}", body),
        ]
        if request.class_name is not None:
            story.append(Paragraph(f"Classe : {escape(request.class_name)}", body))
        if request.guardian is not None:
            story.append(Spacer(1, gap))
            story.append(Paragraph(f"Responsable légal : {escape(request.guardian.name)}", body))
            if request.guardian.phone is not None:
                story.append(Paragraph(f"Tél : {escape(request.guardian.phone)}", body))
        if request.reason is not None:
            story.append(Spacer(1, gap))
            story.append(Paragraph("Motif :", styles["label"]))
            story.append(Paragraph(escape(request.reason), body))

        signature = Table(
            [
                [Paragraph("Fait à _______________________, le _______________________", body)],
                [Spacer(1, 8 * mm)],
                [Paragraph("Signature du responsable légal :", body)],
                [Spacer(1, 8 * mm)],
                [Paragraph("____________________________", styles["signature"])],
            ],
            colWidths=[width],
        )
        signature.setStyle(
            TableStyle(
                [
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        story.append(TopPadder(signature))
        return story

    def render(self, request: AuthorizationRequest, school_name: str | None = None) -> bytes:
        margin = self.settings.margin_mm * mm
        header = school_name.strip() if school_name else ""
        header_height = 12 * mm if header else 0
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=_PAGE_SIZES[self.settings.paper_size],
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin + header_height,
            bottomMargin=margin,
            title=self.settings.title,
            author="autorisation",
        )
        bold = _BOLD_FONTS[self.settings.font_family]

        def first_page(canvas, document):  # type: ignore[no-untyped-def]
            if not header:
                return
            canvas.saveState()
            canvas.setFont(bold, 14)
            canvas.drawCentredString(
                document.pagesize[0] / 2.0,
                document.pagesize[1] - margin - 6 * mm,
                header,
            )
            canvas.restoreState()

        try:
            doc.build(self._story(request, doc.width), onFirstPage=first_page)
        except Exception as exc:
            raise RenderError(f"reportlab layout failed: {exc}") from exc
        return buffer.getvalue()


# ---------------------------------------------------------------------------
# External typesetting process
# ---------------------------------------------------------------------------


class PandocBackend:
    """Delegate typesetting to ``pandoc`` reading the Markdown rendering."""

    def __init__(self, settings: PdfSettings) -> None:
        self.settings = settings
        self.pandoc = settings.pandoc

    def name(self) -> str:
        return "pandoc"

    def is_available(self) -> bool:
        return self.pandoc.enabled and shutil.which(self.pandoc.executable) is not None

    def command(self, out_path: Path) -> list[str]:
        """Return the argument vector writing the PDF to ``out_path``."""

        cmd = [
            self.pandoc.executable,
            "--from",
            "markdown",
            "--output",
            str(out_path),
            "--metadata",
            f"pagetitle={self.settings.title}",
            "--variable",
            f"papersize={_LATEX_PAPER[self.settings.paper_size]}",
            "--variable",
            f"geometry:margin={self.settings.margin_mm:g}mm",
            "--variable",
            f"fontsize={self.settings.font_size}pt",
        ]
        if self.pandoc.pdf_engine:
            cmd.append(f"--pdf-engine={self.pandoc.pdf_engine}")
        return cmd

    def render(self, request: AuthorizationRequest, school_name: str | None = None) -> bytes:
        text = render_markdown(request, school_name)
        with tempfile.TemporaryDirectory(prefix="autorisation-") as tmp:
            out_path = Path(tmp) / "autorisation.pdf"
            try:
                subprocess.run(
                    self.command(out_path),
                    input=text.encode("utf-8"),
                    capture_output=True,
                    timeout=self.pandoc.timeout_s,
                    check=True,
                )
            except subprocess.CalledProcessError as exc:
                stderr = (exc.stderr or b"").decode("utf-8", "replace").strip()
                raise RenderError(f"pandoc exited with {exc.returncode}: {stderr}") from exc
            except subprocess.TimeoutExpired as exc:
                raise RenderError(f"pandoc timed out after {exc.timeout}s") from exc
            except OSError as exc:
                raise RenderError(f"cannot run {self.pandoc.executable}: {exc}") from exc
            try:
                return out_path.read_bytes()
            except OSError as exc:
                raise RenderError(f"pandoc produced no output: {exc}") from exc


# ---------------------------------------------------------------------------
# Selection and fallback chain
# ---------------------------------------------------------------------------


def select_backends(settings: PdfSettings) -> list[PdfBackend]:
    """Return the backends to try, in order, for ``settings.backend``.

    ``auto`` yields pandoc (when available) followed by reportlab.  A forced
    ``pandoc`` still keeps reportlab as fallback; a forced ``reportlab`` uses
    it alone.
    """

    embedded = ReportLabBackend(settings)
    if settings.backend == "reportlab":
        return [embedded]
    external = PandocBackend(settings)
    if external.is_available():
        return [external, embedded]
    if settings.backend == "pandoc":
        logger.warning(
            "pandoc backend requested but %r is unavailable; using reportlab",
            settings.pandoc.executable,
        )
    return [embedded]


def render_pdf(
    request: AuthorizationRequest,
    school_name: str | None,
    backends: Sequence[PdfBackend],
) -> bytes:
    """Render ``request`` with the first backend that succeeds.

    Raises :class:`RenderError` wrapping the last failure when every backend
    fails, or when ``backends`` is empty.
    """

    last_error: RenderError | None = None
    for backend in backends:
        try:
            data = backend.render(request, school_name)
        except RenderError as exc:
            logger.warning("%s backend failed: %s", backend.name(), exc)
            last_error = exc
            continue
        if not data.startswith(PDF_MAGIC):
            last_error = RenderError(f"{backend.name()} backend returned no PDF data")
            logger.warning("%s", last_error)
            continue
        logger.debug("rendered %d bytes with %s", len(data), backend.name())
        return data

    if last_error is None:
        raise RenderError("no PDF backend configured")
    raise RenderError(f"all PDF backends failed; last error: {last_error}") from last_error
