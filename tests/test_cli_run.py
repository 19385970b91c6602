from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from autorisation.cli import app
from autorisation.render import pdf as pdf_mod

REQUEST_YAML = """\
enfant:
  nom: Dupont
  prenom: Jean
date: 25/09/2025
lieu: Rennes
classe: CM1
responsable:
  nom: Marie Dupont
  telephone: "06 12 34 56 78"
motif: Rendez-vous médical
"""


def _write_request(tmp_path: Path) -> Path:
    in_path = tmp_path / "demande.yaml"
    in_path.write_text(REQUEST_YAML, encoding="utf-8")
    return in_path


def test_generate_pdf_and_markdown(tmp_path: Path) -> None:
    in_path = _write_request(tmp_path)
    out_pdf = tmp_path / "out" / "sortie.pdf"
    out_md = tmp_path / "sortie.md"

    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--input",
            str(in_path),
            "--out",
            str(out_pdf),
            "--md",
            str(out_md),
            "--school-name",
            "École Jules Ferry",
            "--backend",
            "reportlab",
        ],
    )
    assert result.exit_code == 0, result.output
    assert out_pdf.read_bytes().startswith(b"%PDF")
    md = out_md.read_text(encoding="utf-8")
    assert md.startswith("# École Jules Ferry")
    assert "Dupont Jean" in md
    assert "25 septembre 2025" in md
    assert "Motif : Rendez-vous médical" in md


def test_generate_default_out_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    in_path = _write_request(tmp_path)
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(
        app, ["generate", "-i", str(in_path), "--backend", "reportlab"]
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "autorisation_sortie.pdf").read_bytes().startswith(b"%PDF")
    assert not list(tmp_path.glob("*.md"))


def test_generate_json_input(tmp_path: Path) -> None:
    in_path = tmp_path / "demande.json"
    in_path.write_text(
        '{"enfant": {"nom": "Martin"}, "date": "1/8/2024", "lieu": "Nantes"}',
        encoding="utf-8",
    )
    out_md = tmp_path / "sortie.md"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--input",
            str(in_path),
            "--out",
            str(tmp_path / "sortie.pdf"),
            "--md",
            str(out_md),
            "--backend",
            "reportlab",
        ],
    )
    assert result.exit_code == 0, result.output
    md = out_md.read_text(encoding="utf-8")
    assert "1 août 2024" in md
    assert "Motif" not in md


def test_generate_interactive(tmp_path: Path) -> None:
    out_pdf = tmp_path / "sortie.pdf"
    out_md = tmp_path / "sortie.md"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "generate",
            "--interactive",
            "--out",
            str(out_pdf),
            "--md",
            str(out_md),
            "--backend",
            "reportlab",
        ],
        input="Dupont\nJean\n25/09/2025\nRennes\nCM1\n\n\n\n",
    )
    assert result.exit_code == 0, result.output
    assert out_pdf.read_bytes().startswith(b"%PDF")
    md = out_md.read_text(encoding="utf-8")
    assert "Enfant : Dupont Jean" in md
    assert "Responsable" not in md


def test_forced_pandoc_unavailable_falls_back(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(pdf_mod.shutil, "which", lambda exe: None)
    in_path = _write_request(tmp_path)
    out_pdf = tmp_path / "sortie.pdf"
    runner = CliRunner()
    result = runner.invoke(
        app, ["generate", "-i", str(in_path), "--out", str(out_pdf), "--backend", "pandoc"]
    )
    assert result.exit_code == 0, result.output
    assert out_pdf.read_bytes().startswith(b"%PDF")
    assert "unavailable" in result.stderr


def test_env_backend_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTORISATION_PDF_BACKEND", "reportlab")

    probed: list[str] = []

    def probe(exe: str) -> str:
        probed.append(exe)
        return f"/usr/bin/{exe}"

    monkeypatch.setattr(pdf_mod.shutil, "which", probe)
    in_path = _write_request(tmp_path)
    out_pdf = tmp_path / "sortie.pdf"
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "-i", str(in_path), "--out", str(out_pdf)])
    assert result.exit_code == 0, result.output
    assert out_pdf.read_bytes().startswith(b"%PDF")
    assert "pandoc" not in probed


def test_verbose_reports_written_files(tmp_path: Path) -> None:
    in_path = _write_request(tmp_path)
    out_pdf = tmp_path / "sortie.pdf"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["generate", "-i", str(in_path), "--out", str(out_pdf), "--backend", "reportlab", "-v"],
    )
    assert result.exit_code == 0, result.output
    assert f"Wrote pdf: {out_pdf}" in result.stderr


def test_validate_command_ok(tmp_path: Path) -> None:
    in_path = _write_request(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["validate", "--input", str(in_path)])
    assert result.exit_code == 0
    assert "OK: Dupont Jean, 25/09/2025, Rennes" in result.stdout
