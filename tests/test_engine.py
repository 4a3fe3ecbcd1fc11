"""
Test Suite for the Engine, Report Models and CLI
================================================
"""

from __future__ import annotations

import json
import logging
import os

import pikepdf
import pytest
from click.testing import CliRunner

from pdfcheck.cli import cli
from pdfcheck.engine import CheckerConfig, ProfileEngine
from pdfcheck.models import (
    ConformanceReport,
    DocumentInfo,
    NonComplianceReason,
    ProfileKind,
    ProfileResult,
)
from pdfcheck.pdf.objects import PdfDictionary, PdfSimpleObject
from pdfcheck.profiles import AProfileLevelA, AProfileLevelB

N = PdfSimpleObject.name


# ═══════════════════════════════════════════════════════════════════════════════
# MODEL TESTS
# ═══════════════════════════════════════════════════════════════════════════════


class TestModels:
    """Test report models."""

    def test_reason_label(self):
        assert NonComplianceReason(code=4, explanation="x").label == "Error 4"

    def test_conforming_profiles(self):
        report = ConformanceReport(
            document=DocumentInfo(source_pdf="a.pdf"),
            results=[
                ProfileResult(kind=ProfileKind.TAGGED, text="Tagged PDF", conforms=False),
                ProfileResult(kind=ProfileKind.PDFA1_B, text="B", conforms=True),
            ],
        )
        assert report.conforming_profiles == ["pdfa1b"]
        assert report.result_for(ProfileKind.PDFA1_A) is None

    def test_report_json(self):
        report = ConformanceReport(
            document=DocumentInfo(source_pdf="a.pdf", page_count=3),
            results=[
                ProfileResult(
                    kind=ProfileKind.PDFA1_A,
                    text="ISO PDF/A-1, Level A",
                    conforms=False,
                    reasons=[NonComplianceReason(code=4, explanation="no ToUnicode")],
                ),
            ],
        )
        parsed = json.loads(json.dumps(report.model_dump(mode="json")))
        assert parsed["document"]["page_count"] == 3
        assert parsed["results"][0]["kind"] == "pdfa1a"
        assert parsed["results"][0]["reasons"][0]["label"] == "Error 4"
        assert parsed["conforming_profiles"] == []


# ═══════════════════════════════════════════════════════════════════════════════
# ENGINE TESTS
# ═══════════════════════════════════════════════════════════════════════════════


class TestProfileEngine:
    """Test document checking end to end."""

    def test_check_document_in_dependency_order(self, stub_document):
        engine = ProfileEngine(CheckerConfig(profiles=[ProfileKind.PDFA1_A]))
        document = stub_document(catalog=PdfDictionary({"Type": N("Catalog")}))
        report = engine.check_document(document, DocumentInfo(pdf_version="PDF 1.4"))

        assert [r.kind for r in report.results] == [
            ProfileKind.TAGGED, ProfileKind.PDFA1_B, ProfileKind.PDFA1_A,
        ]
        assert report.result_for(ProfileKind.PDFA1_A).conforms is False
        assert report.document.pdf_version == "PDF 1.4"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProfileEngine().check(str(tmp_path / "missing.pdf"))

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "junk.pdf"
        path.write_bytes(b"this is not a pdf")
        with pytest.raises(RuntimeError):
            ProfileEngine().check(str(path))

    def test_log_file_handler_added_once(self, tmp_path):
        log_file = tmp_path / "logs" / "check.log"
        package_logger = logging.getLogger("pdfcheck")
        config = CheckerConfig(log_file=str(log_file))
        try:
            ProfileEngine(config)
            ProfileEngine(config)
            file_handlers = [
                h for h in package_logger.handlers
                if isinstance(h, logging.FileHandler)
                and h.baseFilename == os.path.abspath(str(log_file))
            ]
            assert len(file_handlers) == 1
        finally:
            for handler in list(package_logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    package_logger.removeHandler(handler)
                    handler.close()

    def test_generated_pdf(self, simple_pdf, tmp_path):
        output = tmp_path / "out"
        engine = ProfileEngine(CheckerConfig(output_dir=str(output)))
        report = engine.check(str(simple_pdf))

        assert report.document.source_pdf == "simple.pdf"
        assert report.document.page_count == 1
        assert report.document.pdf_version.startswith("PDF")
        assert report.document.encrypted is False
        assert len(report.document.file_hash) == 64
        assert report.conforming_profiles == []

        level_b = report.result_for(ProfileKind.PDFA1_B)
        codes = {r.code for r in level_b.reasons}
        assert AProfileLevelB.MISSING_METADATA in codes
        assert AProfileLevelB.FONT_NOT_EMBEDDED in codes

        level_a = report.result_for(ProfileKind.PDFA1_A)
        assert level_a.reasons[0].code == AProfileLevelA.TAGGED_NOT_SATISFIED
        # Helvetica is a Type 1 font, so only the dependencies fail Level A
        assert not any("ToUnicode" in r.explanation for r in level_a.reasons)

        saved = json.loads((output / "simple_conformance.json").read_text(encoding="utf-8"))
        assert saved["document"]["source_pdf"] == "simple.pdf"
        assert len(saved["results"]) == 3


# ═══════════════════════════════════════════════════════════════════════════════
# CLI TESTS
# ═══════════════════════════════════════════════════════════════════════════════


class TestCli:
    """Test the click commands."""

    def test_profiles_listing(self):
        result = CliRunner().invoke(cli, ["profiles"])
        assert result.exit_code == 0
        assert "pdfa1a" in result.output
        assert "Tagged PDF" in result.output

    def test_check_json_output(self, simple_pdf):
        result = CliRunner().invoke(cli, ["check", str(simple_pdf), "--json-output"])
        # Nothing conforms, so the exit code signals failure
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [r["kind"] for r in data["results"]] == ["tagged", "pdfa1b", "pdfa1a"]

    def test_check_single_profile(self, simple_pdf):
        result = CliRunner().invoke(
            cli, ["check", str(simple_pdf), "--profile", "pdfa1b", "--json-output"]
        )
        data = json.loads(result.stdout)
        assert [r["kind"] for r in data["results"]] == ["pdfa1b"]

    def test_check_tables(self, simple_pdf):
        result = CliRunner().invoke(cli, ["check", str(simple_pdf)])
        assert result.exit_code == 1
        assert "Profile Results" in result.output

    def test_fonts(self, simple_pdf):
        result = CliRunner().invoke(cli, ["fonts", str(simple_pdf)])
        assert result.exit_code == 0
        assert "Type1" in result.output

    def test_fonts_with_unreadable_entry(self, blank_pdf, tmp_path):
        font = blank_pdf.make_indirect(pikepdf.Dictionary(
            Type=pikepdf.Name.Font,
            Subtype=pikepdf.Name.Type1,
            BaseFont=pikepdf.Name.Helvetica,
        ))
        blank_pdf.pages[0].obj["/Resources"] = pikepdf.Dictionary(
            Font=pikepdf.Dictionary(F1=font, F2=pikepdf.Name.Helvetica),
        )
        path = tmp_path / "odd_fonts.pdf"
        blank_pdf.save(str(path))

        result = CliRunner().invoke(cli, ["fonts", str(path)])
        assert result.exit_code == 0
        assert "Type1" in result.output
        assert "unreadable" in result.output

    def test_batch_empty_directory(self, tmp_path):
        result = CliRunner().invoke(cli, ["batch", str(tmp_path)])
        assert result.exit_code == 0
        assert "No PDF files found" in result.output
