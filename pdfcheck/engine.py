"""
Profile Engine
==============
Main orchestrator: opens a PDF, builds the requested profiles in
dependency order, evaluates them one after another and produces a
conformance report.

Usage:
    engine = ProfileEngine(config)
    report = engine.check("path/to/document.pdf")
    # report is a ConformanceReport, also written as JSON when output_dir is set

Architecture:
    PDF → (PyMuPDF) DocumentInfo + (pikepdf) PdfDocument →
    [TaggedProfile, AProfileLevelB, AProfileLevelA] →
    ProfileResults → ConformanceReport (JSON)
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF

from . import __version__
from .models import (
    ConformanceReport,
    DocumentInfo,
    ProfileKind,
    ProfileResult,
)
from .pdf.document import PdfDocument
from .profiles.registry import build_profiles

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class CheckerConfig:
    """Configuration for the profile engine."""

    # Profiles to evaluate; dependencies are added automatically
    profiles: Optional[list[ProfileKind]] = None

    # Output settings
    output_dir: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class ProfileEngine:
    """
    Evaluates conformance profiles against PDF documents.

    Each call to ``check()`` builds a fresh set of profiles, so one engine
    can check many documents in sequence.
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        # Configure the package logger
        package_logger = logging.getLogger("pdfcheck")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)
        else:
            for handler in package_logger.handlers:
                handler.setLevel(log_level)

        # File handler, once per log file
        if self.config.log_file and not self._has_file_handler(
            package_logger, self.config.log_file
        ):
            log_dir = Path(self.config.log_file).parent
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                self.config.log_file, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(file_handler)

    @staticmethod
    def _has_file_handler(package_logger: logging.Logger, log_file: str) -> bool:
        path = os.path.abspath(log_file)
        return any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == path
            for handler in package_logger.handlers
        )

    def check(self, pdf_path: str) -> ConformanceReport:
        """
        Check a PDF file against the configured profiles.

        Args:
            pdf_path: Path to the PDF file.

        Returns:
            ConformanceReport with one result per evaluated profile.

        Raises:
            FileNotFoundError: If the PDF file doesn't exist.
            RuntimeError: If the PDF cannot be opened.
        """
        pdf_path = os.path.abspath(pdf_path)
        start_time = time.time()
        logger.info(f"Checking: {pdf_path}")

        if not os.path.exists(pdf_path):
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        info = self._build_document_info(pdf_path)
        with PdfDocument.open(pdf_path) as document:
            report = self.check_document(document, info)

        elapsed = time.time() - start_time
        logger.info(
            f"Check complete in {elapsed:.2f}s — "
            f"conforms to: {', '.join(report.conforming_profiles) or 'none'}"
        )

        if self.config.output_dir:
            output_dir = Path(self.config.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            output_file = output_dir / f"{Path(pdf_path).stem}_conformance.json"
            self._save_json(report, output_file)

        return report

    def check_document(
        self, document: PdfDocument, info: Optional[DocumentInfo] = None
    ) -> ConformanceReport:
        """Evaluate the configured profiles against an open document."""
        info = info or DocumentInfo()

        results = []
        for profile in build_profiles(self.config.profiles):
            conforms = profile.evaluate(document)
            results.append(ProfileResult(
                kind=profile.kind,
                text=profile.get_text(),
                conforms=conforms,
                reasons=list(profile.get_reasons_for_non_compliance()),
            ))

        return ConformanceReport(
            document=info,
            checker_version=__version__,
            results=results,
        )

    def _build_document_info(self, pdf_path: str) -> DocumentInfo:
        """Build document info from file details and PyMuPDF metadata."""
        try:
            with fitz.open(pdf_path) as doc:
                if not doc.is_pdf:
                    raise RuntimeError(f"Not a PDF document: {pdf_path}")
                page_count = doc.page_count
                pdf_version = (doc.metadata or {}).get("format", "") or ""
                encrypted = bool(doc.is_encrypted)
        except RuntimeError as e:
            raise RuntimeError(f"Cannot open {pdf_path}: {e}") from e

        return DocumentInfo(
            source_pdf=os.path.basename(pdf_path),
            file_hash=self._compute_file_hash(pdf_path),
            file_size_bytes=os.path.getsize(pdf_path),
            page_count=page_count,
            pdf_version=pdf_version,
            encrypted=encrypted,
        )

    def _compute_file_hash(self, filepath: str) -> str:
        """Compute SHA-256 hash of a file."""
        sha256 = hashlib.sha256()
        with open(filepath, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()

    def _save_json(self, report: ConformanceReport, filepath: Path):
        """Save a report to a JSON file."""
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(
                    report.model_dump(mode="json"),
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
            logger.info(f"Saved JSON report: {filepath}")
        except OSError as e:
            logger.error(f"Failed to save JSON report: {e}")
