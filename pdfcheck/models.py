"""
Data Models
===========
Pydantic models for conformance results.
All models are serializable to JSON for the report file and --json-output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# ─── Enums ────────────────────────────────────────────────────────────────────


class ProfileKind(str, Enum):
    """Profiles the checker knows how to build."""
    TAGGED = "tagged"
    PDFA1_B = "pdfa1b"
    PDFA1_A = "pdfa1a"


# ─── Profile Results ──────────────────────────────────────────────────────────


class NonComplianceReason(BaseModel):
    """
    One reason a document does not satisfy a profile.
    The code identifies the failed check within its profile.
    """
    code: int = Field(ge=0)
    explanation: str = ""

    @computed_field
    @property
    def label(self) -> str:
        return f"Error {self.code}"


class ProfileResult(BaseModel):
    """Outcome of evaluating one profile against one document."""
    kind: ProfileKind
    text: str
    conforms: bool
    reasons: list[NonComplianceReason] = Field(default_factory=list)


# ─── Document / Report Models ─────────────────────────────────────────────────


class DocumentInfo(BaseModel):
    """Metadata about the checked PDF."""
    source_pdf: str = ""
    file_hash: str = ""
    file_size_bytes: int = 0
    page_count: int = 0
    pdf_version: str = ""
    encrypted: bool = False


class ConformanceReport(BaseModel):
    """
    Complete output of a check run.
    This is the top-level JSON structure written to disk.
    """
    document: DocumentInfo
    checker_version: str = "1.0.0"
    checked_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    results: list[ProfileResult] = Field(default_factory=list)

    @computed_field
    @property
    def conforming_profiles(self) -> list[str]:
        return [r.kind.value for r in self.results if r.conforms]

    def result_for(self, kind: ProfileKind) -> Optional[ProfileResult]:
        for result in self.results:
            if result.kind == kind:
                return result
        return None
