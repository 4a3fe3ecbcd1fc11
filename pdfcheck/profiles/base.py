"""
Profile Base
============
Abstract base class for PDF profile checkers.

A profile is evaluated once per document. ``evaluate()`` does the
bookkeeping shared by every profile (binding the document, resetting the
reasons, caching success) and delegates the actual checks to
``satisfies_this_profile()``.

Once a profile has succeeded, ``is_already_ok()`` stays True for the life of
the instance, so profiles that depend on it read the cached flag instead of
re-running its checks. Instances hold per-document state and must not be
shared between documents.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, final

from ..errors import PdfObjectError
from ..models import NonComplianceReason, ProfileKind
from ..pdf.document import PdfDocument
from ..pdf.objects import (
    PdfArray,
    PdfDictionary,
    PdfObject,
    PdfSimpleObject,
    PdfStream,
)

logger = logging.getLogger(__name__)

# Reported when the object graph breaks in a way the profile did not handle
UNREADABLE_STRUCTURE = 0

# Errors that mean "the data is not shaped the way this check needs"
STRUCTURAL_ERRORS = (PdfObjectError, AttributeError, TypeError, IndexError)


class PdfProfile(ABC):
    """
    Base class for profile checkers.

    Subclasses set ``kind`` and ``profile_text`` and implement
    ``satisfies_this_profile()``. They may override ``xobject_ok()`` to give
    ``xobjects_ok()`` a per-XObject rule.
    """

    kind: ProfileKind
    profile_text: str = ""

    def __init__(self):
        self._document: Optional[PdfDocument] = None
        self._already_ok = False
        self._reasons_for_non_compliance: list[NonComplianceReason] = []

    # ─── Evaluation ──────────────────────────────────────────────────────

    @final
    def evaluate(self, document: PdfDocument) -> bool:
        """
        Returns True if the document satisfies the profile.

        Subclasses override ``satisfies_this_profile()``, never this
        method. The document is bound only for the duration of the call.
        """
        self._document = document
        self._reasons_for_non_compliance = []
        try:
            satisfied = self.satisfies_this_profile()
        except PdfObjectError as e:
            logger.warning(f"{self.get_text()}: unreadable structure: {e}")
            self.report_non_compliance(
                UNREADABLE_STRUCTURE,
                f"Document structure could not be read: {e}",
            )
            satisfied = False
        finally:
            self._document = None

        if satisfied:
            self._already_ok = True

        logger.info(
            f"{self.get_text()}: "
            f"{'satisfied' if satisfied else 'not satisfied'} "
            f"({len(self._reasons_for_non_compliance)} reasons)"
        )
        return satisfied

    @abstractmethod
    def satisfies_this_profile(self) -> bool:
        """
        Run the profile's checks against the bound document.

        May consult dependency profiles through ``is_already_ok()`` and
        report any number of reasons before returning False.
        """

    def is_already_ok(self) -> bool:
        """True once an evaluation of this instance has succeeded."""
        return self._already_ok

    @property
    def document(self) -> PdfDocument:
        if self._document is None:
            raise RuntimeError(
                f"{type(self).__name__} is not being evaluated"
            )
        return self._document

    def get_text(self) -> str:
        """Returns the text which describes this profile."""
        return self.profile_text

    # ─── Reasons for non-compliance ──────────────────────────────────────

    def report_non_compliance(self, code: int, explanation: str):
        """
        Record why the document does not match this profile.

        Args:
            code: Identifies the exact check that failed. Unique per
                failure cause within a profile.
            explanation: Human-readable description; the code carries
                the precise meaning.
        """
        logger.debug(f"{self.get_text()}: Error {code}: {explanation}")
        self._reasons_for_non_compliance.append(
            NonComplianceReason(code=code, explanation=explanation)
        )

    def report_reasons_for_non_compliance(
        self, reasons: Iterable[NonComplianceReason]
    ):
        """Add reasons verbatim, typically another profile's."""
        self._reasons_for_non_compliance.extend(reasons)

    def get_reasons_for_non_compliance(self) -> list[NonComplianceReason]:
        """Reasons found by the most recent evaluation."""
        return self._reasons_for_non_compliance

    # ─── Structural helpers ──────────────────────────────────────────────

    def has_filters(
        self, filter: Optional[PdfObject], names: Iterable[str]
    ) -> bool:
        """
        Returns True if a Filter entry names any of the given filters.

        Args:
            filter: A name, an array of names, or None. None and values
                of any other shape match nothing.
            names: Filter names which should produce a True result.
        """
        candidates = set(names)
        if filter is None:
            return False
        try:
            if isinstance(filter, PdfSimpleObject):
                # Name of just one filter
                return filter.get_string_value() in candidates
            if isinstance(filter, PdfArray):
                for filt in filter:
                    if filt.get_string_value() in candidates:
                        return True
        except STRUCTURAL_ERRORS:
            return False
        return False

    def xobjects_ok(self, xobjects: Optional[PdfDictionary]) -> bool:
        """
        Check an XObject resource dictionary entry by entry.

        Each entry is resolved and, for streams, replaced by the stream's
        dictionary before ``xobject_ok()`` sees it. Entries that are not
        dictionaries are skipped. Any resolution or type error fails.
        """
        if xobjects is None:
            return True  # nothing to fail
        try:
            for entry in xobjects:
                obj = self.document.resolve_indirect_object(entry)
                if isinstance(obj, PdfStream):
                    obj = obj.get_dict()
                if isinstance(obj, PdfDictionary):
                    if not self.xobject_ok(obj):
                        return False
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"XObject check failed on malformed data: {e}")
            return False
        return True

    def xobject_ok(self, xobject: PdfDictionary) -> bool:
        """Checks a single XObject. Always True; override to add rules."""
        return True
