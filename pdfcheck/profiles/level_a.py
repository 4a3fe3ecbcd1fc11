"""
PDF/A-1 Level A
===============
Profile checker for PDF/A-1 documents, Level A.

Level A builds on Level B and on the Tagged PDF profile: it reads their
cached results (they must be evaluated first) and adds the requirement that
text in every font can be mapped to Unicode.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import PdfTypeError
from ..models import ProfileKind
from ..pdf.objects import PdfArray, PdfDictionary, PdfObject, PdfSimpleObject
from .base import STRUCTURAL_ERRORS, PdfProfile
from .level_b import AProfileLevelB
from .tagged import TaggedProfile

logger = logging.getLogger(__name__)

# Character collections whose glyphs have a known Unicode mapping
CJK_COLLECTIONS = frozenset({
    "Adobe-GB1",
    "Adobe-CNS1",
    "Adobe-Japan1",
    "Adobe-Korea1",
})

# "MacRomanDecoding" and "MacExpertDecoding" are kept as spelled: fonts
# naming the standard MacRomanEncoding / MacExpertEncoding still need
# a ToUnicode entry.
STANDARD_ENCODINGS = frozenset({
    "WinAnsiEncoding",
    "MacRomanDecoding",
    "MacExpertDecoding",
})


class AProfileLevelA(PdfProfile):
    """
    Level A conformance.

    Returns a meaningful result only if the linked Level B and Tagged
    profiles have already been evaluated on the same document.
    """

    kind = ProfileKind.PDFA1_A
    profile_text = "ISO PDF/A-1, Level A"

    TAGGED_NOT_SATISFIED = 1
    LEVEL_B_NOT_SATISFIED = 2
    UNREADABLE_FONT = 3
    MISSING_TO_UNICODE = 4

    def __init__(
        self,
        level_b: Optional[AProfileLevelB] = None,
        tagged: Optional[TaggedProfile] = None,
    ):
        super().__init__()
        self._a_profile_level_b = level_b
        self._tagged_profile = tagged
        self._level_a = True

    @property
    def level_a(self) -> bool:
        """The Level A flag as left by the dependency and font checks."""
        return self._level_a

    def set_a_profile(self, profile: AProfileLevelB):
        """Link this profile to the Level B profile it depends on."""
        self._a_profile_level_b = profile

    def set_tagged_profile(self, profile: TaggedProfile):
        """Link this profile to the Tagged profile it depends on."""
        self._tagged_profile = profile

    def satisfies_this_profile(self) -> bool:
        self._level_a = True

        # Conforming to the Tagged profile is necessary for Level A
        if self._tagged_profile is not None and not self._tagged_profile.is_already_ok():
            self._level_a = False
            self.report_non_compliance(
                self.TAGGED_NOT_SATISFIED,
                "Document does not satisfy the Tagged PDF profile",
            )
            self.report_reasons_for_non_compliance(
                self._tagged_profile.get_reasons_for_non_compliance()
            )

        if self._a_profile_level_b is not None and not self._a_profile_level_b.is_already_ok():
            # The document may still be Level B even when Level A fails,
            # but never the other way round
            self._level_a = False
            self.report_non_compliance(
                self.LEVEL_B_NOT_SATISFIED,
                "Document does not satisfy PDF/A-1 Level B",
            )
            self.report_reasons_for_non_compliance(
                self._a_profile_level_b.get_reasons_for_non_compliance()
            )

        return self.fonts_ok() and self._level_a

    def fonts_ok(self) -> bool:
        """
        Check every font in every resource scope.

        A font that cannot be read stops the walk and fails. A font that
        only lacks ToUnicode clears the Level A flag and the walk goes on.
        """
        try:
            for font_map in self.document.get_font_maps():
                for name, font in font_map.items():
                    if not self.font_ok(font, name):
                        return False
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Font walk failed: {e}")
            self.report_non_compliance(
                self.UNREADABLE_FONT, f"Font resources could not be read: {e}"
            )
            return False
        return True

    def font_ok(self, font: PdfObject, name: str = "") -> bool:
        """
        Check one font dictionary.

        Returns False only when the font cannot be read. A missing
        ToUnicode entry is signalled through the Level A flag, not the
        return value.
        """
        try:
            if not isinstance(font, PdfDictionary):
                raise PdfTypeError(f"Font {name} is not a dictionary")

            subtype = font.get("Subtype").get_string_value()
            if subtype == "Type1":
                # The allowable Type 1 fonts are open ended
                return True

            if subtype == "Type0":
                collection = self._character_collection(font)
                if collection in CJK_COLLECTIONS:
                    return True

            encoding = font.get("Encoding")
            if isinstance(encoding, PdfSimpleObject):
                if encoding.get_string_value() in STANDARD_ENCODINGS:
                    return True

            # Presence is enough; the CMap itself is not checked
            if font.get("ToUnicode") is None:
                self._level_a = False
                self.report_non_compliance(
                    self.MISSING_TO_UNICODE,
                    f"Font {name} ({subtype}) has no ToUnicode entry",
                )
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Font {name} could not be read: {e}")
            self.report_non_compliance(
                self.UNREADABLE_FONT, f"Font {name} could not be read: {e}"
            )
            return False
        return True

    def _character_collection(self, font: PdfDictionary) -> Optional[str]:
        """
        Name of a Type 0 font's character collection, e.g. "Adobe-Japan1".

        Read from the font's own Ordering entry when it has one, otherwise
        from the first descendant font's CIDSystemInfo. Unreadable values
        give None.
        """
        try:
            ordering = font.get("Ordering")
            if isinstance(ordering, PdfSimpleObject):
                return ordering.get_string_value()

            descendants = self.document.resolve_indirect_object(
                font.get("DescendantFonts")
            )
            if not isinstance(descendants, PdfArray) or not len(descendants):
                return None
            descendant = self.document.get_dictionary(descendants[0])
            info = self.document.get_dictionary(descendant.get("CIDSystemInfo"))
            if info is None:
                return None
            registry = self.document.resolve_indirect_object(info.get("Registry"))
            ordering = self.document.resolve_indirect_object(info.get("Ordering"))
            return f"{registry.get_string_value()}-{ordering.get_string_value()}"
        except STRUCTURAL_ERRORS:
            return None
