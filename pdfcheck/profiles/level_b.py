"""
PDF/A-1 Level B
===============
Profile checker for PDF/A-1 documents, Level B.

Covers the requirements that make a file reproducible on its own:
no encryption, XMP metadata, no LZW compression, no XObject features
that depend on external resources, embedded font programs, and no
JavaScript.

Every check runs so that all reasons are reported together.
"""

from __future__ import annotations

import logging

from ..models import ProfileKind
from ..pdf.objects import PdfDictionary, PdfSimpleObject, PdfStream
from .base import STRUCTURAL_ERRORS, PdfProfile

logger = logging.getLogger(__name__)

FORBIDDEN_FILTERS = ("LZWDecode", "LZW")

FONT_FILE_KEYS = ("FontFile", "FontFile2", "FontFile3")

# Type 3 glyphs are content streams, so there is no program to embed
FONTS_WITHOUT_PROGRAM = frozenset({"Type3"})


class AProfileLevelB(PdfProfile):
    """Level B conformance."""

    kind = ProfileKind.PDFA1_B
    profile_text = "ISO PDF/A-1, Level B"

    ENCRYPTED = 1
    MISSING_METADATA = 2
    LZW_COMPRESSION = 3
    FORBIDDEN_XOBJECT = 4
    FONT_NOT_EMBEDDED = 5
    JAVASCRIPT_PRESENT = 6

    def satisfies_this_profile(self) -> bool:
        checks = [
            self._not_encrypted,
            self._has_metadata,
            self._no_lzw_streams,
            self._xobjects_all_ok,
            self._fonts_embedded,
            self._no_javascript,
        ]
        # No short-circuit: each check reports its own reasons
        results = [check() for check in checks]
        return all(results)

    # ─── Document-level checks ───────────────────────────────────────────

    def _not_encrypted(self) -> bool:
        try:
            encrypted = self.document.get_trailer().get("Encrypt") is not None
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Trailer could not be read: {e}")
            self.report_non_compliance(
                self.ENCRYPTED, f"Trailer could not be read: {e}"
            )
            return False
        if encrypted:
            self.report_non_compliance(
                self.ENCRYPTED, "Document is encrypted"
            )
            return False
        return True

    def _has_metadata(self) -> bool:
        try:
            catalog = self.document.get_catalog()
            metadata = self.document.resolve_indirect_object(catalog.get("Metadata"))
            if isinstance(metadata, PdfStream):
                return True
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Metadata lookup failed: {e}")
        self.report_non_compliance(
            self.MISSING_METADATA,
            "Document catalog has no XMP Metadata stream",
        )
        return False

    def _no_lzw_streams(self) -> bool:
        ok = True
        try:
            for stream in self.document.iter_streams():
                filter = self.document.resolve_indirect_object(
                    stream.get_dict().get("Filter")
                )
                if self.has_filters(filter, FORBIDDEN_FILTERS):
                    self.report_non_compliance(
                        self.LZW_COMPRESSION,
                        f"Stream object {stream.xref} uses LZW compression",
                    )
                    ok = False
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Stream filters could not be read: {e}")
            self.report_non_compliance(
                self.LZW_COMPRESSION, f"Stream filters could not be read: {e}"
            )
            return False
        return ok

    def _no_javascript(self) -> bool:
        try:
            catalog = self.document.get_catalog()
            names = self.document.get_dictionary(catalog.get("Names"))
            has_js = names is not None and names.get("JavaScript") is not None
            has_aa = catalog.get("AA") is not None
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"Catalog could not be read: {e}")
            has_js = has_aa = True
        if has_js or has_aa:
            self.report_non_compliance(
                self.JAVASCRIPT_PRESENT,
                "Document contains JavaScript or additional actions",
            )
            return False
        return True

    # ─── XObjects ────────────────────────────────────────────────────────

    def _xobjects_all_ok(self) -> bool:
        try:
            xobject_maps = self.document.get_xobject_maps()
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"XObject resources could not be read: {e}")
            self.report_non_compliance(
                self.FORBIDDEN_XOBJECT, f"XObject resources could not be read: {e}"
            )
            return False
        for xobjects in xobject_maps:
            if not self.xobjects_ok(xobjects):
                self.report_non_compliance(
                    self.FORBIDDEN_XOBJECT,
                    "An XObject uses a feature not allowed in PDF/A-1",
                )
                return False
        return True

    def xobject_ok(self, xobject: PdfDictionary) -> bool:
        subtype = xobject.get("Subtype")
        if _is_name(subtype, "PS") or _is_name(xobject.get("Subtype2"), "PS"):
            return False
        if xobject.get("OPI") is not None:
            return False
        if _is_name(subtype, "Image"):
            if xobject.get("Alternates") is not None:
                return False
            interpolate = xobject.get("Interpolate")
            if isinstance(interpolate, PdfSimpleObject) and interpolate.get_bool_value():
                return False
        elif _is_name(subtype, "Form"):
            if xobject.get("Ref") is not None:
                return False
        return True

    # ─── Fonts ───────────────────────────────────────────────────────────

    def _fonts_embedded(self) -> bool:
        ok = True
        try:
            for font_map in self.document.get_font_maps():
                for name, font in font_map.items():
                    if not self._font_embedded(font):
                        self.report_non_compliance(
                            self.FONT_NOT_EMBEDDED,
                            f"Font {name} has no embedded font program",
                        )
                        ok = False
        except STRUCTURAL_ERRORS as e:
            self.report_non_compliance(
                self.FONT_NOT_EMBEDDED, f"Font resources could not be read: {e}"
            )
            return False
        return ok

    def _font_embedded(self, font) -> bool:
        try:
            subtype = font.get("Subtype").get_string_value()
            if subtype in FONTS_WITHOUT_PROGRAM:
                return True
            if subtype == "Type0":
                descendants = self.document.resolve_indirect_object(
                    font.get("DescendantFonts")
                )
                font = self.document.get_dictionary(descendants[0])
            descriptor = self.document.get_dictionary(font.get("FontDescriptor"))
            if descriptor is None:
                return False
            return any(descriptor.get(key) is not None for key in FONT_FILE_KEYS)
        except STRUCTURAL_ERRORS:
            return False


def _is_name(node, value: str) -> bool:
    return isinstance(node, PdfSimpleObject) and node.is_name and node.value == value
