"""
Tagged PDF
==========
Profile checker for Tagged PDF: the document declares itself marked and
carries a logical structure tree.
"""

from __future__ import annotations

import logging

from ..models import ProfileKind
from ..pdf.objects import PdfSimpleObject
from .base import STRUCTURAL_ERRORS, PdfProfile

logger = logging.getLogger(__name__)


class TaggedProfile(PdfProfile):
    """Tagged PDF conformance."""

    kind = ProfileKind.TAGGED
    profile_text = "Tagged PDF"

    NOT_MARKED = 1
    MISSING_STRUCT_TREE = 2
    EMPTY_STRUCT_TREE = 3
    BAD_ROLE_MAP = 4

    def satisfies_this_profile(self) -> bool:
        catalog = self.document.get_catalog()
        if catalog is None:
            self.report_non_compliance(
                self.MISSING_STRUCT_TREE, "Document has no catalog"
            )
            return False

        ok = self._is_marked(catalog)

        try:
            struct_tree = self.document.get_dictionary(catalog.get("StructTreeRoot"))
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"StructTreeRoot unreadable: {e}")
            struct_tree = None
        if struct_tree is None:
            self.report_non_compliance(
                self.MISSING_STRUCT_TREE, "Catalog has no StructTreeRoot dictionary"
            )
            return False

        if struct_tree.get("K") is None:
            self.report_non_compliance(
                self.EMPTY_STRUCT_TREE, "Structure tree root has no children"
            )
            ok = False

        return self._role_map_ok(struct_tree) and ok

    def _is_marked(self, catalog) -> bool:
        try:
            mark_info = self.document.get_dictionary(catalog.get("MarkInfo"))
            marked = self.document.resolve_indirect_object(mark_info.get("Marked"))
            if marked.get_bool_value():
                return True
        except STRUCTURAL_ERRORS as e:
            logger.debug(f"MarkInfo unreadable: {e}")
        self.report_non_compliance(
            self.NOT_MARKED, "MarkInfo dictionary does not set Marked to true"
        )
        return False

    def _role_map_ok(self, struct_tree) -> bool:
        try:
            role_map = self.document.get_dictionary(struct_tree.get("RoleMap"))
            if role_map is None:
                return True
            for key, target in role_map.items():
                if not (isinstance(target, PdfSimpleObject) and target.is_name):
                    self.report_non_compliance(
                        self.BAD_ROLE_MAP,
                        f"RoleMap entry {key} does not map to a name",
                    )
                    return False
        except STRUCTURAL_ERRORS as e:
            self.report_non_compliance(
                self.BAD_ROLE_MAP, f"RoleMap could not be read: {e}"
            )
            return False
        return True
