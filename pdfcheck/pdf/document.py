"""
Document Accessor
=================
Higher-level queries over a PDF opened with pikepdf: indirect reference
resolution, catalog and trailer access, and the resource scopes (pages and
form XObjects) from which fonts and XObjects are collected.

pikepdf objects are converted into the typed nodes of ``objects.py`` one
indirect object at a time. References inside an object stay unresolved
(``PdfIndirectRef``) until a caller asks for them, and each converted
object is cached for the life of the accessor.
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from typing import Iterator, Optional

import pikepdf

from ..errors import PdfTypeError, ResolutionError
from .objects import (
    NULL,
    PdfArray,
    PdfDictionary,
    PdfIndirectRef,
    PdfObject,
    PdfSimpleObject,
    PdfStream,
)

logger = logging.getLogger(__name__)

# Guards the Parent walk against malformed page trees
MAX_PAGE_TREE_DEPTH = 64


def _strip_slash(name) -> str:
    text = str(name)
    return text[1:] if text.startswith("/") else text


def wrap_object(obj, top: bool = True) -> PdfObject:
    """
    Convert a pikepdf object into an object-model node.

    With ``top`` set, ``obj`` itself is converted even when it is an
    indirect object; indirect objects below it become PdfIndirectRef.
    """
    if obj is None:
        return NULL
    if not top and getattr(obj, "is_indirect", False):
        objnum, gennum = obj.objgen
        return PdfIndirectRef(objnum, gennum)

    # bool is an int subclass
    if isinstance(obj, bool):
        return PdfSimpleObject.boolean(obj)
    if isinstance(obj, int):
        return PdfSimpleObject.integer(obj)
    if isinstance(obj, (Decimal, float)):
        return PdfSimpleObject.real(float(obj))
    if isinstance(obj, pikepdf.Name):
        return PdfSimpleObject.name(_strip_slash(obj))
    if isinstance(obj, pikepdf.String):
        return PdfSimpleObject.string(str(obj))
    if isinstance(obj, pikepdf.Stream):
        return PdfStream(_wrap_dictionary(obj.stream_dict), obj.objgen[0])
    if isinstance(obj, pikepdf.Array):
        return PdfArray([wrap_object(item, top=False) for item in obj])
    if isinstance(obj, pikepdf.Dictionary):
        return _wrap_dictionary(obj)
    raise PdfTypeError(f"Unsupported PDF object: {obj!r}")


def _wrap_dictionary(obj) -> PdfDictionary:
    # Null values are dropped by PdfDictionary itself
    return PdfDictionary({
        _strip_slash(key): wrap_object(value, top=False)
        for key, value in obj.items()
    })


class ResourceScope:
    """One resource dictionary together with where it was found."""

    def __init__(self, label: str, resources: PdfDictionary):
        self.label = label
        self.resources = resources

    def __repr__(self):
        return f"ResourceScope({self.label!r})"


class PdfDocument:
    """
    Typed, cached access to the object graph of one PDF.

    Usage:
        with PdfDocument.open("file.pdf") as document:
            fonts = document.get_font_maps()
    """

    def __init__(self, pdf: Optional[pikepdf.Pdf], path: Optional[str] = None):
        self._pdf = pdf
        self.path = path
        self._objects: dict[tuple[int, int], PdfObject] = {}
        self._scopes: Optional[list[ResourceScope]] = None

    @classmethod
    def open(cls, pdf_path: str) -> PdfDocument:
        """
        Open a PDF file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            RuntimeError: If pikepdf cannot open it as a PDF.
        """
        pdf_path = os.path.abspath(pdf_path)
        if not os.path.exists(pdf_path):
            raise FileNotFoundError(f"PDF not found: {pdf_path}")
        try:
            pdf = pikepdf.open(pdf_path)
        except pikepdf.PdfError as e:
            raise RuntimeError(f"Cannot open {pdf_path}: {e}") from e
        return cls(pdf, pdf_path)

    def close(self):
        self._pdf.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ─── Object access ───────────────────────────────────────────────────

    def resolve_indirect_object(self, node: Optional[PdfObject]) -> Optional[PdfObject]:
        """
        Follow indirect references until a direct object is reached.

        Non-reference nodes (and None) are returned unchanged.

        Raises:
            ResolutionError: On a reference cycle or an unreadable object.
        """
        visited: set[PdfIndirectRef] = set()
        while isinstance(node, PdfIndirectRef):
            if node in visited:
                raise ResolutionError(f"Reference cycle through object {node.objnum}")
            visited.add(node)
            node = self._load(node)
        return node

    def _load(self, ref: PdfIndirectRef) -> PdfObject:
        key = (ref.objnum, ref.gennum)
        if key in self._objects:
            return self._objects[key]

        try:
            raw = self._pdf.get_object(key)
        except (pikepdf.PdfError, ValueError, TypeError) as e:
            raise ResolutionError(f"Cannot read object {ref!r}: {e}") from e
        if raw is None:
            raise ResolutionError(f"Object {ref!r} does not exist")

        obj = wrap_object(raw)
        self._objects[key] = obj
        return obj

    def get_dictionary(self, node: Optional[PdfObject]) -> Optional[PdfDictionary]:
        """
        Resolve a node that should be a dictionary.

        Returns None for an absent node; a stream yields its dictionary.

        Raises:
            PdfTypeError: If the node resolves to something else.
        """
        obj = self.resolve_indirect_object(node)
        if obj is None:
            return None
        if isinstance(obj, PdfStream):
            return obj.get_dict()
        if not isinstance(obj, PdfDictionary):
            raise PdfTypeError(f"Expected a dictionary, got {obj!r}")
        return obj

    def get_trailer(self) -> PdfDictionary:
        trailer = wrap_object(self._pdf.trailer)
        if not isinstance(trailer, PdfDictionary):
            raise PdfTypeError("Trailer is not a dictionary")
        return trailer

    def get_catalog(self) -> Optional[PdfDictionary]:
        return self.get_dictionary(self.get_trailer().get("Root"))

    def iter_streams(self) -> Iterator[PdfStream]:
        """Yield every stream object in the file."""
        for raw in self._pdf.objects:
            if isinstance(raw, pikepdf.Stream):
                obj = self._load(PdfIndirectRef(*raw.objgen))
                if isinstance(obj, PdfStream):
                    yield obj

    # ─── Resource scopes ─────────────────────────────────────────────────

    def get_resource_scopes(self) -> list[ResourceScope]:
        """
        Collect every resource dictionary in the document: one per page
        (inheriting through the page tree) and one per form XObject
        reachable from those, each form visited once.
        """
        if self._scopes is not None:
            return self._scopes

        scopes: list[ResourceScope] = []
        seen_forms: set[PdfIndirectRef] = set()

        for number, page in enumerate(self._pdf.pages, start=1):
            page_dict = self.get_dictionary(PdfIndirectRef(*page.obj.objgen))
            resources = self._inherited_resources(page_dict)
            if resources is not None:
                self._collect_scope(f"page {number}", resources, scopes, seen_forms)

        logger.debug(f"Collected {len(scopes)} resource scopes")
        self._scopes = scopes
        return scopes

    def _inherited_resources(self, page_dict: PdfDictionary) -> Optional[PdfDictionary]:
        node = page_dict
        for _ in range(MAX_PAGE_TREE_DEPTH):
            resources = node.get("Resources")
            if resources is not None:
                return self.get_dictionary(resources)
            parent = node.get("Parent")
            if parent is None:
                return None
            node = self.get_dictionary(parent)
        raise ResolutionError("Page tree is too deep or cyclic")

    def _collect_scope(
        self,
        label: str,
        resources: PdfDictionary,
        scopes: list[ResourceScope],
        seen_forms: set[PdfIndirectRef],
    ):
        scopes.append(ResourceScope(label, resources))

        xobjects = self.get_dictionary(resources.get("XObject"))
        if xobjects is None:
            return

        for name, ref in xobjects.items():
            if isinstance(ref, PdfIndirectRef):
                if ref in seen_forms:
                    continue
                seen_forms.add(ref)
            xobj = self.resolve_indirect_object(ref)
            if not isinstance(xobj, PdfStream):
                continue
            subtype = xobj.get_dict().get("Subtype")
            if subtype != PdfSimpleObject.name("Form"):
                continue
            form_resources = self.get_dictionary(xobj.get_dict().get("Resources"))
            if form_resources is not None:
                self._collect_scope(
                    f"{label} / form {name}", form_resources, scopes, seen_forms
                )

    def get_font_maps(self) -> list[dict[str, PdfObject]]:
        """
        Fonts grouped by resource scope.

        Returns:
            One mapping per scope that has fonts: resource name to the
            resolved font object (normally a PdfDictionary).
        """
        font_maps = []
        for scope in self.get_resource_scopes():
            fonts = self.get_dictionary(scope.resources.get("Font"))
            if not fonts:
                continue
            font_maps.append({
                name: self.resolve_indirect_object(ref)
                for name, ref in fonts.items()
            })
        return font_maps

    def get_xobject_maps(self) -> list[PdfDictionary]:
        """The XObject dictionaries of every resource scope."""
        maps = []
        for scope in self.get_resource_scopes():
            xobjects = self.get_dictionary(scope.resources.get("XObject"))
            if xobjects:
                maps.append(xobjects)
        return maps
