"""Typed object model over pikepdf."""

from .document import PdfDocument, ResourceScope, wrap_object
from .objects import (
    NULL,
    PdfArray,
    PdfDictionary,
    PdfIndirectRef,
    PdfNull,
    PdfObject,
    PdfSimpleObject,
    PdfStream,
    ScalarKind,
)

__all__ = [
    "NULL",
    "PdfArray",
    "PdfDictionary",
    "PdfDocument",
    "PdfIndirectRef",
    "PdfNull",
    "PdfObject",
    "PdfSimpleObject",
    "PdfStream",
    "ResourceScope",
    "ScalarKind",
    "wrap_object",
]
