"""
Shared fixtures: an in-memory document built from object-model nodes, so
profiles can be exercised without writing PDF files, plus small PDFs
generated with PyMuPDF and pikepdf.
"""

from __future__ import annotations

import fitz
import pikepdf
import pytest

from pdfcheck.errors import ResolutionError
from pdfcheck.pdf.document import PdfDocument, ResourceScope
from pdfcheck.pdf.objects import PdfDictionary, PdfStream


class StubDocument(PdfDocument):
    """
    PdfDocument whose objects come from a table keyed by object number
    instead of a pikepdf.Pdf.

    Resolution, dictionary access and font/XObject collection are the
    real implementations; only object loading and the page walk are
    replaced.
    """

    def __init__(self, objects=None, catalog=None, trailer=None, scopes=None):
        super().__init__(pdf=None)
        self._table = dict(objects or {})
        self._catalog = catalog
        self._trailer = trailer if trailer is not None else PdfDictionary()
        self._scopes = [
            ResourceScope(f"page {i + 1}", resources)
            for i, resources in enumerate(scopes or [])
        ]

    def _load(self, ref):
        if ref.objnum not in self._table:
            raise ResolutionError(f"No object {ref.objnum}")
        return self._table[ref.objnum]

    def get_trailer(self):
        return self._trailer

    def get_catalog(self):
        return self.get_dictionary(self._catalog)

    def iter_streams(self):
        for obj in self._table.values():
            if isinstance(obj, PdfStream):
                yield obj

    def close(self):
        pass


@pytest.fixture
def stub_document():
    """Factory for StubDocument instances."""
    return StubDocument


@pytest.fixture
def simple_pdf(tmp_path):
    """A one-page PDF with a single non-embedded Helvetica font."""
    path = tmp_path / "simple.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Hello, archive", fontname="helv")
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def blank_pdf():
    """A one-page pikepdf.Pdf held in memory; tests fill in its resources."""
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(200, 200))
    yield pdf
    pdf.close()
