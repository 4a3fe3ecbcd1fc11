"""
Errors
======
Exceptions raised by the object model when a document does not have the
shape a caller expected. Profiles treat all of them as "does not conform".
"""


class PdfObjectError(Exception):
    """Base class for malformed or unexpected object-graph data."""


class PdfTypeError(PdfObjectError):
    """A node is not of the type the caller asked for."""


class ResolutionError(PdfObjectError):
    """An indirect reference could not be resolved."""
