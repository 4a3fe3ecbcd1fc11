"""
PDF Object Model
================
Typed nodes of a PDF object graph: scalars, arrays, dictionaries, streams
and unresolved indirect references. Documents read from disk are converted
from pikepdf objects by ``document.wrap_object``.

Typed accessors raise PdfTypeError on a mismatch so that callers can treat
every unexpected shape the same way.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional

from ..errors import PdfTypeError


class ScalarKind(str, Enum):
    """Kind of value held by a PdfSimpleObject."""
    NAME = "name"
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"


class PdfObject:
    """Base class of every node in the object graph."""

    def get_string_value(self) -> str:
        raise PdfTypeError(
            f"{type(self).__name__} does not hold a name or string"
        )

    def get_int_value(self) -> int:
        raise PdfTypeError(f"{type(self).__name__} does not hold an integer")

    def get_bool_value(self) -> bool:
        raise PdfTypeError(f"{type(self).__name__} does not hold a boolean")


class PdfSimpleObject(PdfObject):
    """A scalar: name, string, number or boolean."""

    def __init__(self, value, kind: ScalarKind):
        self.value = value
        self.kind = kind

    @classmethod
    def name(cls, value: str) -> PdfSimpleObject:
        return cls(value, ScalarKind.NAME)

    @classmethod
    def string(cls, value: str) -> PdfSimpleObject:
        return cls(value, ScalarKind.STRING)

    @classmethod
    def integer(cls, value: int) -> PdfSimpleObject:
        return cls(value, ScalarKind.INTEGER)

    @classmethod
    def real(cls, value: float) -> PdfSimpleObject:
        return cls(value, ScalarKind.REAL)

    @classmethod
    def boolean(cls, value: bool) -> PdfSimpleObject:
        return cls(value, ScalarKind.BOOLEAN)

    @property
    def is_name(self) -> bool:
        return self.kind == ScalarKind.NAME

    def get_string_value(self) -> str:
        if self.kind not in (ScalarKind.NAME, ScalarKind.STRING):
            raise PdfTypeError(f"Expected a name or string, got {self.kind.value}")
        return self.value

    def get_int_value(self) -> int:
        if self.kind != ScalarKind.INTEGER:
            raise PdfTypeError(f"Expected an integer, got {self.kind.value}")
        return self.value

    def get_bool_value(self) -> bool:
        if self.kind != ScalarKind.BOOLEAN:
            raise PdfTypeError(f"Expected a boolean, got {self.kind.value}")
        return self.value

    def __eq__(self, other):
        if not isinstance(other, PdfSimpleObject):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.kind == ScalarKind.NAME:
            return f"/{self.value}"
        return f"PdfSimpleObject({self.value!r}, {self.kind.value})"


class PdfNull(PdfObject):
    """The PDF null object."""

    def __repr__(self):
        return "null"


NULL = PdfNull()


class PdfArray(PdfObject):
    """An ordered sequence of nodes."""

    def __init__(self, content: Optional[list[PdfObject]] = None):
        self._content = list(content or [])

    def get_content(self) -> list[PdfObject]:
        return self._content

    def __len__(self):
        return len(self._content)

    def __iter__(self) -> Iterator[PdfObject]:
        return iter(self._content)

    def __getitem__(self, index: int) -> PdfObject:
        return self._content[index]

    def __repr__(self):
        return f"PdfArray({self._content!r})"


class PdfDictionary(PdfObject):
    """
    A mapping from key names to nodes.

    Keys are unique; a repeated key replaces the earlier entry. An entry
    whose value is null is the same as an absent entry, so it is never
    stored. Iterating a dictionary yields its values, which is what the
    resource-walking helpers need.
    """

    def __init__(self, entries: Optional[dict[str, PdfObject]] = None):
        self._entries: dict[str, PdfObject] = {}
        for key, value in (entries or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[PdfObject]:
        return self._entries.get(key)

    def set(self, key: str, value: Optional[PdfObject]):
        if value is None or isinstance(value, PdfNull):
            self._entries.pop(key, None)
        else:
            self._entries[key] = value

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    def __iter__(self) -> Iterator[PdfObject]:
        return iter(list(self._entries.values()))

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"PdfDictionary({self._entries!r})"


class PdfStream(PdfObject):
    """A stream; only its dictionary is exposed, never the body."""

    def __init__(self, dictionary: PdfDictionary, xref: int = 0):
        self._dict = dictionary
        self.xref = xref

    def get_dict(self) -> PdfDictionary:
        return self._dict

    def __repr__(self):
        return f"PdfStream(xref={self.xref}, {self._dict!r})"


class PdfIndirectRef(PdfObject):
    """An `n g R` reference that still has to be resolved."""

    def __init__(self, objnum: int, gennum: int = 0):
        self.objnum = objnum
        self.gennum = gennum

    def __eq__(self, other):
        if not isinstance(other, PdfIndirectRef):
            return NotImplemented
        return (self.objnum, self.gennum) == (other.objnum, other.gennum)

    def __hash__(self):
        return hash((self.objnum, self.gennum))

    def __repr__(self):
        return f"{self.objnum} {self.gennum} R"
