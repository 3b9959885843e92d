"""In-memory PDF object model.

Values inside the graph use plain Python types: ``int``/``float`` numbers,
``bool``, ``None`` (null), ``str`` literal strings, ``list`` arrays and
``dict`` dictionaries keyed by name (without the leading slash). PDF names
are :class:`Name` instances, indirect references are :class:`ObjectId`
instances and streams are :class:`Stream` instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

PDF_VERSION = "1.5"


class Name(str):
    """A PDF name object such as ``/Catalog``, stored without the slash."""

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


class ObjectId(NamedTuple):
    """Identifier of an indirect object; also used as a reference to it."""

    number: int
    generation: int = 0


@dataclass
class Stream:
    """A stream object: a dictionary followed by raw bytes.

    ``Length`` is always written from ``len(data)``, whatever the
    dictionary says.
    """

    dictionary: dict[str, Any]
    data: bytes


@dataclass
class Document:
    """Append-only store of indirect objects keyed by object number.

    Object numbers are handed out sequentially from 1. A number may be
    reserved with :meth:`new_object_id` and filled in later with
    :meth:`set_object`, which is how forward references (such as a page's
    ``Parent``) are built.
    """

    version: str = PDF_VERSION
    objects: dict[int, Any] = field(default_factory=dict)
    trailer: dict[str, Any] = field(default_factory=dict)
    max_id: int = 0

    def new_object_id(self) -> ObjectId:
        self.max_id += 1
        return ObjectId(self.max_id)

    def add_object(self, obj: Any) -> ObjectId:
        object_id = self.new_object_id()
        self.objects[object_id.number] = obj
        return object_id

    def set_object(self, object_id: ObjectId, obj: Any) -> None:
        if not 0 < object_id.number <= self.max_id:
            raise KeyError(f"Object {object_id.number} was never allocated")
        self.objects[object_id.number] = obj

    def get_object(self, object_id: ObjectId) -> Any:
        return self.objects[object_id.number]

    def __len__(self) -> int:
        return len(self.objects)

    @property
    def root(self) -> ObjectId | None:
        return self.trailer.get("Root")
