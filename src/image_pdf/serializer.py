"""Serialize a :class:`~image_pdf.objects.Document` into PDF bytes.

The output is a classic (non-incremental) PDF file: header, one
``N 0 obj`` block per indirect object in object-number order, an ``xref``
table with one 20-byte entry per object number, the trailer, and
``startxref``.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any

from .errors import IoError, PdfGenerationError
from .objects import Document, Name, ObjectId, Stream

logger = logging.getLogger(__name__)

# Binary comment after the header marks the file as binary for transfer tools.
_BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"

_DELIMITERS = frozenset(b"()<>[]{}/%#")


def format_number(value: int | float) -> bytes:
    """Write a number in PDF syntax: no exponent, integral floats as ints."""
    if isinstance(value, int):
        return str(value).encode("ascii")
    if not math.isfinite(value):
        raise PdfGenerationError(f"Cannot write non-finite number {value!r}")
    if value.is_integer():
        return str(int(value)).encode("ascii")
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        text = "0"
    return text.encode("ascii")


def format_name(name: str) -> bytes:
    out = bytearray(b"/")
    for byte in name.encode("utf-8"):
        if byte < 0x21 or byte > 0x7E or byte in _DELIMITERS:
            out += b"#%02X" % byte
        else:
            out.append(byte)
    return bytes(out)


def format_string(text: str) -> bytes:
    """Write a text string.

    Latin-1 text becomes a literal string with ``\\``, ``(``, ``)`` and CR
    escaped; anything else is written as a UTF-16BE hex string with BOM.
    """
    try:
        raw = text.encode("latin-1")
    except UnicodeEncodeError:
        return b"<FEFF" + text.encode("utf-16-be").hex().upper().encode("ascii") + b">"

    escaped = (
        raw.replace(b"\\", b"\\\\")
        .replace(b"(", b"\\(")
        .replace(b")", b"\\)")
        .replace(b"\r", b"\\r")
    )
    return b"(" + escaped + b")"


def serialize_value(value: Any, references: set[int] | None = None) -> bytes:
    """Serialize a direct object.

    Numbers of referenced objects are added to *references* when given, so
    dangling references can be detected.

    Raises:
        PdfGenerationError: For streams used as direct objects, non-finite
            numbers and unsupported Python types.
    """
    # bool before int: bool is an int subclass.
    if value is None:
        return b"null"
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, ObjectId):
        if references is not None:
            references.add(value.number)
        return b"%d %d R" % (value.number, value.generation)
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, Name):
        return format_name(value)
    if isinstance(value, str):
        return format_string(value)
    if isinstance(value, (list, tuple)):
        items = [serialize_value(item, references) for item in value]
        return b"[" + b" ".join(items) + b"]"
    if isinstance(value, dict):
        return _serialize_dict(value, references)
    if isinstance(value, Stream):
        raise PdfGenerationError("Streams must be indirect objects")
    raise PdfGenerationError(f"Cannot serialize {type(value).__name__} value")


def _serialize_dict(value: dict[str, Any], references: set[int] | None) -> bytes:
    parts = [b"<<"]
    for key, item in value.items():
        parts.append(format_name(key) + b" " + serialize_value(item, references))
    parts.append(b">>")
    return b" ".join(parts)


def _serialize_object(obj: Any, references: set[int]) -> bytes:
    if isinstance(obj, Stream):
        dictionary = dict(obj.dictionary)
        dictionary["Length"] = len(obj.data)
        return (
            _serialize_dict(dictionary, references)
            + b"\nstream\n"
            + obj.data
            + b"\nendstream"
        )
    return serialize_value(obj, references)


def _xref_table(offsets: dict[int, int], size: int) -> bytes:
    """Build the cross-reference section for object numbers ``0..size-1``.

    Numbers that were reserved but never written are chained into the free
    list headed by entry 0.
    """
    free = [number for number in range(1, size) if number not in offsets]
    next_free = dict(zip([0, *free], [*free, 0]))

    lines = [b"xref\n", b"0 %d\n" % size]
    for number in range(size):
        if number in offsets:
            lines.append(b"%010d 00000 n \n" % offsets[number])
        else:
            generation = 65535 if number == 0 else 1
            lines.append(b"%010d %05d f \n" % (next_free[number], generation))
    return b"".join(lines)


def serialize(document: Document) -> bytes:
    """Render *document* as a complete PDF file.

    Raises:
        PdfGenerationError: If the document has no root, references an
            object that was never written, or holds an unserializable value.
    """
    if document.root is None:
        raise PdfGenerationError("Document has no Root catalog")

    references: set[int] = set()
    buffer = bytearray(b"%PDF-" + document.version.encode("ascii") + b"\n")
    buffer += _BINARY_MARKER

    offsets: dict[int, int] = {}
    for number in sorted(document.objects):
        offsets[number] = len(buffer)
        buffer += b"%d 0 obj\n" % number
        buffer += _serialize_object(document.objects[number], references)
        buffer += b"\nendobj\n"

    trailer: dict[str, Any] = {"Size": document.max_id + 1}
    trailer.update(document.trailer)
    trailer_bytes = _serialize_dict(trailer, references)

    dangling = sorted(references - offsets.keys())
    if dangling:
        raise PdfGenerationError(
            f"Unresolved object references: {', '.join(map(str, dangling))}"
        )

    xref_offset = len(buffer)
    buffer += _xref_table(offsets, document.max_id + 1)
    buffer += b"trailer\n" + trailer_bytes + b"\n"
    buffer += b"startxref\n%d\n%%%%EOF\n" % xref_offset

    logger.debug(f"Serialized {len(offsets)} objects, {len(buffer):,} bytes")
    return bytes(buffer)


def write_document(document: Document, output_path: str | os.PathLike[str]) -> int:
    """Serialize *document* and write it to *output_path* in one write.

    Returns:
        Number of bytes written.

    Raises:
        PdfGenerationError: If serialization fails.
        IoError: If the file cannot be written.
    """
    pdf_bytes = serialize(document)
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf_bytes)
    except OSError as exc:
        raise IoError(f"Failed to write {output_path}: {exc}") from exc

    logger.info(f"Saved {output_path} ({len(pdf_bytes):,} bytes)")
    return len(pdf_bytes)
