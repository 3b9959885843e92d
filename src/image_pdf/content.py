"""Page content streams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .geometry import Placement
from .objects import Name
from .serializer import serialize_value


@dataclass
class Operation:
    """One content stream operator with its operands, e.g. ``/Im1 Do``."""

    operator: str
    operands: list[Any] = field(default_factory=list)


def encode_content(operations: list[Operation]) -> bytes:
    """Encode operations one per line, operands before the operator."""
    lines = []
    for op in operations:
        parts = [serialize_value(operand) for operand in op.operands]
        parts.append(op.operator.encode("ascii"))
        lines.append(b" ".join(parts))
    return b"\n".join(lines)


def image_operations(placement: Placement, image_name: str) -> list[Operation]:
    """Draw the XObject *image_name* into *placement*.

    The image unit square is mapped onto the placement rectangle by the
    ``cm`` matrix ``[width 0 0 height x y]``.
    """
    return [
        Operation("q"),
        Operation(
            "cm",
            [placement.width, 0, 0, placement.height, placement.x, placement.y],
        ),
        Operation("Do", [Name(image_name)]),
        Operation("Q"),
    ]
