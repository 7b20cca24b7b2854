"""Byte layout computation.

Fields are placed back to back in declaration order: no reordering, no
alignment, no padding. The end offset of the last field is the struct SIZE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ..exceptions import SchemaError, SizeOverflowError
from .schema import FieldSpec, StructSchema

logger = logging.getLogger(__name__)

# SIZE is sent as a big-endian u16 delimiter
MAX_STRUCT_SIZE = 0xFFFF


@dataclass(frozen=True)
class FieldLayout:
    """A classified field with its ``[start, end)`` byte range."""

    spec: FieldSpec
    start: int
    end: int

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def width(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Layout:
    """Offsets of every field of a struct, plus its total size.

    Attributes:
        schema: The classified schema the layout was computed from
        fields: One FieldLayout per field, in declaration order
        size: Total bytes on the wire
    """

    schema: StructSchema
    fields: tuple[FieldLayout, ...]
    size: int

    @property
    def name(self) -> str:
        return self.schema.name

    def __iter__(self) -> Iterator[FieldLayout]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def offsets(self) -> dict[str, tuple[int, int]]:
        return {f.name: (f.start, f.end) for f in self.fields}


def compute_layout(schema: StructSchema, max_size: Optional[int] = None) -> Layout:
    """Assign contiguous byte ranges to every field.

    Args:
        schema: Classified struct schema
        max_size: Optional tighter cap on the total size

    Returns:
        Layout with cumulative offsets

    Raises:
        SchemaError: If the struct has no fields
        SizeOverflowError: If the size exceeds the 16-bit delimiter or max_size
    """
    if not schema.fields:
        raise SchemaError(f"{schema.name}: a struct needs at least one field")

    offset = 0
    placed = []
    for spec in schema.fields:
        placed.append(FieldLayout(spec=spec, start=offset, end=offset + spec.width))
        offset += spec.width

    if offset > MAX_STRUCT_SIZE:
        raise SizeOverflowError(
            f"{schema.name}: size {offset} bytes does not fit the 2-byte delimiter "
            f"(max {MAX_STRUCT_SIZE})"
        )
    if max_size is not None and offset > max_size:
        raise SizeOverflowError(
            f"{schema.name}: size {offset} bytes exceeds byteme_max_size={max_size}"
        )

    logger.debug("Layout %s: %d fields, %d bytes", schema.name, len(placed), offset)
    return Layout(schema=schema, fields=tuple(placed), size=offset)
