"""Big-endian struct decoder.

This module slices a buffer of exactly ``layout.size`` bytes into field values.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import DecodeError, LengthMismatchError
from .layout import Layout
from .schema import FieldKind, FieldSpec


def decode_record(layout: Layout, data: bytes | bytearray | memoryview) -> dict[str, Any]:
    """Decode a buffer into field values.

    Args:
        layout: Compiled layout of the target struct
        data: Buffer to decode

    Returns:
        Field name -> value, in declaration order

    Raises:
        DecodeError: If data is not bytes-like
        LengthMismatchError: If data is not exactly ``layout.size`` bytes
        UnknownEnumValueError: If an enum field holds an unmapped number
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"{layout.name}: expected bytes, got {type(data).__name__}")

    raw = bytes(data)
    if len(raw) != layout.size:
        raise LengthMismatchError(layout.name, layout.size, len(raw))

    values: dict[str, Any] = {}
    for field in layout:
        values[field.name] = _decode_field(field.spec, raw[field.start : field.end])
    return values


def _decode_field(spec: FieldSpec, chunk: bytes) -> Any:
    """Decode a single field from its slice.

    Raises:
        UnknownEnumValueError: If an enum number has no member
    """
    if spec.kind is FieldKind.BYTE_ARRAY:
        return chunk

    if spec.kind is FieldKind.INTEGER:
        return int.from_bytes(chunk, "big")

    if spec.kind is FieldKind.ENUM_MAPPED:
        if spec.mapping is None:
            raise DecodeError(f"Field {spec.name}: enum field has no mapping table")
        return spec.mapping.from_number(int.from_bytes(chunk, "big"), field_name=spec.name)

    raise DecodeError(f"Field {spec.name}: unhandled field kind {spec.kind}")
