"""Big-endian struct encoder.

This module packs a record into exactly ``layout.size`` bytes by walking the
layout in declaration order and appending each field's bytes.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import EncodeError
from .layout import Layout
from .schema import FieldKind, FieldSpec


def encode_record(layout: Layout, record: Any) -> bytes:
    """Encode a record through a compiled layout.

    Args:
        layout: Compiled layout of the record's struct
        record: Model instance (attribute access) or mapping of field values

    Returns:
        ``layout.size`` bytes, fields concatenated in declaration order

    Raises:
        EncodeError: If a field is missing or its value does not fit the field
    """
    buffer = bytearray()

    for field in layout:
        value = _field_value(layout, record, field.name)
        _encode_field(buffer, field.spec, value)

    # Every field checks its own width, so only a broken layout can trip this
    if len(buffer) != layout.size:
        raise EncodeError(
            f"{layout.name}: encoded {len(buffer)} bytes, layout expects {layout.size}"
        )

    return bytes(buffer)


def _field_value(layout: Layout, record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        try:
            return record[name]
        except KeyError as err:
            raise EncodeError(f"{layout.name}: missing field {name}") from err
    try:
        return getattr(record, name)
    except AttributeError as err:
        raise EncodeError(f"{layout.name}: missing field {name}") from err


def _encode_field(buffer: bytearray, spec: FieldSpec, value: Any) -> None:
    """Append a single field value to the buffer.

    Args:
        buffer: Output buffer
        spec: Classified field
        value: Field value to encode

    Raises:
        EncodeError: If value is invalid
    """
    # Byte array: copied verbatim
    if spec.kind is FieldKind.BYTE_ARRAY:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError(f"Field {spec.name}: expected bytes, got {type(value).__name__}")
        raw = bytes(value)
        if len(raw) != spec.width:
            raise EncodeError(
                f"Field {spec.name}: expected {spec.width} bytes, got {len(raw)} bytes"
            )
        buffer.extend(raw)
        return

    # Unsigned integer
    if spec.kind is FieldKind.INTEGER:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"Field {spec.name}: expected int, got {type(value).__name__}")
        if value < 0 or value > spec.primitive.max_value:
            raise EncodeError(
                f"Field {spec.name}: value {value} out of bounds for "
                f"{spec.primitive.type_name} [0, {spec.primitive.max_value}]"
            )
        buffer.extend(value.to_bytes(spec.width, "big"))
        return

    # Enum, through its number
    if spec.kind is FieldKind.ENUM_MAPPED:
        if spec.mapping is None:
            raise EncodeError(f"Field {spec.name}: enum field has no mapping table")
        try:
            number = spec.mapping.to_number(value)
        except EncodeError as err:
            raise EncodeError(f"Field {spec.name}: {err}") from err
        buffer.extend(number.to_bytes(spec.width, "big"))
        return

    raise EncodeError(f"Field {spec.name}: unhandled field kind {spec.kind}")
