"""Field classification.

This module assigns every parsed field a kind and a wire width:

    1. ``Array[U8, n]``              -> BYTE_ARRAY, width n
    2. ``U8`` ... ``U128``, ``USize`` -> INTEGER, width of the primitive
    3. enum + ``ByteMe(Uxx)``        -> ENUM_MAPPED, width of the attribute
    4. anything else                 -> UnsupportedFieldTypeError

The first matching rule wins, so an integer that also carries a ByteMe()
attribute stays an INTEGER.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Type

from ..exceptions import (
    ArrayElementTypeError,
    AttributeTypeError,
    SchemaError,
    UnsupportedFieldTypeError,
)
from ..models.fields import ArraySpec, Primitive, primitive_of
from .enums import EnumMapping
from .parser import ParsedField, ParsedStruct

logger = logging.getLogger(__name__)


class FieldKind(enum.Enum):
    """Closed set of field kinds a struct can hold."""

    INTEGER = "integer"
    BYTE_ARRAY = "byte_array"
    ENUM_MAPPED = "enum_mapped"


@dataclass(frozen=True)
class FieldSpec:
    """Classified field.

    Attributes:
        name: Field name
        kind: Field kind
        width: Bytes on the wire (> 0)
        primitive: INTEGER: declared type; ENUM_MAPPED: attribute type;
            BYTE_ARRAY: the element type (always U8)
        length: BYTE_ARRAY only, number of elements
        enum_type: ENUM_MAPPED only, the declared enum
        mapping: ENUM_MAPPED only, the member <-> number table
    """

    name: str
    kind: FieldKind
    width: int
    primitive: Primitive
    length: Optional[int] = None
    enum_type: Optional[Type[enum.Enum]] = None
    mapping: Optional[EnumMapping] = None

    def describe(self) -> str:
        """Short human-readable type, e.g. ``u32``, ``[u8; 12]``, ``Mode as u16``."""
        if self.kind is FieldKind.BYTE_ARRAY:
            return f"[u8; {self.length}]"
        if self.kind is FieldKind.INTEGER:
            return self.primitive.type_name
        if self.kind is FieldKind.ENUM_MAPPED and self.enum_type is not None:
            return f"{self.enum_type.__name__} as {self.primitive.type_name}"
        raise SchemaError(f"Field {self.name}: unhandled field kind {self.kind}")


@dataclass(frozen=True)
class StructSchema:
    """A struct name plus its classified fields in declaration order."""

    name: str
    fields: tuple[FieldSpec, ...]

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def total_width(self) -> int:
        return sum(field.width for field in self.fields)


def classify_field(struct_name: str, field: ParsedField) -> FieldSpec:
    """Classify a single parsed field.

    Args:
        struct_name: Owning struct, used in error messages
        field: Parsed field

    Returns:
        FieldSpec for the field

    Raises:
        ArrayElementTypeError: If an array wraps anything but U8
        AttributeTypeError: If the ByteMe() argument is not an unsigned integer
        UnsupportedFieldTypeError: If no rule matches
        EnumMappingError: If the enum cannot be mapped onto the attribute width
    """
    label = f"{struct_name}.{field.name}"
    declared = field.declared_type

    # Byte arrays
    if isinstance(declared, ArraySpec):
        element = primitive_of(declared.element)
        if element is not Primitive.U8:
            raise ArrayElementTypeError(
                f"{label}: U8 is the only supported array element type, "
                f"got {_type_name(declared.element)}"
            )
        if declared.length <= 0:
            raise SchemaError(f"{label}: array length must be > 0, got {declared.length}")
        return FieldSpec(
            name=field.name,
            kind=FieldKind.BYTE_ARRAY,
            width=declared.length,
            primitive=element,
            length=declared.length,
        )

    # Unsigned integers
    primitive = primitive_of(declared)
    if primitive is not None:
        if field.width_hint is not None:
            logger.debug("%s: ByteMe() ignored on integer field", label)
        return FieldSpec(
            name=field.name, kind=FieldKind.INTEGER, width=primitive.size, primitive=primitive
        )

    # Enums mapped through a ByteMe() attribute
    if field.width_hint is not None:
        wire = primitive_of(field.width_hint)
        if wire is None:
            raise AttributeTypeError(
                f"{label}: ByteMe() can only be used with U8, U16, U32, U64, U128 "
                f"or USize, got {_type_name(field.width_hint)}"
            )
        if not (isinstance(declared, type) and issubclass(declared, enum.Enum)):
            raise UnsupportedFieldTypeError(
                f"{label}: ByteMe() is only supported on enum fields, "
                f"got {_type_name(declared)}"
            )
        return FieldSpec(
            name=field.name,
            kind=FieldKind.ENUM_MAPPED,
            width=wire.size,
            primitive=wire,
            enum_type=declared,
            mapping=EnumMapping.build(declared, wire),
        )

    raise UnsupportedFieldTypeError(
        f"{label}: unsupported type {_type_name(declared)}. Use U8, U16, U32, U64, "
        f"U128, USize, Array[U8, n], or an enum with a ByteMe(<unsigned type>) attribute."
    )


def classify(parsed: ParsedStruct) -> StructSchema:
    """Classify every field of a parsed struct, stopping at the first invalid one."""
    fields = []
    for field in parsed.fields:
        spec = classify_field(parsed.name, field)
        logger.debug("%s.%s: %s (%d bytes)", parsed.name, spec.name, spec.describe(), spec.width)
        fields.append(spec)
    return StructSchema(name=parsed.name, fields=tuple(fields))


def _type_name(tp: Any) -> str:
    primitive = primitive_of(tp)
    if primitive is not None:
        return primitive.type_name
    return getattr(tp, "__name__", repr(tp))
