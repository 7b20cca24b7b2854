"""Field type helpers and utilities.

This module provides the type vocabulary used to declare byteme struct fields:

- ``U8`` ... ``U128`` and ``USize``: fixed-width unsigned integers
- ``Array[U8, n]``: a fixed-length byte array
- ``ByteMe(U32)``: the width attribute attached to an enum field

Each alias is a ``typing.Annotated`` type, so Pydantic validates instance values
while the schema parser reads the markers from the field metadata.

Example:
    >>> class Frame(ByteMeModel):
    ...     unused: Array[U8, 12]
    ...     mode: Annotated[Mode, ByteMe(U32)]
    ...     count: U32
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

from pydantic import Field


class Primitive(enum.Enum):
    """Unsigned integer primitives and their fixed byte sizes."""

    U8 = ("u8", 1)
    U16 = ("u16", 2)
    U32 = ("u32", 4)
    U64 = ("u64", 8)
    U128 = ("u128", 16)
    # Platform word, normalized to 8 bytes on the wire
    USIZE = ("usize", 8)

    def __init__(self, type_name: str, size: int) -> None:
        self.type_name = type_name
        self.size = size

    @property
    def max_value(self) -> int:
        return (1 << (8 * self.size)) - 1

    def __repr__(self) -> str:
        return self.type_name


def _unsigned(primitive: Primitive) -> Any:
    return Annotated[int, primitive, Field(ge=0, le=primitive.max_value)]


U8 = _unsigned(Primitive.U8)
U16 = _unsigned(Primitive.U16)
U32 = _unsigned(Primitive.U32)
U64 = _unsigned(Primitive.U64)
U128 = _unsigned(Primitive.U128)
USize = _unsigned(Primitive.USIZE)


def primitive_of(tp: Any) -> Primitive | None:
    """Return the Primitive a type expression stands for, if any.

    Accepts a Primitive member or one of the Annotated aliases above.
    """
    if isinstance(tp, Primitive):
        return tp
    if get_origin(tp) is Annotated:
        for meta in get_args(tp)[1:]:
            if isinstance(meta, Primitive):
                return meta
    return None


@dataclass(frozen=True)
class ArraySpec:
    """Metadata marker for a fixed-length array field.

    Attributes:
        element: Declared element type
        length: Number of elements
    """

    element: Any
    length: int


class Array:
    """Fixed-length array type: ``Array[element, length]``.

    Only ``Array[U8, n]`` is encodable. It validates as ``bytes`` of exactly ``n``
    bytes. Other element types produce a ``list`` annotation so the model still
    builds, and the schema classifier rejects the field.
    """

    def __class_getitem__(cls, params: Any) -> Any:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("Array[...] expects Array[element, length]")
        element, length = params
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f"Array length must be an int, got {length!r}")

        spec = ArraySpec(element=element, length=length)
        bounds = Field(min_length=length, max_length=length)
        if primitive_of(element) is Primitive.U8:
            return Annotated[bytes, spec, bounds]
        return Annotated[list[element], spec, bounds]  # type: ignore[valid-type]


class ByteMe:
    """Width attribute for enum fields: ``Annotated[Mode, ByteMe(U32)]``.

    The single argument names the unsigned integer used on the wire. Arity and
    argument type are validated when the struct is compiled, not here, so a bad
    attribute surfaces as a SchemaError against the owning field.
    """

    __slots__ = ("args",)

    def __init__(self, *args: Any) -> None:
        self.args = args

    def __repr__(self) -> str:
        inner = ", ".join(repr(primitive_of(arg) or arg) for arg in self.args)
        return f"ByteMe({inner})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ByteMe) and self.args == other.args

    def __hash__(self) -> int:
        return hash(("ByteMe", self.args))
