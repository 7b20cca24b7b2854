"""Enum <-> number mapping tables for EnumMapped fields.

The table is built once, when the owning struct is compiled. Encoding is total
over the enum's members; decoding is partial and fails loudly with
UnknownEnumValueError instead of falling back to a default member.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Type

from ..exceptions import EncodeError, EnumMappingError, UnknownEnumValueError
from ..models.fields import Primitive


@dataclass(frozen=True)
class EnumMapping:
    """Bidirectional member <-> number table for one enum at one width.

    Attributes:
        enum_type: The mapped enum class
        primitive: Unsigned integer used on the wire
        to_number_table: Canonical member -> number
        from_number_table: Number -> canonical member

    Example:
        >>> mapping = EnumMapping.build(Mode, Primitive.U32)
        >>> mapping.to_number(Mode.UNAUTHENTICATED)
        1
        >>> mapping.from_number(4)
        <Mode.ENCRYPTED: 4>
    """

    enum_type: Type[enum.Enum]
    primitive: Primitive
    to_number_table: Mapping[enum.Enum, int] = field(compare=False)
    from_number_table: Mapping[int, enum.Enum] = field(compare=False)

    @classmethod
    def build(cls, enum_type: Type[enum.Enum], primitive: Primitive) -> EnumMapping:
        """Build and validate the mapping table.

        Args:
            enum_type: Enum class to map
            primitive: Wire type taken from the field's ByteMe() attribute

        Returns:
            EnumMapping covering every member of enum_type

        Raises:
            EnumMappingError: If the enum is empty, or a member value is not a
                non-negative int that fits the primitive
        """
        # __members__ keeps the zero and multi-bit members that iterating a Flag
        # skips; aliases point at their canonical member, so dedupe by identity
        members = list({id(m): m for m in enum_type.__members__.values()}.values())
        if not members:
            raise EnumMappingError(f"Enum {enum_type.__name__} has no members")

        to_number: dict[enum.Enum, int] = {}
        from_number: dict[int, enum.Enum] = {}
        for member in members:
            value = member.value
            if not isinstance(value, int) or isinstance(value, bool):
                raise EnumMappingError(
                    f"{enum_type.__name__}.{member.name}: value {value!r} is not an int"
                )
            if value < 0 or value > primitive.max_value:
                raise EnumMappingError(
                    f"{enum_type.__name__}.{member.name}: value {value} does not fit "
                    f"{primitive.type_name} [0, {primitive.max_value}]"
                )
            to_number[member] = int(value)
            from_number[int(value)] = member

        return cls(
            enum_type=enum_type,
            primitive=primitive,
            to_number_table=MappingProxyType(to_number),
            from_number_table=MappingProxyType(from_number),
        )

    @property
    def width(self) -> int:
        return self.primitive.size

    def to_number(self, member: Any) -> int:
        """Map a member to its wire number.

        Raises:
            EncodeError: If member is not a declared member of enum_type
        """
        if not isinstance(member, self.enum_type):
            raise EncodeError(
                f"expected {self.enum_type.__name__}, got {type(member).__name__}"
            )
        try:
            return self.to_number_table[member]
        except KeyError:
            # Flag combinations built at runtime are not declared members
            raise EncodeError(
                f"{member!r} is not a declared member of {self.enum_type.__name__}"
            ) from None

    def from_number(self, number: int, field_name: str | None = None) -> enum.Enum:
        """Map a wire number back to its member.

        Raises:
            UnknownEnumValueError: If no member has that number
        """
        try:
            return self.from_number_table[number]
        except KeyError:
            raise UnknownEnumValueError(self.enum_type.__name__, number, field_name) from None
