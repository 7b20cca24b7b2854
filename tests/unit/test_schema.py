"""Unit tests for field classification and enum mapping."""

from __future__ import annotations

import enum
from typing import Annotated

import pytest

from byteme import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Array,
    ArrayElementTypeError,
    AttributeTypeError,
    ByteMe,
    ByteMeModel,
    EncodeError,
    EnumMappingError,
    Primitive,
    SchemaError,
    UnknownEnumValueError,
    UnsupportedFieldTypeError,
    USize,
)
from byteme.codec import FieldDeclaration, FieldKind, StructDefinition, classify, parse_definition
from byteme.codec.enums import EnumMapping
from byteme.codec.parser import ParsedField
from byteme.codec.schema import classify_field


class Mode(enum.IntEnum):
    """Test enum with a gap in its values."""

    UNAVAILABLE = 0
    UNAUTHENTICATED = 1
    AUTHENTICATED = 2
    ENCRYPTED = 4


class Big(enum.Enum):
    """Enum with a value too large for one byte."""

    SMALL = 1
    LARGE = 300


class Named(enum.Enum):
    """Enum with non-numeric values."""

    A = "a"
    B = "b"


class Empty(enum.Enum):
    """Enum without members."""


class Aliased(enum.Enum):
    """Enum with an alias."""

    ON = 1
    ENABLED = 1
    OFF = 0


class Perm(enum.IntFlag):
    """Flag enum with a zero member and a multi-bit member."""

    NONE = 0
    R = 1
    W = 2
    X = 4
    RW = 3


class Access(ByteMeModel):
    """Struct with a flag field."""

    perm: Annotated[Perm, ByteMe(U8)]


def _classify(*declarations: FieldDeclaration):  # type: ignore[no-untyped-def]
    return classify(parse_definition(StructDefinition(name="Test", fields=declarations)))


class TestClassifier:
    """Test field kind and width assignment."""

    @pytest.mark.parametrize(
        ("annotation", "width"),
        [(U8, 1), (U16, 2), (U32, 4), (U64, 8), (U128, 16), (USize, 8)],
    )
    def test_integer_widths(self, annotation: object, width: int) -> None:
        (spec,) = _classify(FieldDeclaration("value", annotation))

        assert spec.kind is FieldKind.INTEGER
        assert spec.width == width

    def test_usize_normalized_to_eight_bytes(self) -> None:
        (spec,) = _classify(FieldDeclaration("value", USize))

        assert spec.primitive is Primitive.USIZE
        assert spec.width == Primitive.U64.size

    def test_byte_array(self) -> None:
        (spec,) = _classify(FieldDeclaration("salt", Array[U8, 16]))

        assert spec.kind is FieldKind.BYTE_ARRAY
        assert spec.width == 16
        assert spec.length == 16
        assert spec.describe() == "[u8; 16]"

    def test_enum_width_comes_from_attribute(self) -> None:
        (spec,) = _classify(FieldDeclaration("mode", Annotated[Mode, ByteMe(U32)]))

        assert spec.kind is FieldKind.ENUM_MAPPED
        assert spec.width == 4
        assert spec.enum_type is Mode
        assert spec.mapping is not None
        assert spec.describe() == "Mode as u32"

    def test_attribute_accepts_primitive_member(self) -> None:
        (spec,) = _classify(FieldDeclaration("mode", Annotated[Mode, ByteMe(Primitive.U16)]))

        assert spec.width == 2

    def test_integer_ignores_attribute(self) -> None:
        (spec,) = _classify(FieldDeclaration("count", Annotated[U16, ByteMe(U64)]))

        assert spec.kind is FieldKind.INTEGER
        assert spec.width == 2

    def test_order_and_total_width(self) -> None:
        schema = _classify(
            FieldDeclaration("a", U8),
            FieldDeclaration("b", Array[U8, 5]),
            FieldDeclaration("c", Annotated[Mode, ByteMe(U16)]),
        )

        assert [f.name for f in schema] == ["a", "b", "c"]
        assert schema.total_width == 8

    def test_array_of_u16_rejected(self) -> None:
        with pytest.raises(ArrayElementTypeError, match="U8 is the only supported"):
            _classify(FieldDeclaration("values", Array[U16, 4]))

    def test_array_of_int_rejected(self) -> None:
        with pytest.raises(ArrayElementTypeError):
            _classify(FieldDeclaration("values", Array[int, 4]))

    def test_empty_array_rejected(self) -> None:
        with pytest.raises(SchemaError, match="length must be > 0"):
            _classify(FieldDeclaration("values", Array[U8, 0]))

    @pytest.mark.parametrize("annotation", [int, str, float, bytes, Mode])
    def test_unsupported_without_attribute(self, annotation: object) -> None:
        with pytest.raises(UnsupportedFieldTypeError, match="unsupported type"):
            _classify(FieldDeclaration("value", annotation))

    def test_attribute_on_non_enum(self) -> None:
        with pytest.raises(UnsupportedFieldTypeError, match="only supported on enum"):
            _classify(FieldDeclaration("value", Annotated[str, ByteMe(U8)]))

    @pytest.mark.parametrize("argument", [int, "u32", 4, Mode])
    def test_attribute_with_non_integer_type(self, argument: object) -> None:
        with pytest.raises(AttributeTypeError, match="can only be used with"):
            _classify(FieldDeclaration("mode", Annotated[Mode, ByteMe(argument)]))

    def test_first_invalid_field_stops_classification(self) -> None:
        parsed = [
            ParsedField(name="ok", declared_type=Primitive.U8),
            ParsedField(name="bad", declared_type=str),
        ]

        assert classify_field("Test", parsed[0]).width == 1
        with pytest.raises(UnsupportedFieldTypeError, match="Test.bad"):
            classify_field("Test", parsed[1])


class TestModelClassification:
    """Test that models reject invalid schemas when the class is created."""

    def test_invalid_model_rejected_at_definition(self) -> None:
        with pytest.raises(ArrayElementTypeError):

            class BadArray(ByteMeModel):
                values: Array[U32, 2]

    def test_missing_attribute_rejected_at_definition(self) -> None:
        with pytest.raises(UnsupportedFieldTypeError):

            class BadEnum(ByteMeModel):
                mode: Mode


class TestEnumMapping:
    """Test enum <-> number tables."""

    def test_round_trip_all_members(self) -> None:
        mapping = EnumMapping.build(Mode, Primitive.U32)

        for member in Mode:
            assert mapping.from_number(mapping.to_number(member)) is member

    def test_numbers_are_member_values(self) -> None:
        mapping = EnumMapping.build(Mode, Primitive.U8)

        assert mapping.to_number(Mode.ENCRYPTED) == 4
        assert mapping.width == 1

    def test_unknown_number(self) -> None:
        mapping = EnumMapping.build(Mode, Primitive.U8)

        with pytest.raises(UnknownEnumValueError, match="3 is not a valid Mode") as exc_info:
            mapping.from_number(3, field_name="mode")

        assert exc_info.value.value == 3
        assert exc_info.value.field_name == "mode"

    def test_wrong_enum_on_encode(self) -> None:
        mapping = EnumMapping.build(Mode, Primitive.U8)

        with pytest.raises(EncodeError, match="expected Mode"):
            mapping.to_number(Big.SMALL)

    def test_value_too_large_for_width(self) -> None:
        with pytest.raises(EnumMappingError, match="does not fit u8"):
            EnumMapping.build(Big, Primitive.U8)

        assert EnumMapping.build(Big, Primitive.U16).to_number(Big.LARGE) == 300

    def test_non_integer_values(self) -> None:
        with pytest.raises(EnumMappingError, match="is not an int"):
            EnumMapping.build(Named, Primitive.U8)

    def test_empty_enum(self) -> None:
        with pytest.raises(EnumMappingError, match="no members"):
            EnumMapping.build(Empty, Primitive.U8)

    def test_aliases_collapse(self) -> None:
        mapping = EnumMapping.build(Aliased, Primitive.U8)

        assert mapping.to_number(Aliased.ENABLED) == 1
        assert mapping.from_number(1) is Aliased.ON
        assert len(mapping.from_number_table) == 2

    def test_table_is_read_only(self) -> None:
        mapping = EnumMapping.build(Mode, Primitive.U8)

        with pytest.raises(TypeError):
            mapping.from_number_table[9] = Mode.ENCRYPTED  # type: ignore[index]

    def test_flag_zero_and_multi_bit_members(self) -> None:
        mapping = EnumMapping.build(Perm, Primitive.U8)

        assert mapping.to_number(Perm.NONE) == 0
        assert mapping.to_number(Perm.RW) == 3
        assert mapping.to_number(Perm.R | Perm.W) == 3
        assert mapping.from_number(0) is Perm.NONE
        assert mapping.from_number(3) is Perm.RW
        assert len(mapping.to_number_table) == 5

    def test_undeclared_flag_combination(self) -> None:
        mapping = EnumMapping.build(Perm, Primitive.U8)

        with pytest.raises(EncodeError, match="not a declared member of Perm"):
            mapping.to_number(Perm.R | Perm.X)
        with pytest.raises(UnknownEnumValueError, match="5 is not a valid Perm"):
            mapping.from_number(5)

    @pytest.mark.parametrize("perm", [Perm.NONE, Perm.R, Perm.RW])
    def test_flag_field_encodes(self, perm: Perm) -> None:
        record = Access(perm=perm)

        assert record.to_bytes() == bytes([perm.value])
        assert Access.from_bytes(bytes([perm.value])) == record
