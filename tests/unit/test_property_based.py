"""Property-based tests using hypothesis."""

from __future__ import annotations

import enum
import struct
from typing import Annotated

from hypothesis import given, settings
from hypothesis import strategies as st

from byteme import (
    U8,
    U16,
    U32,
    U64,
    Array,
    ByteMe,
    ByteMeModel,
    FieldDeclaration,
    StructDefinition,
    UnknownEnumValueError,
    compile_definition,
    decode,
    encode,
)
from byteme.framing import frame_record, unframe_record


class Mode(enum.IntEnum):
    """Test enum."""

    UNAVAILABLE = 0
    UNAUTHENTICATED = 1
    AUTHENTICATED = 2
    ENCRYPTED = 4


class Record(ByteMeModel):
    """Record for property testing."""

    header: Array[U8, 3]
    mode: Annotated[Mode, ByteMe(U16)]
    count: U32
    total: U64


records = st.builds(
    Record,
    header=st.binary(min_size=3, max_size=3),
    mode=st.sampled_from(Mode),
    count=st.integers(min_value=0, max_value=2**32 - 1),
    total=st.integers(min_value=0, max_value=2**64 - 1),
)

field_annotations = st.sampled_from([U8, U16, U32, U64]) | st.integers(
    min_value=1, max_value=64
).map(lambda n: Array[U8, n])


class TestCodecProperties:
    """Property-based tests for the codec."""

    @given(record=records)
    def test_encode_decode_roundtrip(self, record: Record) -> None:
        data = encode(record)

        assert len(data) == Record.SIZE
        assert decode(Record, data) == record

    @given(record=records)
    def test_byte_array_fidelity(self, record: Record) -> None:
        data = encode(record)

        assert data[:3] == record.header
        assert decode(Record, data).header == record.header

    @given(a=records, b=records)
    def test_encode_injective(self, a: Record, b: Record) -> None:
        assert (encode(a) == encode(b)) == (a == b)

    @given(number=st.integers(min_value=0, max_value=0xFFFF))
    def test_enum_totality(self, number: int) -> None:
        data = bytearray(Record.SIZE)
        data[3:5] = number.to_bytes(2, "big")

        if number in {m.value for m in Mode}:
            assert decode(Record, bytes(data)).mode == Mode(number)
        else:
            try:
                decode(Record, bytes(data))
            except UnknownEnumValueError as err:
                assert err.value == number
            else:
                raise AssertionError(f"{number} decoded without error")

    @given(record=records)
    def test_frame_roundtrip(self, record: Record) -> None:
        assert unframe_record(Record, frame_record(record)) == record


class TestLayoutProperties:
    """Property-based tests for layouts of generated schemas."""

    @settings(deadline=None)
    @given(annotations=st.lists(field_annotations, min_size=1, max_size=12))
    def test_size_additivity_and_delimiter(self, annotations: list[object]) -> None:
        codec = compile_definition(
            StructDefinition(
                name="Generated",
                fields=[FieldDeclaration(f"f{i}", a) for i, a in enumerate(annotations)],
            )
        )

        widths = [field.width for field in codec.layout]
        assert codec.SIZE == sum(widths)
        assert codec.get_delimiter() == struct.pack(">H", codec.SIZE)

        starts = [field.start for field in codec.layout]
        assert starts == [sum(widths[:i]) for i in range(len(widths))]
