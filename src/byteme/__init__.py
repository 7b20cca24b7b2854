"""byteme: fixed-size big-endian struct codec

A Python library that compiles a declarative struct schema into a deterministic,
fixed-size, big-endian binary codec. Every field is an unsigned integer, a
fixed-length byte array, or an enum carried as an unsigned integer; fields are
laid out back to back in declaration order with no padding.

Key Features:
- Pydantic-based struct modeling
- Layout and SIZE known when the class is created
- Explicit enum <-> number mapping with loud decode failures
- 2-byte big-endian length delimiter for framed wires

Quick Start:
    >>> import enum
    >>> from typing import Annotated
    >>> from byteme import U8, U32, Array, ByteMe, ByteMeModel, decode, encode
    >>>
    >>> class Mode(enum.IntEnum):
    ...     UNAVAILABLE = 0
    ...     UNAUTHENTICATED = 1
    ...     AUTHENTICATED = 2
    ...     ENCRYPTED = 4
    >>>
    >>> class ServerGreeting(ByteMeModel):
    ...     unused: Array[U8, 12]
    ...     mode: Annotated[Mode, ByteMe(U32)]
    ...     challenge: Array[U8, 16]
    ...     salt: Array[U8, 16]
    ...     count: U32
    ...     mbz: Array[U8, 12]
    >>>
    >>> ServerGreeting.SIZE
    64
    >>> msg = ServerGreeting(
    ...     unused=bytes(12), mode=Mode.UNAUTHENTICATED, challenge=bytes(16),
    ...     salt=bytes(16), count=1024, mbz=bytes(12),
    ... )
    >>> decode(ServerGreeting, encode(msg)) == msg
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    FieldDeclaration,
    FieldKind,
    StructCodec,
    StructDefinition,
    compile_definition,
    compile_model,
    decode,
    encode,
    get_delimiter,
)
from .exceptions import (
    ArrayElementTypeError,
    AttributeArityError,
    AttributeTypeError,
    ByteMeError,
    DecodeError,
    DuplicateFieldError,
    EncodeError,
    EnumMappingError,
    FramingError,
    InvalidFieldNameError,
    LengthMismatchError,
    SchemaError,
    SizeOverflowError,
    UnknownEnumValueError,
    UnnamedFieldError,
    UnsupportedFieldTypeError,
)
from .framing import frame_record, iter_records, unframe_record
from .models import U8, U16, U32, U64, U128, Array, ByteMe, ByteMeModel, Primitive, USize
from .utils import encoded_size, field_offsets, field_sizes

__all__ = [
    # Core API
    "ByteMeModel",
    "encode",
    "decode",
    "get_delimiter",
    "StructCodec",
    "compile_model",
    "compile_definition",
    "StructDefinition",
    "FieldDeclaration",
    "FieldKind",
    # Field types
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USize",
    "Array",
    "ByteMe",
    "Primitive",
    # Exceptions
    "ByteMeError",
    "SchemaError",
    "UnnamedFieldError",
    "DuplicateFieldError",
    "InvalidFieldNameError",
    "AttributeArityError",
    "AttributeTypeError",
    "ArrayElementTypeError",
    "UnsupportedFieldTypeError",
    "EnumMappingError",
    "SizeOverflowError",
    "EncodeError",
    "DecodeError",
    "LengthMismatchError",
    "UnknownEnumValueError",
    "FramingError",
    # Framing
    "frame_record",
    "unframe_record",
    "iter_records",
    # Sizing
    "encoded_size",
    "field_sizes",
    "field_offsets",
    # Version
    "__version__",
]
