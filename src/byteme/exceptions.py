"""Exception hierarchy for byteme.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ByteMeError for easy catching of any byteme-specific error.

Two tiers exist:
    - SchemaError and its subclasses are raised once, when a struct is compiled.
      A schema that raises one of these never produces a codec.
    - EncodeError / DecodeError are raised per call, when a record or buffer
      does not fit an already compiled layout.
"""

from __future__ import annotations


class ByteMeError(Exception):
    """Base exception for all byteme errors."""

    pass


class SchemaError(ByteMeError):
    """Raised when a struct definition cannot be compiled into a codec.

    Examples:
        - A field has no name
        - A field type is not an unsigned integer, byte array or mapped enum
        - The total size does not fit the 16-bit delimiter
    """

    pass


class UnnamedFieldError(SchemaError):
    """Raised when a field declaration has no name."""

    pass


class DuplicateFieldError(SchemaError):
    """Raised when two fields share a name."""

    pass


class InvalidFieldNameError(SchemaError):
    """Raised when a declared field name cannot become a model field.

    Examples:
        - The name is not a Python identifier, or is a keyword
        - The name starts with an underscore
        - The name shadows a ByteMeModel attribute such as SIZE or model_config
    """

    pass


class AttributeArityError(SchemaError):
    """Raised when the ByteMe() width attribute is repeated or given != 1 argument."""

    pass


class AttributeTypeError(SchemaError):
    """Raised when the ByteMe() width attribute names something other than an unsigned integer."""

    pass


class ArrayElementTypeError(SchemaError):
    """Raised when an array field wraps anything other than U8."""

    pass


class UnsupportedFieldTypeError(SchemaError):
    """Raised when a field cannot be classified as Integer, ByteArray or EnumMapped."""

    pass


class EnumMappingError(SchemaError):
    """Raised when an enum cannot be mapped onto its attribute width.

    Examples:
        - The enum has no members
        - A member value is not a non-negative int
        - A member value does not fit the attribute width
    """

    pass


class SizeOverflowError(SchemaError):
    """Raised when a struct is larger than its delimiter (or byteme_max_size) allows."""

    pass


class EncodeError(ByteMeError):
    """Raised when encoding a record fails.

    Examples:
        - Integer value out of range for its width
        - Byte array of the wrong length
        - Enum field holding a value of the wrong enum
    """

    pass


class DecodeError(ByteMeError):
    """Raised when decoding binary data fails."""

    pass


class LengthMismatchError(DecodeError):
    """Raised when a buffer is not exactly SIZE bytes long."""

    def __init__(self, struct_name: str, expected: int, actual: int) -> None:
        self.struct_name = struct_name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{struct_name}: expected {expected} bytes, got {actual} bytes")


class UnknownEnumValueError(DecodeError):
    """Raised when a decoded number has no matching enum member."""

    def __init__(self, enum_name: str, value: int, field_name: str | None = None) -> None:
        self.enum_name = enum_name
        self.value = value
        self.field_name = field_name
        prefix = f"Field {field_name}: " if field_name else ""
        super().__init__(f"{prefix}{value} is not a valid {enum_name}")


class FramingError(ByteMeError):
    """Raised when framing operations fail.

    Examples:
        - Frame shorter than the 2-byte delimiter
        - Delimiter does not match the struct size
        - Truncated trailing frame in a stream
    """

    pass
