"""Base model class for byteme structs.

This module provides the ByteMeModel class that all byteme structs should inherit from.
Subclasses are compiled into a fixed-size codec as soon as the class is created,
so an invalid schema fails at import time rather than on the first encode.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

# Module import: codec.compiler itself imports models.fields
from ..codec import compiler


class _StructSize:
    """Read-only class attribute: the compiled size of the owning struct."""

    def __get__(self, instance: Any, owner: type[ByteMeModel]) -> int:
        # Abstract bases without fields have nothing to compile
        if not owner.model_fields:
            return 0
        return compiler.compile_model(owner).size


class ByteMeModel(BaseModel):
    """Base class for all byteme structs.

    Fields are declared with the byteme types; their order is the wire order.

    Example:
        >>> class ServerGreeting(ByteMeModel):
        ...     unused: Array[U8, 12]
        ...     mode: Annotated[Mode, ByteMe(U32)]
        ...     challenge: Array[U8, 16]
        ...     salt: Array[U8, 16]
        ...     count: U32
        ...     mbz: Array[U8, 12]
        >>> ServerGreeting.SIZE
        64
        >>> ServerGreeting.get_delimiter()
        b'\\x00@'

    Attributes:
        SIZE: Total encoded size in bytes, read from the compiled codec
        byteme_max_size: Optional cap on SIZE, checked when the class is compiled
    """

    model_config = ConfigDict(
        # Validate on assignment so a record can never hold an unencodable value
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    SIZE: ClassVar[int] = _StructSize()  # type: ignore[assignment]
    byteme_max_size: ClassVar[int | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Compile the struct once Pydantic has finished building its fields."""
        super().__pydantic_init_subclass__(**kwargs)

        # Unresolved forward references are compiled on first use instead
        if not cls.__pydantic_complete__ or not cls.model_fields:
            return
        compiler.compile_model(cls)

    def to_bytes(self) -> bytes:
        """Encode this record to exactly SIZE bytes."""
        return compiler.compile_model(type(self)).encode(self)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Any:
        """Decode exactly SIZE bytes into a new record."""
        return compiler.compile_model(cls).decode(data)

    @classmethod
    def get_delimiter(cls) -> bytes:
        """Return SIZE as a 2-byte big-endian length prefix."""
        return compiler.compile_model(cls).get_delimiter()
