"""Struct size and layout reporting.

This module provides functions to inspect the wire layout of a struct
without actually encoding anything.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..codec.compiler import codec_for


def encoded_size(message_or_class: BaseModel | type[BaseModel]) -> int:
    """Return the encoded size of a struct in bytes.

    The size is a property of the schema and never depends on field values.

    Args:
        message_or_class: Model instance or class

    Returns:
        SIZE in bytes

    Raises:
        SchemaError: If the schema is invalid

    Example:
        >>> encoded_size(ServerGreeting)
        64
    """
    return codec_for(message_or_class).size


def field_sizes(message_or_class: BaseModel | type[BaseModel]) -> dict[str, int]:
    """Get the width in bytes of each field.

    Example:
        >>> field_sizes(ServerGreeting)
        {'unused': 12, 'mode': 4, 'challenge': 16, 'salt': 16, 'count': 4, 'mbz': 12}
    """
    return {field.name: field.width for field in codec_for(message_or_class).layout}


def field_offsets(message_or_class: BaseModel | type[BaseModel]) -> dict[str, tuple[int, int]]:
    """Get the ``(start, end)`` byte range of each field.

    Example:
        >>> field_offsets(ServerGreeting)["mode"]
        (12, 16)
    """
    return codec_for(message_or_class).layout.offsets()
