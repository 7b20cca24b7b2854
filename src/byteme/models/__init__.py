"""Pydantic struct modeling for byteme.

This module provides the ByteMeModel base class and the field types used to
declare fixed-size big-endian structs.
"""

from __future__ import annotations

from .base import ByteMeModel
from .fields import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Array,
    ArraySpec,
    ByteMe,
    Primitive,
    USize,
    primitive_of,
)

__all__ = [
    "ByteMeModel",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USize",
    "Array",
    "ArraySpec",
    "ByteMe",
    "Primitive",
    "primitive_of",
]
