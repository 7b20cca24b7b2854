"""Fixed-size binary codec for byteme.

This module compiles struct definitions into big-endian encoders and decoders
with a layout known before any record exists.
"""

from __future__ import annotations

from .compiler import (
    StructCodec,
    codec_for,
    compile_definition,
    compile_model,
    decode,
    encode,
    get_delimiter,
)
from .enums import EnumMapping
from .layout import MAX_STRUCT_SIZE, FieldLayout, Layout, compute_layout
from .parser import FieldDeclaration, StructDefinition, parse_definition, parse_model
from .schema import FieldKind, FieldSpec, StructSchema, classify

__all__ = [
    "encode",
    "decode",
    "get_delimiter",
    "StructCodec",
    "codec_for",
    "compile_model",
    "compile_definition",
    "FieldDeclaration",
    "StructDefinition",
    "parse_definition",
    "parse_model",
    "FieldKind",
    "FieldSpec",
    "StructSchema",
    "classify",
    "EnumMapping",
    "FieldLayout",
    "Layout",
    "compute_layout",
    "MAX_STRUCT_SIZE",
]
