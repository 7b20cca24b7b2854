"""Struct compilation and the public encode/decode API.

Compiling a struct runs the whole pipeline once:

    parse -> classify -> compute layout -> StructCodec

The resulting StructCodec is immutable and cached per model class, so encode()
and decode() only interpret a precomputed layout and are safe to call from
many threads at once.
"""

from __future__ import annotations

import logging
import struct
from typing import Any, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError, create_model

from ..exceptions import DecodeError, SchemaError
from .decoder import decode_record
from .encoder import encode_record
from .layout import Layout, compute_layout
from .parser import StructDefinition, parse_definition, parse_model
from .schema import classify

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Class attribute holding a model's codec, so the codec lives as long as the class
_CODEC_ATTR = "__byteme_codec__"


class StructCodec:
    """Encoder/decoder pair for one struct.

    Attributes:
        layout: Compiled layout
        model_class: Pydantic model that decode() builds

    Example:
        >>> codec = compile_model(ServerGreeting)
        >>> codec.SIZE
        64
        >>> data = codec.encode(greeting)
        >>> codec.decode(data) == greeting
        True
    """

    def __init__(self, layout: Layout, model_class: Type[BaseModel]) -> None:
        self.layout = layout
        self.model_class = model_class
        self._delimiter = struct.pack(">H", layout.size)

    @property
    def SIZE(self) -> int:  # noqa: N802
        return self.layout.size

    @property
    def size(self) -> int:
        return self.layout.size

    @property
    def name(self) -> str:
        return self.layout.name

    def encode(self, record: Any) -> bytes:
        """Encode a record (model instance or mapping) to exactly SIZE bytes."""
        return encode_record(self.layout, record)

    def decode(self, data: bytes | bytearray | memoryview) -> Any:
        """Decode exactly SIZE bytes into a new model instance.

        Raises:
            LengthMismatchError: If data is not SIZE bytes long
            UnknownEnumValueError: If an enum field holds an unmapped number
            DecodeError: If the model rejects the decoded values
        """
        values = decode_record(self.layout, data)
        try:
            return self.model_class(**values)
        except ValidationError as e:
            raise DecodeError(f"Failed to construct {self.model_class.__name__}: {e}") from e

    def get_delimiter(self) -> bytes:
        """Return SIZE as a 2-byte big-endian length prefix."""
        return self._delimiter

    def __repr__(self) -> str:
        return f"StructCodec({self.name}, size={self.size})"


def compile_model(model_class: Type[BaseModel]) -> StructCodec:
    """Compile a Pydantic model class into a StructCodec.

    The result is cached on the class itself; subclasses compile their own.

    Args:
        model_class: Pydantic model class whose fields use the byteme types

    Returns:
        StructCodec for the model

    Raises:
        SchemaError: If any field cannot be compiled
    """
    codec = model_class.__dict__.get(_CODEC_ATTR)
    if codec is not None:
        return codec  # type: ignore[no-any-return]

    if not model_class.__pydantic_complete__:
        model_class.model_rebuild(raise_errors=False)
        if not model_class.__pydantic_complete__:
            raise SchemaError(
                f"{model_class.__name__} has unresolved forward references; "
                f"define them and call model_rebuild() first"
            )

    schema = classify(parse_model(model_class))
    layout = compute_layout(schema, max_size=getattr(model_class, "byteme_max_size", None))
    logger.debug("Compiled %s (%d bytes)", model_class.__name__, layout.size)
    codec = StructCodec(layout, model_class)
    setattr(model_class, _CODEC_ATTR, codec)
    return codec


def compile_definition(definition: StructDefinition) -> StructCodec:
    """Compile an explicit struct definition.

    The definition is fully validated first; only then is a ByteMeModel
    subclass synthesized for it, so decode() always returns a model instance.

    Args:
        definition: Struct definition

    Returns:
        StructCodec whose model_class is the synthesized model

    Raises:
        SchemaError: If the definition is invalid
    """
    if definition.model_class is not None:
        return compile_model(definition.model_class)

    schema = classify(parse_definition(definition))
    compute_layout(schema)

    # Imported here to avoid a circular import with models.base
    from ..models.base import ByteMeModel

    fields: dict[str, Any] = {decl.name: (decl.annotation, ...) for decl in definition.fields}
    model_class = create_model(definition.name, __base__=ByteMeModel, **fields)
    if list(model_class.model_fields) != [f.name for f in schema]:
        raise SchemaError(
            f"{definition.name}: model fields {list(model_class.model_fields)} do not match "
            f"the declared fields {[f.name for f in schema]}"
        )
    return compile_model(model_class)


def codec_for(model_or_instance: Union[BaseModel, Type[BaseModel]]) -> StructCodec:
    """Return the compiled codec for a model class or instance."""
    if isinstance(model_or_instance, BaseModel):
        return compile_model(type(model_or_instance))
    return compile_model(model_or_instance)


def encode(record: BaseModel) -> bytes:
    """Encode a model instance to its fixed-size big-endian representation.

    Args:
        record: Model instance to encode

    Returns:
        Exactly SIZE bytes

    Raises:
        SchemaError: If the model's schema is invalid
        EncodeError: If a field value does not fit its field

    Example:
        >>> data = encode(greeting)
        >>> len(data) == ServerGreeting.SIZE
        True
    """
    return codec_for(record).encode(record)


def decode(model_class: Type[T], data: bytes | bytearray | memoryview) -> T:
    """Decode exactly SIZE bytes into a new instance of model_class.

    Args:
        model_class: Model class to decode to
        data: Binary data to decode

    Returns:
        Decoded model instance

    Raises:
        SchemaError: If the model's schema is invalid
        LengthMismatchError: If data is not SIZE bytes long
        UnknownEnumValueError: If an enum field holds an unmapped number
    """
    return codec_for(model_class).decode(data)  # type: ignore[no-any-return]


def get_delimiter(model_or_instance: Union[BaseModel, Type[BaseModel]]) -> bytes:
    """Return the 2-byte big-endian SIZE prefix of a model."""
    return codec_for(model_or_instance).get_delimiter()
