"""Struct definition parsing.

This module turns a struct definition into an ordered list of parsed fields:
name, declared type and the optional width hint taken from a ``ByteMe()``
attribute. It knows nothing about wire widths; that is the classifier's job.

Definitions come from two front ends:
    - a Pydantic model class (``parse_model``)
    - an explicit ``StructDefinition`` built from ``FieldDeclaration`` objects
"""

from __future__ import annotations

import keyword
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Iterable, Optional, Sequence, Type, get_args, get_origin

from pydantic import BaseModel

from ..exceptions import (
    AttributeArityError,
    DuplicateFieldError,
    InvalidFieldNameError,
    SchemaError,
    UnnamedFieldError,
)
from ..models.fields import ArraySpec, ByteMe, primitive_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDeclaration:
    """One field of an explicit struct definition.

    Attributes:
        name: Field name; None or "" is rejected when parsed
        annotation: Type expression, written exactly as on a model
            (``U32``, ``Array[U8, 12]``, ``Annotated[Mode, ByteMe(U16)]``)
    """

    name: Optional[str]
    annotation: Any


@dataclass(frozen=True)
class StructDefinition:
    """An ordered, named list of field declarations.

    Attributes:
        name: Struct name
        fields: Field declarations in wire order
        model_class: Pydantic model the definition was read from, if any
    """

    name: str
    fields: Sequence[FieldDeclaration]
    model_class: Optional[Type[BaseModel]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class ParsedField:
    """A named field with its declared type and optional width hint.

    Attributes:
        name: Field name
        declared_type: An ArraySpec, a Primitive, or the raw Python type
        width_hint: The single argument of the field's ByteMe() attribute
    """

    name: str
    declared_type: Any
    width_hint: Any = None


@dataclass(frozen=True)
class ParsedStruct:
    """Parsed fields of a struct, in declaration order."""

    name: str
    fields: tuple[ParsedField, ...]


def split_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, m1, m2]`` into ``(T, (m1, m2))``.

    Nested Annotated layers are flattened, outermost metadata last, the same
    way Pydantic collects field metadata.
    """
    metadata: tuple[Any, ...] = ()
    while get_origin(annotation) is Annotated:
        base, *extra = get_args(annotation)
        metadata = tuple(extra) + metadata
        annotation = base
    return annotation, metadata


def declared_type_of(annotation: Any, metadata: Iterable[Any]) -> Any:
    """Pick the declared type of a field from its annotation and metadata.

    Array markers win over primitive markers; the raw annotation is the fallback.
    """
    metadata = list(metadata)
    for meta in metadata:
        if isinstance(meta, ArraySpec):
            return meta
    for meta in metadata:
        primitive = primitive_of(meta)
        if primitive is not None:
            return primitive
    return annotation


def definition_from_model(model_class: Type[BaseModel]) -> StructDefinition:
    """Read a StructDefinition from a Pydantic model class.

    Args:
        model_class: Pydantic model class to introspect

    Returns:
        StructDefinition whose declarations keep the model's field order
    """
    declarations = []
    # Pydantic v2 keeps the Annotated metadata in FieldInfo.metadata
    for name, field_info in model_class.model_fields.items():
        if field_info.annotation is None:
            raise SchemaError(f"{model_class.__name__}.{name} has no type annotation")
        annotation = field_info.annotation
        if field_info.metadata:
            annotation = Annotated[(annotation, *field_info.metadata)]
        declarations.append(FieldDeclaration(name=name, annotation=annotation))
    return StructDefinition(name=model_class.__name__, fields=declarations, model_class=model_class)


def parse_definition(definition: StructDefinition) -> ParsedStruct:
    """Parse an explicit struct definition.

    Args:
        definition: Struct definition to parse

    Returns:
        ParsedStruct with one ParsedField per declaration

    Raises:
        UnnamedFieldError: If a declaration has no name
        DuplicateFieldError: If two declarations share a name
        InvalidFieldNameError: If an explicit declaration's name cannot be a
            model field
        AttributeArityError: If a field has more than one ByteMe() attribute,
            or its attribute does not have exactly one argument
    """
    parsed: list[ParsedField] = []
    seen: set[str] = set()

    for position, declaration in enumerate(definition.fields):
        if not declaration.name:
            raise UnnamedFieldError(
                f"{definition.name}: field #{position} has no name. "
                f"Structs can only be built from named fields."
            )
        name = declaration.name
        if name in seen:
            raise DuplicateFieldError(f"{definition.name}: duplicate field {name!r}")
        seen.add(name)
        # Model fields were already accepted by Pydantic
        if definition.model_class is None:
            _check_field_name(definition.name, name)

        annotation, metadata = split_annotation(declaration.annotation)
        parsed.append(
            ParsedField(
                name=name,
                declared_type=declared_type_of(annotation, metadata),
                width_hint=_width_hint(definition.name, name, metadata),
            )
        )

    logger.debug("Parsed %s: %s", definition.name, [f.name for f in parsed])
    return ParsedStruct(name=definition.name, fields=tuple(parsed))


def parse_model(model_class: Type[BaseModel]) -> ParsedStruct:
    """Parse a Pydantic model class."""
    return parse_definition(definition_from_model(model_class))


def _check_field_name(struct_name: str, name: str) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidFieldNameError(f"{struct_name}: {name!r} is not a valid identifier")
    # Pydantic turns these into private attributes instead of fields
    if name.startswith("_"):
        raise InvalidFieldNameError(
            f"{struct_name}: field {name!r} cannot start with an underscore"
        )

    # Imported here to avoid a circular import with models.base
    from ..models.base import ByteMeModel

    if hasattr(ByteMeModel, name):
        raise InvalidFieldNameError(
            f"{struct_name}: field {name!r} shadows a ByteMeModel attribute"
        )


def _width_hint(struct_name: str, field_name: str, metadata: Iterable[Any]) -> Any:
    attributes = [meta for meta in metadata if isinstance(meta, ByteMe)]
    if not attributes:
        return None
    if len(attributes) > 1:
        raise AttributeArityError(
            f"{struct_name}.{field_name}: ByteMe() can only be attached once, "
            f"found {len(attributes)}"
        )
    (attribute,) = attributes
    if len(attribute.args) != 1:
        raise AttributeArityError(
            f"{struct_name}.{field_name}: ByteMe() takes exactly one argument, "
            f"got {len(attribute.args)}"
        )
    return attribute.args[0]
