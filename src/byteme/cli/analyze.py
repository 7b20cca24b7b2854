"""Struct layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..codec.compiler import compile_model
from ..codec.schema import FieldKind
from ..models.base import ByteMeModel

WIDTH = 60


def analyze_file(file_path: Path) -> None:
    """Analyze all ByteMeModel classes in a Python file.

    Args:
        file_path: Path to Python file containing struct definitions

    Raises:
        SchemaError: If a struct in the file cannot be compiled
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only classes defined in this file, not imported ones
    struct_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not ByteMeModel
        and issubclass(obj, ByteMeModel)
        and obj.__module__ == "user_module"
    ]

    if not struct_classes:
        print(f"No ByteMeModel classes found in {file_path}")
        return

    print("|" * 7, "byteme: fixed-size big-endian struct codec", "|" * 7)
    print(f"{len(struct_classes)} struct{'s' if len(struct_classes) != 1 else ''} loaded.")
    print("Offsets and sizes are in bytes.")
    print()

    for struct_class in struct_classes:
        analyze_struct_class(struct_class)


def analyze_struct_class(struct_class: type[ByteMeModel]) -> None:
    """Print the wire layout of a single struct class.

    Args:
        struct_class: Struct class to analyze
    """
    codec = compile_model(struct_class)
    name = struct_class.__name__

    print(f"{'=' * 19} {name} {'=' * 19}")
    print(f"Size: {codec.size} bytes")
    print(f"Delimiter: {codec.get_delimiter().hex(' ')}")
    print()

    for i, field in enumerate(codec.layout, 1):
        field_desc = f"{i}. {field.name}"
        field_info = f"[{field.start:>5}, {field.end:>5})  {field.spec.describe()}"
        dots = "." * max(1, WIDTH - len(field_desc) - len(field_info))
        print(f"    {field_desc}{dots}{field_info}")

        if field.spec.kind is FieldKind.ENUM_MAPPED and field.spec.mapping is not None:
            for member, number in field.spec.mapping.to_number_table.items():
                print(f"        {member.name} = {number}")

    print()
