# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type value representations for the TypeCanvas schema model."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Primitive keywords of the schema language."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    ANY = "any"
    UNKNOWN = "unknown"


class BuiltInType(Enum):
    """Built-in generic container shapes."""

    ARRAY = "Array"
    TUPLE = "Tuple"
    SET = "Set"
    MAP = "Map"
    OBJECT = "Object"
    GENERIC = "Generic"


class PrimitiveTypeRef(BaseModel):
    """Reference to a primitive type."""

    kind: Literal["primitive"] = "primitive"
    name: PrimitiveType


class CustomTypeRef(BaseModel):
    """Reference to another type box by name."""

    kind: Literal["custom"] = "custom"
    name: str


class UnionTypeRef(BaseModel):
    """An ordered union ``A | B | ...``."""

    kind: Literal["union"] = "union"
    types: list[TypeValue] = _Field(default_factory=list)


class IntersectionTypeRef(BaseModel):
    """An ordered intersection ``A & B & ...``."""

    kind: Literal["intersection"] = "intersection"
    types: list[TypeValue] = _Field(default_factory=list)


class BuiltInTypeRef(BaseModel):
    """A built-in container such as ``Array<T>`` or ``Map<K, V>``.

    Arity depends on the container: Array and Set use at most one argument,
    Map and Object use two, Tuple uses any number and Generic is free-form.
    """

    kind: Literal["builtIn"] = "builtIn"
    name: BuiltInType
    generic_args: list[TypeValue] = _Field(default_factory=list)


# The declared type of a property. The `kind` discriminator makes the union
# closed so every consumer can dispatch on it exhaustively.
TypeValue = Annotated[
    PrimitiveTypeRef | CustomTypeRef | UnionTypeRef | IntersectionTypeRef | BuiltInTypeRef,
    _Field(discriminator="kind"),
]

PRIMITIVE_NAMES: frozenset[str] = frozenset(p.value for p in PrimitiveType)


def make_leaf_type(name: str) -> TypeValue:
    """Return a primitive reference for primitive keywords, a custom reference otherwise."""
    if name in PRIMITIVE_NAMES:
        return PrimitiveTypeRef(name=PrimitiveType(name))
    return CustomTypeRef(name=name)


def label_of(type_value: TypeValue) -> str:
    """Return a short human-readable label for *type_value*.

    Unions nested in intersections and compound array elements are
    parenthesised; an empty union or intersection is labelled ``unknown``.
    """
    if isinstance(type_value, (PrimitiveTypeRef, CustomTypeRef)):
        return _leaf_name(type_value)
    if isinstance(type_value, UnionTypeRef):
        if not type_value.types:
            return "unknown"
        return " | ".join(label_of(t) for t in type_value.types)
    if isinstance(type_value, IntersectionTypeRef):
        if not type_value.types:
            return "unknown"
        return " & ".join(_group_union(t, label_of) for t in type_value.types)
    assert isinstance(type_value, BuiltInTypeRef)
    return _builtin_label(type_value)


# ################
# Implementation
# ################


def _leaf_name(type_value: PrimitiveTypeRef | CustomTypeRef) -> str:
    if isinstance(type_value, PrimitiveTypeRef):
        return type_value.name.value
    return type_value.name


def _group_union(type_value: TypeValue, fmt: Callable[[TypeValue], str]) -> str:
    """Format *type_value*, wrapping a multi-member union in parentheses."""
    text = fmt(type_value)
    if isinstance(type_value, UnionTypeRef) and len(type_value.types) > 1:
        return f"({text})"
    return text


def _builtin_label(type_value: BuiltInTypeRef) -> str:
    args = type_value.generic_args
    name = type_value.name
    if name == BuiltInType.ARRAY:
        if not args:
            return "any[]"
        if len(args) == 1:
            element = args[0]
            if isinstance(element, (UnionTypeRef, IntersectionTypeRef)) and len(element.types) > 1:
                return f"({label_of(element)})[]"
            return f"{label_of(element)}[]"
        return "(" + " | ".join(label_of(a) for a in args) + ")[]"
    if name == BuiltInType.TUPLE:
        return "[" + ", ".join(label_of(a) for a in args) + "]"
    if name == BuiltInType.SET:
        return f"Set<{_arg_label(args, 0, 'unknown')}>"
    if name == BuiltInType.MAP:
        return f"Map<{_arg_label(args, 0, 'unknown')}, {_arg_label(args, 1, 'unknown')}>"
    if name == BuiltInType.OBJECT:
        return f"Record<{_arg_label(args, 0, 'string')}, {_arg_label(args, 1, 'unknown')}>"
    if args:
        return f"{name.value}<" + ", ".join(label_of(a) for a in args) + ">"
    return name.value


def _arg_label(args: list[TypeValue], index: int, default: str) -> str:
    return label_of(args[index]) if index < len(args) else default


# Resolve forward references for the recursive variants.
UnionTypeRef.model_rebuild()
IntersectionTypeRef.model_rebuild()
BuiltInTypeRef.model_rebuild()
