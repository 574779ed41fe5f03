# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of type values and type boxes to source text.

Output is restricted to the subset the parser reads back: interface and type
declarations, property signatures and doc comments. Every function here is
total; a degenerate model still renders to well-formed text.
"""

from __future__ import annotations

from collections.abc import Iterable

from typecanvas.model.entities import BoxKind, Property, TypeBoxSkeleton
from typecanvas.model.types import (
    BuiltInType,
    BuiltInTypeRef,
    CustomTypeRef,
    IntersectionTypeRef,
    PrimitiveTypeRef,
    TypeValue,
    UnionTypeRef,
)

# ###############
# Public Interface
# ###############

INDENT = "  "
UNNAMED = "Unnamed"
UNNAMED_PROPERTY = "unnamed"


def render_type(type_value: TypeValue) -> str:
    """Render *type_value* as a type expression.

    Single-argument arrays use the ``T[]`` suffix form, with compound element
    types parenthesised; ``Record<K, V>`` stands for the Object container.
    """
    if isinstance(type_value, PrimitiveTypeRef):
        return type_value.name.value
    if isinstance(type_value, CustomTypeRef):
        return type_value.name or "unknown"
    if isinstance(type_value, UnionTypeRef):
        if not type_value.types:
            return "unknown"
        return " | ".join(render_type(t) for t in type_value.types)
    if isinstance(type_value, IntersectionTypeRef):
        if not type_value.types:
            return "unknown"
        return " & ".join(_render_intersection_member(t) for t in type_value.types)
    assert isinstance(type_value, BuiltInTypeRef)
    return _render_builtin(type_value)


def render_property(prop: Property) -> str:
    """Render a property signature, e.g. ``readonly tags?: string[];``."""
    head = "readonly " if prop.readonly else ""
    mark = "?" if prop.optional else ""
    name = prop.name.strip() or UNNAMED_PROPERTY
    return f"{head}{name}{mark}: {render_type(prop.type)};"


def render_box(box: TypeBoxSkeleton) -> str:
    """Render a complete declaration block for *box*."""
    lines: list[str] = []
    if box.comment:
        lines.append("/**")
        lines.extend(f" * {_close_safe(line)}".rstrip() for line in box.comment.splitlines())
        lines.append(" */")

    name = box.name or UNNAMED
    if box.kind in (BoxKind.TYPE, BoxKind.ALIAS):
        lines.append(f"type {name} = {_alias_root(box)};")
        return "\n".join(lines)

    if box.kind == BoxKind.ENUM:
        # Enum members are not modelled, so the body stays empty.
        lines.append(f"enum {name} {{")
        lines.append("}")
        return "\n".join(lines)

    extends = f" extends {', '.join(box.extends)}" if box.extends else ""
    lines.append(f"interface {name}{extends} {{")
    for prop in box.properties:
        if prop.comment:
            lines.append(f"{INDENT}/** {_escape_comment(prop.comment)} */")
        lines.append(INDENT + render_property(prop))
    lines.append("}")
    return "\n".join(lines)


def render_batch(boxes: Iterable[TypeBoxSkeleton]) -> str:
    """Render several boxes separated by a blank line."""
    return "\n\n".join(render_box(box) for box in boxes)


# ################
# Implementation
# ################


def _render_intersection_member(type_value: TypeValue) -> str:
    text = render_type(type_value)
    if isinstance(type_value, UnionTypeRef) and len(type_value.types) > 1:
        return f"({text})"
    return text


def _render_array_element(type_value: TypeValue) -> str:
    text = render_type(type_value)
    if isinstance(type_value, (UnionTypeRef, IntersectionTypeRef)) and len(type_value.types) > 1:
        return f"({text})"
    return text


def _render_builtin(type_value: BuiltInTypeRef) -> str:
    args = type_value.generic_args
    name = type_value.name
    if name == BuiltInType.ARRAY:
        if not args:
            return "any[]"
        if len(args) == 1:
            return f"{_render_array_element(args[0])}[]"
        # Several element types mean "any of these".
        return _render_array_element(UnionTypeRef(types=list(args))) + "[]"
    if name == BuiltInType.TUPLE:
        return "[" + ", ".join(render_type(a) for a in args) + "]"
    if name == BuiltInType.SET:
        return f"Set<{_render_arg(args, 0, 'unknown')}>"
    if name == BuiltInType.MAP:
        return f"Map<{_render_arg(args, 0, 'unknown')}, {_render_arg(args, 1, 'unknown')}>"
    if name == BuiltInType.OBJECT:
        return f"Record<{_render_arg(args, 0, 'string')}, {_render_arg(args, 1, 'unknown')}>"
    if args:
        return f"{name.value}<" + ", ".join(render_type(a) for a in args) + ">"
    return name.value


def _render_arg(args: list[TypeValue], index: int, default: str) -> str:
    return render_type(args[index]) if index < len(args) else default


def _alias_root(box: TypeBoxSkeleton) -> str:
    """Pick the right-hand side of a type alias.

    Union members win over intersection members, which win over an inline
    object literal built from the properties.
    """
    union = [t for t in box.union_types if t.strip()]
    if union:
        return " | ".join(union)
    intersection = [t for t in box.intersection_types if t.strip()]
    if intersection:
        return " & ".join(intersection)
    if box.properties:
        members = "; ".join(render_property(p).removesuffix(";") for p in box.properties)
        return "{ " + members + " }"
    return "unknown"


def _escape_comment(text: str) -> str:
    return _close_safe(" ".join(text.splitlines()))


def _close_safe(text: str) -> str:
    """Break up `*/` so *text* cannot end the surrounding comment early."""
    return text.replace("*/", "* /")
