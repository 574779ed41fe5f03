# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for TypeCanvas (type values, properties, boxes, graph)."""

from typecanvas.model.entities import (
    BoxKind,
    Position,
    Property,
    SchemaGraph,
    TypeBoxModel,
    TypeBoxSkeleton,
)
from typecanvas.model.ids import new_id, now_ms
from typecanvas.model.types import (
    BuiltInType,
    BuiltInTypeRef,
    CustomTypeRef,
    IntersectionTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    TypeValue,
    UnionTypeRef,
    label_of,
    make_leaf_type,
)

__all__ = [
    # Type values
    "PrimitiveType",
    "BuiltInType",
    "PrimitiveTypeRef",
    "CustomTypeRef",
    "UnionTypeRef",
    "IntersectionTypeRef",
    "BuiltInTypeRef",
    "TypeValue",
    "label_of",
    "make_leaf_type",
    # Entities
    "BoxKind",
    "Position",
    "Property",
    "TypeBoxSkeleton",
    "TypeBoxModel",
    "SchemaGraph",
    # Helpers
    "new_id",
    "now_ms",
]
