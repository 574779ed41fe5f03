# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the TypeCanvas semantic model and display labels."""

import pytest
from pydantic import ValidationError

from typecanvas.model import (
    BoxKind,
    BuiltInType,
    BuiltInTypeRef,
    CustomTypeRef,
    IntersectionTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    Property,
    SchemaGraph,
    TypeBoxModel,
    TypeBoxSkeleton,
    UnionTypeRef,
    label_of,
    make_leaf_type,
    new_id,
)

# ###############
# Test Helpers
# ###############


def _p(name: str) -> PrimitiveTypeRef:
    return PrimitiveTypeRef(name=PrimitiveType(name))


def _c(name: str) -> CustomTypeRef:
    return CustomTypeRef(name=name)


def _b(name: BuiltInType, *args) -> BuiltInTypeRef:
    return BuiltInTypeRef(name=name, generic_args=list(args))


# ###############
# Type Values
# ###############


class TestTypeValues:
    def test_primitive_ref_holds_enum(self) -> None:
        ref = _p("number")
        assert ref.kind == "primitive"
        assert ref.name == PrimitiveType.NUMBER

    def test_builtin_defaults_to_no_args(self) -> None:
        ref = BuiltInTypeRef(name=BuiltInType.MAP)
        assert ref.generic_args == []

    def test_discriminated_union_validates_from_dict(self) -> None:
        prop = Property.model_validate(
            {
                "name": "tags",
                "type": {"kind": "builtIn", "name": "Array", "generic_args": [{"kind": "primitive", "name": "string"}]},
            }
        )
        assert isinstance(prop.type, BuiltInTypeRef)
        assert prop.type.generic_args == [_p("string")]

    def test_unknown_kind_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Property.model_validate({"name": "x", "type": {"kind": "function"}})

    def test_make_leaf_type_primitive(self) -> None:
        assert make_leaf_type("boolean") == _p("boolean")

    def test_make_leaf_type_custom(self) -> None:
        assert make_leaf_type("User") == _c("User")


# ###############
# Labels
# ###############


class TestLabelOf:
    def test_primitive_and_custom(self) -> None:
        assert label_of(_p("string")) == "string"
        assert label_of(_c("User")) == "User"

    def test_union(self) -> None:
        assert label_of(UnionTypeRef(types=[_p("string"), _p("null")])) == "string | null"

    def test_intersection(self) -> None:
        assert label_of(IntersectionTypeRef(types=[_c("A"), _c("B")])) == "A & B"

    def test_union_inside_intersection_is_parenthesised(self) -> None:
        t = IntersectionTypeRef(types=[UnionTypeRef(types=[_c("A"), _c("B")]), _c("C")])
        assert label_of(t) == "(A | B) & C"

    def test_empty_union_is_unknown(self) -> None:
        assert label_of(UnionTypeRef()) == "unknown"

    def test_array_variants(self) -> None:
        assert label_of(_b(BuiltInType.ARRAY)) == "any[]"
        assert label_of(_b(BuiltInType.ARRAY, _p("number"))) == "number[]"
        assert label_of(_b(BuiltInType.ARRAY, _p("number"), _c("User"))) == "(number | User)[]"

    def test_array_of_union_is_parenthesised(self) -> None:
        t = _b(BuiltInType.ARRAY, UnionTypeRef(types=[_p("string"), _p("number")]))
        assert label_of(t) == "(string | number)[]"

    def test_nested_array(self) -> None:
        assert label_of(_b(BuiltInType.ARRAY, _b(BuiltInType.ARRAY, _p("number")))) == "number[][]"

    def test_tuple(self) -> None:
        assert label_of(_b(BuiltInType.TUPLE, _p("string"), _p("number"))) == "[string, number]"
        assert label_of(_b(BuiltInType.TUPLE)) == "[]"

    def test_set_defaults(self) -> None:
        assert label_of(_b(BuiltInType.SET)) == "Set<unknown>"
        assert label_of(_b(BuiltInType.SET, _c("Tag"))) == "Set<Tag>"

    def test_map_defaults(self) -> None:
        assert label_of(_b(BuiltInType.MAP)) == "Map<unknown, unknown>"
        assert label_of(_b(BuiltInType.MAP, _p("string"))) == "Map<string, unknown>"

    def test_object_defaults(self) -> None:
        assert label_of(_b(BuiltInType.OBJECT)) == "Record<string, unknown>"
        assert label_of(_b(BuiltInType.OBJECT, _p("number"), _c("User"))) == "Record<number, User>"

    def test_generic(self) -> None:
        assert label_of(_b(BuiltInType.GENERIC)) == "Generic"
        assert label_of(_b(BuiltInType.GENERIC, _c("T"))) == "Generic<T>"


# ###############
# Entities
# ###############


class TestEntities:
    def test_property_defaults(self) -> None:
        prop = Property(name="id", type=_p("string"))
        assert prop.id
        assert prop.optional is False
        assert prop.readonly is False
        assert prop.comment is None

    def test_property_ids_are_unique(self) -> None:
        ids = {Property(name="a", type=_p("string")).id for _ in range(50)}
        assert len(ids) == 50

    def test_legacy_string_type_is_normalised(self) -> None:
        assert Property(name="a", type="number").type == _p("number")
        assert Property(name="b", type="Address").type == _c("Address")

    def test_skeleton_defaults(self) -> None:
        box = TypeBoxSkeleton(name="User")
        assert box.kind == BoxKind.TYPE
        assert box.properties == []
        assert box.extends == []
        assert box.union_types == []
        assert box.intersection_types == []

    def test_box_model_gets_id_and_timestamps(self) -> None:
        box = TypeBoxModel(name="User", kind=BoxKind.INTERFACE)
        assert box.id
        assert box.position.x == 0 and box.position.y == 0
        assert box.created_at <= box.updated_at

    def test_new_id_prefix(self) -> None:
        assert new_id().startswith("_")
        assert new_id("box-").startswith("box-")


class TestSchemaGraph:
    def test_empty_graph_is_consistent(self) -> None:
        assert SchemaGraph().is_consistent()

    def test_order_must_match_boxes(self) -> None:
        box = TypeBoxModel(name="A")
        graph = SchemaGraph(boxes={box.id: box}, order=[])
        assert not graph.is_consistent()

    def test_duplicate_order_is_inconsistent(self) -> None:
        box = TypeBoxModel(name="A")
        graph = SchemaGraph(boxes={box.id: box}, order=[box.id, box.id])
        assert not graph.is_consistent()

    def test_ordered_boxes(self) -> None:
        a, b = TypeBoxModel(name="A"), TypeBoxModel(name="B")
        graph = SchemaGraph(boxes={a.id: a, b.id: b}, order=[b.id, a.id])
        assert [box.name for box in graph.ordered_boxes()] == ["B", "A"]
