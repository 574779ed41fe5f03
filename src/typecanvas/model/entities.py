# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type boxes, properties and the schema graph."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator
from pydantic import Field as _Field

from typecanvas.model.ids import new_id, now_ms
from typecanvas.model.types import TypeValue, make_leaf_type

# ###############
# Public Interface
# ###############


class BoxKind(Enum):
    """Declaration kinds a type box can take."""

    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    ALIAS = "alias"


class Property(BaseModel):
    """A named, typed member of a type box.

    A bare string ``type`` is accepted for compatibility with older models and
    is normalised to a primitive or custom reference.
    """

    id: str = _Field(default_factory=new_id)
    name: str
    type: TypeValue
    optional: bool = False
    readonly: bool = False
    comment: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_legacy_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return make_leaf_type(value)
        return value


class Position(BaseModel):
    """Canvas coordinates of a box. Carries no meaning for the core."""

    x: float = 0
    y: float = 0


class TypeBoxSkeleton(BaseModel):
    """The parts of a type box that source text can describe.

    The parser produces skeletons; the graph store turns them into full
    :class:`TypeBoxModel` instances by assigning an id and a position.
    """

    name: str
    kind: BoxKind = BoxKind.TYPE
    properties: list[Property] = _Field(default_factory=list)
    extends: list[str] = _Field(default_factory=list)
    union_types: list[str] = _Field(default_factory=list)
    intersection_types: list[str] = _Field(default_factory=list)
    comment: str | None = None


class TypeBoxModel(TypeBoxSkeleton):
    """A type box placed in the schema graph."""

    id: str = _Field(default_factory=new_id)
    position: Position = _Field(default_factory=Position)
    created_at: int = _Field(default_factory=now_ms)
    updated_at: int = _Field(default_factory=now_ms)


class SchemaGraph(BaseModel):
    """All boxes of an editing session plus their declaration order.

    Attributes:
        boxes: Mapping of box id to box.
        order: Render and declaration order of box ids.
        version: Revision counter, bumped by every effective mutation.
        updated_at: Time of the last mutation in milliseconds.
    """

    boxes: dict[str, TypeBoxModel] = _Field(default_factory=dict)
    order: list[str] = _Field(default_factory=list)
    version: int = 1
    updated_at: int = _Field(default_factory=now_ms)

    def ordered_boxes(self) -> list[TypeBoxModel]:
        """Return the boxes in declaration order."""
        return [self.boxes[box_id] for box_id in self.order]

    def is_consistent(self) -> bool:
        """Return True if `order` lists exactly the ids in `boxes`, each once."""
        return len(self.order) == len(set(self.order)) and set(self.order) == set(self.boxes)
