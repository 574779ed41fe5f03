# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory graph store: the boundary between the editor UI and the core.

The store owns the schema graph and the selection. Every mutation is
synchronous and total: unknown ids turn an operation into a no-op, and the
graph invariant (``order`` lists exactly the ids in ``boxes``, each once) holds
after every call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from typecanvas.compiler.parser import parse_declarations
from typecanvas.compiler.serializer import render_batch
from typecanvas.model.entities import (
    BoxKind,
    Position,
    Property,
    SchemaGraph,
    TypeBoxModel,
    TypeBoxSkeleton,
)
from typecanvas.model.ids import now_ms
from typecanvas.model.types import PrimitiveType, PrimitiveTypeRef, TypeValue
from typecanvas.workspace.config import EditorConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class SchemaStore:
    """Mutable holder of a :class:`SchemaGraph` plus selection state.

    Attributes:
        config: Defaults used when creating boxes.
        selection: Ids of the selected boxes, in selection order.
        property_selection: Id of the property focused in the inspector, if any.
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig.default()
        self._graph = SchemaGraph()
        self.selection: list[str] = []
        self.property_selection: str | None = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def graph(self) -> SchemaGraph:
        """The underlying graph. Treat it as read-only; mutate through the store."""
        return self._graph

    def get_box(self, box_id: str) -> TypeBoxModel | None:
        """Return the box with *box_id*, or None."""
        return self._graph.boxes.get(box_id)

    def boxes(self) -> list[TypeBoxModel]:
        """Return all boxes in declaration order."""
        return self._graph.ordered_boxes()

    def custom_names(self, exclude: str | None = None) -> dict[str, str]:
        """Map box names to ids, for offering custom type references.

        Args:
            exclude: A box name to leave out, typically the box being edited.
        """
        return {box.name: box.id for box in self.boxes() if exclude is None or box.name != exclude}

    def id_to_name(self) -> dict[str, str]:
        """Map box ids to names, for displaying custom type references."""
        return {box.id: box.name for box in self.boxes()}

    # ------------------------------------------------------------------
    # Box mutations
    # ------------------------------------------------------------------

    def add_box(
        self,
        name: str | None = None,
        kind: BoxKind | str | None = None,
        properties: Iterable[Property | Mapping[str, Any]] | None = None,
    ) -> TypeBoxModel:
        """Create a box, append it to the declaration order and select it.

        Missing fields fall back to the configuration: the name to
        ``<prefix><count + 1>``, the kind to ``default_kind`` and the properties
        to ``default_properties``. Property mappings may carry a bare string
        ``type``, which is normalised to a primitive or custom reference.
        """
        if properties is None:
            props = self.config.make_default_properties()
        else:
            props = [p if isinstance(p, Property) else Property.model_validate(p) for p in properties]
        box = TypeBoxModel(
            name=name or f"{self.config.new_type_prefix}{len(self._graph.order) + 1}",
            kind=BoxKind(kind) if kind is not None else self.config.default_kind,
            properties=props,
        )
        self._insert(box)
        self.selection = [box.id]
        self.property_selection = None
        return box

    def insert_skeleton(self, skeleton: TypeBoxSkeleton) -> TypeBoxModel:
        """Turn a parsed skeleton into a box with a fresh id and insert it."""
        box = TypeBoxModel.model_validate(skeleton.model_dump(include=set(TypeBoxSkeleton.model_fields)))
        self._insert(box)
        return box

    def update_box(self, box_id: str, patch: Mapping[str, Any]) -> None:
        """Merge *patch* into the box and bump its ``updated_at``.

        ``id`` and ``created_at`` are never overwritten. No-op if the box does
        not exist.
        """
        box = self._graph.boxes.get(box_id)
        if box is None:
            return
        data = box.model_dump()
        data.update({key: value for key, value in patch.items() if key not in _PROTECTED_FIELDS})
        data["updated_at"] = now_ms()
        self._graph.boxes[box_id] = TypeBoxModel.model_validate(data)
        self._touch()

    def update_position(self, box_id: str, x: float, y: float) -> None:
        """Move a box on the canvas. No-op if the box does not exist."""
        box = self._graph.boxes.get(box_id)
        if box is None:
            return
        box.position = Position(x=x, y=y)
        box.updated_at = now_ms()
        self._touch()

    def remove_box(self, box_id: str) -> None:
        """Delete a box and drop it from the order and the selection."""
        self.remove_boxes([box_id])

    def remove_boxes(self, box_ids: Iterable[str]) -> None:
        """Delete several boxes at once. Unknown ids are ignored."""
        doomed = {box_id for box_id in box_ids if box_id in self._graph.boxes}
        if not doomed:
            return
        removed_props = {p.id for box_id in doomed for p in self._graph.boxes[box_id].properties}
        for box_id in doomed:
            del self._graph.boxes[box_id]
        self._graph.order = [box_id for box_id in self._graph.order if box_id not in doomed]
        self.selection = [box_id for box_id in self.selection if box_id not in doomed]
        if self.property_selection in removed_props:
            self.property_selection = None
        self._touch()

    # ------------------------------------------------------------------
    # Property mutations
    # ------------------------------------------------------------------

    def add_property(
        self,
        box_id: str,
        name: str = "field",
        type_value: TypeValue | str | None = None,
        optional: bool = False,
        readonly: bool = False,
    ) -> Property | None:
        """Append a property to a box. Returns None if the box does not exist."""
        box = self._graph.boxes.get(box_id)
        if box is None:
            return None
        prop = Property(
            name=name,
            type=type_value if type_value is not None else PrimitiveTypeRef(name=PrimitiveType.STRING),
            optional=optional,
            readonly=readonly,
        )
        self.update_box(box_id, {"properties": [*box.properties, prop]})
        return prop

    def update_property(self, box_id: str, property_id: str, patch: Mapping[str, Any]) -> None:
        """Merge *patch* into one property of a box. No-op if either id is unknown."""
        box = self._graph.boxes.get(box_id)
        if box is None or not any(p.id == property_id for p in box.properties):
            return
        changes = {key: value for key, value in patch.items() if key != "id"}
        properties = [
            Property.model_validate({**p.model_dump(), **changes}) if p.id == property_id else p
            for p in box.properties
        ]
        self.update_box(box_id, {"properties": properties})

    def remove_property(self, box_id: str, property_id: str) -> None:
        """Drop one property from a box. No-op if either id is unknown."""
        box = self._graph.boxes.get(box_id)
        if box is None or not any(p.id == property_id for p in box.properties):
            return
        self.update_box(box_id, {"properties": [p for p in box.properties if p.id != property_id]})
        if self.property_selection == property_id:
            self.property_selection = None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, box_id: str | None, additive: bool = False) -> None:
        """Change the box selection.

        ``None`` clears it. Without *additive* the box becomes the only
        selection and the property focus is reset; with *additive* the box is
        toggled in or out. Unknown ids are ignored.
        """
        if box_id is None:
            self.selection = []
            self.property_selection = None
            return
        if box_id not in self._graph.boxes:
            return
        if not additive:
            self.selection = [box_id]
            self.property_selection = None
        elif box_id in self.selection:
            self.selection = [s for s in self.selection if s != box_id]
        else:
            self.selection = [*self.selection, box_id]

    def select_property(self, property_id: str | None) -> None:
        """Focus a property in the inspector, or clear the focus with None."""
        self.property_selection = property_id

    # ------------------------------------------------------------------
    # Source text
    # ------------------------------------------------------------------

    def import_source(self, text: str) -> list[TypeBoxModel]:
        """Parse every supported declaration in *text* and add it as a box.

        Unsupported blocks are skipped. The caller reports ``len()`` of the
        result to the user.
        """
        created = [self.insert_skeleton(skeleton) for skeleton in parse_declarations(text)]
        logger.debug("Imported %d type box(es) from source", len(created))
        return created

    def export_source(self, box_ids: Iterable[str] | None = None) -> str:
        """Render boxes in declaration order, optionally restricted to *box_ids*."""
        if box_ids is None:
            return render_batch(self.boxes())
        wanted = set(box_ids)
        return render_batch(box for box in self.boxes() if box.id in wanted)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, box: TypeBoxModel) -> None:
        self._graph.boxes[box.id] = box
        self._graph.order.append(box.id)
        self._touch()

    def _touch(self) -> None:
        self._graph.version += 1
        self._graph.updated_at = now_ms()


# ################
# Implementation
# ################

_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})
