# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph store driven by the editor UI and by parsed source text."""

from typecanvas.store.graph import SchemaStore

__all__ = [
    "SchemaStore",
]
