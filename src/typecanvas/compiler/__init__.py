# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source text synchronisation: rendering boxes to text and parsing them back."""

from typecanvas.compiler.parser import (
    parse_box,
    parse_declarations,
    parse_property_line,
    parse_type,
    split_declarations,
    split_top_level,
    split_top_level_commas,
)
from typecanvas.compiler.serializer import render_batch, render_box, render_property, render_type

__all__ = [
    "parse_box",
    "parse_declarations",
    "parse_property_line",
    "parse_type",
    "split_declarations",
    "split_top_level",
    "split_top_level_commas",
    "render_batch",
    "render_box",
    "render_property",
    "render_type",
]
