# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the TypeCanvas editor configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from typecanvas.compiler.parser import parse_property_line
from typecanvas.model.entities import BoxKind, Property

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".typecanvas.yaml"

DEFAULT_NEW_TYPE_PREFIX = "NewType"
DEFAULT_PROPERTY_LINES = ("id: string", "name: string")


class EditorConfigError(Exception):
    """Raised when an editor configuration file is invalid or cannot be loaded."""


@dataclass
class EditorConfig:
    """Defaults applied by the graph store when creating new boxes.

    Attributes:
        new_type_prefix: Prefix of generated box names (``NewType1``, ``NewType2``, ...).
        default_kind: Kind given to boxes created without an explicit kind.
        default_properties: Property signatures seeded into boxes created
            without properties, e.g. ``"id: string"``.
    """

    new_type_prefix: str = DEFAULT_NEW_TYPE_PREFIX
    default_kind: BoxKind = BoxKind.TYPE
    default_properties: list[str] = field(default_factory=lambda: list(DEFAULT_PROPERTY_LINES))

    @classmethod
    def default(cls) -> EditorConfig:
        """Return the built-in defaults."""
        return cls()

    def make_default_properties(self) -> list[Property]:
        """Build fresh properties (with fresh ids) from ``default_properties``."""
        properties: list[Property] = []
        for line in self.default_properties:
            prop = parse_property_line(line)
            if prop is not None:
                properties.append(prop)
        return properties


def load_editor_config(path: Path) -> EditorConfig:
    """Load and parse a TypeCanvas editor configuration file.

    Args:
        path: Path to the ``.typecanvas.yaml`` file.

    Returns:
        An EditorConfig instance populated from the file.

    Raises:
        EditorConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise EditorConfigError(f"Editor config file not found: {path}") from None
    except OSError as exc:
        raise EditorConfigError(f"Cannot read editor config file: {exc}") from exc

    return parse_editor_config(text, source_label=str(path))


def parse_editor_config(text: str, source_label: str = "<string>") -> EditorConfig:
    """Parse editor config YAML text into an EditorConfig.

    An empty document yields the defaults.

    Raises:
        EditorConfigError: If the YAML is invalid or a field has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise EditorConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return EditorConfig.default()
    if not isinstance(data, dict):
        raise EditorConfigError(f"{source_label}: editor config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise EditorConfigError(f"{source_label}: unknown field(s): {', '.join(map(str, unknown))}")

    config = EditorConfig.default()
    if "new-type-prefix" in data:
        config.new_type_prefix = _require_string(data, "new-type-prefix", source_label)
    if "default-kind" in data:
        config.default_kind = _parse_kind(_require_string(data, "default-kind", source_label), source_label)
    if "default-properties" in data:
        config.default_properties = _parse_property_lines(data["default-properties"], source_label)
    return config


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"new-type-prefix", "default-kind", "default-properties"})


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising EditorConfigError on a wrong type."""
    value = mapping[key]
    if not isinstance(value, str):
        raise EditorConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _parse_kind(value: str, source_label: str) -> BoxKind:
    try:
        return BoxKind(value)
    except ValueError:
        allowed = ", ".join(k.value for k in BoxKind)
        raise EditorConfigError(f"{source_label}: 'default-kind' must be one of {allowed}, got {value!r}") from None


def _parse_property_lines(raw: object, source_label: str) -> list[str]:
    if not isinstance(raw, list):
        raise EditorConfigError(f"{source_label}: 'default-properties' must be a list")
    lines: list[str] = []
    for index, entry in enumerate(raw):
        location = f"{source_label}: default-properties[{index}]"
        if not isinstance(entry, str):
            raise EditorConfigError(f"{location} must be a string")
        if parse_property_line(entry) is None:
            raise EditorConfigError(f"{location}: not a property signature: {entry!r}")
        lines.append(entry)
    return lines
