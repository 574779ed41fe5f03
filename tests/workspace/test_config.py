# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the editor configuration module."""

from pathlib import Path

import pytest

from typecanvas.model.entities import BoxKind
from typecanvas.workspace import (
    CONFIG_FILE_NAME,
    EditorConfig,
    EditorConfigError,
    load_editor_config,
    parse_editor_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write an editor config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """All supported fields are read from the file."""
    content = """\
new-type-prefix: Entity
default-kind: interface
default-properties:
  - "id: string"
  - "readonly createdAt?: number"
"""
    config = load_editor_config(_write_config(tmp_path, content))

    assert config.new_type_prefix == "Entity"
    assert config.default_kind == BoxKind.INTERFACE
    assert config.default_properties == ["id: string", "readonly createdAt?: number"]


def test_partial_config_keeps_defaults(tmp_path: Path) -> None:
    """Fields missing from the file keep their built-in values."""
    config = load_editor_config(_write_config(tmp_path, "new-type-prefix: Model\n"))

    assert config.new_type_prefix == "Model"
    assert config.default_kind == BoxKind.TYPE
    assert config.default_properties == ["id: string", "name: string"]


def test_empty_document_yields_defaults() -> None:
    """An empty file is the same as no configuration."""
    assert parse_editor_config("") == EditorConfig.default()


def test_empty_default_properties() -> None:
    """An explicit empty list disables seeded properties."""
    config = parse_editor_config("default-properties: []\n")
    assert config.make_default_properties() == []


def test_make_default_properties() -> None:
    """Seeded properties are parsed from their signatures and get fresh ids."""
    config = parse_editor_config('default-properties: ["readonly tags?: string[]"]\n')

    first, second = config.make_default_properties(), config.make_default_properties()
    prop = first[0]
    assert prop.name == "tags"
    assert prop.optional
    assert prop.readonly
    assert first[0].id != second[0].id


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """A missing file raises EditorConfigError."""
    with pytest.raises(EditorConfigError, match="not found"):
        load_editor_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml() -> None:
    """Malformed YAML raises EditorConfigError."""
    with pytest.raises(EditorConfigError, match="Invalid YAML"):
        parse_editor_config("new-type-prefix: [unclosed\n")


def test_not_a_mapping() -> None:
    """A top-level list is rejected."""
    with pytest.raises(EditorConfigError, match="must be a YAML mapping"):
        parse_editor_config("- a\n- b\n")


def test_unknown_field() -> None:
    """Unknown keys are reported by name."""
    with pytest.raises(EditorConfigError, match="unknown field.*build-directory"):
        parse_editor_config("build-directory: out\n")


def test_prefix_must_be_string() -> None:
    """A non-string prefix is rejected."""
    with pytest.raises(EditorConfigError, match="'new-type-prefix' must be a string"):
        parse_editor_config("new-type-prefix: 42\n")


def test_invalid_kind() -> None:
    """An unknown kind lists the allowed values."""
    with pytest.raises(EditorConfigError, match="must be one of interface, type, enum, alias"):
        parse_editor_config("default-kind: class\n")


def test_default_properties_must_be_list() -> None:
    """A scalar property list is rejected."""
    with pytest.raises(EditorConfigError, match="must be a list"):
        parse_editor_config("default-properties: 'id: string'\n")


def test_default_property_must_be_signature() -> None:
    """Entries that do not parse as property signatures are rejected with their index."""
    with pytest.raises(EditorConfigError, match=r"default-properties\[1\]: not a property signature"):
        parse_editor_config("default-properties:\n  - 'id: string'\n  - 'greet(): void'\n")


def test_error_mentions_source(tmp_path: Path) -> None:
    """Errors raised while loading a file name that file."""
    path = _write_config(tmp_path, "default-kind: class\n")
    with pytest.raises(EditorConfigError, match=CONFIG_FILE_NAME):
        load_editor_config(path)
