# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Editor configuration for TypeCanvas."""

from typecanvas.workspace.config import (
    CONFIG_FILE_NAME,
    EditorConfig,
    EditorConfigError,
    load_editor_config,
    parse_editor_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "EditorConfig",
    "EditorConfigError",
    "load_editor_config",
    "parse_editor_config",
]
