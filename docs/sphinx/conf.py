# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for TypeCanvas documentation."""

project = "TypeCanvas"
author = "TypeCanvas Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
