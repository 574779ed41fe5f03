# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier and timestamp helpers for boxes and properties."""

import time
import uuid

# ###############
# Public Interface
# ###############

DEFAULT_ID_PREFIX = "_"


def new_id(prefix: str = DEFAULT_ID_PREFIX) -> str:
    """Return a fresh identifier, unique for the lifetime of the process.

    The random part is a UUID4 in hex form, so collisions are not a practical
    concern even across graphs.
    """
    return f"{prefix}{uuid.uuid4().hex}"


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
