from __future__ import annotations

from typing import Final

# CLI errors carry a typed id so callers can branch without parsing messages.
# Grow this list only when a command actually emits a new type.
KNOWN_ERROR_TYPES: Final[set[str]] = {
    "BACKEND_FAILED",
    "CONFIG_INVALID",
    "FILTER_FAILED",
    "INVALID_ARGUMENT",
    "NOT_FOUND",
    "TOOL_MISSING",
}


def assert_known_error_type(error_type: str) -> None:
    if error_type not in KNOWN_ERROR_TYPES:
        raise ValueError(
            f"Unknown error type: {error_type!r}. Add it to e2eharness.core.error_types.KNOWN_ERROR_TYPES."
        )
