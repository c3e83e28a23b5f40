from __future__ import annotations

from e2eharness.core.filtering import FilterCondition

# Shape of the filter config files read by `e2eharness filter run`.
FILTER_CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["keys_to_return"],
    "additionalProperties": False,
    "properties": {
        "keys_to_return": {
            "oneOf": [
                {"type": "string"},
                {"type": "array", "items": {"type": "string"}},
            ]
        },
        "criteria": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["condition", "key"],
                "additionalProperties": False,
                "properties": {
                    "condition": {"enum": [c.value for c in FilterCondition]},
                    "key": {"type": "string"},
                    "value": {},
                },
            },
        },
        "wrapper_key": {"type": ["string", "null"]},
    },
}
