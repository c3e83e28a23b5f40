from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Final

_INDEX_RE = re.compile(r"\[([0-9]+)\]")


class _Missing:
    """Marker for a path that does not resolve. JSON null resolves to None."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_index(part: str) -> bool:
    # str.isdigit alone accepts "²" and other digits int() rejects.
    return part.isascii() and part.isdigit()


def split_path(path: str) -> list[str]:
    """Split `a.b[0].c` into `["a", "b", "0", "c"]`."""
    return _INDEX_RE.sub(r".\1", path).split(".")


def get_path(obj: Any, path: Any, default: Any = MISSING) -> Any:
    """Resolve a dotted path inside nested mappings and sequences.

    Never raises: an empty or non-string path, an empty segment, a missing key,
    an out-of-range index or a scalar in the middle of the path all return
    `default`.
    """
    if not isinstance(path, str) or not path:
        return default
    current = obj
    for part in split_path(path):
        if not part:
            return default
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif _is_sequence(current):
            if not _is_index(part):
                return default
            index = int(part)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def _child(container: Any, part: str) -> Any:
    if isinstance(container, dict):
        return container.get(part, MISSING)
    if isinstance(container, list) and _is_index(part) and int(part) < len(container):
        return container[int(part)]
    return MISSING


def set_path(target: dict, path: str, value: Any) -> None:
    """Write `value` at a dotted path, merging into containers already there.

    Dicts are reused by key and lists by in-range index. Nothing already
    written is replaced by a new container: when a segment lands on a scalar
    or outside a list, the write is dropped.
    """
    parts = split_path(path)
    current: Any = target
    for part in parts[:-1]:
        nxt = _child(current, part)
        if nxt is MISSING:
            if not isinstance(current, dict):
                return
            nxt = {}
            current[part] = nxt
        elif not isinstance(nxt, (dict, list)):
            return
        current = nxt
    last = parts[-1]
    if isinstance(current, dict):
        current[last] = value
    elif isinstance(current, list) and _is_index(last) and int(last) < len(current):
        current[int(last)] = value


def flatten(obj: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings and lists into `{"a.b.0": leaf}`."""
    flat: dict[str, Any] = {}

    def walk(node: Any, key: str) -> None:
        if isinstance(node, Mapping):
            children = [(str(k), v) for k, v in node.items()]
        elif _is_sequence(node):
            children = [(str(i), v) for i, v in enumerate(node)]
        else:
            flat[key] = node
            return
        for child_key, child in children:
            walk(child, f"{key}.{child_key}" if key else child_key)

    walk(obj, prefix)
    return flat


def leaf_texts(obj: Any) -> list[str]:
    return [str(value) for value in flatten(obj).values() if value is not None]
