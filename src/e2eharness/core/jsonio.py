from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict


def dumps(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True, default=str) + "\n"


def loads_lenient(value: str) -> Any:
    """Parse JSON when possible, otherwise hand back the raw string."""
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def read_json(path: str | Path) -> Any:
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}: {exc}") from exc
