from __future__ import annotations

import os
from pathlib import Path

from e2eharness.core import config as config_core, ids

DEFAULT_ARTIFACTS_DIR = Path("artifacts")
ARTIFACT_SUBDIRS = ("downloads", "screenshots", "reports")


def artifacts_dir() -> Path:
    override = os.environ.get("E2E_ARTIFACTS_DIR")
    return Path(override).expanduser() if override else DEFAULT_ARTIFACTS_DIR


def ensure_artifacts() -> Path:
    root = artifacts_dir()
    root.mkdir(parents=True, exist_ok=True)
    for subdir in ARTIFACT_SUBDIRS:
        (root / subdir).mkdir(parents=True, exist_ok=True)
    return root


def resolve_in_artifacts(path: str | Path) -> Path:
    root = ensure_artifacts().resolve()
    candidate = Path(path).expanduser()
    resolved = candidate.resolve() if candidate.is_absolute() else (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"path escapes artifacts dir: {path}")
    return resolved


def download_dir(run_id: str | None = None) -> Path:
    configured = config_core.load_browser_settings().download_dir
    if configured:
        target = Path(configured).expanduser()
    else:
        target = ensure_artifacts() / "downloads" / (run_id or ids.current_run_id())
    target.mkdir(parents=True, exist_ok=True)
    return target
