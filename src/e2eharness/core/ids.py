from __future__ import annotations

import os
import re

import ulid

RUN_ID_RE = re.compile(r"^run_[0-9A-Z]{26}$")

_CURRENT_RUN_ID: str | None = None


def run_id() -> str:
    return f"run_{ulid.new()}"


def current_run_id() -> str:
    """One id per process, so every artifact of a test run lands in one folder.

    `E2E_RUN_ID` pins it (CI jobs, reruns).
    """
    global _CURRENT_RUN_ID
    override = os.environ.get("E2E_RUN_ID")
    if override:
        return override
    if _CURRENT_RUN_ID is None:
        _CURRENT_RUN_ID = run_id()
    return _CURRENT_RUN_ID


def reset_current_run_id() -> None:
    global _CURRENT_RUN_ID
    _CURRENT_RUN_ID = None


def is_run_id(value: str) -> bool:
    return bool(RUN_ID_RE.fullmatch(value))


def unique_email(local_part: str, domain: str = "example.com") -> str:
    slug = re.sub(r"[^a-z0-9]+", ".", local_part.strip().lower()).strip(".") or "user"
    return f"{slug}+{str(ulid.new()).lower()}@{domain}"
