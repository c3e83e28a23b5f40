from __future__ import annotations

import os
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current time in UTC.

    Tests can override via `E2E_TEST_NOW_ISO` to make time-based output deterministic.
    """
    override = os.environ.get("E2E_TEST_NOW_ISO")
    if override:
        return parse_utc_iso(override)
    return datetime.now(timezone.utc)


def parse_utc_iso(s: str) -> datetime:
    """Parse an ISO-8601 timestamp into a UTC datetime.

    Accepts either an explicit offset (e.g. `...+00:00`) or `Z`.
    """
    if s.endswith("Z"):
        s = f"{s[:-1]}+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        raise ValueError("Timestamp must be timezone-aware (include +00:00 or Z)")
    return dt.astimezone(timezone.utc)


def date_from_epoch(epoch_ms: object) -> str:
    """Format epoch milliseconds as `dd/mm/yyyy` (UTC). Invalid input gives ""."""
    if isinstance(epoch_ms, bool) or not isinstance(epoch_ms, (int, float)):
        return ""
    try:
        dt = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return dt.strftime("%d/%m/%Y")
