"""Small helpers shared by step definitions and page objects."""

from __future__ import annotations

import math
import shutil
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from pathlib import Path
from typing import Any, Sequence

from e2eharness.core.clock import date_from_epoch
from e2eharness.core.logs import get_logger

logger = get_logger(__name__)

__all__ = [
    "ValueOutOfRangeError",
    "capitalize_first_word",
    "char_wrap",
    "date_from_epoch",
    "find_min_and_max_value",
    "replace_all",
    "rmdir",
    "round_of_decimal",
    "round_to_nearest_tenth_or_int",
    "transform_table",
    "verify_value_in_between",
]


class ValueOutOfRangeError(AssertionError):
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def rmdir(path: str | Path) -> None:
    target = Path(path)
    if not target.exists():
        logger.error("rmdir.not_found", path=str(target))
        return
    shutil.rmtree(target)


def replace_all(text: Any, term: str, replacement: str) -> str:
    if not isinstance(text, str):
        logger.error("replace_all.invalid_input", value=repr(text))
        return ""
    return text.replace(term, replacement)


def round_of_decimal(value: Any, places: Any) -> str:
    """Round half-up and format with thousands separators: 1234.567, 2 -> "1,234.57"."""
    if not _is_number(value) or not isinstance(places, int) or isinstance(places, bool) or places < 0:
        logger.error("round_of_decimal.invalid_input", value=repr(value), places=repr(places))
        return ""
    try:
        quantized = Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.error("round_of_decimal.invalid_input", value=repr(value), places=repr(places))
        return ""
    return f"{quantized:,.{places}f}"


def verify_value_in_between(value: Any, minimum: Any, maximum: Any, is_find_budget: bool = False) -> bool:
    if not (_is_number(value) and _is_number(minimum) and _is_number(maximum)):
        logger.error("verify_value_in_between.invalid_input", value=repr(value), min=repr(minimum), max=repr(maximum))
        return False
    if value < minimum or value > maximum:
        if is_find_budget:
            return False
        raise ValueOutOfRangeError(f"Value ({value}) is not between {minimum} and {maximum}.")
    logger.debug("verify_value_in_between.ok", value=value, min=minimum, max=maximum)
    return True


def find_min_and_max_value(value: Any, percentage: Any) -> dict[str, int | None]:
    if not (_is_number(value) and _is_number(percentage)) or percentage < 0:
        logger.error("find_min_and_max_value.invalid_input", value=repr(value), percentage=repr(percentage))
        return {"min": None, "max": None}
    delta = percentage / 100 * value
    return {"min": _round_half_up(value - delta), "max": _round_half_up(value + delta)}


def char_wrap(text: Any, length: Any, include_ellipsis: bool = False) -> str:
    if not isinstance(text, str) or not isinstance(length, int) or length < 0:
        logger.error("char_wrap.invalid_input", text=repr(text), length=repr(length))
        return ""
    if len(text) <= length:
        return text
    return f"{text[:length]}..." if include_ellipsis else text[:length]


def transform_table(datatable: Sequence[Sequence[Any]] | None) -> list[dict[str, Any]]:
    """Turn a step data table (header row first) into one dict per row."""
    if not datatable:
        logger.error("transform_table.invalid_table")
        return []
    headers, *rows = datatable
    return [dict(zip(headers, row)) for row in rows]


def round_to_nearest_tenth_or_int(num: float) -> float | str:
    rounded = _round_half_up(num)
    if rounded == 0:
        return float(Decimal(str(num)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return f"{rounded:,}"


def capitalize_first_word(text: str) -> str:
    return text[:1].upper() + text[1:].lower()
