"""Declarative filtering of JSON record arrays.

A `DataFilter` holds one `FilterConfiguration`: the field paths to return and
the predicates every record has to satisfy (logical AND). Records are only
read; projected output is built from fresh dicts.

    data_filter = DataFilter().configure(
        ["user.name", "user.details.city"],
        [{"condition": "contains", "key": "user.details.city", "value": "New York"}],
    )
    data_filter.filter(records)

`DataFilter` is a mutable builder: `configure` and `add_predicate` change the
held configuration and return the same instance. Give every filtering task its
own instance rather than sharing one across threads.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Real
from typing import Any

from e2eharness.core.keypaths import MISSING, get_path, set_path
from e2eharness.core.logs import get_logger

logger = get_logger(__name__)


class FilterCondition(str, Enum):
    CONTAINS = "contains"
    EXACTLY = "exactly"
    EXCLUDE = "exclude"
    INCLUDE = "include"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    RANGE = "range"


class FilterError(RuntimeError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Filtering error: {cause}")
        self.cause = cause


@dataclass(frozen=True)
class Predicate:
    condition: str
    key: str
    value: Any = None

    @classmethod
    def coerce(cls, criterion: Any) -> Predicate:
        """Accept a Predicate, a `{condition, key, value}` mapping or a tuple."""
        if isinstance(criterion, Predicate):
            return criterion
        if isinstance(criterion, Mapping):
            return cls(criterion.get("condition"), criterion.get("key"), criterion.get("value"))
        if isinstance(criterion, (str, bytes)) or not isinstance(criterion, Iterable):
            raise TypeError(f"Criterion must be a mapping or a (condition, key, value) tuple, got {criterion!r}")
        return cls(*criterion)


@dataclass(frozen=True)
class FilterConfiguration:
    projection: tuple[str, ...] = ()
    predicates: tuple[Predicate, ...] = ()
    wrapper_key: str | None = None

    def with_predicate(self, predicate: Predicate) -> FilterConfiguration:
        return replace(self, predicates=(*self.predicates, predicate))

    def with_projection(self, projection: Iterable[str]) -> FilterConfiguration:
        return replace(self, projection=_as_projection(projection))


def _as_projection(keys: Any) -> tuple[str, ...]:
    if isinstance(keys, str):
        return (keys,)
    return tuple(keys)


def _kind(value: Any) -> str:
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Real):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence):
        return "array"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _strictly_equal(left: Any, right: Any) -> bool:
    return _kind(left) == _kind(right) and left == right


def _range_bounds(value: Any) -> tuple[Any, Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
        raise ValueError(f"range condition expects a [min, max] pair, got {value!r}")
    return value[0], value[1]


def validate(configuration: FilterConfiguration) -> None:
    """Reject configurations that cannot be evaluated."""
    for key in configuration.projection:
        if not isinstance(key, str):
            raise TypeError(f"Projection keys must be strings, got {key!r}")
    for predicate in configuration.predicates:
        condition = FilterCondition(predicate.condition)
        if condition is FilterCondition.RANGE:
            _range_bounds(predicate.value)


def evaluate(record: Any, predicate: Predicate) -> bool:
    """Evaluate one predicate. Type mismatches are False, never errors."""
    condition = FilterCondition(predicate.condition)
    actual = get_path(record, predicate.key)
    expected = predicate.value

    if condition is FilterCondition.CONTAINS:
        return isinstance(actual, str) and isinstance(expected, str) and expected in actual
    if condition is FilterCondition.EXACTLY:
        return _strictly_equal(actual, expected)
    if condition is FilterCondition.EXCLUDE:
        return not _strictly_equal(actual, expected)
    if condition is FilterCondition.INCLUDE:
        return actual is not MISSING
    if condition is FilterCondition.GREATER_THAN:
        return _is_number(actual) and _is_number(expected) and actual > expected
    if condition is FilterCondition.LESS_THAN:
        return _is_number(actual) and _is_number(expected) and actual < expected
    # RANGE
    low, high = _range_bounds(expected)
    return _is_number(actual) and _is_number(low) and _is_number(high) and low <= actual <= high


class DataFilter:
    def __init__(self, configuration: FilterConfiguration | None = None) -> None:
        self.configuration = configuration or FilterConfiguration()

    @property
    def keys_to_return(self) -> tuple[str, ...]:
        return self.configuration.projection

    @property
    def criteria(self) -> tuple[Predicate, ...]:
        return self.configuration.predicates

    def configure(
        self,
        keys_to_return: Iterable[str],
        criteria: Iterable[Any] = (),
        *,
        wrapper_key: str | None = None,
    ) -> DataFilter:
        """Replace the projection and the predicate list."""
        try:
            predicates = tuple(Predicate.coerce(criterion) for criterion in criteria)
            self.configuration = FilterConfiguration(
                projection=_as_projection(keys_to_return),
                predicates=predicates,
                wrapper_key=wrapper_key,
            )
        except (TypeError, ValueError) as exc:
            raise FilterError(exc) from exc
        return self

    def add_predicate(self, condition: str, key: str, value: Any = None) -> DataFilter:
        self.configuration = self.configuration.with_predicate(Predicate(condition, key, value))
        return self

    add_criteria = add_predicate

    def matches(self, record: Any) -> bool:
        return all(evaluate(record, predicate) for predicate in self.configuration.predicates)

    def project(self, record: Any) -> dict:
        result: dict = {}
        wrapper = self.configuration.wrapper_key
        for key in self.configuration.projection:
            value = get_path(record, key)
            if value is MISSING:
                continue
            target = result.setdefault(wrapper, {}) if wrapper else result
            set_path(target, key, copy.deepcopy(value))
        return result

    def filter(self, records: Iterable[Any]) -> list[dict]:
        """Return the projected records passing every predicate, in input order.

        Fails as a whole with FilterError; no partial list is returned.
        """
        try:
            if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
                raise TypeError(f"records must be a sequence of records, got {type(records).__name__}")
            validate(self.configuration)
            items = list(records)
            kept = [self.project(item) for item in items if self.matches(item)]
        except Exception as exc:
            logger.error("filter.failed", error=str(exc))
            raise FilterError(exc) from exc
        logger.debug("filter.done", total=len(items), kept=len(kept))
        return kept
