"""Offline steps that drive `DataFilter` from feature tables."""

from __future__ import annotations

import json
from typing import Any

from pytest_bdd import given, parsers, then, when

from e2eharness.core.common import transform_table
from e2eharness.core.filtering import DataFilter, FilterError
from e2eharness.core.jsonio import loads_lenient
from e2eharness.core.keypaths import get_path
from e2eharness.data import sample_user_records


def _split_list(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


@given("the sample user records", target_fixture="records")
def sample_records() -> list[dict[str, Any]]:
    return sample_user_records()


@given("the records:", target_fixture="records")
def records_from_docstring(docstring: str) -> list[Any]:
    return json.loads(docstring)


@given(parsers.re(r'^a data filter returning "(?P<keys>[^"]*)"$'), target_fixture="data_filter")
def data_filter_returning(keys: str) -> DataFilter:
    return DataFilter().configure(_split_list(keys))


@given(
    parsers.re(r'^a data filter returning "(?P<keys>[^"]*)" wrapped in "(?P<wrapper_key>[^"]*)"$'),
    target_fixture="data_filter",
)
def data_filter_wrapped(keys: str, wrapper_key: str) -> DataFilter:
    return DataFilter().configure(_split_list(keys), wrapper_key=wrapper_key)


@given("the filter criteria:")
def filter_criteria(data_filter: DataFilter, datatable: list[list[str]]) -> None:
    # Cells are parsed as JSON where possible: 30 -> int, [25, 30] -> list.
    for row in transform_table(datatable):
        value = loads_lenient(row["value"]) if row.get("value") else None
        data_filter.add_predicate(row["condition"], row["key"], value)


@when("the records are filtered", target_fixture="filter_outcome")
def records_are_filtered(data_filter: DataFilter, records: Any) -> dict[str, Any]:
    try:
        return {"result": data_filter.filter(records), "error": None}
    except FilterError as exc:
        return {"result": None, "error": exc}


@then(parsers.parse('the filtered names are "{names}"'))
def filtered_names(filter_outcome: dict[str, Any], names: str) -> None:
    assert filter_outcome["error"] is None, filter_outcome["error"]
    actual = [get_path(record, "user.name") for record in filter_outcome["result"]]
    assert actual == _split_list(names)


@then("the filtered result is:")
def filtered_result_is(filter_outcome: dict[str, Any], docstring: str) -> None:
    assert filter_outcome["error"] is None, filter_outcome["error"]
    assert filter_outcome["result"] == json.loads(docstring)


@then("no records remain")
def no_records_remain(filter_outcome: dict[str, Any]) -> None:
    assert filter_outcome["error"] is None, filter_outcome["error"]
    assert filter_outcome["result"] == []


@then(parsers.parse('filtering fails mentioning "{fragment}"'))
def filtering_fails(filter_outcome: dict[str, Any], fragment: str) -> None:
    error = filter_outcome["error"]
    assert isinstance(error, FilterError)
    assert fragment in str(error)
