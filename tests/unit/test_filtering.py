from __future__ import annotations

import copy

import pytest

from e2eharness.core.filtering import (
    DataFilter,
    FilterCondition,
    FilterConfiguration,
    FilterError,
    Predicate,
    evaluate,
)
from e2eharness.data import sample_user_records


def _user(name: str, age: int, city: str) -> dict:
    return {"user": {"name": name, "age": age, "details": {"city": city}}}


def _names(result: list[dict]) -> list[str]:
    return [record["user"]["name"] for record in result]


def test_contains_projects_nested_paths() -> None:
    records = [_user("Alice", 25, "New York"), _user("Bob", 30, "LA")]
    result = (
        DataFilter()
        .configure(
            ["user.name", "user.details.city"],
            [{"condition": "contains", "key": "user.details.city", "value": "New York"}],
        )
        .filter(records)
    )
    assert result == [{"user": {"name": "Alice", "details": {"city": "New York"}}}]


def test_greater_than_is_strict() -> None:
    records = [_user("A", 25, "x"), _user("B", 30, "x"), _user("C", 35, "x")]
    result = DataFilter().configure(["user.age"]).add_predicate("greater_than", "user.age", 30).filter(records)
    assert result == [{"user": {"age": 35}}]


def test_range_is_inclusive() -> None:
    records = [_user(str(age), age, "x") for age in (24, 25, 30, 31)]
    result = DataFilter().configure(["user.age"], [("range", "user.age", [25, 30])]).filter(records)
    assert [r["user"]["age"] for r in result] == [25, 30]


def test_missing_projection_path_is_omitted() -> None:
    result = DataFilter().configure(["user.missing.field"]).filter([_user("Alice", 25, "New York")])
    assert result == [{}]


def test_missing_path_next_to_present_one_leaves_no_empty_dict() -> None:
    result = DataFilter().configure(["user.name", "user.missing.field"]).filter([_user("Alice", 25, "NY")])
    assert result == [{"user": {"name": "Alice"}}]


def test_exclude_and_contains_combine_with_and() -> None:
    data_filter = DataFilter().configure(
        ["user.name"],
        [
            Predicate("exclude", "user.name", "Bob"),
            Predicate("contains", "user.details.city", "New York"),
        ],
    )
    # Alice and Charlie both live in New York and neither is Bob.
    assert _names(data_filter.filter(sample_user_records())) == ["Alice", "Charlie"]


def test_adding_a_failing_predicate_excludes_the_record() -> None:
    data_filter = DataFilter().configure(["user.name"], [("contains", "user.details.city", "New York")])
    assert _names(data_filter.filter(sample_user_records())) == ["Alice", "Charlie"]
    data_filter.add_predicate("exactly", "user.name", "Nobody")
    assert data_filter.filter(sample_user_records()) == []


def test_no_predicates_keeps_every_record_in_order() -> None:
    records = sample_user_records()
    result = DataFilter().configure(["user.name"]).filter(records)
    assert _names(result) == ["Alice", "Bob", "Charlie"]


def test_output_preserves_input_order() -> None:
    records = [_user(name, age, "x") for name, age in [("Z", 40), ("A", 10), ("M", 50), ("B", 5)]]
    result = DataFilter().configure(["user.name"], [("greater_than", "user.age", 8)]).filter(records)
    assert _names(result) == ["Z", "A", "M"]


def test_configure_twice_gives_same_result() -> None:
    args = (["user.name"], [("less_than", "user.age", 32)])
    once = DataFilter().configure(*args).filter(sample_user_records())
    twice = DataFilter().configure(*args).configure(*args).filter(sample_user_records())
    assert once == twice


def test_configure_replaces_previous_criteria() -> None:
    data_filter = DataFilter().configure(["user.name"], [("exactly", "user.name", "Bob")])
    data_filter.configure(["user.name"])
    assert data_filter.criteria == ()
    assert len(data_filter.filter(sample_user_records())) == 3


def test_projection_merges_shared_prefix() -> None:
    result = DataFilter().configure(["user.name", "user.age"]).filter([_user("Alice", 25, "NY")])
    assert result == [{"user": {"name": "Alice", "age": 25}}]


@pytest.mark.parametrize(
    "keys",
    [["user.hobbies", "user.hobbies[0]"], ["user.hobbies[0]", "user.hobbies"]],
)
def test_projection_of_list_and_its_index_keeps_the_list(keys: list[str]) -> None:
    records = [{"user": {"hobbies": ["chess", "tennis"]}}]
    result = DataFilter().configure(keys).filter(records)
    assert result == [{"user": {"hobbies": ["chess", "tennis"]}}]
    assert records == [{"user": {"hobbies": ["chess", "tennis"]}}]


def test_non_ascii_digit_path_is_omitted_not_an_error() -> None:
    result = DataFilter().configure(["items.²", "name"]).filter([{"name": "Ann", "items": ["a"]}])
    assert result == [{"name": "Ann"}]


def test_wrapper_key_nests_output() -> None:
    records = [{"name": "Dana", "details": {"city": "Oslo"}}, {"other": 1}]
    result = DataFilter().configure(["name", "details.city"], wrapper_key="user").filter(records)
    assert result == [{"user": {"name": "Dana", "details": {"city": "Oslo"}}}, {}]


def test_records_are_not_mutated_and_output_is_a_copy() -> None:
    records = sample_user_records()
    snapshot = copy.deepcopy(records)
    result = DataFilter().configure(["user.details.hobbies"]).filter(records)
    result[0]["user"]["details"]["hobbies"].append("golf")
    assert records == snapshot


def test_single_string_projection_is_one_path() -> None:
    data_filter = DataFilter().configure("user.name")
    assert data_filter.keys_to_return == ("user.name",)


def test_add_criteria_is_an_alias() -> None:
    data_filter = DataFilter().configure(["user.name"]).add_criteria("include", "user.age")
    assert data_filter.criteria == (Predicate("include", "user.age"),)


@pytest.mark.parametrize(
    ("condition", "actual", "expected", "outcome"),
    [
        ("contains", "New York", "York", True),
        ("contains", 12345, "23", False),
        ("exactly", 1, 1, True),
        ("exactly", 1, True, False),
        ("exactly", "1", 1, False),
        ("exclude", True, 1, True),
        ("exclude", "Bob", "Bob", False),
        ("greater_than", "31", 30, False),
        ("greater_than", True, 0, False),
        ("less_than", 2.5, 3, True),
        ("range", 30, [30, 30], True),
        ("range", "30", [25, 35], False),
        ("range", 36, [25, 35], False),
    ],
)
def test_condition_semantics(condition: str, actual: object, expected: object, outcome: bool) -> None:
    assert evaluate({"field": actual}, Predicate(condition, "field", expected)) is outcome


def test_include_checks_presence_only() -> None:
    assert evaluate({"email": None}, Predicate("include", "email")) is True
    assert evaluate({}, Predicate("include", "email")) is False


def test_exclude_is_true_for_absent_field() -> None:
    assert evaluate({}, Predicate("exclude", "name", "Bob")) is True


def test_empty_key_path_resolves_to_nothing() -> None:
    assert evaluate({"": 1}, Predicate("include", "")) is False


def test_unknown_condition_raises_filter_error() -> None:
    data_filter = DataFilter().configure(["user.name"]).add_predicate("starts_with", "user.name", "A")
    with pytest.raises(FilterError) as excinfo:
        data_filter.filter(sample_user_records())
    assert str(excinfo.value).startswith("Filtering error: ")
    assert isinstance(excinfo.value.cause, ValueError)


def test_malformed_range_fails_even_without_records() -> None:
    data_filter = DataFilter().configure(["user.age"], [("range", "user.age", 30)])
    with pytest.raises(FilterError, match="range condition expects"):
        data_filter.filter([])


def test_non_string_projection_key_fails() -> None:
    with pytest.raises(FilterError):
        DataFilter().configure([1]).filter(sample_user_records())


@pytest.mark.parametrize("records", ["not records", {"user": {}}, 42])
def test_records_must_be_a_sequence(records: object) -> None:
    with pytest.raises(FilterError):
        DataFilter().configure(["user.name"]).filter(records)


def test_bad_criterion_shape_fails_in_configure() -> None:
    with pytest.raises(FilterError):
        DataFilter().configure(["user.name"], ["contains"])


def test_configuration_value_is_immutable() -> None:
    base = FilterConfiguration(projection=("a",))
    extended = base.with_predicate(Predicate(FilterCondition.INCLUDE, "a"))
    assert base.predicates == ()
    assert extended.predicates == (Predicate(FilterCondition.INCLUDE, "a"),)
    assert base.with_projection(["b", "c"]).projection == ("b", "c")
