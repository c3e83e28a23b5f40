from __future__ import annotations

import pytest

from e2eharness.core import common


def test_rmdir_removes_tree(tmp_path) -> None:
    target = tmp_path / "downloads"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "file.txt").write_text("x", encoding="utf-8")
    common.rmdir(target)
    assert not target.exists()


def test_rmdir_missing_directory_is_not_an_error(tmp_path) -> None:
    common.rmdir(tmp_path / "nope")


def test_replace_all_is_literal() -> None:
    assert common.replace_all("a.b.c", ".", "/") == "a/b/c"
    assert common.replace_all("(x)(x)", "(x)", "y") == "yy"
    assert common.replace_all(None, "a", "b") == ""


@pytest.mark.parametrize(
    ("value", "places", "expected"),
    [
        (1234.567, 2, "1,234.57"),
        (2.5, 0, "3"),
        (1.005, 2, "1.01"),
        (1000000, 1, "1,000,000.0"),
        ("12", 2, ""),
        (1.5, -1, ""),
    ],
)
def test_round_of_decimal(value, places, expected) -> None:
    assert common.round_of_decimal(value, places) == expected


def test_verify_value_in_between() -> None:
    assert common.verify_value_in_between(5, 1, 10) is True
    assert common.verify_value_in_between(11, 1, 10, is_find_budget=True) is False
    assert common.verify_value_in_between("5", 1, 10) is False
    with pytest.raises(common.ValueOutOfRangeError, match=r"Value \(11\) is not between 1 and 10\."):
        common.verify_value_in_between(11, 1, 10)


def test_find_min_and_max_value() -> None:
    assert common.find_min_and_max_value(200, 10) == {"min": 180, "max": 220}
    assert common.find_min_and_max_value(5, 10) == {"min": 5, "max": 6}
    assert common.find_min_and_max_value(100, -1) == {"min": None, "max": None}


def test_char_wrap() -> None:
    assert common.char_wrap("hello", 10) == "hello"
    assert common.char_wrap("hello world", 5) == "hello"
    assert common.char_wrap("hello world", 5, include_ellipsis=True) == "hello..."
    assert common.char_wrap(42, 5) == ""


def test_transform_table() -> None:
    table = [["name", "job"], ["morpheus", "leader"], ["neo", "the one"]]
    assert common.transform_table(table) == [
        {"name": "morpheus", "job": "leader"},
        {"name": "neo", "job": "the one"},
    ]
    assert common.transform_table([]) == []


def test_round_to_nearest_tenth_or_int() -> None:
    assert common.round_to_nearest_tenth_or_int(0.34) == 0.3
    assert common.round_to_nearest_tenth_or_int(0.25) == 0.3
    assert common.round_to_nearest_tenth_or_int(1234.5) == "1,235"


def test_capitalize_first_word() -> None:
    assert common.capitalize_first_word("hELLO World") == "Hello world"
    assert common.capitalize_first_word("") == ""


def test_date_from_epoch_is_reexported() -> None:
    assert common.date_from_epoch(0) == "01/01/1970"
