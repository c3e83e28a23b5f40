from __future__ import annotations

from typing import Any

from pytest_bdd import given, parsers, then

from e2eharness.core.api import ApiHelper
from e2eharness.pages import users


@given(
    parsers.re(r"^the user fetch the user list of page (?P<page_no>\d+)$"),
    converters={"page_no": int},
)
def fetch_user_list(api_helper: ApiHelper, test_data: dict[str, Any], page_no: int) -> None:
    test_data["api_response"] = users.get_user_list(api_helper, page_no)


@then(
    parsers.re(r"^the user validates the response received for page (?P<page_no>\d+)$"),
    converters={"page_no": int},
)
def validate_user_list_page(test_data: dict[str, Any], page_no: int) -> None:
    assert test_data["api_response"]["page"] == page_no


@given(parsers.re(r'^the user creates a new user with name "(?P<name>[^"]*)" and job "(?P<job>[^"]*)"$'))
def create_new_user(api_helper: ApiHelper, test_data: dict[str, Any], name: str, job: str) -> None:
    test_data["api_response"] = users.create_user(api_helper, name, job)


@then(parsers.re(r'^the user validates the response contains name "(?P<name>[^"]*)" and job "(?P<job>[^"]*)"$'))
def validate_created_user(test_data: dict[str, Any], name: str, job: str) -> None:
    assert test_data["api_response"]["name"] == name
    assert test_data["api_response"]["job"] == job
