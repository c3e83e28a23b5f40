from __future__ import annotations

from typing import Any

from pytest_bdd import given, parsers, then

from e2eharness.core.graphql import GraphqlHelper
from e2eharness.pages import posts


@given(parsers.re(r"^the user hits the get a post query$"))
def get_a_post(graphql_helper: GraphqlHelper, test_data: dict[str, Any]) -> None:
    test_data["gql_response"] = graphql_helper.send_query(posts.GET_A_POST)


@then(parsers.re(r"^the user validates the response of the get a post query$"))
def validate_get_a_post(test_data: dict[str, Any]) -> None:
    assert test_data["gql_response"]["data"] == posts.EXPECTED_FIRST_POST


@given(
    parsers.re(r"^the user hits the delete a post mutation for id (?P<post_id>\d+)$"),
    converters={"post_id": int},
)
def delete_a_post(graphql_helper: GraphqlHelper, test_data: dict[str, Any], post_id: int) -> None:
    test_data["gql_response"] = graphql_helper.send_mutation(posts.DELETE_A_POST, posts.delete_variables(post_id))


@then(parsers.re(r"^the user validates the response of the delete a post mutation$"))
def validate_delete_a_post(test_data: dict[str, Any]) -> None:
    assert test_data["gql_response"]["data"]["deletePost"] is True
