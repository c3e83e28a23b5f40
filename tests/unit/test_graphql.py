from __future__ import annotations

import json

import pytest

from e2eharness.core import config as config_core
from e2eharness.core.graphql import GraphqlHelper
from e2eharness.pages import posts
from tests.unit.fakes import FakeAPIRequest

ENV = config_core.Environment(
    name="test",
    frontend_url="https://shop.test",
    gql_url="https://shop.test/graphql",
    gql_headers={"Content-Type": "application/json", "Authorization": "Bearer t"},
)


def test_query_posts_document_and_empty_variables() -> None:
    request = FakeAPIRequest(body=json.dumps({"data": posts.EXPECTED_FIRST_POST}))
    out = GraphqlHelper(request, ENV, config_core.RequestSettings()).send_query(posts.GET_A_POST)

    assert out["data"] == posts.EXPECTED_FIRST_POST
    fetch = request.fetches[0]
    assert fetch["url"] == "https://shop.test/graphql"
    assert fetch["method"] == "POST"
    assert json.loads(fetch["data"]) == {"query": posts.GET_A_POST, "variables": {}}
    assert fetch["headers"]["Authorization"] == "Bearer t"


def test_mutation_sends_variables() -> None:
    request = FakeAPIRequest(body='{"data": {"deletePost": true}}')
    helper = GraphqlHelper(request, ENV, config_core.RequestSettings())
    out = helper.send_mutation(posts.DELETE_A_POST, posts.delete_variables(1), headers={"X-Req": "9"})
    assert out == {"data": {"deletePost": True}}
    body = json.loads(request.fetches[0]["data"])
    assert body["variables"] == {"id": "1"}
    assert request.fetches[0]["headers"]["X-Req"] == "9"


def test_needs_gql_url() -> None:
    env = config_core.Environment(name="rest-only", frontend_url="https://shop.test", api_url="https://shop.test/api")
    with pytest.raises(config_core.ConfigError, match="no gql_url"):
        GraphqlHelper(FakeAPIRequest(), env, config_core.RequestSettings()).send_request("{ ping }")
