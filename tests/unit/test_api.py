from __future__ import annotations

import json

import pytest
from playwright.sync_api import Error as PlaywrightError

from e2eharness.core import config as config_core
from e2eharness.core.api import ApiHelper
from tests.unit.fakes import FakeAPIRequest

ENV = config_core.Environment(
    name="test",
    frontend_url="https://shop.test",
    api_url="https://shop.test/api/",
    gql_url="https://shop.test/graphql",
)


def test_build_url_joins_with_one_slash() -> None:
    api = ApiHelper(FakeAPIRequest(), ENV, config_core.RequestSettings())
    assert api.build_url("/users?page=2") == "https://shop.test/api/users?page=2"
    assert api.build_url("users") == "https://shop.test/api/users"


def test_build_url_needs_api_url() -> None:
    env = config_core.Environment(name="ui-only", frontend_url="https://shop.test")
    with pytest.raises(config_core.ConfigError, match="no api_url"):
        ApiHelper(FakeAPIRequest(), env, config_core.RequestSettings()).build_url("users")


def test_post_sends_json_and_disposes_context() -> None:
    request = FakeAPIRequest(status=201, body='{"name": "morpheus", "job": "leader", "id": "7"}')
    api = ApiHelper(request, ENV, config_core.RequestSettings())

    out = api.send_post_request("/users", {"name": "morpheus", "job": "leader"}, headers={"X-Trace": "1"})

    assert out == {"name": "morpheus", "job": "leader", "id": "7"}
    fetch = request.fetches[0]
    assert fetch["url"] == "https://shop.test/api/users"
    assert fetch["method"] == "POST"
    assert json.loads(fetch["data"]) == {"name": "morpheus", "job": "leader"}
    assert fetch["headers"]["Content-Type"] == "application/json"
    assert fetch["headers"]["X-Trace"] == "1"
    assert fetch["timeout"] == 60_000
    assert fetch["max_retries"] == 3
    assert fetch["ignore_https_errors"] is True
    assert request.contexts[0].disposed


def test_get_has_no_body() -> None:
    request = FakeAPIRequest(body='{"page": 2}')
    out = ApiHelper(request, ENV, config_core.RequestSettings()).send_get_request("/users?page=2")
    assert out == {"page": 2}
    assert request.fetches[0]["data"] is None
    assert request.fetches[0]["method"] == "GET"


def test_empty_body_parses_to_none() -> None:
    request = FakeAPIRequest(status=204, body="")
    assert ApiHelper(request, ENV, config_core.RequestSettings()).send_delete_request("/users/2") is None


@pytest.mark.parametrize("method", ["send_put_request", "send_patch_request"])
def test_update_methods(method: str) -> None:
    request = FakeAPIRequest(body='{"updatedAt": "now"}')
    api = ApiHelper(request, ENV, config_core.RequestSettings())
    assert getattr(api, method)("/users/2", {"job": "zion resident"}) == {"updatedAt": "now"}
    assert request.fetches[0]["method"] == method.split("_")[1].upper()


def test_define_conf_overrides_only_given_values() -> None:
    request = FakeAPIRequest()
    api = ApiHelper(request, ENV, config_core.RequestSettings())
    settings = api.define_conf(timeout=1_000)
    assert settings == config_core.RequestSettings(timeout_ms=1_000, max_retries=3, ignore_https_errors=True)
    api.define_conf(max_retries=0, ignore_https_errors=False)
    api.send_get_request("/users")
    fetch = request.fetches[0]
    assert (fetch["timeout"], fetch["max_retries"], fetch["ignore_https_errors"]) == (1_000, 0, False)


def test_transport_errors_propagate_after_dispose() -> None:
    request = FakeAPIRequest(error=PlaywrightError("connect ECONNREFUSED"))
    api = ApiHelper(request, ENV, config_core.RequestSettings())
    with pytest.raises(PlaywrightError, match="ECONNREFUSED"):
        api.send_get_request("/users")
    assert request.contexts[0].disposed


def test_non_json_body_raises_value_error() -> None:
    request = FakeAPIRequest(body="<html>oops</html>")
    with pytest.raises(ValueError):
        ApiHelper(request, ENV, config_core.RequestSettings()).send_get_request("/users")
    assert request.contexts[0].disposed
