from __future__ import annotations

from typing import Any

from e2eharness.core import config as config_core
from e2eharness.core.api import RequestClient


class GraphqlHelper(RequestClient):
    """POST GraphQL documents to the environment's `gql_url`."""

    def endpoint(self) -> str:
        if not self.environment.gql_url:
            raise config_core.ConfigError(f"Environment {self.environment.name!r} has no gql_url")
        return self.environment.gql_url

    def send_request(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        body = {"query": query, "variables": variables or {}}
        merged = {**self.environment.gql_headers, **(headers or {})}
        return self.exchange(self.endpoint(), "POST", merged, body)

    send_query = send_request
    send_mutation = send_request
