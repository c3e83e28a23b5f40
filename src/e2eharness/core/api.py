"""HTTP clients built on Playwright's APIRequest context.

Each call opens a fresh request context, sends one request and disposes the
context again, so no cookies or connections leak between calls.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

from playwright.sync_api import APIRequest
from playwright.sync_api import Error as PlaywrightError

from e2eharness.core import config as config_core
from e2eharness.core.logs import get_logger

logger = get_logger(__name__)


class RequestClient:
    def __init__(
        self,
        request: APIRequest,
        environment: config_core.Environment | None = None,
        settings: config_core.RequestSettings | None = None,
    ) -> None:
        self.request = request
        self.environment = environment or config_core.load_environment()
        self.settings = settings or config_core.load_request_settings()

    def define_conf(
        self,
        timeout: int | None = None,
        max_retries: int | None = None,
        ignore_https_errors: bool | None = None,
    ) -> config_core.RequestSettings:
        """Override only the request settings that are given."""
        overrides: dict[str, Any] = {}
        if timeout is not None:
            overrides["timeout_ms"] = timeout
        if max_retries is not None:
            overrides["max_retries"] = max_retries
        if ignore_https_errors is not None:
            overrides["ignore_https_errors"] = ignore_https_errors
        self.settings = replace(self.settings, **overrides)
        return self.settings

    def exchange(self, url: str, method: str, headers: dict[str, str], body: Any = None) -> Any:
        """Send one request and return the parsed JSON body.

        An empty body (204 No Content) parses to None; a non-JSON body raises
        ValueError.
        """
        options = {
            "method": method,
            "headers": headers,
            "timeout": self.settings.timeout_ms,
            "max_retries": self.settings.max_retries,
            "ignore_https_errors": self.settings.ignore_https_errors,
        }
        context = self.request.new_context()
        try:
            response = context.fetch(
                url,
                data=json.dumps(body) if body is not None else None,
                **options,
            )
            text = response.text()
            parsed = json.loads(text) if text.strip() else None
            logger.debug("http.exchange", url=url, options=options, status=response.status, response=parsed)
            return parsed
        except (PlaywrightError, ValueError) as exc:
            logger.error("http.failed", url=url, method=method, error=str(exc))
            raise
        finally:
            context.dispose()


class ApiHelper(RequestClient):
    """REST calls against the environment's `api_url`."""

    def build_url(self, endpoint: str) -> str:
        if not self.environment.api_url:
            raise config_core.ConfigError(f"Environment {self.environment.name!r} has no api_url")
        return f"{self.environment.api_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def send_request(
        self,
        endpoint: str,
        method: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        merged = {**self.environment.api_headers, **(headers or {})}
        return self.exchange(self.build_url(endpoint), method.upper(), merged, body)

    def send_get_request(self, endpoint: str, headers: dict[str, str] | None = None) -> Any:
        return self.send_request(endpoint, "GET", headers=headers)

    def send_post_request(self, endpoint: str, body: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.send_request(endpoint, "POST", body, headers)

    def send_put_request(self, endpoint: str, body: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.send_request(endpoint, "PUT", body, headers)

    def send_patch_request(self, endpoint: str, body: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.send_request(endpoint, "PATCH", body, headers)

    def send_delete_request(self, endpoint: str, headers: dict[str, str] | None = None) -> Any:
        return self.send_request(endpoint, "DELETE", headers=headers)
