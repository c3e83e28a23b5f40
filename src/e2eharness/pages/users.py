from __future__ import annotations

from typing import Any

from e2eharness.core.api import ApiHelper


def get_user_list(api: ApiHelper, page_no: int) -> Any:
    return api.send_get_request(f"/users?page={page_no}")


def create_user(api: ApiHelper, name: str, job: str) -> Any:
    return api.send_post_request("/users", {"name": name, "job": job})
