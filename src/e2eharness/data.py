from __future__ import annotations

import copy
from typing import Any

_SIGNUP_TEST_DATA: dict[str, Any] = {
    "title": "Mr",
    "name": "",
    "email": "",
    "password": "Test@1234",
    "date_of_birth": {"day": "1", "month": "February", "year": "1996"},
    "address": {
        "first_name": "test",
        "last_name": "user",
        "company": "test company",
        "address_line1": "test address line one",
        "address_line2": "test address line two",
        "state": "Maharashtra",
        "city": "Pune",
        "zipcode": "411006",
        "mobile_number": "9999999999",
    },
}

_SAMPLE_USERS: list[dict[str, Any]] = [
    {"user": {"name": "Alice", "age": 25, "details": {"city": "New York", "hobbies": ["chess", "tennis"]}}},
    {"user": {"name": "Bob", "age": 30, "details": {"city": "LA", "hobbies": ["surfing"]}}},
    {"user": {"name": "Charlie", "age": 35, "details": {"city": "New York", "hobbies": []}}},
]


def default_test_data() -> dict[str, Any]:
    """Fresh per-scenario state: signup data plus slots for the last responses."""
    return {
        "signup": copy.deepcopy(_SIGNUP_TEST_DATA),
        "api_response": {},
        "gql_response": {},
    }


def sample_user_records() -> list[dict[str, Any]]:
    return copy.deepcopy(_SAMPLE_USERS)
