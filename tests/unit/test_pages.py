from __future__ import annotations

import pytest

from e2eharness.core import actions as actions_module
from e2eharness.core.actions import PlaywrightActions
from e2eharness.core.config import BrowserSettings
from e2eharness.data import default_test_data
from e2eharness.pages import posts
from e2eharness.pages.signup import SignupPage, checkbox_for_label, text_box, validate_text
from tests.unit.fakes import FakeExpectation, FakePage


@pytest.fixture(autouse=True)
def fake_expect(monkeypatch):
    monkeypatch.setattr(actions_module, "expect", FakeExpectation)


def test_fill_name_and_email_uses_signup_form() -> None:
    page = FakePage()
    SignupPage(PlaywrightActions(BrowserSettings())).fill_name_and_email(page, "test user", "t@example.com")
    assert ("fill", SignupPage.NAME_INPUT, "test user") in page.calls
    assert ("fill", SignupPage.EMAIL_INPUT, "t@example.com") in page.calls


def test_fill_and_validate_user_details() -> None:
    page = FakePage()
    data = default_test_data()["signup"]
    data["name"], data["email"] = "test user", "t@example.com"

    SignupPage(PlaywrightActions(BrowserSettings())).fill_and_validate_user_details(page, data)

    assert ("wait_for", validate_text("test user"), "visible", 10_000) in page.calls
    assert ("fill", text_box("password"), "Test@1234") in page.calls
    assert ("select_option", "#months", "February") in page.calls
    assert page.locator(checkbox_for_label("Sign up for our newsletter!")).checked
    assert ("fill", text_box("zipcode"), "411006") in page.calls
    assert ("fill", text_box("address1"), "test address line one") in page.calls


def test_default_test_data_is_a_fresh_copy() -> None:
    first = default_test_data()
    first["signup"]["address"]["city"] = "Mumbai"
    assert default_test_data()["signup"]["address"]["city"] == "Pune"


def test_delete_variables() -> None:
    assert posts.delete_variables(1) == {"id": "1"}
