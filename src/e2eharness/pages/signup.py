from __future__ import annotations

from typing import Any

from playwright.sync_api import Page

from e2eharness.core.actions import PlaywrightActions


def validate_text(text: str) -> str:
    return f'//*[text()="{text}"] | //*[@value="{text}"]'


def radio_button(value: str) -> str:
    return f'//input[@value="{value}"]'


def text_box(name: str) -> str:
    return f'//input[@name="{name}"]'


def checkbox_for_label(label: str) -> str:
    return f'//label[text()="{label}"]/..//input'


# Address form inputs, keyed by the test data field that fills them.
ADDRESS_FIELDS = (
    ("first_name", "first_name"),
    ("last_name", "last_name"),
    ("company", "company"),
    ("address_line1", "address1"),
    ("address_line2", "address2"),
    ("state", "state"),
    ("city", "city"),
    ("zipcode", "zipcode"),
    ("mobile_number", "mobile_number"),
)


class SignupPage:
    LOGIN_AND_SIGNUP_HEADING = '//h2[text()="New User Signup!"]'
    NAME_INPUT = '//input[@name="name"]'
    EMAIL_INPUT = '(//input[@name="email"])[2]'

    def __init__(self, actions: PlaywrightActions) -> None:
        self.actions = actions

    def validate_on_login_and_signup_page(self, page: Page) -> None:
        self.actions.wait_and_see(page, self.LOGIN_AND_SIGNUP_HEADING)

    def fill_name_and_email(self, page: Page, name: str, email: str) -> None:
        self.actions.wait_and_fill_field(page, self.NAME_INPUT, name)
        self.actions.wait_and_fill_field(page, self.EMAIL_INPUT, email)

    def fill_and_validate_user_details(self, page: Page, data: dict[str, Any]) -> None:
        """Fill the "Enter Account Information" form from signup test data."""
        actions = self.actions
        actions.wait_and_see(page, validate_text("Enter Account Information"))
        actions.wait_and_click(page, radio_button(data["title"]))
        actions.wait_and_see(page, validate_text(data["name"]))
        actions.wait_and_see(page, validate_text(data["email"]))
        actions.wait_and_fill_field(page, text_box("password"), data["password"])

        birth = data["date_of_birth"]
        actions.select_dropdown_option(page, "#days", birth["day"])
        actions.select_dropdown_option(page, "#months", birth["month"])
        actions.select_dropdown_option(page, "#years", birth["year"])

        actions.check_checkbox(page, checkbox_for_label("Sign up for our newsletter!"))
        actions.check_checkbox(page, checkbox_for_label("Receive special offers from our partners!"))

        address = data["address"]
        for field, input_name in ADDRESS_FIELDS:
            actions.wait_and_fill_field(page, text_box(input_name), address[field])
