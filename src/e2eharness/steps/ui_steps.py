from __future__ import annotations

from typing import Any

from playwright.sync_api import Page
from pytest_bdd import given, parsers, then, when

from e2eharness.core.actions import PlaywrightActions
from e2eharness.core.ids import unique_email
from e2eharness.pages.signup import SignupPage


@given(parsers.re(r"^the user is on the homepage$"))
def user_on_homepage(page: Page) -> None:
    page.goto("/")
    page.wait_for_load_state("load")


@when(parsers.re(r'^the user clicks on the "(?P<button_text>[^"]*)" button$'))
def user_clicks_button(page: Page, actions: PlaywrightActions, button_text: str) -> None:
    actions.wait_and_click(page, f'//*[text()="{button_text}"]')


@then(parsers.re(r"^the user should be on the login and signup page$"))
def user_on_login_and_signup_page(page: Page, actions: PlaywrightActions) -> None:
    SignupPage(actions).validate_on_login_and_signup_page(page)


@when(parsers.re(r'^the user signs up with the name "(?P<name>[^"]*)" and email "(?P<email>[^"]*)"$'))
def user_signs_up(page: Page, actions: PlaywrightActions, test_data: dict[str, Any], name: str, email: str) -> None:
    SignupPage(actions).fill_name_and_email(page, name, email)
    test_data["signup"]["name"] = name
    test_data["signup"]["email"] = email


@when(parsers.re(r"^the user fills in the required information$"))
def user_fills_required_information(page: Page, actions: PlaywrightActions, test_data: dict[str, Any]) -> None:
    SignupPage(actions).fill_and_validate_user_details(page, test_data["signup"])


@then(parsers.re(r'^the user should see the "(?P<message>[^"]*)" confirmation message$'))
def user_sees_confirmation(page: Page, actions: PlaywrightActions, message: str) -> None:
    actions.wait_and_see(page, f'//*[text()="{message}"]')


@then(parsers.re(r'^the user should be logged in as "(?P<name>[^"]*)"$'))
def user_logged_in_as(page: Page, actions: PlaywrightActions, name: str) -> None:
    actions.wait_and_see(page, f'//*[text()="{name}"]')


@when(parsers.re(r'^the user signs up with the name "(?P<name>[^"]*)" and a unique email$'))
def user_signs_up_with_unique_email(
    page: Page, actions: PlaywrightActions, test_data: dict[str, Any], name: str
) -> None:
    user_signs_up(page, actions, test_data, name, unique_email(name))
