"""Frame-aware wrappers around Playwright page actions.

Every action resolves its selector against the current target: the main page,
or the iframe selected with `switch_to`. Waits use the configured action
timeout; debug events are emitted for each step when verbose logging is on.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from playwright.sync_api import FrameLocator, Locator, Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from e2eharness.core import config as config_core, keypaths, paths
from e2eharness.core.logs import get_logger

logger = get_logger(__name__)

TEXT_XPATH = (
    "//*[contains(text(),'{text}')] | //span[contains(.,'{text}')] | //*[contains(@placeholder, \"{text}\")]"
)


def text_locator(text: str) -> str:
    return TEXT_XPATH.format(text=text)


class ElementNotFoundError(AssertionError):
    pass


class PlaywrightActions:
    def __init__(self, settings: config_core.BrowserSettings | None = None) -> None:
        self.settings = settings or config_core.load_browser_settings()
        self.frame: Page | FrameLocator | None = None
        self.set_frame_path = ""
        self.set_frame = False

    def current_frame_status(self) -> dict:
        return {"set_frame_path": self.set_frame_path, "set_frame": self.set_frame}

    def _log(self, action: str, selector: str = "", message: str = "") -> None:
        logger.debug("playwright.action", action=action, selector=selector, message=message)

    # ---- frames ----
    def switch_to(self, page: Page, selector: str | None) -> None:
        """Target the iframe matched by `selector`; a blank selector resets to the page."""
        if selector and selector.strip():
            page.locator(selector).wait_for(state="attached", timeout=self.settings.action_timeout_ms)
            self.set_frame = True
            self.set_frame_path = selector
            self.frame = page.frame_locator(selector)
            self._log("Switched to frame", selector, "Frame has been successfully located.")
        else:
            self.set_frame = False
            self.set_frame_path = ""
            self.frame = page
            self._log("Switch to frame", selector or "", "No valid selector provided, defaulting to main page.")

    def target(self, page: Page) -> Page | FrameLocator:
        return page.frame_locator(self.set_frame_path) if self.set_frame else page

    def locate(self, page: Page, selector: str) -> Locator:
        return self.target(page).locator(selector)

    def _visible(self, page: Page, selector: str) -> Locator:
        element = self.locate(page, selector)
        element.wait_for(state="visible", timeout=self.settings.action_timeout_ms)
        return element

    # ---- clicks and form controls ----
    def wait_and_click(self, page: Page, selector: str) -> None:
        self._visible(page, selector).click()
        self._log("Clicked element", selector)

    def check_checkbox(self, page: Page, selector: str) -> None:
        checkbox = self.locate(page, selector)
        checkbox.set_checked(True)
        expect(checkbox).to_be_checked()
        self._log("Checked checkbox", selector)

    def uncheck_checkbox(self, page: Page, selector: str) -> None:
        checkbox = self._visible(page, selector)
        if checkbox.is_checked():
            checkbox.set_checked(False)
            self._log("Unchecked checkbox", selector)
        else:
            self._log("Checkbox already unchecked", selector)
        expect(checkbox).not_to_be_checked()

    def select_radio_button(self, page: Page, selector: str) -> None:
        self._visible(page, selector).set_checked(True)
        self._log("Selected radio button", selector)

    def select_dropdown_option(self, page: Page, dropdown_selector: str, option: str) -> None:
        self.locate(page, dropdown_selector).select_option(option)
        self._log("Selected dropdown option", dropdown_selector, f'Option: "{option}"')

    # ---- text input ----
    def wait_and_fill_field(self, page: Page, selector: str, text: str) -> None:
        self._visible(page, selector).fill(text)
        self._log("Filled text", selector, f'Filled text: "{text}"')

    def wait_and_fill_field_sequentially(self, page: Page, selector: str, text: str) -> None:
        field = self._visible(page, selector)
        field.fill("")
        field.press_sequentially(text)
        self._log("Filled text", selector, f'Filled text sequentially: "{text}"')

    def clear_text(self, page: Page, selector: str) -> None:
        self.locate(page, selector).fill("")
        self._log("Cleared text", selector)

    # ---- reading ----
    def get_text_from_locator(self, page: Page, selector: str) -> str | None:
        text = self.locate(page, selector).text_content()
        self._log("Retrieved text from locator", selector, f'Text: "{text}"')
        return text

    def get_text_from_attribute(self, page: Page, selector: str, attribute: str) -> str | None:
        value = self.locate(page, selector).get_attribute(attribute)
        self._log("Retrieved text from attribute", selector, f'Attribute: "{attribute}", Value: "{value}"')
        return value

    def get_current_url(self, page: Page) -> str:
        url = page.url
        self._log("Retrieved current URL", "", f'Current URL: "{url}"')
        return url

    # ---- assertions ----
    def validate_element_is_enabled(self, page: Page, selector: str) -> None:
        expect(self._visible(page, selector)).to_be_enabled()
        self._log("Validated element is enabled", selector)

    def validate_element_is_disabled(self, page: Page, selector: str) -> None:
        expect(self.locate(page, selector)).to_be_disabled()
        self._log("Validated element is disabled", selector)

    def validate_is_selected(self, page: Page, selector: str) -> None:
        expect(self.locate(page, selector)).to_be_checked()
        self._log("Validated element is selected", selector)

    def wait_and_see(self, page: Page, selector: str) -> None:
        self.locate(page, selector).first.wait_for(state="visible", timeout=self.settings.action_timeout_ms)
        self._log("Waited for element to be visible", selector)

    def wait_and_visible(self, page: Page, selector: str) -> bool:
        """Probe visibility with a short timeout. Never raises on timeout."""
        try:
            self.locate(page, selector).wait_for(state="visible", timeout=self.settings.visible_probe_timeout_ms)
        except PlaywrightTimeoutError:
            return False
        return True

    def verify_texts_visible(self, page: Page, inputs: Any, timeout_s: float = 10) -> None:
        """Wait for every leaf text of a nested structure to show on the page."""
        for text in keypaths.leaf_texts(inputs):
            try:
                self.locate(page, text_locator(text)).first.wait_for(state="visible", timeout=timeout_s * 1000)
            except PlaywrightTimeoutError as exc:
                raise ElementNotFoundError(f'Text "{text}" not found within {timeout_s} seconds.') from exc
            self._log("Verified text", text_locator(text))

    # ---- dialogs ----
    def accept_alert(self, page: Page) -> None:
        page.once("dialog", lambda dialog: dialog.accept())
        self._log("Accepting alert", "", "Handler registered for next dialog.")

    def dismiss_alert(self, page: Page) -> None:
        page.once("dialog", lambda dialog: dialog.dismiss())
        self._log("Dismissing alert", "", "Handler registered for next dialog.")

    # ---- pointer, scroll and keyboard ----
    def mouse_hover(self, page: Page, selector: str) -> None:
        self._visible(page, selector).hover()
        self._log("Hovered element", selector)

    def scroll_to_element(self, page: Page, selector: str) -> None:
        self.locate(page, selector).scroll_into_view_if_needed()
        self._log("Scrolled to element", selector)

    def press_key(self, page: Page, key: str) -> None:
        page.keyboard.press(key)
        self._log("Pressed key", key)

    def hold_key(self, page: Page, key: str) -> None:
        page.keyboard.down(key)
        self._log("Held key", key)

    def release_key(self, page: Page, key: str) -> None:
        page.keyboard.up(key)
        self._log("Released key", key)

    # ---- files ----
    def upload_file(self, page: Page, selector: str, file_path: str | Path | Sequence[str | Path]) -> None:
        files = [file_path] if isinstance(file_path, (str, Path)) else list(file_path)
        self.locate(page, selector).set_input_files(files)
        self._log("Uploaded file(s)", selector, ", ".join(str(f) for f in files))

    def download_file(self, page: Page, selector: str, download_dir: str | Path | None = None) -> Path:
        """Click `selector`, save the triggered download and return its path.

        A relative `download_dir` is resolved inside the artifacts directory.
        """
        if download_dir is None:
            target_dir = paths.download_dir()
        else:
            target_dir = paths.resolve_in_artifacts(download_dir)
            target_dir.mkdir(parents=True, exist_ok=True)
        with page.expect_download() as download_info:
            self.wait_and_click(page, selector)
        download = download_info.value
        saved = target_dir / download.suggested_filename
        download.save_as(saved)
        self._log("Downloaded file", selector, f'File saved to: "{saved}".')
        return saved
