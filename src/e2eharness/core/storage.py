from __future__ import annotations

from typing import Any

from playwright.sync_api import Frame, Page

from e2eharness.core.actions import PlaywrightActions
from e2eharness.core.jsonio import loads_lenient
from e2eharness.core.logs import get_logger

logger = get_logger(__name__)

# Runs inside the page: copies every entry of the named Web Storage area.
_DUMP_STORAGE_JS = """(area) => {
    const store = window[area];
    const entries = {};
    for (let i = 0; i < store.length; i++) {
        const key = store.key(i);
        entries[key] = store.getItem(key);
    }
    return entries;
}"""


class BrowserStorage:
    """Read localStorage and sessionStorage from the page or an iframe."""

    def __init__(self, actions: PlaywrightActions | None = None) -> None:
        self.actions = actions

    def switch_frame_by_partial_url(self, page: Page, partial_url: str) -> Frame | None:
        """Return the first frame whose URL contains `partial_url`."""
        for frame in page.frames:
            if partial_url and partial_url in frame.url:
                return frame
        return None

    def _context(self, page: Page, partial_url: str) -> Page | Frame:
        if self.actions is None or not self.actions.set_frame:
            return page
        frame = self.switch_frame_by_partial_url(page, partial_url)
        if frame is None:
            logger.warning("storage.frame_not_found", partial_url=partial_url)
            return page
        return frame

    def _dump(self, page: Page, area: str, partial_url: str) -> dict[str, Any]:
        raw = self._context(page, partial_url).evaluate(_DUMP_STORAGE_JS, area)
        entries = {key: loads_lenient(value) for key, value in (raw or {}).items()}
        logger.debug("storage.read", area=area, keys=sorted(entries))
        return entries

    def local_storage(self, page: Page, partial_url: str = "") -> dict[str, Any]:
        return self._dump(page, "localStorage", partial_url)

    def session_storage(self, page: Page, partial_url: str = "") -> dict[str, Any]:
        return self._dump(page, "sessionStorage", partial_url)
