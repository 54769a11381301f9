"""Playwright browser manager for uiresolve."""

from __future__ import annotations

from typing import Any

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    sync_playwright,
)

from uiresolve.config import EngineSettings
from uiresolve.exceptions import BrowserError
from uiresolve.logger import get_logger
from uiresolve.session import PlaywrightSession

log = get_logger(__name__)


class BrowserManager:
    """Manages the Playwright browser lifecycle and hands out sessions.

    Engines never see Playwright objects directly. They get a
    ``PlaywrightSession`` from ``session()``, which wraps the current page
    and carries the configured action timeout, so a page reopened by
    ``get_page()`` is picked up by the next session handed out.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    def start(self, headless: bool = True) -> None:
        """Launch browser."""
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=headless)
            self._context = self._browser.new_context()
            self._page = self._context.new_page()
            log.info("browser_started", headless=headless)
        except Exception as exc:
            self.stop()
            raise BrowserError(f"Failed to start browser: {exc}") from exc

    def stop(self) -> None:
        """Close browser and cleanup."""
        try:
            if self._page and not self._page.is_closed():
                self._page.close()
            if self._context:
                self._context.close()
            if self._browser:
                self._browser.close()
            if self._playwright:
                self._playwright.stop()
        except Exception as exc:
            log.warning("browser_stop_error", error=str(exc))
        finally:
            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None
            log.info("browser_stopped")

    def get_page(self) -> Page:
        """Get the current page, opening a new one if it was closed."""
        if self._page and not self._page.is_closed():
            return self._page
        if self._context:
            self._page = self._context.new_page()
            return self._page
        raise BrowserError("Browser not started, call start() first")

    def session(self) -> PlaywrightSession:
        """A browsing session over the current page."""
        return PlaywrightSession(
            self.get_page(), action_timeout_ms=self.settings.action_timeout_ms
        )

    @property
    def current_url(self) -> str:
        """Current page URL."""
        if self._page and not self._page.is_closed():
            return self._page.url
        return ""

    def __enter__(self) -> BrowserManager:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()
