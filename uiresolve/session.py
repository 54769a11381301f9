"""Browsing-session interface and its Playwright implementation."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

from playwright.sync_api import ElementHandle as PlaywrightHandle
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from uiresolve.compiler import xpath_literal
from uiresolve.exceptions import ClickInterceptedError, StaleElementError
from uiresolve.models import CompiledSelector, SelectorType

T = TypeVar("T")


class ElementHandle(Protocol):
    """A live element in the page, as the engine and actions see it."""

    def is_visible(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def scroll_into_view(self) -> None: ...

    def click(self) -> None: ...

    def js_click(self) -> None: ...

    def fill(self, text: str) -> None: ...

    def text(self) -> str: ...

    def attribute(self, name: str) -> str | None: ...

    def dom_property(self, name: str) -> Any: ...


class BrowsingSession(Protocol):
    """The one capability the engine needs from a browser: running a query."""

    def query(self, selector: CompiledSelector) -> Sequence[ElementHandle]: ...


# --- Playwright ---


def _css_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def to_playwright_selector(selector: CompiledSelector) -> str:
    """Translate a compiled selector into Playwright selector syntax."""
    value = selector.value
    by = selector.by
    if by is SelectorType.ID:
        return f"css=[id={_css_string(value)}]"
    if by is SelectorType.NAME:
        return f"css=[name={_css_string(value)}]"
    if by is SelectorType.CLASS_NAME:
        return f"css=[class~={_css_string(value)}]"
    if by is SelectorType.TAG_NAME:
        return f"css={value}"
    if by is SelectorType.LINK_TEXT:
        return f"xpath=//a[normalize-space(.)={xpath_literal(value.strip())}]"
    if by is SelectorType.PARTIAL_LINK_TEXT:
        return f"xpath=//a[contains(normalize-space(.), {xpath_literal(value)})]"
    if by is SelectorType.XPATH:
        return f"xpath={value}"
    if by is SelectorType.CSS:
        return f"css={value}"
    raise ValueError(f"Unsupported selector type: {by}")


def _translate_errors(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a Playwright call, mapping driver errors the engine reacts to."""
    try:
        return fn(*args, **kwargs)
    except PlaywrightError as exc:
        message = str(exc)
        if "intercepts pointer events" in message:
            raise ClickInterceptedError(message.splitlines()[0]) from exc
        if "not attached to the DOM" in message:
            raise StaleElementError(message.splitlines()[0]) from exc
        raise


class PlaywrightElement:
    """ElementHandle backed by a Playwright sync-API element handle."""

    def __init__(self, handle: PlaywrightHandle, action_timeout_ms: int = 5000) -> None:
        self._handle = handle
        self._timeout = action_timeout_ms

    @property
    def raw(self) -> PlaywrightHandle:
        """The underlying Playwright handle."""
        return self._handle

    def is_visible(self) -> bool:
        return _translate_errors(self._handle.is_visible)

    def is_enabled(self) -> bool:
        return _translate_errors(self._handle.is_enabled)

    def scroll_into_view(self) -> None:
        _translate_errors(self._handle.scroll_into_view_if_needed, timeout=self._timeout)

    def click(self) -> None:
        _translate_errors(self._handle.click, timeout=self._timeout)

    def js_click(self) -> None:
        _translate_errors(self._handle.evaluate, "el => el.click()")

    def fill(self, text: str) -> None:
        _translate_errors(self._handle.fill, text, timeout=self._timeout)

    def text(self) -> str:
        return _translate_errors(self._handle.inner_text)

    def attribute(self, name: str) -> str | None:
        return _translate_errors(self._handle.get_attribute, name)

    def dom_property(self, name: str) -> Any:
        return _translate_errors(self._handle.get_property, name).json_value()


class PlaywrightSession:
    """BrowsingSession over one Playwright page."""

    def __init__(self, page: Page, action_timeout_ms: int = 5000) -> None:
        self._page = page
        self._action_timeout_ms = action_timeout_ms

    @property
    def page(self) -> Page:
        return self._page

    def query(self, selector: CompiledSelector) -> list[PlaywrightElement]:
        handles = self._page.query_selector_all(to_playwright_selector(selector))
        return [PlaywrightElement(h, self._action_timeout_ms) for h in handles]
