"""Shared test fixtures for uiresolve."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from uiresolve.config import EngineSettings
from uiresolve.engine import ResolutionEngine
from uiresolve.models import CompiledSelector, SelectorType

# Path to test fixtures
FIXTURES_DIR = Path(__file__).parent / "fixtures"
MOCK_PAGES_DIR = FIXTURES_DIR / "mock_pages"


class FakeElement:
    """In-memory element; records every interaction."""

    def __init__(
        self,
        text: str = "",
        *,
        visible: bool = True,
        enabled: bool = True,
        attributes: dict[str, str] | None = None,
        properties: dict[str, Any] | None = None,
        click_errors: list[Exception] | None = None,
        fill_errors: list[Exception] | None = None,
    ) -> None:
        self._text = text
        self.visible = visible
        self.enabled = enabled
        self.attributes = attributes or {}
        self.properties = properties or {}
        self._click_errors = list(click_errors or [])
        self._fill_errors = list(fill_errors or [])
        self.clicks = 0
        self.js_clicks = 0
        self.scrolls = 0
        self.filled: list[str] = []

    def is_visible(self) -> bool:
        return self.visible

    def is_enabled(self) -> bool:
        return self.enabled

    def scroll_into_view(self) -> None:
        self.scrolls += 1

    def click(self) -> None:
        if self._click_errors:
            raise self._click_errors.pop(0)
        self.clicks += 1

    def js_click(self) -> None:
        self.js_clicks += 1

    def fill(self, text: str) -> None:
        if self._fill_errors:
            raise self._fill_errors.pop(0)
        self.filled.append(text)

    def text(self) -> str:
        return self._text

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def dom_property(self, name: str) -> Any:
        return self.properties.get(name)


class FakeSession:
    """Answers queries from a table of (selector type, value) -> elements."""

    def __init__(self) -> None:
        self._elements: dict[tuple[SelectorType, str], list[FakeElement]] = {}
        self.queries: list[str] = []

    def add(self, by: SelectorType, value: str, *elements: FakeElement) -> None:
        self._elements.setdefault((by, value), []).extend(elements)

    def remove(self, by: SelectorType, value: str) -> None:
        self._elements.pop((by, value), None)

    def query(self, selector: CompiledSelector) -> list[FakeElement]:
        self.queries.append(str(selector))
        return list(self._elements.get((selector.by, selector.value), []))


@pytest.fixture
def fast_settings() -> EngineSettings:
    """Settings that never wait: one query per candidate, no pause between actions."""
    return EngineSettings(timeout_s=0, action_retry_delay_s=0)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_element() -> Callable[..., FakeElement]:
    return FakeElement


@pytest.fixture
def engine(session: FakeSession, fast_settings: EngineSettings) -> ResolutionEngine:
    return ResolutionEngine(session, fast_settings)


@pytest.fixture
def login_form_path() -> Path:
    """Path to the login form test page."""
    return MOCK_PAGES_DIR / "login_form.html"
