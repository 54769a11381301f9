"""Tests for the Playwright session adapter."""

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from uiresolve.exceptions import ClickInterceptedError, StaleElementError
from uiresolve.models import CompiledSelector, SelectorType
from uiresolve.session import PlaywrightElement, PlaywrightSession, to_playwright_selector


def _sel(by: SelectorType, value: str) -> CompiledSelector:
    return CompiledSelector(by=by, value=value)


class TestSelectorTranslation:
    @pytest.mark.parametrize(
        ("by", "value", "expected"),
        [
            (SelectorType.ID, "login", 'css=[id="login"]'),
            (SelectorType.ID, "a.b", 'css=[id="a.b"]'),
            (SelectorType.NAME, "user", 'css=[name="user"]'),
            (SelectorType.CLASS_NAME, "btn", 'css=[class~="btn"]'),
            (SelectorType.TAG_NAME, "form", "css=form"),
            (SelectorType.CSS, "#x > li", "css=#x > li"),
            (SelectorType.XPATH, "//a", "xpath=//a"),
            (SelectorType.LINK_TEXT, " Home ", "xpath=//a[normalize-space(.)='Home']"),
            (
                SelectorType.PARTIAL_LINK_TEXT,
                "Ho",
                "xpath=//a[contains(normalize-space(.), 'Ho')]",
            ),
        ],
    )
    def test_translation(self, by: SelectorType, value: str, expected: str) -> None:
        assert to_playwright_selector(_sel(by, value)) == expected

    def test_quote_in_id(self) -> None:
        assert to_playwright_selector(_sel(SelectorType.ID, 'a"b')) == 'css=[id="a\\"b"]'


class TestPlaywrightSession:
    def test_query_wraps_handles(self) -> None:
        page = MagicMock()
        raw = [MagicMock(), MagicMock()]
        page.query_selector_all.return_value = raw
        session = PlaywrightSession(page, action_timeout_ms=1234)

        result = session.query(_sel(SelectorType.CSS, "li"))
        page.query_selector_all.assert_called_once_with("css=li")
        assert [r.raw for r in result] == raw

    def test_empty_query(self) -> None:
        page = MagicMock()
        page.query_selector_all.return_value = []
        assert PlaywrightSession(page).query(_sel(SelectorType.ID, "x")) == []


class TestPlaywrightElement:
    def test_click_passes_timeout(self) -> None:
        raw = MagicMock()
        PlaywrightElement(raw, action_timeout_ms=1234).click()
        raw.click.assert_called_once_with(timeout=1234)

    def test_fill(self) -> None:
        raw = MagicMock()
        PlaywrightElement(raw, action_timeout_ms=50).fill("abc")
        raw.fill.assert_called_once_with("abc", timeout=50)

    def test_js_click(self) -> None:
        raw = MagicMock()
        PlaywrightElement(raw).js_click()
        raw.evaluate.assert_called_once_with("el => el.click()")

    def test_reads(self) -> None:
        raw = MagicMock()
        raw.inner_text.return_value = "Hello"
        raw.get_attribute.return_value = "/home"
        raw.get_property.return_value.json_value.return_value = "value"
        raw.is_visible.return_value = True
        el = PlaywrightElement(raw)
        assert el.text() == "Hello"
        assert el.attribute("href") == "/home"
        assert el.dom_property("value") == "value"
        assert el.is_visible() is True
        raw.get_property.assert_called_once_with("value")

    def test_intercepted_click_mapped(self) -> None:
        raw = MagicMock()
        raw.click.side_effect = PlaywrightError(
            "Element click failed: <div class=overlay> intercepts pointer events\nretrying"
        )
        with pytest.raises(ClickInterceptedError, match="intercepts pointer events"):
            PlaywrightElement(raw).click()

    def test_detached_mapped(self) -> None:
        raw = MagicMock()
        raw.inner_text.side_effect = PlaywrightError("Element is not attached to the DOM")
        with pytest.raises(StaleElementError):
            PlaywrightElement(raw).text()

    def test_other_errors_propagate(self) -> None:
        raw = MagicMock()
        raw.click.side_effect = PlaywrightError("Timeout 5000ms exceeded")
        with pytest.raises(PlaywrightError):
            PlaywrightElement(raw).click()
