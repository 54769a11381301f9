"""Tests for the page-object base class."""

import pytest

from uiresolve.exceptions import NotFoundError
from uiresolve.models import LocatorStrategy, SelectorType, StrategyKind
from uiresolve.page import BasePage, to_strategies


class LoginPage(BasePage):
    def login(self, username: str, password: str) -> None:
        self.fill("Username", username, "id=username")
        self.fill("Password", password, "name=password")
        self.click("Login", "css=button[type='submit']")


class TestToStrategies:
    def test_mixed(self) -> None:
        strategies = to_strategies(["id=a", LocatorStrategy.css("#b"), "//c"])
        assert [s.kind for s in strategies] == [
            StrategyKind.ID,
            StrategyKind.CSS,
            StrategyKind.CUSTOM,
        ]


class TestBasePage:
    def test_login_flow(self, session, fast_settings, make_element) -> None:
        user = make_element()
        password = make_element()
        button = make_element("Login")
        session.add(SelectorType.ID, "username", user)
        session.add(SelectorType.NAME, "password", password)
        session.add(SelectorType.CSS, "button[type='submit']", button)

        LoginPage(session, fast_settings).login("alice", "s3cret")
        assert user.filled == ["alice"]
        assert password.filled == ["s3cret"]
        assert button.clicks == 1

    def test_find_and_text(self, session, fast_settings, make_element) -> None:
        session.add(SelectorType.ID, "msg", make_element(" Hi "))
        page = BasePage(session, fast_settings)
        assert page.find("Message", "id=msg").text() == " Hi "
        assert page.text_of("Message", "id=msg") == "Hi"

    def test_find_all(self, session, fast_settings, make_element) -> None:
        session.add(SelectorType.CSS, "li", make_element(), make_element())
        assert len(BasePage(session, fast_settings).find_all("Items", "css=li")) == 2

    def test_is_present(self, session, fast_settings, make_element) -> None:
        session.add(SelectorType.ID, "a", make_element())
        page = BasePage(session, fast_settings)
        assert page.is_present("A", "id=a") is True
        assert page.is_present("B", "id=b") is False

    def test_pages_have_separate_caches(self, session, fast_settings, make_element) -> None:
        session.add(SelectorType.ID, "a", make_element())
        first = BasePage(session, fast_settings)
        second = BasePage(session, fast_settings)
        first.find("A", "id=a")
        assert second.engine.cache_stats().size == 0

    def test_find_missing_raises(self, session, fast_settings) -> None:
        with pytest.raises(NotFoundError):
            BasePage(session, fast_settings).find("!!", "id=a")
