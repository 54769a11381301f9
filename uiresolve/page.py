"""Base class for page objects."""

from __future__ import annotations

from collections.abc import Iterable

from uiresolve.actions import ElementActions
from uiresolve.config import EngineSettings
from uiresolve.engine import ResolutionEngine
from uiresolve.models import LocatorStrategy
from uiresolve.session import BrowsingSession, ElementHandle

Locator = LocatorStrategy | str


def to_strategies(locators: Iterable[Locator]) -> tuple[LocatorStrategy, ...]:
    """Accept strategies or prefixed strings such as ``"css=#login"``."""
    return tuple(
        loc if isinstance(loc, LocatorStrategy) else LocatorStrategy.parse(loc)
        for loc in locators
    )


class BasePage:
    """Base class for page objects.

    Each page object owns one engine, and so one cache, bound to the
    session it was built with.

    Usage:
        class LoginPage(BasePage):
            def login(self, username: str, password: str) -> None:
                self.fill("Username", username, "id=username")
                self.fill("Password", password, "name=password")
                self.click("Login", "css=button[type='submit']")
    """

    def __init__(
        self,
        session: BrowsingSession,
        settings: EngineSettings | None = None,
    ) -> None:
        self.session = session
        self.engine = ResolutionEngine(session, settings)
        self.actions = ElementActions(self.engine)

    def find(self, element_name: str, *locators: Locator) -> ElementHandle:
        return self.engine.resolve(element_name, *to_strategies(locators))

    def find_all(self, element_name: str, *locators: Locator) -> list[ElementHandle]:
        return self.engine.resolve_all(element_name, *to_strategies(locators))

    def click(self, element_name: str, *locators: Locator) -> None:
        self.actions.click(element_name, *to_strategies(locators))

    def fill(self, element_name: str, text: str, *locators: Locator) -> None:
        self.actions.fill(element_name, text, *to_strategies(locators))

    def text_of(self, element_name: str, *locators: Locator) -> str:
        return self.actions.text_of(element_name, *to_strategies(locators))

    def is_present(self, element_name: str, locator: Locator) -> bool:
        (strategy,) = to_strategies([locator])
        return self.engine.is_present(element_name, strategy)
