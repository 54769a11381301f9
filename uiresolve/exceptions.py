"""uiresolve exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uiresolve.models import LocatorStrategy


class UIResolveError(Exception):
    """Base exception for all uiresolve errors."""


class InvalidStrategyError(UIResolveError):
    """Raised when a locator strategy cannot be compiled."""

    def __init__(self, strategy: LocatorStrategy, reason: str) -> None:
        self.strategy = strategy
        self.reason = reason
        super().__init__(f"Invalid strategy {strategy.describe}: {reason}")


class NotFoundError(UIResolveError):
    """Raised when no strategy, fallback, or heuristic matched."""

    def __init__(self, element_name: str, attempted: list[str]) -> None:
        self.element_name = element_name
        self.attempted = attempted
        tried = ", ".join(attempted) if attempted else "nothing"
        super().__init__(f"Unable to locate element '{element_name}'. Tried: {tried}")


class RetryExhaustedError(UIResolveError):
    """Raised when a bounded retry runs out of attempts or time."""

    def __init__(
        self,
        description: str,
        attempts: int,
        elapsed: float,
        last_error: BaseException | None = None,
    ) -> None:
        self.description = description
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_error = last_error
        msg = f"Gave up on {description} after {attempts} attempt(s) in {elapsed:.2f}s"
        if last_error is not None:
            msg += f": {type(last_error).__name__}: {last_error}"
        super().__init__(msg)


class ActionFailedError(UIResolveError):
    """Raised when an action on an element fails on every attempt."""

    def __init__(
        self,
        element_name: str,
        action: str,
        attempts: int,
        last_error: BaseException | None = None,
    ) -> None:
        self.element_name = element_name
        self.action = action
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Action '{action}' failed after {attempts} attempt(s) "
            f"on element '{element_name}': {last_error}"
        )


class ClickInterceptedError(UIResolveError):
    """Raised by a session when another element receives the click."""


class StaleElementError(UIResolveError):
    """Raised by a session when a handle is no longer attached to the page."""


class BrowserError(UIResolveError):
    """Raised on browser lifecycle errors."""
