"""Resolution engine: cache, ordered strategies, fallbacks, heuristic search."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from operator import attrgetter
from typing import TypeVar

from uiresolve.cache import ResolutionCache
from uiresolve.compiler import compile_strategy, create_fallback, is_valid
from uiresolve.config import EngineSettings
from uiresolve.exceptions import (
    ActionFailedError,
    InvalidStrategyError,
    NotFoundError,
    RetryExhaustedError,
)
from uiresolve.heuristics import HeuristicSearch
from uiresolve.logger import get_logger
from uiresolve.models import (
    CacheStats,
    CompiledSelector,
    LocatorStrategy,
    ResolutionAttempt,
)
from uiresolve.retry import retry
from uiresolve.session import BrowsingSession, ElementHandle

log = get_logger(__name__)

T = TypeVar("T")

Acceptor = Callable[[ElementHandle], bool]


def _acceptor(require_visible: bool, require_enabled: bool = False) -> Acceptor:
    def accept(handle: ElementHandle) -> bool:
        if require_visible and not handle.is_visible():
            return False
        if require_enabled and not handle.is_enabled():
            return False
        return True

    return accept


class ResolutionEngine:
    """Turns a logical element name plus locator strategies into a live element.

    Resolution order is: cached selector, supplied strategies by ascending
    priority (ties keep their input order), alternative forms of stable
    strategies that failed, then heuristic search by name. Every query is
    polled for up to ``settings.timeout_s`` before it counts as a miss.

    An engine is bound to one browsing session and owns its cache. It is
    not thread-safe; parallel tests each get their own engine.
    """

    def __init__(
        self,
        session: BrowsingSession,
        settings: EngineSettings | None = None,
        heuristics: HeuristicSearch | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self.settings = settings or EngineSettings()
        self.heuristics = heuristics or HeuristicSearch()
        self._cache = ResolutionCache()
        self._sleep = sleep
        self._clock = clock

    @property
    def session(self) -> BrowsingSession:
        return self._session

    # --- Resolution ---

    def resolve(self, element_name: str, *strategies: LocatorStrategy) -> ElementHandle:
        """Resolve a single element.

        Raises:
            NotFoundError: If the cache, every strategy, every fallback and
                the heuristic search all miss.
        """
        return self._resolve(element_name, strategies)

    def resolve_all(
        self, element_name: str, *strategies: LocatorStrategy
    ) -> list[ElementHandle]:
        """Return every element matched by the first strategy that matches any.

        Skips the cache and ignores visibility. Returns an empty list when
        nothing matches, heuristic search included.
        """
        deadline = self._deadline()
        for strategy in sorted(strategies, key=attrgetter("priority")):
            selector = self._compile(element_name, strategy)
            if selector is None:
                continue
            handles = self._poll_all(selector, deadline)
            if handles:
                log.debug(
                    "elements_resolved",
                    element=element_name,
                    selector=str(selector),
                    count=len(handles),
                )
                return handles

        handles, _ = self.heuristics.search_all(
            element_name, lambda sel: self._poll_all(sel, deadline)
        )
        if not handles:
            log.info("no_elements_found", element=element_name)
        return handles

    def wait_for(
        self,
        element_name: str,
        strategy: LocatorStrategy,
        timeout: float | None = None,
    ) -> ElementHandle:
        """Wait until the element is present and visible."""
        return self._resolve(
            element_name,
            (strategy.with_visibility(True),),
            timeout=timeout,
            require_visible=True,
        )

    def wait_for_clickable(
        self,
        element_name: str,
        strategy: LocatorStrategy,
        timeout: float | None = None,
    ) -> ElementHandle:
        """Wait until the element is visible and enabled."""
        return self._resolve(
            element_name,
            (strategy.with_visibility(True),),
            timeout=timeout,
            require_visible=True,
            require_enabled=True,
        )

    def is_present(self, element_name: str, strategy: LocatorStrategy) -> bool:
        """Check once, without waiting, whether the strategy matches anything."""
        return self._check_once(element_name, strategy, _acceptor(False))

    def is_visible(self, element_name: str, strategy: LocatorStrategy) -> bool:
        """Check once, without waiting, whether the strategy matches a visible element."""
        return self._check_once(element_name, strategy, _acceptor(True))

    # --- Actions ---

    def perform(
        self,
        element_name: str,
        action: Callable[[ElementHandle], T],
        *strategies: LocatorStrategy,
        description: str = "action",
    ) -> T:
        """Resolve the element and run ``action`` on it, retrying the pair.

        Each attempt re-resolves, so a stale or intercepted element is
        looked up afresh. Attempts and the pause between them come from
        the settings.

        Raises:
            ActionFailedError: When every attempt failed.
        """

        def attempt() -> T:
            return action(self.resolve(element_name, *strategies))

        def on_error(attempt_no: int, exc: BaseException) -> None:
            log.warning(
                "action_attempt_failed",
                element=element_name,
                action=description,
                attempt=attempt_no,
                error=str(exc)[:200],
            )

        try:
            return retry(
                attempt,
                attempts=self.settings.action_attempts,
                interval=self.settings.action_retry_delay_s,
                until=lambda _: True,
                description=f"{description} on '{element_name}'",
                on_error=on_error,
                sleep=self._sleep,
                clock=self._clock,
            )
        except RetryExhaustedError as exc:
            log.error(
                "action_failed",
                element=element_name,
                action=description,
                attempts=exc.attempts,
            )
            raise ActionFailedError(
                element_name, description, exc.attempts, exc.last_error
            ) from exc.last_error

    # --- Cache ---

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    # --- Private helpers ---

    def _resolve(
        self,
        element_name: str,
        strategies: Sequence[LocatorStrategy],
        timeout: float | None = None,
        require_visible: bool = False,
        require_enabled: bool = False,
    ) -> ElementHandle:
        start = self._clock()
        deadline = self._deadline()
        tried: list[str] = []

        entry = self._cache.get(element_name)
        if entry is not None:
            cached = entry.selector
            tried.append(str(cached))
            accept = _acceptor(
                entry.requires_visibility or require_visible, require_enabled
            )
            handle = self._poll(cached, accept, deadline, timeout)
            if handle is not None:
                log.debug("cache_hit", element=element_name, selector=str(cached))
                self._log_attempt(element_name, tried, "cache", cached, start)
                return handle
            log.info("cached_locator_failed", element=element_name, selector=str(cached))
            self._cache.evict(element_name)

        failed_stable: list[LocatorStrategy] = []
        for strategy in sorted(strategies, key=attrgetter("priority")):
            selector = self._compile(element_name, strategy)
            if selector is None:
                continue
            tried.append(str(selector))
            accept = _acceptor(strategy.requires_visibility, require_enabled)
            handle = self._poll(selector, accept, deadline, timeout)
            if handle is not None:
                return self._found(
                    element_name,
                    handle,
                    selector,
                    tried,
                    "explicit",
                    start,
                    requires_visibility=strategy.requires_visibility,
                )
            log.debug(
                "strategy_failed", element=element_name, strategy=strategy.describe
            )
            if strategy.stable:
                failed_stable.append(strategy)

        for strategy in failed_stable:
            fallback = create_fallback(strategy)
            if fallback is None or not is_valid(fallback):
                continue
            selector = compile_strategy(fallback)
            if str(selector) in tried:
                continue
            tried.append(str(selector))
            accept = _acceptor(strategy.requires_visibility, require_enabled)
            handle = self._poll(selector, accept, deadline, timeout)
            if handle is not None:
                log.info(
                    "fallback_used",
                    element=element_name,
                    original=strategy.describe,
                    selector=str(selector),
                )
                return self._found(
                    element_name,
                    handle,
                    selector,
                    tried,
                    "fallback",
                    start,
                    requires_visibility=strategy.requires_visibility,
                )

        if strategies:
            log.warning("explicit_strategies_exhausted", element=element_name)

        accept = _acceptor(True, require_enabled)
        try:
            handle, selector = self.heuristics.search(
                element_name, lambda sel: self._poll(sel, accept, deadline, timeout)
            )
        except NotFoundError as exc:
            tried.extend(exc.attempted)
            self._log_attempt(element_name, tried, "not_found", None, start)
            log.error("element_not_found", element=element_name, tried=len(tried))
            raise NotFoundError(element_name, tried) from None
        tried.append(str(selector))
        return self._found(element_name, handle, selector, tried, "heuristic", start)

    def _compile(
        self, element_name: str, strategy: LocatorStrategy
    ) -> CompiledSelector | None:
        try:
            return compile_strategy(strategy)
        except InvalidStrategyError as exc:
            log.warning(
                "strategy_skipped",
                element=element_name,
                strategy=strategy.describe,
                reason=exc.reason,
            )
            return None

    def _found(
        self,
        element_name: str,
        handle: ElementHandle,
        selector: CompiledSelector,
        tried: list[str],
        outcome: str,
        start: float,
        requires_visibility: bool = True,
    ) -> ElementHandle:
        self._cache.put(element_name, selector, requires_visibility)
        log.debug(
            "element_resolved",
            element=element_name,
            selector=str(selector),
            outcome=outcome,
        )
        self._log_attempt(element_name, tried, outcome, selector, start)
        return handle

    def _log_attempt(
        self,
        element_name: str,
        tried: list[str],
        outcome: str,
        selector: CompiledSelector | None,
        start: float,
    ) -> None:
        attempt = ResolutionAttempt(
            element_name=element_name,
            tried=list(tried),
            outcome=outcome,
            selector=str(selector) if selector is not None else None,
            duration_ms=(self._clock() - start) * 1000,
        )
        log.debug("resolution_attempt", **attempt.model_dump())

    def _deadline(self) -> float | None:
        budget = self.settings.resolve_budget_s
        if budget is None:
            return None
        return self._clock() + budget

    def _query_timeout(self, deadline: float | None, timeout: float | None) -> float:
        per_query = self.settings.timeout_s if timeout is None else timeout
        if deadline is None:
            return per_query
        return max(0.0, min(per_query, deadline - self._clock()))

    def _poll(
        self,
        selector: CompiledSelector,
        accept: Acceptor,
        deadline: float | None,
        timeout: float | None = None,
    ) -> ElementHandle | None:
        """Poll one selector until an acceptable element appears or time runs out."""

        def probe() -> ElementHandle | None:
            for handle in self._session.query(selector):
                if accept(handle):
                    return handle
            return None

        try:
            return retry(
                probe,
                timeout=self._query_timeout(deadline, timeout),
                interval=self.settings.poll_interval_s,
                until=lambda handle: handle is not None,
                description=f"query {selector}",
                sleep=self._sleep,
                clock=self._clock,
            )
        except RetryExhaustedError:
            return None

    def _poll_all(
        self, selector: CompiledSelector, deadline: float | None
    ) -> list[ElementHandle]:
        try:
            return list(
                retry(
                    lambda: list(self._session.query(selector)),
                    timeout=self._query_timeout(deadline, None),
                    interval=self.settings.poll_interval_s,
                    description=f"query all {selector}",
                    sleep=self._sleep,
                    clock=self._clock,
                )
            )
        except RetryExhaustedError:
            return []

    def _check_once(
        self, element_name: str, strategy: LocatorStrategy, accept: Acceptor
    ) -> bool:
        selector = self._compile(element_name, strategy)
        if selector is None:
            return False
        try:
            return any(accept(handle) for handle in self._session.query(selector))
        except Exception as exc:
            log.debug("presence_check_failed", element=element_name, error=str(exc))
            return False
