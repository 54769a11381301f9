"""uiresolve: self-healing element resolution for browser tests."""

from uiresolve.actions import ElementActions
from uiresolve.browser import BrowserManager
from uiresolve.cache import ResolutionCache
from uiresolve.compiler import compile_strategy, create_fallback, is_valid
from uiresolve.config import EngineSettings
from uiresolve.engine import ResolutionEngine
from uiresolve.exceptions import (
    ActionFailedError,
    BrowserError,
    ClickInterceptedError,
    InvalidStrategyError,
    NotFoundError,
    RetryExhaustedError,
    StaleElementError,
    UIResolveError,
)
from uiresolve.heuristics import DEFAULT_CANDIDATES, HeuristicCandidate, HeuristicSearch
from uiresolve.logger import configure_logging, get_logger
from uiresolve.models import (
    CacheEntry,
    CacheStats,
    CompiledSelector,
    LocatorStrategy,
    ResolutionAttempt,
    SelectorType,
    StrategyKind,
    sort_by_stability,
)
from uiresolve.page import BasePage
from uiresolve.retry import retry
from uiresolve.session import (
    BrowsingSession,
    ElementHandle,
    PlaywrightElement,
    PlaywrightSession,
)

__version__ = "0.1.0"

__all__ = [
    "ActionFailedError",
    "BasePage",
    "BrowserError",
    "BrowserManager",
    "BrowsingSession",
    "CacheEntry",
    "CacheStats",
    "ClickInterceptedError",
    "CompiledSelector",
    "DEFAULT_CANDIDATES",
    "ElementActions",
    "ElementHandle",
    "EngineSettings",
    "HeuristicCandidate",
    "HeuristicSearch",
    "InvalidStrategyError",
    "LocatorStrategy",
    "NotFoundError",
    "PlaywrightElement",
    "PlaywrightSession",
    "ResolutionAttempt",
    "ResolutionCache",
    "ResolutionEngine",
    "RetryExhaustedError",
    "SelectorType",
    "StaleElementError",
    "StrategyKind",
    "UIResolveError",
    "compile_strategy",
    "configure_logging",
    "create_fallback",
    "get_logger",
    "is_valid",
    "retry",
    "sort_by_stability",
    "__version__",
]
