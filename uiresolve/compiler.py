"""Selector compiler: turns locator strategies into session-native selectors."""

from __future__ import annotations

import re
from collections.abc import Callable

from uiresolve.exceptions import InvalidStrategyError
from uiresolve.logger import get_logger
from uiresolve.models import CompiledSelector, LocatorStrategy, SelectorType, StrategyKind

log = get_logger(__name__)

_CSS_SHAPED = re.compile(r".*[#.\[\]>+~:].*", re.DOTALL)
_BARE_TAG = re.compile(r"^[a-zA-Z][a-zA-Z0-9\-_]*$")

_ATTRIBUTE_KINDS: dict[StrategyKind, str] = {
    StrategyKind.TEST_ID: "data-testid",
    StrategyKind.ARIA_LABEL: "aria-label",
    StrategyKind.PLACEHOLDER: "placeholder",
    StrategyKind.ALT_TEXT: "alt",
    StrategyKind.TITLE: "title",
}

_NATIVE_KINDS: dict[StrategyKind, SelectorType] = {
    StrategyKind.ID: SelectorType.ID,
    StrategyKind.NAME: SelectorType.NAME,
    StrategyKind.CLASS_NAME: SelectorType.CLASS_NAME,
    StrategyKind.TAG_NAME: SelectorType.TAG_NAME,
    StrategyKind.LINK_TEXT: SelectorType.LINK_TEXT,
    StrategyKind.PARTIAL_LINK_TEXT: SelectorType.PARTIAL_LINK_TEXT,
    StrategyKind.XPATH: SelectorType.XPATH,
    StrategyKind.CSS: SelectorType.CSS,
}


def xpath_literal(value: str) -> str:
    """Quote a string for use inside an XPath expression.

    XPath 1.0 has no escape sequences, so values holding both quote
    characters are assembled with ``concat()``.
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


def css_attribute(attr: str, value: str) -> str:
    """Build an attribute-equality CSS selector: ``[attr='value']``."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"[{attr}='{escaped}']"


def classify_custom(value: str) -> CompiledSelector:
    """Decide whether a free-form selector is XPath or CSS.

    Anything that does not look like either is treated as CSS and flagged
    ``ambiguous``.
    """
    if value.startswith("//") or value.startswith("(//"):
        return CompiledSelector(by=SelectorType.XPATH, value=value)
    if (
        value.startswith("#")
        or value.startswith(".")
        or "[" in value
        or ">" in value
    ):
        return CompiledSelector(by=SelectorType.CSS, value=value)
    log.warning("ambiguous_custom_locator", value=value, defaulted_to="css")
    return CompiledSelector(by=SelectorType.CSS, value=value, ambiguous=True)


def _compile_native(strategy: LocatorStrategy) -> CompiledSelector:
    return CompiledSelector(by=_NATIVE_KINDS[strategy.kind], value=strategy.value)


def _compile_attribute(strategy: LocatorStrategy) -> CompiledSelector:
    attr = _ATTRIBUTE_KINDS[strategy.kind]
    return CompiledSelector(by=SelectorType.CSS, value=css_attribute(attr, strategy.value))


def _compile_text(strategy: LocatorStrategy) -> CompiledSelector:
    return CompiledSelector(
        by=SelectorType.XPATH,
        value=f"//*[contains(text(), {xpath_literal(strategy.value)})]",
    )


def _compile_custom(strategy: LocatorStrategy) -> CompiledSelector:
    return classify_custom(strategy.value)


_COMPILERS: dict[StrategyKind, Callable[[LocatorStrategy], CompiledSelector]] = {
    **{kind: _compile_native for kind in _NATIVE_KINDS},
    **{kind: _compile_attribute for kind in _ATTRIBUTE_KINDS},
    StrategyKind.TEXT_CONTENT: _compile_text,
    StrategyKind.CUSTOM: _compile_custom,
}

_missing = set(StrategyKind) - set(_COMPILERS)
if _missing:
    raise RuntimeError(f"No compiler for strategy kinds: {sorted(k.value for k in _missing)}")


def validation_error(strategy: LocatorStrategy) -> str | None:
    """Return why a strategy is invalid, or None when it is usable."""
    value = strategy.value
    if not value or not value.strip():
        return "value is blank"
    if strategy.kind is StrategyKind.XPATH:
        if not ("/" in value or "@" in value or "[" in value):
            return "not an XPath expression"
    elif strategy.kind is StrategyKind.CSS:
        if not (_CSS_SHAPED.match(value) or _BARE_TAG.match(value)):
            return "not a CSS selector or tag name"
    elif strategy.kind is StrategyKind.ID:
        if any(ch.isspace() for ch in value):
            return "id contains whitespace"
    return None


def is_valid(strategy: LocatorStrategy) -> bool:
    """Check whether a strategy is well-formed enough to be tried."""
    return validation_error(strategy) is None


def compile_strategy(strategy: LocatorStrategy) -> CompiledSelector:
    """Compile a strategy into a session-native selector.

    Raises:
        InvalidStrategyError: If the strategy fails validation.
    """
    reason = validation_error(strategy)
    if reason is not None:
        raise InvalidStrategyError(strategy, reason)
    return _COMPILERS[strategy.kind](strategy)


def create_fallback(strategy: LocatorStrategy) -> LocatorStrategy | None:
    """Derive a second-chance CSS/XPath strategy from a native one.

    Returns None for kinds that have no alternative form.
    """
    value = strategy.value
    kind = strategy.kind
    if kind is StrategyKind.ID:
        return LocatorStrategy.css(f"#{value}")
    if kind is StrategyKind.CLASS_NAME:
        return LocatorStrategy.css(f".{value}")
    if kind is StrategyKind.TAG_NAME:
        return LocatorStrategy.css(value)
    if kind is StrategyKind.NAME:
        return LocatorStrategy.css(css_attribute("name", value))
    if kind is StrategyKind.LINK_TEXT:
        return LocatorStrategy.xpath(f"//a[text()={xpath_literal(value)}]")
    if kind is StrategyKind.PARTIAL_LINK_TEXT:
        return LocatorStrategy.xpath(f"//a[contains(text(), {xpath_literal(value)})]")
    return None
