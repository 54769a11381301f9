"""All Pydantic models for uiresolve."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# --- Strategy kinds ---


class StrategyKind(str, Enum):
    """Ways of describing an element.

    ``CSS`` is the attribute query and ``XPATH`` the structural query.
    """

    ID = "id"
    NAME = "name"
    CLASS_NAME = "className"
    TAG_NAME = "tagName"
    LINK_TEXT = "linkText"
    PARTIAL_LINK_TEXT = "partialLinkText"
    CSS = "cssSelector"
    XPATH = "xpath"
    TEST_ID = "dataTestId"
    ARIA_LABEL = "ariaLabel"
    PLACEHOLDER = "placeholder"
    ALT_TEXT = "altText"
    TITLE = "title"
    TEXT_CONTENT = "textContent"
    CUSTOM = "custom"


class _KindDefaults(NamedTuple):
    label: str
    priority: int
    stable: bool
    requires_visibility: bool
    stability_bonus: int


KIND_DEFAULTS: dict[StrategyKind, _KindDefaults] = {
    StrategyKind.ID: _KindDefaults("ID", 1, True, True, 30),
    StrategyKind.NAME: _KindDefaults("NAME", 2, True, True, 25),
    StrategyKind.CLASS_NAME: _KindDefaults("CLASS", 3, False, False, 5),
    StrategyKind.TAG_NAME: _KindDefaults("TAG", 4, False, False, 5),
    StrategyKind.LINK_TEXT: _KindDefaults("LINK_TEXT", 5, True, True, 20),
    StrategyKind.PARTIAL_LINK_TEXT: _KindDefaults("PARTIAL_LINK_TEXT", 6, True, False, 0),
    StrategyKind.CSS: _KindDefaults("CSS", 7, False, False, 15),
    StrategyKind.XPATH: _KindDefaults("XPATH", 8, False, False, 10),
    StrategyKind.TEST_ID: _KindDefaults("DATA_TESTID", 1, True, True, 30),
    StrategyKind.ARIA_LABEL: _KindDefaults("ARIA_LABEL", 2, True, True, 25),
    StrategyKind.PLACEHOLDER: _KindDefaults("PLACEHOLDER", 3, True, False, 20),
    StrategyKind.ALT_TEXT: _KindDefaults("ALT_TEXT", 4, True, False, 0),
    StrategyKind.TITLE: _KindDefaults("TITLE", 5, True, False, 0),
    StrategyKind.TEXT_CONTENT: _KindDefaults("TEXT_CONTENT", 6, True, False, 0),
    StrategyKind.CUSTOM: _KindDefaults("CUSTOM", 9, False, False, 0),
}

# Prefixes accepted by LocatorStrategy.parse, e.g. "css=#login".
_PARSE_PREFIXES: dict[str, StrategyKind] = {
    "id=": StrategyKind.ID,
    "name=": StrategyKind.NAME,
    "class=": StrategyKind.CLASS_NAME,
    "xpath=": StrategyKind.XPATH,
    "css=": StrategyKind.CSS,
    "linkText=": StrategyKind.LINK_TEXT,
    "partialLinkText=": StrategyKind.PARTIAL_LINK_TEXT,
    "tagName=": StrategyKind.TAG_NAME,
}


class LocatorStrategy(BaseModel):
    """One immutable way of finding an element.

    Build instances through the per-kind constructors (``by_id``, ``css``,
    ``test_id``...) so that priority, visibility and stability pick up the
    defaults for the kind.
    """

    model_config = ConfigDict(frozen=True)

    kind: StrategyKind
    value: str
    priority: int
    requires_visibility: bool
    stable: bool
    description: str | None = None

    @classmethod
    def of(
        cls,
        kind: StrategyKind,
        value: str,
        *,
        priority: int | None = None,
        requires_visibility: bool | None = None,
        stable: bool | None = None,
        description: str | None = None,
    ) -> LocatorStrategy:
        """Build a strategy, filling unset fields from the kind defaults."""
        defaults = KIND_DEFAULTS[kind]
        return cls(
            kind=kind,
            value=value,
            priority=defaults.priority if priority is None else priority,
            requires_visibility=(
                defaults.requires_visibility
                if requires_visibility is None
                else requires_visibility
            ),
            stable=defaults.stable if stable is None else stable,
            description=description,
        )

    @classmethod
    def by_id(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.ID, value)

    @classmethod
    def name(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.CLASS_NAME, value)

    @classmethod
    def tag_name(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.TAG_NAME, value)

    @classmethod
    def link_text(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.LINK_TEXT, value)

    @classmethod
    def partial_link_text(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.PARTIAL_LINK_TEXT, value)

    @classmethod
    def css(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.XPATH, value)

    @classmethod
    def test_id(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.TEST_ID, value)

    @classmethod
    def aria_label(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.ARIA_LABEL, value)

    @classmethod
    def placeholder(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.PLACEHOLDER, value)

    @classmethod
    def alt_text(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.ALT_TEXT, value)

    @classmethod
    def title(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.TITLE, value)

    @classmethod
    def text_content(cls, value: str) -> LocatorStrategy:
        return cls.of(StrategyKind.TEXT_CONTENT, value)

    @classmethod
    def custom(cls, value: str, description: str | None = None) -> LocatorStrategy:
        """Free-form selector, classified as XPath or CSS when compiled."""
        return cls.of(
            StrategyKind.CUSTOM,
            value,
            description=f"CUSTOM: {description}" if description else None,
        )

    @classmethod
    def parse(cls, locator: str) -> LocatorStrategy:
        """Parse a prefixed locator string such as ``"id=login"``.

        Strings without a known prefix become custom strategies.
        """
        for prefix, kind in _PARSE_PREFIXES.items():
            if locator.startswith(prefix):
                return cls.of(kind, locator[len(prefix):])
        return cls.custom(locator)

    def with_priority(self, priority: int) -> LocatorStrategy:
        """Return a copy with a different priority."""
        return self.model_copy(update={"priority": priority})

    def with_visibility(self, requires_visibility: bool) -> LocatorStrategy:
        """Return a copy with a different visibility requirement."""
        return self.model_copy(update={"requires_visibility": requires_visibility})

    @property
    def describe(self) -> str:
        """Human-readable name used in logs, e.g. ``"ID: btn-submit"``."""
        if self.description:
            return self.description
        return f"{KIND_DEFAULTS[self.kind].label}: {self.value}"

    @property
    def stability_score(self) -> int:
        """Diagnostic score, higher means more likely to survive markup churn."""
        score = 50 if self.stable else 0
        return score + KIND_DEFAULTS[self.kind].stability_bonus


def sort_by_stability(strategies: Iterable[LocatorStrategy]) -> list[LocatorStrategy]:
    """Order strategies by descending stability score (diagnostics only)."""
    return sorted(strategies, key=lambda s: s.stability_score, reverse=True)


# --- Compiled selectors ---


class SelectorType(str, Enum):
    """Native lookup mechanisms understood by a browsing session."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    XPATH = "xpath"
    CSS = "css selector"


_SELECTOR_PREFIX: dict[SelectorType, str] = {
    SelectorType.ID: "id",
    SelectorType.NAME: "name",
    SelectorType.CLASS_NAME: "class",
    SelectorType.TAG_NAME: "tag",
    SelectorType.LINK_TEXT: "linkText",
    SelectorType.PARTIAL_LINK_TEXT: "partialLinkText",
    SelectorType.XPATH: "xpath",
    SelectorType.CSS: "css",
}


class CompiledSelector(BaseModel):
    """A session-native selector expression."""

    model_config = ConfigDict(frozen=True)

    by: SelectorType
    value: str
    ambiguous: bool = Field(default=False, exclude=True)

    @property
    def expression(self) -> str:
        """Compact form used in logs and error messages, e.g. ``css=#login``."""
        return f"{_SELECTOR_PREFIX[self.by]}={self.value}"

    def __str__(self) -> str:
        return self.expression


class CacheEntry(BaseModel):
    """A cached selector and the visibility its original strategy demanded."""

    model_config = ConfigDict(frozen=True)

    selector: CompiledSelector
    requires_visibility: bool = True


# --- Diagnostics ---


class ResolutionAttempt(BaseModel):
    """Summary of one resolve call; logged, never retained."""

    element_name: str
    tried: list[str] = Field(default_factory=list)
    outcome: Literal["cache", "explicit", "fallback", "heuristic", "not_found"]
    selector: str | None = None
    duration_ms: float


class CacheStats(BaseModel):
    """Snapshot of a resolution cache."""

    size: int
    names: list[str]
