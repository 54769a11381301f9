"""Heuristic element search from a logical name alone (self-healing)."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from uiresolve.compiler import xpath_literal
from uiresolve.exceptions import NotFoundError
from uiresolve.logger import get_logger
from uiresolve.models import CompiledSelector, SelectorType

if TYPE_CHECKING:
    from uiresolve.session import ElementHandle

log = get_logger(__name__)


def slugify(element_name: str) -> str:
    """Lower-case slug of a logical name: ``"Forgot Password"`` -> ``"forgot-password"``."""
    return re.sub(r"[^a-z0-9]+", "-", element_name.lower()).strip("-")


@dataclass(frozen=True)
class HeuristicCandidate:
    """One guess at how an element called ``element_name`` might be marked up.

    ``build`` returns an XPath expression, or None when the guess does not
    apply to the name (e.g. the name has no usable slug).
    """

    name: str
    build: Callable[[str], str | None]

    def selector(self, element_name: str) -> CompiledSelector | None:
        xpath = self.build(element_name)
        if xpath is None:
            return None
        return CompiledSelector(by=SelectorType.XPATH, value=xpath)


def _button_text(name: str) -> str:
    lit = xpath_literal(name)
    return (
        f"//*[(self::button or self::a or @role='button') "
        f"and contains(normalize-space(.), {lit})]"
        f" | //input[(@type='submit' or @type='button') and contains(@value, {lit})]"
    )


def _placeholder(name: str) -> str:
    return f"//*[(self::input or self::textarea) and @placeholder={xpath_literal(name)}]"


def _label_sibling(name: str) -> str:
    return (
        f"//label[contains(normalize-space(.), {xpath_literal(name)})]"
        f"/following-sibling::*[self::input or self::textarea or self::select][1]"
    )


def _title(name: str) -> str:
    return f"//*[@title={xpath_literal(name)}]"


def _alt(name: str) -> str:
    return f"//*[@alt={xpath_literal(name)}]"


def _class_slug(name: str) -> str | None:
    slug = slugify(name)
    if not slug:
        return None
    return f"//*[contains(@class, {xpath_literal(slug)})]"


def _test_id_slug(name: str) -> str | None:
    slug = slugify(name)
    if not slug:
        return None
    return f"//*[@data-testid={xpath_literal(slug)}]"


# Content-based guesses come before styling-based ones.
DEFAULT_CANDIDATES: tuple[HeuristicCandidate, ...] = (
    HeuristicCandidate("button_text", _button_text),
    HeuristicCandidate("placeholder", _placeholder),
    HeuristicCandidate("label_sibling", _label_sibling),
    HeuristicCandidate("title", _title),
    HeuristicCandidate("alt_text", _alt),
    HeuristicCandidate("class_slug", _class_slug),
    HeuristicCandidate("test_id_slug", _test_id_slug),
)


class HeuristicSearch:
    """Probes an ordered list of guesses built from an element name."""

    def __init__(self, candidates: Sequence[HeuristicCandidate] | None = None) -> None:
        self.candidates: tuple[HeuristicCandidate, ...] = (
            tuple(candidates) if candidates is not None else DEFAULT_CANDIDATES
        )

    def selectors_for(self, element_name: str) -> list[CompiledSelector]:
        """Selectors to try for ``element_name``, in probe order."""
        if not element_name.strip():
            return []
        selectors = []
        for candidate in self.candidates:
            selector = candidate.selector(element_name)
            if selector is not None:
                selectors.append(selector)
        return selectors

    def search(
        self,
        element_name: str,
        probe: Callable[[CompiledSelector], ElementHandle | None],
    ) -> tuple[ElementHandle, CompiledSelector]:
        """Return the first handle any guess produces.

        ``probe`` decides what counts as a match (the engine requires a
        visible element).

        Raises:
            NotFoundError: If no guess matched.
        """
        attempted: list[str] = []
        for selector in self.selectors_for(element_name):
            attempted.append(str(selector))
            handle = probe(selector)
            if handle is not None:
                log.info("heuristic_match", element=element_name, selector=str(selector))
                return handle, selector
        raise NotFoundError(element_name, attempted)

    def search_all(
        self,
        element_name: str,
        probe_all: Callable[[CompiledSelector], Sequence[ElementHandle]],
    ) -> tuple[list[ElementHandle], CompiledSelector | None]:
        """Return every handle matched by the first guess that matches any."""
        for selector in self.selectors_for(element_name):
            handles = list(probe_all(selector))
            if handles:
                log.info(
                    "heuristic_match_all",
                    element=element_name,
                    selector=str(selector),
                    count=len(handles),
                )
                return handles, selector
        return [], None
