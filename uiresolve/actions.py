"""Element interactions layered on the resolution engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from uiresolve.exceptions import ClickInterceptedError
from uiresolve.logger import get_logger

if TYPE_CHECKING:
    from uiresolve.engine import ResolutionEngine
    from uiresolve.models import LocatorStrategy
    from uiresolve.session import ElementHandle

log = get_logger(__name__)

# DOM properties consulted, in order, when an element has no visible text.
_TEXT_PROPERTIES = ("textContent", "innerText", "value")


class ElementActions:
    """Click, type and read elements through a resolution engine.

    ``click``, ``js_click`` and ``fill`` go through the engine's retry
    wrapper, so each attempt re-resolves the element.
    """

    def __init__(self, engine: ResolutionEngine) -> None:
        self._engine = engine

    def click(self, element_name: str, *strategies: LocatorStrategy) -> None:
        """Scroll into view and click; one JavaScript click if the click is intercepted."""
        js_fallback = self._engine.settings.js_click_fallback

        def act(handle: ElementHandle) -> None:
            handle.scroll_into_view()
            try:
                handle.click()
            except ClickInterceptedError:
                if not js_fallback:
                    raise
                log.warning("click_intercepted_using_js", element=element_name)
                handle.js_click()

        self._engine.perform(element_name, act, *strategies, description="click")
        log.info("clicked", element=element_name)

    def js_click(self, element_name: str, *strategies: LocatorStrategy) -> None:
        self._engine.perform(
            element_name, lambda h: h.js_click(), *strategies, description="js_click"
        )
        log.info("js_clicked", element=element_name)

    def fill(self, element_name: str, text: str, *strategies: LocatorStrategy) -> None:
        self._engine.perform(
            element_name, lambda h: h.fill(text), *strategies, description="fill"
        )
        log.info("filled", element=element_name, length=len(text))

    def text_of(self, element_name: str, *strategies: LocatorStrategy) -> str:
        """Visible text, falling back to text-bearing DOM properties. Trimmed."""
        handle = self._engine.resolve(element_name, *strategies)
        text = handle.text()
        for prop in _TEXT_PROPERTIES:
            if text and text.strip():
                break
            value = handle.dom_property(prop)
            text = value if isinstance(value, str) else None
        result = text.strip() if text else ""
        log.debug("text_read", element=element_name, text=result[:80])
        return result

    def attribute_of(
        self, element_name: str, attribute: str, *strategies: LocatorStrategy
    ) -> str | None:
        handle = self._engine.resolve(element_name, *strategies)
        value = handle.attribute(attribute)
        log.debug("attribute_read", element=element_name, attribute=attribute, value=value)
        return value
