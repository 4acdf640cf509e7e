"""Mobile navigation menu toggle.

Open/closed state is the presence of the ``open`` class on both the
toggle button and the link panel.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cloverville.config.models import PageConfig
    from cloverville.infrastructure.dom import Document, Element, Event

logger = logging.getLogger(__name__)

OPEN_MARKER = "open"


class NavigationController:
    """Binds click behaviour to the menu toggle and the links it reveals."""

    def __init__(self, toggle: Element, panel: Element) -> None:
        self.toggle_button = toggle
        self.panel = panel

    @classmethod
    def bind(cls, document: Document, page: PageConfig) -> NavigationController | None:
        """Attach listeners if the page has a menu; return None otherwise."""
        toggle = document.query_selector(page.menu_toggle)
        panel = document.query_selector(page.nav_links)
        if toggle is None or panel is None:
            logger.debug("No navigation menu on page")
            return None

        controller = cls(toggle, panel)
        toggle.add_event_listener("click", controller._on_toggle)
        links = panel.query_selector_all(page.nav_link_selector)
        for link in links:
            link.add_event_listener("click", controller._on_link)
        logger.debug("Navigation bound with %d links", len(links))
        return controller

    @property
    def is_open(self) -> bool:
        return self.panel.class_list.contains(OPEN_MARKER)

    def toggle(self) -> None:
        self.panel.class_list.toggle(OPEN_MARKER)
        self.toggle_button.class_list.toggle(OPEN_MARKER)

    def close(self) -> None:
        self.panel.class_list.remove(OPEN_MARKER)
        self.toggle_button.class_list.remove(OPEN_MARKER)

    def _on_toggle(self, _event: Event) -> None:
        self.toggle()

    def _on_link(self, _event: Event) -> None:
        self.close()
