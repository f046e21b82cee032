"""Single-selection state for the settings navigation toolbar."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from utils.exceptions import UnknownPage

from .registry import PageRegistry

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[str]], None]


class SelectionController:
    """Tracks the current page and keeps it valid as pages come and go."""

    def __init__(self, registry: PageRegistry) -> None:
        self._registry = registry
        self._current: Optional[str] = None
        self._listeners: list[SelectionListener] = []

    def current(self) -> Optional[str]:
        return self._current

    def add_listener(self, callback: SelectionListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: SelectionListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def select(self, page_id: str) -> None:
        if page_id not in self._registry:
            raise UnknownPage(page_id)
        self._set_current(page_id)

    def select_first(self) -> None:
        first = self._registry.first()
        if first is None:
            return
        self._set_current(first.page_id)

    def on_page_removed(self, page_id: str) -> None:
        """Restore a valid selection after ``page_id`` left the registry."""

        if self._current != page_id:
            return
        if len(self._registry) == 0:
            self._set_current(None)
        else:
            self.select_first()

    def _set_current(self, page_id: Optional[str]) -> None:
        if self._current == page_id:
            return
        previous = self._current
        self._current = page_id
        logger.debug("Current page %s -> %s", previous, page_id)
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._current)
            except Exception:
                logger.exception("Selection listener failed for page %s", self._current)


__all__ = ["SelectionController", "SelectionListener"]
