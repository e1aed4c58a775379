"""
Minimal listener registry.

ScoreStore notifies its observable after every invalidation so dependent
views (widgets, cached summaries) know to re-read the series.
"""
from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class Observable:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove a previously added listener. Unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("remove_listener: %r was not registered", listener)

    def notify_listeners(self) -> None:
        # Copy: a listener may unregister itself while being notified.
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._listeners)
