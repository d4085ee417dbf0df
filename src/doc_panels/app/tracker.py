"""Panel tracker: the set of panels a namespace persists across reloads.

// [LAW:single-enforcer] Membership changes (add, dispose, current) go through PanelTracker.
"""

from __future__ import annotations

import logging
from typing import Callable

from doc_panels.core.lifecycle import PanelInstance

logger = logging.getLogger(__name__)


class PanelTracker:
    """Ordered, de-duplicated set of live panels for one namespace.

    Disposed panels drop out automatically. Listeners are called with the
    tracker after every change.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._instances: list[PanelInstance] = []
        self._current: PanelInstance | None = None
        self._listeners: list[Callable[[PanelTracker], None]] = []

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self):
        return iter(tuple(self._instances))

    def has(self, instance: PanelInstance) -> bool:
        return instance in self._instances

    def add(self, instance: PanelInstance) -> bool:
        """Start tracking ``instance``. Returns False if it was already tracked."""
        if self.has(instance):
            return False
        self._instances.append(instance)
        instance.on_dispose(self._forget)
        logger.debug("[%s] tracking %s", self.namespace, instance.panel_id)
        self._changed()
        return True

    @property
    def current(self) -> PanelInstance | None:
        return self._current

    def set_current(self, instance: PanelInstance | None) -> None:
        if instance is not None and not self.has(instance):
            return
        if instance is self._current:
            return
        self._current = instance
        self._changed()

    def find(self, predicate: Callable[[PanelInstance], bool]) -> PanelInstance | None:
        return next((i for i in self._instances if predicate(i)), None)

    def on_change(self, listener: Callable[[PanelTracker], None]) -> None:
        self._listeners.append(listener)

    def _forget(self, instance: PanelInstance) -> None:
        if instance not in self._instances:
            return
        self._instances.remove(instance)
        if self._current is instance:
            self._current = None
        logger.debug("[%s] forgot %s", self.namespace, instance.panel_id)
        self._changed()

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)
