"""Restoration coordinator: ties panel commands to the layout restorer.

One shared tracker serves every documentation panel. Restore entries are named
by command id so panels in the shared tracker never overwrite one another.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from doc_panels.app.layout_restorer import LayoutRestorer
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.descriptor import PanelDescriptor
from doc_panels.core.lifecycle import PanelInstance

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "doc-panels"


@dataclass(frozen=True)
class RestorationEntry:
    namespace: str
    command_id: str


def _name_by_command(instance: PanelInstance) -> str:
    return instance.command_id


class RestorationCoordinator:
    def __init__(self, restorer: LayoutRestorer, tracker: PanelTracker) -> None:
        self._restorer = restorer
        self._tracker = tracker
        self._entries: list[RestorationEntry] = []

    @property
    def namespace(self) -> str:
        return self._tracker.namespace

    @property
    def entries(self) -> tuple[RestorationEntry, ...]:
        return tuple(self._entries)

    def register(self, descriptor: PanelDescriptor) -> RestorationEntry:
        """Register one panel for restoration. Must run before the restore pass."""
        entry = RestorationEntry(self.namespace, descriptor.command_id)
        if entry in self._entries:
            return entry
        self._restorer.restore(self._tracker, command=entry.command_id, name=_name_by_command)
        self._entries.append(entry)
        logger.debug("restorable: %s/%s", entry.namespace, entry.command_id)
        return entry

    def register_all(self, descriptors: Iterable[PanelDescriptor]) -> list[RestorationEntry]:
        return [self.register(descriptor) for descriptor in descriptors]
