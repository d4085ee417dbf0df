"""Panel instances and their three-state lifecycle.

// [LAW:single-enforcer] State transitions happen only through PanelInstance methods.

UNINITIALIZED -> LIVE -> DISPOSED. A disposed instance is never revived; the
owner allocates a fresh instance instead.
"""

from __future__ import annotations

import itertools
import logging
import re
from enum import Enum
from typing import Callable

from doc_panels.core.descriptor import PanelDescriptor

logger = logging.getLogger(__name__)

_serials = itertools.count(1)


class PanelState(Enum):
    UNINITIALIZED = "uninitialized"
    LIVE = "live"
    DISPOSED = "disposed"


def dom_slug(command_id: str) -> str:
    """Reduce a command id to characters valid in a DOM id."""
    return re.sub(r"[^A-Za-z0-9_-]+", "-", command_id).strip("-") or "panel"


def panel_id_for(command_id: str, serial: int) -> str:
    return f"doc-{dom_slug(command_id)}-{serial}"


class PanelInstance:
    """One concrete panel for a descriptor.

    The host shell receives a non-owning reference on attach and may dispose the
    instance at any time (e.g. the user closes its tab). Listeners registered
    with ``on_dispose`` run once, in registration order.
    """

    def __init__(self, descriptor: PanelDescriptor) -> None:
        self.descriptor = descriptor
        self.serial = next(_serials)
        self.panel_id = panel_id_for(descriptor.command_id, self.serial)
        self.state = PanelState.LIVE
        self.attached = False
        self.activation_count = 0
        self.attach_count = 0
        self._dispose_listeners: list[Callable[[PanelInstance], None]] = []
        logger.debug("panel created: %s (%s)", descriptor.command_id, self.panel_id)

    def __repr__(self) -> str:
        return (
            f"PanelInstance({self.descriptor.command_id!r}, id={self.panel_id!r}, "
            f"state={self.state.value}, attached={self.attached})"
        )

    @property
    def command_id(self) -> str:
        return self.descriptor.command_id

    @property
    def title(self) -> str:
        return self.descriptor.title

    @property
    def is_live(self) -> bool:
        return self.state is PanelState.LIVE

    @property
    def is_disposed(self) -> bool:
        return self.state is PanelState.DISPOSED

    def mark_attached(self) -> None:
        self.attached = True
        self.attach_count += 1

    def mark_activated(self) -> None:
        self.activation_count += 1

    def on_dispose(self, listener: Callable[[PanelInstance], None]) -> None:
        self._dispose_listeners.append(listener)

    def dispose(self) -> None:
        """Tear the instance down. Idempotent."""
        if self.is_disposed:
            return
        self.state = PanelState.DISPOSED
        self.attached = False
        logger.debug("panel disposed: %s (%s)", self.command_id, self.panel_id)
        listeners, self._dispose_listeners = self._dispose_listeners, []
        for listener in listeners:
            listener(self)
