"""Command binder: one command per descriptor, lazy-singleton panel lifecycle.

// [LAW:single-enforcer] The per-command instance slot is written only here.
// [LAW:one-source-of-truth] _Slot.state is derived from the held instance.

Executing a bound command runs four steps in order:

1. create a fresh PanelInstance if there is none or the held one is disposed
2. add it to the restoration tracker unless already tracked
3. attach it to the shell's main area unless already attached
4. activate it, always, so re-running the command refocuses the open panel
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from doc_panels.app.host import MAIN_AREA, Host
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.descriptor import PanelDescriptor
from doc_panels.core.errors import ConfigurationError, DuplicateCommandError
from doc_panels.core.lifecycle import PanelInstance, PanelState

logger = logging.getLogger(__name__)


@dataclass
class _Slot:
    descriptor: PanelDescriptor
    instance: PanelInstance | None = None
    created: int = 0

    @property
    def state(self) -> PanelState:
        if self.instance is None:
            return PanelState.UNINITIALIZED
        return self.instance.state


class CommandBinder:
    """Binds descriptors to commands and owns the panels those commands open."""

    def __init__(self, host: Host, tracker: PanelTracker) -> None:
        self._host = host
        self._tracker = tracker
        self._slots: dict[str, _Slot] = {}

    @property
    def tracker(self) -> PanelTracker:
        return self._tracker

    def bind(self, descriptor: PanelDescriptor) -> None:
        """Register the command for ``descriptor``.

        Raises:
            DuplicateCommandError: the command id is already bound or registered.
        """
        command_id = descriptor.command_id
        if command_id in self._slots:
            raise DuplicateCommandError(command_id)
        self._host.commands.add_command(
            command_id,
            label=descriptor.title,
            execute=lambda: self.execute(command_id),
            caption=descriptor.caption,
            icon=descriptor.icon,
        )
        self._slots[command_id] = _Slot(descriptor)
        logger.debug("bound command %s", command_id)

    def bind_all(
        self, descriptors: Iterable[PanelDescriptor]
    ) -> tuple[list[PanelDescriptor], list[ConfigurationError]]:
        """Bind each descriptor; a failure skips only that descriptor."""
        bound: list[PanelDescriptor] = []
        failures: list[ConfigurationError] = []
        for descriptor in descriptors:
            try:
                self.bind(descriptor)
            except ConfigurationError as exc:
                logger.error("skipping panel command: %s", exc)
                failures.append(exc)
                continue
            bound.append(descriptor)
        return bound, failures

    def execute(self, command_id: str) -> PanelInstance:
        slot = self._slots[command_id]

        if slot.state is not PanelState.LIVE:
            slot.instance = PanelInstance(slot.descriptor)
            slot.created += 1
        instance = slot.instance

        if not self._tracker.has(instance):
            self._tracker.add(instance)

        if not instance.attached:
            self._host.shell.attach(instance, MAIN_AREA)
            instance.mark_attached()

        self._host.shell.activate_by_id(instance.panel_id)
        instance.mark_activated()
        self._tracker.set_current(instance)
        return instance

    # ─── Inspection ────────────────────────────────────────────────────

    def descriptor(self, command_id: str) -> PanelDescriptor:
        return self._slots[command_id].descriptor

    def descriptors(self) -> tuple[PanelDescriptor, ...]:
        return tuple(slot.descriptor for slot in self._slots.values())

    def state_of(self, command_id: str) -> PanelState:
        return self._slots[command_id].state

    def instance_for(self, command_id: str) -> PanelInstance | None:
        """The held instance, which may be disposed."""
        return self._slots[command_id].instance

    def created_count(self, command_id: str) -> int:
        return self._slots[command_id].created

    def live_instances(self) -> list[PanelInstance]:
        return [
            slot.instance
            for slot in self._slots.values()
            if slot.instance is not None and slot.instance.is_live
        ]

    def instance_by_panel_id(self, panel_id: str) -> PanelInstance | None:
        for slot in self._slots.values():
            if slot.instance is not None and slot.instance.panel_id == panel_id:
                return slot.instance
        return None
