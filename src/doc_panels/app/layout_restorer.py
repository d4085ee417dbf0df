"""Layout restorer: the host persistence layer.

Trackers are registered with ``restore(tracker, command=..., name=...)``.
Whenever a registered tracker changes the restorer writes a snapshot; at
startup ``restore_all()`` replays the recorded commands through the dispatcher.

// [LAW:single-enforcer] The restorer is the only writer of the layout snapshot.
// [LAW:dataflow-not-control-flow] Restoration is command replay; the restorer
//   never constructs panels itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import doc_panels.io.layout_store
from doc_panels.app.host import CommandRegistry
from doc_panels.app.tracker import PanelTracker
from doc_panels.core.errors import RestorationError
from doc_panels.core.lifecycle import PanelInstance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Registration:
    tracker: PanelTracker
    command: str
    name: Callable[[PanelInstance], str]


class LayoutRestorer:
    """Persists tracker contents and replays them on startup."""

    def __init__(self, commands: CommandRegistry, enabled: bool = True) -> None:
        self._commands = commands
        self.enabled = enabled
        self._registrations: list[_Registration] = []
        self._trackers: dict[str, PanelTracker] = {}
        self._restoring = False
        self._restored = False
        self.restored_commands: list[str] = []

    def restore(
        self,
        tracker: PanelTracker,
        command: str,
        name: Callable[[PanelInstance], str],
    ) -> None:
        """Register ``command`` as the way to rebuild panels of ``tracker``."""
        if self._restored:
            raise RestorationError(
                f"cannot register {command!r} for {tracker.namespace!r}: restore pass already ran"
            )
        known = self._trackers.get(tracker.namespace)
        if known is not None and known is not tracker:
            raise RestorationError(f"namespace {tracker.namespace!r} already bound to another tracker")
        if known is None:
            self._trackers[tracker.namespace] = tracker
            tracker.on_change(self._on_tracker_change)
        self._registrations.append(_Registration(tracker, command, name))

    def commands_for(self, namespace: str) -> tuple[str, ...]:
        return tuple(r.command for r in self._registrations if r.tracker.namespace == namespace)

    # ─── Snapshot ──────────────────────────────────────────────────────

    def _name_of(self, tracker: PanelTracker, instance: PanelInstance) -> tuple[str, str] | None:
        for reg in self._registrations:
            if reg.tracker is tracker and reg.command == instance.command_id:
                return reg.command, reg.name(instance)
        return None

    def snapshot(self) -> dict:
        layout = doc_panels.io.layout_store.empty_layout()
        for namespace, tracker in self._trackers.items():
            entries = []
            for instance in tracker:
                named = self._name_of(tracker, instance)
                if named is not None and instance.is_live:
                    entries.append({"command": named[0], "name": named[1]})
            current = tracker.current
            current_named = self._name_of(tracker, current) if current is not None else None
            layout["namespaces"][namespace] = {
                "open": entries,
                "current": current_named[1] if current_named else None,
            }
        return layout

    def save(self) -> bool:
        """Write the snapshot. An unwritable layout file is logged, never raised."""
        try:
            doc_panels.io.layout_store.save_layout(self.snapshot())
        except OSError as exc:
            logger.warning("could not save layout: %s", exc)
            return False
        return True

    def _on_tracker_change(self, tracker: PanelTracker) -> None:
        if self._restoring:
            return
        self.save()

    # ─── Restore pass ──────────────────────────────────────────────────

    def restore_all(self) -> list[str]:
        """Replay every recorded command once. Returns the commands replayed."""
        if self._restored:
            return list(self.restored_commands)
        self._restored = True
        if not self.enabled:
            logger.info("layout restoration disabled")
            return []

        layout = doc_panels.io.layout_store.load_layout()
        replayed: list[str] = []
        self._restoring = True
        try:
            for namespace, section in layout["namespaces"].items():
                tracker = self._trackers.get(namespace)
                if tracker is None:
                    logger.warning("no tracker for restored namespace %r", namespace)
                    continue
                allowed = set(self.commands_for(namespace))
                seen: set[str] = set()
                for entry in section["open"]:
                    command = entry["command"]
                    if command in seen:
                        continue
                    seen.add(command)
                    if command not in allowed or not self._commands.has_command(command):
                        logger.warning("skipping unrestorable panel %r in %r", command, namespace)
                        continue
                    self._commands.execute(command)
                    replayed.append(command)
                self._reactivate(tracker, section.get("current"))
        finally:
            self._restoring = False

        self.restored_commands = replayed
        logger.info("restored %d panel(s)", len(replayed))
        self.save()
        return replayed

    def _reactivate(self, tracker: PanelTracker, current_name: str | None) -> None:
        if not current_name:
            return
        for reg in self._registrations:
            if reg.tracker is not tracker:
                continue
            instance = tracker.find(lambda i, r=reg: i.command_id == r.command and r.name(i) == current_name)
            if instance is not None:
                # Re-issuing the command refocuses without creating anything.
                self._commands.execute(instance.command_id)
                return
