"""Main work area: the Textual shell that documentation panels attach to.

// [LAW:locality-or-seam] Implements the Shell protocol on top of TabbedContent.
// [LAW:single-enforcer] Closing a panel tab is the only host-originated disposal path.

Tab mounts are asynchronous in Textual, while activation must follow attach in
dispatch order. Activating a panel whose mount is still pending waits for that
mount before switching tabs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.await_complete import AwaitComplete
from textual.css.query import NoMatches
from textual.widgets import TabbedContent, TabPane

from doc_panels.app.host import MAIN_AREA
from doc_panels.core.lifecycle import PanelInstance
from doc_panels.tui.embed_frame import EmbedFrame

if TYPE_CHECKING:
    from textual.app import App

logger = logging.getLogger(__name__)

MAIN_AREA_ID = "main-area"
LAUNCHER_TAB_ID = "launcher-tab"


class DocPane(TabPane):
    """Tab pane holding the embedding surface for one panel instance."""

    def __init__(self, instance: PanelInstance) -> None:
        descriptor = instance.descriptor
        super().__init__(
            f"{descriptor.icon} {descriptor.title}",
            EmbedFrame(descriptor.title, descriptor.url, descriptor.sandbox),
            id=instance.panel_id,
        )
        self.instance = instance


class MainAreaShell:
    def __init__(self, app: App) -> None:
        self._app = app
        self._instances: dict[str, PanelInstance] = {}
        self._pending: dict[str, AwaitComplete] = {}
        self._queue: list[str] = []
        self._draining = False
        self.activations: list[str] = []

    @property
    def tabbed(self) -> TabbedContent:
        return self._app.query_one(f"#{MAIN_AREA_ID}", TabbedContent)

    def instance_for(self, pane_id: str | None) -> PanelInstance | None:
        if not pane_id:
            return None
        return self._instances.get(pane_id)

    # ─── Shell protocol ────────────────────────────────────────────────

    def attach(self, instance: PanelInstance, area: str = MAIN_AREA) -> None:
        if area != MAIN_AREA:
            raise ValueError(f"unsupported area {area!r}")
        self._instances[instance.panel_id] = instance
        self._pending[instance.panel_id] = self.tabbed.add_pane(DocPane(instance))
        logger.debug("attached %s", instance.panel_id)

    def activate_by_id(self, panel_id: str) -> None:
        self.activations.append(panel_id)
        if not self._queue and not self._is_pending(panel_id):
            self._set_active(panel_id)
            return
        # Queue behind earlier activations so tabs switch in dispatch order.
        self._queue.append(panel_id)
        if not self._draining:
            self._draining = True
            self._app.run_worker(self._drain_activations(), group="activate")

    def _is_pending(self, panel_id: str) -> bool:
        pending = self._pending.get(panel_id)
        if pending is None:
            return False
        if pending.is_done:
            del self._pending[panel_id]
            return False
        return True

    async def _drain_activations(self) -> None:
        try:
            while self._queue:
                panel_id = self._queue.pop(0)
                pending = self._pending.get(panel_id)
                if pending is not None:
                    await pending
                    self._pending.pop(panel_id, None)
                self._set_active(panel_id)
        finally:
            self._draining = False

    def _set_active(self, panel_id: str) -> None:
        if panel_id not in self._instances:
            # Closed before its activation ran.
            return
        tabbed = self.tabbed
        tabbed.active = panel_id
        try:
            tabbed.get_pane(panel_id).query_one(EmbedFrame).focus()
        except NoMatches:
            pass

    # ─── Disposal ──────────────────────────────────────────────────────

    def close(self, panel_id: str) -> bool:
        """Remove the tab and dispose its panel. Returns False for non-panel tabs."""
        instance = self._instances.pop(panel_id, None)
        if instance is None:
            return False
        self._pending.pop(panel_id, None)
        self.tabbed.remove_pane(panel_id)
        instance.dispose()
        logger.debug("closed %s", panel_id)
        return True

    def close_active(self) -> bool:
        return self.close(self.tabbed.active)
