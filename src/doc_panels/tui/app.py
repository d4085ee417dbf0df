"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin host. Owns the command registry, palette,
//   launcher and menu models, the main-area shell and the layout restorer,
//   and hands them to the documentation extension.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Iterable

from textual.app import App, ComposeResult, SystemCommand
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, TabbedContent, TabPane

import doc_panels.io.settings
from doc_panels.app import extension as _extension
from doc_panels.app.host import CommandRegistry, Host, LauncherModel, MenuModel, PaletteModel
from doc_panels.app.layout_restorer import LayoutRestorer
from doc_panels.app.settings import Settings
from doc_panels.core.descriptor import PanelDescriptor
from doc_panels.core.errors import UnknownCommandError
from doc_panels.tui.launcher_view import LauncherView
from doc_panels.tui.main_area import LAUNCHER_TAB_ID, MAIN_AREA_ID, MainAreaShell
from doc_panels.tui.menu_bar import MenuBar

logger = logging.getLogger(__name__)


class DocPanelsApp(App):
    """Documentation panels host."""

    TITLE = "doc-panels"

    CSS = """
    #main-area {
        height: 1fr;
    }
    #main-area > ContentSwitcher {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+w", "close_panel", "Close panel"),
        Binding("ctrl+t", "show_launcher", "Launcher"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        descriptors: Iterable[PanelDescriptor] | None = None,
        open_commands: Iterable[str] = (),
    ) -> None:
        super().__init__()
        self._settings = settings or Settings()
        self._open_commands = list(open_commands)

        self.command_registry = CommandRegistry()
        self.palette_model = PaletteModel()
        self.launcher_model = LauncherModel() if self._settings.launcher_enabled else None
        self.menu_model = MenuModel() if self._settings.menu_enabled else None
        self.shell = MainAreaShell(self)
        self.host = Host(
            commands=self.command_registry,
            palette=self.palette_model,
            shell=self.shell,
            launcher=self.launcher_model,
            menu=self.menu_model,
        )
        self.restorer = LayoutRestorer(self.command_registry, enabled=self._settings.restore_enabled)

        # Registration must precede the restore pass in on_mount.
        if descriptors is None:
            self.extension = _extension.activate_defaults(self.host, self.restorer, self._settings)
        else:
            self.extension = _extension.activate(
                self.host, self.restorer, descriptors, self._settings
            )

    # ─── Accessors ─────────────────────────────────────────────────────

    @property
    def binder(self):
        return self.extension.binder

    def _get_main_area(self) -> TabbedContent | None:
        try:
            return self.query_one(f"#{MAIN_AREA_ID}", TabbedContent)
        except NoMatches:
            return None

    # ─── Lifecycle ─────────────────────────────────────────────────────

    def get_system_commands(self, screen):
        yield from super().get_system_commands(screen)
        for entry in self.palette_model.entries:
            command = self.command_registry.get(entry.command_id)
            yield SystemCommand(
                command.label,
                f"{entry.category} · {command.caption}" if command.caption else entry.category,
                partial(self.run_command, entry.command_id),
            )
        yield SystemCommand("Close panel", "Close the active documentation panel", self.action_close_panel)

    def compose(self) -> ComposeResult:
        yield Header()
        if self.menu_model is not None:
            yield MenuBar(self.menu_model, self.command_registry, id="menu-bar")
        with TabbedContent(id=MAIN_AREA_ID):
            if self.launcher_model is not None:
                with TabPane("Launcher", id=LAUNCHER_TAB_ID):
                    yield LauncherView(self.launcher_model, self.command_registry, id="launcher")
        yield Footer()

    def on_mount(self) -> None:
        saved = self._settings.theme
        if saved and saved in self.available_themes:
            self.theme = saved
        self.theme_changed_signal.subscribe(self, self._persist_theme)

        for failure in self.extension.failures:
            self.notify(str(failure), title="Documentation panel skipped", severity="error")

        self.restorer.restore_all()
        for command_id in self._open_commands:
            self.run_command(command_id)

    def _persist_theme(self, theme) -> None:
        if theme.name != self._settings.theme:
            doc_panels.io.settings.save_setting("theme", theme.name)

    # ─── Commands ──────────────────────────────────────────────────────

    def run_command(self, command_id: str) -> None:
        try:
            self.command_registry.execute(command_id)
        except UnknownCommandError as exc:
            logger.warning("%s", exc)
            self.notify(str(exc), severity="error")

    def on_launcher_view_launch(self, message: LauncherView.Launch) -> None:
        self.run_command(message.command_id)

    def on_menu_bar_command_chosen(self, message: MenuBar.CommandChosen) -> None:
        self.run_command(message.command_id)

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        if event.tabbed_content.id != MAIN_AREA_ID:
            return
        pane_id = event.pane.id if event.pane is not None else None
        self.extension.tracker.set_current(self.shell.instance_for(pane_id))

    def action_close_panel(self) -> None:
        if not self.shell.close_active():
            self.notify("Nothing to close here", timeout=2)

    def action_show_launcher(self) -> None:
        main = self._get_main_area()
        if main is None or self.launcher_model is None:
            return
        main.active = LAUNCHER_TAB_ID
