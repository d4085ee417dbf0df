"""Launcher tab: one tile per launcher entry, grouped by category."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Label

from doc_panels.app.host import CommandRegistry, LauncherModel
from doc_panels.core.lifecycle import dom_slug


def tile_id(command_id: str) -> str:
    return f"tile-{dom_slug(command_id)}"


class LauncherView(VerticalScroll):
    DEFAULT_CSS = """
    LauncherView {
        padding: 1 2;
    }
    LauncherView > .launcher-category {
        text-style: bold;
        margin: 1 0 0 0;
    }
    LauncherView > .launcher-row {
        height: auto;
    }
    LauncherView .launcher-tile {
        margin: 0 1 0 0;
        min-width: 20;
    }
    """

    class Launch(Message):
        """A tile asked for its command to run."""

        def __init__(self, command_id: str) -> None:
            self.command_id = command_id
            super().__init__()

    def __init__(self, model: LauncherModel, commands: CommandRegistry, **kwargs) -> None:
        super().__init__(**kwargs)
        self._model = model
        self._commands = commands

    def compose(self) -> ComposeResult:
        groups = self._model.grouped()
        if not groups:
            yield Label("Nothing to launch.")
            return
        for category, entries in groups.items():
            yield Label(category, classes="launcher-category")
            with Horizontal(classes="launcher-row"):
                for entry in entries:
                    command = self._commands.get(entry.command_id)
                    yield Button(
                        f"{command.icon} {command.label}".strip(),
                        id=tile_id(entry.command_id),
                        name=entry.command_id,
                        tooltip=command.caption or None,
                        classes="launcher-tile",
                    )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.name:
            self.post_message(self.Launch(event.button.name))
