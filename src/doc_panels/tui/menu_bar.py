"""Menu bar: one button per top-level menu, ordered by menu rank.

Pressing a menu opens a popup listing its commands; choosing one runs it.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Label, OptionList
from textual.widgets.option_list import Option

from doc_panels.app.host import CommandRegistry, Menu, MenuModel
from doc_panels.core.lifecycle import dom_slug


def menu_button_id(label: str) -> str:
    return f"menu-{dom_slug(label.lower())}"


class MenuPopup(ModalScreen[str | None]):
    """Lists one menu's commands. Dismisses with the chosen command id."""

    DEFAULT_CSS = """
    MenuPopup {
        align: left top;
        background: $background 40%;
    }
    MenuPopup > Vertical {
        width: 40;
        height: auto;
        margin: 2 0 0 1;
        border: round $primary;
        background: $surface;
    }
    MenuPopup OptionList {
        height: auto;
        max-height: 16;
        border: none;
    }
    """

    BINDINGS = [Binding("escape", "dismiss_menu", "Close menu")]

    def __init__(self, menu: Menu, commands: CommandRegistry) -> None:
        super().__init__()
        self.menu = menu
        self._commands = commands

    def compose(self) -> ComposeResult:
        options = []
        for command_id in self.menu.items:
            command = self._commands.get(command_id)
            options.append(Option(f"{command.icon} {command.label}".strip(), id=command_id))
        with Vertical():
            yield Label(self.menu.label, classes="menu-popup-title")
            yield OptionList(*options, markup=False, id="menu-options")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id)

    def action_dismiss_menu(self) -> None:
        self.dismiss(None)


class MenuBar(Horizontal):
    DEFAULT_CSS = """
    MenuBar {
        height: 1;
        background: $panel;
    }
    MenuBar > Button {
        height: 1;
        min-width: 6;
        border: none;
        background: $panel;
    }
    MenuBar > Button:hover {
        background: $primary;
    }
    """

    class CommandChosen(Message):
        def __init__(self, command_id: str) -> None:
            self.command_id = command_id
            super().__init__()

    def __init__(self, model: MenuModel, commands: CommandRegistry, **kwargs) -> None:
        super().__init__(**kwargs)
        self._model = model
        self._commands = commands

    def compose(self) -> ComposeResult:
        for menu in self._model.menus:
            yield Button(menu.label, id=menu_button_id(menu.label), name=menu.label, compact=True)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        menu = self._model.find(event.button.name or "")
        if menu is not None:
            self.open_menu(menu)

    def open_menu(self, menu: Menu) -> None:
        def _chosen(command_id: str | None) -> None:
            if command_id:
                self.post_message(self.CommandChosen(command_id))

        self.app.push_screen(MenuPopup(menu, self._commands), callback=_chosen)
