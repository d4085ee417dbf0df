"""Host collaborators: command dispatcher, palette, launcher, menu and shell contract.

These are the surfaces the extension registers against. They hold plain data;
the Textual layer renders them.

// [LAW:one-source-of-truth] Command metadata (label, caption, icon) lives in CommandRegistry.
// [LAW:locality-or-seam] Shell is a Protocol so the lifecycle core never imports Textual.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from doc_panels.core.errors import DuplicateCommandError, UnknownCommandError
from doc_panels.core.lifecycle import PanelInstance

logger = logging.getLogger(__name__)

MAIN_AREA = "main"


@dataclass(frozen=True)
class RegisteredCommand:
    command_id: str
    label: str
    execute: Callable[[], object]
    caption: str = ""
    icon: str = ""


class CommandRegistry:
    """Command dispatcher. Execution is synchronous and in call order."""

    def __init__(self) -> None:
        self._commands: dict[str, RegisteredCommand] = {}

    def add_command(
        self,
        command_id: str,
        label: str,
        execute: Callable[[], object],
        caption: str = "",
        icon: str = "",
    ) -> RegisteredCommand:
        if command_id in self._commands:
            raise DuplicateCommandError(command_id)
        command = RegisteredCommand(command_id, label, execute, caption, icon)
        self._commands[command_id] = command
        return command

    def has_command(self, command_id: str) -> bool:
        return command_id in self._commands

    def get(self, command_id: str) -> RegisteredCommand:
        try:
            return self._commands[command_id]
        except KeyError:
            raise UnknownCommandError(command_id) from None

    def label(self, command_id: str) -> str:
        return self.get(command_id).label

    def commands(self) -> tuple[RegisteredCommand, ...]:
        return tuple(self._commands.values())

    def execute(self, command_id: str) -> object:
        command = self.get(command_id)
        logger.debug("execute %s", command_id)
        return command.execute()


@dataclass(frozen=True)
class PaletteEntry:
    command_id: str
    category: str


class PaletteModel:
    """Command palette entries, kept in registration order."""

    def __init__(self) -> None:
        self._entries: list[PaletteEntry] = []

    def add_item(self, command_id: str, category: str) -> PaletteEntry:
        entry = PaletteEntry(command_id, category)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[PaletteEntry, ...]:
        return tuple(self._entries)

    def grouped(self) -> dict[str, list[str]]:
        """Map category -> command ids, both in registration order."""
        groups: dict[str, list[str]] = {}
        for entry in self._entries:
            groups.setdefault(entry.category, []).append(entry.command_id)
        return groups


@dataclass(frozen=True)
class LauncherEntry:
    command_id: str
    category: str
    rank: int


class LauncherModel:
    """Launcher tiles grouped by category and ordered by rank."""

    def __init__(self) -> None:
        self._entries: list[LauncherEntry] = []

    def add(self, command_id: str, category: str, rank: int) -> LauncherEntry:
        entry = LauncherEntry(command_id, category, rank)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[LauncherEntry, ...]:
        return tuple(self._entries)

    def grouped(self) -> dict[str, list[LauncherEntry]]:
        groups: dict[str, list[LauncherEntry]] = {}
        for entry in self._entries:
            groups.setdefault(entry.category, []).append(entry)
        # sorted() is stable: equal ranks keep registration order
        return {category: sorted(items, key=lambda e: e.rank) for category, items in groups.items()}


@dataclass
class Menu:
    label: str
    rank: int
    items: list[str] = field(default_factory=list)

    def add_item(self, command_id: str) -> None:
        self.items.append(command_id)


class MenuModel:
    """Top-level menus, ordered by rank among siblings."""

    def __init__(self) -> None:
        self._menus: list[Menu] = []

    def add_menu(self, label: str, rank: int) -> Menu:
        menu = Menu(label, rank)
        self._menus.append(menu)
        return menu

    def find(self, label: str) -> Menu | None:
        return next((menu for menu in self._menus if menu.label == label), None)

    @property
    def menus(self) -> tuple[Menu, ...]:
        return tuple(sorted(self._menus, key=lambda m: m.rank))


class Shell(Protocol):
    """Work area that shows panels. May dispose attached panels on its own."""

    def attach(self, instance: PanelInstance, area: str = MAIN_AREA) -> None: ...

    def activate_by_id(self, panel_id: str) -> None: ...


@dataclass
class Host:
    """Everything an extension can register against.

    ``launcher`` and ``menu`` are optional surfaces; None means absent.
    """

    commands: CommandRegistry
    palette: PaletteModel
    shell: Shell
    launcher: LauncherModel | None = None
    menu: MenuModel | None = None
