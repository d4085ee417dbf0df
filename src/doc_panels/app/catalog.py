"""Presentation catalog: palette, launcher and menu registration.

Pure registration. Entries carry category and rank exactly as the descriptor
stores them; descriptors are registered in (category, rank) order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from doc_panels.app.host import Host, Menu, MenuModel
from doc_panels.core.descriptor import PanelDescriptor

DEFAULT_MENU_LABEL = "Docs"
DEFAULT_MENU_RANK = 40


@dataclass(frozen=True)
class CatalogOptions:
    menu_label: str = DEFAULT_MENU_LABEL
    menu_rank: int = DEFAULT_MENU_RANK
    launcher_enabled: bool = True
    menu_enabled: bool = True


def ordered(descriptors: Iterable[PanelDescriptor]) -> list[PanelDescriptor]:
    return sorted(descriptors, key=lambda d: d.sort_key)


class PresentationCatalog:
    def __init__(self, host: Host, options: CatalogOptions | None = None) -> None:
        self._host = host
        self._options = options or CatalogOptions()
        self._menu: Menu | None = None

    @property
    def menu(self) -> Menu | None:
        return self._menu

    def register_all(self, descriptors: Iterable[PanelDescriptor]) -> None:
        for descriptor in ordered(descriptors):
            self.register(descriptor)

    def register(self, descriptor: PanelDescriptor) -> None:
        host = self._host
        host.palette.add_item(descriptor.command_id, descriptor.category)

        if host.launcher is not None and self._options.launcher_enabled:
            host.launcher.add(descriptor.command_id, descriptor.category, descriptor.rank)

        if host.menu is not None and self._options.menu_enabled:
            self._ensure_menu(host.menu).add_item(descriptor.command_id)

    def _ensure_menu(self, menu_model: MenuModel) -> Menu:
        if self._menu is None:
            self._menu = menu_model.add_menu(self._options.menu_label, self._options.menu_rank)
        return self._menu
