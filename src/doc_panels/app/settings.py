"""Settings schema and resolution.

// [LAW:one-source-of-truth] All known settings and their defaults live in SCHEMA.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import doc_panels.io.settings
from doc_panels.app.catalog import DEFAULT_MENU_LABEL, DEFAULT_MENU_RANK, CatalogOptions
from doc_panels.app.restoration import DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)

SCHEMA: dict[str, object] = {
    "extra_docs": [],
    "menu_label": DEFAULT_MENU_LABEL,
    "menu_rank": DEFAULT_MENU_RANK,
    "launcher_enabled": True,
    "menu_enabled": True,
    "restore_enabled": True,
    "namespace": DEFAULT_NAMESPACE,
    "theme": None,
}


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    if value is None:
        return default
    return bool(value)


def _coerce_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    extra_docs: tuple[dict, ...] = ()
    menu_label: str = DEFAULT_MENU_LABEL
    menu_rank: int = DEFAULT_MENU_RANK
    launcher_enabled: bool = True
    menu_enabled: bool = True
    restore_enabled: bool = True
    namespace: str = DEFAULT_NAMESPACE
    theme: str | None = None

    def catalog_options(self) -> CatalogOptions:
        return CatalogOptions(
            menu_label=self.menu_label,
            menu_rank=self.menu_rank,
            launcher_enabled=self.launcher_enabled,
            menu_enabled=self.menu_enabled,
        )

    def with_overrides(self, **overrides) -> Settings:
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def from_mapping(raw: dict) -> Settings:
    """Build Settings from a raw mapping; unknown keys are ignored, bad values fall back."""
    merged = {k: raw.get(k, default) for k, default in SCHEMA.items()}

    extra = merged["extra_docs"]
    if not isinstance(extra, list):
        logger.warning("settings: extra_docs must be a list, ignoring")
        extra = []

    theme = merged["theme"]
    return Settings(
        extra_docs=tuple(extra),
        menu_label=str(merged["menu_label"] or DEFAULT_MENU_LABEL),
        menu_rank=_coerce_int(merged["menu_rank"], DEFAULT_MENU_RANK),
        launcher_enabled=_coerce_bool(merged["launcher_enabled"], True),
        menu_enabled=_coerce_bool(merged["menu_enabled"], True),
        restore_enabled=_coerce_bool(merged["restore_enabled"], True),
        namespace=str(merged["namespace"] or DEFAULT_NAMESPACE),
        theme=str(theme) if theme else None,
    )


def load() -> Settings:
    """Load settings from disk."""
    return from_mapping(doc_panels.io.settings.load_settings())
