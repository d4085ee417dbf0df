"""Layout snapshot persistence.

The snapshot records, per tracker namespace, which panels were open (in the
order they were opened) and which one was in front:

    {
      "version": 1,
      "namespaces": {
        "doc-panels": {
          "open": [{"command": "docs:open_api", "name": "docs:open_api"}],
          "current": "docs:open_api"
        }
      }
    }
"""

import logging
import os
from pathlib import Path

from doc_panels.io.settings import read_json, write_json_atomic

logger = logging.getLogger(__name__)

LAYOUT_VERSION = 1


def get_layout_path() -> Path:
    """Return path to the layout file.

    Uses XDG_STATE_HOME (default ~/.local/state) / doc-panels / layout.json.
    """
    state_home = os.environ.get("XDG_STATE_HOME", os.path.expanduser("~/.local/state"))
    return Path(state_home) / "doc-panels" / "layout.json"


def empty_layout() -> dict:
    return {"version": LAYOUT_VERSION, "namespaces": {}}


def load_layout() -> dict:
    """Load the snapshot, normalized. Unknown versions and malformed parts read as empty."""
    data = read_json(get_layout_path())
    if not data:
        return empty_layout()
    if data.get("version") != LAYOUT_VERSION:
        logger.warning("ignoring layout with unsupported version %r", data.get("version"))
        return empty_layout()

    layout = empty_layout()
    namespaces = data.get("namespaces")
    if not isinstance(namespaces, dict):
        return layout
    for namespace, section in namespaces.items():
        if not isinstance(section, dict):
            continue
        entries = [
            {"command": str(item["command"]), "name": str(item.get("name") or item["command"])}
            for item in section.get("open") or []
            if isinstance(item, dict) and item.get("command")
        ]
        current = section.get("current")
        layout["namespaces"][str(namespace)] = {
            "open": entries,
            "current": str(current) if current else None,
        }
    return layout


def save_layout(layout: dict) -> None:
    write_json_atomic(get_layout_path(), layout)


def clear_layout() -> bool:
    """Delete the snapshot. Returns True if a file was removed."""
    path = get_layout_path()
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
