"""Settings file I/O for doc-panels.

Manages a general-purpose JSON settings file at XDG_CONFIG_HOME/doc-panels/settings.json.
Schema and defaults live in doc_panels.app.settings; this module only reads and writes.
"""

import json
import os
import tempfile
from pathlib import Path


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / doc-panels / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "doc-panels" / "settings.json"


def read_json(path: Path) -> dict:
    """Read a JSON object from ``path``. Missing, corrupt or non-object files read as {}."""
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def write_json_atomic(path: Path, data: dict) -> None:
    """Atomic write of a dict to a JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    return read_json(get_config_path())


def save_settings(data: dict) -> None:
    write_json_atomic(get_config_path(), data)


def save_setting(key: str, value) -> None:
    """Update a single top-level key, preserving the rest of the file."""
    data = load_settings()
    data[key] = value
    save_settings(data)
