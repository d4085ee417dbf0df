"""Logging bootstrap for doc-panels.

Two sinks hang off the ``doc_panels`` logger:

- a console sink built on Textual's ``TextualHandler``. While the app runs it
  forwards records to the devtools console (``textual console``) instead of
  painting over the screen; before and after, it writes to stderr.
- a rotating log file, one per process.

// [LAW:single-enforcer] Handler wiring for the doc_panels hierarchy happens here only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textual.logging import TextualHandler

ROOT_LOGGER = "doc_panels"
DEFAULT_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 20 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_CONSOLE_FORMAT = "doc-panels %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class LoggingRuntime:
    """Where logs go for this process, as resolved by configure()."""

    level_name: str
    level: int
    file_path: str
    console_level: int


_RUNTIME: LoggingRuntime | None = None


def resolve_level(requested: str | None) -> tuple[str, int]:
    """Pick the level: explicit argument, then DOC_PANELS_LOG_LEVEL, then INFO.

    Unknown names fall back to INFO rather than failing startup.
    """
    name = (requested or os.environ.get("DOC_PANELS_LOG_LEVEL") or DEFAULT_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        name, value = DEFAULT_LEVEL, logging.INFO
    return name, value


def resolve_log_file() -> Path:
    """DOC_PANELS_LOG_FILE if set, otherwise a per-process file in the log dir."""
    explicit = os.environ.get("DOC_PANELS_LOG_FILE")
    if explicit:
        return Path(explicit)
    log_dir = Path(
        os.environ.get("DOC_PANELS_LOG_DIR") or os.path.expanduser("~/.local/share/doc-panels/logs")
    )
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return log_dir / f"doc-panels-{stamp}-{os.getpid()}.log"


def _console_sink(level: int) -> logging.Handler:
    handler = TextualHandler()
    # Warnings and up only.
    handler.setLevel(max(level, logging.WARNING))
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_sink(level: int, path: Path) -> logging.Handler:
    handler = RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def configure(level: str | None = None) -> LoggingRuntime:
    """Attach the console and file sinks to the doc_panels logger.

    Runs once per process; later calls return the first runtime unchanged.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = resolve_level(level)
    log_file = resolve_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    console = _console_sink(level_value)
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level_value)
    root.propagate = False
    root.handlers.clear()
    root.addHandler(console)
    root.addHandler(_file_sink(level_value, log_file))

    _RUNTIME = LoggingRuntime(
        level_name=level_name,
        level=level_value,
        file_path=str(log_file),
        console_level=console.level,
    )
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME
