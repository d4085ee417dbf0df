"""Test harness for doc-panels.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, settle, RecordingShell, ...
"""

from tests.harness.app_runner import run_app, settle, run_and_settle, press_and_settle
from tests.harness.assertions import main_area, doc_panes, open_commands, active_command
from tests.harness.builders import (
    RecordingShell,
    make_host,
    make_descriptor,
    example_descriptors,
)

__all__ = [
    "run_app",
    "settle",
    "run_and_settle",
    "press_and_settle",
    "main_area",
    "doc_panes",
    "open_commands",
    "active_command",
    "RecordingShell",
    "make_host",
    "make_descriptor",
    "example_descriptors",
]
