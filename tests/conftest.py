"""Pytest configuration and shared fixtures for doc-panels tests."""

import json
import logging

import pytest

import doc_panels.io.layout_store
import doc_panels.io.settings


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point every XDG location at tmp_path so no test touches the real home."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("DOC_PANELS_LOG_DIR", str(tmp_path / "logs"))
    return tmp_path


@pytest.fixture
def settings_file():
    """Path of the (redirected) settings file."""
    return doc_panels.io.settings.get_config_path()


@pytest.fixture
def layout_file():
    """Path of the (redirected) layout snapshot."""
    return doc_panels.io.layout_store.get_layout_path()


@pytest.fixture
def write_layout(layout_file):
    """Write a layout snapshot with the given open commands per namespace."""

    def _write(open_by_namespace: dict, current: dict | None = None):
        current = current or {}
        data = {
            "version": doc_panels.io.layout_store.LAYOUT_VERSION,
            "namespaces": {
                ns: {
                    "open": [{"command": c, "name": c} for c in commands],
                    "current": current.get(ns),
                }
                for ns, commands in open_by_namespace.items()
            },
        }
        layout_file.parent.mkdir(parents=True, exist_ok=True)
        layout_file.write_text(json.dumps(data))
        return layout_file

    return _write


@pytest.fixture
def fresh_logging(monkeypatch):
    """Allow logging_setup.configure() to run, then restore the doc_panels logger."""
    monkeypatch.setattr("doc_panels.io.logging_setup._RUNTIME", None)
    logger = logging.getLogger("doc_panels")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
