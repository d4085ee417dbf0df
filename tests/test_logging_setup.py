"""Tests for logging bootstrap."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from textual.logging import TextualHandler

import doc_panels.io.logging_setup as logging_setup


pytestmark = pytest.mark.usefixtures("fresh_logging")


def test_configure_uses_env(tmp_path, monkeypatch):
    log_file = tmp_path / "x" / "run.log"
    monkeypatch.setenv("DOC_PANELS_LOG_FILE", str(log_file))
    monkeypatch.setenv("DOC_PANELS_LOG_LEVEL", "debug")
    runtime = logging_setup.configure()
    assert runtime.level == logging.DEBUG
    assert runtime.level_name == "DEBUG"
    assert runtime.file_path == str(log_file)

    logger = logging.getLogger("doc_panels")
    assert logger.propagate is False
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    logging.getLogger("doc_panels.core.lifecycle").debug("hello from a child")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from a child" in log_file.read_text()


def test_configure_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("DOC_PANELS_LOG_FILE", str(tmp_path / "run.log"))
    first = logging_setup.configure("warning")
    second = logging_setup.configure("debug")
    assert first is second
    assert logging_setup.get_runtime() is first


def test_unknown_level_falls_back_to_info(tmp_path, monkeypatch):
    monkeypatch.setenv("DOC_PANELS_LOG_FILE", str(tmp_path / "run.log"))
    assert logging_setup.configure("chatty").level == logging.INFO


def test_default_path_under_log_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("DOC_PANELS_LOG_FILE", raising=False)
    monkeypatch.setenv("DOC_PANELS_LOG_DIR", str(tmp_path / "logs"))
    runtime = logging_setup.configure()
    assert runtime.file_path.startswith(str(tmp_path / "logs"))


def test_console_sink_is_textual_and_warning_floored(tmp_path, monkeypatch):
    monkeypatch.setenv("DOC_PANELS_LOG_FILE", str(tmp_path / "run.log"))
    runtime = logging_setup.configure("debug")
    (console,) = [h for h in logging.getLogger("doc_panels").handlers if isinstance(h, TextualHandler)]
    assert console.level == logging.WARNING
    assert runtime.console_level == logging.WARNING


def test_level_argument_beats_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DOC_PANELS_LOG_FILE", str(tmp_path / "run.log"))
    monkeypatch.setenv("DOC_PANELS_LOG_LEVEL", "debug")
    assert logging_setup.resolve_level("error") == ("ERROR", logging.ERROR)
    assert logging_setup.resolve_level(None) == ("DEBUG", logging.DEBUG)
