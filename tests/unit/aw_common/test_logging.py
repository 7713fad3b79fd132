"""Tests for the structlog-based logging setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from aw_common.config.workflow import WorkflowConfig
from aw_common.logging import configure_logging, redact_credentials


pytestmark = pytest.mark.unit_common


@pytest.fixture
def root_logger(monkeypatch: pytest.MonkeyPatch):
    for name in ("AW_LOG_LEVEL", "AW_LOG_JSON", "AW_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _console_streams(root: logging.Logger) -> list:
    return [
        handler.stream
        for handler in root.handlers
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
    ]


def test_handlers_write_to_stderr(root_logger: logging.Logger) -> None:
    configure_logging(force=True)
    streams = _console_streams(root_logger)
    assert streams and all(stream is sys.stderr for stream in streams)
    assert root_logger.level == logging.WARNING


def test_debug_flag_wins(root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AW_LOG_LEVEL", "error")
    configure_logging(debug=True, force=True)
    assert root_logger.level == logging.DEBUG


def test_env_level_is_used(root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AW_LOG_LEVEL", "info")
    configure_logging(force=True)
    assert root_logger.level == logging.INFO


def test_unknown_level_falls_back_to_warning(root_logger: logging.Logger) -> None:
    configure_logging(level="chatty", force=True)
    assert root_logger.level == logging.WARNING


def test_log_file_handler(root_logger: logging.Logger, tmp_path: Path) -> None:
    log_file = tmp_path / "aw.log"
    configure_logging(log_file=str(log_file), force=True)
    logging.getLogger("aw.test").warning("written to file")
    for handler in root_logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text()


def test_redact_credentials_keeps_prefix() -> None:
    text = "token ghp_" + "a" * 36 + " and key sk-" + "b" * 40
    assert redact_credentials(text) == "token ghp_**** and key sk-****"
    assert redact_credentials("task-force ready") == "task-force ready"


def test_tracebacks_do_not_leak_credentials(
    root_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
) -> None:
    token = "ghp_" + "s" * 36
    configure_logging(force=True)
    config = WorkflowConfig(github_token=token)
    try:
        raise RuntimeError(f"request failed for {config!r} using {token}")
    except RuntimeError:
        logging.getLogger("aw.test").exception("generation failed")
    err = capsys.readouterr().err
    assert "generation failed" in err
    assert "RuntimeError" in err
    assert token not in err
