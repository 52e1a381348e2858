"""Tests for structlog logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from mc_common.logging import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    structlog.reset_defaults()


def test_configure_logging_force_installs_formatter(clean_root_logger, monkeypatch) -> None:
    monkeypatch.delenv("MC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MC_LOG_FILE", raising=False)

    configure_logging(level="warning", force=True)

    assert clean_root_logger.level == logging.WARNING
    assert len(clean_root_logger.handlers) == 1
    handler = clean_root_logger.handlers[0]
    assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)


def test_configure_logging_env_level_and_file(clean_root_logger, monkeypatch, tmp_path) -> None:
    log_file = tmp_path / "console.log"
    monkeypatch.setenv("MC_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MC_LOG_FILE", str(log_file))

    configure_logging(json=True, force=True)
    logging.getLogger("mc_app.test").debug("hello")

    assert clean_root_logger.level == logging.DEBUG
    assert any(isinstance(h, logging.FileHandler) for h in clean_root_logger.handlers)
    for handler in clean_root_logger.handlers:
        handler.flush()
    assert '"hello"' in log_file.read_text()
