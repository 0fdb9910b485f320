"""Unit tests for logging setup (typegraph.logging_config)."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from typegraph import logging_config
from typegraph.logging_config import PACKAGE_LOGGER, configure_logging, get_logger


@pytest.fixture
def package_logger(monkeypatch):
    """Package logger restored to its original state after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    monkeypatch.setattr(logging_config, "_configured", False)
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestGetLogger:
    @pytest.mark.unit
    def test_nests_under_package(self):
        assert get_logger("tests.sample").name == "typegraph.tests.sample"

    @pytest.mark.unit
    def test_package_names_unchanged(self):
        assert get_logger("typegraph.codegen").name == "typegraph.codegen"
        assert get_logger(PACKAGE_LOGGER).name == PACKAGE_LOGGER


class TestConfigureLogging:
    @pytest.mark.unit
    def test_installs_one_rich_handler(self, package_logger):
        console = Console(file=io.StringIO())
        configure_logging("debug", console=console)
        configure_logging(logging.INFO, console=console)

        rich_handlers = [
            h for h in package_logger.handlers if isinstance(h, RichHandler)
        ]
        assert len(rich_handlers) == 1
        assert package_logger.level == logging.INFO
        assert package_logger.propagate is False

    @pytest.mark.unit
    def test_messages_reach_console(self, package_logger):
        buffer = io.StringIO()
        configure_logging(logging.INFO, console=Console(file=buffer, width=200))
        get_logger("tests").info("rendered 3 declarations")
        assert "rendered 3 declarations" in buffer.getvalue()
