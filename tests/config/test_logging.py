"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from mediatorkit.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("mediatorkit").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("mediatorkit").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("mediatorkit.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "mediatorkit.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("mediatorkit.mediator").debug("Published Pinged to 2 handler(s)")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Published Pinged to 2 handler(s)"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "mediatorkit.mediator"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("mediatorkit.mediator").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
