"""Tests for structured logging setup."""

from __future__ import annotations

import json

import structlog

from market_analytics.logging import (
    bind_trade_context,
    clear_trade_context,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("test message", market_id="0xabc")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "test message"
        assert line["market_id"] == "0xabc"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", period="ONE_HOUR")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "ONE_HOUR" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", market_id="0xdef", period="ONE_DAY")
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["market_id"] == "0xdef"
        assert line["period"] == "ONE_DAY"

    def test_trade_context_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        structlog.contextvars.clear_contextvars()
        bind_trade_context("0xtx-1", "0xmarket", 1_700_000_000)

        get_logger("test_trade_ctx").info("inside trade")
        clear_trade_context()
        get_logger("test_trade_ctx").info("after trade")

        lines = [json.loads(ln) for ln in capsys.readouterr().err.strip().splitlines()]
        assert lines[0]["trade_id"] == "0xtx-1"
        assert lines[0]["market_id"] == "0xmarket"
        assert lines[0]["block_ts"] == 1_700_000_000
        assert "trade_id" not in lines[1]
