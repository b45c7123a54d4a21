"""Tests for the logging helper used by the server entry point."""

import logging

from tictactoe.logging_setup import setup_logging


def test_setup_logging_installs_single_handler(monkeypatch):
    monkeypatch.setenv("TICTACTOE_LOG_LEVEL", "debug")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging()
        setup_logging()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

        record = logging.LogRecord(
            "tictactoe.ai", logging.INFO, __file__, 1, "chose cell %d", (4,), None
        )
        fields = root.handlers[0].format(record).split(" | ")
        assert len(fields) == 4
        assert fields[1:] == ["INFO", "tictactoe.ai", "chose cell 4"]
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
