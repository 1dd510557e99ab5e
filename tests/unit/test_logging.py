"""Tests for structured log formatting and level configuration."""

from __future__ import annotations

import logging

import pytest

from backend.app.infra.logging import StructuredFormatter, configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def test_formatter_appends_extra_fields_sorted():
    formatter = StructuredFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "password_deleted", None, None)
    record.entry_id = "abc"
    record.deleted_count = 1

    assert formatter.format(record) == "INFO password_deleted deleted_count=1 entry_id='abc'"


def test_formatter_leaves_plain_records_alone():
    formatter = StructuredFormatter("%(message)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "hello", None, None)

    assert formatter.format(record) == "hello"


def test_configure_logging_is_idempotent(restore_root_logger):
    configure_logging({"level": "debug"})
    configure_logging({"level": "warning"})

    structured = [
        handler
        for handler in restore_root_logger.handlers
        if isinstance(handler.formatter, StructuredFormatter)
    ]
    assert len(structured) == 1
    assert restore_root_logger.level == logging.WARNING


def test_configure_logging_rejects_unknown_level(restore_root_logger):
    with pytest.raises(ValueError):
        configure_logging({"level": "chatty"})
