"""
Tests for structured logging helpers.
"""

import logging

import pytest

from doctext.handler import DocumentHandler
from doctext.logger import Timer, get_logger, get_operation_id, operation


def test_extra_data_and_operation_id_are_appended(caplog):
    logger = get_logger("doctext.tests")

    with caplog.at_level(logging.INFO, logger="doctext.tests"):
        with operation("op-123") as operation_id:
            assert get_operation_id() == "op-123"
            logger.info("Fetched", extra_data={"size_bytes": 10})

    assert operation_id == "op-123"
    assert "Fetched [size_bytes=10, operation_id=op-123]" in caplog.text


def test_caller_extra_data_is_not_mutated(caplog):
    logger = get_logger("doctext.tests")
    extra_data = {"key": "value"}

    with caplog.at_level(logging.INFO, logger="doctext.tests"):
        with operation():
            logger.info("msg", extra_data=extra_data)

    assert extra_data == {"key": "value"}


def test_generated_operation_ids_differ():
    with operation() as first:
        pass
    with operation() as second:
        pass

    assert first != second


def test_operation_id_is_reset_after_block():
    assert get_operation_id() is None

    with operation("outer"):
        with operation("inner"):
            assert get_operation_id() == "inner"
        assert get_operation_id() == "outer"

    assert get_operation_id() is None


def test_operation_id_is_reset_when_block_raises():
    with pytest.raises(RuntimeError):
        with operation("failing"):
            raise RuntimeError("boom")

    assert get_operation_id() is None


def test_entry_operations_do_not_leak_operation_id(tmp_path, caplog):
    handler = DocumentHandler()
    logger = get_logger("doctext.tests")

    handler.from_buffer(b"text", "text/plain")
    handler.from_file(tmp_path / "unknown.nosuchext")
    caplog.clear()
    with caplog.at_level(logging.INFO, logger="doctext.tests"):
        logger.info("after extraction")

    assert get_operation_id() is None
    assert [record.getMessage() for record in caplog.records] == ["after extraction"]


def test_timer_measures_elapsed_time():
    with Timer("noop") as timer:
        pass

    assert timer.elapsed_ms is not None
    assert timer.get_elapsed_ms() >= 0
    assert Timer("unused").get_elapsed_ms() == 0
