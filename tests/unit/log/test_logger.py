import io
import logging
import sys

import orjson
import pytest
import structlog

from lfx_make.log.logger import (
    DEFAULT_MAX_BYTES,
    InterceptHandler,
    _parse_rotation,
    configure,
    intercept_library_loggers,
    remove_exception_in_production,
)


@pytest.fixture
def log_buffer():
    buffer = io.StringIO()
    yield buffer
    configure(log_level="CRITICAL", output_file=sys.stdout, cache=False)


def _records(buffer: io.StringIO) -> list[dict]:
    return [orjson.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]


def test_json_output_for_containers(log_buffer):
    configure(log_level="INFO", log_env="container_json", output_file=log_buffer, cache=False)

    structlog.get_logger().info("scenarios listed", count=2)

    record = _records(log_buffer)[-1]
    assert record["event"] == "scenarios listed"
    assert record["count"] == 2
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filtering(log_buffer):
    configure(log_level="ERROR", log_env="container_json", output_file=log_buffer, cache=False)

    structlog.get_logger().info("hidden")
    structlog.get_logger().error("shown")

    assert [record["event"] for record in _records(log_buffer)] == ["shown"]


def test_level_from_environment(log_buffer, monkeypatch):
    monkeypatch.setenv("LFX_MAKE_LOG_LEVEL", "debug")
    configure(log_env="container_json", output_file=log_buffer, cache=False)

    structlog.get_logger().debug("visible")

    assert _records(log_buffer)[-1]["event"] == "visible"


def test_exception_details_are_removed_outside_dev():
    event = remove_exception_in_production(None, "error", {"event": "x", "exception": "trace", "exc_info": True})

    assert event == {"event": "x"}


@pytest.mark.parametrize(
    ("rotation", "expected"),
    [("5 MB", 5 * 1024 * 1024), ("10 mb", 10 * 1024 * 1024), (None, DEFAULT_MAX_BYTES), ("1 day", DEFAULT_MAX_BYTES)],
)
def test_parse_rotation(rotation, expected):
    assert _parse_rotation(rotation) == expected


def test_intercept_library_loggers():
    intercept_library_loggers(("lfx_make.tests.library",))
    library_logger = logging.getLogger("lfx_make.tests.library")

    assert library_logger.propagate is False
    assert isinstance(library_logger.handlers[0], InterceptHandler)
