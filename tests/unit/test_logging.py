"""
Module: tests/unit/test_logging.py

What:
    Validate the JSON logger: record schema, severity threshold and the
    redaction of parsed values.

Why:
    Log pipelines parse these lines mechanically, and addresses or display
    names must never reach them unmasked while redaction is enabled.
"""

import io
import json

from imfparse.utils import JsonLogger, get_logger


def test_record_schema(log_stream, log_records):
    logger = JsonLogger(stream=log_stream, component="unit", level="DEBUG")
    logger.info("hello", size=3)
    (record,) = log_records()
    assert record["lvl"] == "INFO"
    assert record["msg"] == "hello"
    assert record["component"] == "unit"
    assert record["size"] == 3
    assert "ts" in record
    assert log_stream.getvalue().endswith("\n")


def test_threshold_filters_lower_levels(log_stream, log_records):
    logger = get_logger("unit", level="WARN", stream=log_stream)
    logger.debug("hidden")
    logger.info("hidden")
    logger.warning("shown")
    logger.error("shown too")
    assert [r["lvl"] for r in log_records()] == ["WARN", "ERROR"]


def test_sensitive_values_are_redacted(log_stream, log_records):
    """
    What:
        ``value``, ``local_part``, ``domain`` and ``display_name`` are masked
        at any depth; diagnostic fields are kept.
    """

    logger = get_logger("unit", level="DEBUG", stream=log_stream)
    logger.warning(
        "rejected",
        value=b"john@example.com",
        position=4,
        nested={"domain": "example.com", "token": "addr-spec"},
    )
    (record,) = log_records()
    assert record["value"] == "[redacted]"
    assert record["position"] == 4
    assert record["nested"] == {"domain": "[redacted]", "token": "addr-spec"}
    assert "example.com" not in log_stream.getvalue()


def test_redaction_can_be_disabled():
    stream = io.StringIO()
    logger = get_logger("unit", level="DEBUG", redact=False, stream=stream)
    logger.debug("parsed", local_part="john")
    assert json.loads(stream.getvalue())["local_part"] == "john"
