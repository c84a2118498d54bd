from __future__ import annotations

import json
import logging

from immutable_record.utils.logging import (
    ConsoleFormatter,
    JsonFormatter,
    configure_logging,
    extra_fields,
)

EXPECTED_FIELDS = 2


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_extra_fields_skip_standard_attributes() -> None:
    record = _record()
    record.record_type = "Pet"

    assert extra_fields(record) == {"record_type": "Pet"}


def test_json_formatter_promotes_extra_fields() -> None:
    record = _record()
    record.fields = EXPECTED_FIELDS
    record.record_type = "Pet"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["fields"] == EXPECTED_FIELDS
    assert payload["record_type"] == "Pet"
    assert "time" in payload
    assert "lineno" not in payload


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.typed_fields = {"meowmix"}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["typed_fields"] == "{'meowmix'}"


def test_console_formatter_appends_context() -> None:
    record = _record("Built record type Pet")
    record.record_type = "Pet"
    record.strategy = "typed"

    line = ConsoleFormatter().format(record)

    assert "| INFO | test.logger | Built record type Pet" in line
    assert line.endswith("| record_type=Pet strategy=typed")


def test_console_formatter_without_context() -> None:
    line = ConsoleFormatter().format(_record())
    assert line.endswith("| hello")


def test_configure_logging_installs_selected_formatter() -> None:
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        configure_logging(level="debug", json_logs=True)

        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

        configure_logging(level="WARNING")
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, ConsoleFormatter) for h in root.handlers)
        assert not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])


def test_configure_logging_without_force_keeps_handlers() -> None:
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        configure_logging(level="INFO", json_logs=True)
        installed = list(root.handlers)

        configure_logging(level="ERROR", json_logs=False, force=False)

        assert root.handlers == installed
        assert root.level == logging.ERROR
    finally:
        root.handlers[:] = previous[0]
        root.setLevel(previous[1])
