import json
import logging

import pytest

from cep_lookup.observability.logging import (
    CorrelationIDFilter,
    LookupJsonFormatter,
    correlation_id_context,
    generate_correlation_id,
    get_correlation_id,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(message: str = "Provider answered") -> logging.LogRecord:
    return logging.LogRecord("cep_lookup.test", logging.INFO, __file__, 1, message, None, None)


def test_generated_ids_are_prefixed_and_unique():
    first = generate_correlation_id()
    second = generate_correlation_id()

    assert first.startswith("lookup-")
    assert len(first) == len("lookup-") + 16
    assert first != second


def test_context_sets_and_restores():
    assert get_correlation_id() is None

    with correlation_id_context("lookup-abc") as correlation_id:
        assert correlation_id == "lookup-abc"
        assert get_correlation_id() == "lookup-abc"
        with correlation_id_context() as nested:
            assert get_correlation_id() == nested
        assert get_correlation_id() == "lookup-abc"

    assert get_correlation_id() is None


def test_filter_stamps_records():
    record = _record()
    CorrelationIDFilter().filter(record)
    assert record.correlation_id == "none"

    with correlation_id_context("lookup-123"):
        record = _record()
        CorrelationIDFilter().filter(record)
    assert record.correlation_id == "lookup-123"


def test_json_formatter_fields():
    formatter = LookupJsonFormatter("%(message)s")
    record = _record()
    record.correlation_id = "lookup-123"
    record.provider_id = "viacep"

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Provider answered"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "cep_lookup.test"
    assert payload["correlation_id"] == "lookup-123"
    assert payload["service"] == "cep-lookup"
    assert payload["provider_id"] == "viacep"


def test_setup_logging_json(restore_root_logger, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    setup_logging("debug", "json")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, LookupJsonFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_reads_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_FORMAT", "text")

    setup_logging()

    root = restore_root_logger
    assert root.level == logging.ERROR
    assert not isinstance(root.handlers[0].formatter, LookupJsonFormatter)


def test_setup_logging_falls_back_on_unknown_level(restore_root_logger, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    monkeypatch.setenv("LOG_FORMAT", "yaml")

    setup_logging()

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, LookupJsonFormatter)
    err = capsys.readouterr().err
    assert "Unknown log level 'verbose'" in err
    assert "Unknown log format 'yaml'" in err


def test_setup_logging_level_is_case_insensitive(restore_root_logger):
    setup_logging("Info", "JSON")

    root = restore_root_logger
    assert root.level == logging.INFO
    assert isinstance(root.handlers[0].formatter, LookupJsonFormatter)
