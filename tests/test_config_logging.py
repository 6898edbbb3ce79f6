import json
import logging

import pytest

from app.core.config import Settings, _float_env, _int_env
from app.core.logging_config import JsonLineFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_int_env(monkeypatch):
    monkeypatch.setenv("PAYPROMPT_TEST_PORT", "8080")
    assert _int_env("PAYPROMPT_TEST_PORT", 4000) == 8080

    monkeypatch.setenv("PAYPROMPT_TEST_PORT", "eighty")
    assert _int_env("PAYPROMPT_TEST_PORT", 4000) == 4000

    monkeypatch.setenv("PAYPROMPT_TEST_PORT", "  ")
    assert _int_env("PAYPROMPT_TEST_PORT", 4000) == 4000

    monkeypatch.delenv("PAYPROMPT_TEST_PORT")
    assert _int_env("PAYPROMPT_TEST_PORT", 4000) == 4000


@pytest.mark.parametrize("raw, expected", [("2.5", 2.5), ("soon", 10.0), ("0", 10.0), ("-3", 10.0), ("", 10.0)])
def test_float_env(monkeypatch, raw, expected):
    monkeypatch.setenv("PAYPROMPT_TEST_TIMEOUT", raw)
    assert _float_env("PAYPROMPT_TEST_TIMEOUT", 10.0) == expected


@pytest.mark.parametrize(
    "client_url, expected",
    [("*", ["*"]), ("", ["*"]), ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
     ("http://a.test,*", ["*"])],
)
def test_cors_origins(client_url, expected):
    s = Settings()
    s.CLIENT_URL = client_url
    assert s.cors_origins == expected


def test_json_formatter_renders_one_object_per_record():
    record = logging.LogRecord("app.services.loan_service", logging.INFO, __file__, 1, "Loan created: %s", ("loan_1",), None)
    entry = json.loads(JsonLineFormatter().format(record))
    assert entry["level"] == "INFO"
    assert entry["logger"] == "app.services.loan_service"
    assert entry["message"] == "Loan created: loan_1"
    assert entry["time"].endswith("Z")
    assert "exc_info" not in entry


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad principal")
    except ValueError:
        import sys
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    entry = json.loads(JsonLineFormatter().format(record))
    assert "ValueError: bad principal" in entry["exc_info"]


def test_setup_logging_json(restore_root_logger):
    handler = setup_logging("debug", "json")
    assert restore_root_logger.handlers == [handler]
    assert restore_root_logger.level == logging.DEBUG
    assert isinstance(handler.formatter, JsonLineFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_standard_with_unknown_level(restore_root_logger):
    handler = setup_logging("loud", "standard")
    assert restore_root_logger.level == logging.INFO
    assert not isinstance(handler.formatter, JsonLineFormatter)
