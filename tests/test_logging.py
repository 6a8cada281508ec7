import json
import logging

import pytest

from geocode_client.logging import get_logger, setup_logging

pytestmark = pytest.mark.usefixtures("reset_logging")


def test_setup_logging_emits_json_lines(capsys):
    setup_logging(level="DEBUG", log_format="json")

    get_logger("geocode_client.tests").debug("geocode_cache_hit", cache_key="google_geocoding_abc")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "geocode_cache_hit"
    assert record["cache_key"] == "google_geocoding_abc"
    assert record["level"] == "debug"
    assert record["logger"] == "geocode_client.tests"
    assert "timestamp" in record


def test_setup_logging_reads_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")

    setup_logging()

    assert logging.getLogger("geocode_client").level == logging.WARNING


def test_setup_logging_console_in_dev(monkeypatch, capsys):
    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    setup_logging(level="INFO")
    get_logger("geocode_client.tests").info("hello")

    err = capsys.readouterr().err
    assert "hello" in err
    with pytest.raises(ValueError):
        json.loads(err.strip().splitlines()[-1])


def test_library_is_silent_until_configured(make_client, googleplex_payload, capsys):
    client, _ = make_client(googleplex_payload)

    client.geocode("Mountain View")
    client.geocode("Mountain View")
    client.clear_cache()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_library_events_reach_configured_handlers(make_client, googleplex_payload, capsys):
    setup_logging(level="DEBUG", log_format="json")
    client, _ = make_client(googleplex_payload)

    client.geocode("Mountain View")

    captured = capsys.readouterr()
    assert captured.out == ""
    events = [json.loads(line)["event"] for line in captured.err.strip().splitlines()]
    assert "geocode_cache_miss" in events
    assert "geocode_cache_stored" in events
