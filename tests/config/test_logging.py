"""Tests for structlog output on the valueobjects logger."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest

from tests.conftest import IntegerList
from valueobjects.config.logging import HANDLER_NAME, configure_logging, reset_logging
from valueobjects.domain.errors import TypeMismatch


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Leave the valueobjects logger unconfigured after each test."""
    yield
    reset_logging()


def _json_lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("valueobjects").level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("valueobjects").level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level

        configure_logging(verbose=True)

        assert root.handlers == handlers
        assert root.level == level
        assert logging.getLogger("valueobjects").propagate is False

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=False)
        names = [h.get_name() for h in logging.getLogger("valueobjects").handlers]
        assert names.count(HANDLER_NAME) == 1

    def test_library_records_are_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        with pytest.raises(TypeMismatch):
            IntegerList().append("foo")

        failures = [e for e in _json_lines(stream) if e["logger"] == "valueobjects.domain.coercion"]
        assert failures
        assert failures[0]["level"] == "debug"
        assert failures[0]["event"].startswith("Coercion failed: expected integer, got str")
        assert "timestamp" in failures[0]

    def test_extra_fields_are_rendered(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        logging.getLogger("valueobjects.test").warning("json test", extra={"answer": 42})

        (entry,) = _json_lines(stream)
        assert entry["event"] == "json test"
        assert entry["answer"] == 42
        assert entry["level"] == "warning"

    def test_quiet_when_not_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)

        with pytest.raises(TypeMismatch):
            IntegerList().append("foo")

        assert stream.getvalue() == ""

    def test_defaults_to_stderr(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("valueobjects.test").error("boom")
        assert json.loads(capfd.readouterr().err.strip())["event"] == "boom"


class TestSettingsDefaults:
    def test_logging_section_drives_unset_arguments(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("VALUEOBJECTS_LOGGING__VERBOSE", "true")
        monkeypatch.setenv("VALUEOBJECTS_LOGGING__LOG_JSON", "true")
        stream = io.StringIO()

        configure_logging(stream=stream)
        logging.getLogger("valueobjects.test").debug("from settings")

        assert logging.getLogger("valueobjects").level == logging.DEBUG
        assert _json_lines(stream)[0]["event"] == "from settings"

    def test_explicit_arguments_beat_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VALUEOBJECTS_LOGGING__VERBOSE", "true")
        configure_logging(verbose=False)
        assert logging.getLogger("valueobjects").level == logging.WARNING


class TestResetLogging:
    def test_reset_restores_propagation(self) -> None:
        configure_logging(verbose=True)
        reset_logging()

        lib = logging.getLogger("valueobjects")
        assert lib.propagate is True
        assert lib.level == logging.NOTSET
        assert all(h.get_name() != HANDLER_NAME for h in lib.handlers)
