"""Tests for settings, structured logging and capture tracing."""

from __future__ import annotations

import io

import orjson
import pytest
from helpers import DeclaredFailure

from fallible import Result
from fallible.foundation.config import FallibleSettings, clear_settings_cache, get_settings
from fallible.runtime.observability.logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    NoOpRenderer,
    configure_logging,
    get_logger,
    log_context,
)

pytestmark = pytest.mark.usefixtures("isolated_config")


def _json_lines(buf: io.StringIO) -> list[dict[str, object]]:
    return [orjson.loads(line) for line in buf.getvalue().splitlines() if line]


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_settings_defaults() -> None:
    settings = get_settings()

    assert settings.debug is False
    assert settings.trace_captures is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"


def test_settings_from_environment(isolated_config: pytest.MonkeyPatch) -> None:
    isolated_config.setenv("FALLIBLE_TRACE_CAPTURES", "true")
    isolated_config.setenv("FALLIBLE_LOG_LEVEL", "debug")
    isolated_config.setenv("FALLIBLE_LOG_FORMAT", "JSON")

    settings = FallibleSettings()

    assert settings.trace_captures is True
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"


def test_settings_are_cached(isolated_config: pytest.MonkeyPatch) -> None:
    first = get_settings()
    isolated_config.setenv("FALLIBLE_DEBUG", "1")

    assert get_settings() is first

    clear_settings_cache()
    assert get_settings().debug is True


def test_settings_reject_unknown_level(isolated_config: pytest.MonkeyPatch) -> None:
    from pydantic import ValidationError

    isolated_config.setenv("FALLIBLE_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        FallibleSettings()


# ═════════════════════════════════════════════════════════════════════════════
# Logger
# ═════════════════════════════════════════════════════════════════════════════


def test_json_logging() -> None:
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)

    get_logger("svc", component="parser").debug("parsed", count=3)

    [line] = _json_lines(buf)
    assert line["event"] == "parsed"
    assert line["level"] == "debug"
    assert line["logger"] == "svc"
    assert line["component"] == "parser"
    assert line["count"] == 3
    assert "timestamp" in line


def test_level_filtering() -> None:
    buf = io.StringIO()
    configure_logging(format="json", level="WARNING", output=buf)
    log = get_logger()

    log.info("dropped")
    log.warning("kept")

    assert [line["event"] for line in _json_lines(buf)] == ["kept"]


def test_level_from_settings(isolated_config: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    isolated_config.setenv("FALLIBLE_LOG_LEVEL", "DEBUG")
    isolated_config.setenv("FALLIBLE_LOG_FORMAT", "json")
    clear_settings_cache()

    get_logger("svc").debug("visible")

    assert orjson.loads(capsys.readouterr().out)["event"] == "visible"


def test_bind_is_immutable() -> None:
    base = BoundLogger(context={"a": 1}, _renderer=NoOpRenderer())

    bound = base.bind(b=2)

    assert base.context == {"a": 1}
    assert bound.context == {"a": 1, "b": 2}
    assert bound.unbind("a").context == {"b": 2}


def test_log_context_scoping() -> None:
    buf = io.StringIO()
    configure_logging(format="json", level="INFO", output=buf)
    log = get_logger()

    with log_context(request_id="abc"):
        log.info("inside")
    log.info("outside")

    inside, outside = _json_lines(buf)
    assert inside["request_id"] == "abc"
    assert "request_id" not in outside


def test_console_renderer() -> None:
    buf = io.StringIO()
    renderer = ConsoleRenderer(output=buf, show_timestamp=False)

    renderer.render(LogEntry(0.0, "info", "ready", {"port": 80, "host": "local"}))

    assert buf.getvalue() == '[info] ready host="local" port=80\n'


def test_json_renderer_serializes_arbitrary_values() -> None:
    buf = io.StringIO()

    JsonRenderer(output=buf).render(LogEntry(0.0, "info", "e", {"obj": DeclaredFailure("x")}))

    assert _json_lines(buf)[0]["obj"] == "x"


def test_configure_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


# ═════════════════════════════════════════════════════════════════════════════
# Capture Tracing
# ═════════════════════════════════════════════════════════════════════════════


def _raise(exc: BaseException) -> object:
    raise exc


def test_capture_tracing_disabled_by_default() -> None:
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)

    Result.of(lambda: _raise(DeclaredFailure("quiet")))

    assert buf.getvalue() == ""


def test_capture_tracing_logs_captured_failure(isolated_config: pytest.MonkeyPatch) -> None:
    isolated_config.setenv("FALLIBLE_TRACE_CAPTURES", "true")
    clear_settings_cache()
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)

    Result.of(lambda: _raise(DeclaredFailure("traced")))

    [line] = _json_lines(buf)
    assert line["event"] == "failure captured"
    assert line["logger"] == "fallible.result"
    assert str(line["kind"]).endswith("DeclaredFailure")
    assert line["message"] == "traced"
    assert line["recoverable"] is True


def test_capture_tracing_logs_reraised_fault(isolated_config: pytest.MonkeyPatch) -> None:
    isolated_config.setenv("FALLIBLE_TRACE_CAPTURES", "true")
    clear_settings_cache()
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)

    with pytest.raises(KeyError):
        Result.of(lambda: _raise(KeyError("k")))

    [line] = _json_lines(buf)
    assert line["event"] == "undeclared fault re-raised"
    assert line["kind"] == "builtins.KeyError"
    assert line["recoverable"] is False


def test_debug_mode_enables_capture_tracing(isolated_config: pytest.MonkeyPatch) -> None:
    isolated_config.setenv("FALLIBLE_DEBUG", "true")
    clear_settings_cache()
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)

    Result.of(lambda: _raise(DeclaredFailure("debugging")))

    [line] = _json_lines(buf)
    assert line["event"] == "failure captured"
    assert line["message"] == "debugging"


def test_invalid_settings_do_not_change_capture_outcome(isolated_config: pytest.MonkeyPatch) -> None:
    """A broken environment disables tracing instead of replacing the outcome."""
    isolated_config.setenv("FALLIBLE_LOG_LEVEL", "verbose")
    clear_settings_cache()
    fault = KeyError("k")

    assert Result.of(lambda: _raise(DeclaredFailure("kept"))) == Result.error(DeclaredFailure("kept"))
    with pytest.raises(KeyError) as exc_info:
        Result.of(lambda: _raise(fault))
    assert exc_info.value is fault


def test_unwritable_log_output_does_not_change_capture_outcome(isolated_config: pytest.MonkeyPatch) -> None:
    isolated_config.setenv("FALLIBLE_TRACE_CAPTURES", "true")
    clear_settings_cache()
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)
    buf.close()
    fault = KeyError("k")

    assert Result.of(lambda: _raise(DeclaredFailure("kept"))) == Result.error(DeclaredFailure("kept"))
    with pytest.raises(KeyError) as exc_info:
        Result.of(lambda: _raise(fault))
    assert exc_info.value is fault
