import json
import logging

import pytest
from pydantic import ValidationError

from conftest_types import Widget
from svcmap.logging import LoggingSettings, LogLevel, StructuredFormatter, get_logger
from svcmap.registry.lifetime import ServiceLifetime


def _record(msg="msg", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="svcmap.test", level=level, pathname="", lineno=0, msg=msg, args=(), exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_json():
    fmt = StructuredFormatter(json_format=True, include_timestamp=False, include_level=True)

    data = json.loads(fmt.format(_record(directive="as_self", entries=2)))

    assert data == {
        "message": "msg",
        "name": "svcmap.test",
        "directive": "as_self",
        "entries": "2",
        "level": "INFO",
    }


def test_structured_formatter_plain():
    fmt = StructuredFormatter(json_format=False, include_timestamp=True, include_level=True)

    formatted = fmt.format(_record("plain"))

    assert "svcmap.test: plain" in formatted
    assert formatted.endswith("[INFO]")


def test_structured_formatter_renders_extra_as_key_values():
    fmt = StructuredFormatter(include_timestamp=False, include_level=False)

    formatted = fmt.format(
        _record(
            "Added mapping group",
            service_type=Widget,
            lifetime=ServiceLifetime.SCOPED,
            note="two words",
        )
    )

    assert formatted == (
        "svcmap.test: Added mapping group "
        f"service_type={Widget.__module__}.Widget lifetime=scoped note=\"two words\""
    )


def test_structured_formatter_puts_context_before_level():
    fmt = StructuredFormatter(include_timestamp=False, include_level=True)

    formatted = fmt.format(_record("written", level=logging.WARNING, entries=3))

    assert formatted == "svcmap.test: written entries=3 [WARNING]"


def test_log_level_conversion():
    assert LogLevel("DEBUG").stdlib_level == logging.DEBUG
    assert LogLevel.ERROR.stdlib_level == logging.ERROR


def test_logging_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SVCMAP_LOGGING_LEVEL", "debug")
    monkeypatch.setenv("SVCMAP_LOGGING_JSON_FORMAT", "true")

    settings = LoggingSettings.load()

    assert settings.level is LogLevel.DEBUG
    assert settings.json_format is True


def test_logging_settings_reject_unknown_level():
    with pytest.raises(ValidationError):
        LoggingSettings(level="loud")


def test_get_logger_configures_handlers():
    logger = get_logger("svcmap.test.configured", settings=LoggingSettings(level="INFO"))

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
    assert not logger.propagate


def test_get_logger_does_not_duplicate_into_host_handlers(caplog, capsys):
    logger = get_logger("svcmap.test.once", settings=LoggingSettings(level="DEBUG"))

    logger.debug("Added mapping group")

    assert caplog.records == []
    assert capsys.readouterr().err.count("Added mapping group") == 1


def test_get_logger_without_handlers_propagates(caplog):
    caplog.set_level(logging.DEBUG)
    logger = get_logger(
        "svcmap.test.host", settings=LoggingSettings(level="DEBUG", console_enabled=False)
    )

    logger.debug("handled by host")

    assert logger.handlers == []
    assert [r.getMessage() for r in caplog.records] == ["handled by host"]


def test_get_logger_is_idempotent():
    get_logger("svcmap.test.idempotent")
    logger = get_logger("svcmap.test.idempotent", level=LogLevel.DEBUG)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_get_logger_file_handler(tmp_path):
    path = tmp_path / "svcmap.log"
    settings = LoggingSettings(console_enabled=False, file_enabled=True, file_path=str(path))

    logger = get_logger("svcmap.test.file", settings=settings)
    logger.warning("written", extra={"entries": 3})
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    assert "written entries=3 [WARNING]" in path.read_text()
