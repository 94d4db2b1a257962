import json
import logging
import logging.handlers

import pytest

from mishap.core.config import ConsoleLoggerConfig
from mishap.core.config import FileLoggerConfig
from mishap.core.config import LoggerConfig
from mishap.utils.logging import ColouredFormatter
from mishap.utils.logging import JSONFormatter
from mishap.utils.logging import MishapFormatter
from mishap.utils.logging import _installed
from mishap.utils.logging import configure
from mishap.utils.logging import get_logger


@pytest.fixture
def root():
    logger = logging.getLogger()
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in _installed:
        handler.close()
    _installed.clear()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def make_record(message="boom", **extra):
    record = logging.LogRecord(
        "mishap.report", logging.ERROR, __file__, 10, message, None, None
    )
    record.funcName = "report"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestFormatters:
    def test_extra_fields(self):
        formatter = MishapFormatter("%(extra)s%(message)s")
        record = make_record(template="exception.html", status=500)
        assert formatter.format(record) == (
            "status: 500 template: exception.htmlboom"
        )

    def test_no_extra_fields(self):
        formatter = MishapFormatter("%(extra)s%(message)s")
        assert formatter.format(make_record()) == "boom"

    def test_coloured_plain(self):
        formatter = ColouredFormatter("%(levelname)s %(qualName)s %(message)s")
        assert formatter.format(make_record()) == (
            "   ERROR mishap.report.report boom"
        )

    def test_coloured_tty(self):
        formatter = ColouredFormatter("%(levelname)s %(message)s")
        formatter.is_tty = True
        output = formatter.format(make_record())
        assert ColouredFormatter.COLORS["ERROR"] in output
        assert output.endswith(ColouredFormatter.COLORS["RESET"] + " boom")

    def test_json(self):
        payload = json.loads(JSONFormatter().format(make_record(status=404)))
        assert payload["level"] == "ERROR"
        assert payload["logger"] == "mishap.report"
        assert payload["message"] == "boom"
        assert payload["status"] == 404
        assert "msg" not in payload

    def test_json_without_extras(self):
        payload = json.loads(
            JSONFormatter(extras=False).format(make_record(status=404))
        )
        assert "status" not in payload


@pytest.mark.integration
class TestConfigure:
    def test_console_only(self, root):
        configure(LoggerConfig(tty=ConsoleLoggerConfig(level="WARNING")))
        (handler,) = _installed
        assert handler in root.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, ColouredFormatter)
        assert root.level == logging.WARNING

    def test_json_output(self, root):
        configure(LoggerConfig(as_json=True))
        assert isinstance(_installed[0].formatter, JSONFormatter)

    def test_file(self, root, tmp_path):
        path = tmp_path / "logs"
        configure(
            LoggerConfig(
                tty=ConsoleLoggerConfig(enable=False),
                file=FileLoggerConfig(
                    enable=True, level="ERROR", path=str(path)
                ),
            )
        )
        (handler,) = _installed
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        get_logger("mishap.report").error("[0]boom")
        handler.flush()
        assert "[0]boom" in (path / "mishap.log").read_text()

    def test_nothing_enabled(self, root):
        configure(
            LoggerConfig(level="INFO", tty=ConsoleLoggerConfig(enable=False))
        )
        assert _installed == []
        assert root.level == logging.INFO

    def test_reconfigure_keeps_application_handlers(self, root):
        application = logging.NullHandler()
        root.addHandler(application)
        configure(LoggerConfig())
        first = list(_installed)
        configure(LoggerConfig(tty=ConsoleLoggerConfig(level="ERROR")))
        assert application in root.handlers
        assert not any(handler in root.handlers for handler in first)
        assert len(_installed) == 1
        assert _installed[0] in root.handlers
        assert root.level == logging.ERROR
