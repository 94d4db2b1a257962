import logging

import pytest

from mishap.core.classifier import ErrorClassifier
from mishap.core.config import RenderConfig
from mishap.core.error import BaseError
from mishap.core.error import ForbiddenError
from mishap.core.error import HttpError
from mishap.core.error import NotFoundError
from mishap.core.fault import Fault
from mishap.core.lang import Catalogue
from mishap.core.report import ReportSink


def raised(error):
    try:
        raise error
    except BaseException as exc:
        return exc


@pytest.fixture
def classifier():
    return ErrorClassifier(Catalogue({"db_error": "Database failure"}))


@pytest.fixture
def factory(classifier):
    def _create_sink(**options):
        return ReportSink(RenderConfig(**options), classifier)

    return _create_sink


@pytest.fixture
def records(caplog):
    caplog.set_level(logging.DEBUG, logger="mishap.report")
    return caplog


@pytest.mark.unit
class TestIsIgnorable:
    @pytest.mark.parametrize(
        "error",
        [HttpError(500), NotFoundError(), ForbiddenError()],
    )
    def test_status_carrying_errors(self, factory, error):
        assert factory().is_ignorable(error) is True

    @pytest.mark.parametrize(
        "error",
        [ValueError("x"), BaseError("x"), KeyboardInterrupt()],
    )
    def test_unrelated_errors(self, factory, error):
        assert factory().is_ignorable(error) is False

    def test_custom_ignore_list(self, classifier):
        sink = ReportSink(RenderConfig(), classifier, ignore=(LookupError,))
        assert sink.is_ignorable(KeyError("k")) is True
        assert sink.is_ignorable(NotFoundError()) is False


@pytest.mark.unit
class TestReport:
    def test_debug_includes_location(self, factory, records):
        error = raised(BaseError("db_error", code=42))
        factory(debug=True).report(error)
        fault = Fault(error)
        assert len(records.records) == 1
        record = records.records[0]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == (
            f"[42]Database failure[{fault.file}:{fault.line}]"
        )

    def test_production_omits_location(self, factory, records):
        error = raised(BaseError("db_error", code=42))
        factory().report(error)
        fault = Fault(error)
        message = records.records[0].getMessage()
        assert message == "[42]Database failure"
        assert fault.file not in message
        assert str(fault.line) not in message

    def test_record_trace(self, factory, records):
        error = raised(RuntimeError("boom"))
        factory(record_trace=True).report(error)
        message = records.records[0].getMessage()
        head, _, trace = message.partition("\r\n")
        assert head == "[0]boom"
        assert trace.startswith("Traceback (most recent call last):")
        assert trace.endswith("RuntimeError: boom")

    def test_no_trace_by_default(self, factory, records):
        factory().report(raised(RuntimeError("boom")))
        assert "\r\n" not in records.records[0].getMessage()

    def test_ignorable_is_not_logged(self, factory, records):
        factory(debug=True).report(raised(NotFoundError("missing")))
        assert records.records == []

    def test_logs_exactly_once(self, factory, records):
        sink = factory()
        sink.report(ValueError("one"))
        sink.report(ValueError("two"))
        assert [r.getMessage() for r in records.records] == [
            "[0]one",
            "[0]two",
        ]

    def test_never_raises(self, classifier, capsys):
        class BrokenLogger(logging.Logger):
            def error(self, *args, **kwargs):
                raise OSError("disk full")

        sink = ReportSink(
            RenderConfig(), classifier, logger=BrokenLogger("broken")
        )
        sink.report(ValueError("boom"))
        assert "Could not report builtins.ValueError: disk full" in (
            capsys.readouterr().err
        )
