import logging

import pytest

from mishap.core.error import ApplicationError
from mishap.core.error import ForbiddenError
from mishap.core.error import HttpError
from mishap.core.error import NotFoundError
from mishap.core.error import SeverityError
from mishap.core.fault import Fault
from mishap.core.fault import FaultKind


def raised(error):
    try:
        raise error
    except BaseException as exc:
        return exc


@pytest.mark.unit
class TestFault:
    def test_generic(self):
        error = raised(ZeroDivisionError("division by zero"))
        fault = Fault(error)
        assert fault.kind is FaultKind.GENERIC
        assert fault.ignorable is False
        assert fault.name == "builtins.ZeroDivisionError"
        assert fault.message == "division by zero"
        assert fault.code == 0
        assert fault.status is None
        assert fault.headers == {}
        assert fault.file == __file__
        assert fault.line >= 1
        assert fault.trace[-1].name == "raised"

    def test_never_raised(self):
        fault = Fault(ValueError("boom"))
        assert fault.file == ""
        assert fault.line == 0
        assert fault.trace == []

    @pytest.mark.parametrize(
        "error, status",
        [
            (HttpError(418, "teapot"), 418),
            (NotFoundError("missing"), 404),
            (ForbiddenError("nope"), 403),
        ],
    )
    def test_status_carrying(self, error, status):
        fault = Fault(error)
        assert fault.kind is FaultKind.STATUS
        assert fault.status == status
        assert fault.ignorable is True

    def test_headers(self):
        error = HttpError(401, headers={"WWW-Authenticate": "Basic"})
        assert Fault(error).headers == {"WWW-Authenticate": "Basic"}

    def test_severity(self):
        fault = Fault(SeverityError("careful", severity=logging.WARNING))
        assert fault.severity == logging.WARNING
        assert Fault(ValueError()).severity is None

    def test_custom_ignore_list(self):
        fault = Fault(KeyError("k"), ignore=(LookupError,))
        assert fault.ignorable is True
        assert Fault(NotFoundError(), ignore=()).ignorable is False

    def test_message_attribute_preferred(self):
        error = ApplicationError("declined", "extra")
        assert Fault(error).message == "declined"

    def test_from_exception_reuses_fault(self):
        fault = Fault(ValueError("x"))
        assert Fault.from_exception(fault) is fault
        assert Fault.from_exception(ValueError("x")) is not fault

    def test_frames_and_trace(self):
        fault = Fault(raised(RuntimeError("boom")))
        frames = fault.frames()
        assert frames[-1]["function"] == "raised"
        assert frames[-1]["file"] == __file__
        assert "raise error" in frames[-1]["code"]
        assert "RuntimeError: boom" in fault.format_trace()
