"""\
Faults
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module turns a raised exception into a `Fault`, a read-only view
holding everything the reporting and rendering components need. The
classification into a kind and the ignorability check happen exactly
once, when the fault is built, so the components downstream only ever
switch on `Fault.kind` and `Fault.ignorable`.
"""

from __future__ import annotations

import enum
import traceback
import typing as t

from mishap.core.error import HttpError
from mishap.core.error import SeverityError

__all__: tuple[str, ...] = (
    "DEFAULT_IGNORE",
    "Fault",
    "FaultKind",
)

DEFAULT_IGNORE: t.Final[tuple[type[BaseException], ...]] = (HttpError,)


class FaultKind(enum.StrEnum):
    """Kinds of faults the renderer dispatches on."""

    STATUS = "status"
    GENERIC = "generic"


class Fault:
    """Classified view of a raised exception.

    :param exception: The exception being handled.
    :param ignore: Exception types which are not reported, defaults to
        `DEFAULT_IGNORE`.
    """

    __slots__: tuple[str, ...] = (
        "code",
        "exception",
        "file",
        "headers",
        "ignorable",
        "kind",
        "line",
        "message",
        "name",
        "severity",
        "status",
        "trace",
    )

    def __init__(
        self,
        exception: BaseException,
        *,
        ignore: t.Iterable[type[BaseException]] = DEFAULT_IGNORE,
    ) -> None:
        """Initialise the fault from an exception."""
        klass = type(exception)
        self.exception = exception
        self.name = f"{klass.__module__}.{klass.__qualname__}"
        self.code: int | str = getattr(exception, "code", 0)
        message = getattr(exception, "message", None)
        self.message: str = (
            message if isinstance(message, str) else str(exception)
        )
        self.trace: list[traceback.FrameSummary] = list(
            traceback.extract_tb(exception.__traceback__)
        )
        if self.trace:
            self.file: str = self.trace[-1].filename
            self.line: int = self.trace[-1].lineno or 0
        else:
            self.file = ""
            self.line = 0
        self.severity: int | None = (
            exception.severity if isinstance(exception, SeverityError) else None
        )
        if isinstance(exception, HttpError):
            self.kind = FaultKind.STATUS
            self.status: int | None = exception.status_code
            self.headers: dict[str, str] = dict(exception.headers)
        else:
            self.kind = FaultKind.GENERIC
            self.status = None
            self.headers = {}
        self.ignorable = isinstance(exception, tuple(ignore))

    @classmethod
    def from_exception(
        cls,
        exception: BaseException | Fault,
        *,
        ignore: t.Iterable[type[BaseException]] = DEFAULT_IGNORE,
    ) -> Fault:
        """Return a fault for the exception, reusing an existing one."""
        if isinstance(exception, Fault):
            return exception
        return cls(exception, ignore=ignore)

    def __repr__(self) -> str:
        """Return a string representation of the fault."""
        return (
            f"<Fault(name={self.name!r}, kind={self.kind.value!r}, "
            f"code={self.code!r}, status={self.status!r})>"
        )

    def format_trace(self) -> str:
        """Return the full formatted traceback of the exception."""
        return "".join(traceback.format_exception(self.exception)).rstrip()

    def frames(self) -> list[dict[str, t.Any]]:
        """Return the traceback frames as template friendly mappings."""
        return [
            {
                "file": frame.filename,
                "line": frame.lineno,
                "function": frame.name,
                "code": frame.line,
            }
            for frame in self.trace
        ]
