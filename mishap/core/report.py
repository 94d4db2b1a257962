"""\
Reporting
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module decides whether a fault is worth logging and writes a single
error line for it. Debug mode logs the location of the fault as well::

    [0]division by zero[/srv/app/views.py:42]

whereas production mode only logs the code and the message. The full
traceback can be appended with the `record_trace` option.
"""

from __future__ import annotations

import logging
import sys
import typing as t

from mishap.core.fault import DEFAULT_IGNORE
from mishap.core.fault import Fault
from mishap.utils.logging import get_logger
from mishap.utils.opentelemetry import record_exception

if t.TYPE_CHECKING:
    from mishap.core.classifier import ErrorClassifier
    from mishap.core.config import RenderConfig

__all__: tuple[str, ...] = ("ReportSink",)


class ReportSink:
    """Log faults which are not expected outcomes of a request.

    :param config: Render configuration.
    :param classifier: Classifier used for codes and messages.
    :param logger: Logger to write to, defaults to the `mishap.report`
        logger.
    :param ignore: Exception types which are never reported, defaults
        to HTTP errors.
    """

    __slots__: tuple[str, ...] = ("classifier", "config", "ignore", "logger")

    def __init__(
        self,
        config: RenderConfig,
        classifier: ErrorClassifier,
        *,
        logger: logging.Logger | None = None,
        ignore: t.Iterable[type[BaseException]] | None = None,
    ) -> None:
        """Initialise the report sink."""
        self.config = config
        self.classifier = classifier
        self.logger = logger or get_logger("mishap.report")
        self.ignore: tuple[type[BaseException], ...] = (
            DEFAULT_IGNORE if ignore is None else tuple(ignore)
        )

    def fault(self, exception: BaseException | Fault) -> Fault:
        """Return the fault for an exception using this ignore-list."""
        return Fault.from_exception(exception, ignore=self.ignore)

    def is_ignorable(self, exception: BaseException | Fault) -> bool:
        """Return `True` if the fault should not be reported."""
        return self.fault(exception).ignorable

    def format(self, fault: Fault) -> str:
        """Return the log line for a fault.

        :param fault: Fault to format.
        :return: Log line, with the traceback appended if configured.
        """
        code = self.classifier.code(fault)
        message = self.classifier.message(fault)
        if self.config.debug:
            log = f"[{code}]{message}[{fault.file}:{fault.line}]"
        else:
            log = f"[{code}]{message}"
        if self.config.record_trace:
            log += "\r\n" + fault.format_trace()
        return log

    def report(self, exception: BaseException | Fault) -> None:
        """Report a fault unless it is ignorable.

        Exactly one error line is logged per reported fault. Reporting
        never raises, a failure to format or write the line is printed
        to `sys.stderr` instead.

        :param exception: Exception or fault to report.
        """
        fault = self.fault(exception)
        if fault.ignorable:
            return
        try:
            self.logger.error(self.format(fault))
            record_exception(fault.exception)
        except Exception as error:
            print(
                f"Warning: Could not report {fault.name}: {error}",
                file=sys.stderr,
            )
