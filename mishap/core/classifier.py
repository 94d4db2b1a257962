"""\
Classifier
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module extracts the code and the user facing message from a fault,
along with any structured context attached by the application.

Messages can be localised by key. A message such as
``"user_not_found: alice"`` is looked up by the part before the first
colon and keeps everything from the colon onwards, whereas
``"user_not_found,alice"`` is looked up by the part before the first
comma and is rejoined with a colon. Otherwise, the whole message is
looked up as a key.
"""

from __future__ import annotations

import typing as t

from mishap.core.error import ApplicationError
from mishap.core.error import SeverityError
from mishap.core.lang import Catalogue

if t.TYPE_CHECKING:
    from mishap.core.fault import Fault
    from mishap.core.lang import Lang

__all__: tuple[str, ...] = (
    "ErrorClassifier",
    "extract_data",
)


class ErrorClassifier:
    """Extract codes and localised messages from faults.

    :param lang: Message catalogue used for localisation, defaults to an
        empty catalogue.
    :param cli: Whether running from the command line, in which case
        messages are never localised, defaults to `False`.
    """

    __slots__: tuple[str, ...] = ("cli", "lang")

    def __init__(self, lang: Lang | None = None, *, cli: bool = False) -> None:
        """Initialise the classifier."""
        self.lang = lang if lang is not None else Catalogue()
        self.cli = cli

    def code(self, fault: Fault) -> int | str:
        """Return the error code of the fault.

        Severity-bearing errors without a code use their severity as the
        code. Any other falsy code is returned as is.

        :param fault: Fault to classify.
        :return: Error code.
        """
        code = fault.code
        if not code and isinstance(fault.exception, SeverityError):
            return fault.severity
        return code

    def message(self, fault: Fault) -> str:
        """Return the, possibly localised, message of the fault.

        :param fault: Fault to classify.
        :return: Message to be shown or logged.
        """
        message = fault.message
        if self.cli:
            return message
        # NOTE(xames3): A separator at the very start of the message does
        # not split it, there would be no key to look up.
        if message.find(":") > 0:
            name, _, _ = message.partition(":")
            if self.lang.has(name):
                return self.lang.get(name) + message[len(name) :]
        elif message.find(",") > 0:
            name, _, rest = message.partition(",")
            if self.lang.has(name):
                return f"{self.lang.get(name)}:{rest}"
        elif self.lang.has(message):
            return self.lang.get(message)
        return message


def extract_data(exception: BaseException) -> dict[str, t.Any]:
    """Return the structured context attached to an application error.

    :param exception: Exception to inspect.
    :return: Copy of the labelled sections, empty for any other error.
    """
    if isinstance(exception, ApplicationError):
        return dict(exception.data)
    return {}
