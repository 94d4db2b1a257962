"""\
Error and warnings
==================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module provides various error classes that are used throughout this
framework. Besides the framework's own failures, it defines the error
variants the handler knows how to classify: a domain error which carries
extended data, a status-carrying HTTP error and a severity-bearing error.
"""

from __future__ import annotations

import logging
import typing as t


__all__: tuple[str, ...] = (
    "ApplicationError",
    "BaseError",
    "ConfigValidationError",
    "ForbiddenError",
    "HttpError",
    "NotFoundError",
    "SeverityError",
)

Error = Exception


class BaseError(Error):
    """Base error class for all exceptions.

    :param message: The error message to be displayed.
    :param code: Application specific error code, defaults to `0`.
    """

    def __init__(self, message: str = "", *args: t.Any, code: int = 0) -> None:
        """Initialise the error with a message and an optional code."""
        super().__init__(message, *args)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return (
            f"<{type(self).__name__}(message={self.message!r}, "
            f"code={self.code!r})>"
        )


class ConfigValidationError(BaseError):
    """Errors related to configuration validation failure."""


class ApplicationError(BaseError):
    """Errors raised by the application with structured context.

    The attached data is shown on the diagnostic page next to the
    source excerpt. Each section is stored under a label, so callers
    can group related values together::

        error = ApplicationError("payment declined", code=402)
        error.set_data("Order", {"id": 42, "total": "19.99"})
        raise error

    :param message: The error message to be displayed.
    :param code: Application specific error code, defaults to `0`.
    :param data: Initial labelled sections, defaults to `None`.
    """

    def __init__(
        self,
        message: str = "",
        *args: t.Any,
        code: int = 0,
        data: dict[str, t.Any] | None = None,
    ) -> None:
        """Initialise the application error with extended data."""
        super().__init__(message, *args, code=code)
        self._data: dict[str, t.Any] = dict(data or {})

    def set_data(self, label: str, data: t.Any) -> None:
        """Attach a labelled section of context to this error."""
        self._data[label] = data

    @property
    def data(self) -> dict[str, t.Any]:
        """Return the labelled sections attached to this error."""
        return self._data


class HttpError(BaseError):
    """Errors that represent an intentional HTTP failure.

    These are expected outcomes of a request such as a missing page or
    a forbidden resource, so they are not logged as errors by default
    and get rendered with a lightweight per-status template when one is
    configured.

    :param status_code: HTTP status code to respond with.
    :param message: The error message to be displayed, defaults to an
        empty string.
    :param headers: Extra response headers, defaults to `None`.
    :param code: Application specific error code, defaults to `0`.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        *,
        headers: dict[str, str] | None = None,
        code: int = 0,
    ) -> None:
        """Initialise the HTTP error with its status code."""
        super().__init__(message, code=code)
        self.status_code = status_code
        self.headers: dict[str, str] = dict(headers or {})

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return (
            f"<{type(self).__name__}(status_code={self.status_code!r}, "
            f"message={self.message!r})>"
        )


class NotFoundError(HttpError):
    """Error raised when the requested resource does not exist."""

    def __init__(self, message: str = "", **kwargs: t.Any) -> None:
        """Initialise a 404 error."""
        super().__init__(404, message, **kwargs)


class ForbiddenError(HttpError):
    """Error raised when access to the resource is not allowed."""

    def __init__(self, message: str = "", **kwargs: t.Any) -> None:
        """Initialise a 403 error."""
        super().__init__(403, message, **kwargs)


class SeverityError(BaseError):
    """Errors that carry a severity level instead of a code.

    The severity uses the numeric levels of the `logging` module and is
    used as the error code whenever no explicit code was given.

    :param message: The error message to be displayed.
    :param severity: Numeric severity level, defaults to
        `logging.ERROR`.
    :param code: Application specific error code, defaults to `0`.
    """

    def __init__(
        self,
        message: str = "",
        *,
        severity: int = logging.ERROR,
        code: int = 0,
    ) -> None:
        """Initialise the error with a severity level."""
        super().__init__(message, code=code)
        self.severity = severity
