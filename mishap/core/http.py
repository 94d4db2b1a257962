"""\
HTTP objects
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module defines the minimal request and response surface the
handler works with. Any server's response object can be used as long as
it provides `set_status`, `add_header` and `end`; `Response` is a plain
in-memory implementation of it.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "HttpResponse",
    "Request",
    "Response",
)


class HttpResponse(t.Protocol):
    """Outgoing response the handler writes an error page into."""

    def set_status(self, status: int) -> None: ...

    def add_header(self, name: str, value: str) -> None: ...

    def end(self, body: str) -> None: ...


class Request:
    """Incoming request, kept by the handler for renderers to inspect.

    :param method: HTTP method, defaults to `GET`.
    :param path: Request path, defaults to `/`.
    :param headers: Request headers, defaults to `None`.
    """

    __slots__: tuple[str, ...] = ("headers", "method", "path")

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialise the request."""
        self.method = method
        self.path = path
        self.headers: dict[str, str] = dict(headers or {})

    def __repr__(self) -> str:
        """Return a string representation of the request."""
        return f"<Request(method={self.method!r}, path={self.path!r})>"


class Response:
    """In-memory response.

    Headers are kept in the order they were added and a header may be
    added more than once. The body is written once by `end`, after
    which the response is finished.

    :param status: Initial status code, defaults to `200`.
    """

    __slots__: tuple[str, ...] = ("body", "ended", "headers", "status")

    def __init__(self, status: int = 200) -> None:
        """Initialise the response."""
        self.status = status
        self.headers: list[tuple[str, str]] = []
        self.body: str = ""
        self.ended: bool = False

    def __repr__(self) -> str:
        """Return a string representation of the response."""
        return f"<Response(status={self.status}, ended={self.ended})>"

    def set_status(self, status: int) -> None:
        self.status = status

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def header(self, name: str) -> str | None:
        """Return the last value of a header, matched case-insensitively."""
        for key, value in reversed(self.headers):
            if key.lower() == name.lower():
                return value
        return None

    def end(self, body: str) -> None:
        """Write the body and finish the response."""
        self.body = body
        self.ended = True
