"""\
Rendering
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module turns a fault into an HTML response. The renderer tries, in
order:

1. A user supplied render strategy. Whatever it returns, if anything,
   is the final response.
2. For HTTP errors outside debug mode, a per-status template configured
   under `http_exception_template`.
3. The exception template, rendered against a `RenderContext` holding
   either the full diagnostics (debug mode) or only the code and the
   message (production mode).

A response written by the second or the third path still counts as a
failure. The returned `Outcome` carries the original exception so the
caller can re-raise it once the response has gone out, letting any
middleware further up see that the request failed.
"""

from __future__ import annotations

import typing as t
from abc import ABC
from abc import abstractmethod

from opentelemetry import trace

from mishap.core.classifier import extract_data
from mishap.core.fault import FaultKind
from mishap.core.http import Response
from mishap.core.source import read_source
from mishap.utils.logging import get_logger

if t.TYPE_CHECKING:
    from mishap.core.classifier import ErrorClassifier
    from mishap.core.config import RenderConfig
    from mishap.core.fault import Fault
    from mishap.core.http import HttpResponse
    from mishap.core.source import SourceExcerpt
    from mishap.core.template import TemplateEngine

__all__: tuple[str, ...] = (
    "CallbackStrategy",
    "NullStrategy",
    "Outcome",
    "RenderContext",
    "RenderStrategy",
    "ResponseRenderer",
)

CONTENT_TYPE: t.Final[str] = "text/html;charset=utf-8"
DEFAULT_STATUS: t.Final[int] = 500

logger = get_logger(__name__)


def _as_status(value: t.Any) -> int | None:
    """Return value as an HTTP status code or `None` if it is not one."""
    if isinstance(value, bool):
        return None
    try:
        status = int(value)
    except (TypeError, ValueError):
        return None
    return status if 100 <= status <= 599 else None


class RenderStrategy(ABC):
    """Strategy which may render an exception before the handler does."""

    @abstractmethod
    def try_render(self, exception: BaseException) -> t.Any | None:
        """Return a response for the exception, or `None` to pass."""
        raise NotImplementedError


class NullStrategy(RenderStrategy):
    """Strategy used when no custom renderer is registered."""

    def try_render(self, exception: BaseException) -> None:
        return None


class CallbackStrategy(RenderStrategy):
    """Strategy backed by a plain callable.

    :param callback: Callable taking the exception and returning a
        response, or a falsy value to pass.
    """

    def __init__(self, callback: t.Callable[[BaseException], t.Any]) -> None:
        """Initialise the strategy with its callback."""
        self.callback = callback

    def __repr__(self) -> str:
        """Return a string representation of the strategy."""
        return f"<CallbackStrategy(callback={self.callback!r})>"

    def try_render(self, exception: BaseException) -> t.Any | None:
        return self.callback(exception) or None


class Outcome(t.NamedTuple):
    """Result of rendering an exception.

    :var response: The response which was written, or the result of the
        custom render strategy.
    :var exception: The exception that was rendered.
    :var failed: Whether the request must still be treated as failed.
    """

    response: t.Any
    exception: BaseException
    failed: bool

    def reraise(self) -> t.Any:
        """Raise the original exception if the request failed.

        :return: The response, if the request did not fail.
        :raises BaseException: The original exception otherwise.
        """
        if self.failed:
            raise self.exception
        return self.response


class RenderContext:
    """Variables handed to the exception template.

    Use `RenderContext.debug` or `RenderContext.production` to build
    one. Fields which are not part of a variant are left out of
    `as_dict` entirely, so a production template cannot leak them.

    The debug variant exposes `name`, `file`, `line`, `message`,
    `trace`, `code`, `source`, `data` and `tables`. `data` holds the
    extended data of the error, i.e. the labelled sections attached
    with `ApplicationError.set_data`, and `tables` holds the extra
    tables shown below them. The production variant exposes `code` and
    `message` only.
    """

    __slots__: tuple[str, ...] = (
        "code",
        "data",
        "file",
        "line",
        "message",
        "name",
        "source",
        "tables",
        "trace",
        "verbose",
    )

    def __init__(
        self,
        code: int | str,
        message: str,
        *,
        name: str | None = None,
        file: str | None = None,
        line: int | None = None,
        trace: list[dict[str, t.Any]] | None = None,
        source: SourceExcerpt | None = None,
        data: dict[str, t.Any] | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialise the render context."""
        self.code = code
        self.message = message
        self.name = name
        self.file = file
        self.line = line
        self.trace = trace or []
        self.source = source
        self.data = data or {}
        self.tables: dict[str, t.Any] = {}
        self.verbose = verbose

    @classmethod
    def debug(
        cls,
        fault: Fault,
        classifier: ErrorClassifier,
    ) -> RenderContext:
        """Build a context with full diagnostics for a fault."""
        return cls(
            classifier.code(fault),
            classifier.message(fault),
            name=fault.name,
            file=fault.file,
            line=fault.line,
            trace=fault.frames(),
            source=read_source(fault.file, fault.line),
            data=extract_data(fault.exception),
            verbose=True,
        )

    @classmethod
    def production(
        cls,
        fault: Fault,
        classifier: ErrorClassifier,
    ) -> RenderContext:
        """Build a context holding only the code and the message."""
        return cls(classifier.code(fault), classifier.message(fault))

    def __repr__(self) -> str:
        """Return a string representation of the context."""
        return (
            f"<RenderContext(code={self.code!r}, message={self.message!r}, "
            f"verbose={self.verbose})>"
        )

    def as_dict(self) -> dict[str, t.Any]:
        """Return the template scope for this context."""
        if not self.verbose:
            return {"code": self.code, "message": self.message}
        return {
            "name": self.name,
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "trace": self.trace,
            "code": self.code,
            "source": self.source.as_dict() if self.source else {},
            "data": self.data,
            "tables": self.tables,
        }


class ResponseRenderer:
    """Render faults into HTML responses.

    :param config: Render configuration.
    :param classifier: Classifier used for codes and messages.
    :param engine: Template engine used to render error pages.
    :param strategy: Custom render strategy tried first, defaults to
        `NullStrategy`.
    """

    def __init__(
        self,
        config: RenderConfig,
        classifier: ErrorClassifier,
        engine: TemplateEngine,
        *,
        strategy: RenderStrategy | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        """Initialise the response renderer."""
        self.config = config
        self.classifier = classifier
        self.engine = engine
        self.strategy = strategy or NullStrategy()
        self.tracer = tracer or trace.get_tracer(__name__)

    def context(self, fault: Fault) -> RenderContext:
        """Build the render context for a fault.

        Outside debug mode, the message is replaced by the configured
        placeholder unless `show_error_msg` is set.
        """
        if self.config.debug:
            return RenderContext.debug(fault, self.classifier)
        context = RenderContext.production(fault, self.classifier)
        if not self.config.show_error_msg:
            context.message = self.config.error_message
        return context

    def render(
        self,
        fault: Fault,
        response: HttpResponse | None = None,
    ) -> Outcome:
        """Render a fault into the response.

        :param fault: Fault to render.
        :param response: Response to write into, defaults to a new
            `Response`.
        :return: Outcome holding the response and whether the request
            must still be treated as failed.
        """
        with self.tracer.start_as_current_span("mishap.render") as span:
            span.set_attribute("mishap.fault.kind", fault.kind.value)
            span.set_attribute("mishap.fault.name", fault.name)
            result = self.strategy.try_render(fault.exception)
            if result:
                return Outcome(result, fault.exception, False)
            if response is None:
                response = Response()
            status = None
            if fault.kind is FaultKind.STATUS:
                status = fault.status
                template = self.config.http_exception_template.get(status)
                if not self.config.debug and template:
                    rendered = self.engine.render(
                        template, {"e": fault.exception}
                    )
                    self.emit(response, fault, status, rendered.body)
                    span.set_attribute("http.status_code", status)
                    return Outcome(response, fault.exception, True)
            return self.convert(fault, response, status)

    def convert(
        self,
        fault: Fault,
        response: HttpResponse,
        status: int | None = None,
    ) -> Outcome:
        """Render a fault through the exception template.

        The template may choose the status by setting `status_code`,
        otherwise `status` is used and then `500`. A `status_code`
        which is not a valid HTTP status is ignored.

        :param fault: Fault to render.
        :param response: Response to write into.
        :param status: Intended status code, defaults to `None`.
        :return: Outcome marking the request as failed.
        """
        context = self.context(fault)
        rendered = self.engine.render(
            self.config.exception_tmpl, context.as_dict()
        )
        exported = rendered.exported.get("status_code")
        if _as_status(exported) is not None:
            status = _as_status(exported)
        elif exported is not None:
            logger.warning(
                f"Ignoring invalid status code {exported!r} set by "
                f"{self.config.exception_tmpl!r}"
            )
        status = status or DEFAULT_STATUS
        self.emit(response, fault, status, rendered.body)
        trace.get_current_span().set_attribute("http.status_code", status)
        logger.debug(
            f"Rendered {fault.name!r} with status {status}",
            extra={"template": self.config.exception_tmpl},
        )
        return Outcome(response, fault.exception, True)

    def emit(
        self,
        response: HttpResponse,
        fault: Fault,
        status: int,
        body: str,
    ) -> None:
        """Write status, headers and body to the response."""
        response.set_status(status)
        for name, value in fault.headers.items():
            response.add_header(name, value)
        response.add_header("Content-Type", CONTENT_TYPE)
        response.end(body)
