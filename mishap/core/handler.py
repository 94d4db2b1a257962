"""\
Handler
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module provides the `Handler`, the single entry point a web
framework uses once it catches an unhandled exception while processing
a request. The handler reports the exception and renders it either into
the active response or to the console::

    handler = Handler(RenderConfig(debug=False), lang=Catalogue(messages))
    handler.set_response(response)
    try:
        dispatch(request)
    except Exception as exc:
        handler.report(exc)
        handler.render(exc).reraise()
"""

from __future__ import annotations

import typing as t

from mishap.core.classifier import ErrorClassifier
from mishap.core.console import ConsoleRenderer
from mishap.core.fault import DEFAULT_IGNORE
from mishap.core.fault import Fault
from mishap.core.render import CallbackStrategy
from mishap.core.render import NullStrategy
from mishap.core.render import RenderStrategy
from mishap.core.render import ResponseRenderer
from mishap.core.report import ReportSink
from mishap.core.template import TemplateEngine
from mishap.utils.logging import configure
from mishap.utils.opentelemetry import get_tracer

if t.TYPE_CHECKING:
    import logging

    from mishap.core.config import RenderConfig
    from mishap.core.console import Output
    from mishap.core.http import HttpResponse
    from mishap.core.lang import Lang
    from mishap.core.render import Outcome

__all__: tuple[str, ...] = ("Handler",)


class Handler:
    """Report and render unhandled exceptions.

    The handler installs the logging handlers described by
    `RenderConfig.logger` when it is built.

    :param config: Render configuration.
    :param lang: Message catalogue used for localisation, defaults to
        `None`.
    :param engine: Template engine, defaults to one searching the
        configured template directories.
    :param logger: Logger reported errors are written to, defaults to
        `None`.
    :param ignore: Exception types which are never reported, defaults
        to HTTP errors.
    """

    def __init__(
        self,
        config: RenderConfig,
        *,
        lang: Lang | None = None,
        engine: TemplateEngine | None = None,
        logger: logging.Logger | None = None,
        ignore: t.Iterable[type[BaseException]] = DEFAULT_IGNORE,
    ) -> None:
        """Initialise the handler."""
        self.config = config
        configure(config.logger)
        self.ignore = tuple(ignore)
        self.classifier = ErrorClassifier(lang, cli=config.cli)
        self.sink = ReportSink(
            config, self.classifier, logger=logger, ignore=self.ignore
        )
        self.renderer = ResponseRenderer(
            config,
            self.classifier,
            engine or TemplateEngine(config.template_dirs),
            tracer=get_tracer(config),
        )
        self.console = ConsoleRenderer(config)
        self._request: t.Any = None
        self._response: HttpResponse | None = None

    def __repr__(self) -> str:
        """Return a string representation of the handler."""
        return (
            f"<Handler(debug={self.config.debug}, "
            f"strategy={self.renderer.strategy!r})>"
        )

    def set_request(self, request: t.Any) -> None:
        """Set the request currently being processed."""
        self._request = request

    def set_response(self, response: HttpResponse) -> None:
        """Set the response error pages are written into."""
        self._response = response

    def set_render(
        self,
        render: RenderStrategy | t.Callable[[BaseException], t.Any] | None,
    ) -> None:
        """Register a custom renderer tried before the built-in ones.

        :param render: Strategy, plain callable or `None` to remove the
            custom renderer.
        """
        if render is None:
            strategy: RenderStrategy = NullStrategy()
        elif isinstance(render, RenderStrategy):
            strategy = render
        else:
            strategy = CallbackStrategy(render)
        self.renderer.strategy = strategy

    @property
    def request(self) -> t.Any:
        """Get the request currently being processed."""
        return self._request

    @property
    def response(self) -> HttpResponse | None:
        """Get the response error pages are written into."""
        return self._response

    def fault(self, exception: BaseException) -> Fault:
        """Return the classified fault for an exception."""
        return Fault.from_exception(exception, ignore=self.ignore)

    def is_ignorable(self, exception: BaseException) -> bool:
        """Return `True` if the exception is not reported."""
        return self.sink.is_ignorable(exception)

    def report(self, exception: BaseException) -> None:
        """Log the exception unless it is ignorable. Never raises."""
        self.sink.report(self.fault(exception))

    def render(self, exception: BaseException) -> Outcome:
        """Render the exception into the active response.

        :param exception: Exception to render.
        :return: Outcome holding the response. Call `Outcome.reraise`
            to propagate the original exception after the response has
            been written.
        """
        return self.renderer.render(self.fault(exception), self._response)

    def render_for_console(
        self,
        output: Output,
        exception: BaseException,
    ) -> None:
        """Render the exception to a console output."""
        self.console.render(output, exception)
