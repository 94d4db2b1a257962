"""\
Console
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module renders exceptions for command line execution, where there
is no response to write into. The amount of detail depends on the
verbosity of the output, which is raised to the maximum in debug mode.
"""

from __future__ import annotations

import enum
import sys
import traceback
import typing as t

if t.TYPE_CHECKING:
    from mishap.core.config import RenderConfig

__all__: tuple[str, ...] = (
    "ConsoleOutput",
    "ConsoleRenderer",
    "Output",
    "Verbosity",
)


class Verbosity(enum.IntEnum):
    """Verbosity levels of the console output."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3
    DEBUG = 4


class Output(t.Protocol):
    """Console output the renderer delegates to."""

    def set_verbosity(self, level: Verbosity) -> None: ...

    def render_exception(self, exception: BaseException) -> None: ...


class ConsoleOutput:
    """Write exceptions to a text stream.

    The title and message are always written, unless the output is
    quiet. Verbose output adds the traceback and debug output adds the
    chain of causes as well.

    :param stream: Stream to write to, defaults to `sys.stderr`.
    :param verbosity: Initial verbosity, defaults to `Verbosity.NORMAL`.
    :param colour: Whether to colour the title, defaults to `None` which
        colours only when the stream is a TTY.
    """

    TITLE: t.Final[str] = "\x1b[38;5;15;48;5;160m"
    RESET: t.Final[str] = "\x1b[0m"

    def __init__(
        self,
        stream: t.TextIO | None = None,
        verbosity: Verbosity = Verbosity.NORMAL,
        colour: bool | None = None,
    ) -> None:
        """Initialise the console output."""
        self.stream = stream or sys.stderr
        self.verbosity = verbosity
        if colour is None:
            colour = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.colour = colour

    def set_verbosity(self, level: Verbosity) -> None:
        self.verbosity = level

    def write(self, text: str = "") -> None:
        self.stream.write(text + "\n")

    def render_exception(self, exception: BaseException) -> None:
        """Write an exception according to the current verbosity.

        :param exception: Exception to write.
        """
        if self.verbosity <= Verbosity.QUIET:
            return
        seen: set[int] = set()
        current: BaseException | None = exception
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            self._render_one(current)
            if self.verbosity < Verbosity.DEBUG:
                break
            current = current.__cause__ or current.__context__
        self.stream.flush()

    def _render_one(self, exception: BaseException) -> None:
        title = f"[{type(exception).__name__}]"
        if self.colour:
            title = f"{self.TITLE}  {title}  {self.RESET}"
        self.write()
        self.write(title)
        message = getattr(exception, "message", None) or str(exception)
        for line in message.splitlines() or [""]:
            self.write(line)
        if self.verbosity >= Verbosity.VERBOSE:
            self.write()
            self.write("Exception trace:")
            for frame in traceback.extract_tb(exception.__traceback__):
                self.write(
                    f" {frame.name}() at {frame.filename}:{frame.lineno}"
                )
        self.write()


class ConsoleRenderer:
    """Render exceptions to a console output.

    :param config: Render configuration.
    """

    __slots__: tuple[str, ...] = ("config",)

    def __init__(self, config: RenderConfig) -> None:
        """Initialise the console renderer."""
        self.config = config

    def render(self, output: Output, exception: BaseException) -> None:
        """Render an exception, at full verbosity in debug mode."""
        if self.config.debug:
            output.set_verbosity(Verbosity.DEBUG)
        output.render_exception(exception)
