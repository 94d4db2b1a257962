"""\
Configurations
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module provides various configurations that are used throughout this
framework.

The configuration is sourced once at startup and handed explicitly to
the handler and its components. Render options are frozen, i.e. they
can be given once when the configuration is built but never modified
afterwards, so every report and render call reads the same values.
"""

from __future__ import annotations

import typing as t

from mishap.core.error import ConfigValidationError


if t.TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Mapping

__all__: tuple[str, ...] = (
    "ConsoleLoggerConfig",
    "FileLoggerConfig",
    "LoggerConfig",
    "RenderConfig",
    "TTYLoggerConfig",
    "TelemetryConfig",
    "config_property",
)

_ALLOWED_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
# NOTE(xames3): The default log format uses the special `qualName`
# attribute which is populated by the coloured formatter, see
# `mishap.utils.logging.ColouredFormatter` for more details.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"
_DEFAULT_ERROR_MESSAGE: t.Final[str] = "Page error! Please try again later."

T = t.TypeVar("T")


class config_property(t.Generic[T]):  # noqa: N801
    """Descriptor for configuration properties.

    This descriptor class creates and provides functionalities like
    Python's built-in `property` object decorator, but with additional
    features for configuration management such as validation of the
    assigned values and immutability.

    A frozen property accepts exactly one assignment per instance, which
    is how the configuration objects receive their values in their
    constructors. Any later assignment is rejected.
    """

    __slots__: tuple[str, ...] = (
        "allowed",
        "between",
        "check",
        "default",
        "description",
        "frozen",
        "property",
        "validate",
    )

    def __init__(
        self,
        default: T,
        *,
        frozen: bool = False,
        description: str | None = None,
        allowed: Iterable[T] | None = None,
        check: t.Callable[[T], bool] | None = None,
        between: tuple[int | float, ...] | None = None,
    ) -> None:
        """Initialise configuration property."""
        self.default = default
        self.frozen = frozen
        self.description = description
        self.allowed = allowed
        self.check = check
        self.between = between
        self.property: str = ""
        self.validate: bool = any([self.between, self.check, self.allowed])

    def __set_name__(self, owner: type, name: str) -> None:
        """Register the storage name and validate the default value.

        :param owner: The class on which the property is being defined.
        :param name: The name of the attribute holding the property.
        :raises ConfigValidationError: If the default value does not
            satisfy the property constraints.
        """
        self.property = f"_{name}"
        if self.default is not None and self.validate:
            try:
                self.__validate__(self.default)
            except ConfigValidationError as error:
                raise ConfigValidationError(
                    f"got invalid value for {name!r}: {error}"
                ) from error

    @t.overload
    def __get__(self, instance: None, owner: type) -> config_property[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(
        self,
        instance: object | None,
        owner: type,
    ) -> config_property[T] | T:
        """Get and return the property value from the instance.

        :param instance: The class instance where the property is being
            accessed.
        :param owner: The owner class of the property (not used).
        :return: The value of the property, or the default if the
            instance never received one.
        """
        if instance is None:
            return self
        return vars(instance).get(self.property, self.default)

    def __set__(self, instance: object, value: T) -> None:
        """Set the property with validation & immutability checks.

        :param instance: The class instance where the property is being
            set.
        :param value: The value to be set for the property.
        :raises ConfigValidationError: If the property is frozen and
            already set, or the value fails validation.
        """
        if self.frozen and self.property in vars(instance):
            raise ConfigValidationError(
                f"cannot modify frozen property: {self.property[1:]!r}",
            )
        if self.validate:
            self.__validate__(value)
        vars(instance)[self.property] = value

    def __validate__(self, value: t.Any) -> None:
        """Validate the property value based on constraints.

        :param value: The value to be validated.
        :raises ConfigValidationError: If the value does not meet the
            validation criteria.
        """
        if self.allowed is not None and value not in self.allowed:
            raise ConfigValidationError(
                f"{value!r} is not one of the allowed values "
                f"({', '.join(str(item) for item in self.allowed)})"
            )
        if self.check is not None:
            try:
                if not self.check(value):
                    raise ConfigValidationError("property validation failed")
            except ConfigValidationError:
                raise
            except Exception as error:
                raise ConfigValidationError(
                    f"property validation failed for {value!r} with "
                    f"message: {error}"
                ) from error
        if self.between is not None and len(self.between) == 2:
            minimum, maximum = self.between
            if not all(
                isinstance(num, int | float) for num in (minimum, maximum)
            ):
                raise ConfigValidationError("must be a tuple of two numbers")
            if not (minimum <= value <= maximum):
                raise ConfigValidationError(
                    f"{value} is not between {minimum} and {maximum}"
                )


def _is_status_mapping(value: t.Any) -> bool:
    """Check that value maps HTTP status codes to template names."""
    return all(
        isinstance(status, int)
        and 100 <= status <= 599
        and isinstance(template, str)
        for status, template in dict(value).items()
    )


class _Options:
    """Mixin that assigns keyword options through their descriptors."""

    def _assign(self, options: Mapping[str, t.Any]) -> None:
        for name, value in options.items():
            if not isinstance(
                getattr(type(self), name, None), config_property
            ):
                raise ConfigValidationError(
                    f"unknown configuration option: {name!r}"
                )
            setattr(self, name, value)
        self._seal()

    def _seal(self) -> None:
        """Pin the defaults of frozen properties that were not given."""
        for klass in type(self).__mro__:
            for descriptor in vars(klass).values():
                if (
                    isinstance(descriptor, config_property)
                    and descriptor.frozen
                ):
                    vars(self).setdefault(
                        descriptor.property, descriptor.default
                    )


class FileLoggerConfig(_Options):
    """File logger configuration.

    This class provides configuration options for logging to a file with
    options for log rotation and backup retention.
    """

    enable: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "INFO",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    path: config_property[str] = config_property("logs")
    output: config_property[str] = config_property("mishap.log")
    encoding: config_property[str] = config_property("utf-8", frozen=True)
    max_bytes: config_property[int] = config_property(
        10485760,
        check=lambda x: x > 0,
    )
    backups: config_property[int] = config_property(5, check=lambda x: x >= 0)

    def __init__(self, **options: t.Any) -> None:
        """Initialise file logger configuration."""
        self._assign(options)


class ConsoleLoggerConfig(_Options):
    """Console logger configuration.

    This class provides configuration options for logging to the console
    or the tty.
    """

    enable: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )
    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    colour: config_property[bool] = config_property(
        True,
        allowed=[True, False],
    )

    def __init__(self, **options: t.Any) -> None:
        """Initialise console logger configuration."""
        self._assign(options)


TTYLoggerConfig = ConsoleLoggerConfig


class LoggerConfig(_Options):
    """Logger configuration.

    This class combines the console and file logger configurations to
    provide a single logging setup.
    """

    level: config_property[str] = config_property(
        "DEBUG",
        allowed=_ALLOWED_LOG_LEVELS,
    )
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    as_json: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )

    def __init__(
        self,
        *,
        file: FileLoggerConfig | None = None,
        tty: ConsoleLoggerConfig | None = None,
        **options: t.Any,
    ) -> None:
        """Initialise logger configuration."""
        self.file = file or FileLoggerConfig()
        self.tty = tty or TTYLoggerConfig()
        self._assign(options)


class TelemetryConfig(_Options):
    """Tracing configuration."""

    enabled: config_property[bool] = config_property(
        False,
        allowed=[True, False],
    )
    name: config_property[str] = config_property("mishap")

    def __init__(self, **options: t.Any) -> None:
        """Initialise telemetry configuration."""
        self._assign(options)


class RenderConfig(_Options):
    """Configuration.

    This class serves as the main configuration object for the error
    handler. It is built once, usually at application startup, and
    passed to every component that reports or renders errors::

        config = RenderConfig(
            debug=False,
            record_trace=True,
            http_exception_template={404: "404.html"},
        )

    :param logger: Logger configuration, defaults to `None`.
    :param telemetry: Tracing configuration, defaults to `None`.
    :param options: Values for any of the render options below.
    """

    name: config_property[str] = config_property("mishap", frozen=True)
    version: config_property[str] = config_property("19.10.2026", frozen=True)
    debug: config_property[bool] = config_property(
        False,
        frozen=True,
        description="Expose file, line, trace and source on errors",
        allowed=[True, False],
    )
    cli: config_property[bool] = config_property(
        False,
        frozen=True,
        description="Running from the command line, skips localisation",
        allowed=[True, False],
    )
    record_trace: config_property[bool] = config_property(
        False,
        frozen=True,
        description="Append the full traceback to reported errors",
        allowed=[True, False],
    )
    show_error_msg: config_property[bool] = config_property(
        False,
        frozen=True,
        description="Show the real error message outside debug mode",
        allowed=[True, False],
    )
    error_message: config_property[str] = config_property(
        _DEFAULT_ERROR_MESSAGE,
        frozen=True,
        check=lambda x: isinstance(x, str),
    )
    exception_tmpl: config_property[str] = config_property(
        "exception.html",
        frozen=True,
        check=lambda x: isinstance(x, str) and bool(x),
    )
    http_exception_template: config_property[dict[int, str]] = (
        config_property({}, frozen=True, check=_is_status_mapping)
    )
    template_dirs: config_property[tuple[str, ...]] = config_property(
        (),
        frozen=True,
        check=lambda x: all(isinstance(item, str) for item in x),
    )

    def __init__(
        self,
        *,
        logger: LoggerConfig | None = None,
        telemetry: TelemetryConfig | None = None,
        **options: t.Any,
    ) -> None:
        """Initialise the render configuration."""
        options["http_exception_template"] = dict(
            options.get("http_exception_template", {})
        )
        if "template_dirs" in options:
            options["template_dirs"] = tuple(options["template_dirs"])
        self.logger = logger or LoggerConfig()
        self.telemetry = telemetry or TelemetryConfig()
        self._assign(options)
