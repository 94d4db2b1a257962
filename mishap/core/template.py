"""\
Templates
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module wraps a Jinja2 environment used to render error pages. The
output of a template is captured into a buffer which is released on
every exit path, including when the template itself fails half way.

A template can choose the status code of the response by setting a
top-level variable::

    {% set status_code = 503 %}
"""

from __future__ import annotations

import io
import json
import os
import typing as t

from jinja2 import ChoiceLoader
from jinja2 import Environment
from jinja2 import FileSystemLoader
from jinja2 import PackageLoader
from jinja2 import Template
from jinja2 import select_autoescape

from mishap.utils.logging import get_logger

if t.TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Mapping

__all__: tuple[str, ...] = (
    "Rendered",
    "TemplateEngine",
)

logger = get_logger(__name__)


class Rendered(t.NamedTuple):
    """Captured output of a template along with its exported names."""

    body: str
    exported: dict[str, t.Any]


class TemplateEngine:
    """Render named templates against a variable scope.

    Templates are looked up in the given directories first and then in
    the templates bundled with this package. An absolute path is loaded
    from its own directory instead.

    :param dirs: Directories to search for templates, defaults to
        `None`.
    """

    __slots__: tuple[str, ...] = ("environment",)

    def __init__(self, dirs: Iterable[str] | None = None) -> None:
        """Initialise the template engine."""
        dirs = list(dirs or [])
        self.environment = Environment(
            loader=ChoiceLoader(
                [
                    FileSystemLoader(dirs),
                    PackageLoader("mishap", "templates"),
                ]
            ),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.environment.filters["to_json"] = lambda v: json.dumps(
            v, default=str
        )
        logger.debug(f"Initialised template engine with directories: {dirs}")

    def load(self, name: str) -> Template:
        """Return the template for a name or an absolute file path."""
        if os.path.isabs(name):
            directory, filename = os.path.split(name)
            loader = FileSystemLoader(directory)
            return loader.load(self.environment, filename)
        return self.environment.get_template(name)

    def render(self, name: str, scope: Mapping[str, t.Any]) -> Rendered:
        """Render a template and capture everything it emits.

        :param name: Name or absolute path of the template to render.
        :param scope: Variables visible to the template.
        :return: Captured body and the template's top-level names.
        :raises jinja2.TemplateError: If the template cannot be found
            or fails to render.
        """
        template = self.load(name)
        context = template.new_context(dict(scope))
        with io.StringIO() as buffer:
            for chunk in template.root_render_func(context):
                buffer.write(chunk)
            body = buffer.getvalue()
        return Rendered(body, context.get_exported())
