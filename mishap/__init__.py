"""\
Mishap
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

Exception reporting and rendering for web applications

This package (mishap) intercepts an unhandled exception raised while a
request is being processed, decides how to log it and turns it into an
HTML error page or a console diagnostic. In debug mode, the page shows
the file, the line, the call stack and the surrounding source code. In
production, only a code and a (possibly localised or placeholder)
message are exposed.

Expected HTTP failures such as a missing page are not logged as errors
and can be rendered with their own per-status templates.
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "19.10.2026"
