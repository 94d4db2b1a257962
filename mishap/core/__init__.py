"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, August 02 2025
Last updated on: Monday, October 19 2026

This module acts as an entry point for combining various core objects
and configurations used throughout this framework.
"""

from __future__ import annotations

from .classifier import *
from .config import *
from .console import *
from .error import *
from .fault import *
from .handler import *
from .http import *
from .lang import *
from .render import *
from .report import *
from .source import *
from .template import *


__all__: tuple[str, ...] = (
    classifier.__all__
    + config.__all__
    + console.__all__
    + error.__all__
    + fault.__all__
    + handler.__all__
    + http.__all__
    + lang.__all__
    + render.__all__
    + report.__all__
    + source.__all__
    + template.__all__
)
