"""\
Filesystem utility objects
==========================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Wednesday, July 30 2025
Last updated on: Monday, October 19 2026

This module provides various utilities that are used throughout the
framework.
"""

from __future__ import annotations

import os

__all__: tuple[str, ...] = (
    "mkdir",
    "readlines",
)


def mkdir(path: str) -> str:
    """Create a directory if it does not exist."""
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)
    return path


def readlines(path: str, encoding: str = "utf-8") -> list[str]:
    """Read a text file in one go and return its lines.

    Line endings are preserved. Undecodable bytes are replaced rather
    than rejected, so a source file with a stray byte can still be
    shown.

    :param path: Path of the file to read.
    :param encoding: Text encoding of the file, defaults to `utf-8`.
    :return: List of lines in the file.
    :raises OSError: If the file cannot be opened or read.
    """
    with open(path, encoding=encoding, errors="replace") as f:
        return f.readlines()
