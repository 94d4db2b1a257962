"""\
Localisation
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module provides the message catalogue used to localise error
messages before they are shown to a user.
"""

from __future__ import annotations

import json
import typing as t

if t.TYPE_CHECKING:
    from collections.abc import Mapping

__all__: tuple[str, ...] = (
    "Catalogue",
    "Lang",
)


class Lang(t.Protocol):
    """Lookup table for localised messages."""

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> str: ...


class Catalogue:
    """Read-only, in-memory message catalogue.

    :param messages: Mapping of message keys to localised messages,
        defaults to `None`.
    """

    __slots__: tuple[str, ...] = ("_messages",)

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        """Initialise the catalogue."""
        self._messages: dict[str, str] = dict(messages or {})

    @classmethod
    def from_json(cls, path: str, encoding: str = "utf-8") -> Catalogue:
        """Load a catalogue from a flat JSON object on disk."""
        with open(path, encoding=encoding) as f:
            return cls(json.load(f))

    def __repr__(self) -> str:
        """Return a string representation of the catalogue."""
        return f"<Catalogue(messages={len(self._messages)})>"

    def __len__(self) -> int:
        return len(self._messages)

    def has(self, key: str) -> bool:
        """Return `True` if the key has a localised message."""
        return key in self._messages

    def get(self, key: str) -> str:
        """Return the localised message, or the key itself if missing."""
        return self._messages.get(key, key)
