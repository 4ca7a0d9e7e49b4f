"""Data models for parsed compiler invocations."""

from __future__ import annotations

from typing import NamedTuple


class ArgumentRecord(NamedTuple):
    """One ``(switch, value)`` pair recovered from a compiler command line.

    ``switch`` is None for the leading executable record and for positional
    values. ``value`` is None for flags such as ``/noconfig``.
    """

    switch: str | None
    value: str | None

    @property
    def is_flag(self) -> bool:
        return self.switch is not None and self.value is None

    @property
    def is_positional(self) -> bool:
        return self.switch is None
