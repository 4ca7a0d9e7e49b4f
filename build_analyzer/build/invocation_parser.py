"""Compiler invocation parser: recovers ``(switch, value)`` records from a csc command line.

The grammar is the one emitted by the C# compiler front end: tokens are
separated by single spaces, switches look like ``/name`` or ``/name:value``,
values may be double-quoted (and then contain spaces), and ``\\"`` inside a
quoted value does not close it. This is not a general shell parser.

Parsing never raises: truncated or malformed command lines yield whatever
records could be recovered.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable, Sequence

import structlog

from build_analyzer.models.invocation import ArgumentRecord

log = structlog.get_logger("build_analyzer.parser")

DEFAULT_EXECUTABLE_MARKER = "csc."
DEFAULT_EXECUTABLE_NAMES: tuple[str, ...] = ("csc.dll", "csc.exe")

_PATH_SEPARATOR_RE = re.compile(r"[\\/]")


def _strip_outer_quote(text: str) -> str:
    """Strip at most one leading and one trailing double quote."""
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def _remove_quotes(text: str) -> str:
    """Remove quotes from the first and last character only."""
    if len(text) < 2:
        return text.strip('"')
    return _strip_outer_quote(text)


def final_path_segment(path: str) -> str:
    """Return the file name part of *path*, accepting both ``/`` and ``\\``."""
    return _PATH_SEPARATOR_RE.split(path)[-1]


class InvocationParser:
    """
    Parse a raw compiler invocation into ordered argument records.

    The first record always carries the compiler executable (everything up to
    and including the last token that contains ``executable_marker``).

    Tokens starting with ``/`` are ambiguous on Unix-like systems: they may be
    switches or absolute paths. A token is treated as a path only when
    ``path_exists`` reports a file at that exact text, so an absolute path
    that does not exist yet is read as a switch.
    """

    def __init__(
        self,
        executable_marker: str = DEFAULT_EXECUTABLE_MARKER,
        executable_names: Iterable[str] = DEFAULT_EXECUTABLE_NAMES,
        path_exists: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        self.executable_marker = executable_marker
        self.executable_names = tuple(executable_names)
        self.path_exists = path_exists

    def parse(self, raw: str) -> list[ArgumentRecord]:
        """
        Parse *raw* into records.

        Returns:
            Records in left-to-right order; empty for blank input.
        """
        if not raw or not raw.strip():
            return []

        parts = raw.split(" ")
        start = self._executable_boundary(parts)
        records = [ArgumentRecord(None, _strip_outer_quote(" ".join(parts[:start])))]

        c = start
        while c < len(parts):
            part = parts[c]
            if not part:
                c += 1
                continue

            switch: str | None = None
            value_start = 0
            if part[0] == "/" and not self.path_exists(part):
                colon = part.find(":")
                if colon == -1 or colon >= len(part) - 1:
                    # Switch without a value
                    records.append(ArgumentRecord(part[1:] if colon == -1 else part[1:colon], None))
                    c += 1
                    continue
                switch = part[1:colon]
                value_start = colon + 1

            if part[value_start] == '"':
                end = self._find_closing_quote(parts, c, value_start)
                joined = " ".join(parts[c : end + 1])
                records.append(ArgumentRecord(switch, _remove_quotes(joined[value_start:])))
                c = end + 1
                continue

            records.append(ArgumentRecord(switch, part[value_start:]))
            c += 1

        return records

    def is_executable(self, value: str | None) -> bool:
        """True if the final path segment of *value* names the compiler executable."""
        if not value:
            return False
        name = final_path_segment(value).casefold()
        return any(name == candidate.casefold() for candidate in self.executable_names)

    def _executable_boundary(self, parts: Sequence[str]) -> int:
        marker = self.executable_marker.casefold()
        if not marker:
            return 0
        for index in range(len(parts) - 1, -1, -1):
            if marker in parts[index].casefold():
                return index + 1
        return 0

    def _find_closing_quote(self, parts: Sequence[str], first: int, value_start: int) -> int:
        """Return the index of the token holding the closing quote.

        On the first token the closing quote must lie past the opening one.
        When no closing quote exists the last token index is returned.
        """
        for c in range(first, len(parts)):
            part = parts[c]
            if c == first:
                candidate = len(part) > value_start + 1
            else:
                candidate = len(part) > 0
            if candidate and part[-1] == '"' and (len(part) < 2 or part[-2] != "\\"):
                return c
        log.debug("parser.unterminated_quote", token=parts[first])
        return len(parts) - 1


def parse_invocation(raw: str, **kwargs) -> list[ArgumentRecord]:
    """Parse *raw* with a parser built from *kwargs*."""
    return InvocationParser(**kwargs).parse(raw)


def _quote(value: str) -> str:
    return f'"{value}"' if value == "" or " " in value else value


def format_invocation(records: Iterable[ArgumentRecord]) -> str:
    """Rebuild a command line from records produced by :meth:`InvocationParser.parse`.

    The leading record is emitted verbatim; switch values and positional
    values are quoted when empty or containing a space.
    """
    tokens: list[str] = []
    for index, record in enumerate(records):
        if index == 0 and record.switch is None:
            if record.value:
                tokens.append(record.value)
            continue
        if record.switch is None:
            tokens.append(_quote(record.value or ""))
        elif record.value is None:
            tokens.append(f"/{record.switch}")
        else:
            tokens.append(f"/{record.switch}:{_quote(record.value)}")
    return " ".join(tokens)
