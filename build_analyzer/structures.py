"""Case-insensitive mapping used for build properties and item tables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar

V = TypeVar("V")


class CaseInsensitiveDict(MutableMapping[str, V], Generic[V]):
    """Dict keyed by strings compared case-insensitively.

    The casing of the most recent write is kept for iteration, so
    ``properties["assemblyname"] = "x"`` after ``properties["AssemblyName"]``
    replaces the entry and iterates as ``assemblyname``.
    """

    def __init__(self, data: Mapping[str, V] | None = None, **kwargs: V) -> None:
        self._store: dict[str, tuple[str, V]] = {}
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    def __setitem__(self, key: str, value: V) -> None:
        self._store[key.casefold()] = (key, value)

    def __getitem__(self, key: str) -> V:
        return self._store[key.casefold()][1]

    def __delitem__(self, key: str) -> None:
        del self._store[key.casefold()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._store

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        other_folded = {str(k).casefold(): v for k, v in other.items()}
        return {k: v for k, (_, v) in self._store.items()} == other_folded

    def copy(self) -> CaseInsensitiveDict[V]:
        return CaseInsensitiveDict(dict(self.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
