"""Data models for build items (references, compile items, packages, ...)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class ProjectItem:
    """A typed item emitted by the build orchestrator.

    ``metadata`` is copied into a read-only mapping on construction.
    """

    item_spec: str
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        return hash((self.item_spec, frozenset(self.metadata.items())))

    @classmethod
    def coerce(cls, value: Any) -> ProjectItem:
        """Accept a ProjectItem, an ``(item_spec, metadata)`` pair or a bare item spec."""
        if isinstance(value, ProjectItem):
            return value
        if isinstance(value, str):
            return cls(item_spec=value)
        if isinstance(value, Mapping):
            return cls(
                item_spec=str(value["item_spec"]),
                metadata={str(k): str(v) for k, v in (value.get("metadata") or {}).items()},
            )
        item_spec, metadata = value
        return cls(
            item_spec=str(item_spec),
            metadata={str(k): str(v) for k, v in (metadata or {}).items()},
        )
