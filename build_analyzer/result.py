"""BuildResult: accumulated state and derived views for one build unit."""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from build_analyzer.build.framework import resolve_target_framework
from build_analyzer.build.invocation_parser import InvocationParser
from build_analyzer.exceptions import BuildResultFrozenError
from build_analyzer.identity import resolve_project_guid
from build_analyzer.models.invocation import ArgumentRecord
from build_analyzer.models.items import ProjectItem
from build_analyzer.paths import normalize_path, resolve_relative
from build_analyzer.structures import CaseInsensitiveDict

log = structlog.get_logger("build_analyzer.result")

PROJECT_GUID = "ProjectGuid"
TARGET_FRAMEWORK = "TargetFramework"
TARGET_FRAMEWORK_IDENTIFIER = "TargetFrameworkIdentifier"
TARGET_FRAMEWORK_VERSION = "TargetFrameworkVersion"
PROJECT_REFERENCE = "ProjectReference"
PACKAGE_REFERENCE = "PackageReference"


class BuildResult:
    """
    Result of building a single project.

    Created when the project starts building, fed with property/item batches
    and compiler command lines while it builds, and frozen by
    :meth:`complete`. Instances are not thread-safe; the host must not read
    views while an ingestion on the same instance is in progress.
    """

    def __init__(
        self,
        project_file_path: str,
        properties: Mapping[str, str] | None = None,
        items: Mapping[str, Iterable[Any]] | None = None,
        solution_project_guid: uuid.UUID | None = None,
        parser: InvocationParser | None = None,
    ) -> None:
        self.project_file_path = normalize_path(project_file_path)
        self.parser = parser or InvocationParser()

        self._properties: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        self._items: CaseInsensitiveDict[tuple[ProjectItem, ...]] = CaseInsensitiveDict()
        self._invocation_arguments: list[ArgumentRecord] | None = None
        self._has_primary_invocation = False
        self._succeeded = False
        self._complete = False

        if properties or items:
            self.ingest_build_event(properties or {}, items or {})

        self._project_guid = resolve_project_guid(
            self.project_file_path,
            explicit=self.get_property(PROJECT_GUID),
            external=solution_project_guid,
        )

    # ── state ────────────────────────────────────────────────────────────

    @property
    def project_guid(self) -> uuid.UUID:
        return self._project_guid

    @property
    def project_directory(self) -> str:
        return os.path.dirname(self.project_file_path)

    @property
    def properties(self) -> Mapping[str, str]:
        return MappingProxyType(self._properties)

    @property
    def items(self) -> Mapping[str, tuple[ProjectItem, ...]]:
        return MappingProxyType(self._items)

    @property
    def invocation_arguments(self) -> tuple[ArgumentRecord, ...] | None:
        if self._invocation_arguments is None:
            return None
        return tuple(self._invocation_arguments)

    @property
    def succeeded(self) -> bool:
        return self._succeeded

    @property
    def is_complete(self) -> bool:
        return self._complete

    def get_property(self, name: str) -> str | None:
        """Return the value of property *name*, or None if it was never set."""
        return self._properties.get(name)

    def get_items(self, item_type: str) -> tuple[ProjectItem, ...]:
        """Return the items of *item_type*, or an empty tuple."""
        return self._items.get(item_type, ())

    # ── ingestion ────────────────────────────────────────────────────────

    def ingest_build_event(
        self,
        properties: Mapping[str, str],
        items: Mapping[str, Iterable[Any]],
    ) -> None:
        """Merge one batch of properties and items.

        Properties overwrite key by key. Each item type present in the batch
        replaces the previously stored sequence for that type.
        """
        self._ensure_open()
        for name, value in properties.items():
            self._properties[str(name)] = "" if value is None else str(value)
        for item_type, entries in items.items():
            self._items[str(item_type)] = tuple(ProjectItem.coerce(entry) for entry in entries)
        log.debug(
            "result.build_event_ingested",
            project_file=self.project_file_path,
            properties=len(properties),
            item_types=len(items),
        )

    def ingest_invocation(self, raw: str, is_primary_phase: bool = False) -> None:
        """Parse and store a compiler command line.

        Some projects invoke the compiler more than once. The first command
        line is kept until one from the primary compile phase arrives; a
        primary command line is never replaced.
        """
        if not raw or not raw.strip():
            return
        self._ensure_open()
        if self._has_primary_invocation or (
            self._invocation_arguments is not None and not is_primary_phase
        ):
            log.debug("result.invocation_ignored", project_file=self.project_file_path)
            return

        arguments = self.parser.parse(raw)
        if self._invocation_arguments is not None:
            log.debug("result.invocation_replaced", project_file=self.project_file_path)
        self._invocation_arguments = arguments
        self._has_primary_invocation = is_primary_phase

    def complete(self, succeeded: bool) -> None:
        """Record the build outcome and freeze the result."""
        self._ensure_open()
        self._succeeded = bool(succeeded)
        self._complete = True
        log.info(
            "result.completed",
            project_file=self.project_file_path,
            succeeded=self._succeeded,
        )

    def _ensure_open(self) -> None:
        if self._complete:
            raise BuildResultFrozenError(self.project_file_path)

    # ── derived views ────────────────────────────────────────────────────

    @property
    def target_framework(self) -> str | None:
        return resolve_target_framework(
            self.get_property(TARGET_FRAMEWORK),
            [
                (
                    self.get_property(TARGET_FRAMEWORK_IDENTIFIER),
                    self.get_property(TARGET_FRAMEWORK_VERSION),
                )
            ],
        )

    @property
    def compiler_command(self) -> str | None:
        """The leading executable record of the stored invocation."""
        if not self._invocation_arguments:
            return None
        return self._invocation_arguments[0].value

    @property
    def source_files(self) -> list[str]:
        if not self._invocation_arguments:
            return []
        directory = self.project_directory
        return [
            resolve_relative(directory, record.value)
            for record in self._invocation_arguments[1:]
            if record.switch is None
            and record.value is not None
            and not self.parser.is_executable(record.value)
        ]

    @property
    def references(self) -> list[str]:
        if not self._invocation_arguments:
            return []
        return [
            record.value
            for record in self._invocation_arguments
            if record.switch is not None
            and record.switch.casefold() == "reference"
            and record.value is not None
        ]

    @property
    def project_references(self) -> list[str]:
        directory = self.project_directory
        return [resolve_relative(directory, item.item_spec) for item in self.get_items(PROJECT_REFERENCE)]

    @property
    def package_references(self) -> dict[str, dict[str, str]]:
        """``PackageReference`` items keyed by package id; the first item wins.

        The metadata typically includes a ``Version`` key.
        """
        packages: dict[str, dict[str, str]] = {}
        for item in self.get_items(PACKAGE_REFERENCE):
            if item.item_spec not in packages:
                packages[item.item_spec] = dict(item.metadata)
        return packages

    def __repr__(self) -> str:
        return f"BuildResult(project_file_path={self.project_file_path!r}, succeeded={self._succeeded})"
