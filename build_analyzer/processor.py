"""Build event processing: routes orchestrator events to per-project results."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog
from pydantic import ValidationError

from build_analyzer.build.invocation_parser import InvocationParser
from build_analyzer.exceptions import EventLogError, UnknownProjectContextError
from build_analyzer.models.events import (
    BUILD_EVENT_ADAPTER,
    BuildEvent,
    ProjectFinished,
    ProjectStarted,
    TargetFinished,
    TargetStarted,
    TaskCommandLine,
)
from build_analyzer.paths import normalize_path
from build_analyzer.result import TARGET_FRAMEWORK, BuildResult

log = structlog.get_logger("build_analyzer.processor")

DEFAULT_COMPILER_TASK = os.environ.get("BUILD_ANALYZER_COMPILER_TASK", "Csc")
PRIMARY_COMPILE_TARGET = "CoreCompile"


def load_events(path: str | Path) -> Iterator[BuildEvent]:
    """Yield the events of a JSON-lines build event log.

    Blank lines are skipped. Raises EventLogError on the first malformed line.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        for line_number, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                yield BUILD_EVENT_ADAPTER.validate_json(line)
            except ValidationError as e:
                raise EventLogError(str(path), line_number, str(e)) from e


class BuildEventProcessor:
    """
    Turn a stream of build events into :class:`BuildResult` objects.

    Each project context gets a result keyed by project file and target
    framework, so a multi-targeted project yields one result per framework.
    A compiler task command line is treated as primary when it runs inside
    the ``CoreCompile`` target. A result completes when the last context
    building it finishes.
    """

    def __init__(
        self,
        compiler_task: str = DEFAULT_COMPILER_TASK,
        parser: InvocationParser | None = None,
        strict: bool = False,
    ) -> None:
        self.compiler_task = compiler_task
        self.parser = parser or InvocationParser()
        self.strict = strict
        self._results: dict[tuple[str, str], BuildResult] = {}
        self._contexts: dict[int, BuildResult] = {}
        self._active_targets: dict[int, list[str]] = {}
        self._ignored_contexts: set[int] = set()
        # Contexts still building each result; nested builds of the same
        # project and target framework share one result
        self._context_keys: dict[int, tuple[str, str]] = {}
        self._open_counts: dict[tuple[str, str], int] = {}

    @property
    def results(self) -> list[BuildResult]:
        return list(self._results.values())

    def process_all(self, events: Iterable[BuildEvent]) -> list[BuildResult]:
        for event in events:
            self.process(event)
        return self.results

    def process(self, event: BuildEvent) -> None:
        if isinstance(event, ProjectStarted):
            self._project_started(event)
            return

        if event.context_id in self._ignored_contexts:
            if isinstance(event, ProjectFinished):
                self._ignored_contexts.discard(event.context_id)
            return

        result = self._contexts.get(event.context_id)
        if result is None:
            if self.strict:
                raise UnknownProjectContextError(event.context_id)
            log.warning(
                "processor.unknown_context",
                event_type=event.type,
                context_id=event.context_id,
            )
            return

        if isinstance(event, TargetStarted):
            self._active_targets.setdefault(event.context_id, []).append(event.target_name)
        elif isinstance(event, TargetFinished):
            self._target_finished(event)
        elif isinstance(event, TaskCommandLine):
            if event.task_name.casefold() == self.compiler_task.casefold():
                targets = self._active_targets.get(event.context_id, [])
                primary = any(t.casefold() == PRIMARY_COMPILE_TARGET.casefold() for t in targets)
                result.ingest_invocation(event.command_line, is_primary_phase=primary)
        elif isinstance(event, ProjectFinished):
            del self._contexts[event.context_id]
            self._active_targets.pop(event.context_id, None)
            key = self._context_keys.pop(event.context_id)
            self._open_counts[key] -= 1
            if self._open_counts[key] > 0:
                log.debug(
                    "processor.nested_context_finished",
                    project_file=result.project_file_path,
                    context_id=event.context_id,
                    open_contexts=self._open_counts[key],
                )
                return
            del self._open_counts[key]
            result.complete(event.succeeded)

    def _project_started(self, event: ProjectStarted) -> None:
        items = {
            item_type: [(entry.item_spec, entry.metadata) for entry in entries]
            for item_type, entries in event.items.items()
        }
        existing = self._contexts.get(event.context_id)
        if existing is not None:
            existing.ingest_build_event(event.properties, items)
            return

        target_framework = next(
            (v for k, v in event.properties.items() if k.casefold() == TARGET_FRAMEWORK.casefold()),
            "",
        )
        key = (normalize_path(event.project_file), target_framework.casefold())
        result = self._results.get(key)
        if result is not None and result.is_complete:
            # Later passes over an already built project (e.g. GetTargetPath)
            log.debug(
                "processor.project_already_complete",
                project_file=result.project_file_path,
                context_id=event.context_id,
            )
            self._ignored_contexts.add(event.context_id)
            return
        if result is None:
            result = BuildResult(
                event.project_file,
                properties=event.properties,
                items=items,
                solution_project_guid=event.project_guid,
                parser=self.parser,
            )
            self._results[key] = result
            log.info(
                "processor.project_started",
                project_file=result.project_file_path,
                target_framework=target_framework or None,
                context_id=event.context_id,
            )
        else:
            result.ingest_build_event(event.properties, items)
        self._contexts[event.context_id] = result
        self._context_keys[event.context_id] = key
        self._open_counts[key] = self._open_counts.get(key, 0) + 1

    def _target_finished(self, event: TargetFinished) -> None:
        targets = self._active_targets.get(event.context_id, [])
        # Remove the innermost matching target
        for index in range(len(targets) - 1, -1, -1):
            if targets[index].casefold() == event.target_name.casefold():
                del targets[index]
                break
