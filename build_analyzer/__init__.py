"""build-analyzer: compiler invocation parsing and per-project build results."""

__version__ = "0.1.0"

from build_analyzer.build.framework import get_target_frameworks, resolve_target_framework
from build_analyzer.build.invocation_parser import (
    InvocationParser,
    format_invocation,
    parse_invocation,
)
from build_analyzer.exceptions import (
    AnalyzerError,
    BuildResultFrozenError,
    EventLogError,
    UnknownProjectContextError,
)
from build_analyzer.models import ArgumentRecord, ProjectItem
from build_analyzer.processor import BuildEventProcessor, load_events
from build_analyzer.result import BuildResult

__all__ = [
    "AnalyzerError",
    "ArgumentRecord",
    "BuildEventProcessor",
    "BuildResult",
    "BuildResultFrozenError",
    "EventLogError",
    "InvocationParser",
    "ProjectItem",
    "UnknownProjectContextError",
    "format_invocation",
    "get_target_frameworks",
    "load_events",
    "parse_invocation",
    "resolve_target_framework",
]
