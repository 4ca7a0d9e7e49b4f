"""Data models shared by the parser, the build result and the event processor."""

from build_analyzer.models.invocation import ArgumentRecord
from build_analyzer.models.items import ProjectItem

__all__ = ["ArgumentRecord", "ProjectItem"]
