"""Custom exceptions for build-analyzer."""


class AnalyzerError(Exception):
    """Base exception for all analyzer errors."""


class BuildResultFrozenError(AnalyzerError):
    """Raised when a completed build result is mutated."""

    def __init__(self, project_file: str):
        self.project_file = project_file
        super().__init__(f"Build result for '{project_file}' is already complete")


class EventLogError(AnalyzerError):
    """Raised when a build event log line cannot be decoded."""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {reason}")


class UnknownProjectContextError(AnalyzerError):
    """Raised when an event references a project context that was never started."""

    def __init__(self, context_id: int):
        self.context_id = context_id
        super().__init__(f"No project started for context {context_id}")
