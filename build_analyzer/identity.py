"""Stable project identifiers."""

from __future__ import annotations

import uuid

import structlog

from build_analyzer.paths import normalize_path

log = structlog.get_logger("build_analyzer.identity")

# Namespace for name-based identifiers derived from project file paths
PROJECT_PATH_NAMESPACE = uuid.NAMESPACE_URL


def parse_guid(value: str | None) -> uuid.UUID | None:
    """Parse a GUID in any of the usual textual forms, or return None."""
    if not value or not value.strip():
        return None
    text = value.strip()
    # .NET also accepts the parenthesized form
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    try:
        return uuid.UUID(text)
    except ValueError:
        return None


def project_path_guid(project_file: str) -> uuid.UUID:
    """Deterministic version-5 identifier for a project file path."""
    return uuid.uuid5(PROJECT_PATH_NAMESPACE, normalize_path(project_file))


def resolve_project_guid(
    project_file: str,
    explicit: str | None = None,
    external: uuid.UUID | None = None,
) -> uuid.UUID:
    """
    Resolve the identity of a build unit.

    Order: the explicit ``ProjectGuid`` property when it parses, then an
    externally resolved identifier (e.g. from a solution file), then a
    hash of the normalized project path.
    """
    guid = parse_guid(explicit)
    if guid is not None:
        return guid
    if explicit:
        log.debug("identity.unparsable_guid", project_file=project_file, value=explicit)
    if external is not None:
        return external
    return project_path_guid(project_file)
