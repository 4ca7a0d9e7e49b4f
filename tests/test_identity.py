"""Tests for project identity resolution."""

from __future__ import annotations

import os
import uuid

from build_analyzer.identity import parse_guid, project_path_guid, resolve_project_guid

PROJECT_FILE = os.path.join(os.sep, "repo", "src", "App", "App.csproj")


class TestParseGuid:
    def test_braced(self):
        assert parse_guid("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") == uuid.UUID(
            "fae04ec0-301f-11d3-bf4b-00c04f79efbc"
        )

    def test_parenthesized(self):
        assert parse_guid("(FAE04EC0-301F-11D3-BF4B-00C04F79EFBC)") == uuid.UUID(
            "fae04ec0-301f-11d3-bf4b-00c04f79efbc"
        )

    def test_invalid(self):
        assert parse_guid("FAE04EC0") is None
        assert parse_guid("") is None
        assert parse_guid(None) is None


class TestResolveProjectGuid:
    def test_explicit_first(self):
        external = uuid.uuid4()
        explicit = "fae04ec0-301f-11d3-bf4b-00c04f79efbc"
        assert resolve_project_guid(PROJECT_FILE, explicit, external) == uuid.UUID(explicit)

    def test_external_second(self):
        external = uuid.uuid4()
        assert resolve_project_guid(PROJECT_FILE, None, external) == external

    def test_hash_is_deterministic(self):
        assert resolve_project_guid(PROJECT_FILE) == resolve_project_guid(PROJECT_FILE)
        assert resolve_project_guid(PROJECT_FILE) == uuid.uuid5(uuid.NAMESPACE_URL, PROJECT_FILE)

    def test_hash_uses_normalized_path(self):
        messy = os.path.join(os.sep, "repo", "src", "Lib", "..", "App", ".", "App.csproj")
        assert project_path_guid(messy) == project_path_guid(PROJECT_FILE)

    def test_different_paths_differ(self):
        other = os.path.join(os.sep, "repo", "src", "Lib", "Lib.csproj")
        assert project_path_guid(other) != project_path_guid(PROJECT_FILE)
