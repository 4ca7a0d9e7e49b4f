"""Tests for CaseInsensitiveDict."""

from __future__ import annotations

import pytest

from build_analyzer.structures import CaseInsensitiveDict


class TestCaseInsensitiveDict:
    def test_lookup_ignores_case(self):
        d = CaseInsensitiveDict({"TargetFramework": "net8.0"})
        assert d["targetframework"] == "net8.0"
        assert "TARGETFRAMEWORK" in d
        assert d.get("Other") is None

    def test_overwrite_keeps_single_key(self):
        d = CaseInsensitiveDict()
        d["Compile"] = 1
        d["COMPILE"] = 2
        assert len(d) == 1
        assert list(d) == ["COMPILE"]
        assert d["compile"] == 2

    def test_delete(self):
        d = CaseInsensitiveDict(A="1")
        del d["a"]
        assert len(d) == 0
        with pytest.raises(KeyError):
            d["A"]

    def test_non_string_key_not_contained(self):
        assert 1 not in CaseInsensitiveDict(A="1")

    def test_equality(self):
        assert CaseInsensitiveDict({"A": "1"}) == {"a": "1"}
        assert CaseInsensitiveDict({"A": "1"}) != {"a": "2"}

    def test_copy_is_independent(self):
        d = CaseInsensitiveDict({"A": "1"})
        c = d.copy()
        c["a"] = "2"
        assert d["A"] == "1"
