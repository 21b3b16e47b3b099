"""Tests for deep_merge, as_mapping and merge_models.

Covers:
- Override precedence, recursive mapping merge, sequence replacement
- None overrides ignored
- Inputs never mutated
- Model overrides contribute only explicitly set fields
"""

from __future__ import annotations

import copy

import pytest
from pydantic import BaseModel, Field

from webforge.engine.resolve import as_mapping, deep_merge, merge_models


class _Inner(BaseModel):
    enabled: bool = False
    limit: int = 5


class _Outer(BaseModel):
    name: str = "base"
    tags: list[str] = Field(default_factory=lambda: ["a", "b"])
    inner: _Inner = Field(default_factory=_Inner)


class TestDeepMerge:
    @pytest.mark.unit
    def test_override_wins(self):
        assert deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    @pytest.mark.unit
    def test_nested_mappings_merge(self):
        merged = deep_merge({"x": {"a": 1, "b": 2}}, {"x": {"b": 9}})
        assert merged == {"x": {"a": 1, "b": 9}}

    @pytest.mark.unit
    def test_sequences_are_replaced(self):
        assert deep_merge({"items": [1, 2, 3]}, {"items": [4]}) == {"items": [4]}

    @pytest.mark.unit
    def test_none_is_ignored(self):
        assert deep_merge({"a": 1}, {"a": None}) == {"a": 1}

    @pytest.mark.unit
    def test_no_overrides_returns_copy(self):
        base = {"a": {"b": 1}}
        merged = deep_merge(base, None)
        assert merged == base
        assert merged is not base
        assert merged["a"] is not base["a"]

    @pytest.mark.unit
    def test_inputs_are_not_mutated(self):
        base = {"x": {"a": [1]}, "y": 1}
        overrides = {"x": {"a": [2], "c": {"d": 1}}}
        base_before = copy.deepcopy(base)
        overrides_before = copy.deepcopy(overrides)
        merged = deep_merge(base, overrides)
        merged["x"]["c"]["d"] = 99
        assert base == base_before
        assert overrides == overrides_before

    @pytest.mark.unit
    def test_mapping_replaces_scalar(self):
        assert deep_merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}


class TestMergeModels:
    @pytest.mark.unit
    def test_as_mapping_of_model_uses_set_fields_only(self):
        assert as_mapping(_Outer(name="x")) == {"name": "x"}
        assert as_mapping(None) == {}
        assert as_mapping({"a": 1}) == {"a": 1}

    @pytest.mark.unit
    def test_model_override_keeps_unset_base_values(self):
        base = _Outer(tags=["keep"], inner=_Inner(limit=9))
        merged = merge_models(_Outer, base, _Outer(name="override"))
        assert merged.name == "override"
        assert merged.tags == ["keep"]
        assert merged.inner.limit == 9

    @pytest.mark.unit
    def test_mapping_override_merges_nested(self):
        merged = merge_models(_Outer, {"inner": {"limit": 2}}, {"inner": {"enabled": True}})
        assert merged.inner == _Inner(enabled=True, limit=2)
