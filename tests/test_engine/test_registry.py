"""Tests for Extension and ExtensionRegistry.

Covers:
- Registration order, lookup, membership, describe
- Duplicate and nameless registration errors
- replace=True, unregister, copy independence
"""

from __future__ import annotations

import pytest

from webforge.engine.artifacts import Artifact
from webforge.engine.registry import Extension, ExtensionRegistry
from webforge.errors import RegistryError


class _Ext(Extension[dict]):
    def __init__(self, name: str, version: str = "1.0.0") -> None:
        self.name = name
        self.version = version
        self.description = f"{name} extension"
        self.dependencies = {f"{name}-pkg": "^1.0.0"}

    def generate(self, config: dict) -> list[Artifact]:
        return [Artifact(path=f"src/ext/{self.name}.ts", content=f"// {config.get('project')}\n")]


class TestExtensionRegistry:
    @pytest.mark.unit
    def test_starts_empty(self):
        registry: ExtensionRegistry[dict] = ExtensionRegistry()
        assert len(registry) == 0
        assert registry.names() == []

    @pytest.mark.unit
    def test_registration_order_is_kept(self):
        registry = ExtensionRegistry([_Ext("b"), _Ext("a")])
        assert registry.names() == ["b", "a"]
        assert [ext.name for ext in registry] == ["b", "a"]

    @pytest.mark.unit
    def test_get_and_contains(self):
        ext = _Ext("audit")
        registry = ExtensionRegistry([ext])
        assert "audit" in registry
        assert registry.get("audit") is ext
        assert registry.get("audit").generate({"project": "x"})[0].path == "src/ext/audit.ts"

    @pytest.mark.unit
    def test_get_unknown_lists_available(self):
        registry = ExtensionRegistry([_Ext("a")])
        with pytest.raises(RegistryError, match="Available: a"):
            registry.get("missing")

    @pytest.mark.unit
    def test_duplicate_name_rejected(self):
        registry = ExtensionRegistry([_Ext("a")])
        with pytest.raises(RegistryError, match="already registered"):
            registry.register(_Ext("a"))

    @pytest.mark.unit
    def test_replace(self):
        registry = ExtensionRegistry([_Ext("a", "1.0.0")])
        registry.register(_Ext("a", "2.0.0"), replace=True)
        assert registry.get("a").version == "2.0.0"
        assert len(registry) == 1

    @pytest.mark.unit
    def test_nameless_extension_rejected(self):
        with pytest.raises(RegistryError, match="has no name"):
            ExtensionRegistry([_Ext("")])

    @pytest.mark.unit
    def test_non_extension_rejected(self):
        registry: ExtensionRegistry[dict] = ExtensionRegistry()
        with pytest.raises(RegistryError):
            registry.register("not an extension")  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_unregister(self):
        registry = ExtensionRegistry([_Ext("a"), _Ext("b")])
        removed = registry.unregister("a")
        assert removed.name == "a"
        assert registry.names() == ["b"]
        with pytest.raises(RegistryError):
            registry.unregister("a")

    @pytest.mark.unit
    def test_copy_is_independent(self):
        registry = ExtensionRegistry([_Ext("a")])
        clone = registry.copy()
        clone.register(_Ext("b"))
        assert registry.names() == ["a"]
        assert clone.names() == ["a", "b"]

    @pytest.mark.unit
    def test_describe(self):
        registry = ExtensionRegistry([_Ext("a", "1.2.0")])
        assert registry.describe() == [
            {
                "name": "a",
                "version": "1.2.0",
                "description": "a extension",
                "dependencies": {"a-pkg": "^1.0.0"},
            }
        ]
