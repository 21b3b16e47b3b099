"""Extension registry.

Registries are explicit values created by the caller and passed to the
generator that consumes them.  Nothing is registered at import time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from webforge.engine.artifacts import Artifact
from webforge.errors import RegistryError
from webforge.logging_config import get_logger

logger = get_logger(__name__)

C = TypeVar("C")


class Extension(ABC, Generic[C]):
    """A named add-on that contributes extra artifacts for a configuration."""

    name: str = ""
    version: str = "1.0.0"
    description: str = ""
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}

    @abstractmethod
    def generate(self, config: C) -> list[Artifact]:
        """Return the artifacts this extension contributes for *config*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, version={self.version!r})"


class ExtensionRegistry(Generic[C]):
    """Name-keyed collection of extensions, iterated in registration order."""

    def __init__(self, extensions: list[Extension[C]] | None = None) -> None:
        self._extensions: dict[str, Extension[C]] = {}
        for extension in extensions or []:
            self.register(extension)

    def register(self, extension: Extension[C], replace: bool = False) -> None:
        """Add *extension* to the registry.

        Raises:
            RegistryError: If the name is empty, or already taken and
                *replace* is ``False``.
        """
        if not isinstance(extension, Extension):
            raise RegistryError(f"Not an extension: {extension!r}")
        if not extension.name:
            raise RegistryError(f"Extension {type(extension).__name__} has no name")
        if extension.name in self._extensions and not replace:
            raise RegistryError(f"Extension already registered: {extension.name}")
        self._extensions[extension.name] = extension
        logger.debug("Registered extension %s", extension.name)

    def unregister(self, name: str) -> Extension[C]:
        """Remove and return the extension registered under *name*."""
        try:
            return self._extensions.pop(name)
        except KeyError:
            raise RegistryError(f"Extension not registered: {name}") from None

    def get(self, name: str) -> Extension[C]:
        """Return the extension registered under *name*."""
        try:
            return self._extensions[name]
        except KeyError:
            available = ", ".join(self.names()) or "none"
            raise RegistryError(
                f"Extension not registered: {name}. Available: {available}"
            ) from None

    def names(self) -> list[str]:
        return list(self._extensions)

    def describe(self) -> list[dict[str, Any]]:
        """Name, version, description and dependencies of each extension."""
        return [
            {
                "name": ext.name,
                "version": ext.version,
                "description": ext.description,
                "dependencies": dict(ext.dependencies),
            }
            for ext in self._extensions.values()
        ]

    def copy(self) -> "ExtensionRegistry[C]":
        return ExtensionRegistry(list(self._extensions.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def __iter__(self) -> Iterator[Extension[C]]:
        return iter(list(self._extensions.values()))

    def __len__(self) -> int:
        return len(self._extensions)
