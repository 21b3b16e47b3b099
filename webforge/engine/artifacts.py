"""Artifact, ArtifactSet and GenerationResult models.

An artifact is one generated file, addressed by a relative POSIX path.
Generators collect artifacts through :class:`ArtifactCollector`, which
owns the path-uniqueness check, and hand back an immutable
:class:`ArtifactSet`.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webforge.errors import InternalAssemblyError, ValidationIssue


class Artifact(BaseModel):
    """A single generated file."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    executable: bool = False
    description: str = ""

    @field_validator("path")
    @classmethod
    def _relative_posix(cls, value: str) -> str:
        pure = PurePosixPath(value)
        if not value or pure.is_absolute() or ".." in pure.parts or "\\" in value:
            raise ValueError(f"artifact path must be relative and normalised: {value!r}")
        return value


class ArtifactSet(BaseModel):
    """Ordered artifacts plus the dependency manifest and setup instructions."""

    model_config = ConfigDict(frozen=True)

    artifacts: list[Artifact] = Field(default_factory=list)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    instructions: list[str] = Field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [artifact.path for artifact in self.artifacts]

    def get(self, path: str) -> Artifact | None:
        """Return the artifact stored at *path*, if any."""
        for artifact in self.artifacts:
            if artifact.path == path:
                return artifact
        return None

    def __contains__(self, path: object) -> bool:
        return any(artifact.path == path for artifact in self.artifacts)

    def __len__(self) -> int:
        return len(self.artifacts)


class GenerationResult(BaseModel):
    """Outcome of a non-raising ``generate()`` call.

    A failed result never carries artifacts.
    """

    success: bool
    artifact_set: ArtifactSet | None = None
    errors: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def ok(cls, artifact_set: ArtifactSet) -> "GenerationResult":
        return cls(success=True, artifact_set=artifact_set)

    @classmethod
    def failure(cls, errors: list[ValidationIssue]) -> "GenerationResult":
        return cls(success=False, artifact_set=None, errors=list(errors))

    @property
    def artifacts(self) -> list[Artifact]:
        if self.artifact_set is None:
            return []
        return list(self.artifact_set.artifacts)

    @property
    def error_messages(self) -> list[str]:
        return [str(issue) for issue in self.errors]


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class ArtifactCollector:
    """Accumulates artifacts in insertion order and rejects duplicate paths."""

    def __init__(self) -> None:
        self._artifacts: list[Artifact] = []
        self._seen: set[str] = set()
        self.dependencies: dict[str, str] = {}
        self.dev_dependencies: dict[str, str] = {}

    def add(self, artifact: Artifact) -> None:
        if artifact.path in self._seen:
            raise InternalAssemblyError(f"Duplicate artifact path: {artifact.path}")
        self._seen.add(artifact.path)
        self._artifacts.append(artifact)

    def extend(self, artifacts: list[Artifact]) -> None:
        for artifact in artifacts:
            self.add(artifact)

    def require(self, packages: dict[str, str], dev: bool = False) -> None:
        """Record package requirements; the first version recorded for a name wins."""
        target = self.dev_dependencies if dev else self.dependencies
        for name, version in packages.items():
            target.setdefault(name, version)

    def __len__(self) -> int:
        return len(self._artifacts)

    def build(self, instructions: list[str]) -> ArtifactSet:
        return ArtifactSet(
            artifacts=list(self._artifacts),
            dependencies=dict(self.dependencies),
            dev_dependencies=dict(self.dev_dependencies),
            instructions=list(instructions),
        )
