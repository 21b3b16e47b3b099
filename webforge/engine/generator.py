"""Base class shared by the generator families.

A generator holds one read-only configuration and a template renderer.
``build()`` validates, assembles every artifact in a fixed order and
returns an :class:`ArtifactSet`, raising typed errors.  ``generate()``
wraps the same pipeline and reports engine errors as a failed
:class:`GenerationResult` instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from webforge.engine.artifacts import Artifact, ArtifactCollector, ArtifactSet, GenerationResult
from webforge.engine.templates import TemplateRenderer
from webforge.engine.validation import parse_model
from webforge.errors import ConfigurationValidationError, ValidationIssue, WebforgeError
from webforge.logging_config import get_logger

logger = get_logger(__name__)

C = TypeVar("C", bound=BaseModel)
O = TypeVar("O", bound=BaseModel)


class ArtifactSetBuilder(ABC, Generic[C, O]):
    """Validate -> classify -> build fragments -> assemble -> return."""

    family: str = ""
    options_model: type[BaseModel]

    def __init__(self, config: C, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Hooks for subclasses ----------------------------------------------

    @abstractmethod
    def validate(self, options: O) -> list[ValidationIssue]:
        """Cross-field checks; every issue is returned, not just the first."""

    @abstractmethod
    def assemble(self, options: O) -> Iterator[Artifact]:
        """Yield artifacts in their documented order."""

    def dependencies(self, options: O) -> dict[str, str]:
        return {}

    def dev_dependencies(self, options: O) -> dict[str, str]:
        return {}

    def instructions(self, options: O, artifact_set: ArtifactSet) -> list[str]:
        return []

    # -- Helpers -----------------------------------------------------------

    def render(
        self,
        template: str,
        path: str,
        context: dict[str, Any],
        description: str = "",
        executable: bool = False,
    ) -> Artifact:
        """Render *template* into an artifact stored at *path*."""
        logger.debug("Assembling %s from %s", path, template)
        content = self.renderer.render(template, context)
        return Artifact(path=path, content=content, description=description, executable=executable)

    def resolve_options(self, options: O | dict[str, Any] | None) -> O:
        if options is None:
            return self.options_model()  # type: ignore[return-value]
        if isinstance(options, BaseModel):
            return options  # type: ignore[return-value]
        return parse_model(self.options_model, options)  # type: ignore[return-value]

    # -- Entry points ------------------------------------------------------

    def build(self, options: O | dict[str, Any] | None = None) -> ArtifactSet:
        """Run the pipeline and return the artifact set.

        Raises:
            ConfigurationValidationError: Configuration failed validation;
                no assembler has run.
            UnsupportedFieldTypeError: A field declares an unknown type.
            InternalAssemblyError: Duplicate paths or other engine faults.
        """
        resolved = self.resolve_options(options)
        issues = self.validate(resolved)
        if issues:
            logger.info("%s configuration rejected with %d issue(s)", self.family, len(issues))
            raise ConfigurationValidationError(issues)

        collector = ArtifactCollector()
        for artifact in self.assemble(resolved):
            collector.add(artifact)
        collector.require(self.dependencies(resolved))
        collector.require(self.dev_dependencies(resolved), dev=True)

        draft = collector.build([])
        artifact_set = collector.build(self.instructions(resolved, draft))
        logger.info("Generated %d %s artifact(s)", len(artifact_set), self.family)
        return artifact_set

    def generate(self, options: O | dict[str, Any] | None = None) -> GenerationResult:
        """Like :meth:`build` but returns a result instead of raising engine errors."""
        try:
            return GenerationResult.ok(self.build(options))
        except WebforgeError as exc:
            logger.info("%s generation failed: %s", self.family, exc)
            return GenerationResult.failure(exc.as_issues())
