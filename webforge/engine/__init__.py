"""Template composition engine shared by every generator family."""

from webforge.engine.artifacts import Artifact, ArtifactCollector, ArtifactSet, GenerationResult
from webforge.engine.generator import ArtifactSetBuilder
from webforge.engine.project import ProjectInfo
from webforge.engine.registry import Extension, ExtensionRegistry
from webforge.engine.resolve import deep_merge
from webforge.engine.templates import TemplateRenderer

__all__ = [
    "Artifact",
    "ArtifactCollector",
    "ArtifactSet",
    "ArtifactSetBuilder",
    "Extension",
    "ExtensionRegistry",
    "GenerationResult",
    "ProjectInfo",
    "TemplateRenderer",
    "deep_merge",
]
