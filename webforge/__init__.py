"""webforge: template composition engine for Next.js/TypeScript source files.

Three generator families share one engine: CRUD, navigation and error
handling.  Each takes a validated configuration and returns an
``ArtifactSet`` of generated files plus dependency and setup metadata.
"""

from webforge.engine.artifacts import Artifact, ArtifactSet, GenerationResult
from webforge.errors import (
    ConfigSourceError,
    ConfigurationValidationError,
    InternalAssemblyError,
    RegistryError,
    UnsupportedFieldTypeError,
    ValidationIssue,
    WebforgeError,
)

__version__ = "0.1.0"

__all__ = [
    "Artifact",
    "ArtifactSet",
    "ConfigSourceError",
    "ConfigurationValidationError",
    "GenerationResult",
    "InternalAssemblyError",
    "RegistryError",
    "UnsupportedFieldTypeError",
    "ValidationIssue",
    "WebforgeError",
    "__version__",
]
