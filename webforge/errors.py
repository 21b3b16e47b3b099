"""Exception types raised by the generation engine.

Every error the engine raises derives from :class:`WebforgeError` so that
``generate()`` entry points can turn them into structured results without
catching unrelated exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """A single configuration problem, addressed by a dotted path."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class WebforgeError(Exception):
    """Base class for all engine errors."""

    def as_issues(self) -> list[ValidationIssue]:
        """Describe the error as validation issues for a failed result."""
        return [ValidationIssue(path="<engine>", message=str(self))]


class ConfigurationValidationError(WebforgeError):
    """Raised when a configuration fails validation.

    Carries every issue found, not just the first one.
    """

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = list(issues)
        summary = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"Invalid configuration ({len(self.issues)} issue(s)): {summary}")

    def as_issues(self) -> list[ValidationIssue]:
        return list(self.issues)


class UnsupportedFieldTypeError(WebforgeError):
    """Raised when an entity field declares a type outside the supported set."""

    def __init__(self, field_name: str, type_value: str, entity: str | None = None) -> None:
        self.field_name = field_name
        self.type_value = type_value
        self.entity = entity
        where = f"{entity}.{field_name}" if entity else field_name
        super().__init__(f"Unsupported field type '{type_value}' for field '{where}'")

    def as_issues(self) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                path=f"entity.fields.{self.field_name}.type",
                message=f"unsupported field type '{self.type_value}'",
            )
        ]


class InternalAssemblyError(WebforgeError):
    """Raised when the engine itself produces an inconsistent result.

    Duplicate artifact paths and dispatch tables that miss a field type
    both end up here.
    """


class RegistryError(WebforgeError):
    """Raised on extension registry misuse (duplicate or missing names)."""


class ConfigSourceError(WebforgeError):
    """Raised when a configuration file or URL cannot be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load configuration from {source}: {reason}")

    def as_issues(self) -> list[ValidationIssue]:
        return [ValidationIssue(path="<source>", message=f"{self.source}: {self.reason}")]
