"""Issue collection and conversion of Pydantic errors into engine errors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from webforge.errors import ConfigurationValidationError, ValidationIssue

M = TypeVar("M", bound=BaseModel)


class IssueCollector:
    """Collects validation issues so that all of them are reported together."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self.issues: list[ValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        full = f"{self.prefix}.{path}" if self.prefix and path else (self.prefix or path)
        self.issues.append(ValidationIssue(path=full, message=message))

    def extend(self, issues: Iterable[ValidationIssue]) -> None:
        self.issues.extend(issues)

    def raise_if_any(self) -> None:
        if self.issues:
            raise ConfigurationValidationError(self.issues)

    def __bool__(self) -> bool:
        return bool(self.issues)

    def __len__(self) -> int:
        return len(self.issues)


def dotted(location: Iterable[Any]) -> str:
    """Join a Pydantic error location into a dotted path (``fields.0.name``)."""
    return ".".join(str(part) for part in location) or "<root>"


def issues_from_pydantic(exc: ValidationError, prefix: str = "") -> list[ValidationIssue]:
    """Convert every error in a Pydantic ``ValidationError`` into an issue."""
    issues: list[ValidationIssue] = []
    for error in exc.errors():
        path = dotted(error.get("loc", ()))
        if prefix:
            path = f"{prefix}.{path}" if path != "<root>" else prefix
        issues.append(ValidationIssue(path=path, message=error.get("msg", "invalid value")))
    return issues


def parse_model(model_cls: type[M], data: Mapping[str, Any] | M) -> M:
    """Validate *data* into *model_cls*.

    Already-constructed instances pass through unchanged.

    Raises:
        ConfigurationValidationError: If the mapping does not match the model.
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationValidationError(issues_from_pydantic(exc)) from exc


def duplicates(values: Iterable[str]) -> list[str]:
    """Values occurring more than once, in order of their second occurrence."""
    seen: set[str] = set()
    repeated: list[str] = []
    for value in values:
        if value in seen and value not in repeated:
            repeated.append(value)
        seen.add(value)
    return repeated
