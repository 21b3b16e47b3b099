"""Cross-field checks for :class:`~webforge.crud.models.CrudConfig`."""

from __future__ import annotations

import re
from datetime import datetime

from webforge.crud.models import IDENTIFIER_PATTERN, CrudConfig, EntityField
from webforge.engine.validation import IssueCollector, duplicates
from webforge.errors import ValidationIssue
from webforge.utils import ts_literal

_IDENTIFIER = re.compile(IDENTIFIER_PATTERN)
_RESERVED = frozenset({"id", "createdAt", "updatedAt", "deletedAt"})


def _default_problem(field: EntityField) -> str | None:
    """Why *field*'s default cannot be emitted into its schema, if it cannot."""
    value = field.default
    try:
        ts_literal(value)
    except (TypeError, ValueError):
        return f"a {type(value).__name__} default cannot be written as a literal"
    if field.type == "enum" and field.enum_values and value not in field.enum_values:
        return f"{value!r} is not one of enum_values"
    if field.type == "number" and (isinstance(value, bool) or not isinstance(value, (int, float))):
        return f"{value!r} is not a number"
    if field.type == "boolean" and not isinstance(value, bool):
        return f"{value!r} is not true or false"
    if field.type in ("date", "datetime"):
        if not isinstance(value, str):
            return f"{value!r} is not an ISO date"
        try:
            datetime.fromisoformat(value.removesuffix("Z"))
        except ValueError:
            return f"{value!r} is not an ISO date"
    return None


def validate_crud_config(config: CrudConfig) -> list[ValidationIssue]:
    """Collect every structural problem in *config*."""
    issues = IssueCollector()
    entity = config.entity

    if not _IDENTIFIER.match(entity.name):
        issues.add("entity.name", f"'{entity.name}' is not a valid identifier")
    if not entity.fields:
        issues.add("entity.fields", "at least one field is required")

    names = entity.field_names()
    for dup in duplicates(names):
        issues.add("entity.fields", f"duplicate field name '{dup}'")

    for index, field in enumerate(entity.fields):
        path = f"entity.fields.{index}"
        if not _IDENTIFIER.match(field.name):
            issues.add(f"{path}.name", f"'{field.name}' is not a valid identifier")
        if field.name in _RESERVED:
            issues.add(f"{path}.name", f"'{field.name}' is generated automatically")
        if field.type == "enum":
            if not field.enum_values:
                issues.add(f"{path}.enum_values", "enum fields require at least one value")
            for dup in duplicates(field.enum_values):
                issues.add(f"{path}.enum_values", f"duplicate enum value '{dup}'")
        if field.default is not None:
            problem = _default_problem(field)
            if problem is not None:
                issues.add(f"{path}.default", problem)
        rules = field.validation
        if rules.min is not None and rules.max is not None and rules.min > rules.max:
            issues.add(f"{path}.validation", "min must not exceed max")
        if (
            rules.min_length is not None
            and rules.max_length is not None
            and rules.min_length > rules.max_length
        ):
            issues.add(f"{path}.validation", "min_length must not exceed max_length")
        if rules.pattern is not None:
            try:
                re.compile(rules.pattern)
            except re.error as exc:
                issues.add(f"{path}.validation.pattern", f"invalid regular expression: {exc}")

    declared = set(names)
    for index, relation in enumerate(entity.relations):
        if relation.name in declared:
            issues.add(
                f"entity.relations.{index}.name",
                f"relation '{relation.name}' collides with a field of the same name",
            )
        if not _IDENTIFIER.match(relation.name):
            issues.add(f"entity.relations.{index}.name", f"'{relation.name}' is not a valid identifier")

    for index, idx in enumerate(entity.indexes):
        for name in idx.fields:
            if name not in declared:
                issues.add(f"entity.indexes.{index}.fields", f"unknown field '{name}'")
    for index, constraint in enumerate(entity.constraints):
        for name in constraint.fields:
            if name not in declared:
                issues.add(f"entity.constraints.{index}.fields", f"unknown field '{name}'")

    sortable = {f.name for f in entity.fields if f.sortable}
    for index, sort in enumerate(config.table.sorting.default_sort):
        if sort.field not in sortable:
            issues.add(
                f"table.sorting.default_sort.{index}.field",
                f"'{sort.field}' is not a sortable field",
            )

    pagination = config.table.pagination
    if pagination.page_size_options and pagination.default_page_size not in pagination.page_size_options:
        issues.add(
            "table.pagination.default_page_size",
            f"{pagination.default_page_size} is not one of page_size_options",
        )

    for dup in duplicates(action.name for action in config.table.actions):
        issues.add("table.actions", f"duplicate action name '{dup}'")
    for index, action in enumerate(config.table.actions):
        if not _IDENTIFIER.match(action.name):
            issues.add(f"table.actions.{index}.name", f"'{action.name}' is not a valid identifier")

    permissions = config.permissions
    if permissions.enabled:
        known = set(permissions.roles)
        for index, permission in enumerate(permissions.permissions):
            for role in permission.roles:
                if role not in known:
                    issues.add(
                        f"permissions.permissions.{index}.roles",
                        f"unknown role '{role}'",
                    )

    return issues.issues
