"""Fragment builders for CRUD entity fields.

Each builder takes one field with its classified :class:`FieldType` and
returns a structured fragment.  Every per-type dispatch table is checked
against :class:`FieldType` when this module is imported.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from webforge.crud.models import EntityDefinition, EntityField, FieldType
from webforge.engine.fragments import (
    NO_DEFAULT,
    CellKind,
    CoercionKind,
    DateLiteral,
    EnumDeclaration,
    FilterProperty,
    FormCoercion,
    FormControl,
    RegexLiteral,
    TableColumn,
    TypeProperty,
    ZodCheck,
    ZodField,
    ensure_exhaustive,
)
from webforge.utils import camel_case, pascal_case, sanitize_name


@dataclass(frozen=True)
class EntityNames:
    """Identifier spellings derived from the entity name."""

    type_name: str
    variable: str
    slug: str
    display: str

    @classmethod
    def of(cls, entity: EntityDefinition) -> "EntityNames":
        return cls(
            type_name=pascal_case(entity.name),
            variable=camel_case(entity.name),
            slug=sanitize_name(entity.name),
            display=entity.display_name,
        )


def enum_declaration(field: EntityField, names: EntityNames) -> EnumDeclaration:
    type_name = f"{names.type_name}{pascal_case(field.name)}"
    return EnumDeclaration(
        type_name=type_name,
        values_name=f"{type_name}Values",
        schema_name=f"{camel_case(type_name)}Schema",
        values=tuple(field.enum_values),
    )


def _number(value: float) -> int | float:
    """Integral floats render without a trailing ``.0``."""
    return int(value) if float(value).is_integer() else value


# ---------------------------------------------------------------------------
# TypeScript types
# ---------------------------------------------------------------------------

_TS_TYPES: dict[FieldType, Callable[[EntityField, EntityNames], str]] = {
    FieldType.STRING: lambda f, n: "string",
    FieldType.EMAIL: lambda f, n: "string",
    FieldType.URL: lambda f, n: "string",
    FieldType.TEXT: lambda f, n: "string",
    FieldType.NUMBER: lambda f, n: "number",
    FieldType.BOOLEAN: lambda f, n: "boolean",
    FieldType.DATE: lambda f, n: "Date",
    FieldType.DATETIME: lambda f, n: "Date",
    FieldType.JSON: lambda f, n: "Record<string, unknown>",
    FieldType.ENUM: lambda f, n: enum_declaration(f, n).type_name,
    FieldType.FILE: lambda f, n: "string | null",
    FieldType.IMAGE: lambda f, n: "string | null",
    FieldType.RELATION: lambda f, n: "string",
}
ensure_exhaustive(_TS_TYPES, FieldType, "_TS_TYPES")


def build_type_property(field: EntityField, field_type: FieldType, names: EntityNames) -> TypeProperty:
    return TypeProperty(
        name=field.name,
        type_expr=_TS_TYPES[field_type](field, names),
        optional=not field.required,
        comment=field.description or "",
    )


# ---------------------------------------------------------------------------
# Zod schemas
# ---------------------------------------------------------------------------


class ConstraintKind(str, Enum):
    """Which ``FieldValidation`` constraints apply to a type."""

    LENGTH = "length"
    RANGE = "range"
    NONE = "none"


_CONSTRAINTS: dict[FieldType, ConstraintKind] = {
    FieldType.STRING: ConstraintKind.LENGTH,
    FieldType.EMAIL: ConstraintKind.LENGTH,
    FieldType.URL: ConstraintKind.LENGTH,
    FieldType.TEXT: ConstraintKind.LENGTH,
    FieldType.NUMBER: ConstraintKind.RANGE,
    FieldType.BOOLEAN: ConstraintKind.NONE,
    FieldType.DATE: ConstraintKind.NONE,
    FieldType.DATETIME: ConstraintKind.NONE,
    FieldType.JSON: ConstraintKind.NONE,
    FieldType.ENUM: ConstraintKind.NONE,
    FieldType.FILE: ConstraintKind.NONE,
    FieldType.IMAGE: ConstraintKind.NONE,
    FieldType.RELATION: ConstraintKind.NONE,
}
ensure_exhaustive(_CONSTRAINTS, FieldType, "_CONSTRAINTS")


def _message(field: EntityField, key: str, default: str) -> str:
    return field.validation.messages.get(key, default)


def _format_checks(field: EntityField, method: str, label: str) -> tuple[ZodCheck, ...]:
    return (ZodCheck(method, (_message(field, method, label),)),)


_ZOD_BASES: dict[FieldType, Callable[[EntityField, EntityNames], tuple[str, tuple[ZodCheck, ...]]]] = {
    FieldType.STRING: lambda f, n: ("z.string()", ()),
    FieldType.TEXT: lambda f, n: ("z.string()", ()),
    FieldType.EMAIL: lambda f, n: (
        "z.string()",
        _format_checks(f, "email", f"{f.display_name} must be a valid email address"),
    ),
    FieldType.URL: lambda f, n: (
        "z.string()",
        _format_checks(f, "url", f"{f.display_name} must be a valid URL"),
    ),
    FieldType.NUMBER: lambda f, n: ("z.coerce.number()", ()),
    FieldType.BOOLEAN: lambda f, n: ("z.coerce.boolean()", ()),
    FieldType.DATE: lambda f, n: ("z.coerce.date()", ()),
    FieldType.DATETIME: lambda f, n: ("z.coerce.date()", ()),
    FieldType.JSON: lambda f, n: ("z.record(z.string(), z.unknown())", ()),
    FieldType.ENUM: lambda f, n: (enum_declaration(f, n).schema_name, ()),
    FieldType.FILE: lambda f, n: (
        "z.string()",
        _format_checks(f, "url", f"{f.display_name} must be a valid file URL"),
    ),
    FieldType.IMAGE: lambda f, n: (
        "z.string()",
        _format_checks(f, "url", f"{f.display_name} must be a valid image URL"),
    ),
    FieldType.RELATION: lambda f, n: (
        "z.string()",
        _format_checks(f, "uuid", f"{f.display_name} must be a valid identifier"),
    ),
}
ensure_exhaustive(_ZOD_BASES, FieldType, "_ZOD_BASES")

_DATE_TYPES = frozenset({FieldType.DATE, FieldType.DATETIME})


def _constraint_checks(field: EntityField, kind: ConstraintKind) -> list[ZodCheck]:
    rules = field.validation
    label = field.display_name
    checks: list[ZodCheck] = []
    if kind is ConstraintKind.LENGTH:
        if rules.min_length is not None:
            checks.append(ZodCheck("min", (rules.min_length, _message(
                field, "min_length", f"{label} must be at least {rules.min_length} characters"))))
        if rules.max_length is not None:
            checks.append(ZodCheck("max", (rules.max_length, _message(
                field, "max_length", f"{label} must be at most {rules.max_length} characters"))))
        if rules.pattern is not None:
            checks.append(ZodCheck("regex", (RegexLiteral(rules.pattern), _message(
                field, "pattern", f"{label} has an invalid format"))))
    elif kind is ConstraintKind.RANGE:
        if rules.min is not None:
            low = _number(rules.min)
            checks.append(ZodCheck("min", (low, _message(field, "min", f"{label} must be at least {low}"))))
        if rules.max is not None:
            high = _number(rules.max)
            checks.append(ZodCheck("max", (high, _message(field, "max", f"{label} must be at most {high}"))))
    return checks


def build_zod_field(field: EntityField, field_type: FieldType, names: EntityNames) -> ZodField:
    """Schema property: base type, format checks, value constraints, optionality, default."""
    base, format_checks = _ZOD_BASES[field_type](field, names)
    checks = list(format_checks) + _constraint_checks(field, _CONSTRAINTS[field_type])
    default = NO_DEFAULT if field.default is None else field.default
    if field_type in _DATE_TYPES and isinstance(default, str):
        default = DateLiteral(default)
    return ZodField(
        name=field.name,
        base=base,
        checks=tuple(checks),
        optional=not field.required,
        default=default,
    )


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

_TEXT_FILTER = FilterProperty(
    name="",
    type_expr="string | { contains?: string; startsWith?: string; endsWith?: string }",
    schema_expr=(
        "z.union([z.string(), z.object({ contains: z.string().optional(), "
        "startsWith: z.string().optional(), endsWith: z.string().optional() })])"
    ),
)
_NUMBER_FILTER = FilterProperty(
    name="",
    type_expr="number | { min?: number; max?: number; equals?: number }",
    schema_expr=(
        "z.union([z.coerce.number(), z.object({ min: z.coerce.number().optional(), "
        "max: z.coerce.number().optional(), equals: z.coerce.number().optional() })])"
    ),
)
_DATE_FILTER = FilterProperty(
    name="",
    type_expr="Date | { from?: Date; to?: Date }",
    schema_expr=(
        "z.union([z.coerce.date(), z.object({ from: z.coerce.date().optional(), "
        "to: z.coerce.date().optional() })])"
    ),
)
_BOOLEAN_FILTER = FilterProperty(name="", type_expr="boolean", schema_expr="z.coerce.boolean()")
_ID_FILTER = FilterProperty(name="", type_expr="string | string[]", schema_expr="z.union([z.string(), z.array(z.string())])")


def _enum_filter(field: EntityField, names: EntityNames) -> FilterProperty:
    decl = enum_declaration(field, names)
    return FilterProperty(
        name="",
        type_expr=f"{decl.type_name} | {decl.type_name}[]",
        schema_expr=f"z.union([{decl.schema_name}, z.array({decl.schema_name})])",
    )


# ``None`` marks types that do not support filtering.
_FILTERS: dict[FieldType, Callable[[EntityField, EntityNames], FilterProperty] | None] = {
    FieldType.STRING: lambda f, n: _TEXT_FILTER,
    FieldType.EMAIL: lambda f, n: _TEXT_FILTER,
    FieldType.URL: lambda f, n: _TEXT_FILTER,
    FieldType.TEXT: lambda f, n: _TEXT_FILTER,
    FieldType.NUMBER: lambda f, n: _NUMBER_FILTER,
    FieldType.BOOLEAN: lambda f, n: _BOOLEAN_FILTER,
    FieldType.DATE: lambda f, n: _DATE_FILTER,
    FieldType.DATETIME: lambda f, n: _DATE_FILTER,
    FieldType.ENUM: _enum_filter,
    FieldType.RELATION: lambda f, n: _ID_FILTER,
    FieldType.JSON: None,
    FieldType.FILE: None,
    FieldType.IMAGE: None,
}
ensure_exhaustive(_FILTERS, FieldType, "_FILTERS")


def build_filter(field: EntityField, field_type: FieldType, names: EntityNames) -> FilterProperty | None:
    builder = _FILTERS[field_type]
    if builder is None:
        return None
    template = builder(field, names)
    return FilterProperty(name=field.name, type_expr=template.type_expr, schema_expr=template.schema_expr)


# ---------------------------------------------------------------------------
# Table columns
# ---------------------------------------------------------------------------

_CELLS: dict[FieldType, CellKind] = {
    FieldType.STRING: CellKind.TEXT,
    FieldType.TEXT: CellKind.TEXT,
    FieldType.EMAIL: CellKind.EMAIL,
    FieldType.URL: CellKind.LINK,
    FieldType.NUMBER: CellKind.NUMBER,
    FieldType.BOOLEAN: CellKind.BOOLEAN,
    FieldType.DATE: CellKind.DATE,
    FieldType.DATETIME: CellKind.DATETIME,
    FieldType.JSON: CellKind.JSON,
    FieldType.ENUM: CellKind.BADGE,
    FieldType.FILE: CellKind.FILE,
    FieldType.IMAGE: CellKind.IMAGE,
    FieldType.RELATION: CellKind.TEXT,
}
ensure_exhaustive(_CELLS, FieldType, "_CELLS")


def build_table_column(field: EntityField, field_type: FieldType, sortable: bool) -> TableColumn:
    return TableColumn(
        accessor=field.name,
        header=field.display_name,
        cell=_CELLS[field_type],
        sortable=sortable,
        width=field.display.table_width,
        align=field.display.table_align,
    )


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------

_COERCIONS: dict[FieldType, CoercionKind | None] = {
    FieldType.STRING: None,
    FieldType.TEXT: None,
    FieldType.EMAIL: None,
    FieldType.URL: None,
    FieldType.ENUM: None,
    FieldType.FILE: None,
    FieldType.IMAGE: None,
    FieldType.RELATION: None,
    FieldType.NUMBER: CoercionKind.NUMBER,
    FieldType.BOOLEAN: CoercionKind.BOOLEAN,
    FieldType.DATE: CoercionKind.DATE,
    FieldType.DATETIME: CoercionKind.DATE,
    FieldType.JSON: CoercionKind.JSON,
}
ensure_exhaustive(_COERCIONS, FieldType, "_COERCIONS")


def build_coercion(field: EntityField, field_type: FieldType) -> FormCoercion | None:
    kind = _COERCIONS[field_type]
    if kind is None:
        return None
    return FormCoercion(name=field.name, kind=kind)


_CONTROLS: dict[FieldType, str] = {
    FieldType.STRING: "text",
    FieldType.TEXT: "textarea",
    FieldType.EMAIL: "email",
    FieldType.URL: "url",
    FieldType.NUMBER: "number",
    FieldType.BOOLEAN: "checkbox",
    FieldType.DATE: "date",
    FieldType.DATETIME: "datetime",
    FieldType.JSON: "textarea",
    FieldType.ENUM: "select",
    FieldType.FILE: "file",
    FieldType.IMAGE: "file",
    FieldType.RELATION: "text",
}
ensure_exhaustive(_CONTROLS, FieldType, "_CONTROLS")


def build_form_control(field: EntityField, field_type: FieldType) -> FormControl:
    control = _CONTROLS[field_type]
    # An explicit form_type only refines free-text inputs.
    if field.display.form_type == "textarea" and control == "text":
        control = "textarea"
    return FormControl(
        name=field.name,
        label=field.display_name,
        control=control,
        required=field.required,
        placeholder=field.display.placeholder or "",
        help_text=field.display.help_text or "",
        options=tuple(field.enum_values) if field_type is FieldType.ENUM else (),
    )
