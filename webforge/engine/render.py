"""Serialisation of fragments into TypeScript / TSX text.

Every function returns text without leading indentation on its first line;
templates place the result and indent continuation lines with Jinja's
``indent`` filter.  String values are always emitted through
:func:`webforge.utils.ts_literal`.
"""

from __future__ import annotations

from typing import Any

from webforge.engine.fragments import (
    NO_DEFAULT,
    CellKind,
    CoercionKind,
    DateLiteral,
    EnumDeclaration,
    FilterProperty,
    FormCoercion,
    FormControl,
    MenuEntry,
    RegexLiteral,
    TableColumn,
    TypeProperty,
    ZodCheck,
    ZodField,
    ensure_exhaustive,
)
from webforge.utils import ts_literal

# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def render_arg(value: Any) -> str:
    """Render one call argument."""
    if isinstance(value, RegexLiteral):
        return f"new RegExp({ts_literal(value.pattern)})"
    if isinstance(value, DateLiteral):
        return f"new Date({ts_literal(value.iso)})"
    return ts_literal(value)


def jsx_text(value: str) -> str:
    """Text content for a JSX element, as an expression container."""
    return "{" + ts_literal(value) + "}"


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def render_type_property(prop: TypeProperty) -> str:
    lines: list[str] = []
    if prop.comment:
        lines.append(f"/** {prop.comment.replace('*/', '* /')} */")
    readonly = "readonly " if prop.readonly else ""
    optional = "?" if prop.optional else ""
    lines.append(f"{readonly}{prop.name}{optional}: {prop.type_expr};")
    return "\n".join(lines)


def render_enum_type(decl: EnumDeclaration) -> str:
    return "\n".join(
        [
            f"export const {decl.values_name} = {ts_literal(list(decl.values))} as const;",
            f"export type {decl.type_name} = (typeof {decl.values_name})[number];",
        ]
    )


def render_enum_schema(decl: EnumDeclaration) -> str:
    return f"export const {decl.schema_name} = z.enum({ts_literal(list(decl.values))});"


# ---------------------------------------------------------------------------
# Zod
# ---------------------------------------------------------------------------


def render_zod_check(check: ZodCheck) -> str:
    args = ", ".join(render_arg(arg) for arg in check.args)
    return f".{check.method}({args})"


def render_zod_expr(field: ZodField) -> str:
    parts = [field.base]
    parts.extend(render_zod_check(check) for check in field.checks)
    if field.optional:
        parts.append(".optional()")
    if field.default is not NO_DEFAULT:
        parts.append(f".default({render_arg(field.default)})")
    return "".join(parts)


def render_zod_field(field: ZodField) -> str:
    return f"{field.name}: {render_zod_expr(field)},"


def render_filter_type(prop: FilterProperty) -> str:
    return f"{prop.name}?: {prop.type_expr};"


def render_filter_schema(prop: FilterProperty) -> str:
    return f"{prop.name}: {prop.schema_expr}.optional(),"


# ---------------------------------------------------------------------------
# Table columns
# ---------------------------------------------------------------------------


def _value(accessor: str) -> str:
    return f"row.getValue({ts_literal(accessor)})"


_CELL_RENDERERS = {
    CellKind.TEXT: lambda a: f'String({_value(a)} ?? "")',
    CellKind.NUMBER: lambda a: f"formatNumber({_value(a)} as number | null)",
    CellKind.DATE: lambda a: f"formatDate({_value(a)} as Date | string | null)",
    CellKind.DATETIME: lambda a: f"formatDateTime({_value(a)} as Date | string | null)",
    CellKind.BOOLEAN: lambda a: f"formatBoolean({_value(a)} as boolean | null)",
    CellKind.EMAIL: lambda a: (
        f'<a href={{`mailto:${{String({_value(a)} ?? "")}}`}} className="underline">'
        f'{{String({_value(a)} ?? "")}}</a>'
    ),
    CellKind.LINK: lambda a: (
        f'<a href={{String({_value(a)} ?? "")}} target="_blank" rel="noreferrer" '
        f'className="underline">{{String({_value(a)} ?? "")}}</a>'
    ),
    CellKind.IMAGE: lambda a: (
        f'<img src={{String({_value(a)} ?? "")}} alt="" '
        f'className="h-8 w-8 rounded object-cover" />'
    ),
    CellKind.FILE: lambda a: (
        f'<a href={{String({_value(a)} ?? "")}} className="underline">Download</a>'
    ),
    CellKind.JSON: lambda a: (
        f'<code className="text-xs">{{JSON.stringify({_value(a)})}}</code>'
    ),
    CellKind.BADGE: lambda a: (
        f'<Badge variant="secondary">{{String({_value(a)} ?? "")}}</Badge>'
    ),
}
ensure_exhaustive(_CELL_RENDERERS, CellKind, "_CELL_RENDERERS")


def render_cell(column: TableColumn) -> str:
    return _CELL_RENDERERS[column.cell](column.accessor)


def render_table_column(column: TableColumn) -> str:
    lines = ["{", f"  accessorKey: {ts_literal(column.accessor)},"]
    if column.sortable:
        lines.extend(
            [
                "  header: ({ column }) => (",
                "    <Button",
                '      variant="ghost"',
                '      onClick={() => column.toggleSorting(column.getIsSorted() === "asc")}',
                "    >",
                f"      {jsx_text(column.header)}",
                '      <ArrowUpDown className="ml-2 h-4 w-4" />',
                "    </Button>",
                "  ),",
            ]
        )
    else:
        lines.append(f"  header: {ts_literal(column.header)},")
    lines.append(f"  cell: ({{ row }}) => {render_cell(column)},")
    lines.append(f"  enableSorting: {'true' if column.sortable else 'false'},")
    if column.width is not None:
        lines.append(f"  size: {column.width},")
    lines.append(f"  meta: {{ align: {ts_literal(column.align)} }},")
    lines.append("},")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------

_COERCIONS = {
    CoercionKind.NUMBER: lambda raw: f"{raw} === null || {raw} === \"\" ? undefined : Number({raw})",
    CoercionKind.BOOLEAN: lambda raw: f'{raw} === "on" || {raw} === "true"',
    CoercionKind.DATE: lambda raw: f'{raw} === null || {raw} === "" ? undefined : new Date(String({raw}))',
    CoercionKind.JSON: lambda raw: f'{raw} === null || {raw} === "" ? undefined : JSON.parse(String({raw}))',
}
ensure_exhaustive(_COERCIONS, CoercionKind, "_COERCIONS")


def render_coercion(coercion: FormCoercion) -> str:
    raw = f"formData.get({ts_literal(coercion.name)})"
    return f"{coercion.name}: {_COERCIONS[coercion.kind](raw)},"


def render_form_control(control: FormControl) -> str:
    name = ts_literal(control.name)
    label = jsx_text(control.label + (" *" if control.required else ""))
    placeholder = f" placeholder={ts_literal(control.placeholder)}" if control.placeholder else ""
    lines = ['<div className="space-y-2">', f"  <Label htmlFor={name}>{label}</Label>"]
    if control.control == "textarea":
        lines.append(f"  <Textarea id={name} {{...form.register({name})}}{placeholder} />")
    elif control.control == "checkbox":
        lines.append(f"  <Checkbox id={name} {{...form.register({name})}} />")
    elif control.control == "select":
        lines.append(f"  <select id={name} className=\"w-full rounded-md border px-3 py-2\" {{...form.register({name})}}>")
        for option in control.options:
            lines.append(f"    <option value={ts_literal(option)}>{jsx_text(option)}</option>")
        lines.append("  </select>")
    else:
        input_type = {"date": "date", "datetime": "datetime-local", "number": "number",
                      "email": "email", "url": "url", "file": "file", "password": "password"}
        kind = input_type.get(control.control, "text")
        lines.append(
            f"  <Input id={name} type={ts_literal(kind)} {{...form.register({name})}}{placeholder} />"
        )
    if control.help_text:
        lines.append(f'  <p className="text-sm text-muted-foreground">{jsx_text(control.help_text)}</p>')
    lines.append(f"  <FieldError message={{form.formState.errors[{name}]?.message}} />")
    lines.append("</div>")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def render_menu_entry(entry: MenuEntry) -> str:
    lines = ["{", f"  id: {ts_literal(entry.id)},", f"  label: {ts_literal(entry.label)},"]
    for key, value in (
        ("href", entry.href),
        ("icon", entry.icon),
        ("badge", entry.badge),
        ("description", entry.description),
    ):
        if value is not None:
            lines.append(f"  {key}: {ts_literal(value)},")
    for key, flag in (
        ("external", entry.external),
        ("disabled", entry.disabled),
        ("separator", entry.separator),
    ):
        if flag:
            lines.append(f"  {key}: true,")
    if entry.roles:
        lines.append(f"  roles: {ts_literal(list(entry.roles))},")
    if entry.permissions:
        lines.append(f"  permissions: {ts_literal(list(entry.permissions))},")
    if entry.children:
        lines.append("  children: [")
        for child in entry.children:
            rendered = render_menu_entry(child)
            lines.extend("    " + line for line in rendered.splitlines())
        lines.append("  ],")
    lines.append("},")
    return "\n".join(lines)


FILTERS = {
    "ts": ts_literal,
    "jsx_text": jsx_text,
    "type_property": render_type_property,
    "enum_type": render_enum_type,
    "enum_schema": render_enum_schema,
    "zod_expr": render_zod_expr,
    "zod_field": render_zod_field,
    "filter_type": render_filter_type,
    "filter_schema": render_filter_schema,
    "table_column": render_table_column,
    "coercion": render_coercion,
    "form_control": render_form_control,
    "menu_entry": render_menu_entry,
}
