"""Tests for fragment serialisation (webforge.engine.render).

Covers:
- Literal and regex argument rendering
- Type properties, enum declarations, Zod fields and checks
- Table columns (sortable header, width, align) and every cell kind
- Form coercions and controls
- Menu entries with nested children
- Exhaustiveness guard for dispatch tables
"""

from __future__ import annotations

from enum import Enum

import pytest

from webforge.engine import render
from webforge.engine.fragments import (
    NO_DEFAULT,
    CellKind,
    CoercionKind,
    DateLiteral,
    EnumDeclaration,
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
from webforge.errors import InternalAssemblyError


class TestLiterals:
    @pytest.mark.unit
    def test_render_arg_regex(self):
        assert render.render_arg(RegexLiteral(r"^\d+$")) == 'new RegExp("^\\\\d+$")'

    @pytest.mark.unit
    def test_render_arg_date(self):
        assert render.render_arg(DateLiteral("2024-01-01")) == 'new Date("2024-01-01")'

    @pytest.mark.unit
    def test_render_arg_plain(self):
        assert render.render_arg(3) == "3"
        assert render.render_arg("x") == '"x"'

    @pytest.mark.unit
    def test_jsx_text_escapes_braces_and_quotes(self):
        assert render.jsx_text('{"a"}') == '{"{\\"a\\"}"}'

    @pytest.mark.unit
    def test_no_default_is_falsy_singleton(self):
        assert not NO_DEFAULT
        assert type(NO_DEFAULT)() is NO_DEFAULT


class TestTypes:
    @pytest.mark.unit
    def test_type_property(self):
        prop = TypeProperty(name="amount", type_expr="number")
        assert render.render_type_property(prop) == "amount: number;"

    @pytest.mark.unit
    def test_optional_readonly_with_comment(self):
        prop = TypeProperty(name="note", type_expr="string", optional=True, readonly=True, comment="a */ b")
        assert render.render_type_property(prop) == "/** a * / b */\nreadonly note?: string;"

    @pytest.mark.unit
    def test_enum_declaration(self):
        decl = EnumDeclaration("InvoiceStatus", "InvoiceStatusValues", "invoiceStatusSchema", ("draft", "paid"))
        assert render.render_enum_type(decl) == (
            'export const InvoiceStatusValues = ["draft", "paid"] as const;\n'
            "export type InvoiceStatus = (typeof InvoiceStatusValues)[number];"
        )
        assert render.render_enum_schema(decl) == 'export const invoiceStatusSchema = z.enum(["draft", "paid"]);'


class TestZod:
    @pytest.mark.unit
    def test_required_field_with_check(self):
        field = ZodField("amount", "z.coerce.number()", (ZodCheck("min", (0, "Amount must be at least 0")),))
        assert render.render_zod_field(field) == 'amount: z.coerce.number().min(0, "Amount must be at least 0"),'

    @pytest.mark.unit
    def test_optional_with_default(self):
        field = ZodField("active", "z.coerce.boolean()", optional=True, default=True)
        assert render.render_zod_expr(field) == "z.coerce.boolean().optional().default(true)"

    @pytest.mark.unit
    def test_falsy_default_is_still_rendered(self):
        field = ZodField("count", "z.coerce.number()", default=0)
        assert render.render_zod_expr(field).endswith(".default(0)")

    @pytest.mark.unit
    def test_no_default(self):
        field = ZodField("name", "z.string()", default=NO_DEFAULT)
        assert render.render_zod_expr(field) == "z.string()"

    @pytest.mark.unit
    def test_check_lookup(self):
        field = ZodField("name", "z.string()", (ZodCheck("min", (1,)), ZodCheck("max", (5,))))
        assert field.check("max").args == (5,)
        assert field.check("email") is None


class TestTableColumns:
    @pytest.mark.unit
    def test_plain_column(self):
        text = render.render_table_column(TableColumn(accessor="name", header="Name"))
        assert 'accessorKey: "name",' in text
        assert 'header: "Name",' in text
        assert "enableSorting: false," in text
        assert "size:" not in text
        assert text.startswith("{") and text.endswith("},")

    @pytest.mark.unit
    def test_sortable_column_with_width(self):
        text = render.render_table_column(
            TableColumn(accessor="amount", header="Amount", cell=CellKind.NUMBER, sortable=True, width=120, align="right")
        )
        assert "column.toggleSorting" in text
        assert '{"Amount"}' in text
        assert "size: 120," in text
        assert 'meta: { align: "right" },' in text
        assert 'formatNumber(row.getValue("amount") as number | null)' in text

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list(CellKind))
    def test_every_cell_kind_renders(self, kind: CellKind):
        cell = render.render_cell(TableColumn(accessor="value", header="Value", cell=kind))
        assert 'row.getValue("value")' in cell
        assert cell.count("{") == cell.count("}")


class TestForms:
    @pytest.mark.unit
    @pytest.mark.parametrize("kind", list(CoercionKind))
    def test_every_coercion_renders(self, kind: CoercionKind):
        text = render.render_coercion(FormCoercion("due", kind))
        assert text.startswith("due: ")
        assert 'formData.get("due")' in text

    @pytest.mark.unit
    def test_select_control_lists_options(self):
        text = render.render_form_control(
            FormControl(name="status", label="Status", control="select", required=True, options=("a", "b"))
        )
        assert '{"Status *"}' in text
        assert '<option value="a">{"a"}</option>' in text
        assert 'form.formState.errors["status"]' in text

    @pytest.mark.unit
    def test_input_control_type(self):
        text = render.render_form_control(
            FormControl(name="due", label="Due", control="datetime", placeholder="when", help_text="UTC")
        )
        assert 'type="datetime-local"' in text
        assert 'placeholder="when"' in text
        assert '{"UTC"}' in text


class TestMenuEntries:
    @pytest.mark.unit
    def test_nested_entry(self):
        entry = MenuEntry(
            id="settings",
            label="Settings",
            href="/settings",
            icon="Settings",
            roles=("admin",),
            children=(MenuEntry(id="profile", label="Profile", href="/settings/profile"),),
        )
        text = render.render_menu_entry(entry)
        assert 'id: "settings",' in text
        assert 'roles: ["admin"],' in text
        assert '    id: "profile",' in text
        assert text.count("{") == text.count("}")

    @pytest.mark.unit
    def test_flags_only_when_set(self):
        text = render.render_menu_entry(MenuEntry(id="x", label="X", external=True))
        assert "external: true," in text
        assert "disabled" not in text
        assert "href" not in text


class TestExhaustiveness:
    @pytest.mark.unit
    def test_missing_member_raises(self):
        class Color(str, Enum):
            RED = "red"
            BLUE = "blue"

        with pytest.raises(InternalAssemblyError, match="does not cover: blue"):
            ensure_exhaustive({Color.RED: 1}, Color, "colors")

    @pytest.mark.unit
    def test_filters_are_registered(self):
        assert {"ts", "jsx_text", "zod_field", "table_column", "menu_entry"} <= set(render.FILTERS)
