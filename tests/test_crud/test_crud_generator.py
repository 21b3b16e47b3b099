"""Tests for CrudGenerator.

Covers:
- Artifact paths and their order for a full-featured entity
- Feature flags switching whole artifacts on and off
- Field order preserved in types, schema and table columns
- Generated content for the Invoice amount minimum
- Determinism, path uniqueness and brace balance
- Unsupported field types and validation failures as results
- Dependencies and setup instructions
"""

from __future__ import annotations

from typing import Any

import pytest

from webforge.crud import CrudConfig, CrudGenerator
from webforge.engine.templates import TemplateRenderer
from webforge.errors import UnsupportedFieldTypeError

FULL_PATHS = [
    "shared/types/invoice.ts",
    "shared/types/invoice-actions.ts",
    "shared/types/invoice-hooks.ts",
    "shared/validation/invoice.ts",
    "shared/validation/invoice-filters.ts",
    "src/services/invoice/actions.ts",
    "src/services/invoice/search-actions.ts",
    "src/services/invoice/bulk-actions.ts",
    "src/services/invoice/data-actions.ts",
    "src/components/invoice/invoice-table.tsx",
    "src/components/invoice/invoice-form.tsx",
    "src/hooks/invoice/use-invoice-table.ts",
    "src/lib/invoice-utils.ts",
    "src/lib/invoice-formatters.ts",
    "app/api/invoice/route.ts",
    "app/api/invoice/[id]/route.ts",
    "src/__tests__/invoice/invoice-schema.test.ts",
]


@pytest.fixture
def generator(invoice_config: CrudConfig, renderer: TemplateRenderer) -> CrudGenerator:
    return CrudGenerator(invoice_config, renderer)


def _positions(content: str, needles: list[str]) -> list[int]:
    return [content.index(needle) for needle in needles]


class TestCrudArtifacts:
    @pytest.mark.unit
    def test_full_path_list_in_order(self, generator: CrudGenerator):
        assert generator.build().paths == FULL_PATHS

    @pytest.mark.unit
    def test_paths_are_unique(self, generator: CrudGenerator):
        paths = generator.build().paths
        assert len(paths) == len(set(paths))

    @pytest.mark.unit
    def test_options_switch_artifacts_off(self, generator: CrudGenerator):
        paths = generator.build(
            {"include_api": False, "include_bulk_actions": False, "include_export_import": False, "include_tests": False}
        ).paths
        assert "app/api/invoice/route.ts" not in paths
        assert "src/services/invoice/bulk-actions.ts" not in paths
        assert "src/services/invoice/data-actions.ts" not in paths
        assert not any(path.startswith("src/__tests__/") for path in paths)

    @pytest.mark.unit
    def test_features_switch_artifacts_off(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["features"] = ["pagination"]
        invoice_data["forms"] = {"create_form": False, "edit_form": False}
        paths = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).build().paths
        assert "src/services/invoice/search-actions.ts" not in paths
        assert "src/services/invoice/bulk-actions.ts" not in paths
        assert "src/services/invoice/data-actions.ts" not in paths
        assert "src/components/invoice/invoice-form.tsx" not in paths

    @pytest.mark.unit
    def test_api_disabled_in_config(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["api"] = {"generate_routes": False}
        paths = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).build().paths
        assert not any(path.startswith("app/api/") for path in paths)


class TestCrudContent:
    @pytest.mark.unit
    def test_amount_minimum_in_schema_and_type(self, generator: CrudGenerator):
        result = generator.build()
        schema = result.get("shared/validation/invoice.ts").content
        types = result.get("shared/types/invoice.ts").content
        assert 'amount: z.coerce.number().min(0, "Amount must be at least 0"),' in schema
        assert "  amount: number;" in types

    @pytest.mark.unit
    def test_field_order_is_preserved(self, generator: CrudGenerator):
        result = generator.build()
        names = ["number", "amount", "status", "customerEmail", "dueDate"]
        schema = result.get("shared/validation/invoice.ts").content
        positions = _positions(schema, [f"  {name}: " for name in names])
        assert positions == sorted(positions)
        table = result.get("src/components/invoice/invoice-table.tsx").content
        positions = _positions(table, [f'accessorKey: "{name}"' for name in names])
        assert positions == sorted(positions)
        types = result.get("shared/types/invoice.ts").content
        positions = _positions(types, [f"  {name}" for name in names])
        assert positions == sorted(positions)

    @pytest.mark.unit
    def test_hidden_field_has_no_column(self, generator: CrudGenerator):
        table = generator.build().get("src/components/invoice/invoice-table.tsx").content
        assert 'accessorKey: "notes"' not in table

    @pytest.mark.unit
    def test_enum_declared_once(self, generator: CrudGenerator):
        result = generator.build()
        types = result.get("shared/types/invoice.ts").content
        schema = result.get("shared/validation/invoice.ts").content
        assert 'export const InvoiceStatusValues = ["draft", "sent", "paid"] as const;' in types
        assert schema.count('export const invoiceStatusSchema = z.enum(["draft", "sent", "paid"]);') == 1

    @pytest.mark.unit
    def test_searchable_and_sortable_lists(self, generator: CrudGenerator):
        types = generator.build().get("shared/types/invoice.ts").content
        assert 'export const invoiceSearchableFields = ["number", "customerEmail"] as const;' in types
        assert 'export const invoiceSortableFields = ["number", "amount"] as const;' in types

    @pytest.mark.unit
    def test_strings_are_escaped(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["entity"]["fields"][0]["validation"]["messages"] = {"min_length": 'Too "short"'}
        schema = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).build().get(
            "shared/validation/invoice.ts"
        ).content
        assert '.min(3, "Too \\"short\\"")' in schema

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path",
        [
            "shared/types/invoice.ts",
            "shared/types/invoice-actions.ts",
            "shared/types/invoice-hooks.ts",
            "shared/validation/invoice.ts",
            "shared/validation/invoice-filters.ts",
            "src/__tests__/invoice/invoice-schema.test.ts",
        ],
    )
    def test_braces_are_balanced(self, generator: CrudGenerator, path: str):
        content = generator.build().get(path).content
        assert content.count("{") == content.count("}")
        assert content.count("(") == content.count(")")


class TestCrudDeterminism:
    @pytest.mark.unit
    def test_equal_configs_give_identical_output(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        first = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).build()
        second = CrudGenerator(CrudConfig.model_validate(dict(invoice_data)), TemplateRenderer()).build()
        assert first == second
        assert [a.content for a in first.artifacts] == [a.content for a in second.artifacts]


class TestCrudFailures:
    @pytest.mark.unit
    def test_currency_field_raises(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["entity"]["fields"].append({"name": "price", "type": "currency"})
        generator = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer)
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            generator.build()
        assert exc_info.value.field_name == "price"
        assert exc_info.value.type_value == "currency"

    @pytest.mark.unit
    def test_currency_field_as_result(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["entity"]["fields"].append({"name": "price", "type": "currency"})
        result = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).generate()
        assert not result.success
        assert result.artifacts == []
        assert result.error_messages == ["entity.fields.price.type: unsupported field type 'currency'"]

    @pytest.mark.unit
    def test_validation_failure_as_result(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["entity"]["fields"].append({"name": "amount", "type": "number"})
        result = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).generate()
        assert not result.success
        assert result.error_messages == ["entity.fields: duplicate field name 'amount'"]

    @pytest.mark.unit
    def test_enum_default_outside_values(self, invoice_data: dict[str, Any], renderer: TemplateRenderer):
        invoice_data["entity"]["fields"][2]["default"] = "archived"
        result = CrudGenerator(CrudConfig.model_validate(invoice_data), renderer).generate()
        assert not result.success
        assert result.artifacts == []
        assert result.error_messages == ["entity.fields.2.default: 'archived' is not one of enum_values"]


class TestCrudManifest:
    @pytest.mark.unit
    def test_dependencies(self, generator: CrudGenerator):
        result = generator.build()
        assert list(result.dependencies) == [
            "@tanstack/react-table",
            "lucide-react",
            "zod",
            "react-hook-form",
            "@hookform/resolvers",
        ]
        assert result.dev_dependencies == {"vitest": "^1.0.4"}

    @pytest.mark.unit
    def test_no_dev_dependencies_without_tests(self, generator: CrudGenerator):
        assert generator.build({"include_tests": False}).dev_dependencies == {}

    @pytest.mark.unit
    def test_instructions(self, generator: CrudGenerator):
        steps = generator.build().instructions
        assert steps[0].startswith("Install dependencies: pnpm add @tanstack/react-table@^8.10.7")
        assert steps[1] == "Install dev dependencies: pnpm add -D vitest@^1.0.4"
        assert steps[2].startswith("Add shadcn/ui components: pnpm dlx shadcn@latest add table button dropdown-menu")
        assert "badge" in steps[2]
        assert steps[-1] == "Render <InvoiceTable /> from src/components/invoice/invoice-table.tsx on a page"
