"""CRUD artifact generation.

:class:`CrudGenerator` turns one :class:`CrudConfig` into the types,
schemas, server actions, table/form components, hooks, utilities, API
routes and tests for a single entity.  Steps:

1. Validate the configuration (all issues at once).
2. Classify every field type.
3. Build fragments for each field, in declaration order.
4. Render each artifact skeleton with those fragments.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from webforge.crud import classifiers
from webforge.crud.fragments import (
    EntityNames,
    build_coercion,
    build_filter,
    build_form_control,
    build_table_column,
    build_type_property,
    build_zod_field,
    enum_declaration,
)
from webforge.crud.models import CrudConfig, CrudOptions, EntityField, FieldType
from webforge.crud.validation import validate_crud_config
from webforge.engine.artifacts import Artifact, ArtifactSet
from webforge.engine.fragments import (
    CellKind,
    EnumDeclaration,
    FilterProperty,
    FormCoercion,
    FormControl,
    TableColumn,
    TypeProperty,
    ZodField,
    ensure_exhaustive,
)
from webforge.engine.generator import ArtifactSetBuilder
from webforge.engine.project import exec_command, install_command
from webforge.engine.templates import TemplateRenderer
from webforge.errors import ValidationIssue
from webforge.logging_config import get_logger

logger = get_logger(__name__)

BASE_DEPENDENCIES = {
    "@tanstack/react-table": "^8.10.7",
    "lucide-react": "^0.294.0",
    "zod": "^3.22.4",
}
FORM_DEPENDENCIES = {
    "react-hook-form": "^7.48.2",
    "@hookform/resolvers": "^3.3.2",
}
TEST_DEV_DEPENDENCIES = {"vitest": "^1.0.4"}

_CRUD_ACTIONS = ("create", "read", "update", "delete", "export", "import")

_TABLE_CLASSES = {
    "default": "rounded-md border",
    "striped": "rounded-md border [&_tbody_tr:nth-child(even)]:bg-muted/50",
    "bordered": "rounded-md border [&_td]:border [&_th]:border",
    "compact": "rounded-md border [&_td]:py-1 [&_th]:h-8",
}

_SAMPLES: dict[FieldType, Any] = {
    FieldType.STRING: "sample",
    FieldType.TEXT: "sample text",
    FieldType.EMAIL: "user@example.com",
    FieldType.URL: "https://example.com",
    FieldType.NUMBER: 1,
    FieldType.BOOLEAN: True,
    FieldType.DATE: "2024-01-01T00:00:00.000Z",
    FieldType.DATETIME: "2024-01-01T00:00:00.000Z",
    FieldType.JSON: {},
    FieldType.ENUM: None,
    FieldType.FILE: "https://example.com/file.pdf",
    FieldType.IMAGE: "https://example.com/image.png",
    FieldType.RELATION: "00000000-0000-4000-8000-000000000000",
}
ensure_exhaustive(_SAMPLES, FieldType, "_SAMPLES")


@dataclass
class CrudPlan:
    """Classified fields and their fragments, in declaration order."""

    names: EntityNames
    classified: list[tuple[EntityField, FieldType]] = field(default_factory=list)
    type_props: list[TypeProperty] = field(default_factory=list)
    zod_fields: list[ZodField] = field(default_factory=list)
    enums: list[EnumDeclaration] = field(default_factory=list)
    filters: list[FilterProperty] = field(default_factory=list)
    columns: list[TableColumn] = field(default_factory=list)
    coercions: list[FormCoercion] = field(default_factory=list)
    controls: list[FormControl] = field(default_factory=list)
    plain_form_fields: list[str] = field(default_factory=list)
    searchable: list[str] = field(default_factory=list)
    sortable: list[str] = field(default_factory=list)


class CrudGenerator(ArtifactSetBuilder[CrudConfig, CrudOptions]):
    """Generates every CRUD artifact for one entity."""

    family = "crud"
    options_model = CrudOptions

    def __init__(self, config: CrudConfig, renderer: TemplateRenderer | None = None) -> None:
        super().__init__(config, renderer)
        self.names = EntityNames.of(config.entity)

    # ------------------------------------------------------------------
    # Validation and planning
    # ------------------------------------------------------------------

    def validate(self, options: CrudOptions) -> list[ValidationIssue]:
        return validate_crud_config(self.config)

    def classify(self) -> list[tuple[EntityField, FieldType]]:
        """Classify every field; fails on the first unsupported type."""
        entity = self.config.entity.name
        return [(f, classifiers.classify_field_type(f, entity)) for f in self.config.entity.fields]

    def plan(self) -> CrudPlan:
        """Build all field fragments up front so rendering cannot fail halfway."""
        plan = CrudPlan(names=self.names, classified=self.classify())
        for f, field_type in plan.classified:
            plan.type_props.append(build_type_property(f, field_type, self.names))
            plan.zod_fields.append(build_zod_field(f, field_type, self.names))
            if field_type is FieldType.ENUM:
                plan.enums.append(enum_declaration(f, self.names))
            if classifiers.is_filterable(f, field_type):
                filter_prop = build_filter(f, field_type, self.names)
                if filter_prop is not None:
                    plan.filters.append(filter_prop)
            sortable = classifiers.is_sortable(f, field_type, self.config)
            if sortable:
                plan.sortable.append(f.name)
            if classifiers.is_searchable(f, field_type):
                plan.searchable.append(f.name)
            if classifiers.shows_in_table(f):
                plan.columns.append(build_table_column(f, field_type, sortable))
            if classifiers.shows_in_form(f):
                plan.controls.append(build_form_control(f, field_type))
            coercion = build_coercion(f, field_type)
            if coercion is not None:
                plan.coercions.append(coercion)
            else:
                plan.plain_form_fields.append(f.name)
        logger.debug(
            "Planned %d field(s) for %s: %d column(s), %d filter(s)",
            len(plan.classified), self.names.type_name, len(plan.columns), len(plan.filters),
        )
        return plan

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def _flags(self, options: CrudOptions) -> dict[str, bool]:
        config = self.config
        return {
            "pagination": classifiers.wants_pagination(config),
            "sorting": config.table.sorting.enabled and config.has_feature("sorting"),
            "global_search": classifiers.wants_global_search(config),
            "selection": classifiers.wants_selection(config),
            "search_actions": classifiers.wants_search_actions(config),
            "bulk_actions": classifiers.wants_bulk_actions(config, options),
            "data_actions": classifiers.wants_data_actions(config, options),
            "export": config.has_feature("export"),
            "import": config.has_feature("import"),
            "api": classifiers.wants_api_routes(config, options),
            "form": classifiers.wants_form(config),
            "soft_delete": config.has_feature("soft-delete"),
            "audit_trail": config.has_feature("audit-trail"),
            "permissions": config.permissions.enabled,
            "tests": options.include_tests,
        }

    def _permission_roles(self) -> dict[str, list[str]]:
        permissions = self.config.permissions
        if not permissions.enabled:
            return {action: [] for action in _CRUD_ACTIONS}
        return {action: permissions.roles_for(action) for action in _CRUD_ACTIONS}

    def _default_order(self) -> list[dict[str, str]]:
        sorts = self.config.table.sorting.default_sort
        if not sorts:
            return [{"createdAt": "desc"}]
        return [{sort.field: sort.direction} for sort in sorts]

    def _sample(self, plan: CrudPlan) -> tuple[dict[str, Any], bool]:
        """A record that satisfies every schema constraint, if one can be derived."""
        sample: dict[str, Any] = {}
        valid = True
        for f, field_type in plan.classified:
            rules = f.validation
            value = f.enum_values[0] if field_type is FieldType.ENUM else _SAMPLES[field_type]
            if field_type in (FieldType.STRING, FieldType.TEXT) and rules.min_length:
                value = "a" * rules.min_length
            if field_type is FieldType.NUMBER:
                if rules.min is not None:
                    value = rules.min
                elif rules.max is not None and rules.max < value:
                    value = rules.max
                value = int(value) if float(value).is_integer() else value
            if isinstance(value, str):
                too_short = rules.min_length is not None and len(value) < rules.min_length
                too_long = rules.max_length is not None and len(value) > rules.max_length
                if too_short or too_long:
                    valid = False
            if rules.pattern is not None:
                valid = False
            sample[f.name] = value
        return sample, valid

    def _invalid_cases(self, plan: CrudPlan) -> list[dict[str, Any]]:
        cases: list[dict[str, Any]] = []
        for f, field_type in plan.classified:
            rules = f.validation
            if field_type is FieldType.NUMBER and rules.min is not None:
                cases.append({"field": f.name, "value": rules.min - 1,
                              "title": f"rejects {f.name} below the minimum"})
            if field_type is FieldType.NUMBER and rules.max is not None:
                cases.append({"field": f.name, "value": rules.max + 1,
                              "title": f"rejects {f.name} above the maximum"})
            if field_type is FieldType.EMAIL:
                cases.append({"field": f.name, "value": "not-an-email",
                              "title": f"rejects a malformed {f.name}"})
            if field_type in (FieldType.STRING, FieldType.TEXT) and rules.max_length is not None:
                cases.append({"field": f.name, "value": "a" * (rules.max_length + 1),
                              "title": f"rejects {f.name} longer than {rules.max_length} characters"})
            if field_type is FieldType.ENUM:
                cases.append({"field": f.name, "value": "__invalid__",
                              "title": f"rejects an unknown {f.name} value"})
        return cases

    def context(self, plan: CrudPlan, options: CrudOptions) -> dict[str, Any]:
        config = self.config
        pagination = config.table.pagination
        required = [
            f.name
            for f, field_type in plan.classified
            if f.required and f.default is None and field_type is not FieldType.BOOLEAN
        ]
        label_candidates = [
            f.name for f, t in plan.classified if t in (FieldType.STRING, FieldType.EMAIL)
        ]
        sample, sample_valid = self._sample(plan)
        sorting = self._default_order()
        return {
            "config": config,
            "project": config.project,
            "names": plan.names,
            "flags": self._flags(options),
            "type_props": plan.type_props,
            "zod_fields": plan.zod_fields,
            "enums": plan.enums,
            "filters": plan.filters,
            "columns": plan.columns,
            "coercions": plan.coercions,
            "controls": plan.controls,
            "plain_form_fields": plan.plain_form_fields,
            "searchable": plan.searchable,
            "sortable": plan.sortable,
            "relations": config.entity.relations,
            "row_actions": config.table.actions_of("row"),
            "global_actions": config.table.actions_of("global"),
            "permission_roles": self._permission_roles(),
            "default_order": sorting,
            "initial_sorting": [
                {"id": sort.field, "desc": sort.direction == "desc"}
                for sort in config.table.sorting.default_sort
            ],
            "list_path": f"/{plan.names.slug}",
            "max_page_size": max([pagination.default_page_size, *pagination.page_size_options]),
            "export_fields": ["id", *[f.name for f, _ in plan.classified], "createdAt", "updatedAt"],
            "table_class": _TABLE_CLASSES[config.table.styling.variant],
            "uses_badge": any(column.cell is CellKind.BADGE for column in plan.columns),
            "label_field": label_candidates[0] if label_candidates else None,
            "required_fields": required,
            "sample": sample,
            "sample_valid": sample_valid,
            "invalid_cases": self._invalid_cases(plan),
        }

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def assemble(self, options: CrudOptions) -> Iterator[Artifact]:
        plan = self.plan()
        ctx = self.context(plan, options)
        flags = ctx["flags"]
        slug = self.names.slug
        display = self.names.display

        # 1. Shared types
        yield self.render("crud/types.ts.j2", f"shared/types/{slug}.ts", ctx,
                          f"{display} entity types")
        yield self.render("crud/action-types.ts.j2", f"shared/types/{slug}-actions.ts", ctx,
                          f"{display} action result types")
        yield self.render("crud/hook-types.ts.j2", f"shared/types/{slug}-hooks.ts", ctx,
                          f"{display} hook types")

        # 2. Validation schemas
        yield self.render("crud/schema.ts.j2", f"shared/validation/{slug}.ts", ctx,
                          f"{display} Zod schemas")
        yield self.render("crud/filter-schema.ts.j2", f"shared/validation/{slug}-filters.ts", ctx,
                          f"{display} search and filter schemas")

        # 3. Server actions
        yield self.render("crud/actions.ts.j2", f"src/services/{slug}/actions.ts", ctx,
                          f"{display} CRUD server actions")
        if flags["search_actions"]:
            yield self.render("crud/search-actions.ts.j2", f"src/services/{slug}/search-actions.ts",
                              ctx, f"{display} search actions")
        if flags["bulk_actions"]:
            yield self.render("crud/bulk-actions.ts.j2", f"src/services/{slug}/bulk-actions.ts",
                              ctx, f"{display} bulk actions")
        if flags["data_actions"]:
            yield self.render("crud/data-actions.ts.j2", f"src/services/{slug}/data-actions.ts",
                              ctx, f"{display} export and import actions")

        # 4. Components and hooks
        yield self.render("crud/table.tsx.j2", f"src/components/{slug}/{slug}-table.tsx", ctx,
                          f"{display} data table")
        if flags["form"]:
            yield self.render("crud/form.tsx.j2", f"src/components/{slug}/{slug}-form.tsx", ctx,
                              f"{display} form")
        yield self.render("crud/use-table.ts.j2", f"src/hooks/{slug}/use-{slug}-table.ts", ctx,
                          f"{display} table state hook")

        # 5. Utilities
        yield self.render("crud/utils.ts.j2", f"src/lib/{slug}-utils.ts", ctx,
                          f"{display} form and CSV helpers")
        yield self.render("crud/formatters.ts.j2", f"src/lib/{slug}-formatters.ts", ctx,
                          f"{display} display formatters")

        # 6. API routes
        if flags["api"]:
            yield self.render("crud/api-route.ts.j2", f"app/api/{slug}/route.ts", ctx,
                              f"{display} collection endpoint")
            yield self.render("crud/api-item-route.ts.j2", f"app/api/{slug}/[id]/route.ts", ctx,
                              f"{display} item endpoint")

        # 7. Tests
        if flags["tests"]:
            yield self.render("crud/schema.test.ts.j2",
                              f"src/__tests__/{slug}/{slug}-schema.test.ts", ctx,
                              f"{display} schema tests")

    # ------------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------------

    def dependencies(self, options: CrudOptions) -> dict[str, str]:
        deps = dict(BASE_DEPENDENCIES)
        if classifiers.wants_form(self.config):
            deps.update(FORM_DEPENDENCIES)
        return deps

    def dev_dependencies(self, options: CrudOptions) -> dict[str, str]:
        return dict(TEST_DEV_DEPENDENCIES) if options.include_tests else {}

    def shadcn_components(self, options: CrudOptions) -> list[str]:
        components = ["table", "button", "dropdown-menu"]
        if classifiers.wants_global_search(self.config):
            components.append("input")
        if classifiers.wants_selection(self.config):
            components.append("checkbox")
        if any(f.type == "enum" for f in self.config.entity.fields):
            components.append("badge")
        if classifiers.wants_form(self.config):
            for name in ("input", "label", "textarea", "checkbox"):
                if name not in components:
                    components.append(name)
        return components

    def instructions(self, options: CrudOptions, artifact_set: ArtifactSet) -> list[str]:
        pm = self.config.project.package_manager
        steps = [f"Install dependencies: {install_command(pm, artifact_set.dependencies)}"]
        if artifact_set.dev_dependencies:
            steps.append(
                f"Install dev dependencies: {install_command(pm, artifact_set.dev_dependencies, dev=True)}"
            )
        steps.append(
            "Add shadcn/ui components: "
            + exec_command(pm, "shadcn@latest add " + " ".join(self.shadcn_components(options)))
        )
        steps.append(
            f"Add a '{self.names.variable}' model to your Prisma schema and export a client "
            "from src/lib/prisma.ts"
        )
        if self.config.permissions.enabled or self.config.api.authentication:
            steps.append("Provide requireRole() and getSession() in src/lib/auth.ts")
        if classifiers.wants_api_routes(self.config, options) and self.config.api.rate_limit:
            steps.append("Provide rateLimit() in src/lib/rate-limit.ts")
        if self.config.has_feature("audit-trail"):
            steps.append("Provide recordAudit() in src/lib/audit.ts")
        steps.append(
            f"Render <{self.names.type_name}Table /> from "
            f"src/components/{self.names.slug}/{self.names.slug}-table.tsx on a page"
        )
        return steps
