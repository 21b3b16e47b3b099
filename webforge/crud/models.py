"""Pydantic models describing a CRUD entity and how it is presented.

``EntityField.type`` stays a plain string: classification against
:class:`FieldType` happens at generation time so that an unknown type is
reported as an :class:`~webforge.errors.UnsupportedFieldTypeError` naming
the field, rather than as a generic parse failure.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from webforge.engine.project import ProjectInfo
from webforge.utils import title_case

IDENTIFIER_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"


class FieldType(str, Enum):
    """Closed set of supported entity field types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    EMAIL = "email"
    URL = "url"
    TEXT = "text"
    JSON = "json"
    ENUM = "enum"
    FILE = "file"
    IMAGE = "image"
    RELATION = "relation"


CrudFeature = Literal[
    "pagination",
    "sorting",
    "filtering",
    "search",
    "selection",
    "bulk-actions",
    "export",
    "import",
    "inline-edit",
    "soft-delete",
    "audit-trail",
    "real-time",
    "optimistic-ui",
]


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------


class FieldValidation(BaseModel):
    """Value constraints; ``messages`` overrides the default message per constraint."""

    min: float | None = None
    max: float | None = None
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    pattern: str | None = None
    messages: dict[str, str] = Field(default_factory=dict)


class FieldDisplay(BaseModel):
    show_in_table: bool = True
    show_in_form: bool = True
    show_in_detail: bool = True
    table_width: int | None = Field(default=None, gt=0)
    table_align: Literal["left", "center", "right"] = "left"
    form_type: Literal["input", "textarea", "select", "checkbox", "file", "date"] | None = None
    placeholder: str | None = None
    help_text: str | None = None


def _iso_dates(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _iso_dates(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_iso_dates(item) for item in value]
    return value


class EntityField(BaseModel):
    name: str = Field(min_length=1)
    type: str = Field(description="One of the FieldType values; checked at generation time")
    display_name: str = ""
    description: str | None = None
    required: bool = False
    unique: bool = False
    default: Any = None
    enum_values: list[str] = Field(default_factory=list)
    validation: FieldValidation = Field(default_factory=FieldValidation)
    display: FieldDisplay = Field(default_factory=FieldDisplay)
    searchable: bool = False
    sortable: bool = False
    filterable: bool = False

    @field_validator("default", mode="before")
    @classmethod
    def _normalise_default(cls, value: Any) -> Any:
        # YAML loads unquoted 2024-01-01 as a date.
        return _iso_dates(value)

    @model_validator(mode="after")
    def _default_display_name(self) -> "EntityField":
        if not self.display_name:
            self.display_name = title_case(self.name)
        return self


class RelationDisplay(BaseModel):
    show_in_table: bool = False
    show_in_form: bool = True
    display_field: str = "name"
    searchable: bool = False
    inline: bool = False


class EntityRelation(BaseModel):
    name: str = Field(min_length=1)
    type: Literal["one-to-one", "one-to-many", "many-to-many"]
    target: str = Field(min_length=1)
    foreign_key: str | None = None
    on_delete: Literal["cascade", "restrict", "set-null"] | None = None
    display: RelationDisplay = Field(default_factory=RelationDisplay)


class EntityIndex(BaseModel):
    name: str
    fields: list[str]
    unique: bool = False
    type: Literal["btree", "hash", "gin", "gist"] | None = None


class EntityConstraint(BaseModel):
    name: str
    type: Literal["check", "unique", "foreign-key"]
    fields: list[str]
    condition: str | None = None


class EntityDefinition(BaseModel):
    """An entity and its fields, in declaration order."""

    name: str = Field(min_length=1)
    display_name: str = ""
    description: str | None = None
    fields: list[EntityField] = Field(default_factory=list)
    relations: list[EntityRelation] = Field(default_factory=list)
    indexes: list[EntityIndex] = Field(default_factory=list)
    constraints: list[EntityConstraint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _default_display_name(self) -> "EntityDefinition":
        if not self.display_name:
            self.display_name = title_case(self.name)
        return self

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


class PaginationConfig(BaseModel):
    enabled: bool = True
    type: Literal["client", "server"] = "server"
    default_page_size: int = Field(default=10, gt=0)
    page_size_options: list[int] = Field(default_factory=lambda: [5, 10, 20, 50])
    show_info: bool = True


class SortSpec(BaseModel):
    field: str
    direction: Literal["asc", "desc"] = "asc"


class SortingConfig(BaseModel):
    enabled: bool = True
    multi_sort: bool = False
    default_sort: list[SortSpec] = Field(default_factory=list)


class FilteringConfig(BaseModel):
    enabled: bool = True
    global_search: bool = True
    column_filters: bool = True
    advanced_filters: bool = False
    saved_filters: bool = False


class SelectionConfig(BaseModel):
    enabled: bool = True
    type: Literal["single", "multiple"] = "multiple"
    show_select_all: bool = True
    persist_selection: bool = False


class TableAction(BaseModel):
    name: str
    label: str
    type: Literal["row", "bulk", "global"]
    icon: str | None = None
    variant: Literal["default", "destructive", "outline", "secondary"] = "default"
    confirmation: str | None = None
    permission: str | None = None


def _default_actions() -> list[TableAction]:
    return [
        TableAction(name="edit", label="Edit", type="row", icon="Pencil"),
        TableAction(
            name="delete",
            label="Delete",
            type="row",
            icon="Trash",
            variant="destructive",
            confirmation="Are you sure you want to delete this item?",
        ),
        TableAction(name="create", label="Create", type="global", icon="Plus"),
    ]


class TableStyling(BaseModel):
    variant: Literal["default", "striped", "bordered", "compact"] = "default"
    size: Literal["sm", "md", "lg"] = "md"
    sticky_header: bool = True
    sticky_columns: list[str] = Field(default_factory=list)
    responsive: bool = True


class TableConfig(BaseModel):
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    sorting: SortingConfig = Field(default_factory=SortingConfig)
    filtering: FilteringConfig = Field(default_factory=FilteringConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    actions: list[TableAction] = Field(default_factory=_default_actions)
    styling: TableStyling = Field(default_factory=TableStyling)

    def actions_of(self, kind: str) -> list[TableAction]:
        return [action for action in self.actions if action.type == kind]


# ---------------------------------------------------------------------------
# Forms, API, permissions
# ---------------------------------------------------------------------------


class FormIntegration(BaseModel):
    create_form: bool = True
    edit_form: bool = True
    view_form: bool = True
    inline_edit: bool = False
    modal_forms: bool = True
    form_validation: bool = True


class ApiConfig(BaseModel):
    generate_routes: bool = True
    authentication: bool = True
    rate_limit: bool = True
    caching: bool = False
    documentation: bool = False
    versioning: str | None = None


CrudAction = Literal["create", "read", "update", "delete", "export", "import"]


class CrudPermission(BaseModel):
    action: CrudAction
    roles: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)


class PermissionConfig(BaseModel):
    enabled: bool = False
    roles: list[str] = Field(default_factory=list)
    permissions: list[CrudPermission] = Field(default_factory=list)
    field_level_security: bool = False
    row_level_security: bool = False

    def roles_for(self, action: str) -> list[str]:
        """Roles granted *action*; empty means no restriction."""
        roles: list[str] = []
        for permission in self.permissions:
            if permission.action == action:
                roles.extend(r for r in permission.roles if r not in roles)
        return roles


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


class CrudConfig(BaseModel):
    """Everything needed to generate the CRUD artifacts for one entity."""

    project: ProjectInfo = Field(default_factory=ProjectInfo)
    entity: EntityDefinition
    features: list[CrudFeature] = Field(
        default_factory=lambda: ["pagination", "sorting", "filtering", "search"]
    )
    table: TableConfig = Field(default_factory=TableConfig)
    forms: FormIntegration = Field(default_factory=FormIntegration)
    api: ApiConfig = Field(default_factory=ApiConfig)
    permissions: PermissionConfig = Field(default_factory=PermissionConfig)

    def has_feature(self, feature: str) -> bool:
        return feature in self.features


class CrudOptions(BaseModel):
    include_bulk_actions: bool = True
    include_export_import: bool = True
    include_api: bool = True
    include_tests: bool = True
