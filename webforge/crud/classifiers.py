"""Pure predicates over entity fields and CRUD feature flags."""

from __future__ import annotations

from webforge.crud.models import CrudConfig, CrudOptions, EntityField, FieldType
from webforge.errors import UnsupportedFieldTypeError

# Types that cannot be meaningfully sorted or filtered on.
_OPAQUE_TYPES = frozenset({FieldType.JSON, FieldType.FILE, FieldType.IMAGE})


def classify_field_type(field: EntityField, entity: str | None = None) -> FieldType:
    """Map the raw ``type`` string of *field* onto :class:`FieldType`.

    Raises:
        UnsupportedFieldTypeError: The type is not one of the supported values.
    """
    try:
        return FieldType(field.type)
    except ValueError:
        raise UnsupportedFieldTypeError(field.name, field.type, entity) from None


def is_searchable(field: EntityField, field_type: FieldType) -> bool:
    return field.searchable and field_type not in _OPAQUE_TYPES


def is_sortable(field: EntityField, field_type: FieldType, config: CrudConfig) -> bool:
    return (
        field.sortable
        and config.table.sorting.enabled
        and config.has_feature("sorting")
        and field_type not in _OPAQUE_TYPES
    )


def is_filterable(field: EntityField, field_type: FieldType) -> bool:
    return field.filterable and field_type not in _OPAQUE_TYPES


def shows_in_table(field: EntityField) -> bool:
    return field.display.show_in_table


def shows_in_form(field: EntityField) -> bool:
    return field.display.show_in_form


# ---------------------------------------------------------------------------
# Feature flags
# ---------------------------------------------------------------------------


def wants_bulk_actions(config: CrudConfig, options: CrudOptions) -> bool:
    return options.include_bulk_actions and config.has_feature("bulk-actions")


def wants_data_actions(config: CrudConfig, options: CrudOptions) -> bool:
    return options.include_export_import and (
        config.has_feature("export") or config.has_feature("import")
    )


def wants_search_actions(config: CrudConfig) -> bool:
    return config.has_feature("search") or config.has_feature("filtering")


def wants_api_routes(config: CrudConfig, options: CrudOptions) -> bool:
    return options.include_api and config.api.generate_routes


def wants_form(config: CrudConfig) -> bool:
    return config.forms.create_form or config.forms.edit_form


def wants_selection(config: CrudConfig) -> bool:
    return config.table.selection.enabled and (
        config.has_feature("selection") or config.has_feature("bulk-actions")
    )


def wants_pagination(config: CrudConfig) -> bool:
    return config.table.pagination.enabled and config.has_feature("pagination")


def wants_global_search(config: CrudConfig) -> bool:
    return config.table.filtering.enabled and config.table.filtering.global_search and (
        config.has_feature("search")
    )
