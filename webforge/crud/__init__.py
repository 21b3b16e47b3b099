"""CRUD generator family: entity-driven types, schemas, actions and table UI."""

from webforge.crud.generator import CrudGenerator
from webforge.crud.models import CrudConfig, CrudOptions, EntityDefinition, EntityField, FieldType

__all__ = [
    "CrudConfig",
    "CrudGenerator",
    "CrudOptions",
    "EntityDefinition",
    "EntityField",
    "FieldType",
]
