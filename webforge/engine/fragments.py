"""Structured fragment values.

Fragment builders turn one classified configuration entry into one of
these values; :mod:`webforge.engine.render` serialises them into text.
Keeping fragments structured means tests can assert on them directly and
every interpolated string goes through a single escaping step.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from webforge.errors import InternalAssemblyError


class _NoDefault:
    """Sentinel type: the field declares no default value."""

    _instance: "_NoDefault | None" = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT = _NoDefault()


# ---------------------------------------------------------------------------
# TypeScript declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeProperty:
    """A member of a TypeScript interface."""

    name: str
    type_expr: str
    optional: bool = False
    readonly: bool = False
    comment: str = ""


@dataclass(frozen=True)
class EnumDeclaration:
    """A closed set of string values, emitted as a const tuple plus union type."""

    type_name: str
    values_name: str
    schema_name: str
    values: tuple[str, ...]


# ---------------------------------------------------------------------------
# Zod schemas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegexLiteral:
    """A regular expression argument, emitted as ``new RegExp("...")``."""

    pattern: str


@dataclass(frozen=True)
class DateLiteral:
    """An ISO date or date-time argument, emitted as ``new Date("...")``."""

    iso: str


@dataclass(frozen=True)
class ZodCheck:
    """One chained refinement such as ``.min(0, "...")``."""

    method: str
    args: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ZodField:
    """A property of a ``z.object({...})`` schema."""

    name: str
    base: str
    checks: tuple[ZodCheck, ...] = ()
    optional: bool = False
    default: Any = NO_DEFAULT

    def check(self, method: str) -> ZodCheck | None:
        """First check using *method*, if any."""
        for item in self.checks:
            if item.method == method:
                return item
        return None


@dataclass(frozen=True)
class FilterProperty:
    """A filter parameter: its TypeScript type and its Zod schema expression."""

    name: str
    type_expr: str
    schema_expr: str


# ---------------------------------------------------------------------------
# Table and form pieces
# ---------------------------------------------------------------------------


class CellKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    EMAIL = "email"
    LINK = "link"
    IMAGE = "image"
    FILE = "file"
    JSON = "json"
    BADGE = "badge"


@dataclass(frozen=True)
class TableColumn:
    """A TanStack Table column definition."""

    accessor: str
    header: str
    cell: CellKind = CellKind.TEXT
    sortable: bool = False
    width: int | None = None
    align: str = "left"


class CoercionKind(str, Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"


@dataclass(frozen=True)
class FormCoercion:
    """How a raw ``FormData`` value is converted before schema parsing."""

    name: str
    kind: CoercionKind


@dataclass(frozen=True)
class FormControl:
    """A single form control bound to an entity field."""

    name: str
    label: str
    control: str
    required: bool = False
    placeholder: str = ""
    help_text: str = ""
    options: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MenuEntry:
    """A navigation entry, emitted as a TypeScript object literal."""

    id: str
    label: str
    href: str | None = None
    icon: str | None = None
    badge: str | None = None
    description: str | None = None
    external: bool = False
    disabled: bool = False
    separator: bool = False
    roles: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()
    children: tuple["MenuEntry", ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Dispatch table checks
# ---------------------------------------------------------------------------


def ensure_exhaustive(table: Mapping[Any, Any], enum_cls: type[Enum], table_name: str) -> None:
    """Fail loudly when a dispatch table misses a member of *enum_cls*.

    Called at import time by modules that dispatch on a closed enum.

    Raises:
        InternalAssemblyError: Listing the missing members.
    """
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise InternalAssemblyError(
            f"Dispatch table {table_name} does not cover: {', '.join(missing)}"
        )
