"""Cross-field checks for :class:`~webforge.navigation.models.NavigationConfig`."""

from __future__ import annotations

import re
from collections.abc import Iterator

from webforge.engine.validation import IssueCollector, duplicates
from webforge.errors import ValidationIssue
from webforge.navigation.models import NavigationConfig, NavigationItem
from webforge.navigation.tree import inheritance_cycles

ICON_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9]*$")


def _walk(items: list[NavigationItem], path: str) -> Iterator[tuple[str, NavigationItem]]:
    for index, item in enumerate(items):
        item_path = f"{path}.{index}"
        yield item_path, item
        yield from _walk(item.children, f"{item_path}.children")


def _items(config: NavigationConfig) -> Iterator[tuple[str, NavigationItem]]:
    nav = config.navigation
    yield from _walk(nav.items, "navigation.items")
    for g_index, group in enumerate(nav.groups):
        yield from _walk(group.items, f"navigation.groups.{g_index}.items")
    if nav.footer is not None:
        yield from _walk(nav.footer.items, "navigation.footer.items")


def _entries(config: NavigationConfig) -> Iterator[tuple[str, str, list[str]]]:
    """``(path, id, roles)`` for every item and group in the tree."""
    nav = config.navigation
    for path, item in _walk(nav.items, "navigation.items"):
        yield path, item.id, item.roles
    for g_index, group in enumerate(nav.groups):
        group_path = f"navigation.groups.{g_index}"
        yield group_path, group.id, group.roles
        for path, item in _walk(group.items, f"{group_path}.items"):
            yield path, item.id, item.roles
    if nav.footer is not None:
        for path, item in _walk(nav.footer.items, "navigation.footer.items"):
            yield path, item.id, item.roles


def validate_navigation_config(config: NavigationConfig) -> list[ValidationIssue]:
    issues = IssueCollector()
    security = config.security
    entries = list(_entries(config))

    first_seen: dict[str, str] = {}
    for path, entry_id, _roles in entries:
        if entry_id in first_seen:
            issues.add(f"{path}.id", f"duplicate id '{entry_id}' (first used at {first_seen[entry_id]})")
        else:
            first_seen[entry_id] = path

    role_names = security.role_names()
    for dup in duplicates(role_names):
        issues.add("security.roles", f"duplicate role '{dup}'")
    permission_names = [permission.name for permission in security.permissions]
    for dup in duplicates(permission_names):
        issues.add("security.permissions", f"duplicate permission '{dup}'")

    if security.authorization:
        known_roles = set(role_names)
        for path, _entry_id, roles in entries:
            for role in roles:
                if role not in known_roles:
                    issues.add(f"{path}.roles", f"unknown role '{role}'")
        for role in security.middleware.admin_roles:
            if role not in known_roles:
                issues.add("security.middleware.admin_roles", f"unknown role '{role}'")

    known_permissions = set(permission_names)
    known_roles = set(role_names)
    for index, role in enumerate(security.roles):
        for permission in role.permissions:
            if permission not in known_permissions:
                issues.add(f"security.roles.{index}.permissions", f"unknown permission '{permission}'")
        for parent in role.inherits:
            if parent not in known_roles:
                issues.add(f"security.roles.{index}.inherits", f"unknown role '{parent}'")
    for cycle in inheritance_cycles(security.roles):
        issues.add("security.roles", "inheritance cycle: " + " -> ".join(cycle))

    # Icons are emitted as named lucide-react imports.
    for path, item in _items(config):
        if item.icon is not None and not ICON_PATTERN.match(item.icon):
            issues.add(f"{path}.icon", f"icon '{item.icon}' is not a component name")

    for key in ("public_routes", "protected_routes", "admin_routes"):
        for index, route in enumerate(getattr(security.middleware, key)):
            if not route.startswith("/"):
                issues.add(f"security.middleware.{key}.{index}", f"route '{route}' must start with '/'")

    return issues.issues
