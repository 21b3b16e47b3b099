"""Operations over the navigation tree.

These mirror the helpers emitted into ``src/lib/navigation-utils.ts`` so
that the generator can reason about the same structure the generated app
sees at runtime (public navigation, breadcrumbs for known routes).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from webforge.navigation.classifiers import can_access_group, can_access_item
from webforge.navigation.models import NavigationGroup, NavigationItem, NavigationStructure, Role
from webforge.utils import title_case


@dataclass(frozen=True)
class Breadcrumb:
    label: str
    href: str
    icon: str | None = None


# ---------------------------------------------------------------------------
# Role filtering
# ---------------------------------------------------------------------------


def filter_items_by_roles(items: list[NavigationItem], roles: Iterable[str]) -> list[NavigationItem]:
    """Drop every item the roles cannot access, recursively.

    Returns new items; the input is left untouched.  Filtering twice with
    the same roles gives the same result as filtering once.
    """
    held = frozenset(roles)
    return [
        item.model_copy(update={"children": filter_items_by_roles(item.children, held)})
        for item in items
        if can_access_item(item, held)
    ]


def filter_groups_by_roles(groups: list[NavigationGroup], roles: Iterable[str]) -> list[NavigationGroup]:
    """Filter groups and their items; groups left without items are dropped."""
    held = frozenset(roles)
    filtered: list[NavigationGroup] = []
    for group in groups:
        if not can_access_group(group, held):
            continue
        items = filter_items_by_roles(group.items, held)
        if items:
            filtered.append(group.model_copy(update={"items": items}))
    return filtered


def filter_structure_by_roles(structure: NavigationStructure, roles: Iterable[str]) -> NavigationStructure:
    held = frozenset(roles)
    return structure.model_copy(
        update={
            "items": filter_items_by_roles(structure.items, held),
            "groups": filter_groups_by_roles(structure.groups, held),
        }
    )


# ---------------------------------------------------------------------------
# Traversal and lookup
# ---------------------------------------------------------------------------


def iter_items(items: list[NavigationItem]) -> Iterator[NavigationItem]:
    """Depth-first, pre-order walk over *items* and their descendants."""
    for item in items:
        yield item
        yield from iter_items(item.children)


def flatten_items(items: list[NavigationItem]) -> list[NavigationItem]:
    return list(iter_items(items))


def structure_items(structure: NavigationStructure) -> list[NavigationItem]:
    """Every item of the structure, top-level items first, then groups, then footer."""
    flat = flatten_items(structure.items)
    for group in structure.groups:
        flat.extend(flatten_items(group.items))
    if structure.footer is not None:
        flat.extend(flatten_items(structure.footer.items))
    return flat


def find_item(items: list[NavigationItem], item_id: str) -> NavigationItem | None:
    for item in iter_items(items):
        if item.id == item_id:
            return item
    return None


def find_item_by_href(items: list[NavigationItem], href: str) -> NavigationItem | None:
    for item in iter_items(items):
        if item.href == href:
            return item
    return None


def is_path_active(current_path: str, item_path: str) -> bool:
    """``/`` only matches itself; other paths also match their sub-paths."""
    if item_path == "/":
        return current_path == "/"
    return current_path == item_path or current_path.startswith(item_path.rstrip("/") + "/")


def breadcrumbs_for(path: str, items: list[NavigationItem], home_label: str = "Home") -> list[Breadcrumb]:
    """Breadcrumb trail for *path*: home, then one crumb per path segment.

    Segments that match a navigation href use the item's label; others are
    title-cased from the segment text.
    """
    crumbs = [Breadcrumb(label=home_label, href="/", icon="Home")]
    segments = [segment for segment in path.split("/") if segment]
    for index in range(len(segments)):
        href = "/" + "/".join(segments[: index + 1])
        item = find_item_by_href(items, href)
        if item is not None:
            crumbs.append(Breadcrumb(label=item.label, href=href, icon=item.icon))
        else:
            crumbs.append(Breadcrumb(label=title_case(segments[index]), href=href))
    return crumbs


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


def effective_permissions(role_names: Iterable[str], roles: list[Role]) -> list[str]:
    """Permissions granted by *role_names*, following ``inherits`` transitively.

    Unknown role names contribute nothing.  Order follows first appearance.
    """
    by_name = {role.name: role for role in roles}
    granted: list[str] = []
    visited: set[str] = set()
    stack = list(reversed(list(role_names)))
    while stack:
        name = stack.pop()
        if name in visited or name not in by_name:
            continue
        visited.add(name)
        role = by_name[name]
        for permission in role.permissions:
            if permission not in granted:
                granted.append(permission)
        stack.extend(reversed(role.inherits))
    return granted


def inheritance_cycles(roles: list[Role]) -> list[list[str]]:
    """Each distinct inheritance cycle, as the list of role names along it."""
    by_name = {role.name: role for role in roles}
    cycles: list[list[str]] = []
    seen_keys: set[frozenset[str]] = set()

    def visit(name: str, trail: list[str]) -> None:
        if name in trail:
            cycle = trail[trail.index(name):]
            key = frozenset(cycle)
            if key not in seen_keys:
                seen_keys.add(key)
                cycles.append(cycle + [name])
            return
        role = by_name.get(name)
        if role is None:
            return
        for parent in role.inherits:
            visit(parent, trail + [name])

    for role in roles:
        visit(role.name, [])
    return cycles
