"""Fragment builders for navigation entries."""

from __future__ import annotations

from dataclasses import dataclass

from webforge.engine.fragments import MenuEntry
from webforge.navigation.models import NavigationGroup, NavigationItem


@dataclass(frozen=True)
class MenuGroup:
    id: str
    label: str
    collapsible: bool
    default_open: bool
    roles: tuple[str, ...]
    entries: tuple[MenuEntry, ...]


def build_menu_entry(item: NavigationItem, nested: bool = True) -> MenuEntry:
    """Menu entry for *item*; children are dropped when *nested* is ``False``."""
    children = tuple(build_menu_entry(child, nested) for child in item.children) if nested else ()
    return MenuEntry(
        id=item.id,
        label=item.label,
        href=item.href,
        icon=item.icon,
        badge=item.badge,
        description=item.description,
        external=item.external,
        disabled=item.disabled,
        separator=item.separator,
        roles=tuple(item.roles),
        permissions=tuple(item.permissions),
        children=children,
    )


def build_menu_group(group: NavigationGroup, nested: bool = True) -> MenuGroup:
    return MenuGroup(
        id=group.id,
        label=group.label,
        collapsible=group.collapsible,
        default_open=group.default_open,
        roles=tuple(group.roles),
        entries=tuple(build_menu_entry(item, nested) for item in group.items),
    )


def collect_icons(entries: tuple[MenuEntry, ...] | list[MenuEntry]) -> list[str]:
    """Distinct icon names used by *entries* and their children, in first-use order."""
    icons: list[str] = []

    def visit(entry: MenuEntry) -> None:
        if entry.icon and entry.icon not in icons:
            icons.append(entry.icon)
        for child in entry.children:
            visit(child)

    for entry in entries:
        visit(entry)
    return icons
