"""Pure predicates over navigation entries, layout and feature flags."""

from __future__ import annotations

from collections.abc import Iterable

from webforge.navigation.models import (
    NavigationConfig,
    NavigationGroup,
    NavigationItem,
    NavigationOptions,
)

PADDING_CLASSES = {
    "none": "",
    "sm": "p-2 md:p-4",
    "md": "p-4 md:p-6",
    "lg": "p-6 md:p-8 lg:p-10",
}


def _grants(required: list[str], roles: Iterable[str]) -> bool:
    if not required:
        return True
    held = set(roles)
    return any(role in held for role in required)


def can_access_item(item: NavigationItem, roles: Iterable[str]) -> bool:
    """An item without roles is visible to everyone; otherwise any matching role grants access."""
    return _grants(item.roles, roles)


def can_access_group(group: NavigationGroup, roles: Iterable[str]) -> bool:
    """Same rule as :func:`can_access_item`, applied to a group."""
    return _grants(group.roles, roles)


def requires_role_check(item: NavigationItem) -> bool:
    return bool(item.roles) or any(requires_role_check(child) for child in item.children)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def padding_class(config: NavigationConfig) -> str:
    return PADDING_CLASSES[config.layout.padding]


def layout_route(config: NavigationConfig) -> tuple[str, str]:
    """Path of the section layout for the configured layout type, with its component name."""
    layout_type = config.layout.type
    if layout_type == "header":
        return "app/(main)/layout.tsx", "MainLayout"
    if layout_type == "hybrid":
        return "app/(app)/layout.tsx", "AppLayout"
    return "app/(dashboard)/layout.tsx", "DashboardLayout"


def uses_sidebar(config: NavigationConfig) -> bool:
    return config.layout.type != "header" and config.has_feature("sidebar")


# ---------------------------------------------------------------------------
# Feature flags
# ---------------------------------------------------------------------------


def wants_middleware(config: NavigationConfig, options: NavigationOptions) -> bool:
    return options.include_middleware and config.security.middleware.enabled


def wants_command_palette(config: NavigationConfig, options: NavigationOptions) -> bool:
    return options.include_command_palette and config.has_feature("command-palette")


def wants_authorization(config: NavigationConfig) -> bool:
    return config.security.authorization


def wants_admin_layout(config: NavigationConfig) -> bool:
    return config.security.authorization and bool(config.security.middleware.admin_routes)
