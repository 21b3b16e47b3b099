"""Ready-made navigation configurations.

Each preset is an override mapping applied to the
:class:`~webforge.navigation.models.NavigationConfig` defaults with
:func:`webforge.engine.resolve.deep_merge`, the same way error-handling
presets are resolved.  Sequences replace wholesale, so a file that lists
``navigation.groups`` replaces the preset's groups rather than extending
them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from webforge.engine.resolve import as_mapping, deep_merge
from webforge.engine.validation import parse_model
from webforge.errors import ConfigurationValidationError, ValidationIssue
from webforge.navigation.models import NavigationConfig

PRESETS: dict[str, dict[str, Any]] = {
    "dashboard": {
        "project": {"description": "Dashboard navigation"},
        "navigation": {
            "items": [],
            "groups": [
                {
                    "id": "main",
                    "label": "Main",
                    "items": [
                        {"id": "dashboard", "label": "Dashboard", "href": "/dashboard", "icon": "LayoutDashboard"},
                        {"id": "analytics", "label": "Analytics", "href": "/analytics", "icon": "BarChart3"},
                    ],
                },
                {
                    "id": "management",
                    "label": "Management",
                    "items": [
                        {"id": "users", "label": "Users", "href": "/users", "icon": "Users", "roles": ["admin"]},
                        {"id": "settings", "label": "Settings", "href": "/settings", "icon": "Settings"},
                    ],
                },
            ],
        },
        "features": ["breadcrumbs", "sidebar", "mobile-menu", "user-menu", "theme-switcher"],
    },
    "admin": {
        "project": {"description": "Admin console navigation"},
        "layout": {"type": "sidebar", "padding": "lg"},
        "navigation": {
            "items": [],
            "groups": [
                {
                    "id": "overview-group",
                    "label": "Dashboard",
                    "items": [
                        {"id": "overview", "label": "Overview", "href": "/admin", "icon": "Home"},
                        {"id": "analytics", "label": "Analytics", "href": "/admin/analytics", "icon": "TrendingUp"},
                    ],
                },
                {
                    "id": "users-group",
                    "label": "Users",
                    "items": [
                        {"id": "users-list", "label": "List", "href": "/admin/users", "icon": "Users"},
                        {"id": "roles", "label": "Roles", "href": "/admin/roles", "icon": "Shield"},
                        {"id": "permissions", "label": "Permissions", "href": "/admin/permissions", "icon": "Key"},
                    ],
                },
                {
                    "id": "system",
                    "label": "System",
                    "items": [
                        {"id": "settings", "label": "Settings", "href": "/admin/settings", "icon": "Settings"},
                        {"id": "logs", "label": "Logs", "href": "/admin/logs", "icon": "FileText"},
                        {"id": "backup", "label": "Backup", "href": "/admin/backup", "icon": "Database"},
                    ],
                },
            ],
        },
        "features": ["breadcrumbs", "sidebar", "mobile-menu", "command-palette", "user-menu", "notifications"],
        "security": {
            "authentication": True,
            "authorization": True,
            "roles": [
                {
                    "name": "admin",
                    "label": "Administrator",
                    "permissions": ["admin:read", "admin:write", "admin:delete"],
                },
                {"name": "moderator", "label": "Moderator", "permissions": ["admin:read", "admin:write"]},
            ],
            "permissions": [
                {"name": "admin:read", "label": "Admin read"},
                {"name": "admin:write", "label": "Admin write"},
                {"name": "admin:delete", "label": "Admin delete"},
            ],
            "middleware": {
                "enabled": True,
                "public_routes": ["/", "/login"],
                "protected_routes": ["/admin"],
                "admin_routes": ["/admin"],
                "admin_roles": ["admin"],
            },
            "redirects": {"after_login": "/admin"},
        },
    },
    "simple": {
        "project": {"description": "Marketing site navigation"},
        "layout": {"type": "header"},
        "navigation": {
            "items": [
                {"id": "home", "label": "Home", "href": "/", "icon": "Home"},
                {"id": "about", "label": "About", "href": "/about", "icon": "Info"},
                {"id": "contact", "label": "Contact", "href": "/contact", "icon": "Mail"},
            ],
            "groups": [],
        },
        "features": ["mobile-menu", "theme-switcher"],
        "security": {
            "authentication": False,
            "authorization": False,
            "roles": [],
            "permissions": [],
            "middleware": {
                "enabled": False,
                "public_routes": [],
                "protected_routes": [],
                "admin_routes": [],
                "admin_roles": [],
            },
            "redirects": {"after_login": "/", "unauthorized": "/"},
        },
    },
}


def preset_config(
    name: str,
    overrides: BaseModel | Mapping[str, Any] | None = None,
) -> NavigationConfig:
    """The named preset applied to the defaults, then *overrides* on top.

    Raises:
        ConfigurationValidationError: *name* is not a preset, or the merged
            data is not a valid configuration.
    """
    if name not in PRESETS:
        available = ", ".join(PRESETS)
        raise ConfigurationValidationError(
            [ValidationIssue("preset", f"unknown preset '{name}' (available: {available})")]
        )
    base = deep_merge(NavigationConfig().model_dump(mode="python"), PRESETS[name])
    return parse_model(NavigationConfig, deep_merge(base, as_mapping(overrides)))
