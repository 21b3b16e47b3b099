"""Shared pytest fixtures for the webforge test suite.

Provides reusable fixtures for:
- A shared template renderer
- Sample CRUD, navigation and error-handling configurations
- Configuration files on disk (JSON and YAML)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from webforge.crud.models import CrudConfig
from webforge.engine.templates import TemplateRenderer
from webforge.error_handling.models import ErrorHandlingConfig
from webforge.navigation.models import NavigationConfig


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    """One renderer over the packaged templates, shared across the session."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------

@pytest.fixture
def invoice_data() -> dict[str, Any]:
    """Raw mapping for an ``Invoice`` entity with a representative field mix."""
    return {
        "project": {"name": "billing", "package_manager": "pnpm"},
        "entity": {
            "name": "Invoice",
            "fields": [
                {
                    "name": "number",
                    "type": "string",
                    "required": True,
                    "searchable": True,
                    "sortable": True,
                    "validation": {"min_length": 3, "max_length": 20},
                },
                {
                    "name": "amount",
                    "type": "number",
                    "required": True,
                    "sortable": True,
                    "filterable": True,
                    "validation": {"min": 0},
                },
                {
                    "name": "status",
                    "type": "enum",
                    "enum_values": ["draft", "sent", "paid"],
                    "filterable": True,
                },
                {"name": "customerEmail", "type": "email", "searchable": True},
                {"name": "dueDate", "type": "date", "filterable": True},
                {"name": "notes", "type": "text", "display": {"show_in_table": False}},
            ],
        },
        "features": ["pagination", "sorting", "filtering", "search", "bulk-actions", "export"],
    }


@pytest.fixture
def invoice_config(invoice_data: dict[str, Any]) -> CrudConfig:
    return CrudConfig.model_validate(invoice_data)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

@pytest.fixture
def navigation_data() -> dict[str, Any]:
    """Navigation with public items, an admin-only item and a nested settings tree."""
    return {
        "project": {"name": "console"},
        "features": ["breadcrumbs", "sidebar", "mobile-menu", "user-menu", "multi-level-menu"],
        "navigation": {
            "items": [
                {"id": "dashboard", "label": "Dashboard", "href": "/dashboard", "icon": "LayoutDashboard"},
                {
                    "id": "settings",
                    "label": "Settings",
                    "href": "/settings",
                    "icon": "Settings",
                    "children": [
                        {"id": "profile", "label": "Profile", "href": "/settings/profile"},
                        {
                            "id": "billing",
                            "label": "Billing",
                            "href": "/settings/billing",
                            "roles": ["admin"],
                        },
                    ],
                },
                {"id": "admin", "label": "Admin", "href": "/admin", "icon": "Shield", "roles": ["admin"]},
            ],
            "groups": [
                {
                    "id": "reports",
                    "label": "Reports",
                    "items": [{"id": "sales", "label": "Sales", "href": "/reports/sales", "icon": "BarChart"}],
                },
            ],
        },
    }


@pytest.fixture
def navigation_config(navigation_data: dict[str, Any]) -> NavigationConfig:
    return NavigationConfig.model_validate(navigation_data)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

@pytest.fixture
def error_handling_config() -> ErrorHandlingConfig:
    """Defaults plus Sentry monitoring and Slack notifications, credentials included."""
    return ErrorHandlingConfig.model_validate(
        {
            "project": {"name": "shop"},
            "monitoring": {
                "enabled": True,
                "services": ["sentry"],
                "sentry": {"dsn": "https://public@sentry.example.com/1"},
            },
            "notifications": {
                "enabled": True,
                "channels": ["slack"],
                "slack": {"webhook_url": "https://hooks.slack.example.com/T000/B000/XXX"},
            },
        }
    )


# ---------------------------------------------------------------------------
# Files on disk
# ---------------------------------------------------------------------------

@pytest.fixture
def write_config(tmp_path: Path):
    """Factory writing a mapping to ``tmp_path`` as JSON or YAML, by suffix."""

    def _write(name: str, data: dict[str, Any]) -> Path:
        path = tmp_path / name
        if path.suffix in (".yaml", ".yml"):
            path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
