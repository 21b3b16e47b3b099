"""Presets and explicit resolution of error-handling configuration.

A preset is an override mapping applied to the defaults.  Resolution
follows :func:`webforge.engine.resolve.deep_merge`: overrides win key by
key, nested mappings merge, sequences are replaced and ``None`` is
ignored.  Inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from webforge.engine.resolve import as_mapping, deep_merge
from webforge.engine.validation import parse_model
from webforge.error_handling.models import ErrorHandlingConfig
from webforge.errors import ConfigurationValidationError, ValidationIssue

PRESETS: dict[str, dict[str, Any]] = {
    "basic": {
        "notifications": {
            "severity": ["critical"],
            "throttling": {"max_per_hour": 5, "max_per_day": 20},
        },
    },
    "standard": {},
    "enterprise": {
        "error_boundaries": {"component_boundaries": True, "fallback_component": "custom"},
        "logging": {
            "level": "info",
            "destinations": ["console", "file", "external"],
            "format": "structured",
            "rotation": {"enabled": True, "max_size": "50MB", "max_files": 10, "date_pattern": "YYYY-MM-DD-HH"},
            "filters": {"exclude_patterns": ["health-check", "metrics"], "min_level": "info"},
        },
        "monitoring": {"enabled": True, "services": ["sentry"]},
        "notifications": {
            "enabled": True,
            "channels": ["email", "slack"],
            "severity": ["medium", "high", "critical"],
            "throttling": {"max_per_hour": 20, "max_per_day": 100},
        },
        "analytics": {
            "enabled": True,
            "track_user_actions": True,
            "track_performance": True,
            "track_custom_events": True,
            "error_grouping": {"group_by": ["message", "stack", "component", "user"], "time_window": 30},
            "trends": {"time_ranges": ["1h", "24h", "7d", "30d"], "metrics": ["count", "rate", "users", "sessions"]},
        },
        "recovery": {
            "auto_retry": True,
            "retry_attempts": 5,
            "retry_delay": 500,
            "circuit_breaker": {"enabled": True, "failure_threshold": 3, "reset_timeout": 30000},
            "fallback_strategies": ["cache", "static", "offline"],
        },
    },
}


def resolve_config(
    base: ErrorHandlingConfig | Mapping[str, Any] | None = None,
    overrides: BaseModel | Mapping[str, Any] | None = None,
) -> ErrorHandlingConfig:
    """Deep-merge *overrides* into *base* (the defaults when omitted).

    Raises:
        ConfigurationValidationError: The merged data is not a valid
            configuration.
    """
    if base is None:
        base_data: dict[str, Any] = ErrorHandlingConfig().model_dump(mode="python")
    elif isinstance(base, BaseModel):
        base_data = base.model_dump(mode="python")
    else:
        base_data = parse_model(ErrorHandlingConfig, base).model_dump(mode="python")
    return parse_model(ErrorHandlingConfig, deep_merge(base_data, as_mapping(overrides)))


def preset_config(
    name: str,
    overrides: BaseModel | Mapping[str, Any] | None = None,
) -> ErrorHandlingConfig:
    """The named preset applied to the defaults, then *overrides* on top."""
    if name not in PRESETS:
        available = ", ".join(PRESETS)
        raise ConfigurationValidationError(
            [ValidationIssue("preset", f"unknown preset '{name}' (available: {available})")]
        )
    return resolve_config(resolve_config(None, PRESETS[name]), overrides)
