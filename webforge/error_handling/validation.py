"""Cross-field checks for error-handling configuration and options."""

from __future__ import annotations

from webforge.engine.registry import ExtensionRegistry
from webforge.engine.validation import IssueCollector, duplicates
from webforge.error_handling.models import ErrorHandlingConfig, ErrorHandlingOptions
from webforge.errors import ValidationIssue

# service -> (settings attribute, required fields)
_SERVICE_SETTINGS = {
    "sentry": ("sentry", ("dsn",)),
    "bugsnag": ("bugsnag", ("api_key",)),
    "rollbar": ("rollbar", ("access_token",)),
    "datadog": ("datadog", ("client_token", "application_id")),
    "custom": ("custom_endpoint", ("url",)),
}


def _check_monitoring(config: ErrorHandlingConfig, issues: IssueCollector) -> None:
    monitoring = config.monitoring
    if not monitoring.enabled:
        return
    if not monitoring.services:
        issues.add("monitoring.services", "at least one service required")
    for dup in duplicates(monitoring.services):
        issues.add("monitoring.services", f"duplicate service '{dup}'")
    for service in dict.fromkeys(monitoring.services):
        attr, required = _SERVICE_SETTINGS[service]
        settings = getattr(monitoring, attr)
        for name in required:
            if settings is None or not getattr(settings, name):
                issues.add(f"monitoring.{attr}.{name}", f"required when '{service}' is selected")


def _check_notifications(config: ErrorHandlingConfig, issues: IssueCollector) -> None:
    notifications = config.notifications
    if not notifications.enabled:
        return
    if not notifications.channels:
        issues.add("notifications.channels", "at least one channel required")
    if not notifications.severity:
        issues.add("notifications.severity", "at least one severity required")
    for dup in duplicates(notifications.channels):
        issues.add("notifications.channels", f"duplicate channel '{dup}'")
    channels = set(notifications.channels)
    if "email" in channels:
        email = notifications.email
        if email is None or not email.smtp.host:
            issues.add("notifications.email.smtp.host", "required when 'email' is selected")
        if email is None or not email.recipients:
            issues.add("notifications.email.recipients", "at least one recipient required")
    if "slack" in channels and (notifications.slack is None or not notifications.slack.webhook_url):
        issues.add("notifications.slack.webhook_url", "required when 'slack' is selected")
    if "webhook" in channels and (notifications.webhook is None or not notifications.webhook.url):
        issues.add("notifications.webhook.url", "required when 'webhook' is selected")


def validate_error_handling_config(
    config: ErrorHandlingConfig,
    options: ErrorHandlingOptions | None = None,
    registry: ExtensionRegistry | None = None,
) -> list[ValidationIssue]:
    """Every issue with *config* and the requested extensions."""
    issues = IssueCollector()

    _check_monitoring(config, issues)
    _check_notifications(config, issues)

    if config.logging.enabled and not config.logging.destinations:
        issues.add("logging.destinations", "at least one destination required")

    recovery = config.recovery
    if recovery.enabled and recovery.exponential_backoff and recovery.max_delay < recovery.retry_delay:
        issues.add("recovery.max_delay", "must not be less than recovery.retry_delay")

    if options is not None:
        for dup in duplicates(options.extensions):
            issues.add("extensions", f"duplicate extension '{dup}'")
        for index, name in enumerate(options.extensions):
            if registry is None or name not in registry:
                available = ", ".join(registry.names()) if registry is not None else ""
                issues.add(f"extensions.{index}", f"unknown extension '{name}' (available: {available or 'none'})")

    return issues.issues
