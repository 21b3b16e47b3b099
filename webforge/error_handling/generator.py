"""Error-handling artifact generation.

:class:`ErrorHandlingGenerator` turns a resolved
:class:`ErrorHandlingConfig` into error boundaries, error pages, logging,
monitoring, recovery and notification utilities, plus the artifacts of
any requested extensions.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from webforge.engine.artifacts import Artifact, ArtifactSet
from webforge.engine.generator import ArtifactSetBuilder
from webforge.engine.project import exec_command, install_command
from webforge.engine.registry import ExtensionRegistry
from webforge.engine.templates import TemplateRenderer
from webforge.error_handling.models import ErrorHandlingConfig, ErrorHandlingOptions
from webforge.error_handling.validation import validate_error_handling_config
from webforge.errors import ValidationIssue
from webforge.logging_config import get_logger
from webforge.utils import camel_case

logger = get_logger(__name__)

BASE_DEPENDENCIES = {"lucide-react": "^0.294.0"}
SERVICE_DEPENDENCIES = {
    "sentry": {"@sentry/nextjs": "^7.81.1"},
    "bugsnag": {"@bugsnag/js": "^7.22.2"},
    "rollbar": {"rollbar": "^2.26.2"},
    "datadog": {"@datadog/browser-logs": "^5.4.0"},
    "custom": {},
}
EMAIL_DEPENDENCIES = {"nodemailer": "^6.9.7"}
TEST_DEV_DEPENDENCIES = {
    "vitest": "^1.0.4",
    "@testing-library/react": "^14.1.2",
    "jsdom": "^23.0.1",
}

# Settings that must never be written into generated source.
_SECRET_FIELDS: tuple[tuple[str, ...], ...] = (
    ("monitoring", "sentry", "dsn"),
    ("monitoring", "bugsnag", "api_key"),
    ("monitoring", "rollbar", "access_token"),
    ("monitoring", "datadog", "client_token"),
    ("monitoring", "datadog", "application_id"),
    ("monitoring", "custom_endpoint", "url"),
    ("monitoring", "custom_endpoint", "headers"),
    ("notifications", "email", "smtp", "user"),
    ("notifications", "email", "smtp", "password"),
    ("notifications", "slack", "webhook_url"),
    ("notifications", "webhook", "url"),
    ("notifications", "webhook", "headers"),
)

_SERVICE_ENV = {
    "sentry": [("SENTRY_DSN", "Sentry DSN (server)"), ("NEXT_PUBLIC_SENTRY_DSN", "Sentry DSN (browser)")],
    "bugsnag": [("NEXT_PUBLIC_BUGSNAG_API_KEY", "Bugsnag API key")],
    "rollbar": [("NEXT_PUBLIC_ROLLBAR_ACCESS_TOKEN", "Rollbar client access token")],
    "datadog": [("NEXT_PUBLIC_DATADOG_CLIENT_TOKEN", "Datadog client token")],
    "custom": [("ERROR_REPORT_ENDPOINT", "URL receiving error reports")],
}
_CHANNEL_ENV = {
    "email": [
        ("SMTP_HOST", "SMTP server host"),
        ("SMTP_PORT", "SMTP server port"),
        ("SMTP_USER", "SMTP user"),
        ("SMTP_PASSWORD", "SMTP password"),
        ("SMTP_FROM", "Sender address for alerts"),
    ],
    "slack": [("SLACK_WEBHOOK_URL", "Slack incoming webhook URL")],
    "discord": [("DISCORD_WEBHOOK_URL", "Discord webhook URL")],
    "webhook": [("ERROR_WEBHOOK_URL", "Webhook URL receiving alerts")],
    "sms": [],
}
_EXTENSION_ENV = {
    "logrocket": [("NEXT_PUBLIC_LOGROCKET_APP_ID", "LogRocket application id")],
    "datadog-rum": [
        ("NEXT_PUBLIC_DATADOG_APPLICATION_ID", "Datadog RUM application id"),
        ("NEXT_PUBLIC_DATADOG_CLIENT_TOKEN", "Datadog client token"),
    ],
    "ai-error-analysis": [("OPENAI_API_KEY", "API key used for error analysis")],
}


@dataclass(frozen=True)
class BoundaryLevel:
    slug: str
    component: str
    fallback: str


BOUNDARY_LEVELS = {
    "global_boundary": BoundaryLevel("global", "GlobalErrorBoundary", "GlobalErrorFallback"),
    "route_boundaries": BoundaryLevel("route", "RouteErrorBoundary", "RouteErrorFallback"),
    "component_boundaries": BoundaryLevel("component", "ComponentErrorBoundary", "ComponentErrorFallback"),
}

# page flag -> (template, path)
ERROR_PAGES = {
    "custom_404": ("error_handling/not-found.tsx.j2", "src/app/not-found.tsx"),
    "global_error": ("error_handling/global-error.tsx.j2", "src/app/global-error.tsx"),
    "custom_error": ("error_handling/error-page.tsx.j2", "src/app/error.tsx"),
    "maintenance": ("error_handling/maintenance.tsx.j2", "src/app/maintenance/page.tsx"),
    "offline": ("error_handling/offline.tsx.j2", "src/app/offline/page.tsx"),
}


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {camel_case(key): _camelize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_camelize(item) for item in value]
    return value


def public_settings(config: ErrorHandlingConfig) -> dict[str, Any]:
    """The configuration as emitted into generated code: no credentials, camelCase keys."""
    data = config.model_dump(mode="json", exclude={"project"})
    for path in _SECRET_FIELDS:
        node = data
        for key in path[:-1]:
            node = node.get(key) if isinstance(node, dict) else None
            if node is None:
                break
        if isinstance(node, dict):
            node.pop(path[-1], None)
    return _camelize(data)


class ErrorHandlingGenerator(ArtifactSetBuilder[ErrorHandlingConfig, ErrorHandlingOptions]):
    """Generates error-handling artifacts and those of requested extensions."""

    family = "error_handling"
    options_model = ErrorHandlingOptions

    def __init__(
        self,
        config: ErrorHandlingConfig,
        renderer: TemplateRenderer | None = None,
        registry: ExtensionRegistry[ErrorHandlingConfig] | None = None,
    ) -> None:
        super().__init__(config, renderer)
        self.registry = registry if registry is not None else ExtensionRegistry()

    def validate(self, options: ErrorHandlingOptions) -> list[ValidationIssue]:
        return validate_error_handling_config(self.config, options, self.registry)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def levels(self) -> list[BoundaryLevel]:
        boundaries = self.config.error_boundaries
        if not boundaries.enabled:
            return []
        return [level for flag, level in BOUNDARY_LEVELS.items() if getattr(boundaries, flag)]

    def pages(self) -> list[tuple[str, str]]:
        pages = self.config.error_pages
        return [entry for flag, entry in ERROR_PAGES.items() if getattr(pages, flag)]

    def env_vars(self, options: ErrorHandlingOptions) -> list[dict[str, str]]:
        config = self.config
        pairs: list[tuple[str, str]] = []
        if config.monitoring.enabled:
            for service in config.monitoring.services:
                pairs.extend(_SERVICE_ENV[service])
        if config.logging.enabled and "external" in config.logging.destinations:
            pairs.extend([("LOG_ENDPOINT", "URL receiving log entries"), ("LOG_API_KEY", "Bearer token for LOG_ENDPOINT")])
        if config.notifications.enabled:
            for channel in config.notifications.channels:
                pairs.extend(_CHANNEL_ENV[channel])
        for name in options.extensions:
            pairs.extend(_EXTENSION_ENV.get(name, []))
        seen: dict[str, str] = {}
        for name, description in pairs:
            seen.setdefault(name, description)
        return [{"name": name, "description": description} for name, description in seen.items()]

    def flags(self, options: ErrorHandlingOptions) -> dict[str, bool]:
        config = self.config
        return {
            "boundaries": bool(self.levels()),
            "logging": config.logging.enabled,
            "monitoring": config.monitoring.enabled,
            "recovery": config.recovery.enabled,
            "notifications": config.notifications.enabled,
            "tests": options.include_tests,
            "docs": options.include_docs,
        }

    def context(self, options: ErrorHandlingOptions) -> dict[str, Any]:
        return {
            "config": self.config,
            "project": self.config.project,
            "flags": self.flags(options),
            "levels": self.levels(),
            "pages": [path for _template, path in self.pages()],
            "settings": public_settings(self.config),
            "env_vars": self.env_vars(options),
            "extensions": [self.registry.get(name) for name in options.extensions],
        }

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def assemble(self, options: ErrorHandlingOptions) -> Iterator[Artifact]:
        ctx = self.context(options)
        flags = ctx["flags"]
        logger.debug(
            "Error-handling plan: %d boundary level(s), %d page(s), %d extension(s)",
            len(ctx["levels"]), len(ctx["pages"]), len(options.extensions),
        )

        # 1. Boundaries and their fallbacks
        for level in ctx["levels"]:
            level_ctx = {**ctx, "level": level}
            base = f"src/components/error-boundary/{level.slug}-error"
            yield self.render("error_handling/boundary.tsx.j2", f"{base}-boundary.tsx", level_ctx,
                              f"{level.component}")
            yield self.render("error_handling/fallback.tsx.j2", f"{base}-fallback.tsx", level_ctx,
                              f"{level.fallback}")

        # 2. Pages
        for template, path in self.pages():
            yield self.render(template, path, ctx, "Error page")

        # 3. Libraries
        yield self.render("error_handling/error-utils.ts.j2", "src/lib/error-utils.ts", ctx,
                          "Error ids, sanitising and classification")
        if flags["logging"]:
            yield self.render("error_handling/error-logger.ts.j2", "src/lib/error-logger.ts", ctx,
                              "Structured error logger")
        if flags["monitoring"]:
            yield self.render("error_handling/error-reporter.ts.j2", "src/lib/error-reporter.ts", ctx,
                              "Monitoring service reporter")
        if flags["recovery"]:
            yield self.render("error_handling/error-recovery.ts.j2", "src/lib/error-recovery.ts", ctx,
                              "Retry and circuit breaker")
        if flags["notifications"]:
            yield self.render("error_handling/error-notifier.ts.j2", "src/lib/error-notifier.ts", ctx,
                              "Error alerts")
            yield self.render("error_handling/notifications-route.ts.j2",
                              "src/app/api/error-notifications/route.ts", ctx,
                              "Alert delivery endpoint")

        # 4. Hooks, types and settings
        yield self.render("error_handling/use-error-handler.ts.j2", "src/hooks/use-error-handler.ts", ctx,
                          "Error handling hooks")
        yield self.render("error_handling/types.ts.j2", "src/types/error-handling.ts", ctx,
                          "Error handling types")
        yield self.render("error_handling/config.ts.j2", "src/config/error-handling.ts", ctx,
                          "Error handling settings")
        if ctx["env_vars"]:
            yield self.render("error_handling/env.example.j2", ".env.example", ctx,
                              "Environment variables")

        # 5. Tests and docs
        if flags["tests"]:
            if ctx["levels"]:
                yield self.render("error_handling/error-boundary.test.tsx.j2",
                                  "src/__tests__/error-handling/error-boundary.test.tsx",
                                  {**ctx, "level": ctx["levels"][0]}, "Error boundary tests")
            if flags["recovery"]:
                yield self.render("error_handling/error-recovery.test.ts.j2",
                                  "src/__tests__/error-handling/error-recovery.test.ts", ctx,
                                  "Recovery tests")
        if flags["docs"]:
            yield self.render("error_handling/docs.md.j2", "docs/error-handling.md", ctx,
                              "Error handling guide")

        # 6. Extensions, in requested order
        for extension in ctx["extensions"]:
            artifacts = extension.generate(self.config)
            logger.debug("Extension %s contributed %d artifact(s)", extension.name, len(artifacts))
            yield from artifacts

    # ------------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------------

    def dependencies(self, options: ErrorHandlingOptions) -> dict[str, str]:
        config = self.config
        deps = dict(BASE_DEPENDENCIES)
        if config.monitoring.enabled:
            for service in config.monitoring.services:
                deps.update(SERVICE_DEPENDENCIES[service])
        if config.notifications.enabled and "email" in config.notifications.channels:
            deps.update(EMAIL_DEPENDENCIES)
        for name in options.extensions:
            for package, version in self.registry.get(name).dependencies.items():
                deps.setdefault(package, version)
        return deps

    def dev_dependencies(self, options: ErrorHandlingOptions) -> dict[str, str]:
        deps = dict(TEST_DEV_DEPENDENCIES) if options.include_tests else {}
        for name in options.extensions:
            for package, version in self.registry.get(name).dev_dependencies.items():
                deps.setdefault(package, version)
        return deps

    def instructions(self, options: ErrorHandlingOptions, artifact_set: ArtifactSet) -> list[str]:
        pm = self.config.project.package_manager
        steps = [f"Install dependencies: {install_command(pm, artifact_set.dependencies)}"]
        if artifact_set.dev_dependencies:
            steps.append(
                f"Install dev dependencies: {install_command(pm, artifact_set.dev_dependencies, dev=True)}"
            )
        steps.append("Add shadcn/ui components: " + exec_command(pm, "shadcn@latest add button"))
        levels = self.levels()
        if levels:
            steps.append(f"Wrap your root layout with <{levels[0].component}> from src/components/error-boundary")
        if ".env.example" in artifact_set:
            steps.append("Copy .env.example to .env.local and fill in the service credentials")
        if self.config.logging.enabled and "database" in self.config.logging.destinations:
            steps.append("Add an 'errorLog' model (level, message, payload) to your Prisma schema")
        if "sentry-advanced" in options.extensions:
            steps.append("Wrap next.config.js with withSentryConfig from @sentry/nextjs")
        return steps
