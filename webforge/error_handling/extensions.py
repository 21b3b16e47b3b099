"""Built-in error-handling extensions.

Each extension contributes a fixed list of files rendered from
``templates/error_handling/extensions/``.  Nothing is registered at import
time; :func:`default_registry` builds a fresh registry holding all of
them, and callers may register their own alongside.
"""

from __future__ import annotations

from typing import Any

from webforge.engine.artifacts import Artifact
from webforge.engine.registry import Extension, ExtensionRegistry
from webforge.engine.templates import TemplateRenderer
from webforge.error_handling.models import ErrorHandlingConfig

_TEMPLATE_ROOT = "error_handling/extensions"


class TemplateExtension(Extension[ErrorHandlingConfig]):
    """An extension whose artifacts are rendered from Jinja templates.

    ``files`` lists ``(template, path, description)`` triples, emitted in
    that order.
    """

    files: tuple[tuple[str, str, str], ...] = ()

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def context(self, config: ErrorHandlingConfig) -> dict[str, Any]:
        return {"config": config, "project": config.project, "extension": self}

    def generate(self, config: ErrorHandlingConfig) -> list[Artifact]:
        ctx = self.context(config)
        return [
            Artifact(
                path=path,
                content=self.renderer.render(f"{_TEMPLATE_ROOT}/{template}", ctx),
                description=description,
            )
            for template, path, description in self.files
        ]


class SentryAdvancedExtension(TemplateExtension):
    name = "sentry-advanced"
    description = "Sentry integration with performance monitoring and profiling"
    dependencies = {"@sentry/nextjs": "^7.81.1", "@sentry/profiling-node": "^1.2.6"}
    files = (
        ("sentry-advanced.ts.j2", "src/lib/sentry-advanced.ts", "Sentry helpers"),
        ("sentry.client.config.ts.j2", "sentry.client.config.ts", "Sentry browser setup"),
        ("sentry.server.config.ts.j2", "sentry.server.config.ts", "Sentry server setup"),
        ("sentry.edge.config.ts.j2", "sentry.edge.config.ts", "Sentry edge runtime setup"),
    )

    def context(self, config: ErrorHandlingConfig) -> dict[str, Any]:
        ctx = super().context(config)
        sentry = config.monitoring.sentry
        ctx["traces_sample_rate"] = sentry.traces_sample_rate if sentry else 0.1
        ctx["profiles_sample_rate"] = sentry.profiles_sample_rate if sentry else 0.1
        ctx["environment"] = sentry.environment if sentry else "production"
        return ctx


class LogRocketExtension(TemplateExtension):
    name = "logrocket"
    description = "LogRocket session replay"
    dependencies = {"logrocket": "^7.0.0", "logrocket-react": "^6.0.3"}
    files = (
        ("logrocket-integration.ts.j2", "src/lib/logrocket-integration.ts", "LogRocket setup"),
        ("logrocket-provider.tsx.j2", "src/components/logrocket-provider.tsx", "LogRocket provider"),
    )


class DatadogRumExtension(TemplateExtension):
    name = "datadog-rum"
    description = "Datadog Real User Monitoring"
    dependencies = {"@datadog/browser-rum": "^5.4.0"}
    files = (("datadog-rum.ts.j2", "src/lib/datadog-rum.ts", "Datadog RUM setup"),)

    def context(self, config: ErrorHandlingConfig) -> dict[str, Any]:
        ctx = super().context(config)
        datadog = config.monitoring.datadog
        ctx["site"] = datadog.site if datadog else "datadoghq.com"
        return ctx


class AiErrorAnalysisExtension(TemplateExtension):
    name = "ai-error-analysis"
    description = "LLM-assisted error triage and rule-based classification"
    dependencies = {"openai": "^4.20.1"}
    files = (
        ("ai-error-analysis.ts.j2", "src/lib/ai-error-analysis.ts", "Error analysis client"),
        ("error-classification.ts.j2", "src/lib/error-classification.ts", "Error classification rules"),
    )


class AdvancedNotificationsExtension(TemplateExtension):
    name = "advanced-notifications"
    description = "Multi-channel error notifications with throttling"
    dependencies = {"nodemailer": "^6.9.7", "@slack/webhook": "^7.0.2"}
    dev_dependencies = {"@types/nodemailer": "^6.4.14"}
    files = (
        ("notification-manager.ts.j2", "src/lib/notification-manager.ts", "Notification routing"),
        ("notification-channels.ts.j2", "src/lib/notification-channels.ts", "Notification channels"),
    )


class PerformanceMonitoringExtension(TemplateExtension):
    name = "performance-monitoring"
    description = "Web vitals and render timing"
    dependencies = {"web-vitals": "^3.5.0"}
    files = (
        ("performance-monitor.ts.j2", "src/lib/performance-monitor.ts", "Performance monitor"),
        ("use-performance.ts.j2", "src/hooks/use-performance.ts", "Performance hooks"),
    )


BUILTIN_EXTENSIONS: tuple[type[TemplateExtension], ...] = (
    SentryAdvancedExtension,
    LogRocketExtension,
    DatadogRumExtension,
    AiErrorAnalysisExtension,
    AdvancedNotificationsExtension,
    PerformanceMonitoringExtension,
)


def default_registry(renderer: TemplateRenderer | None = None) -> ExtensionRegistry[ErrorHandlingConfig]:
    """A new registry holding one instance of every built-in extension."""
    shared = renderer or TemplateRenderer()
    return ExtensionRegistry([cls(shared) for cls in BUILTIN_EXTENSIONS])
