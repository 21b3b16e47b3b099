"""Pydantic models for the error-handling policies of an app.

Every policy block is optional in input and falls back to its defaults;
presets and overrides are layered on top with
:func:`webforge.error_handling.presets.resolve_config`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from webforge.engine.project import ProjectInfo

LogLevel = Literal["debug", "info", "warn", "error"]
Severity = Literal["low", "medium", "high", "critical"]
MonitoringService = Literal["sentry", "bugsnag", "rollbar", "datadog", "custom"]
NotificationChannel = Literal["email", "slack", "discord", "webhook", "sms"]
HttpMethod = Literal["POST", "PUT"]


# ---------------------------------------------------------------------------
# Boundaries and pages
# ---------------------------------------------------------------------------


class ErrorBoundaryConfig(BaseModel):
    enabled: bool = True
    global_boundary: bool = True
    route_boundaries: bool = True
    component_boundaries: bool = False
    fallback_component: Literal["default", "custom", "minimal"] = "default"
    report_errors: bool = True
    retry_mechanism: bool = True
    max_retries: int = Field(default=3, ge=0)


class ErrorPagesConfig(BaseModel):
    custom_404: bool = True
    custom_error: bool = True
    global_error: bool = True
    maintenance: bool = False
    offline: bool = False
    styles: Literal["default", "branded", "minimal"] = "default"
    animations: bool = True
    search_suggestions: bool = True
    contact_info: bool = True
    contact_path: str = "/contact"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class LogRotation(BaseModel):
    enabled: bool = False
    max_size: str = "10MB"
    max_files: int = Field(default=5, ge=1)
    date_pattern: str = "YYYY-MM-DD"


class LogFilters(BaseModel):
    exclude_patterns: list[str] = Field(default_factory=list)
    include_patterns: list[str] = Field(default_factory=list)
    min_level: LogLevel = "error"


class LoggingConfig(BaseModel):
    enabled: bool = True
    level: LogLevel = "error"
    destinations: list[Literal["console", "file", "database", "external"]] = Field(
        default_factory=lambda: ["console"]
    )
    format: Literal["json", "text", "structured"] = "json"
    rotation: LogRotation = Field(default_factory=LogRotation)
    filters: LogFilters = Field(default_factory=LogFilters)


# ---------------------------------------------------------------------------
# Monitoring
# ---------------------------------------------------------------------------


class SentrySettings(BaseModel):
    dsn: str = ""
    environment: str = "production"
    traces_sample_rate: float = Field(default=0.1, ge=0, le=1)
    profiles_sample_rate: float = Field(default=0.1, ge=0, le=1)


class BugsnagSettings(BaseModel):
    api_key: str = ""
    release_stage: str = "production"


class RollbarSettings(BaseModel):
    access_token: str = ""
    environment: str = "production"


class DatadogSettings(BaseModel):
    client_token: str = ""
    application_id: str = ""
    site: str = "datadoghq.com"


class EndpointSettings(BaseModel):
    url: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    method: HttpMethod = "POST"


class MonitoringConfig(BaseModel):
    enabled: bool = False
    services: list[MonitoringService] = Field(default_factory=list)
    sentry: SentrySettings | None = None
    bugsnag: BugsnagSettings | None = None
    rollbar: RollbarSettings | None = None
    datadog: DatadogSettings | None = None
    custom_endpoint: EndpointSettings | None = None


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


class CircuitBreakerConfig(BaseModel):
    enabled: bool = False
    failure_threshold: int = Field(default=5, ge=1)
    reset_timeout: int = Field(default=60000, ge=0)


class RecoveryConfig(BaseModel):
    enabled: bool = True
    auto_retry: bool = False
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay: int = Field(default=1000, ge=0)
    exponential_backoff: bool = True
    max_delay: int = Field(default=30000, ge=0)
    circuit_breaker: CircuitBreakerConfig = Field(default_factory=CircuitBreakerConfig)
    fallback_strategies: list[Literal["cache", "static", "offline", "redirect"]] = Field(
        default_factory=lambda: ["cache", "static"]
    )
    graceful_degradation: bool = True


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


class Throttling(BaseModel):
    enabled: bool = True
    max_per_hour: int = Field(default=10, ge=0)
    max_per_day: int = Field(default=50, ge=0)


class SmtpSettings(BaseModel):
    host: str = ""
    port: int = 587
    secure: bool = False
    user: str = ""
    password: str = ""


class EmailSettings(BaseModel):
    smtp: SmtpSettings = Field(default_factory=SmtpSettings)
    recipients: list[str] = Field(default_factory=list)
    template: str = "default"


class SlackSettings(BaseModel):
    webhook_url: str = ""
    channel: str = "#alerts"
    username: str = "Error Bot"


class NotificationsConfig(BaseModel):
    enabled: bool = False
    channels: list[NotificationChannel] = Field(default_factory=list)
    severity: list[Severity] = Field(default_factory=lambda: ["high", "critical"])
    throttling: Throttling = Field(default_factory=Throttling)
    email: EmailSettings | None = None
    slack: SlackSettings | None = None
    webhook: EndpointSettings | None = None


# ---------------------------------------------------------------------------
# Analytics, security and environments
# ---------------------------------------------------------------------------


class ErrorGrouping(BaseModel):
    enabled: bool = True
    group_by: list[Literal["message", "stack", "component", "user", "browser"]] = Field(
        default_factory=lambda: ["message", "stack"]
    )
    time_window: int = Field(default=60, ge=1)


class TrendsConfig(BaseModel):
    enabled: bool = True
    time_ranges: list[Literal["1h", "24h", "7d", "30d"]] = Field(
        default_factory=lambda: ["1h", "24h", "7d"]
    )
    metrics: list[Literal["count", "rate", "users", "sessions"]] = Field(
        default_factory=lambda: ["count", "rate"]
    )


class AnalyticsConfig(BaseModel):
    enabled: bool = False
    track_user_actions: bool = False
    track_performance: bool = False
    track_custom_events: bool = False
    session_recording: bool = False
    heatmaps: bool = False
    error_grouping: ErrorGrouping = Field(default_factory=ErrorGrouping)
    trends: TrendsConfig = Field(default_factory=TrendsConfig)


class RateLimit(BaseModel):
    enabled: bool = True
    max_reports: int = Field(default=100, ge=1)
    time_window: int = Field(default=60, ge=1)


class SecurityPolicy(BaseModel):
    sanitize_errors: bool = True
    hide_stack_traces: bool = True
    mask_sensitive_data: bool = True
    sensitive_fields: list[str] = Field(
        default_factory=lambda: ["password", "token", "key", "secret", "email"]
    )
    allowed_domains: list[str] = Field(default_factory=list)
    csrf_protection: bool = True
    rate_limit: RateLimit = Field(default_factory=RateLimit)


class DevelopmentSettings(BaseModel):
    show_detailed_errors: bool = True
    enable_source_maps: bool = True
    hot_reload: bool = True
    debug_mode: bool = True


class StagingSettings(BaseModel):
    show_detailed_errors: bool = True
    enable_source_maps: bool = True
    mock_external_services: bool = False


class ProductionSettings(BaseModel):
    show_detailed_errors: bool = False
    enable_source_maps: bool = False
    compression_enabled: bool = True
    cache_errors: bool = True


class EnvironmentConfig(BaseModel):
    development: DevelopmentSettings = Field(default_factory=DevelopmentSettings)
    staging: StagingSettings = Field(default_factory=StagingSettings)
    production: ProductionSettings = Field(default_factory=ProductionSettings)


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


class ErrorHandlingConfig(BaseModel):
    """Resolved error-handling policies for one app."""

    project: ProjectInfo = Field(default_factory=ProjectInfo)
    error_boundaries: ErrorBoundaryConfig = Field(default_factory=ErrorBoundaryConfig)
    error_pages: ErrorPagesConfig = Field(default_factory=ErrorPagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    recovery: RecoveryConfig = Field(default_factory=RecoveryConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    security: SecurityPolicy = Field(default_factory=SecurityPolicy)
    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)


class ErrorHandlingOptions(BaseModel):
    extensions: list[str] = Field(default_factory=list)
    include_tests: bool = True
    include_docs: bool = True
