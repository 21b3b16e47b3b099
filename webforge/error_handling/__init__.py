"""Error-handling generator family: boundaries, pages, logging, monitoring and recovery."""

from webforge.error_handling.extensions import BUILTIN_EXTENSIONS, TemplateExtension, default_registry
from webforge.error_handling.generator import ErrorHandlingGenerator
from webforge.error_handling.models import ErrorHandlingConfig, ErrorHandlingOptions
from webforge.error_handling.presets import PRESETS, preset_config, resolve_config

__all__ = [
    "BUILTIN_EXTENSIONS",
    "ErrorHandlingConfig",
    "ErrorHandlingGenerator",
    "ErrorHandlingOptions",
    "PRESETS",
    "TemplateExtension",
    "default_registry",
    "preset_config",
    "resolve_config",
]
