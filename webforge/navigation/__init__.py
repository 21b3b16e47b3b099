"""Navigation generator family: layouts, menus, breadcrumbs and route protection."""

from webforge.navigation.generator import NavigationGenerator
from webforge.navigation.models import (
    NavigationConfig,
    NavigationGroup,
    NavigationItem,
    NavigationOptions,
    NavigationStructure,
)
from webforge.navigation.presets import PRESETS, preset_config

__all__ = [
    "PRESETS",
    "NavigationConfig",
    "NavigationGenerator",
    "NavigationGroup",
    "NavigationItem",
    "NavigationOptions",
    "NavigationStructure",
    "preset_config",
]
