"""Navigation artifact generation.

:class:`NavigationGenerator` turns one :class:`NavigationConfig` into the
navigation types and schemas, the navigation config module, layouts,
navigation components, route middleware, error pages and tests of an app.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from webforge.engine.artifacts import Artifact, ArtifactSet
from webforge.engine.generator import ArtifactSetBuilder
from webforge.engine.project import exec_command, install_command
from webforge.errors import ValidationIssue
from webforge.logging_config import get_logger
from webforge.navigation import classifiers
from webforge.navigation.fragments import build_menu_entry, build_menu_group, collect_icons
from webforge.navigation.models import NavigationConfig, NavigationOptions
from webforge.navigation.tree import (
    breadcrumbs_for,
    effective_permissions,
    filter_structure_by_roles,
    structure_items,
)
from webforge.navigation.validation import validate_navigation_config
from webforge.utils import sanitize_name

logger = get_logger(__name__)

BASE_DEPENDENCIES = {
    "lucide-react": "^0.294.0",
    "zod": "^3.22.4",
    "clsx": "^2.0.0",
    "tailwind-merge": "^2.1.0",
}
AUTH_DEPENDENCIES = {"next-auth": "^4.24.5"}
THEME_DEPENDENCIES = {"next-themes": "^0.2.1"}
TEST_DEV_DEPENDENCIES = {"vitest": "^1.0.4"}

HOME_LABEL = "Home"
_PLAIN_PATH = re.compile(r"^/(?:[a-z]+(?:-[a-z]+)*/?)*$")

_FEATURE_FLAGS = {
    "breadcrumbs": "breadcrumbs",
    "mobile_menu": "mobile-menu",
    "history": "navigation-history",
    "favorites": "favorites",
    "search": "search",
    "notifications": "notifications",
    "user_menu": "user-menu",
    "theme_switcher": "theme-switcher",
    "multi_level": "multi-level-menu",
    "collapsible_sidebar": "collapsible-sidebar",
}


def _route_dir(route: str) -> str | None:
    """App-router directory for a plain route like ``/admin``; ``None`` for dynamic or root routes."""
    segments = [segment for segment in route.strip("/").split("/") if segment]
    if not segments or any(not segment.replace("-", "").replace("_", "").isalnum() for segment in segments):
        return None
    return "app/" + "/".join(segments)


class NavigationGenerator(ArtifactSetBuilder[NavigationConfig, NavigationOptions]):
    """Generates navigation, layout and access-control artifacts."""

    family = "navigation"
    options_model = NavigationOptions

    def validate(self, options: NavigationOptions) -> list[ValidationIssue]:
        return validate_navigation_config(self.config)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def _flags(self, options: NavigationOptions) -> dict[str, bool]:
        config = self.config
        flags = {key: config.has_feature(feature) for key, feature in _FEATURE_FLAGS.items()}
        flags.update(
            sidebar=classifiers.uses_sidebar(config),
            command_palette=classifiers.wants_command_palette(config, options),
            middleware=classifiers.wants_middleware(config, options),
            authentication=config.security.authentication,
            authorization=classifiers.wants_authorization(config),
            admin_layout=classifiers.wants_admin_layout(config) and self._admin_dir() is not None,
            error_pages=options.include_error_pages,
            tests=options.include_tests,
        )
        return flags

    def _admin_dir(self) -> str | None:
        routes = self.config.security.middleware.admin_routes
        return _route_dir(routes[0]) if routes else None

    def _sample_path(self) -> str | None:
        """Deepest linked href in the tree, used to exercise breadcrumbs in the emitted tests."""
        hrefs = [
            item.href
            for item in structure_items(self.config.navigation)
            if item.href and _PLAIN_PATH.match(item.href)
        ]
        if not hrefs:
            return None
        return max(hrefs, key=lambda href: href.rstrip("/").count("/"))

    def context(self, options: NavigationOptions) -> dict[str, Any]:
        config = self.config
        nav = config.navigation
        security = config.security
        flags = self._flags(options)
        nested = flags["multi_level"]

        items = [build_menu_entry(item, nested) for item in nav.items]
        groups = [build_menu_group(group, nested) for group in nav.groups]
        footer_items = [build_menu_entry(item, nested) for item in nav.footer.items] if nav.footer else []
        public = filter_structure_by_roles(nav, [])

        every_entry = [*items, *(entry for group in groups for entry in group.entries), *footer_items]
        all_items = structure_items(nav)
        layout_path, layout_component = classifiers.layout_route(config)
        sample_path = self._sample_path()
        sample_breadcrumbs = (
            [crumb.label for crumb in breadcrumbs_for(sample_path, all_items, HOME_LABEL)]
            if sample_path
            else []
        )
        role_names = security.role_names()
        route_labels: dict[str, str] = {}
        for item in all_items:
            if item.href and item.href.startswith("/"):
                route_labels.setdefault(item.href, item.label)

        return {
            "config": config,
            "project": config.project,
            "flags": flags,
            "items": items,
            "groups": groups,
            "footer": nav.footer,
            "footer_items": footer_items,
            "footer_links": [link.model_dump() for link in nav.footer.links] if nav.footer else [],
            "public_items": [build_menu_entry(item, nested) for item in public.items],
            "public_groups": [build_menu_group(group, nested) for group in public.groups],
            "icons": collect_icons(every_entry),
            "route_labels": route_labels,
            "role_names": role_names,
            "permission_names": [permission.name for permission in security.permissions],
            "roles": [role.model_dump(exclude_none=True) for role in security.roles],
            "role_permissions": {name: effective_permissions([name], security.roles) for name in role_names},
            "middleware": security.middleware,
            "redirects": security.redirects,
            "padding_class": classifiers.padding_class(config),
            "layout_path": layout_path,
            "layout_component": layout_component,
            "home_label": HOME_LABEL,
            "storage_prefix": f"{sanitize_name(config.project.name)}:navigation:",
            "first_item": nav.items[0] if nav.items else None,
            "sample_path": sample_path,
            "sample_breadcrumbs": sample_breadcrumbs,
        }

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def assemble(self, options: NavigationOptions) -> Iterator[Artifact]:
        ctx = self.context(options)
        flags = ctx["flags"]
        logger.debug(
            "Navigation plan: %d item(s), %d group(s), layout %s",
            len(ctx["items"]), len(ctx["groups"]), ctx["layout_path"],
        )

        # 1. Shared types and schemas
        yield self.render("navigation/types.ts.j2", "shared/types/navigation.ts", ctx,
                          "Navigation types")
        yield self.render("navigation/hook-types.ts.j2", "shared/types/navigation-hooks.ts", ctx,
                          "Navigation hook types")
        yield self.render("navigation/schema.ts.j2", "shared/validation/navigation.ts", ctx,
                          "Navigation Zod schemas")
        if flags["authorization"]:
            yield self.render("navigation/permission-types.ts.j2",
                              "shared/types/navigation-permissions.ts", ctx,
                              "Role and permission types")
            yield self.render("navigation/permission-schema.ts.j2",
                              "shared/validation/navigation-permissions.ts", ctx,
                              "Role and permission schemas")

        # 2. Navigation config
        yield self.render("navigation/config.ts.j2", "src/config/navigation.ts", ctx,
                          "Navigation structure and layout settings")

        # 3. Layouts
        yield self.render("navigation/root-layout.tsx.j2", "app/layout.tsx", ctx, "Root layout")
        yield self.render("navigation/section-layout.tsx.j2", ctx["layout_path"], ctx,
                          f"{ctx['layout_component']} with navigation chrome")
        if flags["admin_layout"]:
            yield self.render("navigation/admin-layout.tsx.j2", f"{self._admin_dir()}/layout.tsx", ctx,
                              "Admin section guard")

        # 4. Components
        if flags["sidebar"]:
            yield self.render("navigation/app-sidebar.tsx.j2", "src/components/navigation/app-sidebar.tsx",
                              ctx, "Sidebar navigation")
        yield self.render("navigation/header.tsx.j2", "src/components/navigation/header.tsx", ctx,
                          "Header")
        if flags["breadcrumbs"]:
            yield self.render("navigation/breadcrumbs.tsx.j2", "src/components/navigation/breadcrumbs.tsx",
                              ctx, "Breadcrumb trail")
        if flags["mobile_menu"]:
            yield self.render("navigation/mobile-menu.tsx.j2", "src/components/navigation/mobile-menu.tsx",
                              ctx, "Mobile navigation drawer")
        if flags["user_menu"]:
            yield self.render("navigation/user-menu.tsx.j2", "src/components/navigation/user-menu.tsx",
                              ctx, "User account menu")
        if flags["theme_switcher"]:
            yield self.render("navigation/theme-toggle.tsx.j2", "src/components/navigation/theme-toggle.tsx",
                              ctx, "Light/dark theme toggle")
        if flags["command_palette"]:
            yield self.render("navigation/command-palette.tsx.j2",
                              "src/components/navigation/command-palette.tsx", ctx,
                              "Command palette (Cmd/Ctrl+K)")

        # 5. Route protection
        if flags["middleware"]:
            yield self.render("navigation/middleware.ts.j2", "middleware.ts", ctx, "Route middleware")
            yield self.render("navigation/permissions.ts.j2", "src/lib/permissions.ts", ctx,
                              "Route access rules")

        # 6. Error pages
        if flags["error_pages"]:
            yield self.render("navigation/not-found.tsx.j2", "app/not-found.tsx", ctx, "404 page")
            yield self.render("navigation/error.tsx.j2", "app/error.tsx", ctx, "Route error page")
            unauthorized_dir = _route_dir(ctx["redirects"].unauthorized)
            if unauthorized_dir is not None:
                yield self.render("navigation/unauthorized.tsx.j2", f"{unauthorized_dir}/page.tsx", ctx,
                                  "Access denied page")
            yield self.render("navigation/loading.tsx.j2", "app/loading.tsx", ctx, "Loading state")

        # 7. Hooks and utilities
        yield self.render("navigation/use-navigation.ts.j2", "src/hooks/navigation/use-navigation.ts",
                          ctx, "Navigation state hook")
        yield self.render("navigation/navigation-utils.ts.j2", "src/lib/navigation-utils.ts", ctx,
                          "Navigation tree helpers")
        if flags["authorization"]:
            yield self.render("navigation/navigation-permissions.ts.j2",
                              "src/lib/navigation-permissions.ts", ctx,
                              "Role-based navigation filtering")

        # 8. Tests
        if flags["tests"]:
            yield self.render("navigation/navigation.test.ts.j2",
                              "src/__tests__/navigation/navigation.test.ts", ctx,
                              "Navigation tests")

    # ------------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------------

    def dependencies(self, options: NavigationOptions) -> dict[str, str]:
        deps = dict(BASE_DEPENDENCIES)
        if self.config.security.authentication:
            deps.update(AUTH_DEPENDENCIES)
        if self.config.has_feature("theme-switcher"):
            deps.update(THEME_DEPENDENCIES)
        return deps

    def dev_dependencies(self, options: NavigationOptions) -> dict[str, str]:
        return dict(TEST_DEV_DEPENDENCIES) if options.include_tests else {}

    def instructions(self, options: NavigationOptions, artifact_set: ArtifactSet) -> list[str]:
        pm = self.config.project.package_manager
        steps = [f"Install dependencies: {install_command(pm, artifact_set.dependencies)}"]
        if artifact_set.dev_dependencies:
            steps.append(
                f"Install dev dependencies: {install_command(pm, artifact_set.dev_dependencies, dev=True)}"
            )
        if self.config.has_feature("user-menu"):
            steps.append("Add shadcn/ui components: " + exec_command(pm, "shadcn@latest add dropdown-menu"))
        steps.append("Export a cn() class-name helper from src/lib/utils.ts")
        if self.config.security.authentication:
            steps.append(
                "Configure NextAuth and export getCurrentUser() from src/lib/auth.ts and "
                "useCurrentUser() from src/hooks/use-current-user.ts; include the user's roles in the JWT"
            )
        if "middleware.ts" in artifact_set:
            steps.append("Review the route lists in src/lib/permissions.ts before deploying")
        steps.append(f"Place pages under {self._layout_dir()} to use the generated layout")
        return steps

    def _layout_dir(self) -> str:
        path, _component = classifiers.layout_route(self.config)
        return path.rsplit("/", 1)[0] + "/"
