"""Pydantic models for navigation structure, layout and access control."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from webforge.engine.project import ProjectInfo

NavigationFeature = Literal[
    "breadcrumbs",
    "sidebar",
    "mobile-menu",
    "command-palette",
    "navigation-history",
    "favorites",
    "search",
    "notifications",
    "user-menu",
    "theme-switcher",
    "multi-level-menu",
    "collapsible-sidebar",
]


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class NavigationItem(BaseModel):
    """A link or container in the navigation tree.

    ``roles`` empty (or absent) means the item is visible to everyone.
    """

    id: str = Field(min_length=1)
    label: str
    href: str | None = None
    icon: str | None = None
    badge: str | None = None
    description: str | None = None
    children: list["NavigationItem"] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    external: bool = False
    disabled: bool = False
    separator: bool = False


class NavigationGroup(BaseModel):
    id: str = Field(min_length=1)
    label: str
    items: list[NavigationItem] = Field(default_factory=list)
    collapsible: bool = False
    default_open: bool = True
    roles: list[str] = Field(default_factory=list)


class FooterLink(BaseModel):
    label: str
    href: str


class NavigationFooter(BaseModel):
    items: list[NavigationItem] = Field(default_factory=list)
    copyright: str | None = None
    links: list[FooterLink] = Field(default_factory=list)


class NavigationStructure(BaseModel):
    items: list[NavigationItem] = Field(default_factory=list)
    groups: list[NavigationGroup] = Field(default_factory=list)
    footer: NavigationFooter | None = None


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------


class Role(BaseModel):
    name: str = Field(min_length=1)
    label: str = ""
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)
    inherits: list[str] = Field(default_factory=list)


class Permission(BaseModel):
    name: str = Field(min_length=1)
    label: str = ""
    description: str | None = None
    resource: str | None = None
    action: str | None = None


class MiddlewareConfig(BaseModel):
    enabled: bool = True
    public_routes: list[str] = Field(default_factory=lambda: ["/", "/login", "/signup"])
    protected_routes: list[str] = Field(default_factory=lambda: ["/dashboard"])
    admin_routes: list[str] = Field(default_factory=lambda: ["/admin"])
    admin_roles: list[str] = Field(default_factory=lambda: ["admin"])
    login_path: str = "/login"


class RedirectConfig(BaseModel):
    after_login: str = "/dashboard"
    after_logout: str = "/"
    unauthorized: str = "/unauthorized"
    not_found: str = "/404"


def _default_roles() -> list[Role]:
    return [
        Role(name="user", label="User", permissions=["read"]),
        Role(name="admin", label="Administrator", permissions=["read", "write", "delete"]),
    ]


def _default_permissions() -> list[Permission]:
    return [
        Permission(name="read", label="Read"),
        Permission(name="write", label="Write"),
        Permission(name="delete", label="Delete"),
    ]


class SecurityConfig(BaseModel):
    authentication: bool = True
    authorization: bool = True
    roles: list[Role] = Field(default_factory=_default_roles)
    permissions: list[Permission] = Field(default_factory=_default_permissions)
    middleware: MiddlewareConfig = Field(default_factory=MiddlewareConfig)
    redirects: RedirectConfig = Field(default_factory=RedirectConfig)

    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]


# ---------------------------------------------------------------------------
# Layout and styling
# ---------------------------------------------------------------------------

LayoutType = Literal["sidebar", "header", "hybrid", "dashboard"]
Padding = Literal["none", "sm", "md", "lg"]


class LayoutConfig(BaseModel):
    type: LayoutType = "sidebar"
    responsive: bool = True
    sticky_header: bool = True
    sticky_footer: bool = False
    max_width: str | None = None
    padding: Padding = "md"


class NavigationColors(BaseModel):
    primary: str = "hsl(var(--primary))"
    secondary: str = "hsl(var(--secondary))"
    accent: str = "hsl(var(--accent))"
    background: str = "hsl(var(--background))"
    foreground: str = "hsl(var(--foreground))"
    muted: str = "hsl(var(--muted))"


class NavigationStyling(BaseModel):
    theme: Literal["light", "dark", "system"] = "system"
    variant: Literal["default", "minimal", "modern", "classic"] = "default"
    sidebar_width: int = Field(default=280, ge=200, le=400)
    header_height: int = Field(default=64, ge=48, le=80)
    colors: NavigationColors = Field(default_factory=NavigationColors)
    animations: bool = True


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


class NavigationConfig(BaseModel):
    """Everything needed to generate the navigation artifacts of an app."""

    project: ProjectInfo = Field(default_factory=ProjectInfo)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    navigation: NavigationStructure = Field(default_factory=NavigationStructure)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    features: list[NavigationFeature] = Field(
        default_factory=lambda: ["breadcrumbs", "sidebar", "mobile-menu", "user-menu"]
    )
    styling: NavigationStyling = Field(default_factory=NavigationStyling)

    def has_feature(self, feature: str) -> bool:
        return feature in self.features


class NavigationOptions(BaseModel):
    include_middleware: bool = True
    include_error_pages: bool = True
    include_command_palette: bool = True
    include_tests: bool = True
