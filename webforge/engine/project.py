"""Project metadata shared by every generator family."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PackageManager = Literal["npm", "yarn", "pnpm", "bun"]


class ProjectInfo(BaseModel):
    """Target project metadata, used for instruction strings and headers."""

    name: str = Field(default="my-app", min_length=1)
    description: str = Field(default="")
    version: str = Field(default="0.1.0")
    package_manager: PackageManager = Field(default="pnpm")


def install_command(
    package_manager: str,
    packages: dict[str, str],
    dev: bool = False,
) -> str:
    """Shell command installing *packages* with the given package manager.

    Packages are listed in manifest order as ``name@version``.
    """
    specs = " ".join(f"{name}@{version}" for name, version in packages.items())
    if package_manager == "npm":
        flag = " --save-dev" if dev else ""
        return f"npm install{flag} {specs}"
    flag = " -D" if dev else ""
    return f"{package_manager} add{flag} {specs}"


def exec_command(package_manager: str, command: str) -> str:
    """Run a package binary (``npx``-style) with the given package manager."""
    runners = {"npm": "npx", "yarn": "yarn dlx", "pnpm": "pnpm dlx", "bun": "bunx"}
    return f"{runners.get(package_manager, 'npx')} {command}"
