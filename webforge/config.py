"""webforge runtime settings.

Settings that govern how generated artifacts are written and reported.
They do not influence generated content; that is driven entirely by the
family configuration files.  Pydantic v2 models validate values at
construction time and serialise to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from webforge.engine.project import PackageManager
from webforge.engine.validation import parse_model

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip().lower() in _TRUTHY


class Settings(BaseModel):
    """Settings for a CLI run.

    Instances are created once by the CLI entry point (defaults, then
    environment, then command-line flags) and handed to the writer.
    """

    output_dir: Path = Field(default=Path("./generated"))
    overwrite: bool = Field(default=False, description="Replace files that already exist")
    dry_run: bool = Field(default=False, description="Report paths without writing anything")
    log_level: LogLevel = Field(default="WARNING")
    package_manager: PackageManager | None = Field(
        default=None,
        description="Overrides project.package_manager in setup instructions",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return the written path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            WEBFORGE_OUTPUT_DIR, WEBFORGE_OVERWRITE, WEBFORGE_DRY_RUN,
            WEBFORGE_LOG_LEVEL, WEBFORGE_PACKAGE_MANAGER.

        Raises:
            ConfigurationValidationError: A variable holds a value the
                matching field does not accept.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("WEBFORGE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["WEBFORGE_OUTPUT_DIR"])
        overwrite = _env_flag("WEBFORGE_OVERWRITE")
        if overwrite is not None:
            kwargs["overwrite"] = overwrite
        dry_run = _env_flag("WEBFORGE_DRY_RUN")
        if dry_run is not None:
            kwargs["dry_run"] = dry_run
        if os.environ.get("WEBFORGE_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["WEBFORGE_LOG_LEVEL"].upper()
        if os.environ.get("WEBFORGE_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["WEBFORGE_PACKAGE_MANAGER"].lower()
        return parse_model(cls, kwargs)

    def merged(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-``None`` override applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=updates)
