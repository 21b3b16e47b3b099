"""Read generator configuration files into the family config models.

Sources are local JSON or YAML files, or ``http(s)://`` URLs serving
either format.  The format is chosen by file suffix; anything that is
not ``.yaml``/``.yml`` is parsed as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import yaml

from webforge.crud.models import CrudConfig
from webforge.engine.validation import parse_model
from webforge.error_handling.models import ErrorHandlingConfig
from webforge.error_handling.presets import preset_config, resolve_config
from webforge.errors import ConfigSourceError
from webforge.logging_config import get_logger
from webforge.navigation.models import NavigationConfig
from webforge.navigation.presets import preset_config as navigation_preset_config
from webforge.utils import load_json, load_yaml

logger = get_logger(__name__)

FETCH_TIMEOUT = httpx.Timeout(10.0, connect=3.0)
_YAML_SUFFIXES = (".yaml", ".yml")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _parse_text(text: str, source: str) -> dict[str, Any]:
    if source.lower().endswith(_YAML_SUFFIXES):
        data = yaml.safe_load(text)
        if data is None:
            data = {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ConfigSourceError(source, "expected a mapping at the top level")
    return data


def _fetch(url: str) -> dict[str, Any]:
    logger.debug("Fetching configuration from %s", url)
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise ConfigSourceError(url, str(exc) or type(exc).__name__) from exc
    # Strip the query string so the suffix check sees the path.
    return _parse_text(response.text, url.split("?", 1)[0])


def read_config_data(source: str | Path) -> dict[str, Any]:
    """Return the raw mapping stored at *source*.

    Raises:
        ConfigSourceError: The source is missing, unreachable or not a
            JSON/YAML mapping.
    """
    text_source = str(source)
    try:
        if _is_url(text_source):
            return _fetch(text_source)
        path = Path(source)
        if not path.is_file():
            raise ConfigSourceError(text_source, "file not found")
        if path.suffix.lower() in _YAML_SUFFIXES:
            return load_yaml(path)
        return load_json(path)
    except (json.JSONDecodeError, yaml.YAMLError, ValueError) as exc:
        raise ConfigSourceError(text_source, str(exc)) from exc


def load_crud_config(source: str | Path) -> CrudConfig:
    """Load and validate a CRUD configuration."""
    return parse_model(CrudConfig, read_config_data(source))


def load_navigation_config(source: str | Path, preset: str | None = None) -> NavigationConfig:
    """Load and validate a navigation configuration.

    As with error handling, *preset* (or a top-level ``preset`` key in the
    file) names a base configuration that the file's keys override.
    """
    data = dict(read_config_data(source))
    file_preset = data.pop("preset", None)
    name = preset or file_preset
    if name:
        logger.debug("Applying navigation preset %s", name)
        return navigation_preset_config(name, data)
    return parse_model(NavigationConfig, data)


def load_error_handling_config(source: str | Path, preset: str | None = None) -> ErrorHandlingConfig:
    """Load an error-handling configuration, applying a preset first.

    The preset comes from *preset* or, failing that, a top-level
    ``preset`` key in the file.  The file's other keys override the
    preset.
    """
    data = dict(read_config_data(source))
    file_preset = data.pop("preset", None)
    name = preset or file_preset
    if name:
        logger.debug("Applying error-handling preset %s", name)
        return preset_config(name, data)
    return resolve_config(None, data)
