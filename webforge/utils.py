"""Shared utility functions for webforge.

Provides naming helpers used by every generator family (slugs, Pascal and
camel case identifiers, display labels), TypeScript literal escaping,
JSON/YAML file loading, and the Rich console helpers used by the CLI.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[-_\s]+")


def split_words(value: str) -> list[str]:
    """Split ``someThing``, ``some_thing`` or ``some-thing`` into words."""
    return [part for part in _WORD_BOUNDARY.split(value.strip()) if part]


def sanitize_name(name: str) -> str:
    """Sanitize a name for use as a directory or file name.

    Converts to lowercase, replaces non-alphanumeric characters (except
    hyphens) with hyphens, collapses consecutive hyphens, and strips
    leading/trailing hyphens.  CamelCase boundaries become hyphens.

    Examples::

        sanitize_name("InvoiceLine") -> "invoice-line"
        sanitize_name("  User Profile ") -> "user-profile"
    """
    result = "-".join(split_words(name)).lower()
    result = re.sub(r"[^a-z0-9-]", "-", result)
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


def pascal_case(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    return "".join(word[:1].upper() + word[1:] for word in split_words(value))


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``SomeThing`` to ``someThing``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return "_".join(word.lower() for word in split_words(value))


def title_case(value: str) -> str:
    """Human label for an identifier: ``dueDate`` -> ``Due Date``."""
    return " ".join(word[:1].upper() + word[1:] for word in split_words(value))


# ---------------------------------------------------------------------------
# Literal escaping
# ---------------------------------------------------------------------------


def ts_literal(value: Any, indent: int | None = None) -> str:
    """Serialise *value* as a JavaScript/TypeScript literal.

    JSON is a subset of JavaScript expression syntax, so quoting and
    escaping are delegated to :func:`json.dumps`.  ``</`` is additionally
    escaped so the literal is safe inside inline scripts.
    """
    text = json.dumps(value, ensure_ascii=False, indent=indent)
    return text.replace("</", "<\\/")


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at the top level")
    return data


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML file.

    An empty document yields an empty mapping.
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, color: str = "bright_green") -> None:
    """Print a full-width rule announcing a generation run."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
