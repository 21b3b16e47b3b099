"""Command-line entry point.

Examples::

    webforge crud invoice.yaml -o ./app
    webforge navigation nav.json --dry-run
    webforge navigation nav.yaml --preset admin
    webforge errors errors.yaml --preset enterprise --extension sentry-advanced
    webforge extensions
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Any

from webforge import __version__
from webforge.config import Settings
from webforge.crud import CrudGenerator
from webforge.engine.artifacts import GenerationResult
from webforge.engine.generator import ArtifactSetBuilder
from webforge.error_handling import PRESETS, ErrorHandlingGenerator, default_registry
from webforge.errors import ValidationIssue, WebforgeError
from webforge.loader import load_crud_config, load_error_handling_config, load_navigation_config
from webforge.logging_config import configure_logging, get_logger
from webforge.navigation import PRESETS as NAVIGATION_PRESETS
from webforge.navigation import NavigationGenerator
from webforge.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)
from webforge.writer import ArtifactWriter

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("config", help="Path or http(s) URL of a JSON/YAML configuration file")
    common.add_argument("--output", "-o", default=None, help="Output directory (default: ./generated)")
    common.add_argument("--overwrite", action="store_true", default=None, help="Replace existing files")
    common.add_argument("--dry-run", action="store_true", default=None, help="List files without writing them")
    common.add_argument(
        "--package-manager",
        choices=["npm", "yarn", "pnpm", "bun"],
        default=None,
        help="Package manager used in setup instructions",
    )
    common.add_argument("--no-tests", action="store_true", help="Skip generated test files")
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log verbosity (default: WARNING)",
    )

    parser = argparse.ArgumentParser(
        prog="webforge",
        description="Generate Next.js/TypeScript source files from declarative configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="family", required=True)

    crud = sub.add_parser("crud", parents=[common], help="CRUD types, schemas, actions and table UI")
    crud.add_argument("--no-api", action="store_true", help="Skip API route handlers")
    crud.add_argument("--no-bulk", action="store_true", help="Skip bulk actions")

    nav = sub.add_parser("navigation", parents=[common], help="Layouts, menus and route protection")
    nav.add_argument(
        "--preset", choices=list(NAVIGATION_PRESETS), default=None, help="Preset applied before the file"
    )
    nav.add_argument("--no-middleware", action="store_true", help="Skip middleware.ts")
    nav.add_argument("--no-error-pages", action="store_true", help="Skip not-found/error/loading pages")

    errors = sub.add_parser("errors", parents=[common], help="Error boundaries, pages, logging and monitoring")
    errors.add_argument("--preset", choices=list(PRESETS), default=None, help="Preset applied before the file")
    errors.add_argument(
        "--extension",
        action="append",
        default=[],
        metavar="NAME",
        help="Built-in extension to include (repeatable)",
    )
    errors.add_argument("--no-docs", action="store_true", help="Skip docs/error-handling.md")

    sub.add_parser("extensions", help="List the built-in error-handling extensions")
    return parser


def _settings(args: argparse.Namespace) -> Settings:
    return Settings.from_env().merged(
        output_dir=args.output,
        overwrite=args.overwrite,
        dry_run=args.dry_run,
        log_level=args.log_level,
        package_manager=args.package_manager,
    )


def _with_package_manager(config: Any, settings: Settings) -> Any:
    if settings.package_manager is None:
        return config
    project = config.project.model_copy(update={"package_manager": settings.package_manager})
    return config.model_copy(update={"project": project})


def _generator(args: argparse.Namespace, settings: Settings) -> tuple[ArtifactSetBuilder, dict[str, Any]]:
    """Load the configuration and pick the generator and options for *args*."""
    if args.family == "crud":
        config = _with_package_manager(load_crud_config(args.config), settings)
        options = {
            "include_api": not args.no_api,
            "include_bulk_actions": not args.no_bulk,
            "include_tests": not args.no_tests,
        }
        return CrudGenerator(config), options
    if args.family == "navigation":
        config = _with_package_manager(load_navigation_config(args.config, args.preset), settings)
        options = {
            "include_middleware": not args.no_middleware,
            "include_error_pages": not args.no_error_pages,
            "include_tests": not args.no_tests,
        }
        return NavigationGenerator(config), options
    config = _with_package_manager(load_error_handling_config(args.config, args.preset), settings)
    options = {
        "extensions": list(args.extension),
        "include_tests": not args.no_tests,
        "include_docs": not args.no_docs,
    }
    return ErrorHandlingGenerator(config, registry=default_registry()), options


def _report_issues(issues: list[ValidationIssue]) -> None:
    print_error(f"Configuration rejected ({len(issues)} issue(s)):")
    for issue in issues:
        console.print(f"  {issue.path}: {issue.message}", markup=False, highlight=False)


def _list_extensions() -> int:
    registry = default_registry()
    print_summary_table(
        {ext["name"]: ext["description"] for ext in registry.describe()},
        title="Error-handling extensions",
    )
    return 0


def run(args: argparse.Namespace) -> int:
    """Generate and write one artifact set; return the process exit code."""
    try:
        settings = _settings(args)
        configure_logging(settings.log_level)
        generator, options = _generator(args, settings)
    except WebforgeError as exc:
        _report_issues(exc.as_issues())
        return 1

    result: GenerationResult = generator.generate(options)
    if not result.success or result.artifact_set is None:
        _report_issues(result.errors)
        return 1

    artifact_set = result.artifact_set
    report = ArtifactWriter.from_settings(settings).write(artifact_set)

    print_header(f"webforge {args.family}")
    for path in report.written:
        console.print(f"  {path}", markup=False, highlight=False)
    for path in report.skipped:
        print_warning(f"  skipped (exists): {path}")

    print_summary_table(
        {
            "Output": str(settings.output_dir),
            "Files": str(len(artifact_set)),
            "Written": str(len(report.written)),
            "Skipped": str(len(report.skipped)),
            "Dependencies": str(len(artifact_set.dependencies)),
            "Dev dependencies": str(len(artifact_set.dev_dependencies)),
        },
        title="Dry run" if settings.dry_run else "Generated",
    )

    if artifact_set.instructions:
        console.print("[bold]Next steps[/bold]")
        for index, step in enumerate(artifact_set.instructions, start=1):
            console.print(f"  {index}. {step}", markup=False, highlight=False)
        console.print()

    print_success("Done." if not settings.dry_run else "Dry run complete; nothing written.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.family == "extensions":
        return _list_extensions()
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
