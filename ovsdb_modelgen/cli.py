"""
Command-line interface for model generation.

Usage: ovsdb-modelgen [options] SCHEMA
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen.core.config import ConfigError, ConfigManager, ModelGenConfig
from .codegen.core.generator import GenerationResult
from .codegen.languages.go import generate_package
from .logging_config import configure_logging, get_logger
from .utils import SchemaLoaderError, load_schema

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ovsdb-modelgen",
        description="Generate Go data models from an OVSDB database schema",
    )

    parser.add_argument("schema", nargs="?", help="OVSDB schema file (.ovsschema)")
    parser.add_argument("--url", help="Fetch the schema from a URL instead")

    parser.add_argument(
        "-p",
        "--package",
        dest="package_name",
        metavar="NAME",
        help="Go package name (default: ovsmodel)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Directory for generated files (default: current directory)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Print the generated code instead of writing files",
    )
    parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for generation"
    )

    parser.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: $OVSDB_MODELGEN_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the generator from the command line.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if not args.schema and not args.url:
        console.print("[red]✗[/red] Input source required (SCHEMA or --url)")
        return 1

    try:
        config = _build_config(args)
        source, schema = load_schema(args.schema, args.url)
    except (CLIError, SchemaLoaderError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    console.print(f"📄 Loaded: {source} ({schema.name} {schema.version})")

    result = generate_package(schema, config, write=not config.dry_run)
    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        _print_warnings(result)
        return 1

    if config.dry_run:
        _print_code(result)
    else:
        _print_files(result, config)

    if args.verbose and result.metadata:
        _print_metadata(result)

    _print_warnings(result)
    return 0


def _build_config(args: argparse.Namespace) -> ModelGenConfig:
    """Build configuration from the config file and CLI arguments."""
    overrides = {}

    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.dry_run:
        overrides["dry_run"] = True

    manager = ConfigManager()
    try:
        config = manager.get_config(overrides, args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in manager.validate_config(config):
        logger.warning(warning)

    return config


def _print_code(result: GenerationResult) -> None:
    """Show every generated file with syntax highlighting."""
    for name in result.files:
        console.print(
            Panel(
                Syntax(result.source(name), "go", theme="monokai"),
                title=f"📄 {name}",
                border_style="green",
            )
        )


def _print_files(result: GenerationResult, config: ModelGenConfig) -> None:
    table = Table(
        title=f"✓ Generated package {config.package_name}",
        box=box.ROUNDED,
        title_style="bold green",
    )
    table.add_column("File", style="cyan")
    table.add_column("Bytes", justify="right")

    for name, data in result.files.items():
        table.add_row(str(Path(config.output_dir) / name), str(len(data)))

    table.add_section()
    table.add_row(f"{len(result.files)} files", str(result.total_bytes), style="bold")

    console.print(table)


def _print_metadata(result: GenerationResult) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def _print_warnings(result: GenerationResult) -> None:
    if not result.warnings:
        return

    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in result.warnings:
        console.print(f"  [yellow]•[/yellow] {warning}")
    console.print()
