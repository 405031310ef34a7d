"""Main Typer application for create-vapor.

This module contains the Typer app instance and the single ``create``
command. It collects options (from flags or prompts), runs the scaffold
pipeline and renders the result, translating errors into exit codes.
"""

import functools
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import install

from . import __version__
from .config import ConfigManager
from .exceptions import VaporError, CommandError
from .prompts import InputCollector, collect_from_flags
from .render import OutputFormatter, OUTPUT_FORMATS
from .scaffold import Scaffolder
from .utils.exceptions import format_error_for_user

# Install rich traceback handler for better error display
install(show_locals=True)

app = typer.Typer(
    name="create-vapor",
    help="Create a new Shopify theme from the Vapor starter template",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
)

# Errors always go to stderr so --output json stays parseable
error_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"create-vapor {__version__}")
        raise typer.Exit()


def output_format_callback(value: str) -> str:
    """Validate the output format."""
    value = value.lower()
    if value not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"Expected one of: {', '.join(OUTPUT_FORMATS)}")
    return value


def handle_exceptions(func):
    """Decorator to turn create-vapor errors into exit codes."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        debug = kwargs.get("debug", False)
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort):
            raise
        except VaporError as e:
            error_console.print(f"[red]{escape(format_error_for_user(e, debug))}[/red]")
            if not debug and isinstance(e, CommandError):
                error_console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
        except KeyboardInterrupt:
            error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(130)
        except Exception as e:
            if debug:
                error_console.print_exception(show_locals=True)
            else:
                error_console.print(f"[red]Unexpected error: {escape(str(e))}[/red]")
                error_console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
    return wrapper


@app.command()
@handle_exceptions
def create(
    theme_name: Optional[str] = typer.Argument(
        None,
        help="Name of the theme directory to create",
        show_default=False,
    ),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        help="Run without prompts (requires theme name)",
    ),
    store: Optional[str] = typer.Option(
        None,
        "--store",
        "-s",
        help="Shopify store URL (e.g. yourstore.myshopify.com)",
    ),
    git: Optional[str] = typer.Option(
        None,
        "--git",
        "-g",
        help="Initialize git repository (true/false)",
    ),
    install_deps: Optional[str] = typer.Option(
        None,
        "--install",
        "-i",
        help="Install dependencies (true/false)",
    ),
    output_format: str = typer.Option(
        "text",
        "--output",
        "-o",
        help="Output format (text, json, yaml)",
        callback=output_format_callback,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be done without making changes",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a create-vapor settings file (TOML)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Create a new Shopify theme from the Vapor starter template.

    Examples:
        # Answer a few questions
        create-vapor

        # Everything from flags
        create-vapor my-theme --store=mystore.myshopify.com --git=true --install=true --non-interactive

        # See what would happen
        create-vapor my-theme --non-interactive --dry-run
    """
    # Progress and prompts move to stderr when stdout carries JSON/YAML
    console = Console(stderr=output_format != "text")

    config_manager = ConfigManager(config_file)
    settings = config_manager.settings
    formatter = OutputFormatter(console)

    if debug:
        console.print("[dim]Debug mode enabled[/dim]")
        source = str(config_manager.config_file) if config_manager.has_config_file() else "defaults"
        formatter.render_settings(settings, source=source)
        overrides = config_manager.get_environment_overrides()
        if overrides:
            console.print(f"[dim]Environment overrides active: {', '.join(sorted(overrides))}[/dim]")

    if non_interactive:
        options = collect_from_flags(theme_name, store=store, git=git, install=install_deps)
    else:
        collector = InputCollector(settings, console)
        options = collector.collect(theme_name, store=store, git=git, install=install_deps)

    scaffolder = Scaffolder(settings, console=console, debug=debug)

    if dry_run:
        result = scaffolder.plan(options)
    else:
        result = scaffolder.run(options)

    formatter.render(result, format=output_format, package_manager=settings.package_manager)


def cli():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
