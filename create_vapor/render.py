"""Output rendering for create-vapor.

Renders the outcome of a scaffold run either as the human-readable
next-steps summary or as JSON/YAML for scripts.
"""

import json
from typing import Any, Dict, Optional

import yaml
from rich.console import Console
from rich.table import Table

from .config import Settings
from .exceptions import ValidationError
from .models.result import ScaffoldResult

OUTPUT_FORMATS = ("text", "json", "yaml")

STATUS_SYMBOLS = {
    "success": "[green]✓[/green]",
    "failed": "[red]✗[/red]",
    "skipped": "[dim]-[/dim]",
    "planned": "[yellow]…[/yellow]",
}


class OutputFormatter:
    """Renders scaffold results and settings."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize output formatter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def render(self, result: ScaffoldResult, format: str = "text", package_manager: str = "npm") -> None:
        """Render a scaffold result in the given format.

        Args:
            result: Outcome of the run
            format: Output format (text, json, yaml)
            package_manager: Package manager named in the next-steps summary

        Raises:
            ValidationError: If the format is unknown
        """
        format_name = format.lower()

        if format_name == "text":
            if result.dry_run:
                self.render_steps(result)
            else:
                self.render_completion(result, package_manager)
        elif format_name == "json":
            self.render_json(result.model_dump())
        elif format_name == "yaml":
            self.render_yaml(result.model_dump())
        else:
            raise ValidationError(f"Unknown output format: {format_name}")

    def render_completion(self, result: ScaffoldResult, package_manager: str = "npm") -> None:
        """Print the success banner and the commands to run next.

        The install reminder is only shown when dependencies were not
        installed.
        """
        theme_name = result.options.theme_name
        pm = package_manager

        self.console.print(f"\n🎉 Success! Created {theme_name} at {result.project_path}")
        self.console.print("\nInside that directory, you can run several commands:")
        self.console.print(f"  {pm} run dev     - Start development server")
        self.console.print(f"  {pm} run build   - Build for production")
        self.console.print("\nWe suggest that you begin by typing:")
        self.console.print(f"  cd {theme_name}")
        # Declined and failed installs both leave the user to run it
        if not result.dependencies_installed:
            self.console.print(f"  {pm} install")
        self.console.print(f"  {pm} run dev\n")
        self.console.print("Happy coding! 🚀\n")

    def render_steps(self, result: ScaffoldResult) -> None:
        """Print a table of step outcomes."""
        table = Table(title="Dry Run" if result.dry_run else "Steps")
        table.add_column("Step", style="cyan")
        table.add_column("Status")
        table.add_column("Detail", overflow="fold")

        for step in result.steps:
            symbol = STATUS_SYMBOLS.get(step.status, "")
            table.add_row(step.name, f"{symbol} {step.status}", step.detail)

        self.console.print(table)

    def render_settings(self, settings: Settings, source: str = "defaults") -> None:
        """Print resolved settings, for --debug."""
        table = Table(title=f"Settings ({source})")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="bold")

        for key, value in settings.model_dump().items():
            table.add_row(key, str(value))

        self.console.print(table)

    def render_json(self, data: Dict[str, Any], indent: int = 2) -> None:
        """Render data as JSON on stdout."""
        try:
            print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Failed to serialize data to JSON: {e}")

    def render_yaml(self, data: Dict[str, Any]) -> None:
        """Render data as YAML on stdout."""
        try:
            print(yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False), end="")
        except yaml.YAMLError as e:
            raise ValidationError(f"Failed to serialize data to YAML: {e}")
