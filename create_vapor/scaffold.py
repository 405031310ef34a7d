"""Theme scaffolding pipeline.

Runs the fixed sequence of steps that turns the template repository into
a new theme: clone, rewrite metadata, optionally reinitialize git,
optionally install dependencies. Only the clone is fatal; the other steps
report failure and let the pipeline carry on.
"""

import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import Settings
from .exceptions import CloneError, CommandError, FileOperationError
from .metadata import update_project_files
from .models.options import ScaffoldOptions
from .models.result import ScaffoldResult
from .utils.process import CommandRunner

STEP_CLONE = "clone"
STEP_METADATA = "metadata"
STEP_GIT = "git"
STEP_INSTALL = "install"

INITIAL_COMMIT_MESSAGE = "Initial commit"


class Scaffolder:
    """Creates a theme directory from the template repository."""

    def __init__(
        self,
        settings: Settings,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
        base_dir: Optional[Union[str, Path]] = None,
        debug: bool = False,
    ) -> None:
        """Initialize the scaffolder.

        Args:
            settings: Tool settings (template, package manager)
            runner: Command runner. If None, one is created.
            console: Rich console for progress output
            base_dir: Directory the theme is created in. Defaults to the cwd.
            debug: Whether to print commands and error output
        """
        self.settings = settings
        self.console = console or Console()
        self.debug = debug
        self.runner = runner or CommandRunner(echo=self._echo_command if debug else None)
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

    def project_path(self, options: ScaffoldOptions) -> Path:
        """Get the directory the theme is created in."""
        return self.base_dir / options.theme_name

    def clone_command(self, options: ScaffoldOptions) -> List[str]:
        return [
            "git",
            "clone",
            "-b",
            self.settings.template_branch,
            self.settings.template_repo,
            options.theme_name,
        ]

    def git_init_commands(self) -> List[List[str]]:
        return [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
        ]

    def install_command(self) -> List[str]:
        return [self.settings.package_manager, "install"]

    def run(self, options: ScaffoldOptions) -> ScaffoldResult:
        """Run the whole pipeline.

        Args:
            options: Collected scaffold options

        Returns:
            Outcome of every step

        Raises:
            CloneError: If the template cannot be cloned; nothing after the
                clone runs
        """
        result = ScaffoldResult(
            options=options,
            project_path=str(self.project_path(options)),
        )

        self.console.print(f"✨ Creating a new Shopify theme called {options.theme_name}...")

        self.fetch_template(options, result)
        self.update_metadata(options, result)

        if options.init_git:
            self.reinit_git(options, result)
        else:
            result.record(STEP_GIT, "skipped")

        if options.install_deps:
            self.install_dependencies(options, result)
        else:
            result.record(STEP_INSTALL, "skipped")

        return result

    def plan(self, options: ScaffoldOptions) -> ScaffoldResult:
        """Describe what ``run`` would do without touching anything."""
        project_path = self.project_path(options)
        result = ScaffoldResult(options=options, project_path=str(project_path), dry_run=True)

        self.console.print(f"[yellow]DRY RUN: Would create theme '{options.theme_name}' at {project_path}[/yellow]")

        clone = " ".join(self.clone_command(options))
        result.record(STEP_CLONE, "planned", clone)

        detail = f"name={options.theme_name}"
        if options.store_url:
            detail += f", config.shopifyStore={options.store_url}"
        result.record(STEP_METADATA, "planned", detail)

        if options.init_git:
            git = " && ".join(" ".join(cmd) for cmd in self.git_init_commands())
            result.record(STEP_GIT, "planned", git)
        else:
            result.record(STEP_GIT, "skipped")

        if options.install_deps:
            install = " ".join(self.install_command())
            result.record(STEP_INSTALL, "planned", install)
        else:
            result.record(STEP_INSTALL, "skipped")

        return result

    def fetch_template(self, options: ScaffoldOptions, result: ScaffoldResult) -> None:
        """Clone the template repository into the theme directory.

        Raises:
            CloneError: If the directory cannot be created or git fails
        """
        project_path = self.project_path(options)
        command = self.clone_command(options)

        try:
            project_path.mkdir(exist_ok=True)
        except OSError as e:
            result.record(STEP_CLONE, "failed", str(e))
            self._fail("Failed to clone repository")
            raise CloneError(f"Could not create directory {project_path}: {e}", command=command)

        try:
            with self._spinner("Cloning repository..."):
                self.runner.run(command, cwd=self.base_dir)
        except CommandError as e:
            result.record(STEP_CLONE, "failed", e.message)
            self._fail("Failed to clone repository")
            raise CloneError(
                f"Failed to checkout the repo: {e.message}",
                command=e.command,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e

        result.record(STEP_CLONE, "success")
        self._succeed("Repository cloned successfully")

    def update_metadata(self, options: ScaffoldOptions, result: ScaffoldResult) -> None:
        """Rewrite README.md and package.json; failure is reported, not raised."""
        try:
            with self._spinner("Updating project files..."):
                updated = update_project_files(
                    self.project_path(options),
                    options.theme_name,
                    options.store_url,
                )
        except FileOperationError as e:
            result.record(STEP_METADATA, "failed", e.message)
            self._fail(f"Failed to update project files: {e.message}")
            return

        result.record(STEP_METADATA, "success", ", ".join(updated))
        self._succeed("Project files updated successfully")

    def reinit_git(self, options: ScaffoldOptions, result: ScaffoldResult) -> None:
        """Replace the template's history with a single initial commit.

        Failure is reported, not raised.
        """
        project_path = self.project_path(options)
        git_dir = project_path / ".git"

        try:
            with self._spinner("Initializing git repository..."):
                if git_dir.exists():
                    shutil.rmtree(git_dir)
                self.runner.run_all(self.git_init_commands(), cwd=project_path)
        except (CommandError, OSError) as e:
            detail = e.message if isinstance(e, CommandError) else str(e)
            result.record(STEP_GIT, "failed", detail)
            self._report_command_failure(e)
            self._fail("Failed to initialize git repository")
            return

        result.record(STEP_GIT, "success")
        self._succeed("Git repository initialized successfully")

    def install_dependencies(self, options: ScaffoldOptions, result: ScaffoldResult) -> None:
        """Install dependencies with the package manager; failure is reported, not raised."""
        try:
            with self._spinner("Installing dependencies..."):
                self.runner.run(self.install_command(), cwd=self.project_path(options))
        except CommandError as e:
            result.record(STEP_INSTALL, "failed", e.message)
            self._report_command_failure(e)
            self._fail("Failed to install dependencies")
            return

        result.record(STEP_INSTALL, "success")
        self._succeed("Dependencies installed successfully")

    @contextmanager
    def _spinner(self, description: str) -> Iterator[None]:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            progress.add_task(description, total=None)
            yield

    def _succeed(self, message: str) -> None:
        self.console.print(f"[green]✔ {message}[/green]")

    def _fail(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def _echo_command(self, command: str) -> None:
        self.console.print(f"[dim]$ {escape(command)}[/dim]")

    def _report_command_failure(self, error: Exception) -> None:
        if not self.debug:
            return
        if isinstance(error, CommandError) and error.stderr:
            self.console.print(f"[dim]{escape(error.stderr.strip())}[/dim]")
        else:
            self.console.print(f"[dim]{escape(str(error))}[/dim]")
