"""Shared fixtures for create-vapor tests.

External commands are replaced by ``FakeRunner``, which records every
command line and simulates ``git clone`` by writing a small template
checkout, so no network, git or npm is needed.
"""

import json
import subprocess
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from create_vapor.config import Settings
from create_vapor.exceptions import CommandError
from create_vapor.scaffold import Scaffolder

TEMPLATE_README = "# ehouse-starter-repo\n\nA Shopify starter theme.\n\n## Getting started\n"

TEMPLATE_MANIFEST = {
    "name": "ehouse-starter-repo",
    "version": "1.0.0",
    "private": True,
    "scripts": {"dev": "vite", "build": "vite build"},
}


class FakeRunner:
    """Stands in for CommandRunner.

    Args:
        fail_on: Arguments that make a command fail when present, e.g. "clone"
        write_template: Whether a clone writes README.md and package.json
    """

    def __init__(self, fail_on=None, write_template=True):
        self.commands = []
        self.fail_on = set(fail_on or [])
        self.write_template = write_template

    def run(self, command, cwd=None):
        command = list(command)
        self.commands.append((command, Path(cwd) if cwd else None))

        for marker in self.fail_on:
            if marker in command:
                raise CommandError(
                    f"{' '.join(command)} exited with status 1",
                    command=command,
                    returncode=1,
                    stderr=f"fatal: {marker} failed",
                )

        if command[:2] == ["git", "clone"]:
            self._clone(Path(cwd) / command[-1])
        elif command == ["git", "init"]:
            git_dir = Path(cwd) / ".git"
            git_dir.mkdir(exist_ok=True)
            (git_dir / "fresh").write_text("")

        return subprocess.CompletedProcess(command, 0, "", "")

    def run_all(self, commands, cwd=None):
        for command in commands:
            self.run(command, cwd=cwd)

    def ran(self, *args):
        """Check whether a command starting with args was run."""
        return any(command[:len(args)] == list(args) for command, _ in self.commands)

    def _clone(self, target):
        target.mkdir(exist_ok=True)
        git_dir = target / ".git"
        git_dir.mkdir(exist_ok=True)
        (git_dir / "HEAD").write_text("ref: refs/heads/add-accelerator\n")
        if self.write_template:
            (target / "README.md").write_text(TEMPLATE_README)
            (target / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=2))


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep the user's settings file and environment out of tests."""
    config_home = tmp_path_factory.mktemp("config-home")
    monkeypatch.setenv("VAPOR_CONFIG", str(config_home / "config.toml"))
    for var in ("VAPOR_TEMPLATE_REPO", "VAPOR_TEMPLATE_BRANCH", "VAPOR_PACKAGE_MANAGER"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def settings():
    """Default settings."""
    return Settings()


@pytest.fixture
def fake_runner():
    """A runner whose commands all succeed."""
    return FakeRunner()


@pytest.fixture
def console():
    """A console that writes to a buffer."""
    return Console(file=StringIO(), width=200)


@pytest.fixture
def scaffolder(settings, fake_runner, console, tmp_path):
    """A Scaffolder working in tmp_path with the fake runner."""
    return Scaffolder(settings, runner=fake_runner, console=console, base_dir=tmp_path)


@pytest.fixture
def make_runner():
    """Build a FakeRunner with custom failures."""
    return FakeRunner
