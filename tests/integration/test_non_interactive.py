"""Integration tests for non-interactive runs.

Tests the complete flag-driven workflow: clone, metadata rewrite,
optional git and install steps, and fail-fast input validation.
"""

import json
import pytest
from typer.testing import CliRunner

from create_vapor.app import app


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch, fake_runner):
    """Run the CLI in tmp_path with external commands faked."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("create_vapor.scaffold.CommandRunner", lambda *args, **kwargs: fake_runner)
    return tmp_path


class TestNonInteractive:
    """Integration tests for --non-interactive."""

    def test_example_scenario(self, cli_runner, workdir, fake_runner):
        """Test the documented example end to end.

        Validates:
        1. Directory created and cloned
        2. README heading and manifest rewritten
        3. No git reinit and no install
        4. Install reminder printed
        """
        result = cli_runner.invoke(app, [
            "my-theme",
            "--store=foo.myshopify.com",
            "--git=false",
            "--install=false",
            "--non-interactive",
        ])

        assert result.exit_code == 0, result.output
        project = workdir / "my-theme"
        assert project.is_dir()
        assert (project / "README.md").read_text().splitlines()[0] == "# my-theme"

        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == "my-theme"
        assert manifest["config"]["shopifyStore"] == "foo.myshopify.com"

        assert fake_runner.ran("git", "clone")
        assert not fake_runner.ran("git", "init")
        assert not fake_runner.ran("npm")
        assert (project / ".git" / "HEAD").exists()

        assert "Success! Created my-theme" in result.output
        assert "npm install" in result.output

    def test_short_flags(self, cli_runner, workdir, fake_runner):
        """Test '-s=', '-g=' and '-i=' forms."""
        result = cli_runner.invoke(app, [
            "my-theme",
            "-s=foo.myshopify.com",
            "-g=true",
            "-i=true",
            "--non-interactive",
        ])

        assert result.exit_code == 0, result.output
        manifest = json.loads((workdir / "my-theme" / "package.json").read_text())
        assert manifest["config"]["shopifyStore"] == "foo.myshopify.com"
        assert fake_runner.ran("git", "init")
        assert fake_runner.ran("npm", "install")
        assert "  npm install" not in result.output

    def test_defaults_run_everything(self, cli_runner, workdir, fake_runner):
        """Test git and install default to on and no store is written."""
        result = cli_runner.invoke(app, ["my-theme", "--non-interactive"])

        assert result.exit_code == 0, result.output
        manifest = json.loads((workdir / "my-theme" / "package.json").read_text())
        assert "config" not in manifest
        assert fake_runner.ran("git", "commit", "-m", "Initial commit")
        assert fake_runner.ran("npm", "install")

    def test_missing_theme_name(self, cli_runner, workdir, fake_runner):
        """Test a missing theme name exits 1 without touching anything."""
        result = cli_runner.invoke(app, ["--non-interactive", "--store=foo.myshopify.com"])

        assert result.exit_code == 1
        assert "Theme name is required in non-interactive mode" in result.output
        assert fake_runner.commands == []
        assert list(workdir.iterdir()) == []

    @pytest.mark.parametrize("store", [
        "foo.com",
        "foo.myshopify.co",
        "https://foo.myshopify.com/admin",
        "foo.myshopify.com.example.org",
    ])
    def test_invalid_store_url(self, cli_runner, workdir, fake_runner, store):
        """Test invalid store URLs exit 1 before any filesystem change."""
        result = cli_runner.invoke(app, ["my-theme", f"--store={store}", "--non-interactive"])

        assert result.exit_code == 1
        assert "Store URL must end with .myshopify.com" in result.output
        assert fake_runner.commands == []
        assert list(workdir.iterdir()) == []

    def test_clone_failure(self, cli_runner, workdir, make_runner, monkeypatch):
        """Test a failed clone exits 1 and nothing else runs."""
        runner = make_runner(fail_on={"clone"})
        monkeypatch.setattr("create_vapor.scaffold.CommandRunner", lambda *args, **kwargs: runner)

        result = cli_runner.invoke(app, ["my-theme", "--store=foo.myshopify.com", "--non-interactive"])

        assert result.exit_code == 1
        assert "Failed to clone repository" in result.output
        assert "Failed to checkout the repo" in result.output
        assert len(runner.commands) == 1
        assert not (workdir / "my-theme" / "package.json").exists()
        assert "Success!" not in result.output

    def test_clone_failure_debug_shows_output(self, cli_runner, workdir, make_runner, monkeypatch):
        """Test --debug shows the failing command's output."""
        runner = make_runner(fail_on={"clone"})
        monkeypatch.setattr("create_vapor.scaffold.CommandRunner", lambda *args, **kwargs: runner)

        result = cli_runner.invoke(app, ["my-theme", "--non-interactive", "--debug"])

        assert result.exit_code == 1
        assert "fatal: clone failed" in result.output

    def test_install_failure_still_succeeds(self, cli_runner, workdir, make_runner, monkeypatch):
        """Test a failed install is reported but the run exits 0."""
        runner = make_runner(fail_on={"install"})
        monkeypatch.setattr("create_vapor.scaffold.CommandRunner", lambda *args, **kwargs: runner)

        result = cli_runner.invoke(app, ["my-theme", "--non-interactive"])

        assert result.exit_code == 0, result.output
        assert "Failed to install dependencies" in result.output
        assert "  npm install" in result.output

    def test_git_failure_still_succeeds(self, cli_runner, workdir, make_runner, monkeypatch):
        """Test a failed git reinit is reported but the run exits 0."""
        runner = make_runner(fail_on={"init"})
        monkeypatch.setattr("create_vapor.scaffold.CommandRunner", lambda *args, **kwargs: runner)

        result = cli_runner.invoke(app, ["my-theme", "--non-interactive", "--install=false"])

        assert result.exit_code == 0, result.output
        assert "Failed to initialize git repository" in result.output
        assert not runner.ran("git", "add")
