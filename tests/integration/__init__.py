"""Integration tests for create-vapor.

This package contains end-to-end tests that drive the Typer app with
CliRunner against a temporary working directory.

Test Structure:
- test_non_interactive.py: flag-driven runs and fail-fast validation
- test_interactive.py: prompt-driven runs
- test_cli_options.py: help, version, dry run, output formats, settings

External commands are faked; no network, git or npm is used.
"""
