"""Utility modules for create-vapor.

This package contains helpers for running external commands and
formatting errors for the console.
"""

from .exceptions import format_error_for_user
from .process import CommandRunner

__all__ = [
    "CommandRunner",
    "format_error_for_user",
]
