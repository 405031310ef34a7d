"""create-vapor package.

A command-line tool that scaffolds a new Shopify theme from the Vapor
starter template: clone, rename, reinitialize git and install
dependencies.
"""

__version__ = "0.1.0"
__description__ = "Scaffold a new Shopify theme from the Vapor starter template"

# Re-export main classes for convenience
from .config import ConfigManager, Settings
from .models import ScaffoldOptions, ScaffoldResult, StepResult
from .render import OutputFormatter
from .scaffold import Scaffolder
from .utils.process import CommandRunner
from .exceptions import (
    VaporError,
    ConfigError,
    ValidationError,
    CommandError,
    CloneError,
    FileOperationError,
)

__all__ = [
    "__version__",
    "__description__",
    "ConfigManager",
    "Settings",
    "ScaffoldOptions",
    "ScaffoldResult",
    "StepResult",
    "OutputFormatter",
    "Scaffolder",
    "CommandRunner",
    "VaporError",
    "ConfigError",
    "ValidationError",
    "CommandError",
    "CloneError",
    "FileOperationError",
]
