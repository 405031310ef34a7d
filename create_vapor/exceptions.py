"""Exception classes for create-vapor.

This module defines custom exception classes used throughout the application
for proper error handling and user feedback.
"""

from typing import Optional, Dict, Any, List


class VaporError(Exception):
    """Base exception class for all create-vapor errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(VaporError):
    """Exception raised for configuration-related errors."""
    pass


class ValidationError(VaporError):
    """Exception raised for invalid user input."""
    pass


class CommandError(VaporError):
    """Exception raised when an external command fails or cannot be started."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
        **kwargs: Any
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            command: The command line that was run
            returncode: Exit status, or None if the command never started
            stderr: Captured error output
            **kwargs: Additional arguments passed to parent class
        """
        super().__init__(message, **kwargs)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class CloneError(CommandError):
    """Exception raised when the template repository cannot be cloned."""
    pass


class FileOperationError(VaporError):
    """Exception raised when a project file cannot be rewritten."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Operation that failed (read, parse, write)
            **kwargs: Additional arguments
        """
        super().__init__(message, **kwargs)
        self.file_path = file_path
        self.operation = operation
