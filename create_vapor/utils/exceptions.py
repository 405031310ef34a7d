"""Error formatting helpers for create-vapor.

Turns the exception hierarchy in ``create_vapor.exceptions`` into
messages suitable for the console.
"""

from ..exceptions import (
    VaporError,
    CommandError,
    CloneError,
    FileOperationError,
)


def _format_command_details(error: CommandError) -> str:
    details = ""
    if error.command:
        details += f"\nCommand: {' '.join(error.command)}"
    if error.returncode is not None:
        details += f"\nExit code: {error.returncode}"
    if error.stderr:
        details += f"\nOutput: {error.stderr.strip()}"
    return details


def format_error_for_user(error: Exception, debug: bool = False) -> str:
    """Format an error message for user display.

    Args:
        error: The exception to format
        debug: Whether to include debug information

    Returns:
        Formatted error message
    """
    if isinstance(error, CloneError):
        message = f"Error: {error.message}"
        if debug:
            message += _format_command_details(error)
        return message

    if isinstance(error, CommandError):
        message = f"Command failed: {error.message}"
        if debug:
            message += _format_command_details(error)
        return message

    if isinstance(error, FileOperationError):
        message = f"File error: {error.message}"
        if error.file_path:
            message += f"\nFile: {error.file_path}"
        if error.operation and debug:
            message += f"\nOperation: {error.operation}"
        return message

    if isinstance(error, VaporError):
        message = f"Error: {error.message}"
        if debug and error.details:
            for key, value in error.details.items():
                message += f"\n{key}: {value}"
        return message

    return f"Unexpected error: {error}"
