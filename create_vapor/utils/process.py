"""External command execution for create-vapor.

Every step that shells out (git, the package manager) goes through
``CommandRunner`` so the pipeline can be exercised with a fake runner.
"""

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..exceptions import CommandError


class CommandRunner:
    """Runs external commands synchronously, one at a time.

    Commands block until they exit; there is no timeout.
    """

    def __init__(self, echo: Optional[Callable[[str], None]] = None) -> None:
        """Initialize the runner.

        Args:
            echo: Optional callback receiving each command line before it runs
        """
        self._echo = echo

    def run(
        self,
        command: List[str],
        cwd: Optional[Union[str, Path]] = None,
    ) -> subprocess.CompletedProcess:
        """Run a command and raise if it does not succeed.

        Args:
            command: Command and arguments
            cwd: Working directory for the command

        Returns:
            The completed process with captured output

        Raises:
            CommandError: If the executable is missing or exits non-zero
        """
        if self._echo:
            self._echo(" ".join(command))

        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise CommandError(
                f"Command not found: {command[0]}",
                command=command,
            )
        except OSError as e:
            raise CommandError(
                f"Could not run {command[0]}: {e}",
                command=command,
            )

        if result.returncode != 0:
            raise CommandError(
                f"{' '.join(command)} exited with status {result.returncode}",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr or "",
            )

        return result

    def run_all(
        self,
        commands: List[List[str]],
        cwd: Optional[Union[str, Path]] = None,
    ) -> None:
        """Run commands in order, stopping at the first failure."""
        for command in commands:
            self.run(command, cwd=cwd)
