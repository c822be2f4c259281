"""
External command execution.

Runs builder and registry tools synchronously and translates launch faults
and non-zero exit codes into typed errors.
"""

import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..core.exceptions import ToolExecutionError, ToolLaunchError, ToolNotFound

log = logging.getLogger(__name__)


class OutputMode(str, Enum):
    """How the child process output is handled."""

    CAPTURE = "capture"
    INHERIT = "inherit"


class ProcessRunner:
    """Run one external command per call, blocking until it exits.

    There is no timeout and no retry: a hung tool blocks the caller and any
    failure is raised immediately.
    """

    def run(
        self,
        command: str,
        arguments: List[str],
        cwd: Optional[Union[str, Path]] = None,
        output: OutputMode = OutputMode.CAPTURE,
    ) -> subprocess.CompletedProcess:
        """
        Execute an external command.

        Args:
            command: Executable name, resolved on the execution path
            arguments: Ordered argument list
            cwd: Working directory for the child process
            output: Capture stdout/stderr or inherit the parent's streams

        Returns:
            CompletedProcess with exit code 0 (stdout/stderr set when captured)

        Raises:
            ToolNotFound: If the executable cannot be located
            ToolExecutionError: If the command exits with a non-zero status
            ToolLaunchError: If the process could not be started
        """
        cmd = [command, *arguments]
        log.debug(f"Running: {command} {arguments[0] if arguments else ''}")

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=output == OutputMode.CAPTURE,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            # cwd missing also surfaces as FileNotFoundError
            if cwd is not None and not Path(cwd).is_dir():
                raise ToolLaunchError(f"Working directory not found: {cwd}") from e
            raise ToolNotFound(command) from e
        except (OSError, ValueError) as e:
            raise ToolLaunchError(f"Failed to launch {command}: {e}") from e

        if result.returncode != 0:
            raise ToolExecutionError(cmd, result.returncode, result.stderr)

        return result
