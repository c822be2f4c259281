"""Custom exceptions for batch_images.

Provides clear, actionable error messages for common failure scenarios.
Every failure aborts the current build or push; nothing here is retried.
"""

from pathlib import Path
from typing import List, Optional, Union


class BatchImageError(Exception):
    """Base exception for all batch image build and publish errors."""

    pass


class ConfigError(BatchImageError):
    """Raised when the service configuration is missing or invalid."""

    pass


class ToolError(BatchImageError):
    """Base exception for failures of an external command line tool."""

    pass


class ToolNotFound(ToolError):
    """Raised when an external tool is not on the execution path.

    The user has to install the tool; there is nothing to retry.
    """

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"{command} not found! Please install it.")


class ToolExecutionError(ToolError):
    """Raised when an external tool exits with a non-zero status.

    The captured stderr is surfaced verbatim as the message.
    """

    def __init__(self, command: List[str], returncode: int, stderr: Optional[str]):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = self.stderr.strip() or (
            f"'{' '.join(command[:2])}' exited with status {returncode}"
        )
        super().__init__(message)


class ToolLaunchError(ToolError):
    """Raised when an external tool could not be started for any other reason."""

    pass


class ArtifactMissing(BatchImageError):
    """Raised when a packaged function archive is absent from the package dir."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"Packaged function archive not found: {self.path}\n"
            "Package the service before building images."
        )


class TemplateError(BatchImageError):
    """Raised when a custom Dockerfile template cannot be read."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        super().__init__(f"Cannot read Dockerfile template {self.path}: {reason}")
