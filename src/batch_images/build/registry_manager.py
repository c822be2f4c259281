"""
Docker registry management.

Handles registry login and pushing every tag of the repository.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..config import RegistryTarget
from .image_builder import DOCKER
from .process_runner import OutputMode, ProcessRunner

log = logging.getLogger(__name__)


class LoginCommandProvider(Protocol):
    """Supplies the docker arguments that authenticate against the registry."""

    def login_command(self) -> str:
        """Return a space-delimited docker argument string, e.g. 'login -u ...'."""
        ...


@dataclass
class StaticLoginCommand:
    """Login command given verbatim, e.g. from the command line."""

    command: str

    def login_command(self) -> str:
        command = self.command.strip()
        # Accept commands copied with the docker executable in front
        if command.startswith(f"{DOCKER} "):
            command = command[len(DOCKER) + 1 :]
        return command


class EcrLoginCommand:
    """Login command built from a password issued by the AWS CLI."""

    def __init__(self, region: str, registry: str, runner: Optional[ProcessRunner] = None):
        self.region = region
        self.registry = registry
        self.runner = runner or ProcessRunner()

    def login_command(self) -> str:
        """
        Fetch a registry password through ``aws ecr get-login-password``.

        Raises:
            ToolNotFound: If the AWS CLI is not installed
            ToolExecutionError: If the AWS CLI call fails
        """
        result = self.runner.run(
            "aws",
            ["ecr", "get-login-password", "--region", self.region],
        )
        password = result.stdout.strip()
        return f"login --username AWS --password {password} {self.registry}"


@dataclass
class PushResult:
    """Result of pushing the repository."""

    repository_url: str


class RegistryPublisher:
    """Log docker into the registry and push all tags of the repository."""

    def __init__(
        self,
        target: RegistryTarget,
        login: LoginCommandProvider,
        runner: Optional[ProcessRunner] = None,
    ):
        self.target = target
        self.login = login
        self.runner = runner or ProcessRunner()

    def publish(self) -> PushResult:
        """
        Log in, then push every tag of the repository.

        Login output is captured so credentials never reach the console.
        A failed login aborts before anything is pushed.

        Raises:
            ToolNotFound: If docker is not installed
            ToolExecutionError: If login or push fails
        """
        log.info("Logging into registry...")
        self.runner.run(DOCKER, self.login.login_command().split(" "))

        log.info("Uploading to registry...")
        self.runner.run(
            DOCKER,
            ["push", self.target.repository_url, "--all-tags"],
            output=OutputMode.INHERIT,
        )

        log.info(f"Pushed all tags of {self.target.repository_url}")
        return PushResult(repository_url=self.target.repository_url)
