"""
Docker image building operations.

Handles building one tagged image from a generated Dockerfile inside the
shared build context.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .process_runner import OutputMode, ProcessRunner

log = logging.getLogger(__name__)

DOCKER = "docker"


@dataclass
class ImageBuildConfig:
    """Configuration for Docker image build."""

    dockerfile: Path
    image: str
    context_dir: Path
    cwd: Path


@dataclass
class BuildResult:
    """Result of Docker image build."""

    tag: str
    image: str
    dockerfile: Path


class ImageBuilder:
    """Build Docker images with the docker CLI."""

    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()

    def build(self, tag: str, config: ImageBuildConfig) -> BuildResult:
        """
        Build Docker image, streaming the build log to the console.

        Args:
            tag: Image specification tag being built
            config: Build configuration

        Returns:
            BuildResult for the built image

        Raises:
            ToolNotFound: If docker is not installed
            ToolExecutionError: If docker build fails
        """
        self.runner.run(
            DOCKER,
            [
                "build",
                "-f",
                str(config.dockerfile),
                "-t",
                config.image,
                str(config.context_dir),
            ],
            cwd=config.cwd,
            output=OutputMode.INHERIT,
        )

        log.info(f"Image built successfully: {config.image}")
        return BuildResult(tag=tag, image=config.image, dockerfile=config.dockerfile)
