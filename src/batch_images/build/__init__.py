"""
Batch image build system.

Components:
    - ProcessRunner: Run docker and aws CLI commands
    - DefaultDockerfileGenerator / CustomDockerfileGenerator: Dockerfile text
    - BuildContextAssembler: Stage function archives for docker build
    - ImageBuilder: docker build
    - RegistryPublisher: docker login and push
    - BatchImageBuilder: Orchestrate the build of all images
"""

from .builder import BatchImageBuilder
from .context_assembler import BuildContextAssembler
from .dockerfile_generator import (
    PLACEHOLDER,
    CustomDockerfileGenerator,
    DefaultDockerfileGenerator,
    SubstitutionResult,
    substitute_placeholder,
)
from .image_builder import BuildResult, ImageBuildConfig, ImageBuilder
from .naming import resolve_image_name
from .process_runner import OutputMode, ProcessRunner
from .registry_manager import (
    EcrLoginCommand,
    LoginCommandProvider,
    PushResult,
    RegistryPublisher,
    StaticLoginCommand,
)

__all__ = [
    # Orchestration
    "BatchImageBuilder",
    "BuildContextAssembler",
    # Dockerfile generation
    "PLACEHOLDER",
    "CustomDockerfileGenerator",
    "DefaultDockerfileGenerator",
    "SubstitutionResult",
    "substitute_placeholder",
    # Docker operations
    "ImageBuilder",
    "ImageBuildConfig",
    "BuildResult",
    "OutputMode",
    "ProcessRunner",
    "resolve_image_name",
    # Registry operations
    "EcrLoginCommand",
    "LoginCommandProvider",
    "PushResult",
    "RegistryPublisher",
    "StaticLoginCommand",
]
