"""
Configuration management for batch image builds.

This module provides the immutable configuration snapshot shared by the
Dockerfile generators, the build context assembler and the orchestrator,
using Pydantic for type validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.exceptions import ConfigError

log = logging.getLogger(__name__)

DEFAULT_TAG = "default"
DEFAULT_BUILDER_IMAGE = "justinram11/lambda"
DEFAULT_RUNTIME = "nodejs14.x"
DEFAULT_STAGE = "dev"
PACKAGE_DIR_NAME = ".serverless"
SERVICE_STATE_FILE = "serverless-state.json"


class FunctionDescriptor(BaseModel):
    """A deployable function as declared by the hosting framework."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Function key in the service definition")
    name: str = Field(..., description="Deployed name, e.g. service-stage-key")
    handler: str = Field("", description="Handler reference 'module.exportName'")
    eligible: bool = Field(False, description="Marked for batch image inclusion")

    @property
    def artifact_name(self) -> str:
        """Archive name, the last '-' delimited segment of the function name.

        Relies on the framework's service-stage-function naming convention.
        """
        return f"{self.name.split('-')[-1]}.zip"

    @property
    def handler_module(self) -> str:
        return self.handler.split(".")[0]

    @property
    def handler_export(self) -> str:
        if "." not in self.handler:
            return "default"
        return self.handler.rsplit(".", 1)[1]


class BatchImageSettings(BaseModel):
    """Read-only configuration for one build run."""

    model_config = ConfigDict(frozen=True)

    service_name: str = Field(..., min_length=1)
    service_path: Path = Field(default_factory=Path)
    runtime: str = Field(DEFAULT_RUNTIME, description="Provider runtime, e.g. nodejs14.x")
    builder_image: str = Field(DEFAULT_BUILDER_IMAGE, description="Base image repository")
    build_tag_prefix: str = Field("build-", description="Prefix of the builder stage tag")
    custom_dockerfiles: Dict[str, Path] = Field(default_factory=dict)
    additional_docker_run_commands: List[str] = Field(default_factory=list)
    functions: List[FunctionDescriptor] = Field(default_factory=list)

    @field_validator("service_path")
    @classmethod
    def validate_service_path(cls, v: Path) -> Path:
        """Docker runs inside the package dir, so every path handed to it is absolute."""
        return Path(v).resolve()

    @field_validator("custom_dockerfiles")
    @classmethod
    def validate_custom_tags(cls, v: Dict[str, Path]) -> Dict[str, Path]:
        """Custom tags must be non-empty and distinct from the default tag."""
        for tag in v:
            if not tag or tag == DEFAULT_TAG:
                raise ValueError(f"invalid custom image tag: {tag!r}")
        return v

    @property
    def package_dir(self) -> Path:
        return self.service_path / PACKAGE_DIR_NAME

    @property
    def eligible_functions(self) -> List[FunctionDescriptor]:
        return [fn for fn in self.functions if fn.eligible]

    @property
    def image_tags(self) -> List[str]:
        """Tags to build: the default tag first, then custom tags in key order."""
        return [DEFAULT_TAG, *self.custom_dockerfiles.keys()]


class RegistryTarget(BaseModel):
    """Image repository that built images are tagged for and pushed to."""

    model_config = ConfigDict(frozen=True)

    repository_url: str = Field(..., min_length=1)

    @field_validator("repository_url")
    @classmethod
    def validate_repository_url(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def registry_host(self) -> str:
        return self.repository_url.split("/", 1)[0]

    @classmethod
    def from_environment(cls) -> Optional["RegistryTarget"]:
        """
        Create registry target from environment variables.

        Environment variables:
            BATCH_IMAGES_REPOSITORY_URL: Repository URL

        Returns:
            RegistryTarget, or None when the variable is not set
        """
        url = os.getenv("BATCH_IMAGES_REPOSITORY_URL")
        if not url:
            return None
        return cls(repository_url=url)

    @classmethod
    def ecr(cls, account_id: str, region: str, name: str) -> "RegistryTarget":
        return cls(repository_url=f"{account_id}.dkr.ecr.{region}.amazonaws.com/{name}")


def load_service_config(
    path: Path, service_path: Optional[Path] = None
) -> BatchImageSettings:
    """
    Load build settings from the service state the framework writes on package.

    Accepts either the full state file (``{"service": {...}}``) or a bare
    service object.

    Args:
        path: JSON file to read
        service_path: Service root (defaults to the parent of the package dir
            holding ``path``, or the file's directory)

    Returns:
        BatchImageSettings snapshot

    Raises:
        ConfigError: If the file is missing, not JSON or structurally invalid
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Service configuration not found at: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error parsing service configuration {path}: {e}")

    if isinstance(data, dict) and isinstance(data.get("service"), dict):
        data = data["service"]
    if not isinstance(data, dict):
        raise ConfigError(f"Service configuration {path} must be a JSON object")

    if service_path is None:
        parent = path.resolve().parent
        service_path = parent.parent if parent.name == PACKAGE_DIR_NAME else parent
    service_path = Path(service_path).resolve()

    service_name = data.get("service")
    if isinstance(service_name, dict):
        service_name = service_name.get("name")

    provider = data.get("provider") or {}
    stage = provider.get("stage", DEFAULT_STAGE)
    batch_custom = (data.get("custom") or {}).get("awsBatch") or {}

    custom_dockerfiles = {
        tag: _resolve_template_path(service_path, template)
        for tag, template in (batch_custom.get("customDockerfiles") or {}).items()
    }

    functions = []
    for key, fn in (data.get("functions") or {}).items():
        if fn is None:
            fn = {}
        if not isinstance(fn, dict):
            raise ConfigError(f"Function '{key}' in {path} must be a JSON object")
        functions.append(_function_descriptor(key, fn, service_name, stage))

    raw: Dict[str, Any] = {
        "service_name": service_name,
        "service_path": service_path,
        "custom_dockerfiles": custom_dockerfiles,
        "additional_docker_run_commands": batch_custom.get(
            "additionalDockerRunCommands", []
        ),
        "functions": functions,
    }
    if provider.get("runtime"):
        raw["runtime"] = provider["runtime"]
    if batch_custom.get("builderImage"):
        raw["builder_image"] = batch_custom["builderImage"]

    try:
        settings = BatchImageSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Service configuration validation failed:\n{e}")

    log.debug(
        f"Loaded service '{settings.service_name}' with "
        f"{len(settings.eligible_functions)} batch function(s)"
    )
    return settings


def _function_descriptor(
    key: str, fn: Dict[str, Any], service_name: Optional[str], stage: str
) -> FunctionDescriptor:
    return FunctionDescriptor(
        key=key,
        name=fn.get("name") or f"{service_name}-{stage}-{key}",
        handler=fn.get("handler", ""),
        eligible="batch" in fn,
    )


def _resolve_template_path(service_path: Path, template: str) -> Path:
    template_path = Path(template)
    if template_path.is_absolute():
        return template_path
    return service_path / template_path
