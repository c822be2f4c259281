# Load .env vars from file before everything else
from dotenv import load_dotenv

load_dotenv()

from .logger import setup_logging  # noqa: E402

setup_logging()

from .build import (  # noqa: E402
    BatchImageBuilder,
    BuildContextAssembler,
    CustomDockerfileGenerator,
    DefaultDockerfileGenerator,
    ImageBuilder,
    OutputMode,
    ProcessRunner,
    RegistryPublisher,
    resolve_image_name,
)
from .config import (  # noqa: E402
    BatchImageSettings,
    FunctionDescriptor,
    RegistryTarget,
    load_service_config,
)

__all__ = [
    "BatchImageBuilder",
    "BatchImageSettings",
    "BuildContextAssembler",
    "CustomDockerfileGenerator",
    "DefaultDockerfileGenerator",
    "FunctionDescriptor",
    "ImageBuilder",
    "OutputMode",
    "ProcessRunner",
    "RegistryPublisher",
    "RegistryTarget",
    "load_service_config",
    "resolve_image_name",
]
