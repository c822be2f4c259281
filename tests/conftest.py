"""
Test configuration and fixtures for batch_images tests.

Provides shared fixtures for:
- Function descriptors and build settings
- Packaged service directories with function archives
- Registry targets
- Mock process runners
"""

from pathlib import Path
from typing import List
from unittest.mock import Mock

import pytest

from batch_images.config import BatchImageSettings, FunctionDescriptor, RegistryTarget

REPOSITORY_URL = "123456789012.dkr.ecr.us-east-1.amazonaws.com/svc-dev"


@pytest.fixture
def batch_functions() -> List[FunctionDescriptor]:
    """Provide one batch function and one regular function.

    Returns:
        List of function descriptors in declaration order.
    """
    return [
        FunctionDescriptor(
            key="worker", name="svc-dev-worker", handler="handler.main", eligible=True
        ),
        FunctionDescriptor(
            key="api", name="svc-dev-api", handler="api.handle", eligible=False
        ),
    ]


@pytest.fixture
def service_dir(tmp_path: Path, batch_functions: List[FunctionDescriptor]) -> Path:
    """Provide a service directory with packaged function archives.

    Creates ``.serverless/<artifact>.zip`` for every batch function.

    Returns:
        Path to the service root.
    """
    package_dir = tmp_path / ".serverless"
    package_dir.mkdir()
    for fn in batch_functions:
        if fn.eligible:
            (package_dir / fn.artifact_name).write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return tmp_path


@pytest.fixture
def settings(service_dir: Path, batch_functions: List[FunctionDescriptor]) -> BatchImageSettings:
    """Provide build settings for the packaged service."""
    return BatchImageSettings(
        service_name="svc",
        service_path=service_dir,
        runtime="nodejs14.x",
        functions=batch_functions,
    )


@pytest.fixture
def target() -> RegistryTarget:
    return RegistryTarget(repository_url=REPOSITORY_URL)


@pytest.fixture
def mock_runner():
    """Provide a process runner mock that always succeeds.

    Returns:
        Mock with a ``run`` method.
    """
    runner = Mock()
    runner.run.return_value = Mock(returncode=0, stdout="", stderr="")
    return runner


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch):
    """Suppress logs and clear registry configuration from the environment."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.delenv("BATCH_IMAGES_REPOSITORY_URL", raising=False)
