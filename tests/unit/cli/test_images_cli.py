"""Unit tests for the batch-images CLI commands."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from batch_images.build.image_builder import BuildResult
from batch_images.build.registry_manager import EcrLoginCommand, PushResult, StaticLoginCommand
from batch_images.cli.main import app
from batch_images.core.exceptions import ToolNotFound

REPO = "registry.local/svc"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def packaged_service(tmp_path):
    """Service directory with a state file and one packaged batch function."""
    package_dir = tmp_path / ".serverless"
    package_dir.mkdir()
    (package_dir / "worker.zip").write_bytes(b"zip")
    (package_dir / "serverless-state.json").write_text(
        json.dumps(
            {
                "service": {
                    "service": "svc",
                    "provider": {"runtime": "nodejs14.x"},
                    "functions": {"worker": {"handler": "handler.main", "batch": {}}},
                }
            }
        )
    )
    return tmp_path


class TestBuildCommand:
    """Tests for batch-images build."""

    def test_build_uses_service_path(self, runner, packaged_service, mock_env_vars):
        with patch("batch_images.cli.commands.images.BatchImageBuilder") as mock_builder:
            mock_builder.return_value.build_all.return_value = [
                BuildResult(tag="default", image=f"{REPO}:default", dockerfile=packaged_service)
            ]

            result = runner.invoke(
                app, ["build", "--service-path", str(packaged_service), "-r", REPO]
            )

        assert result.exit_code == 0, result.output
        settings, target = mock_builder.call_args[0]
        assert settings.service_name == "svc"
        assert target.repository_url == REPO

    def test_build_requires_repository(self, runner, packaged_service, mock_env_vars):
        result = runner.invoke(app, ["build", "--service-path", str(packaged_service)])

        assert result.exit_code == 1
        assert "No image repository configured" in result.output

    def test_build_repository_from_environment(
        self, runner, packaged_service, mock_env_vars, monkeypatch
    ):
        monkeypatch.setenv("BATCH_IMAGES_REPOSITORY_URL", REPO)

        with patch("batch_images.cli.commands.images.BatchImageBuilder") as mock_builder:
            mock_builder.return_value.build_all.return_value = []
            result = runner.invoke(app, ["build", "--service-path", str(packaged_service)])

        assert result.exit_code == 0, result.output
        assert mock_builder.call_args[0][1].repository_url == REPO

    def test_build_errors_exit_with_message(self, runner, packaged_service, mock_env_vars):
        with patch("batch_images.cli.commands.images.BatchImageBuilder") as mock_builder:
            mock_builder.return_value.build_all.side_effect = ToolNotFound("docker")
            result = runner.invoke(
                app, ["build", "--service-path", str(packaged_service), "-r", REPO]
            )

        assert result.exit_code == 1
        assert "docker not found" in result.output

    def test_missing_state_file(self, runner, tmp_path, mock_env_vars):
        result = runner.invoke(app, ["build", "--service-path", str(tmp_path), "-r", REPO])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestPushCommand:
    """Tests for batch-images push."""

    def test_push_with_login_command(self, runner, mock_env_vars):
        with patch("batch_images.cli.commands.images.RegistryPublisher") as mock_publisher:
            mock_publisher.return_value.publish.return_value = PushResult(repository_url=REPO)
            result = runner.invoke(app, ["push", "-r", REPO, "--login-command", "login -u x"])

        assert result.exit_code == 0, result.output
        target, login = mock_publisher.call_args[0]
        assert target.repository_url == REPO
        assert isinstance(login, StaticLoginCommand)

    def test_push_with_ecr_region(self, runner, mock_env_vars):
        repo = "123456789012.dkr.ecr.us-east-1.amazonaws.com/svc"
        with patch("batch_images.cli.commands.images.RegistryPublisher") as mock_publisher:
            mock_publisher.return_value.publish.return_value = PushResult(repository_url=repo)
            result = runner.invoke(app, ["push", "-r", repo, "--region", "us-east-1"])

        assert result.exit_code == 0, result.output
        login = mock_publisher.call_args[0][1]
        assert isinstance(login, EcrLoginCommand)
        assert login.registry == "123456789012.dkr.ecr.us-east-1.amazonaws.com"

    def test_push_requires_login(self, runner, mock_env_vars):
        result = runner.invoke(app, ["push", "-r", REPO])

        assert result.exit_code == 1
        assert "No registry login configured" in result.output


class TestDeployCommand:
    """Tests for batch-images deploy."""

    def test_deploy_builds_then_pushes(self, runner, packaged_service, mock_env_vars):
        calls = []
        with patch("batch_images.cli.commands.images.BatchImageBuilder") as mock_builder, patch(
            "batch_images.cli.commands.images.RegistryPublisher"
        ) as mock_publisher:
            mock_builder.return_value.build_all.side_effect = lambda: calls.append("build") or []
            mock_publisher.return_value.publish.side_effect = lambda: calls.append(
                "push"
            ) or PushResult(repository_url=REPO)

            result = runner.invoke(
                app,
                [
                    "deploy",
                    "--service-path",
                    str(packaged_service),
                    "-r",
                    REPO,
                    "--login-command",
                    "login -u x",
                ],
            )

        assert result.exit_code == 0, result.output
        assert calls == ["build", "push"]

    def test_deploy_stops_when_build_fails(self, runner, packaged_service, mock_env_vars):
        with patch("batch_images.cli.commands.images.BatchImageBuilder") as mock_builder, patch(
            "batch_images.cli.commands.images.RegistryPublisher"
        ) as mock_publisher:
            mock_builder.return_value.build_all.side_effect = ToolNotFound("docker")
            result = runner.invoke(
                app,
                ["deploy", "--service-path", str(packaged_service), "-r", REPO, "--login-command", "x"],
            )

        assert result.exit_code == 1
        mock_publisher.assert_not_called()


def test_version_flag(runner):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "batch-images v" in result.output
