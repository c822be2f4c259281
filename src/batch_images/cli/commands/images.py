"""batch-images build/push/deploy commands."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ...build import (
    BatchImageBuilder,
    BuildResult,
    EcrLoginCommand,
    LoginCommandProvider,
    RegistryPublisher,
    StaticLoginCommand,
)
from ...config import (
    PACKAGE_DIR_NAME,
    SERVICE_STATE_FILE,
    BatchImageSettings,
    RegistryTarget,
    load_service_config,
)
from ...core.exceptions import BatchImageError

console = Console()


def build_command(
    config: Optional[Path],
    service_path: Optional[Path],
    repository_url: Optional[str],
):
    """Build every image of the service."""
    try:
        settings = _load_settings(config, service_path)
        target = _resolve_target(repository_url)
        results = BatchImageBuilder(settings, target).build_all()
    except BatchImageError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _display_build_results(results)


def push_command(
    repository_url: Optional[str],
    region: Optional[str],
    login_command: Optional[str],
):
    """Push all tags of the repository."""
    try:
        target = _resolve_target(repository_url)
        login = _resolve_login(target, region, login_command)
        result = RegistryPublisher(target, login).publish()
    except BatchImageError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Pushed [bold]{result.repository_url}[/bold]")


def deploy_command(
    config: Optional[Path],
    service_path: Optional[Path],
    repository_url: Optional[str],
    region: Optional[str],
    login_command: Optional[str],
):
    """Build then push."""
    build_command(config, service_path, repository_url)
    push_command(repository_url, region, login_command)


def _load_settings(config: Optional[Path], service_path: Optional[Path]) -> BatchImageSettings:
    if config is None:
        config = (service_path or Path.cwd()) / PACKAGE_DIR_NAME / SERVICE_STATE_FILE
    return load_service_config(config, service_path)


def _resolve_target(repository_url: Optional[str]) -> RegistryTarget:
    if repository_url:
        return RegistryTarget(repository_url=repository_url)

    target = RegistryTarget.from_environment()
    if target is None:
        console.print("[red]Error:[/red] No image repository configured")
        console.print("Pass --repository-url or set BATCH_IMAGES_REPOSITORY_URL")
        raise typer.Exit(1)
    return target


def _resolve_login(
    target: RegistryTarget, region: Optional[str], login_command: Optional[str]
) -> LoginCommandProvider:
    if login_command:
        return StaticLoginCommand(login_command)
    if region:
        return EcrLoginCommand(region=region, registry=target.registry_host)

    console.print("[red]Error:[/red] No registry login configured")
    console.print("Pass --region for ECR login or --login-command")
    raise typer.Exit(1)


def _display_build_results(results: List[BuildResult]) -> None:
    table = Table(title="Built images")
    table.add_column("Tag", style="cyan")
    table.add_column("Image")
    table.add_column("Dockerfile", style="dim")

    for result in results:
        table.add_row(result.tag, result.image, str(result.dockerfile))

    console.print(table)
