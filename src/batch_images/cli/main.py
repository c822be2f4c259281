"""Main CLI entry point for the batch-images CLI."""

from importlib import metadata
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console


def get_version() -> str:
    """Get the package version from metadata."""
    try:
        return metadata.version("serverless-batch-images")
    except metadata.PackageNotFoundError:
        return "unknown"


console = Console()

# command: batch-images
app = typer.Typer(
    name="batch-images",
    help="Build and push container images for serverless batch functions",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

CONFIG_HELP = "Service state JSON (default: .serverless/serverless-state.json)"


@app.command("build")
def build_cmd(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    service_path: Optional[Path] = typer.Option(
        None, "--service-path", help="Service root directory"
    ),
    repository_url: Optional[str] = typer.Option(
        None, "--repository-url", "-r", help="Image repository URL"
    ),
):
    """Build the default and custom images of the service."""
    from .commands.images import build_command

    return build_command(config, service_path, repository_url)


@app.command("push")
def push_cmd(
    repository_url: Optional[str] = typer.Option(
        None, "--repository-url", "-r", help="Image repository URL"
    ),
    region: Optional[str] = typer.Option(
        None, "--region", help="AWS region used for ECR login"
    ),
    login_command: Optional[str] = typer.Option(
        None, "--login-command", help="docker login arguments, used verbatim"
    ),
):
    """Log into the registry and push all tags of the repository."""
    from .commands.images import push_command

    return push_command(repository_url, region, login_command)


@app.command("deploy")
def deploy_cmd(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    service_path: Optional[Path] = typer.Option(
        None, "--service-path", help="Service root directory"
    ),
    repository_url: Optional[str] = typer.Option(
        None, "--repository-url", "-r", help="Image repository URL"
    ),
    region: Optional[str] = typer.Option(
        None, "--region", help="AWS region used for ECR login"
    ),
    login_command: Optional[str] = typer.Option(
        None, "--login-command", help="docker login arguments, used verbatim"
    ),
):
    """Build all images, then push them."""
    from .commands.images import deploy_command

    return deploy_command(config, service_path, repository_url, region, login_command)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    """Build and push container images for serverless batch functions."""
    if version:
        console.print(f"batch-images v{get_version()}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("Use [bold]batch-images --help[/bold] to see available commands.")


if __name__ == "__main__":
    app()
