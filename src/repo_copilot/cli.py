"""CLI for repo-copilot."""

import json
import sys
from typing import NoReturn

import click
import structlog
import yaml

from repo_copilot import __version__
from repo_copilot.config.logging import configure_logging
from repo_copilot.core.exceptions import RepoCopilotError
from repo_copilot.core.models.manifest import DisplayFormat
from repo_copilot.core.models.repository import Repository

logger = structlog.get_logger(__name__)

FORMAT_CHOICES = [f.value for f in DisplayFormat]


def _create_service():
    """Create the manifest service for the configured directory."""
    from repo_copilot.config.settings import get_settings
    from repo_copilot.repositories.manifest import ManifestRepository
    from repo_copilot.services.manifest import ManifestService

    settings = get_settings()
    return ManifestService(store=ManifestRepository(settings.config_path))


def _fail(message: str, error: RepoCopilotError | None = None) -> NoReturn:
    click.secho(message, fg="red", err=True)
    if error is not None:
        logger.debug("Command failed", error=type(error).__name__, **error.details)
    sys.exit(1)


def _render(repositories: list[Repository], fmt: str) -> str:
    records = [r.model_dump(mode="json") for r in repositories]
    if fmt == DisplayFormat.JSON.value:
        return json.dumps(records, indent=2)
    if fmt == DisplayFormat.YAML.value:
        return yaml.safe_dump(records, default_flow_style=False, sort_keys=False).rstrip()

    headers = ("NAME", "OWNER", "HOST", "PATH")
    rows = [(r.name, r.owner, r.host, r.path) for r in repositories]
    widths = [max(len(str(cell)) for cell in column) for column in zip(headers, *rows)]
    lines = [
        "  ".join(str(cell).ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in (headers, *rows)
    ]
    return "\n".join(lines)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="repo")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """repo: keep track of your locally cloned Git repositories."""
    from repo_copilot.config.settings import get_settings

    log_level = "DEBUG" if verbose else get_settings().log_level
    configure_logging(log_level=log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_command(ctx: click.Context, command: str | None) -> None:
    """Show help information, for all commands or just COMMAND."""
    parent = ctx.parent
    if command is None:
        click.echo(parent.get_help())
        return

    target = cli.get_command(parent, command)
    if target is None:
        raise click.UsageError(f"Unknown command: {command}", ctx=parent)
    with click.Context(target, info_name=command, parent=parent) as sub_ctx:
        click.echo(target.get_help(sub_ctx))


@cli.command()
@click.option("--base-dir", "--baseDir", "-b", "base_dir", help="Directory clones live under")
@click.option("--username", "-u", help="Git user.name for clones")
@click.option("--email", "-e", help="Git user.email for clones")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
def init(base_dir: str | None, username: str | None, email: str | None, force: bool) -> None:
    """Initialize configuration."""
    service = _create_service()
    try:
        config = service.init(base_dir=base_dir, username=username, email=email, force=force)
    except RepoCopilotError as e:
        _fail(f"Failed to initialize configuration: {e}", e)

    click.secho("Configuration initialized successfully:", fg="green")
    click.echo(f"  Base Directory: {click.style(config.base_dir, fg='cyan')}")
    if config.username:
        click.echo(f"  Username: {click.style(config.username, fg='cyan')}")
    if config.email:
        click.echo(f"  Email: {click.style(config.email, fg='cyan')}")
    click.echo(f"  Config Directory: {click.style(str(service.store.config_dir), fg='cyan')}")


@cli.command()
@click.argument("url")
@click.option("--clone", is_flag=True, help="Also clone the repository into the base directory")
def add(url: str, clone: bool) -> None:
    """Add a repository.

    URL takes the form [scheme://]host/owner/name[.git], for example
    github.com/atian25/repo-copilot.
    """
    service = _create_service()
    try:
        repository = service.add(url, clone=clone)
    except RepoCopilotError as e:
        _fail(f"Failed to add repository: {e}", e)

    click.secho("Repository added successfully:", fg="green")
    click.echo(f"  Name: {click.style(repository.name, fg='cyan')}")
    click.echo(f"  URL: {click.style(repository.url, fg='cyan')}")
    click.echo(f"  Path: {click.style(repository.path, fg='cyan')}")


@cli.command()
@click.argument("name")
@click.option("--force", "-f", is_flag=True, help="Also delete the local directory")
@click.option("--yes", "-y", is_flag=True, help="Delete even with uncommitted changes")
def remove(name: str, force: bool, yes: bool) -> None:
    """Remove a repository from management.

    NAME is the repository name, or its URL when several tracked
    repositories share a name.
    """
    service = _create_service()
    try:
        repository = service.remove(name, force=force, ignore_changes=yes)
    except RepoCopilotError as e:
        _fail(f"Failed to remove repository: {e}", e)

    suffix = " and local files deleted" if force else ""
    click.secho(f'Repository "{repository.name}" has been removed from management{suffix}', fg="green")


@cli.command("list")
@click.option("--format", "-o", "fmt", type=click.Choice(FORMAT_CHOICES), help="Output format")
def list_command(fmt: str | None) -> None:
    """List all repositories."""
    service = _create_service()
    try:
        repositories = service.list_repositories()
        fmt = fmt or DisplayFormat(service.load_config().format).value
    except RepoCopilotError as e:
        _fail(f"Failed to list repositories: {e}", e)

    if not repositories:
        click.echo("No repositories tracked.")
        return
    click.echo(_render(repositories, fmt))


@cli.command()
@click.argument("keyword")
@click.option("--format", "-o", "fmt", type=click.Choice(FORMAT_CHOICES), help="Output format")
def find(keyword: str, fmt: str | None) -> None:
    """Search repositories by name, owner, host or URL."""
    service = _create_service()
    try:
        repositories = service.find(keyword)
        fmt = fmt or DisplayFormat(service.load_config().format).value
    except RepoCopilotError as e:
        _fail(f"Failed to search repositories: {e}", e)

    if not repositories:
        click.echo(f'No repositories match "{keyword}".')
        return
    click.echo(_render(repositories, fmt))


@cli.command("config")
def config_command() -> None:
    """Show the current configuration."""
    service = _create_service()
    try:
        config = service.load_config()
    except RepoCopilotError as e:
        _fail(f"Failed to read configuration: {e}", e)

    click.echo(f"# {service.store.config_file}")
    payload = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    click.echo(yaml.safe_dump(payload, default_flow_style=False, sort_keys=False).rstrip())


if __name__ == "__main__":
    cli()
