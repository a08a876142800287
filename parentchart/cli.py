"""CLI entrypoint for ack-parent-chart-updater."""

import logging

import typer

from . import __version__
from .config import Config
from .errors import ChartUpdateError
from .models import UpdateResult
from .updater import run

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="ack-parent-chart-updater",
    help="Sync the parent Helm chart with its controller sub-charts and push the result.",
)


def _print_summary(result: UpdateResult) -> None:
    if not result.changes:
        typer.echo("✅ All dependencies are up to date")
    for change in result.added:
        typer.echo(f"  ➕ {change.name} {change.new_version}")
    for change in result.upgraded:
        typer.echo(f"  ⬆️  {change.name}: {change.old_version} → {change.new_version} [{change.severity.label}]")

    typer.echo(
        f"📦 Chart version: {result.old_chart_version} → {result.new_chart_version} "
        f"({result.severity.label})"
    )


@app.callback(invoke_without_command=True)
def update(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would change without writing, rebuilding or pushing",
    ),
) -> None:
    """Update chart dependencies, rebuild them and push a commit."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = Config.from_env()
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"🔍 Scanning {config.workspace_dir} for controller charts...")

    try:
        result = run(config, dry_run=dry_run)
    except ChartUpdateError as e:
        logger.debug("Chart update failed", exc_info=True)
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    _print_summary(result)

    if dry_run:
        typer.echo("\n🏃 Dry run mode - no changes made")
        return

    typer.echo(f"🚀 Pushed chart update to {config.github_org}/{config.github_repo}:{config.commit_target_branch}")


@app.command()
def version() -> None:
    """Show ack-parent-chart-updater version."""
    typer.echo(f"ack-parent-chart-updater v{__version__}")


def main() -> None:
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
