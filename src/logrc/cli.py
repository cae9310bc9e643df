"""Command line interface for LogRC."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from logrc import APP_NAME
from logrc.archive import group_and_compress
from logrc.clock import RunClock
from logrc.config import ConfigError, ConfigManager, LoggingSettings
from logrc.logs import configure_logging
from logrc.maintenance import relocate, sweep
from logrc.runner import MaintenanceRunner, RunSummary

console = Console()

_DIRECTORY = click.Path(exists=True, file_okay=False, path_type=Path)
_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (defaults to $LOGRC_CONFIG or ./logrc.yaml).",
)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands.

    Args:
        command: Command name to include in the summary.
        root: Target root path relevant to the command.
        metrics: Ordered mapping of metric names to values.

    Returns:
        str: Rich-formatted summary string.
    """

    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _console_logging(quiet: bool) -> None:
    configure_logging(LoggingSettings(level="INFO", console=not quiet), None, APP_NAME)


def _render_run_summary(summary: RunSummary) -> None:
    table = Table(title="Maintenance run")
    table.add_column("Directory")
    table.add_column("Token")
    table.add_column("Removed", justify="right")
    table.add_column("Archives", justify="right")
    table.add_column("Deferred", justify="right")
    table.add_column("Moved", justify="right")
    table.add_column("Status")

    for outcome in summary.directories:
        removed = sum(
            len(report.removed)
            for report in (outcome.sweep, outcome.destination_sweep)
            if report is not None
        )
        archives = outcome.compress.archives_created if outcome.compress else "-"
        deferred = outcome.compress.files_deferred if outcome.compress else "-"
        moved = len(outcome.relocation.moved) if outcome.relocation else "-"
        if outcome.skipped:
            status = "[yellow]skipped (invalid settings)[/yellow]"
        elif outcome.errors or (outcome.compress and outcome.compress.archives_failed):
            status = "[red]errors[/red]"
        else:
            status = "[green]ok[/green]"
        table.add_row(
            outcome.path,
            outcome.token,
            str(removed),
            str(archives),
            str(deferred),
            str(moved),
            status,
        )

    console.print(table)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="logrc")
def cli() -> None:
    """LogRC removes, compresses and relocates log files on a schedule."""


@cli.command()
@_CONFIG_OPTION
@click.option("--quiet", is_flag=True, help="Suppress the summary table.")
def run(config_path: Path | None, quiet: bool) -> None:
    """Run retention, compression and relocation for every configured directory.

    Raises:
        click.ClickException: If the configuration cannot be loaded or is invalid.
    """
    manager = ConfigManager(config_path)
    try:
        config = manager.load()
    except ConfigError as exc:
        raise click.ClickException(f"Failed to load config: {exc}") from exc

    clock = RunClock.capture()
    log_path = configure_logging(
        config.logging,
        Path(config.application.log_dir),
        config.application.name,
        clock,
    )
    summary = MaintenanceRunner(clock).run(config)

    if quiet:
        return
    _render_run_summary(summary)
    console.print(
        _format_summary_line(
            "Run",
            manager.config_path,
            {
                "directories": len(summary.directories),
                "skipped": sum(1 for outcome in summary.directories if outcome.skipped),
                "errors": summary.error_count,
                "log": log_path,
            },
        )
    )


@cli.command()
@click.argument("path", type=_DIRECTORY)
@click.option("--token", required=True, help="Text that file names must contain.")
@click.option("--quiet", is_flag=True, help="Suppress log output.")
def compress(path: Path, token: str, quiet: bool) -> None:
    """Bundle files under PATH into one ZIP archive per creation date."""
    _console_logging(quiet)
    report = group_and_compress(path, token)
    console.print(
        _format_summary_line(
            "Compress",
            path,
            {
                "archives": report.archives_created,
                "files": report.files_archived,
                "deferred": report.files_deferred,
                "failed": report.archives_failed,
            },
        )
    )
    if report.archives_failed:
        raise SystemExit(1)


@cli.command("sweep")
@click.argument("path", type=_DIRECTORY)
@click.option("--token", required=True, help="Text that file names must contain.")
@click.option(
    "--days",
    required=True,
    type=click.IntRange(1, 365),
    help="Delete files last modified more than this many days ago.",
)
@click.option("--quiet", is_flag=True, help="Suppress log output.")
def sweep_command(path: Path, token: str, days: int, quiet: bool) -> None:
    """Delete files in PATH older than the retention window."""
    _console_logging(quiet)
    try:
        report = sweep(path, token, days)
    except OSError as exc:
        raise click.ClickException(f"There was an issue removing the files: {exc}") from exc
    console.print(
        _format_summary_line(
            "Sweep", path, {"removed": len(report.removed), "failed": len(report.failed)}
        )
    )


@cli.command("relocate")
@click.argument("source", type=_DIRECTORY)
@click.argument("destination", type=_DIRECTORY)
@click.option("--token", required=True, help="Text that file names must contain.")
@click.option("--quiet", is_flag=True, help="Suppress log output.")
def relocate_command(source: Path, destination: Path, token: str, quiet: bool) -> None:
    """Move files not created today from SOURCE to DESTINATION."""
    _console_logging(quiet)
    try:
        report = relocate(source, destination, token)
    except OSError as exc:
        raise click.ClickException(f"There was an issue moving the files: {exc}") from exc
    console.print(
        _format_summary_line(
            "Relocate",
            source,
            {
                "moved": len(report.moved),
                "kept_today": len(report.kept_today),
                "failed": len(report.failed),
            },
        )
    )


@cli.group()
def config() -> None:
    """Inspect and create LogRC configuration files."""


@config.command("view")
@_CONFIG_OPTION
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(config_path: Path | None, no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager(config_path)
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("init")
@_CONFIG_OPTION
def config_init(config_path: Path | None) -> None:
    """Write a default configuration file unless one already exists."""
    manager = ConfigManager(config_path)
    if manager.config_path.exists():
        console.print(f"[yellow]Configuration already exists at {manager.config_path}.[/yellow]")
        return
    manager.ensure_exists()
    console.print(f"[green]Wrote default configuration to {manager.config_path}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
