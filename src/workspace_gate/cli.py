"""
Workspace Gate CLI - Main entry point.

Commands:
    run         Run lint, test and format on every workspace (default)
    init        Write a default config file
    workspaces  List configured workspaces
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workspace_gate.config import DEFAULT_CONFIG_PATH, GateConfig
from workspace_gate.errors import ConfigError

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Send structured logs to stderr so stdout carries only progress lines."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_config(ctx: click.Context) -> GateConfig:
    try:
        config = GateConfig.load(ctx.obj["config_path"])
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="'--config'") from exc
    return config.with_root(ctx.obj["root"])


@click.group(invoke_without_command=True)
@click.version_option(version="0.1.0")
@click.option("--config", "-c", type=Path, help="Path to config file")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory workspace paths are relative to",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def main(
    ctx: click.Context,
    config: Path | None,
    root: Path | None,
    verbose: bool,
) -> None:
    """Workspace Gate - fail-fast lint, test and format across workspaces"""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config or DEFAULT_CONFIG_PATH
    ctx.obj["root"] = root

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Run lint, test and format on every workspace, stop at first failure."""
    from workspace_gate.gates.collaborators import default_collaborators
    from workspace_gate.gates.runner import GateRunner

    config = _load_config(ctx)
    runner = GateRunner(
        config.workspaces,
        collaborators=default_collaborators(cwd=config.root),
        console=console,
    )
    result = runner.run()
    ctx.exit(result.exit_code)


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Write a default config file."""
    from workspace_gate.init import initialize_config

    if initialize_config(ctx.obj["config_path"]):
        console.print("[green]✓[/green] Workspace Gate initialized")


@main.command()
@click.pass_context
def workspaces(ctx: click.Context) -> None:
    """List configured workspaces in run order."""
    config = _load_config(ctx)

    if not config.workspaces:
        console.print("[dim]No workspaces configured[/dim]")
        return

    table = Table(title=escape(f"Workspaces (root: {config.root})"))
    table.add_column("#", justify="right")
    table.add_column("Workspace", style="cyan")
    table.add_column("Manifest")

    for index, workspace in enumerate(config.workspaces, start=1):
        found = (config.root / workspace).exists()
        table.add_row(
            str(index),
            escape(workspace),
            "[green]found[/green]" if found else "[red]missing[/red]",
        )

    console.print(table)


if __name__ == "__main__":
    main()
