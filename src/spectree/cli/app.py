"""
spectree CLI: run spec trees and inspect saved reports.

- run: import a spec by target, run it and print the report tree
- show: render a report previously saved with --save
"""

from __future__ import annotations

import typer
from rich.console import Console

from spectree.cli.formatters import build_report_tree, build_summary_table, format_verdict
from spectree.cli.loading import load_target_or_exit
from spectree.config import RunConfig, load_config
from spectree.core.engine import SpecRunner
from spectree.core.models import ExecutionMode
from spectree.core.report import load_report_from_yaml
from spectree.errors import ConfigError, SpecFailed
from spectree.utils.logging import configure_logging

app = typer.Typer(help="spectree CLI: run given/when/it spec trees and inspect saved reports.")
console = Console()


def _load_config(config_path: str | None) -> RunConfig:
    try:
        return load_config(config_path) if config_path else RunConfig.from_env()
    except ConfigError as err:
        console.print(f"[red]Failed to load config:[/red] {err}")
        raise typer.Exit(code=2)


@app.command()
def run(
    target: str = typer.Argument(..., help="Spec to run, as 'package.module:attribute'"),
    mode: ExecutionMode | None = typer.Option(None, "--mode", "-m", help="Execution mode (defaults to config)"),
    config_path: str | None = typer.Option(None, "--config", help="Path to a spectree YAML config file"),
    save: str | None = typer.Option(None, "--save", help="Write the report to this YAML file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Run a spec tree and print its report."""
    configure_logging(verbose)
    config = _load_config(config_path)
    # The CLI prints its own rendering instead of the plain text report
    config = config.model_copy(update={"echo": False, "report_path": save or config.report_path})

    node = load_target_or_exit(target, console=console)

    try:
        result = SpecRunner(config, console).run(node, mode)
    except SpecFailed as failed:
        result = failed.result

    console.print(build_report_tree(result.tree))
    console.print(build_summary_table(result))
    console.print(format_verdict(result))
    if config.report_path:
        console.print(f"Saved: {config.report_path}")

    if not result.passed:
        raise typer.Exit(code=1)


@app.command()
def show(
    file_path: str = typer.Argument(..., help="Report YAML file written by 'run --save'"),
) -> None:
    """Render a saved report."""
    try:
        result = load_report_from_yaml(file_path)
    except FileNotFoundError:
        console.print(f"[red]Report file not found:[/red] {file_path}")
        raise typer.Exit(code=1)

    console.print(f"[bold]Report:[/bold] {file_path}")
    console.print(f"Date: {result.created_at}")
    console.print(build_report_tree(result.tree))
    console.print(build_summary_table(result))
    console.print(format_verdict(result))


__all__ = ["app"]
