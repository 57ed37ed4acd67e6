"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from spectree.core.models import NodeReport, RunResult

STATE_STYLES = {
    "ok": "green",
    "FAILED": "red",
    "exception": "yellow",
    "not run": "dim",
}

STATE_ORDER = ["ok", "FAILED", "exception", "not run"]


def format_state(state: str) -> str:
    style = STATE_STYLES.get(state, "white")
    return f"[{style}]{escape(state)}[/{style}]"


def format_node_label(report: NodeReport) -> str:
    """Rich markup for one report node, matching the text report line."""
    marker = "+" if report.has_multiple_messages else ""
    label = (
        f"[bold]{escape(report.kind)}[/bold] {escape(report.description)} "
        f"[dim]({report.average_ms}ms)[/dim] {marker}{format_state(report.state)}"
    )
    if report.messages:
        label += f" [dim]'{escape(report.messages[0])}'[/dim]"
    return label


def build_report_tree(report: NodeReport) -> Tree:
    tree = Tree(format_node_label(report))
    _add_children(tree, report)
    return tree


def _add_children(branch: Tree, report: NodeReport) -> None:
    for child in report.children:
        _add_children(branch.add(format_node_label(child)), child)


def build_summary_table(result: RunResult) -> Table:
    table = Table(title="Summary")
    table.add_column("State")
    table.add_column("Nodes", justify="right")

    counts = result.tree.count_states()
    for state in STATE_ORDER:
        if state in counts:
            table.add_row(format_state(state), str(counts[state]))
    return table


def format_verdict(result: RunResult) -> str:
    if result.passed:
        return f"[green]PASSED[/green] {result.scenarios} scenario(s), {result.executions} execution(s) ({result.mode.value})"
    detail = f" (aborted at {escape(result.aborted_at)})" if result.aborted_at else ""
    return f"[red]FAILED[/red] {result.scenarios} scenario(s), {result.executions} execution(s) ({result.mode.value}){detail}"


__all__ = [
    "build_report_tree",
    "build_summary_table",
    "format_node_label",
    "format_state",
    "format_verdict",
]
