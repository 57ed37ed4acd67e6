"""
Spec tree execution.

Two disciplines walk a tree built from ``given``/``when``/``it`` calls:

Isolated:
    Every scenario is replayed from the root, so side effects of one
    assertion never reach another. A scenario holds the given and when steps
    visited so far plus its own assertion; when steps are cumulative.

Quick:
    The whole tree is linearized in pre-order and executed front to back.
    When a node stops progress, the given/when steps before the cursor are
    replayed to rebuild the fixture and the scan resumes after the stopping
    node. All-passing trees run in linear time; assertions are not isolated
    from each other.

Both record every execution on the nodes, render the report and raise
``SpecFailed`` when the verdict fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from rich.console import Console

from spectree.config import RunConfig
from spectree.core.models import ExecState, ExecutionMode, NodeKind, RunResult
from spectree.core.report import build_report, render_report, save_report_to_yaml
from spectree.errors import SpecFailed
from spectree.utils.logging import log_calls

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from spectree.core.node import Node

logger = logging.getLogger(__name__)


def gather_scenarios(root: "Node") -> List[List["Node"]]:
    """
    Enumerate scenarios in tree order, one per assertion node.

    Given and when steps are cumulative: once the walk has visited one, it
    stays in every later scenario, so each when runs in the context of the
    ones attached before it. An assertion only ends its own scenario and is
    dropped before the walk continues into its children.
    """
    scenarios: List[List["Node"]] = []
    path: List["Node"] = []

    def visit(node: "Node") -> None:
        path.append(node)
        if node.kind.is_assertion:
            scenarios.append(list(path))
            path.pop()
        for child in node.children:
            visit(child)

    visit(root)
    return scenarios


def linearize(root: "Node") -> List["Node"]:
    """Flatten the whole tree in pre-order."""
    return list(root.iter_nodes())


def run_scenario(scenario: Sequence["Node"]) -> Optional["Node"]:
    """Execute a scenario in order. Returns the node that halted it, if any."""
    for node in scenario:
        if not node.execute():
            return node
    return None


@log_calls()
def run_isolated(root: "Node") -> int:
    """
    Run every scenario of the tree from the root.

    Returns:
        Number of scenarios executed
    """
    scenarios = gather_scenarios(root)
    for index, scenario in enumerate(scenarios):
        stopped = run_scenario(scenario)
        if stopped is not None:
            logger.info("Scenario %d stopped at %s", index, stopped.describe())
    return len(scenarios)


@log_calls()
def run_quick(root: "Node") -> Optional["Node"]:
    """
    Run the tree as one linear scan with fixture replay after each stop.

    Returns:
        The given/when node whose replay failed (the run was aborted), or
        None when the scan reached the end of the tree
    """
    sequence = linearize(root)
    end = 0
    while end < len(sequence):
        # Rebuild the fixture from the given/when steps already passed
        for node in sequence[:end]:
            if node.kind <= NodeKind.WHEN and not node.execute():
                logger.warning("Replay of %s failed; aborting run", node.describe())
                return node

        while end < len(sequence) and sequence[end].execute():
            end += 1

        if end < len(sequence):
            logger.info("Progress stopped at %s", sequence[end].describe())
        end += 1
    return None


def abort_notice(node: "Node") -> str:
    """Report line for a quick run stopped by a failing given/when replay."""
    if any(record.state == ExecState.PASSED for record in node.results):
        return f"Run aborted: replaying '{node.describe()}' failed."
    return f"Run aborted: '{node.describe()}' never passed, so the steps after it could not be reached."


class SpecRunner:
    """Runs spec trees and produces their verdicts."""

    def __init__(self, config: Optional[RunConfig] = None, console: Optional[Console] = None):
        self.config = config or RunConfig.from_env()
        self.console = console or Console()

    def run(self, node: "Node", mode: ExecutionMode | str | None = None) -> RunResult:
        """
        Run the tree ``node`` belongs to.

        Args:
            node: Any node of the tree; the run starts at its root
            mode: Execution mode; defaults to the configured mode

        Returns:
            The run result when every node passed

        Raises:
            SpecFailed: With the rendered report, when any node did not pass
                or a quick run was aborted
        """
        root = node.root
        mode = ExecutionMode(mode) if mode is not None else self.config.mode
        logger.info("Running spec '%s' (%s)", root.description, mode.value)

        aborted_at = None
        if mode == ExecutionMode.ISOLATED:
            scenarios = run_isolated(root)
        else:
            scenarios = len(gather_scenarios(root))
            aborted_at = run_quick(root)

        report, passed = render_report(root)
        if aborted_at is not None:
            report += "\n" + abort_notice(aborted_at)

        result = RunResult(
            mode=mode,
            passed=passed and aborted_at is None,
            aborted=aborted_at is not None,
            aborted_at=aborted_at.describe() if aborted_at is not None else None,
            scenarios=scenarios,
            executions=sum(len(n.results) for n in root.iter_nodes()),
            report=report,
            tree=build_report(root),
        )

        if self.config.echo:
            self.console.print(report, markup=False, highlight=False, soft_wrap=True)
        if self.config.report_path:
            save_report_to_yaml(result, self.config.report_path)
            logger.info("Saved report to %s", self.config.report_path)

        if not result.passed:
            raise SpecFailed(report, result)
        return result


__all__ = [
    "SpecRunner",
    "abort_notice",
    "gather_scenarios",
    "linearize",
    "run_isolated",
    "run_quick",
    "run_scenario",
]
