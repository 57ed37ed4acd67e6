"""
Spec tree reporting.

Renders a tree after a run, one line per node:

    Given an integer, set to zero (0ms, ok)
      When the integer is incremented (0ms, ok)
        It should be 1 (0ms, FAILED: 'assert_equal failed. Expected: <1>. Actual: <2>.')

Each line shows the average duration over every execution of the node, a
``+`` when more than one distinct message was recorded, the aggregate state
word and the first message. A subtree passes only if every node in it
passed.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Sequence, Tuple

import yaml

from spectree.core.models import ExecState, ExecutionRecord, NodeReport, RunResult

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from spectree.core.node import Node

INDENT = "  "


def distinct_messages(records: Sequence[ExecutionRecord]) -> List[str]:
    """Distinct non-empty messages in first-seen order."""
    messages: List[str] = []
    for record in records:
        if record.message is not None and record.message not in messages:
            messages.append(record.message)
    return messages


def average_ms(records: Sequence[ExecutionRecord]) -> int:
    if not records:
        return 0
    return int(sum(record.elapsed_ms for record in records) / len(records))


def format_node_line(node: "Node", depth: int) -> str:
    messages = distinct_messages(node.results)
    line = f"{INDENT * depth}{node.kind.label} {node.description} ({average_ms(node.results)}ms, "
    if len(messages) > 1:
        line += "+"
    line += node.state.word
    if messages:
        line += f": '{messages[0]}'"
    return line + ")"


def render_report(root: "Node") -> Tuple[str, bool]:
    """
    Render the text report for a tree.

    Args:
        root: Node to render (normally the tree root)

    Returns:
        Tuple of (report text, True if every node in the tree passed)
    """
    lines: List[str] = []
    passed = _render(root, 0, lines)
    return "\n".join(lines), passed


def _render(node: "Node", depth: int, lines: List[str]) -> bool:
    lines.append(format_node_line(node, depth))
    result = True
    for child in node.children:
        result = _render(child, depth + 1, lines) and result
    return result and node.state == ExecState.PASSED


def build_report(node: "Node") -> NodeReport:
    """Build the structured report for a node and its subtree."""
    children = [build_report(child) for child in node.children]
    return NodeReport(
        kind=node.kind.label,
        description=node.description,
        state=node.state.word,
        passed=node.state == ExecState.PASSED and all(child.passed for child in children),
        runs=len(node.results),
        average_ms=average_ms(node.results),
        messages=distinct_messages(node.results),
        children=children,
    )


def save_report_to_yaml(result: RunResult, file_path: str) -> None:
    """
    Save a run result to a YAML file.

    Args:
        result: Run result to save
        file_path: Output file path
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(result.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)


def load_report_from_yaml(file_path: str) -> RunResult:
    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return RunResult.model_validate(data)


__all__ = [
    "average_ms",
    "build_report",
    "distinct_messages",
    "format_node_line",
    "load_report_from_yaml",
    "render_report",
    "save_report_to_yaml",
]
