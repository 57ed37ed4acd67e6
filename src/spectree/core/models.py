"""
Spec tree data models.

These models describe the pieces the engine and reporter share:
- NodeKind: what a node stands for (given, when, it, the exception)
- ExecState: outcome severity of a node execution
- ExecutionMode: which execution discipline walks the tree
- ExecutionRecord: one entry in a node's result log
- NodeReport / RunResult: structured report of a finished run

Ordering:
    Both NodeKind and ExecState are ordered. NodeKind order decides where a
    new node attaches; ExecState order decides which outcome a node reports
    after running several times.

    NodeKind:  GIVEN(0) < WHEN(1) < IT(2) < THE_EXCEPTION(3)
    ExecState: NOT_RUN(0) < PASSED(1) < FAILED(2) < EXCEPTION(3)
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class NodeKind(IntEnum):
    """Kind of step a node represents."""

    GIVEN = 0  # Initial condition
    WHEN = 1  # Action / state transition
    IT = 2  # Assertion
    THE_EXCEPTION = 3  # Assertion about a previously captured exception

    @property
    def label(self) -> str:
        """Label used in the text report."""
        return _KIND_LABELS[self]

    @property
    def is_assertion(self) -> bool:
        """Assertion kinds end a scenario."""
        return self >= NodeKind.IT

    def can_parent(self, precedence: NodeKind) -> bool:
        """
        Attachment rule.

        A node attached with ``precedence`` hangs beneath the nearest node
        whose kind sorts strictly before ``precedence``. Equal or later kinds
        are walked past, which is what turns a second ``it`` chained off the
        first into its sibling.
        """
        return self < precedence


_KIND_LABELS = {
    NodeKind.GIVEN: "Given",
    NodeKind.WHEN: "When",
    NodeKind.IT: "It",
    NodeKind.THE_EXCEPTION: "The exception",
}


class ExecState(IntEnum):
    """Outcome of executing a node, ordered by severity."""

    NOT_RUN = 0
    PASSED = 1
    FAILED = 2  # Assertion failure or inconclusive signal
    EXCEPTION = 3  # Any other exception

    @property
    def word(self) -> str:
        return _STATE_WORDS[self]

    @staticmethod
    def worst(current: ExecState, observed: ExecState) -> ExecState:
        """Return the more severe of two states."""
        return current if current >= observed else observed


_STATE_WORDS = {
    ExecState.NOT_RUN: "not run",
    ExecState.PASSED: "ok",
    ExecState.FAILED: "FAILED",
    ExecState.EXCEPTION: "exception",
}


class ExecutionMode(str, Enum):
    """Execution discipline used to walk a spec tree."""

    QUICK = "quick"  # Linear scan, prefix replay after a failure
    ISOLATED = "isolated"  # Every scenario replayed from the root


class ExecutionRecord(BaseModel):
    """One execution of a node's action."""

    elapsed_ms: float
    state: ExecState
    message: Optional[str] = None


class NodeReport(BaseModel):
    """
    Structured report for one node and its subtree.

    Mirrors the text report line for the node: label, description, average
    duration, the distinct failure messages and the aggregate state word.
    """

    kind: str
    description: str
    state: str
    passed: bool
    runs: int = 0
    average_ms: int = 0
    messages: List[str] = Field(default_factory=list)
    children: List[NodeReport] = Field(default_factory=list)

    @property
    def has_multiple_messages(self) -> bool:
        return len(self.messages) > 1

    def iter_reports(self):
        """Pre-order walk over this report and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter_reports()

    def count_states(self) -> Dict[str, int]:
        """Count nodes per state word in this subtree."""
        counts: Dict[str, int] = {}
        for report in self.iter_reports():
            counts[report.state] = counts.get(report.state, 0) + 1
        return counts


class RunResult(BaseModel):
    """Outcome of one run of a spec tree."""

    mode: ExecutionMode
    passed: bool
    aborted: bool = False
    aborted_at: Optional[str] = None
    scenarios: int = 0
    executions: int = 0
    report: str
    tree: NodeReport
    created_at: str = Field(default_factory=lambda: datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for YAML serialization."""
        return self.model_dump(mode="json")


__all__ = [
    "ExecState",
    "ExecutionMode",
    "ExecutionRecord",
    "NodeKind",
    "NodeReport",
    "RunResult",
]
