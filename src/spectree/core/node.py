"""
Spec tree nodes.

A spec is written as one fluent chain. Every call creates a node, attaches
it according to its kind and returns it, so the next call continues the
chain:

    counter = {"x": 0}

    (
        given("an integer, set to zero", lambda: counter.update(x=0))
        .when("the integer is incremented", lambda: counter.update(x=counter["x"] + 1))
        .it_holds("should be 1", equals(lambda: counter["x"], 1))
        .when("the integer is divided by zero", lambda: counter["x"] / (counter["x"] - 1))
        .it_should_throw(ZeroDivisionError)
        .go()
    )

``go`` walks back to the root, runs the tree and raises ``SpecFailed`` with
the rendered report when any node did not pass.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional

from spectree.core.assertions import Comparison, describe_exception, is_failure_signal
from spectree.core.builder import (
    exception_assertion,
    exception_type_check,
    find_parent,
    predicate_assertion,
    require_callable,
    require_description,
    require_exception_type,
)
from spectree.core.engine import SpecRunner
from spectree.core.models import ExecState, ExecutionMode, ExecutionRecord, NodeKind, RunResult

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from rich.console import Console

    from spectree.config import RunConfig

logger = logging.getLogger(__name__)


class Node:
    """
    One step of a spec: an initial condition, an action or an assertion.

    The parent reference is non-owning; children are owned by their parent
    and kept in attachment order, which is also execution order.
    """

    def __init__(
        self,
        description: str,
        action: Callable[[], Any],
        kind: NodeKind,
        parent: Optional[Node] = None,
    ):
        self.description = description
        self.action = action
        self._kind = NodeKind(kind)
        self.parent = parent
        self.children: List[Node] = []

        # Execution state, mutated only while running
        self.swallow_exceptions = False
        self.last_exception: Optional[BaseException] = None
        self.results: List[ExecutionRecord] = []
        self.state = ExecState.NOT_RUN

    def __repr__(self) -> str:
        return f"Node({self._kind.label} {self.description!r})"

    # =========================================================================
    # Tree Access
    # =========================================================================

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root(self) -> Node:
        """Walk parent references up to the root."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def depth(self) -> int:
        depth = 0
        node = self
        while node.parent is not None:
            node = node.parent
            depth += 1
        return depth

    def iter_nodes(self) -> Iterator[Node]:
        """Pre-order walk over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def describe(self) -> str:
        return f"{self._kind.label} {self.description}"

    # =========================================================================
    # Execution
    # =========================================================================

    def execute(self) -> bool:
        """
        Run this node's action once and record the outcome.

        The exception captured by the previous execution is cleared first.
        An exception is reported as FAILED when it is an assertion signal and
        as EXCEPTION otherwise, unless this node swallows exceptions, in which
        case the run counts as passed and the exception stays available to
        the sibling assertions that inspect it.

        Returns:
            True if the scenario may continue past this node
        """
        self.last_exception = None
        started = time.perf_counter()
        try:
            self.action()
        except Exception as exc:
            self.last_exception = exc
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        message = None
        if self.last_exception is not None and not self.swallow_exceptions:
            message = describe_exception(self.last_exception)
            state = ExecState.FAILED if is_failure_signal(self.last_exception) else ExecState.EXCEPTION
        else:
            state = ExecState.PASSED

        self.results.append(ExecutionRecord(elapsed_ms=elapsed_ms, state=state, message=message))
        self.state = ExecState.worst(self.state, state)
        logger.debug("Executed %s: %s (%.2fms)", self.describe(), state.word, elapsed_ms)

        return state == ExecState.PASSED or self.swallow_exceptions

    # =========================================================================
    # Fluent Builder
    # =========================================================================

    def _add(
        self,
        description: str,
        action: Callable[[], Any],
        kind: NodeKind,
        parent: Optional[Node] = None,
    ) -> Node:
        if parent is None:
            parent = find_parent(self, kind)
        node = Node(description, action, kind, parent)
        parent.children.append(node)
        return node

    def when(self, description: str, action: Callable[[], Any]) -> Node:
        """Add an action step beneath the nearest given (or earlier when)."""
        require_description(description)
        require_callable(action, "action")
        return self._add(description, action, NodeKind.WHEN)

    def it(self, description: str, assertion: Callable[[], Any]) -> Node:
        """
        Add an assertion step.

        Chained off another assertion, the new node becomes its sibling
        under the same when.
        """
        require_description(description)
        require_callable(assertion, "assertion")
        return self._add(description, assertion, NodeKind.IT)

    def it_holds(self, description: str, predicate: Any) -> Node:
        """
        Add an assertion that a predicate holds.

        Args:
            description: Human-readable label
            predicate: Zero-argument callable returning a truthy value, or a
                ``Comparison`` built with ``equals``/``differs``
        """
        require_description(description)
        if not isinstance(predicate, Comparison):
            require_callable(predicate, "predicate")
        return self._add(description, predicate_assertion(predicate), NodeKind.IT)

    def it_should_throw(self, exception_type: type) -> Node:
        """
        Assert that the step this assertion hangs beneath raised ``exception_type``.

        The parent is marked as swallowing exceptions right away, so its
        exception does not end the scenario before the assertion runs.
        """
        require_exception_type(exception_type)
        parent = find_parent(self, NodeKind.IT)
        node = self._add(
            f"should throw {exception_type.__name__}",
            exception_assertion(parent, exception_type_check(exception_type)),
            NodeKind.IT,
            parent,
        )
        parent.swallow_exceptions = True
        return node

    def the_exception(self, description: str, assertion: Callable[[BaseException], Any]) -> Node:
        """
        Assert on the exception captured by the step above.

        The node reports as "The exception" but is placed with an
        assertion's precedence, making it a sibling of ``it`` nodes. The
        assertion may raise or return ``False`` to fail.
        """
        require_description(description)
        require_callable(assertion, "assertion")
        parent = find_parent(self, NodeKind.IT)
        node = self._add(description, exception_assertion(parent, assertion), NodeKind.THE_EXCEPTION, parent)
        parent.swallow_exceptions = True
        return node

    # =========================================================================
    # Running
    # =========================================================================

    def go(
        self,
        mode: ExecutionMode | str | None = None,
        *,
        config: Optional[RunConfig] = None,
        console: Optional[Console] = None,
    ) -> RunResult:
        """
        Run the whole tree this node belongs to.

        Uses ``mode`` when given, else the configured default mode.

        Raises:
            SpecFailed: If any node did not pass
        """
        return SpecRunner(config, console).run(self, mode)

    def go_isolated(self, *, config: Optional[RunConfig] = None, console: Optional[Console] = None) -> RunResult:
        return self.go(ExecutionMode.ISOLATED, config=config, console=console)

    def go_quick(self, *, config: Optional[RunConfig] = None, console: Optional[Console] = None) -> RunResult:
        return self.go(ExecutionMode.QUICK, config=config, console=console)


def given(description: str, action: Callable[[], Any]) -> Node:
    """Start a spec with its initial condition (the root node)."""
    require_description(description)
    require_callable(action, "action")
    return Node(description, action, NodeKind.GIVEN)


__all__ = ["Node", "given"]
