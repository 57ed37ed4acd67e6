"""
Tests for the per-node execution primitive.

Tests cover:
- Outcome classification (passed, failed, exception)
- Exception capture and clearing
- Swallowing
- Monotonic aggregate state
"""

import pytest

from spectree import ExecState, Inconclusive, Node, NodeKind


def _raise(exc):
    def action():
        raise exc

    return action


class TestExecute:
    """Tests for Node.execute."""

    def test_passing_action(self):
        calls = []
        node = Node("a step", lambda: calls.append(1), NodeKind.WHEN)

        assert node.execute() is True
        assert calls == [1]
        assert node.state == ExecState.PASSED
        assert node.last_exception is None
        assert len(node.results) == 1
        assert node.results[0].message is None
        assert node.results[0].elapsed_ms >= 0

    @pytest.mark.parametrize("exc", [AssertionError("nope"), Inconclusive("nope")])
    def test_assertion_signal_fails(self, exc):
        node = Node("a check", _raise(exc), NodeKind.IT)

        assert node.execute() is False
        assert node.state == ExecState.FAILED
        assert node.results[0].message == "nope"
        assert node.last_exception is exc

    def test_other_exception_is_exception_state(self):
        node = Node("a step", _raise(ValueError("bad")), NodeKind.WHEN)

        assert node.execute() is False
        assert node.state == ExecState.EXCEPTION
        assert node.results[0].message == "bad"

    def test_empty_message_uses_type_name(self):
        node = Node("a step", _raise(RuntimeError()), NodeKind.WHEN)
        node.execute()

        assert node.results[0].message == "RuntimeError"

    def test_swallowing_node_continues(self):
        """A swallowing node keeps the exception but lets the scenario continue."""
        exc = ZeroDivisionError("division by zero")
        node = Node("a step", _raise(exc), NodeKind.WHEN)
        node.swallow_exceptions = True

        assert node.execute() is True
        assert node.state == ExecState.PASSED
        assert node.last_exception is exc
        assert node.results[0].message is None

    def test_last_exception_is_cleared_by_next_run(self):
        box = {"raise": True}

        def action():
            if box["raise"]:
                raise ValueError("bad")

        node = Node("a step", action, NodeKind.WHEN)
        node.execute()
        assert isinstance(node.last_exception, ValueError)

        box["raise"] = False
        node.execute()
        assert node.last_exception is None

    def test_aggregate_state_is_monotonic(self):
        """Passed then Exception stays Exception after a later pass."""
        box = {"runs": 0}

        def action():
            box["runs"] += 1
            if box["runs"] == 2:
                raise ValueError("second run")

        node = Node("a step", action, NodeKind.WHEN)

        assert node.execute() is True
        assert node.state == ExecState.PASSED
        assert node.execute() is False
        assert node.state == ExecState.EXCEPTION
        assert node.execute() is True
        assert node.state == ExecState.EXCEPTION
        assert [record.state for record in node.results] == [
            ExecState.PASSED,
            ExecState.EXCEPTION,
            ExecState.PASSED,
        ]

    def test_failed_does_not_downgrade_exception(self):
        box = {"exc": ValueError("first")}

        def action():
            raise box["exc"]

        node = Node("a check", action, NodeKind.IT)

        node.execute()
        box["exc"] = AssertionError("second")
        node.execute()

        assert node.state == ExecState.EXCEPTION

    def test_base_exceptions_propagate(self):
        node = Node("a step", _raise(KeyboardInterrupt()), NodeKind.WHEN)

        with pytest.raises(KeyboardInterrupt):
            node.execute()


class TestStateOrdering:
    def test_worst(self):
        assert ExecState.worst(ExecState.NOT_RUN, ExecState.PASSED) == ExecState.PASSED
        assert ExecState.worst(ExecState.EXCEPTION, ExecState.FAILED) == ExecState.EXCEPTION
        assert ExecState.worst(ExecState.FAILED, ExecState.PASSED) == ExecState.FAILED

    def test_words(self):
        assert [state.word for state in ExecState] == ["not run", "ok", "FAILED", "exception"]

    def test_kind_labels(self):
        assert [kind.label for kind in NodeKind] == ["Given", "When", "It", "The exception"]

    def test_can_parent(self):
        assert NodeKind.GIVEN.can_parent(NodeKind.WHEN)
        assert NodeKind.WHEN.can_parent(NodeKind.IT)
        assert not NodeKind.WHEN.can_parent(NodeKind.WHEN)
        assert not NodeKind.IT.can_parent(NodeKind.IT)
        assert not NodeKind.THE_EXCEPTION.can_parent(NodeKind.IT)
