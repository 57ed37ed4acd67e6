"""
spectree: given/when/it specification trees.

Example:
    from spectree import equals, given

    box = {"count": 0}

    (
        given("a count of 23", lambda: box.update(count=23))
        .it_holds("should be 23", equals(lambda: box["count"], 23))
        .it("should let me set it to 24", lambda: box.update(count=24))
        .it_holds("should be 23 here, though", equals(lambda: box["count"], 23))
        .go_isolated()
    )
"""

from spectree.config import RunConfig, load_config
from spectree.core.assertions import (
    Comparison,
    Inconclusive,
    SpecAssertionError,
    assert_equal,
    assert_instance_of,
    assert_is_none,
    assert_is_not_none,
    assert_not_equal,
    assert_true,
    differs,
    equals,
)
from spectree.core.engine import SpecRunner
from spectree.core.models import ExecState, ExecutionMode, NodeKind, NodeReport, RunResult
from spectree.core.node import Node, given
from spectree.errors import ConfigError, SpecArgumentError, SpecError, SpecFailed

__all__ = [
    "Comparison",
    "ConfigError",
    "ExecState",
    "ExecutionMode",
    "Inconclusive",
    "Node",
    "NodeKind",
    "NodeReport",
    "RunConfig",
    "RunResult",
    "SpecArgumentError",
    "SpecAssertionError",
    "SpecError",
    "SpecFailed",
    "SpecRunner",
    "assert_equal",
    "assert_instance_of",
    "assert_is_none",
    "assert_is_not_none",
    "assert_not_equal",
    "assert_true",
    "differs",
    "equals",
    "given",
    "load_config",
]
