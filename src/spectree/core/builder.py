"""
Tree construction helpers.

The fluent methods on ``Node`` validate their arguments here, find the node
a new step hangs beneath, and build the actions of the derived assertion
kinds (predicates, comparisons and exception checks).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from spectree.core.assertions import (
    NO_EXCEPTION_MESSAGE,
    Comparison,
    SpecAssertionError,
    assert_instance_of,
    assert_true,
    unwrap,
)
from spectree.core.models import NodeKind
from spectree.errors import SpecArgumentError

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from spectree.core.node import Node


def require_description(value: Any, parameter: str = "description") -> str:
    if not isinstance(value, str) or not value:
        raise SpecArgumentError(parameter)
    return value


def require_callable(value: Any, parameter: str) -> Callable[..., Any]:
    if value is None:
        raise SpecArgumentError(parameter)
    if not callable(value):
        raise SpecArgumentError(parameter, "must be callable")
    return value


def require_exception_type(value: Any, parameter: str = "exception_type") -> type:
    if value is None:
        raise SpecArgumentError(parameter)
    if not (isinstance(value, type) and issubclass(value, Exception)):
        raise SpecArgumentError(parameter, "must be an exception class")
    return value


def find_parent(start: "Node", precedence: NodeKind) -> "Node":
    """
    Locate the node a new step attaches beneath.

    Walks parent references from ``start`` (inclusive) and returns the first
    node whose kind can parent ``precedence``.

    Args:
        start: Node the fluent call was made on
        precedence: Kind used for the walk (usually the new node's own kind)

    Returns:
        The parent for the new node

    Raises:
        SpecArgumentError: If the walk runs past the root
    """
    parent = start
    while not parent.kind.can_parent(precedence):
        if parent.parent is None:
            raise SpecArgumentError("precedence", f"no node in the chain can hold a {precedence.label} step")
        parent = parent.parent
    return parent


def predicate_assertion(predicate: Any) -> Callable[[], None]:
    """
    Turn a predicate into a node action.

    A ``Comparison`` becomes an equality, inequality or null check so the
    failure message shows expected against actual; any other callable is
    checked for truthiness.
    """
    if isinstance(predicate, Comparison):
        return predicate.to_assertion()
    return lambda: assert_true(predicate())


def exception_assertion(source: "Node", check: Callable[[BaseException], Any]) -> Callable[[], None]:
    """
    Build an action asserting on the exception last captured by ``source``.

    ``check`` receives the exception. Returning exactly ``False`` fails the
    assertion; raising fails it with the raised signal.
    """

    def assertion() -> None:
        if source.last_exception is None:
            raise SpecAssertionError(NO_EXCEPTION_MESSAGE)
        if check(source.last_exception) is False:
            raise SpecAssertionError(
                f"Assertion on {type(source.last_exception).__name__} returned False."
            )

    return assertion


def exception_type_check(exception_type: type) -> Callable[[BaseException], None]:
    return lambda exc: assert_instance_of(unwrap(exc), exception_type)


__all__ = [
    "exception_assertion",
    "exception_type_check",
    "find_parent",
    "predicate_assertion",
    "require_callable",
    "require_description",
    "require_exception_type",
]
