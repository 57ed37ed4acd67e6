"""
Assertion helpers used by spec node actions.

The engine only needs to tell an assertion failure apart from any other
exception. Failures are ``AssertionError`` (including plain ``assert``
statements) and ``Inconclusive``; everything else is reported as an
exception.
"""

from __future__ import annotations

from typing import Any, Callable, Literal

from pydantic import BaseModel

NO_EXCEPTION_MESSAGE = "No exception was thrown."


class SpecAssertionError(AssertionError):
    """Raised by the assertion helpers in this module."""


class Inconclusive(Exception):
    """Signals that an assertion could not reach a verdict."""


def is_failure_signal(exc: BaseException) -> bool:
    """Check if an exception counts as an assertion failure rather than an error."""
    return isinstance(exc, (AssertionError, Inconclusive))


def describe_exception(exc: BaseException) -> str:
    """Message recorded for a failed execution."""
    text = str(exc).strip()
    return text or type(exc).__name__


def unwrap(exc: BaseException) -> BaseException:
    """Unwrap one level of an exception group, returning its first member."""
    if isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        return exc.exceptions[0]
    return exc


def assert_equal(expected: Any, actual: Any) -> None:
    if expected != actual:
        raise SpecAssertionError(f"assert_equal failed. Expected: <{expected!r}>. Actual: <{actual!r}>.")


def assert_not_equal(unexpected: Any, actual: Any) -> None:
    if unexpected == actual:
        raise SpecAssertionError(f"assert_not_equal failed. Expected any value except: <{unexpected!r}>. Actual: <{actual!r}>.")


def assert_is_none(value: Any) -> None:
    if value is not None:
        raise SpecAssertionError(f"assert_is_none failed. Actual: <{value!r}>.")


def assert_is_not_none(value: Any) -> None:
    if value is None:
        raise SpecAssertionError("assert_is_not_none failed.")


def assert_true(value: Any, message: str | None = None) -> None:
    if not value:
        raise SpecAssertionError(message or f"assert_true failed. Actual: <{value!r}>.")


def assert_instance_of(value: Any, expected_type: type) -> None:
    if not isinstance(value, expected_type):
        actual = "None" if value is None else type(value).__name__
        raise SpecAssertionError(
            f"assert_instance_of failed. Expected type: <{expected_type.__name__}>. Actual type: <{actual}>."
        )


def _resolve(side: Any) -> Any:
    return side() if callable(side) else side


class Comparison(BaseModel):
    """
    Equality or inequality check built by the caller.

    Each side is either a zero-argument producer, evaluated when the
    assertion runs, or a literal value. A literal ``None`` on either side
    turns the comparison into a null check on the other side.
    """

    left: Any
    right: Any
    operator: Literal["eq", "ne"] = "eq"

    model_config = {"arbitrary_types_allowed": True}

    def to_assertion(self) -> Callable[[], None]:
        """Build the node action that checks this comparison."""
        if self.left is None or self.right is None:
            subject = self.right if self.left is None else self.left
            check = assert_is_none if self.operator == "eq" else assert_is_not_none
            return lambda: check(_resolve(subject))

        if self.operator == "eq":
            return lambda: assert_equal(_resolve(self.right), _resolve(self.left))
        return lambda: assert_not_equal(_resolve(self.right), _resolve(self.left))


def equals(left: Any, right: Any) -> Comparison:
    """``left == right``, reported as expected ``right``, actual ``left``."""
    return Comparison(left=left, right=right, operator="eq")


def differs(left: Any, right: Any) -> Comparison:
    """``left != right``."""
    return Comparison(left=left, right=right, operator="ne")


__all__ = [
    "NO_EXCEPTION_MESSAGE",
    "Comparison",
    "Inconclusive",
    "SpecAssertionError",
    "assert_equal",
    "assert_instance_of",
    "assert_is_none",
    "assert_is_not_none",
    "assert_not_equal",
    "assert_true",
    "describe_exception",
    "differs",
    "equals",
    "is_failure_signal",
    "unwrap",
]
