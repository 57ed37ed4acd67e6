"""Tests for the assertion helpers and comparison specs."""

import pytest

from spectree import (
    Inconclusive,
    SpecAssertionError,
    SpecFailed,
    assert_equal,
    assert_instance_of,
    assert_is_none,
    assert_is_not_none,
    assert_not_equal,
    assert_true,
    differs,
    equals,
)
from spectree.core.assertions import describe_exception, is_failure_signal, unwrap


class TestPrimitiveAssertions:
    def test_assert_equal_shows_expected_and_actual(self):
        assert_equal(2, 2)

        with pytest.raises(SpecAssertionError) as excinfo:
            assert_equal(2, 1)

        assert "Expected: <2>. Actual: <1>." in str(excinfo.value)

    def test_assert_not_equal(self):
        assert_not_equal(1, 2)

        with pytest.raises(SpecAssertionError):
            assert_not_equal("a", "a")

    def test_null_checks(self):
        assert_is_none(None)
        assert_is_not_none(0)

        with pytest.raises(SpecAssertionError):
            assert_is_none(0)
        with pytest.raises(SpecAssertionError):
            assert_is_not_none(None)

    def test_assert_true(self):
        assert_true([1])

        with pytest.raises(SpecAssertionError, match="custom"):
            assert_true(False, "custom")

    def test_assert_instance_of_accepts_subclasses(self):
        assert_instance_of(ZeroDivisionError(), ArithmeticError)

        with pytest.raises(SpecAssertionError) as excinfo:
            assert_instance_of(ValueError(), KeyError)

        assert "Expected type: <KeyError>. Actual type: <ValueError>." in str(excinfo.value)


class TestSignals:
    """Tests for failure-signal classification."""

    @pytest.mark.parametrize(
        "exc",
        [AssertionError("x"), SpecAssertionError("x"), Inconclusive("x"), SpecFailed("report")],
    )
    def test_failure_signals(self, exc):
        assert is_failure_signal(exc)

    @pytest.mark.parametrize("exc", [ValueError("x"), ZeroDivisionError(), KeyError("k")])
    def test_other_exceptions(self, exc):
        assert not is_failure_signal(exc)

    def test_describe_exception_falls_back_to_type_name(self):
        assert describe_exception(ValueError("bad value")) == "bad value"
        assert describe_exception(RuntimeError()) == "RuntimeError"

    def test_unwrap_exception_group(self):
        inner = KeyError("k")
        group = ExceptionGroup("batch", [inner, ValueError("v")])

        assert unwrap(group) is inner

    def test_unwrap_leaves_plain_exception(self):
        exc = ValueError("v")

        assert unwrap(exc) is exc


class TestComparison:
    """Tests for comparison specs used by it_holds."""

    def test_equality_passes(self):
        equals(lambda: 1 + 1, 2).to_assertion()()

    def test_equality_reports_right_side_as_expected(self):
        assertion = equals(lambda: 3, 2).to_assertion()

        with pytest.raises(SpecAssertionError) as excinfo:
            assertion()

        assert "Expected: <2>. Actual: <3>." in str(excinfo.value)

    def test_producers_are_evaluated_when_run(self):
        box = {"value": 1}
        assertion = equals(lambda: box["value"], 5).to_assertion()
        box["value"] = 5

        assertion()

    def test_inequality(self):
        differs(lambda: 1, 2).to_assertion()()

        with pytest.raises(SpecAssertionError, match="assert_not_equal failed"):
            differs(lambda: 2, 2).to_assertion()()

    def test_literal_none_becomes_null_check(self):
        equals(lambda: None, None).to_assertion()()
        differs(None, lambda: 3).to_assertion()()

        with pytest.raises(SpecAssertionError, match="assert_is_none failed"):
            equals(lambda: 3, None).to_assertion()()
        with pytest.raises(SpecAssertionError, match="assert_is_not_none failed"):
            differs(lambda: None, None).to_assertion()()
