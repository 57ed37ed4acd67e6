"""Tests for error messages that carry their source."""

import pytest
from pydantic import ValidationError

from spectree import RunConfig
from spectree.errors import ConfigError, ContextError, SpecError, TargetError


def _validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as excinfo:
        RunConfig.model_validate({"mode": "parallel", "echo": "maybe", "extra": 1, "more": 2})
    return excinfo.value


class TestContextErrors:
    def test_target_error_message(self):
        err = TargetError("pkg.mod:spec", "Cannot import module 'pkg.mod'", cause=ImportError("boom"))

        assert isinstance(err, ContextError)
        assert isinstance(err, SpecError)
        assert err.target == "pkg.mod:spec"
        assert str(err) == "Cannot import module 'pkg.mod' (pkg.mod:spec): boom"

    def test_message_without_cause(self):
        err = TargetError("pkg.mod:spec", "Resolved to int, not a spec node")

        assert str(err) == "Resolved to int, not a spec node (pkg.mod:spec)"

    def test_config_error_keeps_pseudo_source(self):
        err = ConfigError("<environment>", "Invalid settings")

        assert str(err) == "Invalid settings (<environment>)"
        assert err.source == "<environment>"

    def test_config_error_summarizes_validation_errors(self):
        err = ConfigError("<environment>", "Invalid settings", cause=_validation_error())
        text = str(err)

        assert text.startswith("Invalid settings (<environment>): mode:")
        assert "echo:" in text
        assert "(1 more)" in text
