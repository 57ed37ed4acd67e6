"""Exception hierarchy for spectree."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pydantic import ValidationError

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from spectree.core.models import RunResult


class SpecError(Exception):
    """Base class for errors raised by spectree itself."""


class SpecArgumentError(SpecError, ValueError):
    """A builder call received a missing or empty argument.

    Raised before the tree is touched, so a failed call never leaves a
    half-attached node behind.
    """

    def __init__(self, parameter: str, reason: str = "must not be empty"):
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid argument '{parameter}': {reason}")


class SpecFailed(AssertionError):
    """The run verdict is failing. Carries the full rendered report."""

    def __init__(self, report: str, result: "RunResult | None" = None):
        self.report = report
        self.result = result
        super().__init__("\n" + report)


class ContextError(SpecError):
    """An error about one named input, rendered as ``message (subject): cause``."""

    def __init__(self, subject: str, message: str, *, cause: Exception | None = None):
        self.subject = subject
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    def describe_subject(self) -> str:
        return self.subject

    def describe_cause(self) -> str:
        return str(self.cause)

    def __str__(self) -> str:
        text = f"{self.message} ({self.describe_subject()})"
        if self.cause is not None:
            text = f"{text}: {self.describe_cause()}"
        return text


class ConfigError(ContextError):
    """A run configuration could not be read from a file or the environment."""

    def __init__(self, source: str, message: str, *, cause: Exception | None = None):
        self.source = source
        super().__init__(source, message, cause=cause)

    def describe_subject(self) -> str:
        # "<environment>" and similar pseudo sources are not paths
        if self.source.startswith("<"):
            return self.source
        try:
            return os.path.relpath(self.source)
        except ValueError:  # pragma: no cover - different drive on Windows
            return self.source

    def describe_cause(self) -> str:
        if not isinstance(self.cause, ValidationError):
            return str(self.cause)
        errors = self.cause.errors()
        shown = [f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in errors[:3]]
        if len(errors) > 3:
            shown.append(f"... ({len(errors) - 3} more)")
        return "; ".join(shown)


class TargetError(ContextError):
    """A CLI target could not be resolved to a spec node."""

    def __init__(self, target: str, message: str, *, cause: Exception | None = None):
        self.target = target
        super().__init__(target, message, cause=cause)


__all__ = [
    "ConfigError",
    "ContextError",
    "SpecArgumentError",
    "SpecError",
    "SpecFailed",
    "TargetError",
]
