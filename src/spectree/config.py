"""
Run configuration.

The execution mode used by ``Node.go()`` without an explicit mode comes
from a ``RunConfig``. Without one, the configuration is read from the
environment:

    SPECTREE_MODE    quick | isolated   (default: quick)
    SPECTREE_ECHO    print the report to stdout (default: true)
    SPECTREE_REPORT  write the report to this YAML file

A YAML file with the same keys can be loaded with ``load_config``:

    spectree:
      mode: isolated
      echo: false
      report_path: outputs/reports/last.yaml
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError

from spectree.core.models import ExecutionMode
from spectree.errors import ConfigError

MODE_ENV = "SPECTREE_MODE"
ECHO_ENV = "SPECTREE_ECHO"
REPORT_ENV = "SPECTREE_REPORT"


class RunConfig(BaseModel):
    """Settings consulted when a spec tree runs."""

    mode: ExecutionMode = ExecutionMode.QUICK
    echo: bool = True
    report_path: Optional[str] = None

    model_config = {"extra": "forbid"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> RunConfig:
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        if env.get(MODE_ENV):
            values["mode"] = env[MODE_ENV].strip().lower()
        if env.get(ECHO_ENV):
            values["echo"] = env[ECHO_ENV].strip().lower()
        if env.get(REPORT_ENV):
            values["report_path"] = env[REPORT_ENV].strip()
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError("<environment>", "Invalid spectree environment settings", cause=exc) from exc


def load_config(path: str) -> RunConfig:
    """Load a RunConfig from a YAML file, optionally nested under a ``spectree`` key."""
    if not Path(path).exists():
        raise ConfigError(path, "Config file not found")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(path, "Config file is not valid YAML", cause=exc) from exc

    if not isinstance(data, dict):
        raise ConfigError(path, "Config file must contain a mapping")
    if "spectree" in data:
        data = data["spectree"] or {}

    try:
        return RunConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(path, "Invalid spectree configuration", cause=exc) from exc


__all__ = ["ECHO_ENV", "MODE_ENV", "REPORT_ENV", "RunConfig", "load_config"]
