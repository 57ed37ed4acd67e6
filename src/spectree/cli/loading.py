"""Resolve CLI targets of the form ``package.module:attribute`` to spec nodes."""

from __future__ import annotations

import importlib
import os
import sys

import typer
from rich.console import Console

from spectree.core.node import Node
from spectree.errors import TargetError


def resolve_target(target: str) -> Node:
    """
    Import ``module:attribute`` and return the spec node it names.

    The attribute may be a node or a zero-argument callable returning one.
    Dotted attribute paths (``module:Class.method``) are followed.
    Modules are looked up from the current directory first, as with
    ``python -m``.

    Raises:
        TargetError: If the module, the attribute or the node cannot be resolved
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetError(target, "Expected a target of the form 'package.module:attribute'")

    _ensure_cwd_on_path()
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetError(target, f"Cannot import module '{module_name}'", cause=exc) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TargetError(target, f"Attribute '{attr_path}' not found", cause=exc) from exc

    if not isinstance(obj, Node) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            raise TargetError(target, "Building the spec raised an error", cause=exc) from exc

    if not isinstance(obj, Node):
        raise TargetError(target, f"Resolved to {type(obj).__name__}, not a spec node")
    return obj


def _ensure_cwd_on_path() -> None:
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)


def load_target_or_exit(target: str, *, console: Console) -> Node:
    try:
        return resolve_target(target)
    except TargetError as err:
        console.print(f"[red]Failed to load spec:[/red] {err}")
        raise typer.Exit(code=2)


__all__ = ["load_target_or_exit", "resolve_target"]
