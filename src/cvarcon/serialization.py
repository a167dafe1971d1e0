"""
Serialization helpers for declarations and console snapshots.

Declarations let a host keep its cvar table in a data file:

    namespaces:
      - name: video
        variables:
          - {name: width, type: integer, default: 640, description: Window width}
          - {name: fullscreen, type: boolean, default: false}
        commands:
          - {name: restart, func: restart_video, description: Reopen the window}

Callables cannot live in YAML, so `func` and `on_change` name entries of a
mapping supplied by the caller.

Snapshots are read-only dumps of every variable's state, for inspection.
This module keeps the dict structure explicit and stable.
"""
from __future__ import annotations

import json
import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

import yaml

from cvarcon.model import CommandDecl, Namespace, VariableDecl, DEFAULT_DESCRIPTION
from cvarcon.values import Value, ValueKind

if TYPE_CHECKING:
    from cvarcon.console import Console


_VARIABLE_KEYS = {"name", "type", "default", "description", "on_change"}
_COMMAND_KEYS = {"name", "func", "description"}


@dataclass
class NamespaceDecl:
    """A namespace as read from a declaration file."""

    name: str
    commands: List[CommandDecl] = field(default_factory=list)
    variables: List[VariableDecl] = field(default_factory=list)


def _callable_name(func: Optional[Callable], callbacks: Optional[Mapping[str, Callable]]) -> Optional[str]:
    if func is None:
        return None
    for name, candidate in (callbacks or {}).items():
        if candidate is func:
            return name
    return getattr(func, "__name__", None)


def _lookup_callable(name: Optional[str], callbacks: Optional[Mapping[str, Callable]]) -> Optional[Callable]:
    if name is None:
        return None
    try:
        return (callbacks or {})[name]
    except KeyError:
        raise KeyError(f"Unknown callback: {name}") from None


def _warn_unknown(kind: str, d: Dict[str, Any], known: set) -> None:
    unknown = sorted(set(d) - known)
    if unknown:
        warnings.warn(
            f"Ignoring unknown {kind} keys for {d.get('name')}: {', '.join(unknown)}",
            UserWarning,
        )


def variable_decl_to_dict(v: VariableDecl, callbacks: Optional[Mapping[str, Callable]] = None) -> Dict[str, Any]:
    return {
        "name": v.name,
        "type": v.kind.value,
        "default": v.default_value().data,
        "description": v.description,
        "on_change": _callable_name(v.on_change, callbacks),
    }


def variable_decl_from_dict(d: Dict[str, Any], callbacks: Optional[Mapping[str, Callable]] = None) -> VariableDecl:
    _warn_unknown("variable", d, _VARIABLE_KEYS)
    kind = ValueKind(d["type"])
    default = d.get("default")
    if default is not None and not isinstance(default, Value):
        # YAML gives ints for integer defaults and bools for booleans; accept
        # 0/1 for booleans and coerce scalars for strings
        if kind is ValueKind.BOOL and type(default) is int and default in (0, 1):
            default = bool(default)
        elif kind is ValueKind.STRING and not isinstance(default, str):
            default = str(default)
    return VariableDecl(
        name=d["name"],
        kind=kind,
        default=default,
        on_change=_lookup_callable(d.get("on_change"), callbacks),
        description=d.get("description"),
    )


def command_decl_to_dict(c: CommandDecl, callbacks: Optional[Mapping[str, Callable]] = None) -> Dict[str, Any]:
    return {
        "name": c.name,
        "func": _callable_name(c.func, callbacks),
        "description": c.description,
    }


def command_decl_from_dict(d: Dict[str, Any], callbacks: Optional[Mapping[str, Callable]] = None) -> CommandDecl:
    _warn_unknown("command", d, _COMMAND_KEYS)
    return CommandDecl(
        name=d["name"],
        func=_lookup_callable(d.get("func"), callbacks),
        description=d.get("description") or DEFAULT_DESCRIPTION,
    )


def namespace_decl_to_dict(n: NamespaceDecl, callbacks: Optional[Mapping[str, Callable]] = None) -> Dict[str, Any]:
    return {
        "name": n.name,
        "commands": [command_decl_to_dict(c, callbacks) for c in n.commands],
        "variables": [variable_decl_to_dict(v, callbacks) for v in n.variables],
    }


def namespace_decl_from_dict(d: Dict[str, Any], callbacks: Optional[Mapping[str, Callable]] = None) -> NamespaceDecl:
    return NamespaceDecl(
        name=d["name"],
        commands=[command_decl_from_dict(c, callbacks) for c in d.get("commands") or []],
        variables=[variable_decl_from_dict(v, callbacks) for v in d.get("variables") or []],
    )


def declarations_from_yaml(s: str, callbacks: Optional[Mapping[str, Callable]] = None) -> List[NamespaceDecl]:
    d = yaml.safe_load(s) or {}
    return [namespace_decl_from_dict(n, callbacks) for n in d.get("namespaces") or []]


def declarations_to_yaml(decls: List[NamespaceDecl], callbacks: Optional[Mapping[str, Callable]] = None) -> str:
    d = {"namespaces": [namespace_decl_to_dict(n, callbacks) for n in decls]}
    return yaml.safe_dump(d, sort_keys=False)


def create_namespaces(console: Console, decls: List[NamespaceDecl]) -> List[Namespace]:
    """Register each declared namespace with the console, in order."""
    return [console.create_namespace(n.name, n.commands, n.variables) for n in decls]


def console_snapshot(console: Console) -> Dict[str, Any]:
    """Every variable's state, keyed by namespace then variable name."""
    snapshot: Dict[str, Any] = {}
    for namespace in console.namespaces:
        variables = {}
        for var in namespace.variables:
            variables[var.name] = {
                "type": var.kind.value,
                "default": var.default.data,
                "current": var.current.data,
                "modified": var.is_modified(),
            }
        snapshot[namespace.name] = {
            "attached": namespace.attached,
            "pending": len(namespace.pending),
            "variables": variables,
        }
    return snapshot


def console_snapshot_to_json(console: Console) -> str:
    return json.dumps(console_snapshot(console), sort_keys=True)


def console_snapshot_to_yaml(console: Console) -> str:
    return yaml.safe_dump(console_snapshot(console))


__all__ = [
    "NamespaceDecl",
    "variable_decl_to_dict",
    "variable_decl_from_dict",
    "command_decl_to_dict",
    "command_decl_from_dict",
    "namespace_decl_to_dict",
    "namespace_decl_from_dict",
    "declarations_from_yaml",
    "declarations_to_yaml",
    "create_namespaces",
    "console_snapshot",
    "console_snapshot_to_json",
    "console_snapshot_to_yaml",
]
