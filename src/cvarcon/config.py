"""
Console configuration.

Capacities are per-Console settings rather than process-wide constants.
They can be given directly, from a dict, or from a YAML document:

    app_name: mygame
    max_namespaces: 32
    max_pending: 16
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml


DEFAULT_APP_NAME = "cvarcon"
DEFAULT_MAX_NAMESPACES = 16
DEFAULT_MAX_PENDING = 8


@dataclass(frozen=True)
class ConsoleConfig:
    """
    Properties:
        app_name: Short identifier for the host application, used by the
                  host when it derives a settings directory
        max_namespaces: Capacity of the namespace table
        max_pending: Capacity of each namespace's pending-statement queue
    """

    app_name: str = DEFAULT_APP_NAME
    max_namespaces: int = DEFAULT_MAX_NAMESPACES
    max_pending: int = DEFAULT_MAX_PENDING

    def __post_init__(self):
        if not self.app_name:
            raise ValueError("app_name must not be empty")
        if self.max_namespaces < 1:
            raise ValueError(f"max_namespaces must be positive, got {self.max_namespaces}")
        if self.max_pending < 0:
            raise ValueError(f"max_pending must not be negative, got {self.max_pending}")


def config_to_dict(c: ConsoleConfig) -> Dict[str, Any]:
    return {
        "app_name": c.app_name,
        "max_namespaces": c.max_namespaces,
        "max_pending": c.max_pending,
    }


def config_from_dict(d: Optional[Dict[str, Any]]) -> ConsoleConfig:
    if not d:
        return ConsoleConfig()
    known = {f.name for f in fields(ConsoleConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        warnings.warn(f"Ignoring unknown config keys: {', '.join(unknown)}", UserWarning)
    return ConsoleConfig(**{k: v for k, v in d.items() if k in known})


def config_from_yaml(s: str) -> ConsoleConfig:
    return config_from_dict(yaml.safe_load(s))


def load_config(path: str) -> ConsoleConfig:
    """
    Read a ConsoleConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a capacity is out of range
    """
    with open(path, "r", encoding="utf-8") as f:
        return config_from_yaml(f.read())


__all__ = [
    "ConsoleConfig",
    "config_to_dict",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
]
